"""Tests for publishing policy replacements."""

import threading

from auroscope.access.holder import PolicyHolder
from auroscope.access.policy import AllowListPolicy
from auroscope.models import IdScheme


class TestPolicyHolder:
    def test_current(self, policy):
        holder = PolicyHolder(policy)
        assert holder.current is policy
        assert holder.is_allowed(111)

    def test_swap_returns_previous(self, policy, empty_policy):
        holder = PolicyHolder(policy)
        previous = holder.swap(empty_policy)
        assert previous is policy
        assert holder.current is empty_policy
        assert not holder.is_allowed(111)

    def test_reload_keeps_scheme(self):
        holder = PolicyHolder(AllowListPolicy.from_config("alice", IdScheme.TOKEN))
        new = holder.reload("bob")
        assert new.scheme is IdScheme.TOKEN
        assert holder.is_allowed("bob")
        assert not holder.is_allowed("alice")

    def test_reload_with_scheme(self, policy):
        holder = PolicyHolder(policy)
        holder.reload("carol", IdScheme.TOKEN)
        assert holder.current.scheme is IdScheme.TOKEN

    def test_reader_keeps_fetched_instance(self, policy):
        holder = PolicyHolder(policy)
        fetched = holder.current
        holder.reload("999")
        assert fetched.is_allowed(111)
        assert not holder.is_allowed(111)

    def test_concurrent_readers_see_whole_sets(self):
        old = AllowListPolicy.from_config("1,2,3")
        new = AllowListPolicy.from_config("4,5,6")
        holder = PolicyHolder(old)
        seen = []
        stop = threading.Event()

        def reader():
            while True:
                seen.append(holder.current.ids)
                if stop.is_set():
                    break

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for _ in range(200):
            holder.swap(new)
            holder.swap(old)
        stop.set()
        for t in threads:
            t.join()

        assert seen
        assert all(ids in (old.ids, new.ids) for ids in seen)
