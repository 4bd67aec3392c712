"""Configuration loading via Pydantic settings."""

import os
from pathlib import Path

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, field_validator

from auroscope.access.policy import DEFAULT_ENV_VAR, AllowListPolicy
from auroscope.models import IdScheme, Posture


class TelegramConfig(BaseModel):
    token: str = ""

    @property
    def effective_token(self) -> str:
        return os.getenv("TELEGRAM_BOT_TOKEN", "") or self.token


class AccessConfig(BaseModel):
    env_var: str = DEFAULT_ENV_VAR
    id_scheme: IdScheme = IdScheme.NUMERIC
    empty_posture: Posture = Posture.DENY_ALL
    # Used only when the environment variable is absent
    allowed_user_ids: str | None = None

    @field_validator("allowed_user_ids", mode="before")
    @classmethod
    def _join_ids(cls, v):
        # YAML may give a bare number or a list of ids
        if isinstance(v, (list, tuple)):
            return ",".join(map(str, v))
        if isinstance(v, int):
            return str(v)
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class BotConfig(BaseModel):
    telegram: TelegramConfig = TelegramConfig()
    access: AccessConfig = AccessConfig()
    logging: LoggingConfig = LoggingConfig()
    env_file: str = ".env"


def load_config(config_path: Path | None = None) -> BotConfig:
    """Load configuration from YAML file."""
    if config_path is None:
        config_path = Path("config.yaml")

    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return BotConfig(**data)

    return BotConfig()


def read_environment(env_file: str | Path | None = ".env") -> dict[str, str]:
    """Merge a .env file under the process environment.

    Variables already set in the process win, as with ``load_dotenv``. A missing
    file contributes nothing. Keys declared without a value in the file are
    treated as unset.
    """
    merged: dict[str, str] = {}
    if env_file is not None and Path(env_file).is_file():
        merged.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    merged.update(os.environ)
    return merged


def read_raw_allow_list(config: BotConfig, environ: dict[str, str] | None = None) -> str | None:
    """Return the raw allow-list string, or None when it was never supplied."""
    if environ is None:
        environ = read_environment(config.env_file)
    raw = environ.get(config.access.env_var)
    if raw is None:
        return config.access.allowed_user_ids
    return raw


def build_policy(config: BotConfig, environ: dict[str, str] | None = None) -> AllowListPolicy:
    """Read the allow-list once and build the immutable policy."""
    raw = read_raw_allow_list(config, environ)
    return AllowListPolicy.from_config(raw, config.access.id_scheme)
