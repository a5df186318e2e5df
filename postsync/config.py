import os
import json
from typing import Optional

from pydantic import (
    BaseModel, ConfigDict, PositiveFloat, TypeAdapter, ValidationError,
    field_validator, model_validator,
)

from postsync.errors import ConfigError
from postsync.slug import SlugMode

# --- DEFAULTS ---
ENDPOINT = ""
DIRECTORY = "./content/content"
USE_FILENAME_AS_URL = False

ENV_PREFIX = "POSTSYNC_"
ENV_KEYS = {
    "ENDPOINT": "endpoint",
    "DIRECTORY": "directory",
    "USE_FILENAME": "use_filename_as_url",
    "TIMEOUT": "timeout",
    "LOG_FILE": "log_file",
}

_FLAG = TypeAdapter(bool)


class SyncConfig(BaseModel):
    """
    Settings for one sync run.

    Attributes:
        endpoint (str): URL every post is POSTed to.
        directory (str): Directory holding the content files.
        slug_mode (SlugMode): Build URLs from titles or from file names.
            `use_filename_as_url` (bool) is accepted as a shorthand.
        timeout (float): Per-request timeout in seconds; None waits forever.
        dry_run (bool): Validate and print payloads without sending them.
        log_file (str): Also write the log to this file.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    endpoint: str = ENDPOINT
    directory: str = DIRECTORY
    slug_mode: SlugMode = SlugMode.FILENAME if USE_FILENAME_AS_URL else SlugMode.TITLE
    timeout: Optional[PositiveFloat] = None
    dry_run: bool = False
    log_file: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _use_filename_flag(cls, data):
        if isinstance(data, dict) and "use_filename_as_url" in data:
            data = dict(data)
            try:
                use_filename = _FLAG.validate_python(data.pop("use_filename_as_url"))
            except ValidationError as e:
                raise ValueError("use_filename_as_url must be a boolean") from e
            data["slug_mode"] = SlugMode.FILENAME if use_filename else SlugMode.TITLE
        return data

    @field_validator("timeout", mode="before")
    @classmethod
    def _blank_timeout(cls, value):
        return None if value == "" else value


def _layer(raw: dict, source: str) -> dict:
    """Validate one config source; returns only the fields it sets."""
    try:
        partial = SyncConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"❌ Invalid option(s) in {source}: {e}") from e
    return {name: getattr(partial, name) for name in partial.model_fields_set}


def _load_file(path) -> dict:
    """Read the JSON config file, same shape as SyncConfig."""
    if not os.path.exists(path):
        raise ConfigError(f"❌ Config file not found: {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"❌ Could not read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"❌ Config {path} must contain a JSON object")
    return _layer(data, path)


def _load_env(env) -> dict:
    raw = {}
    for suffix, key in ENV_KEYS.items():
        value = env.get(ENV_PREFIX + suffix)
        if value is not None:
            raw[key] = value
    return _layer(raw, "environment")


def load_config(path=None, env=None, **overrides) -> SyncConfig:
    """
    Build the configuration.

    Precedence (lowest first): built-in defaults, JSON file at `path`,
    POSTSYNC_* environment variables, then keyword `overrides` (CLI flags).
    Overrides set to None are ignored.
    """
    env = os.environ if env is None else env
    values = {}
    if path:
        values.update(_load_file(path))
    values.update(_load_env(env))

    explicit = {k: v for k, v in overrides.items() if v is not None}
    values.update(_layer(explicit, "command line"))
    return SyncConfig(**values)
