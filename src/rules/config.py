from __future__ import annotations

from pathlib import Path

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from utils import UselexError

CONFIG_FILENAME = "uselex.toml"

DEFAULT_NM = "nm"
DEFAULT_NM_ARGS = ("-C", "-g")


class UselexConfig(BaseModel):
    """Configuration for a uselex run."""

    model_config = ConfigDict(extra="forbid")

    nm: str = Field(
        default=DEFAULT_NM,
        description="Symbol dumper executable",
    )
    nm_args: list[str] = Field(
        default_factory=lambda: list(DEFAULT_NM_ARGS),
        description="Arguments passed to the symbol dumper before the file path",
    )
    whitelist: list[str] = Field(
        default_factory=list,
        description="Whitelist files: one symbol name per line",
    )
    masks: list[str] = Field(
        default_factory=list,
        description="Mask files: one regular expression per line",
    )
    exported: list[str] = Field(
        default_factory=list,
        description="Symbol names to treat as exported library interface",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for object files to include when scanning directories",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for object files to exclude when scanning directories",
    )


class ConfigError(UselexError):
    """Raised when configuration or an override file cannot be loaded."""


def _resolve_relative(paths: list[str], base: Path) -> list[str]:
    """Resolve config-relative file paths against the config's directory."""
    resolved: list[str] = []
    for entry in paths:
        path = Path(entry).expanduser()
        resolved.append(str(path if path.is_absolute() else base / path))
    return resolved


def load_config(root: Path, config_path: Path | None = None) -> UselexConfig:
    """Load configuration from uselex.toml if it exists.

    An explicitly requested ``config_path`` must exist; the implicit
    ``root / uselex.toml`` is optional.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        if explicit:
            msg = f"Config file does not exist: {config_path}"
            raise ConfigError(msg)
        return UselexConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to read {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        config = UselexConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e

    base = config_path.parent
    return config.model_copy(
        update={
            "whitelist": _resolve_relative(config.whitelist, base),
            "masks": _resolve_relative(config.masks, base),
        }
    )
