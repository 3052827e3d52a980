"""ContextVar-based render configuration for texmark.

Configuration controls output only; lexing and parsing have no options.
The active config lives in a ContextVar, so it is per-thread and
per-task without locks.

Config files:
    ``load_config()`` walks up from a directory looking for a
    ``[tool.texmark]`` table in ``pyproject.toml`` or a ``[texmark]`` /
    ``[tool.texmark]`` table in ``.texmark.toml``.

Usage:
    from texmark.config import TexmarkConfig, config_context

    with config_context(TexmarkConfig(standalone=True)):
        latex = render(doc)

    # Or set/reset explicitly
    set_config(TexmarkConfig(at_command="cref"))
    try:
        latex = render(doc)
    finally:
        reset_config()

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

"""

from __future__ import annotations

import tomllib
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace
from pathlib import Path

from texmark.errors import ConfigError
from texmark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TexmarkConfig:
    """Immutable render configuration.

    Attributes:
        standalone: Wrap output in a complete LaTeX document
        document_class: ``\\documentclass`` argument for standalone output
        packages: Packages loaded in standalone output
        at_command: Command used for ``@name`` references
        image_placement: Float placement specifier for image figures
        suppress_on_fatal: Refuse to render documents with fatal diagnostics

    """

    standalone: bool = False
    document_class: str = "article"
    packages: tuple[str, ...] = ("hyperref", "graphicx", "ulem")
    at_command: str = "ref"
    image_placement: str = "h"
    suppress_on_fatal: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> TexmarkConfig:
        """Create TexmarkConfig from dictionary.

        Only includes keys that are valid TexmarkConfig fields; unknown keys
        are silently ignored. Lists are accepted for ``packages``.

        Args:
            config_dict: Dictionary with config values.

        Returns:
            New TexmarkConfig instance with values from dict.

        Example:
            >>> config = TexmarkConfig.from_dict({
            ...     "standalone": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.standalone
            True

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if isinstance(filtered.get("packages"), list):
            filtered["packages"] = tuple(filtered["packages"])
        return cls(**filtered)


_FIELD_TYPES: dict[str, type] = {
    "standalone": bool,
    "document_class": str,
    "packages": tuple,
    "at_command": str,
    "image_placement": str,
    "suppress_on_fatal": bool,
}

# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: TexmarkConfig = TexmarkConfig()

_config: ContextVar[TexmarkConfig] = ContextVar("texmark_config", default=_DEFAULT_CONFIG)


def get_config() -> TexmarkConfig:
    """Get the active configuration for this thread/context."""
    return _config.get()


def set_config(config: TexmarkConfig) -> None:
    """Set configuration for the current context."""
    _config.set(config)


def reset_config() -> None:
    """Reset to the default configuration."""
    _config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: TexmarkConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: TexmarkConfig to use within the context.

    Yields:
        None

    Thread Safety:
        Only affects the current thread's context. Restores the previous
        config even if an exception is raised.

    """
    previous = _config.get()
    _config.set(config)
    try:
        yield
    finally:
        _config.set(previous)


# =============================================================================
# Config files
# =============================================================================

_MISSING = object()


def load_config(search_path: Path) -> TexmarkConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from ``search_path`` to the filesystem root.
    In each directory ``pyproject.toml`` is consulted first, then
    ``.texmark.toml``. Files that cannot be read or decoded are skipped.
    Returns the defaults when nothing is found.

    Args:
        search_path: Directory used as the starting point for lookup.

    Returns:
        TexmarkConfig: Loaded configuration with defaults applied.

    Raises:
        ConfigError: If a texmark table exists but is not a mapping, has
            unknown keys, or has values of the wrong type.

    """
    current = search_path.resolve()

    while True:
        found = _load_from_file(current / "pyproject.toml", [("tool", "texmark")])
        if found is not None:
            return found

        found = _load_from_file(current / ".texmark.toml", [("texmark",), ("tool", "texmark")])
        if found is not None:
            return found

        parent = current.parent
        if parent == current:
            break
        current = parent

    return TexmarkConfig()


def apply_overrides(config: TexmarkConfig, **overrides: object) -> TexmarkConfig:
    """Return ``config`` with the non-None ``overrides`` applied."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> TexmarkConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        logger.debug("Loaded [%s] from %s", ".".join(table_path), config_file)
        return _build_config(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config(raw_config: object, config_file: Path, table_path: tuple[str, ...]) -> TexmarkConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    values: dict[str, object] = {}
    for key, value in raw_config.items():
        name = key.replace("-", "_")
        expected = _FIELD_TYPES.get(name)
        if expected is None:
            raise ConfigError(f"Unknown key `{key}` in `[{table_display}]` of {config_file}")
        if expected is tuple:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"`{key}` must be a list of strings")
            value = tuple(value)
        elif not isinstance(value, expected):
            raise ConfigError(f"`{key}` must be a {expected.__name__}")
        values[name] = value

    return TexmarkConfig(**values)


__all__ = [
    "TexmarkConfig",
    "apply_overrides",
    "config_context",
    "get_config",
    "load_config",
    "reset_config",
    "set_config",
]
