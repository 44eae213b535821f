"""Effective-configuration cache with explicit invalidation."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tierlink.errors import ConfigError
from tierlink.routing.config import RouterConfig
from tierlink.routing.resolver import apply_state
from tierlink.routing.state import StateStore
from tierlink.routing.validator import validate_config

logger = logging.getLogger("tierlink.routing.cache")


def read_document(path: Path) -> object:
    """Read and decode the tier document.

    Raises:
        ConfigError: if the file is missing, unreadable or not JSON.
    """
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError("$", f"tier document not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError("$", f"cannot read {path}: {exc}") from exc
    except (ValueError, RecursionError) as exc:
        raise ConfigError("$", f"invalid JSON in {path}: {exc}") from exc


def load_effective_config(path: Path, state: StateStore) -> RouterConfig:
    """Read, validate and overlay persisted state onto the tier document."""
    cfg = validate_config(read_document(path))
    return apply_state(cfg, state.read())


class ConfigCache:
    """Holds the last computed effective configuration.

    ``get()`` returns the cached config verbatim while clean. Once
    ``invalidate()`` marks it dirty, the next ``get()`` re-reads the
    document, re-validates it and re-applies state. A failed reload keeps
    serving the last good config and stays dirty so the next call retries.

    Not thread-safe; the host calls it sequentially.
    """

    def __init__(self, path: Path, state: StateStore) -> None:
        self._path = path
        self._state = state
        self._config: RouterConfig | None = None
        self._dirty = True

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dirty(self) -> bool:
        return self._dirty

    def get(self) -> RouterConfig:
        """Return the effective config, reloading only when dirty.

        Raises:
            ConfigError: if reloading fails and nothing was ever loaded.
        """
        if not self._dirty and self._config is not None:
            return self._config

        try:
            cfg = load_effective_config(self._path, self._state)
        except ConfigError as exc:
            if self._config is None:
                raise
            logger.warning("Config reload failed, using last good config: %s", exc)
            return self._config

        logger.debug(
            "Loaded config from %s (preset=%s, mode=%s)",
            self._path,
            cfg.active_preset,
            cfg.active_mode,
        )
        self._config = cfg
        self._dirty = False
        return cfg

    def invalidate(self) -> None:
        """Force the next ``get()`` to recompute from disk."""
        self._dirty = True
