"""JSON file persistence for the active preset/mode override."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tierlink.config.constants import STATE_FILE
from tierlink.errors import StateReadError
from tierlink.routing.config import RouterState

logger = logging.getLogger("tierlink.routing.state")


class StateStore:
    """Read/merge-write the small ``state.json`` override record.

    Reads never fail: a missing, unreadable or corrupt file is an empty
    record. Writes merge into whatever is on disk and replace the file
    atomically (write to .tmp, then replace). The store knows nothing
    about caching; callers invalidate after a successful write.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or STATE_FILE

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> RouterState:
        """Return the persisted state, or an empty record."""
        try:
            data = self._read_raw()
        except StateReadError as exc:
            logger.warning("Ignoring unreadable state file: %s", exc)
            return RouterState()
        return RouterState(
            activePreset=_string_or_none(data.get("activePreset")),
            activeMode=_string_or_none(data.get("activeMode")),
        )

    def write(self, patch: dict[str, str]) -> RouterState:
        """Merge *patch* into the persisted record and save it.

        Raises:
            OSError: if the file cannot be written.
        """
        try:
            data = self._read_raw()
        except StateReadError:
            data = {}
        data.update(patch)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._path)
        logger.debug("Saved state %s to %s", patch, self._path)

        return self.read()

    def _read_raw(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            raise StateReadError(f"{self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StateReadError(f"{self._path}: expected a JSON object")
        return data


def _string_or_none(value: object) -> str | None:
    return value if isinstance(value, str) and value else None
