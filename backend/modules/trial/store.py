"""
Device-local persistence for trial counters.

Counters live in a small JSON file next to the app, the way a browser app
keeps them in local storage. They are never written to the profile store.
"""

import logging
import os
from pathlib import Path

import pydantic

from .models import TrialState

logger = logging.getLogger(__name__)


class TrialCounterStore:
    """JSON-file storage for TrialState."""

    def __init__(self, path: Path | str):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TrialState:
        """Load persisted counters; a missing or unreadable file starts fresh."""
        try:
            return TrialState.model_validate_json(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return TrialState()
        except (OSError, pydantic.ValidationError) as e:
            logger.warning(f"Discarding unreadable trial state at {self._path}: {e}")
            return TrialState()

    def save(self, state: TrialState) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(state.model_dump_json(indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._path)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
