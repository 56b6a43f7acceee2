"""
High score persistence.

The only state that outlives a session is one integer per game. Stores
implement PersistencePort; writes are synchronous and idempotent, and a
value that is not strictly higher than the stored one is a no-op.
"""
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from retroverse.logging import get_logger, get_user_data_dir

log = get_logger('persistence')


class PersistencePort(ABC):
    """Durable get/set of a named integer (the high score)."""

    @abstractmethod
    def get_high_score(self, game_id: str) -> Optional[int]:
        """Stored high score for ``game_id``, or None if never set."""
        pass

    @abstractmethod
    def set_high_score(self, game_id: str, value: int) -> bool:
        """Store ``value`` if strictly greater than the stored score.

        Returns:
            True if the stored value changed
        """
        pass


class InMemoryHighScoreStore(PersistencePort):
    """Dictionary-backed store for tests and headless runs."""

    def __init__(self, initial: Optional[Dict[str, int]] = None):
        self._scores: Dict[str, int] = dict(initial or {})
        self.writes = 0

    def get_high_score(self, game_id: str) -> Optional[int]:
        return self._scores.get(game_id)

    def set_high_score(self, game_id: str, value: int) -> bool:
        current = self._scores.get(game_id)
        if current is not None and value <= current:
            return False
        self._scores[game_id] = value
        self.writes += 1
        return True


class JsonHighScoreStore(PersistencePort):
    """High scores kept in a single JSON object ``{game_id: score}``.

    The file lives in the user data directory unless a path is given.
    A missing file reads as empty. A corrupt file is logged and also
    reads as empty; the next successful write replaces it.
    """

    FILENAME = 'highscores.json'

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = Path(path) if path is not None else get_user_data_dir() / self.FILENAME

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Dict[str, int]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning(f"Could not read high scores from {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            log.warning(f"Ignoring malformed high score file {self._path}")
            return {}
        return {key: value for key, value in data.items()
                if isinstance(value, int) and not isinstance(value, bool)}

    def get_high_score(self, game_id: str) -> Optional[int]:
        return self._read().get(game_id)

    def set_high_score(self, game_id: str, value: int) -> bool:
        scores = self._read()
        current = scores.get(game_id)
        if current is not None and value <= current:
            return False
        scores[game_id] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix('.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(scores, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self._path)
        log.debug(f"Stored high score {game_id}={value} in {self._path}")
        return True
