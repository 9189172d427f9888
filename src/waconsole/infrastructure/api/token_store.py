"""Token stores backing the persisted session credential"""

import json
from pathlib import Path

from loguru import logger

TOKEN_KEY = "token"


class FileTokenStore:
    """Keeps the bearer token in a small JSON file

    The file holds a single object keyed by TOKEN_KEY. Writes replace the
    whole file; clear() deletes it.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> str | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable token file {self._path}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        token = data.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps({TOKEN_KEY: token}), encoding="utf-8")
        tmp_path.replace(self._path)
        logger.debug(f"Stored session token in {self._path}")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
        logger.debug(f"Removed session token from {self._path}")


class MemoryTokenStore:
    """In-process token store (tests and embedded use)"""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None
