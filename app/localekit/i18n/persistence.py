"""Locale persistence.

A single string value stored under a well-known key: read on initialize,
written on every successful locale switch.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from localekit.i18n.exceptions import MalformedPersistedValueError
from localekit.i18n.models import is_locale_code
from localekit.logging import get_module_logger

logger = get_module_logger()


class LocaleStorage(ABC):
    """Durable key/value storage for the chosen locale."""

    @abstractmethod
    def get(self, key: str) -> Optional[object]:
        """Return the raw stored value, or None if nothing is stored."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value under key."""
        pass


class InMemoryLocaleStorage(LocaleStorage):
    """Process-local storage, for tests and embedded use."""

    def __init__(self, initial: Optional[Dict[str, object]] = None):
        self.data: Dict[str, object] = dict(initial or {})

    def get(self, key: str) -> Optional[object]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileLocaleStorage(LocaleStorage):
    """Storage backed by a JSON object in a file.

    Unreadable files are reported as malformed values so the session falls
    back to client preferences instead of failing.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise MalformedPersistedValueError(str(e)) from e
        if not isinstance(data, dict):
            raise MalformedPersistedValueError(data)
        return data

    def get(self, key: str) -> Optional[object]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except MalformedPersistedValueError:
            logger.warning("overwriting_malformed_storage", path=str(self.path))
            data = {}
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise


def read_persisted_locale(storage: LocaleStorage, key: str) -> Optional[str]:
    """Read and validate the stored locale.

    Returns:
        The stored locale code, or None if nothing is stored.

    Raises:
        MalformedPersistedValueError: If the stored value is not a locale code.
    """
    value = storage.get(key)
    if value is None or value == "":
        return None
    if not is_locale_code(value):
        raise MalformedPersistedValueError(value)
    return value
