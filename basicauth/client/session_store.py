"""
Session-store abstraction for the bearer token.

The login screen writes the token after a successful login; the users screen
reads it back before the authenticated call. Stores are injected rather than
reached through global state.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Optional, Protocol

from basicauth.core.config import get_settings

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Narrow token store: read the last token, replace it."""

    def get(self) -> Optional[str]: ...

    def set(self, token: str) -> None: ...


class InMemorySessionStore:
    """Process-local store, mostly for tests and short-lived tools."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token


class FileSessionStore:
    """
    Key-value store persisted as JSON: {namespace: {key: value}}.

    Other namespaces and keys in the same file are preserved on write.
    Writes go through a temp file and an atomic rename.
    """

    def __init__(self, path: str | Path, namespace: str = "auth", key: str = "token"):
        self.path = Path(path).expanduser()
        self.namespace = namespace
        self.key = key
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls) -> "FileSessionStore":
        settings = get_settings()
        return cls(
            settings.SESSION_STORE_PATH,
            namespace=settings.SESSION_NAMESPACE,
            key=settings.SESSION_TOKEN_KEY,
        )

    def _read_all(self) -> dict:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.warning(f"Session file {self.path} is corrupt, ignoring it: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> Optional[str]:
        with self._lock:
            section = self._read_all().get(self.namespace)
        if not isinstance(section, dict):
            return None
        value = section.get(self.key)
        return value if isinstance(value, str) else None

    def set(self, token: str) -> None:
        with self._lock:
            data = self._read_all()
            section = data.get(self.namespace)
            if not isinstance(section, dict):
                section = {}
                data[self.namespace] = section
            section[self.key] = token

            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        logger.debug("Stored session token under %s/%s", self.namespace, self.key)
