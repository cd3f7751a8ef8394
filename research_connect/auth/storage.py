"""Credential storage.

The current bearer token lives in a :class:`CredentialStore`.  The in-memory
store suits library use and tests; the file store lets the CLI stay signed in
between invocations.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_FILE = "~/.research_connect/credentials.json"


class CredentialStore(ABC):
    """Holds the current bearer token."""

    @abstractmethod
    def get_token(self) -> str | None: ...

    @abstractmethod
    def set_token(self, token: str) -> None: ...

    @abstractmethod
    def clear(self) -> None:
        """Forget the token and any refresh token."""


class MemoryCredentialStore(CredentialStore):
    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileCredentialStore(CredentialStore):
    """
    JSON file with ``token`` / ``refreshToken`` keys.

    The file is re-read on every access so two CLI processes see each
    other's refreshes.
    """

    def __init__(self, path: str | Path = DEFAULT_CREDENTIALS_FILE) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable credentials file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        # Owner-only from creation; an existing file is tightened before it is truncated.
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists():
            self.path.chmod(0o600)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get_token(self) -> str | None:
        return self._read().get("token")

    def set_token(self, token: str) -> None:
        data = self._read()
        data["token"] = token
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        data.pop("token", None)
        data.pop("refreshToken", None)
        if data:
            self._write(data)
        else:
            self.path.unlink(missing_ok=True)
