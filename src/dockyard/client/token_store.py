"""Credential storage shared between client calls and CLI invocations."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..consts import ACCESS_TOKEN_KEY, USER_KEY
from ..errors import ConfigException
from ..utils import canonicalify, ensure_path, sanitize

logger = logging.getLogger(__name__)


class TokenStore:
    """Key/value credential store.

    Backed by a JSON file when ``path`` is given, otherwise kept in memory.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = canonicalify(path) if path else None
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise ConfigException(f"Corrupt credentials file {self.path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def _flush(self) -> None:
        if self.path is None:
            return
        ensure_path(self.path.parent)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    @property
    def access_token(self) -> Optional[str]:
        return self.get(ACCESS_TOKEN_KEY)

    def save_session(self, access_token: str, user: Any = None) -> None:
        logger.debug(f"Storing access token {sanitize(access_token)}")
        self._data[ACCESS_TOKEN_KEY] = access_token
        if user is not None:
            self._data[USER_KEY] = user
        self._flush()

    def clear_credentials(self) -> None:
        logger.info("Clearing stored credentials")
        self._data.pop(ACCESS_TOKEN_KEY, None)
        self._data.pop(USER_KEY, None)
        self._flush()
