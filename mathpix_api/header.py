"""
Authentication header

The service expects these headers on every request:

    {
        "content-type": "application/json",
        "app_id": "YOUR_APP_ID",
        "app_key": "YOUR_APP_KEY"
    }
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional

from .config import APP_ID_ENV, APP_KEY_ENV
from .errors import HeaderError

# Same rule requests applies: no leading whitespace, no CR/LF, latin-1 only
_VALID_HEADER_VALUE = re.compile(r"\S[^\r\n]*")


def _check_header_value(name: str, value: str) -> str:
    if not isinstance(value, str) or not _VALID_HEADER_VALUE.fullmatch(value):
        raise HeaderError(f"InvalidHeaderValue: {name} is not a valid HTTP header value")
    try:
        value.encode("latin-1")
    except UnicodeEncodeError as e:
        raise HeaderError(f"InvalidHeaderValue: {name} contains non latin-1 characters", cause=e) from e
    return value


@dataclass(frozen=True)
class AuthHeader:
    """`app_id` / `app_key` pair used to authenticate against the API"""
    app_id: str
    app_key: str = field(repr=False)

    CONTENT_TYPE: ClassVar[str] = "application/json"

    @classmethod
    def from_env(cls, app_id: Optional[str] = None, app_key: Optional[str] = None) -> "AuthHeader":
        """Explicit values win; otherwise MATHPIX_APP_ID / MATHPIX_APP_KEY"""
        app_id = app_id or os.getenv(APP_ID_ENV)
        app_key = app_key or os.getenv(APP_KEY_ENV)
        if not app_id or not app_key:
            raise HeaderError(
                f"Mathpix API credentials not found (set {APP_ID_ENV} and {APP_KEY_ENV})"
            )
        return cls(app_id, app_key)

    def to_headers(self) -> Dict[str, str]:
        """
        Raises:
            HeaderError: a credential cannot be sent as an HTTP header value
        """
        return {
            "content-type": self.CONTENT_TYPE,
            "app_id": _check_header_value("app_id", self.app_id),
            "app_key": _check_header_value("app_key", self.app_key),
        }
