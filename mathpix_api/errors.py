"""Error types raised while building Mathpix requests."""

from __future__ import annotations

from typing import Any, Optional


class MathpixError(Exception):
    """Base class for every error raised by ``mathpix_api``"""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{super().__str__()} (cause={self.cause})"
        return super().__str__()


# ============================================================================
# Construction / option errors
# ============================================================================

class OutOfBoundsError(MathpixError, ValueError):
    """A bounded value was constructed outside of [0.0, 1.0]"""

    def __init__(self, value: float):
        super().__init__(
            f"{value} is out of bounds. Value must be between 0.0 and 1.0."
        )
        self.value = value


class OptionError(MathpixError, ValueError):
    """An option could not be applied to an option aggregate"""


class BadOptionError(OptionError):
    """A value was rejected for one named option"""

    def __init__(
        self,
        option: str,
        value: Any,
        reason: str = "",
        *,
        cause: Optional[BaseException] = None,
    ):
        message = f"BadOption: {value!r} is not a valid value for {option}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, cause=cause)
        self.option = option
        self.value = value


class UnknownOptionError(BadOptionError):
    """A string token is not part of a closed vocabulary"""

    def __init__(self, option: str, token: str, known: Any = ()):
        reason = f"possible values are {list(known)}" if known else ""
        super().__init__(option, token, reason)
        self.token = token
        self.known = tuple(known)


class ConflictError(OptionError):
    """The same flag was requested both set and unset in a single call"""

    def __init__(self, true_token: str, false_token: str):
        super().__init__(
            f"Conflict: {true_token} and {false_token} are both being set."
        )
        self.true_token = true_token
        self.false_token = false_token


class UnreasonableStateError(OptionError):
    """A configuration resolves to a state the service cannot use"""


# ============================================================================
# Source errors
# ============================================================================

class SourceError(MathpixError, ValueError):
    """The OCR source could not be resolved"""


class ExtensionError(SourceError):
    """The source path has no file extension"""


class FileTypeError(SourceError):
    """The source path has an extension the endpoint does not support"""


class InvalidUrlError(SourceError):
    """The source string is not a usable absolute URL"""


class SerializationIOError(MathpixError):
    """The source bytes could not be read while serializing a request"""


# ============================================================================
# Header / transport errors
# ============================================================================

class HeaderError(MathpixError):
    """Authentication header values are missing or not valid HTTP header values"""


class TransportError(MathpixError):
    """The HTTP collaborator failed to deliver a request"""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.status = status
