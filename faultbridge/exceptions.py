"""
Typed exceptions for faultbridge.

Provides structured error handling with:
- FaultBridgeError: Base exception for all faultbridge errors
- MissingParameterError: Required experiment flag not supplied
- PayloadBuildError: Injection request could not be serialized
- AgentTransportError: HTTP call to the agent failed or returned non-200
- ResultDecodeError: Agent answered 200 with a body that does not decode

The dispatcher raises these internally and converts them into
InjectionResult outcomes, so callers never see them unless they ask for
them via InjectionResult.raise_for_outcome().
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class FaultBridgeError(Exception):
    """Base exception for all faultbridge errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context as key-value pairs
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class MissingParameterError(FaultBridgeError):
    """A flag the experiment requires was absent or empty.

    Raised before any network call is attempted.

    Attributes:
        flag: Name of the missing flag
    """

    def __init__(
        self,
        flag: str,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["flag"] = flag
        self.flag = flag
        super().__init__(f"less parameter: `{flag}`", code=code, details=details)


class PayloadBuildError(FaultBridgeError):
    """Injection request could not be serialized.

    Usually a caller data defect, such as a flag value that is not a string
    or a string that cannot be encoded as UTF-8.
    """

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        if cause is not None:
            details["cause"] = str(cause)

        self.url = url
        self.cause = cause

        super().__init__(message, code=code, details=details)


class AgentTransportError(FaultBridgeError):
    """HTTP communication with the agent failed.

    Raised when:
    - Connection refused or DNS resolution failed
    - The request exceeded its deadline
    - The agent answered with a status other than 200

    Attributes:
        url: Agent URL that was called
        status_code: HTTP status code if a response was received
        body: Raw response body if a response was received
        timed_out: True if the deadline expired
    """

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        timed_out: bool = False,
        cause: Optional[BaseException] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code
        if body is not None:
            details["body"] = body
        if cause is not None:
            details["cause"] = str(cause)
        if timed_out:
            details["timed_out"] = True

        self.url = url
        self.status_code = status_code
        self.body = body
        self.timed_out = timed_out
        self.cause = cause

        super().__init__(message, code=code, details=details)


class ResultDecodeError(FaultBridgeError):
    """Agent returned 200 but the body does not match the result schema.

    Points at a protocol mismatch between agent and dispatcher versions.

    Attributes:
        body: Raw response body
    """

    def __init__(
        self,
        message: str,
        *,
        body: str,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["body"] = body
        if url:
            details["url"] = url
        if cause is not None:
            details["cause"] = str(cause)

        self.body = body
        self.url = url
        self.cause = cause

        super().__init__(message, code=code, details=details)


__all__ = [
    "FaultBridgeError",
    "MissingParameterError",
    "PayloadBuildError",
    "AgentTransportError",
    "ResultDecodeError",
]
