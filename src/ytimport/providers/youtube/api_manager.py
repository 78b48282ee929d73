"""
api_manager.py

Request execution for the YouTube Data API.

Responsibilities:
- Single-attempt execution of API requests
- HTTP -> domain error translation
- Readable error reasons for logs

No retry loop: a failed call is reported once and
the operator re-runs the import.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from googleapiclient.errors import HttpError

from ytimport.logger import get_logger


logger = get_logger(__name__)
T = TypeVar("T")


# ============================================================
# Exceptions
# ============================================================


class APIError(Exception):
    """A YouTube API call failed."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class QuotaExhaustedError(APIError):
    """Raised when the OAuth project's daily quota is exhausted."""


class AuthRejectedError(APIError):
    """The API rejected the credentials (HTTP 401)."""


# ============================================================
# Error detection helpers
# ============================================================


def _is_quota_payload(data: dict) -> bool:
    """
    YouTube quota errors are reliably signaled here:
    error.errors[].reason in ('quotaExceeded', 'dailyLimitExceeded')
    """
    try:
        for err in data.get("error", {}).get("errors", []):
            if err.get("reason") in ("quotaExceeded", "dailyLimitExceeded"):
                return True
    except AttributeError:
        pass
    return False


def _raw_content(e: HttpError) -> str:
    content = getattr(e, "content", b"") or b""
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="ignore")
    return str(content)


def _status(e: HttpError) -> Optional[int]:
    status = getattr(getattr(e, "resp", None), "status", None)
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def classify_http_error(e: HttpError) -> str:
    """
    Returns: 'quota', 'auth', or 'other'
    """
    # error_details is a list of {"reason": ...} dicts on current clients
    details = getattr(e, "error_details", None)
    if isinstance(details, list):
        if any(
            isinstance(d, dict)
            and d.get("reason") in ("quotaExceeded", "dailyLimitExceeded")
            for d in details
        ):
            return "quota"
    elif isinstance(details, dict) and _is_quota_payload(details):
        return "quota"

    raw = _raw_content(e).lower()
    if "quotaexceeded" in raw or "dailylimitexceeded" in raw:
        return "quota"

    if _status(e) == 401:
        return "auth"

    return "other"


def http_reason(e: HttpError) -> str:
    try:
        data = getattr(e, "error_details", None)
        if data:
            return str(data)
    except Exception:
        pass
    body = _raw_content(e)
    return body[:300] if body else str(e)


# ============================================================
# Execution
# ============================================================


def execute_once(operation: Callable[[], T], name: str = "") -> T:
    """
    Run a single API request and translate failures.

    HttpError becomes QuotaExhaustedError, AuthRejectedError or APIError.
    Anything else (transport errors, timeouts) becomes APIError.
    """
    try:
        return operation()

    except HttpError as e:
        kind = classify_http_error(e)
        status = _status(e)

        if kind == "quota":
            logger.warning(f"{name}: OAuth quota exhausted")
            raise QuotaExhaustedError(f"{name}: quota exhausted", status) from e

        if kind == "auth":
            raise AuthRejectedError(f"{name}: credentials rejected", status) from e

        raise APIError(f"{name}: HTTP {status} {http_reason(e)}", status) from e

    except APIError:
        raise

    except Exception as e:
        raise APIError(f"{name}: {e}") from e
