from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class AuthHealthStatus(str, Enum):
    OK = "ok"
    OK_API_QUOTA = "ok_api_quota"
    AUTH_INVALID = "auth_invalid"
    FAILED = "failed"


@dataclass(frozen=True)
class AuthHealthResult:
    provider: str
    status: AuthHealthStatus
    message: str


class AuthProvider(Protocol):
    """
    Credential provider interface. Keep it minimal.

    - get_authorized_handle() returns credentials, prompting for an
      interactive login on first use and reusing the persisted token after
    - build_client() returns an authenticated API client object
    - health_check() performs a cheap authenticated call to validate auth
    """

    name: str

    def get_authorized_handle(self) -> Any: ...

    def build_client(self, credentials: Any = None) -> Any: ...

    def health_check(self) -> AuthHealthResult: ...
