from __future__ import annotations

from ytimport.auth.base import AuthHealthResult, AuthHealthStatus, AuthProvider
from ytimport.auth.errors import AuthError, AuthInvalid, AuthorizationFailed
from ytimport.auth.health import check
from ytimport.auth.registry import get_provider

__all__ = [
    "AuthError",
    "AuthHealthResult",
    "AuthHealthStatus",
    "AuthInvalid",
    "AuthProvider",
    "AuthorizationFailed",
    "check",
    "get_provider",
]
