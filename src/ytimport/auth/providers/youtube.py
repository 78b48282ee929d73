from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

import ytimport.config as config
from ytimport.auth.base import AuthHealthResult, AuthHealthStatus, AuthProvider
from ytimport.auth.errors import AuthFailed, AuthInvalid, AuthorizationFailed
from ytimport.env.paths import auth_client_secrets_file, auth_token_file
from ytimport.logger import get_logger


def _is_quota_exceeded_error(exc: Exception) -> bool:
    try:
        status = getattr(getattr(exc, "resp", None), "status", None)
        if status != 403:
            return False

        content = getattr(exc, "content", b"")
        if not content:
            return False

        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="ignore")

        return "quotaExceeded" in content
    except Exception:
        return False


class YouTubeOAuthProvider(AuthProvider):
    name = "youtube"

    def __init__(self) -> None:
        self._logger = get_logger("ytimport.auth.youtube")

    def get_authorized_handle(self) -> Credentials:
        """
        Returns valid credentials, refreshing an expired token or running the
        interactive local-server flow when no usable token is persisted.
        """
        return self._load_or_authenticate()

    def build_client(self, credentials: Optional[Credentials] = None) -> Any:
        creds = credentials or self._load_or_authenticate()
        try:
            return build(
                config.YOUTUBE_API_SERVICE,
                config.YOUTUBE_API_VERSION,
                credentials=creds,
                cache_discovery=False,
            )
        except Exception as e:
            self._logger.error(f"Failed to build YouTube client: {e}")
            raise AuthFailed(str(e)) from e

    def health_check(self) -> AuthHealthResult:
        """
        Validates OAuth by making a cheap authenticated request.
        Treats API quota exhaustion as OAuth OK.
        """
        self._logger.info("oauth.check.start")

        try:
            youtube = self.build_client()
            youtube.channels().list(part="id", mine=True, maxResults=1).execute()

            self._logger.info("oauth.check.ok")
            return AuthHealthResult(
                provider=self.name,
                status=AuthHealthStatus.OK,
                message="OAuth OK",
            )

        except Exception as e:
            if _is_quota_exceeded_error(e):
                self._logger.warning("oauth.check.ok_quota_exhausted")
                return AuthHealthResult(
                    provider=self.name,
                    status=AuthHealthStatus.OK_API_QUOTA,
                    message="OAuth OK (API quota exhausted)",
                )

            if isinstance(e, AuthInvalid):
                self._logger.error("oauth.check.auth_invalid", exc_info=e)
                return AuthHealthResult(
                    provider=self.name,
                    status=AuthHealthStatus.AUTH_INVALID,
                    message="OAuth INVALID - reauthentication required",
                )

            self._logger.error("oauth.check.failed", exc_info=e)
            return AuthHealthResult(
                provider=self.name,
                status=AuthHealthStatus.FAILED,
                message="OAuth check failed (unexpected error)",
            )

    # -----------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------

    def _load_or_authenticate(self) -> Credentials:
        token_path = auth_token_file()
        secrets_path = auth_client_secrets_file()

        creds: Optional[Credentials] = None

        if token_path.exists():
            try:
                creds = Credentials.from_authorized_user_file(
                    str(token_path),
                    config.YOUTUBE_OAUTH_SCOPES,
                )
                self._logger.debug("Loaded existing OAuth credentials")
            except Exception as e:
                self._logger.warning(f"Failed to load existing credentials: {e}")
                creds = None

        if creds and creds.valid:
            return creds

        if creds and creds.expired and creds.refresh_token:
            try:
                self._logger.debug("Refreshing expired OAuth token...")
                creds.refresh(Request())
                self._logger.debug("Successfully refreshed OAuth token")
                self._persist_token(token_path, creds)
                return creds
            except Exception as e:
                self._logger.error(f"Failed to refresh token: {e}")
                raise AuthInvalid(str(e)) from e

        if not secrets_path.exists():
            raise AuthInvalid(
                f"Missing OAuth credentials JSON file: {secrets_path}\n"
                "Create a Google Cloud OAuth Desktop App and download the JSON file."
            )

        try:
            self._logger.info("Authorize this app in the browser window that opens")
            flow = InstalledAppFlow.from_client_secrets_file(
                str(secrets_path),
                config.YOUTUBE_OAUTH_SCOPES,
            )
            creds = flow.run_local_server(port=0)
            self._logger.debug("Successfully authenticated with OAuth")
        except Exception as e:
            self._logger.error(f"OAuth authentication failed: {e}")
            raise AuthorizationFailed(str(e)) from e

        self._persist_token(token_path, creds)
        return creds

    def _persist_token(self, token_path: Path, creds: Credentials) -> None:
        try:
            token_path.write_text(creds.to_json(), encoding="utf-8")
            self._logger.debug(f"Saved OAuth token to {token_path}")
        except OSError as e:
            self._logger.warning(f"Failed to save OAuth token: {e}")
            return

        # Best-effort permission tightening (POSIX only)
        try:
            os.chmod(token_path, 0o600)
        except OSError as e:
            self._logger.debug(f"Could not set restrictive permissions: {e}")
