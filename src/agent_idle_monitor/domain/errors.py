"""Errors raised while syncing agents, analyzing them, or editing profiles."""

from __future__ import annotations


class SyncError(Exception):
    """Base class for failures that abort a roster sync.

    ``display_message`` is shown verbatim in the dashboard error banner.
    """

    def __init__(self, display_message: str) -> None:
        super().__init__(display_message)
        self.display_message = display_message


class MissingCredentialsError(SyncError):
    """The active profile has no usable client id or secret."""

    def __init__(self) -> None:
        super().__init__(
            "Missing Credentials: Go to the 'Administration' tab and enter your "
            "Genesys Cloud Client ID and Secret."
        )


class ConnectionBlockedError(SyncError):
    """The request never reached the server (cross-origin block, bad proxy, DNS...)."""

    def __init__(self, cause: str = "") -> None:
        message = (
            "Connection failed: The request was blocked or the proxy is unreachable. "
            "Ensure your 'CORS Proxy' is correct and active."
        )
        if cause:
            message = f"{message} ({cause})"
        super().__init__(message)
        self.cause = cause


class AuthenticationFailedError(SyncError):
    """The token endpoint refused the client credentials."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Authentication failed: {detail}")
        self.detail = detail


class FetchFailedError(SyncError):
    """A roster page came back with a non-success status."""

    def __init__(self, page: int, status: int, body: str) -> None:
        super().__init__(
            f"Data fetch failed: Failed to fetch user data (Page {page}): {status} - {body}"
        )
        self.page = page
        self.status = status
        self.body = body


class AnalysisFailedError(Exception):
    """The insight service could not produce a usable analysis."""


class LastProfileError(Exception):
    """Refused to delete the only remaining profile."""

    def __init__(self) -> None:
        super().__init__("Must keep at least one profile.")
