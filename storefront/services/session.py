import logging
from dataclasses import dataclass
from typing import Optional

from storefront.core.config import settings

logger = logging.getLogger(__name__)

LOGOUT_MESSAGE = "Logged out successfully"


@dataclass(frozen=True)
class SessionCredentials:
    """Access/refresh tokens as presented by the client on this request."""
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None

    @property
    def present(self) -> bool:
        return bool(self.access_token or self.refresh_token)


@dataclass(frozen=True)
class SessionClearance:
    """What the client must discard; the transport decides how to say it."""
    credential_names: tuple[str, ...]
    message: str = LOGOUT_MESSAGE


def clear_session(credentials: SessionCredentials) -> SessionClearance:
    # Tokens are not revoked server-side; they stay valid until they expire.
    if credentials.present:
        logger.info("Clearing session credentials")
    else:
        logger.debug("Logout requested without session credentials")

    return SessionClearance(
        credential_names=(settings.ACCESS_TOKEN_COOKIE, settings.REFRESH_TOKEN_COOKIE)
    )
