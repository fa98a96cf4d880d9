import logging
from typing import Optional

from jose import jwt, JWTError

from storefront.core.config import settings

logger = logging.getLogger(__name__)


def verify_token(token: str) -> Optional[dict]:
    """Decode an access token, returning its claims or None when invalid/expired."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.debug(f"Token verification failed: {str(e)}")
        return None
