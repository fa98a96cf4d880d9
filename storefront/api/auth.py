from fastapi import APIRouter, Depends
import logging

from storefront.api.dependencies import get_session_credentials
from storefront.api.responses import success_response, error_response
from storefront.services.session import SessionCredentials, clear_session

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/logout")
async def logout(session: SessionCredentials = Depends(get_session_credentials)):
    """Tell the client to drop both session cookies."""
    try:
        clearance = clear_session(session)
        response = success_response({"message": clearance.message})
        for name in clearance.credential_names:
            response.delete_cookie(name)
        return response
    except Exception:
        logger.exception("Logout error")
        return error_response("An error occurred during logout")
