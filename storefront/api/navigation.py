from fastapi import APIRouter, status

from storefront.api.responses import success_response, error_response
from storefront.core.navigation import NAV_SECTIONS, mark_active

router = APIRouter(prefix="/api/navigation", tags=["navigation"])


@router.get("/{section}")
async def get_navigation(section: str, path: str = "/"):
    items = NAV_SECTIONS.get(section)
    if items is None:
        return error_response("Navigation section not found", status_code=status.HTTP_404_NOT_FOUND)

    return success_response(mark_active(items, path))
