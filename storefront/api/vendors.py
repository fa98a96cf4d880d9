from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from storefront.db.session import get_db
from storefront.api.responses import success_response, error_response
from storefront.core.exceptions import RetrievalError
from storefront.services.vendor import list_approved_vendors, get_vendor_by_slug

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/vendors", tags=["vendors"])


@router.get("")
async def list_vendors(db: AsyncSession = Depends(get_db)):
    """Public listing of approved vendors."""
    try:
        vendors = await list_approved_vendors(db)
    except RetrievalError as e:
        return error_response(e.message)

    return success_response(vendors)


@router.get("/{slug}")
async def get_vendor(slug: str, db: AsyncSession = Depends(get_db)):
    """Public storefront details for a single vendor."""
    try:
        vendor = await get_vendor_by_slug(db, slug)
    except ValueError as e:
        return error_response(str(e), status_code=status.HTTP_404_NOT_FOUND)
    except RetrievalError as e:
        return error_response(e.message)

    return success_response({"vendor": vendor})
