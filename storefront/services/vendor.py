import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, func
from sqlalchemy.exc import SQLAlchemyError

from storefront.db.models import Vendor, User, Product
from storefront.schemas.vendor import VendorSummary, VendorDetail
from storefront.core.exceptions import RetrievalError

logger = logging.getLogger(__name__)


def _active_product_count():
    """Correlated count of a vendor's products that customers can see."""
    return (
        select(func.count(Product.id))
        .where(
            and_(
                Product.vendor_id == Vendor.id,
                Product.is_active == True,
                Product.is_disabled_by_admin == False,
            )
        )
        .correlate(Vendor)
        .scalar_subquery()
    )


async def list_approved_vendors(db: AsyncSession) -> list[VendorSummary]:
    """
    Approved vendors whose owning account is active, sorted by business name.

    Sorting uses the column's default collation; on SQLite that is BINARY,
    so "Zeta" sorts before "alpha".
    """
    product_count = _active_product_count().label("active_product_count")
    query = (
        select(Vendor, product_count)
        .join(User, Vendor.user_id == User.id)
        .where(
            and_(
                Vendor.is_approved == True,
                User.is_active == True,
            )
        )
        .order_by(Vendor.business_name)
    )

    try:
        result = await db.execute(query)
        rows = result.all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to list vendors: {str(e)}")
        raise RetrievalError("Failed to fetch vendors") from e

    logger.info(f"Found {len(rows)} approved vendors")

    return [
        VendorSummary(
            id=vendor.id,
            businessName=vendor.business_name,
            slug=vendor.slug,
            businessAddress=vendor.business_address,
            commissionRate=float(vendor.commission_rate),
            activeProductCount=count,
        )
        for vendor, count in rows
    ]


async def get_vendor_by_slug(db: AsyncSession, slug: str) -> VendorDetail:
    product_count = _active_product_count().label("active_product_count")
    query = (
        select(Vendor, User.is_active, product_count)
        .join(User, Vendor.user_id == User.id)
        .where(and_(Vendor.slug == slug, Vendor.is_approved == True))
    )

    try:
        result = await db.execute(query)
        row = result.first()
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch vendor {slug}: {str(e)}")
        raise RetrievalError("Failed to fetch vendor") from e

    if not row:
        raise ValueError("Vendor not found")

    vendor, owner_active, count = row
    if not owner_active:
        raise ValueError("Vendor is not available")

    return VendorDetail(
        id=vendor.id,
        businessName=vendor.business_name,
        slug=vendor.slug,
        description=vendor.description,
        logo=vendor.logo,
        banner=vendor.banner,
        shopOpen=vendor.is_shop_open,
        productCount=count,
    )
