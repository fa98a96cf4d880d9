import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, delete
from sqlalchemy.orm import selectinload

from storefront.db.models import Cart, CartItem, Product, ProductVariant, Vendor, User
from storefront.schemas.cart import (
    AddToCartRequest,
    UpdateCartItemRequest,
    MergeCartRequest,
    CartLineResponse,
    CartBody,
    CartResponse,
    MergeStats,
    MergeCartResponse,
)
from storefront.core.exceptions import CartError

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(value or 0).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_cart_line(item: CartItem) -> CartLineResponse:
    product = item.product
    variant = item.variant
    base_price = _money(product.price)
    adjustment = _money(variant.price_adjustment if variant else 0)

    return CartLineResponse(
        id=item.id,
        productId=product.id,
        productName=product.name,
        productSlug=product.slug,
        basePrice=float(base_price),
        quantity=item.quantity,
        variantId=item.variant_id,
        variantName=variant.name if variant else None,
        variantValue=variant.value if variant else None,
        priceAdjustment=float(adjustment),
        finalPrice=float(base_price + adjustment),
        stock=variant.stock if variant else product.stock,
        vendorId=product.vendor.id,
        vendorName=product.vendor.business_name,
    )


def calculate_totals(lines: list[CartLineResponse]) -> tuple[int, float]:
    """Return (item count as the sum of quantities, subtotal rounded to cents)."""
    item_count = sum(line.quantity for line in lines)
    subtotal = sum((_money(line.finalPrice) * line.quantity for line in lines), Decimal("0"))
    return item_count, float(_money(subtotal))


async def get_customer_cart(db: AsyncSession, customer_id: str) -> Optional[Cart]:
    result = await db.execute(select(Cart).where(Cart.customer_id == customer_id))
    return result.scalar_one_or_none()


async def get_or_create_cart(db: AsyncSession, customer_id: str) -> Cart:
    cart = await get_customer_cart(db, customer_id)
    if cart:
        return cart

    cart = Cart(customer_id=customer_id)
    db.add(cart)
    await db.flush()
    logger.info(f"Created cart {cart.id} for customer {customer_id}")
    return cart


async def build_cart_view(db: AsyncSession, cart: Optional[Cart]) -> CartResponse:
    if cart is None:
        return CartResponse(cart=CartBody(items=[]), itemCount=0, subtotal=0.0)

    result = await db.execute(
        select(CartItem)
        .where(CartItem.cart_id == cart.id)
        .options(
            selectinload(CartItem.product).selectinload(Product.vendor),
            selectinload(CartItem.variant),
        )
        .order_by(CartItem.created_at, CartItem.id)
        .execution_options(populate_existing=True)
    )
    lines = [to_cart_line(item) for item in result.scalars().all()]
    item_count, subtotal = calculate_totals(lines)

    return CartResponse(
        cart=CartBody(id=cart.id, items=lines),
        itemCount=item_count,
        subtotal=subtotal,
    )


async def get_available_product(db: AsyncSession, product_id: str) -> Optional[Product]:
    """Product that is live, not disabled, and sold by an approved vendor with an active account."""
    result = await db.execute(
        select(Product)
        .join(Vendor, Product.vendor_id == Vendor.id)
        .join(User, Vendor.user_id == User.id)
        .where(
            and_(
                Product.id == product_id,
                Product.is_active == True,
                Product.is_disabled_by_admin == False,
                Vendor.is_approved == True,
                User.is_active == True,
            )
        )
    )
    return result.scalar_one_or_none()


async def get_product_variant(db: AsyncSession, product_id: str, variant_id: str) -> Optional[ProductVariant]:
    variant = await db.get(ProductVariant, variant_id)
    if not variant or variant.product_id != product_id:
        return None
    return variant


async def find_cart_line(
    db: AsyncSession,
    cart_id: str,
    product_id: str,
    variant_id: Optional[str]
) -> Optional[CartItem]:
    result = await db.execute(
        select(CartItem).where(
            and_(
                CartItem.cart_id == cart_id,
                CartItem.product_id == product_id,
                CartItem.variant_id == variant_id,
            )
        )
    )
    return result.scalars().first()


async def get_cart(db: AsyncSession, customer_id: str) -> CartResponse:
    cart = await get_or_create_cart(db, customer_id)
    await db.commit()
    return await build_cart_view(db, cart)


async def add_item(db: AsyncSession, customer_id: str, data: AddToCartRequest) -> CartResponse:
    product = await get_available_product(db, data.productId)
    if not product:
        raise CartError("Product not available", status_code=404)

    variant = None
    if data.variantId:
        variant = await get_product_variant(db, product.id, data.variantId)
        if not variant:
            raise CartError("Invalid variant")

    available_stock = variant.stock if variant else product.stock
    if available_stock == 0:
        raise CartError("Product is out of stock")

    cart = await get_or_create_cart(db, customer_id)
    existing = await find_cart_line(db, cart.id, data.productId, data.variantId)

    if existing:
        new_quantity = existing.quantity + data.quantity
        if new_quantity > available_stock:
            raise CartError(
                f"Only {available_stock} available. You already have {existing.quantity} in your cart."
            )
        existing.quantity = new_quantity
    else:
        if data.quantity > available_stock:
            raise CartError(f"Only {available_stock} available")
        db.add(CartItem(
            cart_id=cart.id,
            product_id=data.productId,
            variant_id=data.variantId,
            quantity=data.quantity
        ))

    await db.commit()
    logger.info(f"Added to cart: product_id={data.productId}, variant_id={data.variantId}, quantity={data.quantity}")

    return await build_cart_view(db, cart)


async def get_owned_item(db: AsyncSession, customer_id: str, item_id: str) -> tuple[CartItem, Cart]:
    result = await db.execute(
        select(CartItem, Cart)
        .join(Cart, CartItem.cart_id == Cart.id)
        .where(CartItem.id == item_id)
    )
    row = result.first()

    if not row:
        raise CartError("Cart item not found", status_code=404)

    item, cart = row
    if cart.customer_id != customer_id:
        logger.warning(f"Customer {customer_id} attempted to modify cart item {item_id} they do not own")
        raise CartError("Forbidden", status_code=403)

    return item, cart


async def update_item(
    db: AsyncSession,
    customer_id: str,
    item_id: str,
    data: UpdateCartItemRequest
) -> CartResponse:
    item, cart = await get_owned_item(db, customer_id, item_id)

    if data.quantity == 0:
        await db.delete(item)
        logger.info(f"Removed cart item {item_id} via zero quantity")
    else:
        product = await db.get(Product, item.product_id)
        available_stock = product.stock

        if item.variant_id:
            variant = await db.get(ProductVariant, item.variant_id)
            if not variant:
                raise CartError("Variant not found", status_code=404)
            available_stock = variant.stock

        if data.quantity > available_stock:
            raise CartError(f"Only {available_stock} available")

        item.quantity = data.quantity
        logger.info(f"Updated cart item {item_id}: quantity={data.quantity}")

    await db.commit()
    return await build_cart_view(db, cart)


async def remove_item(db: AsyncSession, customer_id: str, item_id: str) -> CartResponse:
    item, cart = await get_owned_item(db, customer_id, item_id)

    await db.delete(item)
    await db.commit()
    logger.info(f"Removed cart item {item_id}")

    return await build_cart_view(db, cart)


async def clear_cart(db: AsyncSession, customer_id: str) -> CartResponse:
    cart = await get_customer_cart(db, customer_id)
    if not cart:
        return await build_cart_view(db, None)

    await db.execute(delete(CartItem).where(CartItem.cart_id == cart.id))
    await db.commit()
    logger.info(f"Cleared cart {cart.id}")

    return CartResponse(cart=CartBody(id=cart.id, items=[]), itemCount=0, subtotal=0.0)


async def merge_guest_cart(db: AsyncSession, customer_id: str, data: MergeCartRequest) -> MergeCartResponse:
    """
    Fold a guest cart into the customer's persisted cart.

    Unavailable products, foreign variants and out-of-stock lines are skipped.
    Quantities are capped at the available stock. Everything is committed
    once at the end, so a failure leaves the stored cart untouched.
    """
    stats = MergeStats()

    if not data.guestCartItems:
        view = await build_cart_view(db, await get_customer_cart(db, customer_id))
        return MergeCartResponse(**view.model_dump(), merged=stats)

    try:
        cart = await get_or_create_cart(db, customer_id)
        result = await db.execute(select(CartItem).where(CartItem.cart_id == cart.id))
        existing_items = list(result.scalars().all())

        for guest_item in data.guestCartItems:
            product = await get_available_product(db, guest_item.productId)
            if not product:
                stats.itemsSkipped += 1
                continue

            variant = None
            if guest_item.variantId:
                variant = await get_product_variant(db, product.id, guest_item.variantId)
                if not variant:
                    stats.itemsSkipped += 1
                    continue

            available_stock = variant.stock if variant else product.stock
            if available_stock == 0:
                stats.itemsSkipped += 1
                continue

            existing = next(
                (
                    item for item in existing_items
                    if item.product_id == guest_item.productId
                    and item.variant_id == guest_item.variantId
                ),
                None
            )

            if existing:
                existing.quantity = min(existing.quantity + guest_item.quantity, available_stock)
                stats.itemsUpdated += 1
            else:
                new_item = CartItem(
                    cart_id=cart.id,
                    product_id=guest_item.productId,
                    variant_id=guest_item.variantId,
                    quantity=min(guest_item.quantity, available_stock)
                )
                db.add(new_item)
                existing_items.append(new_item)
                stats.itemsAdded += 1

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        f"Merged guest cart for customer {customer_id}: added={stats.itemsAdded}, "
        f"updated={stats.itemsUpdated}, skipped={stats.itemsSkipped}"
    )

    view = await build_cart_view(db, cart)
    return MergeCartResponse(**view.model_dump(), merged=stats)
