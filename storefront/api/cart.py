from typing import Any
from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from storefront.db.session import get_db
from storefront.db.models import Customer
from storefront.api.dependencies import get_current_customer
from storefront.api.responses import success_response, error_response
from storefront.core.exceptions import CartError
from storefront.schemas.cart import validate_add_to_cart, validate_update_quantity, validate_merge_cart
from storefront.services import cart as cart_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("")
async def get_cart(
    customer: Customer = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db)
):
    """Get the customer's cart, creating an empty one on first access."""
    try:
        view = await cart_service.get_cart(db, customer.id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching cart: {str(e)}")
        await db.rollback()
        return error_response("Failed to fetch cart")

    return success_response(view)


@router.post("")
async def add_to_cart(
    payload: Any = Body(default=None),
    customer: Customer = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db)
):
    """Add an item, or raise the quantity of the matching line."""
    data = validate_add_to_cart(payload)

    try:
        view = await cart_service.add_item(db, customer.id, data)
    except CartError as e:
        return error_response(e.message, status_code=e.status_code)
    except SQLAlchemyError as e:
        logger.error(f"Error adding to cart: {str(e)}")
        await db.rollback()
        return error_response("Failed to add item to cart")

    return success_response(view)


# Registered before the item routes so "clear" is not taken for an item id.
@router.delete("/clear")
async def clear_cart(
    customer: Customer = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db)
):
    try:
        view = await cart_service.clear_cart(db, customer.id)
    except SQLAlchemyError as e:
        logger.error(f"Error clearing cart: {str(e)}")
        await db.rollback()
        return error_response("Failed to clear cart")

    return success_response(view)


@router.post("/merge")
async def merge_cart(
    payload: Any = Body(default=None),
    customer: Customer = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db)
):
    """Merge guest cart items into the customer's cart after login."""
    data = validate_merge_cart(payload)

    try:
        view = await cart_service.merge_guest_cart(db, customer.id, data)
    except SQLAlchemyError as e:
        logger.error(f"Error merging cart: {str(e)}")
        await db.rollback()
        return error_response("Failed to merge cart")

    return success_response(view)


@router.put("/{item_id}")
async def update_cart_item(
    item_id: str,
    payload: Any = Body(default=None),
    customer: Customer = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db)
):
    """Set a line's quantity; zero removes the line."""
    try:
        # Ownership is checked before the body is validated.
        await cart_service.get_owned_item(db, customer.id, item_id)
        data = validate_update_quantity(payload)
        view = await cart_service.update_item(db, customer.id, item_id, data)
    except CartError as e:
        return error_response(e.message, status_code=e.status_code)
    except SQLAlchemyError as e:
        logger.error(f"Error updating cart item: {str(e)}")
        await db.rollback()
        return error_response("Failed to update cart item")

    return success_response(view)


@router.delete("/{item_id}")
async def remove_cart_item(
    item_id: str,
    customer: Customer = Depends(get_current_customer),
    db: AsyncSession = Depends(get_db)
):
    try:
        view = await cart_service.remove_item(db, customer.id, item_id)
    except CartError as e:
        return error_response(e.message, status_code=e.status_code)
    except SQLAlchemyError as e:
        logger.error(f"Error deleting cart item: {str(e)}")
        await db.rollback()
        return error_response("Failed to delete cart item")

    return success_response(view)
