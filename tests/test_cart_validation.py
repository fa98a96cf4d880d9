import pytest

from storefront.schemas.cart import (
    CartValidationError,
    add_to_cart_validator,
    merge_cart_validator,
    validate_add_to_cart,
    validate_update_quantity,
    validate_merge_cart,
)


PRODUCT_ID = "ckx7a1b2c3d4e5f6g7h8i9j0k"
VARIANT_ID = "ckx9z8y7x6w5v4u3t2s1r0q9p"


def guest_item(**overrides):
    item = {"productId": PRODUCT_ID, "quantity": 1}
    item.update(overrides)
    return item


@pytest.mark.parametrize("quantity", [1, 2, 500, 999])
def test_add_to_cart_accepts_quantities_in_range(quantity):
    data = validate_add_to_cart({"productId": PRODUCT_ID, "quantity": quantity})

    assert data.productId == PRODUCT_ID
    assert data.quantity == quantity
    assert data.variantId is None


@pytest.mark.parametrize("quantity,message", [
    (0, "Quantity must be at least 1"),
    (-3, "Quantity must be at least 1"),
    (1000, "Quantity cannot exceed 999"),
    (1.5, "Quantity must be a whole number"),
    ("2", "Quantity must be a number"),
    (True, "Quantity must be a number"),
])
def test_add_to_cart_rejects_bad_quantities(quantity, message):
    with pytest.raises(CartValidationError) as exc_info:
        validate_add_to_cart({"productId": PRODUCT_ID, "quantity": quantity})

    assert [(e.field, e.message) for e in exc_info.value.errors] == [("quantity", message)]


def test_add_to_cart_accepts_integral_float():
    data = validate_add_to_cart({"productId": PRODUCT_ID, "quantity": 3.0})

    assert data.quantity == 3
    assert isinstance(data.quantity, int)


def test_add_to_cart_accepts_variant_and_null_variant():
    assert validate_add_to_cart(guest_item(variantId=VARIANT_ID)).variantId == VARIANT_ID
    assert validate_add_to_cart(guest_item(variantId=None)).variantId is None


@pytest.mark.parametrize("product_id", [
    "", "abc", "p123456789", "c1234567", "c-12345678", "c12 345678",
    PRODUCT_ID + "\n", "\n" + PRODUCT_ID,
])
def test_add_to_cart_rejects_bad_identifiers(product_id):
    with pytest.raises(CartValidationError) as exc_info:
        validate_add_to_cart({"productId": product_id, "quantity": 1})

    assert exc_info.value.errors[0].field == "productId"
    assert exc_info.value.message == "Invalid product ID"


def test_add_to_cart_reports_every_invalid_field():
    result = add_to_cart_validator.validate({"productId": "nope", "quantity": 0, "variantId": "bad"})

    assert not result.ok
    assert result.value is None
    assert {(e.field, e.message) for e in result.errors} == {
        ("productId", "Invalid product ID"),
        ("quantity", "Quantity must be at least 1"),
        ("variantId", "Invalid variant ID"),
    }


def test_add_to_cart_reports_missing_fields():
    with pytest.raises(CartValidationError) as exc_info:
        validate_add_to_cart({})

    assert {e.field for e in exc_info.value.errors} == {"productId", "quantity"}


def test_add_to_cart_rejects_non_object_body():
    with pytest.raises(CartValidationError) as exc_info:
        validate_add_to_cart(None)

    assert exc_info.value.errors[0].field == "body"


def test_add_to_cart_ignores_unknown_keys():
    data = validate_add_to_cart(guest_item(note="gift wrap"))

    assert not hasattr(data, "note")


@pytest.mark.parametrize("quantity", [0, 1, 999])
def test_update_quantity_accepts_zero_through_max(quantity):
    assert validate_update_quantity({"quantity": quantity}).quantity == quantity


@pytest.mark.parametrize("quantity,message", [
    (-1, "Quantity cannot be negative"),
    (1000, "Quantity cannot exceed 999"),
    (2.5, "Quantity must be a whole number"),
])
def test_update_quantity_rejects_out_of_range(quantity, message):
    with pytest.raises(CartValidationError) as exc_info:
        validate_update_quantity({"quantity": quantity})

    assert exc_info.value.message == message


def test_merge_cart_accepts_empty_and_full_lists():
    assert validate_merge_cart({"guestCartItems": []}).guestCartItems == []

    data = validate_merge_cart({"guestCartItems": [guest_item() for _ in range(50)]})
    assert len(data.guestCartItems) == 50


def test_merge_cart_rejects_more_than_fifty_items():
    with pytest.raises(CartValidationError) as exc_info:
        validate_merge_cart({"guestCartItems": [guest_item() for _ in range(51)]})

    assert exc_info.value.errors[0].field == "guestCartItems"
    assert exc_info.value.message == "Too many items to merge (maximum 50)"


def test_merge_cart_reports_index_and_field_of_each_bad_item():
    result = merge_cart_validator.validate({
        "guestCartItems": [
            guest_item(),
            guest_item(quantity=0),
            guest_item(),
            guest_item(productId="bad", variantId="also-bad"),
        ]
    })

    assert {(e.field, e.message) for e in result.errors} == {
        ("guestCartItems.1.quantity", "Quantity must be at least 1"),
        ("guestCartItems.3.productId", "Invalid product ID"),
        ("guestCartItems.3.variantId", "Invalid variant ID"),
    }


def test_merge_cart_requires_item_list():
    with pytest.raises(CartValidationError) as exc_info:
        validate_merge_cart({})

    assert exc_info.value.errors[0].field == "guestCartItems"


def test_merge_cart_rejects_identifier_with_trailing_newline():
    with pytest.raises(CartValidationError) as exc_info:
        validate_merge_cart({"guestCartItems": [guest_item(variantId=VARIANT_ID + "\n")]})

    assert [(e.field, e.message) for e in exc_info.value.errors] == [
        ("guestCartItems.0.variantId", "Invalid variant ID"),
    ]
