import re
from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ValidationError
from pydantic_core import PydanticCustomError


MIN_ADD_QUANTITY = 1
MAX_QUANTITY = 999
MAX_MERGE_ITEMS = 50

# Same acceptance rule as the storefront client's cuid check.
CUID_PATTERN = re.compile(r"c[^\s-]{8,}", re.IGNORECASE)


def _identifier(message: str):
    def check(value: str) -> str:
        if not CUID_PATTERN.fullmatch(value):
            raise PydanticCustomError("identifier_format", message)
        return value
    return AfterValidator(check)


def _whole_number(value: Any) -> Any:
    # bool is an int subclass; JSON true/false is not a quantity
    if isinstance(value, bool) or isinstance(value, str):
        raise PydanticCustomError("quantity_type", "Quantity must be a number")
    if isinstance(value, float):
        if not value.is_integer():
            raise PydanticCustomError("quantity_whole", "Quantity must be a whole number")
        return int(value)
    return value


def _quantity_range(minimum: int, too_low: str):
    def check(value: int) -> int:
        if value < minimum:
            raise PydanticCustomError("quantity_too_low", too_low)
        if value > MAX_QUANTITY:
            raise PydanticCustomError("quantity_too_high", "Quantity cannot exceed 999")
        return value
    return AfterValidator(check)


def _max_merge_items(value: Any) -> Any:
    if isinstance(value, (list, tuple)) and len(value) > MAX_MERGE_ITEMS:
        raise PydanticCustomError("too_many_items", "Too many items to merge (maximum 50)")
    return value


ProductId = Annotated[str, _identifier("Invalid product ID")]
VariantId = Annotated[str, _identifier("Invalid variant ID")]
AddQuantity = Annotated[
    int,
    BeforeValidator(_whole_number),
    _quantity_range(MIN_ADD_QUANTITY, "Quantity must be at least 1"),
]
UpdateQuantity = Annotated[
    int,
    BeforeValidator(_whole_number),
    _quantity_range(0, "Quantity cannot be negative"),
]


class AddToCartRequest(BaseModel):
    productId: ProductId
    quantity: AddQuantity
    variantId: Optional[VariantId] = None


class UpdateCartItemRequest(BaseModel):
    quantity: UpdateQuantity


class GuestCartItem(BaseModel):
    productId: ProductId
    quantity: AddQuantity
    variantId: Optional[VariantId] = None


class MergeCartRequest(BaseModel):
    guestCartItems: Annotated[List[GuestCartItem], BeforeValidator(_max_merge_items)]


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class CartValidationError(ValueError):
    """Raised with every field that failed validation, not only the first."""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))

    @property
    def message(self) -> str:
        return self.errors[0].message if self.errors else "Invalid request"


T = TypeVar("T", bound=BaseModel)


@dataclass
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        if self.errors:
            raise CartValidationError(self.errors)
        return self.value


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "body"


class PayloadValidator(Generic[T]):
    """Single entry point for checking one request body shape."""

    def __init__(self, model: type[T]):
        self.model = model

    def validate(self, data: Any) -> ValidationResult[T]:
        try:
            return ValidationResult(value=self.model.model_validate(data))
        except ValidationError as exc:
            errors = [
                FieldError(field=_field_path(err["loc"]), message=err["msg"])
                for err in exc.errors()
            ]
            return ValidationResult(errors=errors)


add_to_cart_validator = PayloadValidator(AddToCartRequest)
update_quantity_validator = PayloadValidator(UpdateCartItemRequest)
merge_cart_validator = PayloadValidator(MergeCartRequest)


def validate_add_to_cart(data: Any) -> AddToCartRequest:
    return add_to_cart_validator.validate(data).unwrap()


def validate_update_quantity(data: Any) -> UpdateCartItemRequest:
    return update_quantity_validator.validate(data).unwrap()


def validate_merge_cart(data: Any) -> MergeCartRequest:
    return merge_cart_validator.validate(data).unwrap()


class CartLineResponse(BaseModel):
    id: str
    productId: str
    productName: str
    productSlug: str
    basePrice: float
    quantity: int
    variantId: Optional[str] = None
    variantName: Optional[str] = None
    variantValue: Optional[str] = None
    priceAdjustment: float = 0.0
    finalPrice: float
    stock: int
    vendorId: str
    vendorName: str


class CartBody(BaseModel):
    id: Optional[str] = None
    items: List[CartLineResponse] = []


class CartResponse(BaseModel):
    cart: CartBody
    itemCount: int
    subtotal: float


class MergeStats(BaseModel):
    itemsAdded: int = 0
    itemsUpdated: int = 0
    itemsSkipped: int = 0


class MergeCartResponse(CartResponse):
    merged: MergeStats
