from datetime import datetime
from uuid import uuid4
from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, ForeignKey, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.orm import relationship
import enum

from storefront.db.base import Base


def new_id() -> str:
    """Collision-resistant record key: "c" followed by 24 hex characters."""
    return "c" + uuid4().hex[:24]


class UserRole(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    VENDOR = "VENDOR"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    id = Column(String(25), primary_key=True, default=new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(SQLEnum(UserRole), default=UserRole.CUSTOMER, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    vendor = relationship("Vendor", back_populates="user", uselist=False)
    customer = relationship("Customer", back_populates="user", uselist=False)


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(String(25), primary_key=True, default=new_id)
    user_id = Column(String(25), ForeignKey("users.id"), unique=True, nullable=False)
    business_name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    business_address = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    logo = Column(String(500), nullable=True)
    banner = Column(String(500), nullable=True)
    commission_rate = Column(Numeric(5, 2), default=10, nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False)
    is_shop_open = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="vendor")
    products = relationship("Product", back_populates="vendor")


class Product(Base):
    __tablename__ = "products"

    id = Column(String(25), primary_key=True, default=new_id)
    vendor_id = Column(String(25), ForeignKey("vendors.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_disabled_by_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    vendor = relationship("Vendor", back_populates="products")
    variants = relationship("ProductVariant", back_populates="product")


class ProductVariant(Base):
    __tablename__ = "product_variants"

    id = Column(String(25), primary_key=True, default=new_id)
    product_id = Column(String(25), ForeignKey("products.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    value = Column(String(100), nullable=False)
    price_adjustment = Column(Numeric(10, 2), nullable=True)
    stock = Column(Integer, default=0, nullable=False)

    product = relationship("Product", back_populates="variants")


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(25), primary_key=True, default=new_id)
    user_id = Column(String(25), ForeignKey("users.id"), unique=True, nullable=False)

    user = relationship("User", back_populates="customer")
    cart = relationship("Cart", back_populates="customer", uselist=False)


class Cart(Base):
    __tablename__ = "carts"

    id = Column(String(25), primary_key=True, default=new_id)
    customer_id = Column(String(25), ForeignKey("customers.id"), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    customer = relationship("Customer", back_populates="cart")
    items = relationship("CartItem", back_populates="cart", cascade="all, delete-orphan")


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(String(25), primary_key=True, default=new_id)
    cart_id = Column(String(25), ForeignKey("carts.id"), nullable=False, index=True)
    product_id = Column(String(25), ForeignKey("products.id"), nullable=False)
    variant_id = Column(String(25), ForeignKey("product_variants.id"), nullable=True)
    quantity = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")
    variant = relationship("ProductVariant")

    __table_args__ = (
        UniqueConstraint('cart_id', 'product_id', 'variant_id', name='_cart_product_variant_uc'),
    )
