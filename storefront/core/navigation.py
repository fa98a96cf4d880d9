from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class NavItem:
    label: str
    href: str
    icon: str
    badge: Optional[str] = None
    active: bool = False


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def is_active(current_path: str, target_href: str, exact: bool = False) -> bool:
    """
    Decide whether a navigation entry for target_href is active on current_path.

    Non-exact matches compare whole path segments, so "/shop" is active on
    "/shop/shoes" but not on "/shopping". The root only ever matches itself,
    and an href with no segments ("" or "//") is treated as the root.
    """
    if exact:
        return current_path == target_href

    target = _segments(target_href)
    if not target:
        return current_path == "/"

    return _segments(current_path)[:len(target)] == target


def mark_active(items: list[NavItem], current_path: str) -> list[NavItem]:
    """Flag the most specific matching entry; "/admin" yields to "/admin/orders"."""
    matching = [item for item in items if is_active(current_path, item.href)]
    best = max(matching, key=lambda item: len(_segments(item.href)), default=None)

    return [replace(item, active=item is best) for item in items]


storefront_nav_items = [
    NavItem(label="Home", href="/", icon="home"),
    NavItem(label="Categories", href="/categories", icon="folder-tree"),
    NavItem(label="Vendors", href="/vendors", icon="store"),
]

customer_nav_items = [
    NavItem(label="My Orders", href="/orders", icon="shopping-cart"),
    NavItem(label="My Disputes", href="/orders/disputes", icon="alert-triangle"),
    NavItem(label="Notifications", href="/notifications", icon="bell"),
]

vendor_nav_items = [
    NavItem(label="Dashboard", href="/vendor", icon="layout-dashboard"),
    NavItem(label="Products", href="/vendor/products", icon="package"),
    NavItem(label="Orders", href="/vendor/orders", icon="shopping-cart"),
    NavItem(label="Coupons", href="/vendor/coupons", icon="tag"),
    NavItem(label="Wallet", href="/vendor/wallet", icon="wallet"),
    NavItem(label="Reviews", href="/vendor/reviews", icon="star"),
    NavItem(label="Settings", href="/vendor/settings", icon="settings"),
]

admin_nav_items = [
    NavItem(label="Dashboard", href="/admin", icon="layout-dashboard"),
    NavItem(label="Vendors", href="/admin/vendors", icon="users"),
    NavItem(label="Categories", href="/admin/categories", icon="folder-tree"),
    NavItem(label="Products", href="/admin/products", icon="package"),
    NavItem(label="Orders", href="/admin/orders", icon="shopping-cart"),
    NavItem(label="Coupons", href="/admin/coupons", icon="tag"),
    NavItem(label="Payouts", href="/admin/payouts", icon="wallet"),
    NavItem(label="Disputes", href="/admin/disputes", icon="alert-triangle"),
    NavItem(label="Notifications", href="/admin/notifications", icon="bell"),
    NavItem(label="Reports", href="/admin/reports", icon="bar-chart-3"),
    NavItem(label="Settings", href="/admin/settings", icon="settings"),
]

NAV_SECTIONS = {
    "storefront": storefront_nav_items,
    "customer": customer_nav_items,
    "vendor": vendor_nav_items,
    "admin": admin_nav_items,
}
