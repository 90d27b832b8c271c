"""
Role-specific behaviour as a dispatch table on the role tag.

Every permission question in the core goes through `has_capability`, so adding
a role or moving a capability is a change to ROLE_CAPABILITIES only.
"""

from enum import Enum

from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole


class Capability(str, Enum):
    BROWSE_CATALOG = 'browse_catalog'
    MANAGE_OWN_PRODUCTS = 'manage_own_products'
    MANAGE_USERS = 'manage_users'
    VIEW_CATALOG_OVERVIEW = 'view_catalog_overview'


ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.BUYER: frozenset({Capability.BROWSE_CATALOG}),
    UserRole.SELLER: frozenset({Capability.BROWSE_CATALOG, Capability.MANAGE_OWN_PRODUCTS}),
    UserRole.ADMIN: frozenset(
        {
            Capability.BROWSE_CATALOG,
            Capability.MANAGE_USERS,
            Capability.VIEW_CATALOG_OVERVIEW,
        }
    ),
}


def has_capability(user: UserEntity, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(UserRole.from_value(user.role), frozenset())


def can_create_product(user: UserEntity) -> bool:
    return has_capability(user, Capability.MANAGE_OWN_PRODUCTS)


def can_manage_users(user: UserEntity) -> bool:
    return has_capability(user, Capability.MANAGE_USERS)


def can_view_catalog_overview(user: UserEntity) -> bool:
    return has_capability(user, Capability.VIEW_CATALOG_OVERVIEW)
