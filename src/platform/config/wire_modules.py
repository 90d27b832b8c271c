"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.marketplace.driving_adapter.http_controller import (
    product_controller,
    user_controller,
)
from src.service.marketplace.driving_adapter.http_controller.auth import basic_auth


WIRE_MODULES: list[ModuleType] = [
    basic_auth,
    user_controller,
    product_controller,
]
