"""
Models Package for the shop data layer.

Each module defines one entity factory. A factory receives the shared
DatabaseConnection and the type-mapping module (sqlalchemy.types), defines its
table on the connection's metadata, maps a new class onto it and returns a
ModelDefinition whose `associate` method declares its relationships.

SHOP_MODELS lists the factories in registration order.
"""

from app.models.category import define_category
from app.models.order import define_order
from app.models.order_line import define_order_line
from app.models.product import define_product
from app.models.user import define_user

SHOP_MODELS = (
    ("Product", define_product),
    ("Category", define_category),
    ("Order", define_order),
    ("OrderLine", define_order_line),
    ("User", define_user),
)

__all__ = [
    "SHOP_MODELS",
    "define_category",
    "define_order",
    "define_order_line",
    "define_product",
    "define_user",
]
