"""
OrderLine model: one product line within an order.

Relationships:
- belongs to Order (`OrderLine.order` / `Order.lines`)
- belongs to Product (`OrderLine.product` / `Product.order_lines`)

The unit price is copied at order time so later price changes do not rewrite history.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Table

from app.db.associations import belongs_to
from app.db.base import TABLE_OPTIONS
from app.db.registry import ModelDefinition, ModelRegistry


class OrderLineDefinition(ModelDefinition):
    """Schema handle for order lines."""

    def associate(self, registry: ModelRegistry) -> None:
        belongs_to(registry, self, "Order", attribute="order", foreign_key="order_id", inverse="lines")
        belongs_to(registry, self, "Product", attribute="product", foreign_key="product_id", inverse="order_lines")


def define_order_line(connection, types) -> OrderLineDefinition:
    table = Table(
        "order_lines",
        connection.metadata,
        Column("id", types.Integer, primary_key=True, autoincrement=True),
        Column(
            "order_id",
            types.Integer,
            ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        Column(
            "product_id",
            types.Integer,
            ForeignKey("products.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        ),
        Column("quantity", types.Integer, nullable=False, default=1),
        Column("unit_price_cents", types.Integer, nullable=False, default=0),
        CheckConstraint("quantity > 0", name="quantity_positive"),
        CheckConstraint("unit_price_cents >= 0", name="unit_price_cents_non_negative"),
        **TABLE_OPTIONS,
    )

    class OrderLine:
        def __repr__(self) -> str:
            return f"<OrderLine id={self.id} quantity={self.quantity}>"

    connection.mapper_registry.map_imperatively(OrderLine, table)
    return OrderLineDefinition("OrderLine", OrderLine, table)
