"""
Order model: a customer purchase.

Relationships:
- belongs to User (`Order.user` / `User.orders`)
- has many OrderLine (`Order.lines` / `OrderLine.order`)
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Table, func

from app.db.associations import belongs_to, has_many
from app.db.base import TABLE_OPTIONS
from app.db.registry import ModelDefinition, ModelRegistry

ORDER_STATUSES = ("pending", "paid", "shipped", "delivered", "cancelled")


class OrderDefinition(ModelDefinition):
    """Schema handle for orders."""

    def associate(self, registry: ModelRegistry) -> None:
        belongs_to(registry, self, "User", attribute="user", foreign_key="user_id", inverse="orders")
        has_many(registry, self, "OrderLine", attribute="lines", foreign_key="order_id", inverse="order")


def define_order(connection, types) -> OrderDefinition:
    """
    Define the `orders` table and map an Order class onto it.
    """
    statuses = ", ".join(f"'{status}'" for status in ORDER_STATUSES)
    table = Table(
        "orders",
        connection.metadata,
        Column("id", types.Integer, primary_key=True, autoincrement=True),
        Column(
            "user_id",
            types.Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        Column("status", types.String(32), nullable=False, default="pending"),
        Column("total_cents", types.Integer, nullable=False, default=0),
        Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
        Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False),
        CheckConstraint(f"status in ({statuses})", name="status_valid"),
        CheckConstraint("total_cents >= 0", name="total_cents_non_negative"),
        **TABLE_OPTIONS,
    )

    class Order:
        def __repr__(self) -> str:
            return f"<Order id={self.id} status={self.status!r}>"

    connection.mapper_registry.map_imperatively(Order, table)
    return OrderDefinition("Order", Order, table)
