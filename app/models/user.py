"""
User model: an account placing orders.

Relationships:
- has many Order (`User.orders` / `Order.user`)
"""

from sqlalchemy import Column, DateTime, Table, func

from app.db.associations import has_many
from app.db.base import TABLE_OPTIONS
from app.db.registry import ModelDefinition, ModelRegistry


class UserDefinition(ModelDefinition):
    """Schema handle for users."""

    def associate(self, registry: ModelRegistry) -> None:
        has_many(registry, self, "Order", attribute="orders", foreign_key="user_id", inverse="user")


def define_user(connection, types) -> UserDefinition:
    table = Table(
        "users",
        connection.metadata,
        Column("id", types.Integer, primary_key=True, autoincrement=True),
        Column("email", types.String(255), nullable=False, unique=True),
        Column("full_name", types.String(200), nullable=True),
        Column("password_hash", types.String(255), nullable=True),
        Column("role", types.String(32), nullable=False, default="customer"),
        Column("is_active", types.Boolean, nullable=False, default=True),
        Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
        Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False),
        **TABLE_OPTIONS,
    )

    class User:
        def __repr__(self) -> str:
            return f"<User id={self.id} email={self.email!r}>"

    connection.mapper_registry.map_imperatively(User, table)
    return UserDefinition("User", User, table)
