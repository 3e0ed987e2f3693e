"""
Product model: a sellable item.

Relationships:
- belongs to Category (`Product.category` / `Category.products`)
- has many OrderLine (`Product.order_lines` / `OrderLine.product`)

Prices are stored as integer cents.
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Table, func

from app.db.associations import belongs_to, has_many
from app.db.base import TABLE_OPTIONS
from app.db.registry import ModelDefinition, ModelRegistry


class ProductDefinition(ModelDefinition):
    """Schema handle for products."""

    def associate(self, registry: ModelRegistry) -> None:
        belongs_to(registry, self, "Category", attribute="category", foreign_key="category_id", inverse="products")
        has_many(registry, self, "OrderLine", attribute="order_lines", foreign_key="product_id", inverse="product")


def define_product(connection, types) -> ProductDefinition:
    """
    Define the `products` table and map a Product class onto it.
    """
    table = Table(
        "products",
        connection.metadata,
        Column("id", types.Integer, primary_key=True, autoincrement=True),
        Column("name", types.String(200), nullable=False),
        Column("description", types.Text, nullable=True),
        Column("price_cents", types.Integer, nullable=False, default=0),
        Column("stock", types.Integer, nullable=False, default=0),
        Column("is_active", types.Boolean, nullable=False, default=True),
        Column(
            "category_id",
            types.Integer,
            ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
        Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False),
        CheckConstraint("price_cents >= 0", name="price_cents_non_negative"),
        **TABLE_OPTIONS,
    )

    class Product:
        def __repr__(self) -> str:
            return f"<Product id={self.id} name={self.name!r}>"

    connection.mapper_registry.map_imperatively(Product, table)
    return ProductDefinition("Product", Product, table)
