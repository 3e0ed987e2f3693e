"""
Category model: a grouping of products.

Relationships:
- has many Product (`Category.products` / `Product.category`)
"""

from sqlalchemy import Column, DateTime, Table, func

from app.db.associations import has_many
from app.db.base import TABLE_OPTIONS
from app.db.registry import ModelDefinition, ModelRegistry


class CategoryDefinition(ModelDefinition):
    """Schema handle for categories."""

    def associate(self, registry: ModelRegistry) -> None:
        has_many(registry, self, "Product", attribute="products", foreign_key="category_id", inverse="category")


def define_category(connection, types) -> CategoryDefinition:
    """
    Define the `categories` table and map a Category class onto it.
    """
    table = Table(
        "categories",
        connection.metadata,
        Column("id", types.Integer, primary_key=True, autoincrement=True),
        Column("name", types.String(120), nullable=False, unique=True),
        Column("description", types.Text, nullable=True),
        Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
        Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False),
        **TABLE_OPTIONS,
    )

    class Category:
        def __repr__(self) -> str:
            return f"<Category id={self.id} name={self.name!r}>"

    connection.mapper_registry.map_imperatively(Category, table)
    return CategoryDefinition("Category", Category, table)
