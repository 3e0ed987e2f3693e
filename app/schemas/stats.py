"""
@file: stats.py
@description:
Pydantic schema for the database summary produced by the stats reporter.

@notes:
- Field names are snake_case in Python; the JSON form uses `orderLines` for the
  order line count, mirroring the shape the API has always returned:
  {
    "users": 3,
    "products": 10,
    "categories": 2,
    "orders": 5,
    "orderLines": 12
  }
- The summary is for operational visibility only and is never used for correctness.

@dependencies:
- pydantic: for data validation and serialization
"""

from pydantic import BaseModel, ConfigDict, Field


class DatabaseStats(BaseModel):
    """
    Row counts per shop entity, taken as one concurrent snapshot.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    users: int = Field(..., ge=0, description="Rows in the users table.")
    products: int = Field(..., ge=0, description="Rows in the products table.")
    categories: int = Field(..., ge=0, description="Rows in the categories table.")
    orders: int = Field(..., ge=0, description="Rows in the orders table.")
    order_lines: int = Field(..., ge=0, alias="orderLines", description="Rows in the order_lines table.")
