# crudapp/schemas.py

"""
Pydantic schemas for the Product Service API.
These define the request and response bodies of the /api/products endpoints.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Schema for creating a new product.
# Used in POST /api/products. Any "id" key in the body is ignored.
class ProductCreate(BaseModel):
    name: str = Field(..., description="Name of the product.")
    description: Optional[str] = Field(None, description="Detailed description of the product.")
    price: float = Field(..., description="Price of the product.")


# Schema for updating an existing product.
# The three fields replace the stored ones; the stored id is kept.
# Used in PUT /api/products/{product_id}.
class ProductUpdate(ProductCreate):
    pass


# Schema for representing a product in API responses.
class ProductResponse(BaseModel):
    id: int = Field(..., description="Unique identifier of the product.")
    name: str
    description: Optional[str] = None
    price: float

    model_config = ConfigDict(from_attributes=True)
