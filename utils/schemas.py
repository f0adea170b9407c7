"""
Pydantic schemas for the catalog and cart API.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from database.models import CartItem, Product

# Range of the Integer columns on Postgres.
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


# ═══════════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════════


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: float
    description: str = Field(..., min_length=1)
    stock_quantity: int = Field(..., ge=INT32_MIN, le=INT32_MAX)


class ProductOut(BaseModel):
    id: str
    name: str
    price: float
    description: str
    stock_quantity: int

    @classmethod
    def from_row(cls, product: Product) -> "ProductOut":
        return cls(
            id=str(product.product_id),
            name=product.name,
            price=product.price,
            description=product.description,
            stock_quantity=product.stock_quantity,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Cart
# ═══════════════════════════════════════════════════════════════════════════════


class CartAddRequest(BaseModel):
    """
    Body of ``POST /cart``.

    Unknown keys (an ``owner`` or ``user`` field, say) are dropped; the
    owner always comes from the bearer token.
    """

    productId: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=INT32_MIN, le=INT32_MAX)


class CartUpdateRequest(BaseModel):
    quantity: Optional[int] = Field(None, ge=INT32_MIN, le=INT32_MAX)


class CartItemOut(BaseModel):
    id: str
    product_id: str
    quantity: int
    user_id: str

    @classmethod
    def from_row(cls, item: CartItem) -> "CartItemOut":
        return cls(
            id=str(item.item_id),
            product_id=str(item.product_id),
            quantity=item.quantity,
            user_id=str(item.user_id),
        )


class MessageOut(BaseModel):
    message: str
