"""
REST API routes — product catalog and shopping cart.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user
from auth.jwt import TokenClaims
from database.helpers import (
    create_cart_item,
    create_product,
    delete_cart_item,
    get_product,
    list_cart_items,
    list_products,
    update_cart_item_quantity,
)
from utils.schemas import (
    CartAddRequest,
    CartItemOut,
    CartUpdateRequest,
    MessageOut,
    ProductCreate,
    ProductOut,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _server_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _owner_scope(request: Request, user: TokenClaims) -> Optional[str]:
    """Owner filter for update/delete; ``None`` leaves items unscoped."""
    if request.app.state.settings.enforce_cart_ownership:
        return user.user_id
    return None


# ── Catalog ────────────────────────────────────────────────────────────


@router.post("/product", response_model=ProductOut)
async def add_product(
    req: ProductCreate,
    session: AsyncSession = Depends(db_session),
) -> ProductOut:
    try:
        product = await create_product(session, req.model_dump())
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Failed to add product %r", req.name)
        raise _server_error("Failed to add new Product")
    return ProductOut.from_row(product)


@router.get("/products", response_model=List[ProductOut])
async def get_products(session: AsyncSession = Depends(db_session)) -> List[ProductOut]:
    try:
        products = await list_products(session)
    except SQLAlchemyError:
        logger.exception("Failed to fetch products")
        raise _server_error("Failed to fetch products")
    return [ProductOut.from_row(p) for p in products]


@router.get("/products/{product_id}", response_model=ProductOut)
async def get_product_detail(
    product_id: str,
    session: AsyncSession = Depends(db_session),
) -> ProductOut:
    try:
        product = await get_product(session, product_id)
    except SQLAlchemyError:
        logger.exception("Failed to fetch product %s", product_id)
        raise _server_error("Failed to fetch product")
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return ProductOut.from_row(product)


# ── Cart ───────────────────────────────────────────────────────────────
# ``user`` is declared before ``session`` so a rejected token never opens
# a database session.


@router.get("/cart", response_model=List[CartItemOut])
async def get_cart(
    user: TokenClaims = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> List[CartItemOut]:
    try:
        items = await list_cart_items(session, user.user_id)
    except SQLAlchemyError:
        logger.exception("Failed to fetch cart for %s", user.user_id)
        raise _server_error("Failed to fetch cart")
    return [CartItemOut.from_row(i) for i in items]


@router.post("/cart", response_model=CartItemOut)
async def add_to_cart(
    req: CartAddRequest,
    user: TokenClaims = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> CartItemOut:
    """Add a product to the caller's cart."""
    if not req.productId or not req.quantity:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing productId or quantity",
        )
    try:
        product = await get_product(session, req.productId)
        if product is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
        item = await create_cart_item(session, product.product_id, req.quantity, user.user_id)
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Failed to add product %s to cart of %s", req.productId, user.user_id)
        raise _server_error("Failed to add product to cart")

    logger.info("User %s added %d x %s to cart", user.username, item.quantity, product.product_id)
    return CartItemOut.from_row(item)


@router.put("/cart/{item_id}", response_model=CartItemOut)
async def update_cart_item(
    item_id: str,
    req: CartUpdateRequest,
    request: Request,
    user: TokenClaims = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> CartItemOut:
    """Set the quantity of a cart item."""
    if req.quantity is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing quantity")
    try:
        item = await update_cart_item_quantity(
            session, item_id, req.quantity, owner_id=_owner_scope(request, user),
        )
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Failed to update cart item %s", item_id)
        raise _server_error("Failed to update cart item")
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart item not found")
    return CartItemOut.from_row(item)


@router.delete("/cart/{item_id}", response_model=MessageOut)
async def remove_cart_item(
    item_id: str,
    request: Request,
    user: TokenClaims = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    try:
        removed = await delete_cart_item(session, item_id, owner_id=_owner_scope(request, user))
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Failed to remove cart item %s", item_id)
        raise _server_error("Failed to remove product from cart")
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart item not found")
    return {"message": "Product removed from cart"}
