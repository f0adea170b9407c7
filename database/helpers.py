"""
Database helper functions — single-row reads and writes for users,
products and cart items.

Helpers only ``flush``; committing is left to the caller.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import CartItem, Product, User

logger = logging.getLogger(__name__)


def to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    """Parse an id coming from a client; ``None`` if it is not a UUID."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


# ── Users ──────────────────────────────────────────────────────────────


async def create_user(session: AsyncSession, username: str, password_hash: str) -> User:
    """
    Insert a user row.

    A taken username surfaces as ``sqlalchemy.exc.IntegrityError`` from the
    unique constraint; callers translate it.
    """
    user = User(user_id=uuid.uuid4(), username=username, password_hash=password_hash)
    session.add(user)
    await session.flush()
    return user


async def get_user_by_username(session: AsyncSession, username: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


# ── Products ───────────────────────────────────────────────────────────


async def create_product(session: AsyncSession, fields: Dict[str, Any]) -> Product:
    product = Product(product_id=uuid.uuid4(), **fields)
    session.add(product)
    await session.flush()
    return product


async def list_products(session: AsyncSession) -> List[Product]:
    result = await session.execute(select(Product).order_by(Product.name))
    return list(result.scalars().all())


async def get_product(session: AsyncSession, product_id: str | uuid.UUID) -> Optional[Product]:
    pid = to_uuid(product_id)
    if pid is None:
        return None
    return await session.get(Product, pid)


async def ensure_demo_product(session: AsyncSession) -> None:
    """Insert the demo product unless one with the same name already exists."""
    name = "Luminous Glow Foundation"
    result = await session.execute(select(Product.product_id).where(Product.name == name))
    if result.first() is not None:
        return
    await create_product(
        session,
        {
            "name": name,
            "price": 1200,
            "description": (
                "Highlights key features like lightweight texture, buildable coverage, "
                "dewy finish, hydration benefits, and shade range to appeal to a broad audience."
            ),
            "stock_quantity": 60,
        },
    )
    logger.info("Seeded demo product %r", name)


# ── Cart items ─────────────────────────────────────────────────────────


async def create_cart_item(
    session: AsyncSession,
    product_id: uuid.UUID,
    quantity: int,
    user_id: str | uuid.UUID,
) -> CartItem:
    item = CartItem(
        item_id=uuid.uuid4(),
        product_id=product_id,
        quantity=quantity,
        user_id=to_uuid(user_id),
    )
    session.add(item)
    await session.flush()
    return item


async def list_cart_items(session: AsyncSession, user_id: str | uuid.UUID) -> List[CartItem]:
    result = await session.execute(
        select(CartItem).where(CartItem.user_id == to_uuid(user_id))
    )
    return list(result.scalars().all())


async def get_cart_item(
    session: AsyncSession,
    item_id: str | uuid.UUID,
    owner_id: str | uuid.UUID | None = None,
) -> Optional[CartItem]:
    """
    Fetch a cart item by id.

    With ``owner_id`` set, an item belonging to someone else is treated
    as missing.
    """
    iid = to_uuid(item_id)
    if iid is None:
        return None
    item = await session.get(CartItem, iid)
    if item is not None and owner_id is not None and item.user_id != to_uuid(owner_id):
        return None
    return item


async def update_cart_item_quantity(
    session: AsyncSession,
    item_id: str | uuid.UUID,
    quantity: int,
    owner_id: str | uuid.UUID | None = None,
) -> Optional[CartItem]:
    item = await get_cart_item(session, item_id, owner_id)
    if item is None:
        return None
    item.quantity = quantity
    await session.flush()
    return item


async def delete_cart_item(
    session: AsyncSession,
    item_id: str | uuid.UUID,
    owner_id: str | uuid.UUID | None = None,
) -> bool:
    item = await get_cart_item(session, item_id, owner_id)
    if item is None:
        return False
    await session.delete(item)
    await session.flush()
    return True
