import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe.database.models import WardrobeItem, new_id
from wardrobe.schemas.wardrobe import WardrobeItemCreate
from wardrobe.storage.images import ImageNotFound, ImageStore, is_data_url

logger = logging.getLogger(__name__)


async def get_user_items(
        db: AsyncSession,
        user_id: int,
        category: Optional[str] = None
) -> List[WardrobeItem]:
    """Get all wardrobe items for a user, oldest first"""
    stmt = select(WardrobeItem).where(WardrobeItem.user_id == user_id)
    if category:
        stmt = stmt.where(WardrobeItem.category == category)
    stmt = stmt.order_by(WardrobeItem.created_at, WardrobeItem.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_item_by_id(db: AsyncSession, item_id: str, user_id: int) -> Optional[WardrobeItem]:
    """Get a specific wardrobe item by ID for a user"""
    stmt = select(WardrobeItem).where(
        (WardrobeItem.id == item_id) & (WardrobeItem.user_id == user_id)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_item(
        db: AsyncSession,
        item_data: WardrobeItemCreate,
        user_id: int,
        image_store: ImageStore
) -> WardrobeItem:
    item = WardrobeItem(
        id=new_id(),
        user_id=user_id,
        category=item_data.category,
        name=item_data.name,
        color=item_data.color,
        style=item_data.style,
        seasons=list(item_data.season),
        occasions=list(item_data.occasions),
        image=item_data.image,
    )

    # Inline uploads go to the image store; anything else is kept as an opaque reference
    stored = None
    if is_data_url(item_data.image):
        stored = image_store.upload(user_id, item.id, item_data.image)
        item.image = stored.url
        item.image_file_name = stored.file_name

    db.add(item)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        if stored is not None:
            image_store.remove(stored.file_name)
        raise
    await db.refresh(item)
    logger.info("User %s added %s item %s", user_id, item.category, item.id)
    return item


async def delete_item(
        db: AsyncSession,
        item_id: str,
        user_id: int,
        image_store: ImageStore
) -> bool:
    """Delete a wardrobe item and its stored image"""
    item = await get_item_by_id(db, item_id, user_id)
    if not item:
        return False

    image_file_name = item.image_file_name
    await db.delete(item)
    await db.commit()

    # Remove the file only after the row is gone
    if image_file_name:
        image_store.remove(image_file_name)
    logger.info("User %s deleted item %s", user_id, item_id)
    return True


async def refresh_item_image(
        db: AsyncSession,
        item_id: str,
        user_id: int,
        image_store: ImageStore
) -> Optional[str]:
    """Re-sign the stored image of an item. Returns None if there is nothing to sign."""
    item = await get_item_by_id(db, item_id, user_id)
    if not item or not item.image_file_name:
        return None

    try:
        url = image_store.signed_url(item.image_file_name)
    except ImageNotFound:
        logger.warning("Image file %s for item %s is gone", item.image_file_name, item_id)
        return None

    item.image = url
    await db.commit()
    return url
