from typing import List
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.metrics import record_db_operation
from reunion.models.memory import Memory

async def get_memory(db: AsyncSession, memory_id: str) -> Memory | None:
    record_db_operation("select", "memories")
    return await db.get(Memory, memory_id)

async def list_memories(db: AsyncSession) -> List[Memory]:
    """All memories, newest first"""
    record_db_operation("select", "memories")
    result = await db.execute(select(Memory).order_by(Memory.created_at.desc()))
    return list(result.scalars().all())

async def create_memory(
    db: AsyncSession,
    *,
    title: str,
    uploaded_by: str,
    description: str | None = None,
    photo_url: str | None = None,
    video_url: str | None = None
) -> Memory:
    db_memory = Memory(
        image_title=title,
        image_description=description,
        upload_photo_url=photo_url,
        upload_video_url=video_url,
        uploaded_by=uploaded_by
    )
    db.add(db_memory)
    record_db_operation("insert", "memories")
    await db.commit()
    await db.refresh(db_memory)
    return db_memory

async def delete_memory(db: AsyncSession, memory_id: str) -> int:
    record_db_operation("delete", "memories")
    result = await db.execute(delete(Memory).where(Memory.id == memory_id))
    await db.commit()
    return result.rowcount
