from typing import List
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.metrics import record_db_operation
from reunion.models.hotel import Hotel
from reunion.schemas.hotel import HotelCreate

async def get_hotel(db: AsyncSession, hotel_id: str) -> Hotel | None:
    record_db_operation("select", "hotels")
    return await db.get(Hotel, hotel_id)

async def list_hotels(db: AsyncSession) -> List[Hotel]:
    """All hotels, ascending by name"""
    record_db_operation("select", "hotels")
    result = await db.execute(select(Hotel).order_by(Hotel.hotel_name.asc()))
    return list(result.scalars().all())

async def create_hotel(db: AsyncSession, hotel_in: HotelCreate, creator_id: str | None = None) -> Hotel:
    db_hotel = Hotel(
        hotel_name=hotel_in.name,
        description=hotel_in.description,
        website_url=hotel_in.website_url,
        user_id=creator_id
    )
    db.add(db_hotel)
    record_db_operation("insert", "hotels")
    await db.commit()
    await db.refresh(db_hotel)
    return db_hotel

async def delete_hotel(db: AsyncSession, hotel_id: str) -> int:
    """Hard delete; profiles selecting the hotel are nulled by the foreign key"""
    record_db_operation("delete", "hotels")
    result = await db.execute(delete(Hotel).where(Hotel.id == hotel_id))
    await db.commit()
    return result.rowcount
