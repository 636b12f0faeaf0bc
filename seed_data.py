#!/usr/bin/env python3
"""
Seed script to create initial data for the application.
Run this after deployment to populate the database with demo data.
"""
import asyncio
import datetime
from reunion.db.database import AsyncSessionLocal, init_db
from reunion.models import AlumniProfile, Event, Hotel, Memory, User, UserRole
from reunion.core.security import get_password_hash

async def seed_data():
    """Seed the database with initial data."""
    print("Starting database seeding...")
    await init_db()

    async with AsyncSessionLocal() as session:
        admin_user = User(
            email="admin@gmail.com",
            password_hash=get_password_hash("admin12345"),
            role=UserRole.ADMIN
        )
        alumni_user = User(
            email="alumni@gmail.com",
            password_hash=get_password_hash("alumni12345"),
            role=UserRole.ALUMNI
        )
        session.add_all([admin_user, alumni_user])
        await session.commit()
        await session.refresh(admin_user)
        await session.refresh(alumni_user)
        print(f"Created users: admin(id={admin_user.id}), alumni(id={alumni_user.id})")

        hotels = [
            Hotel(
                hotel_name="Grand Palace Hotel",
                description="Walking distance from the campus",
                website_url="https://grandpalace.example.com",
                user_id=admin_user.id
            ),
            Hotel(
                hotel_name="Lakeview Residency",
                description="Quiet rooms by the lake",
                website_url="https://lakeview.example.com",
                user_id=admin_user.id
            ),
        ]
        session.add_all(hotels)
        await session.commit()

        session.add(AlumniProfile(
            user_id=alumni_user.id,
            full_name="Demo Alumni",
            email=alumni_user.email,
            country="India",
            state="Karnataka",
            city="Bengaluru",
            rsvp_adults=2,
            rsvp_kids=1,
            hotel_selection_id=hotels[0].id
        ))

        now = datetime.datetime.now(datetime.UTC)
        session.add(Event(
            title="Silver Jubilee Reunion",
            description="Twenty-five years since graduation",
            event_start_date=now + datetime.timedelta(days=60),
            event_end_date=now + datetime.timedelta(days=61),
            rsvp_deadline=now + datetime.timedelta(days=45),
            venue_name="Main Auditorium",
            venue_address="College Campus"
        ))
        session.add(Memory(
            image_title="Graduation Day",
            image_description="The whole batch on the front lawn",
            upload_photo_url="https://placehold.co/600x400?text=Graduation+Day",
            uploaded_by=alumni_user.id
        ))
        await session.commit()

    print("Database seeding completed successfully!")

if __name__ == "__main__":
    asyncio.run(seed_data())
