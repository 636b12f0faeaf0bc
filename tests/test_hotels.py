import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from reunion.core.cache import ACCOMMODATION_PAGE, page_cache
from reunion.crud import hotel as crud_hotel
from reunion.models import AlumniProfile, Hotel

async def _hotel_count(session_maker) -> int:
    async with session_maker() as session:
        return (await session.execute(select(func.count()).select_from(Hotel))).scalar_one()

@pytest.mark.asyncio
async def test_create_hotel_anonymous(client, session_maker):
    response = await client.post(
        "/api/hotels/create",
        json={"name": "Lakeview Inn", "websiteUrl": "https://lakeview.example.com", "description": "By the lake"}
    )
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True

    async with session_maker() as session:
        hotel = await session.get(Hotel, data["id"])
    assert hotel.hotel_name == "Lakeview Inn"
    assert hotel.description == "By the lake"
    assert hotel.user_id is None

@pytest.mark.asyncio
async def test_create_hotel_records_creator(client, alumni_user, alumni_headers, session_maker):
    response = await client.post(
        "/api/hotels/create",
        json={"name": "Hilltop Lodge", "websiteUrl": "https://hilltop.example.com"},
        headers=alumni_headers
    )
    assert response.status_code == 201

    async with session_maker() as session:
        hotel = await session.get(Hotel, response.json()["id"])
    assert hotel.user_id == alumni_user.id

@pytest.mark.asyncio
async def test_create_hotel_missing_website(client, session_maker):
    response = await client.post("/api/hotels/create", json={"name": "No Site Hotel"})
    assert response.status_code == 400
    assert response.json() == {"error": "websiteUrl is required"}
    assert await _hotel_count(session_maker) == 0

@pytest.mark.asyncio
async def test_create_hotel_blank_name(client, session_maker):
    response = await client.post(
        "/api/hotels/create",
        json={"name": "   ", "websiteUrl": "https://blank.example.com"}
    )
    assert response.status_code == 400
    assert "Name and Website URL are required" in response.json()["error"]
    assert await _hotel_count(session_maker) == 0

@pytest.mark.asyncio
async def test_list_hotels_sorted_by_name(client, db_session):
    db_session.add_all([
        Hotel(hotel_name="Zen Residency", website_url="https://zen.example.com"),
        Hotel(hotel_name="Anchor Suites", website_url="https://anchor.example.com"),
        Hotel(hotel_name="Maple Court", website_url="https://maple.example.com"),
    ])
    await db_session.commit()

    response = await client.get("/api/hotels/public")
    assert response.status_code == 200
    data = response.json()["data"]
    assert [h["name"] for h in data] == ["Anchor Suites", "Maple Court", "Zen Residency"]
    assert set(data[0]) == {"id", "name"}

@pytest.mark.asyncio
async def test_list_hotels_reflects_new_hotel(client):
    assert (await client.get("/api/hotels/public")).json() == {"data": []}

    await client.post(
        "/api/hotels/create",
        json={"name": "Harbor View", "websiteUrl": "https://harbor.example.com"}
    )
    listed = await client.get("/api/hotels/public")
    assert [h["name"] for h in listed.json()["data"]] == ["Harbor View"]

@pytest.mark.asyncio
async def test_delete_hotel_clears_profile_selection(
    client, admin_headers, alumni_user, alumni_headers, hotel, session_maker
):
    rsvp = await client.post(
        "/api/events/e1/rsvp",
        json={"adults": 2, "hotelId": hotel.id},
        headers=alumni_headers
    )
    assert rsvp.status_code == 200

    response = await client.delete(f"/api/admin/hotels/{hotel.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Hotel permanently deleted"}

    async with session_maker() as session:
        assert await session.get(Hotel, hotel.id) is None
        profile = (await session.execute(
            select(AlumniProfile).where(AlumniProfile.user_id == alumni_user.id)
        )).scalar_one()
    assert profile.hotel_selection_id is None
    assert profile.rsvp_adults == 2

@pytest.mark.asyncio
async def test_delete_hotel_invalidates_accommodation_page(client, admin_headers, hotel):
    warm = await client.get("/api/hotels/public")
    assert len(warm.json()["data"]) == 1
    assert page_cache.get(ACCOMMODATION_PAGE) is not None

    await client.delete(f"/api/admin/hotels/{hotel.id}", headers=admin_headers)
    assert page_cache.get(ACCOMMODATION_PAGE) is None
    assert (await client.get("/api/hotels/public")).json() == {"data": []}

@pytest.mark.asyncio
async def test_delete_hotel_as_alumni_is_forbidden(client, alumni_headers, hotel, session_maker):
    await client.get("/api/hotels/public")

    response = await client.delete(f"/api/admin/hotels/{hotel.id}", headers=alumni_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Unauthorized. Admin privileges required."}
    assert page_cache.get(ACCOMMODATION_PAGE) is not None
    assert await _hotel_count(session_maker) == 1

@pytest.mark.asyncio
async def test_delete_missing_hotel_is_a_no_op(client, admin_headers):
    response = await client.delete("/api/admin/hotels/does-not-exist", headers=admin_headers)
    assert response.status_code == 200

@pytest.mark.asyncio
async def test_list_hotels_store_failure(client, monkeypatch):
    async def failing(db):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(crud_hotel, "list_hotels", failing)
    response = await client.get("/api/hotels/public")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch hotels"}
