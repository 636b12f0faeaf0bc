import pytest
from sqlalchemy.exc import SQLAlchemyError

from reunion.core.security import create_session_token
from reunion.crud import user as crud_user
from reunion.models.enums import UserRole

@pytest.mark.asyncio
async def test_read_own_profile(client, alumni_user, alumni_headers):
    response = await client.get("/api/me", headers=alumni_headers)
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["user"] == {"id": alumni_user.id, "email": alumni_user.email, "role": "alumni"}
    assert data["profile"]["fullName"] == "Priya Sharma"
    assert data["profile"]["userId"] == alumni_user.id
    assert data["profile"]["rsvpAdults"] == 0
    assert data["profile"]["hotelSelectionId"] is None

@pytest.mark.asyncio
async def test_profile_reflects_rsvp(client, alumni_headers, hotel):
    await client.post(
        "/api/events/e1/rsvp",
        json={"adults": 2, "kids": 3, "hotelId": hotel.id},
        headers=alumni_headers
    )
    profile = (await client.get("/api/me", headers=alumni_headers)).json()["data"]["profile"]
    assert profile["rsvpAdults"] == 2
    assert profile["rsvpKids"] == 3
    assert profile["hotelSelectionId"] == hotel.id

@pytest.mark.asyncio
async def test_account_without_profile(client, admin_user, admin_headers):
    response = await client.get("/api/me", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["role"] == "admin"
    assert data["profile"] is None

@pytest.mark.asyncio
async def test_read_profile_requires_session(client):
    response = await client.get("/api/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}

@pytest.mark.asyncio
async def test_session_for_removed_account(client):
    token = create_session_token("gone-id", "gone@gmail.com", UserRole.ALUMNI)
    response = await client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}

@pytest.mark.asyncio
async def test_read_profile_store_error(client, alumni_headers, monkeypatch):
    async def failing(*args, **kwargs):
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(crud_user, "get_user_by_email", failing)
    response = await client.get("/api/me", headers=alumni_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch profile"}
