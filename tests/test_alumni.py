import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from reunion.crud import profile as crud_profile
from reunion.models import AlumniProfile

async def _profile(session_maker, email: str) -> AlumniProfile:
    async with session_maker() as session:
        result = await session.execute(select(AlumniProfile).where(AlumniProfile.email == email))
        return result.scalar_one()

@pytest_asyncio.fixture
async def directory(db_session, alumni_user, other_user):
    db_session.add_all([
        AlumniProfile(full_name="Anita Rao", email="anita@gmail.com", city="Pune", workplace="Infosys"),
        AlumniProfile(full_name="Zubin Mehta", email="zubin@gmail.com", city="Mumbai"),
        AlumniProfile(full_name="Deepak 100% Kumar", email="deepak@gmail.com", city="Delhi"),
    ])
    await db_session.commit()

@pytest.mark.asyncio
async def test_update_own_profile(client, alumni_user, alumni_headers, session_maker):
    response = await client.put(
        "/api/user/profile",
        json={
            "currentDesignation": "Staff Engineer",
            "workplace": "Acme Corp",
            "country": "India",
            "state": "Karnataka",
            "city": "Bengaluru",
            "profilePhotoUrl": "http://test/files/uploads/profiles/me.png"
        },
        headers=alumni_headers
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Profile updated successfully"}

    profile = await _profile(session_maker, alumni_user.email)
    assert profile.current_designation == "Staff Engineer"
    assert profile.workplace == "Acme Corp"
    assert (profile.country, profile.state, profile.city) == ("India", "Karnataka", "Bengaluru")
    assert profile.profile_photo_url.endswith("/me.png")
    assert profile.full_name == "Priya Sharma"

@pytest.mark.asyncio
async def test_update_only_touches_sent_fields(client, alumni_user, alumni_headers, hotel, session_maker):
    await client.post("/api/events/e1/rsvp", json={"adults": 2, "hotelId": hotel.id}, headers=alumni_headers)
    await client.put("/api/user/profile", json={"city": "Mysuru", "workplace": "Acme"}, headers=alumni_headers)

    response = await client.put(
        "/api/user/profile",
        json={"fullName": "  Priya S. Sharma ", "workplace": None, "city": ""},
        headers=alumni_headers
    )
    assert response.status_code == 200

    profile = await _profile(session_maker, alumni_user.email)
    assert profile.full_name == "Priya S. Sharma"
    assert profile.workplace is None
    assert profile.city is None
    assert profile.rsvp_adults == 2
    assert profile.hotel_selection_id == hotel.id

@pytest.mark.asyncio
async def test_update_without_changes(client, alumni_headers):
    response = await client.put("/api/user/profile", json={}, headers=alumni_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "No changes detected"}

@pytest.mark.asyncio
async def test_update_ignores_rsvp_fields(client, alumni_user, alumni_headers, session_maker):
    response = await client.put("/api/user/profile", json={"rsvpAdults": 9}, headers=alumni_headers)
    assert response.json() == {"message": "No changes detected"}

    profile = await _profile(session_maker, alumni_user.email)
    assert profile.rsvp_adults == 0

@pytest.mark.asyncio
async def test_update_rejects_bad_name(client, alumni_user, alumni_headers, session_maker):
    for name in (None, "P", " "):
        response = await client.put("/api/user/profile", json={"fullName": name}, headers=alumni_headers)
        assert response.status_code == 400
        assert "fullName" in response.json()["error"]

    profile = await _profile(session_maker, alumni_user.email)
    assert profile.full_name == "Priya Sharma"

@pytest.mark.asyncio
async def test_update_requires_session(client):
    response = await client.put("/api/user/profile", json={"city": "Pune"})
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}

@pytest.mark.asyncio
async def test_update_account_without_profile(client, admin_headers):
    response = await client.put("/api/user/profile", json={"city": "Pune"}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Profile not found"}

@pytest.mark.asyncio
async def test_update_store_error(client, alumni_headers, monkeypatch):
    async def failing(*args, **kwargs):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(crud_profile, "update_profile_by_email", failing)
    response = await client.put("/api/user/profile", json={"city": "Pune"}, headers=alumni_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}

@pytest.mark.asyncio
async def test_directory_ordered_by_name(client, alumni_headers, directory):
    response = await client.get("/api/alumni", headers=alumni_headers)
    assert response.status_code == 200
    names = [entry["fullName"] for entry in response.json()["data"]]
    assert names == ["Anita Rao", "Deepak 100% Kumar", "Priya Sharma", "Rahul Verma", "Zubin Mehta"]

@pytest.mark.asyncio
async def test_directory_entry_shape(client, alumni_headers, directory):
    response = await client.get("/api/alumni", params={"search": "Anita"}, headers=alumni_headers)
    (entry,) = response.json()["data"]
    assert entry["city"] == "Pune"
    assert entry["workplace"] == "Infosys"
    assert entry["rsvpAdults"] == 0
    assert "email" not in entry
    assert "specialReqs" not in entry

@pytest.mark.asyncio
async def test_directory_search(client, alumni_headers, directory):
    async def names(search):
        response = await client.get("/api/alumni", params={"search": search}, headers=alumni_headers)
        return [entry["fullName"] for entry in response.json()["data"]]

    assert await names("mumbai") == ["Zubin Mehta"]
    assert await names("infosys") == ["Anita Rao"]
    assert await names("Sharma") == ["Priya Sharma"]
    assert await names("100%") == ["Deepak 100% Kumar"]
    assert await names("%") == ["Deepak 100% Kumar"]
    assert await names("nobody") == []

@pytest.mark.asyncio
async def test_directory_paging(client, alumni_headers, directory):
    first = await client.get("/api/alumni", params={"limit": 2}, headers=alumni_headers)
    second = await client.get("/api/alumni", params={"limit": 2, "offset": 2}, headers=alumni_headers)
    assert [e["fullName"] for e in first.json()["data"]] == ["Anita Rao", "Deepak 100% Kumar"]
    assert [e["fullName"] for e in second.json()["data"]] == ["Priya Sharma", "Rahul Verma"]

@pytest.mark.asyncio
async def test_directory_limit_is_capped(client, alumni_headers, db_session):
    db_session.add_all([
        AlumniProfile(full_name=f"Member {i:03d}", email=f"member{i}@gmail.com")
        for i in range(60)
    ])
    await db_session.commit()

    response = await client.get("/api/alumni", params={"limit": 500}, headers=alumni_headers)
    assert response.status_code == 200
    assert len(response.json()["data"]) == 50

@pytest.mark.asyncio
async def test_directory_rejects_bad_paging(client, alumni_headers):
    response = await client.get("/api/alumni", params={"limit": 0}, headers=alumni_headers)
    assert response.status_code == 400
    assert "limit" in response.json()["error"]

    response = await client.get("/api/alumni", params={"offset": -1}, headers=alumni_headers)
    assert response.status_code == 400
    assert "offset" in response.json()["error"]

@pytest.mark.asyncio
async def test_directory_requires_session(client):
    response = await client.get("/api/alumni")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}

@pytest.mark.asyncio
async def test_directory_store_error(client, alumni_headers, monkeypatch):
    async def failing(*args, **kwargs):
        raise SQLAlchemyError("no such table: alumni_profiles")

    monkeypatch.setattr(crud_profile, "list_alumni", failing)
    response = await client.get("/api/alumni", headers=alumni_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch alumni"}
