import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_announcement_defaults_when_absent(client: AsyncClient, admin_headers) -> None:
    response = await client.get("/api/announcements/current", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"title": "", "message": "", "active": False}


@pytest.mark.asyncio
async def test_save_and_clear_announcement(client: AsyncClient, admin_headers, create_student, student_headers) -> None:
    response = await client.post(
        "/api/announcements", json={"title": "Holiday", "message": "No lessons Friday", "active": True}, headers=admin_headers
    )
    assert response.status_code == 200
    announcement = response.json()["announcement"]
    assert announcement["title"] == "Holiday"
    assert announcement["active"] is True
    assert announcement["updatedAt"].endswith("Z")

    student = await create_student()
    current = await client.get("/api/announcements/current", headers=await student_headers(student["id"]))
    assert current.json() == announcement

    cleared = await client.delete("/api/announcements/current", headers=admin_headers)
    assert cleared.json() == {"success": True, "message": "Announcement cleared"}
    after = (await client.get("/api/announcements/current", headers=admin_headers)).json()
    assert (after["title"], after["message"], after["active"]) == ("", "", False)
    assert "updatedAt" in after


@pytest.mark.asyncio
async def test_announcement_fields_default(client: AsyncClient, admin_headers) -> None:
    response = await client.post("/api/announcements", json={"title": "Only a title"}, headers=admin_headers)
    announcement = response.json()["announcement"]
    assert announcement["message"] == ""
    assert announcement["active"] is False


@pytest.mark.asyncio
async def test_announcements_require_auth(client: AsyncClient) -> None:
    response = await client.get("/api/announcements/current")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_settings_default_and_update(client: AsyncClient, admin_headers) -> None:
    assert (await client.get("/api/settings", headers=admin_headers)).json() == {"isDarkMode": False}

    response = await client.put("/api/settings", json={"isDarkMode": True}, headers=admin_headers)
    assert response.json() == {"success": True, "settings": {"isDarkMode": True}}
    assert (await client.get("/api/settings", headers=admin_headers)).json() == {"isDarkMode": True}

    reset = await client.put("/api/settings", json={}, headers=admin_headers)
    assert reset.json()["settings"] == {"isDarkMode": False}


@pytest.mark.asyncio
async def test_students_cannot_change_settings(client: AsyncClient, create_student, student_headers) -> None:
    student = await create_student()
    response = await client.put("/api/settings", json={"isDarkMode": True}, headers=await student_headers(student["id"]))
    assert response.status_code == 403
