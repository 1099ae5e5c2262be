"""Tests for the profile document endpoints and body composition."""

import pytest
from httpx import AsyncClient

PROFILE = {
    "name": "Sam",
    "goal_type": "muscleGain",
    "current_weight": 80,
    "height_cm": 180,
    "age": 30,
    "gender": "male",
    "lifestyle_activity": "Active",
    "waist": 85,
    "neck": 38,
    "training_logs": [
        {
            "id": "t1",
            "date": "2025-06-01",
            "status": "Completed",
            "exercises": [
                {"name": "Squat", "sets": [{"performed_reps": 5, "performed_weight": 100, "completed": True}]}
            ],
        }
    ],
    "supplements": [{"id": "s1", "name": "Creatine"}],
}


@pytest.mark.asyncio
async def test_get_profile_empty(client: AsyncClient, test_user):
    user_id, email = test_user
    resp = await client.get(f"/api/v1/users/{user_id}/profile")
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == str(user_id)
    assert data["email"] == email
    assert data["name"] == "Test Athlete"
    assert data["training_logs"] == []
    assert data["supplements"] == []


@pytest.mark.asyncio
async def test_put_profile_replaces_document(client: AsyncClient, test_user):
    user_id, email = test_user
    resp = await client.put(f"/api/v1/users/{user_id}/profile", json={**PROFILE, "email": "other@x.com"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["email"] == email
    assert data["name"] == "Sam"
    assert data["training_logs"][0]["exercises"][0]["sets"][0]["performed_weight"] == 100

    resp = await client.put(f"/api/v1/users/{user_id}/profile", json={"goal_type": "fatLoss"})
    assert resp.status_code == 200
    resp = await client.get(f"/api/v1/users/{user_id}/profile")
    data = resp.json()
    assert data["goal_type"] == "fatLoss"
    assert data["training_logs"] == []


@pytest.mark.asyncio
async def test_put_profile_validation(client: AsyncClient, test_user):
    user_id, _ = test_user
    resp = await client.put(f"/api/v1/users/{user_id}/profile", json={"current_weight": -5})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_profile_unknown_user(client: AsyncClient):
    resp = await client.get("/api/v1/users/42/profile")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_body_composition(client: AsyncClient, test_user):
    user_id, _ = test_user
    resp = await client.get(f"/api/v1/users/{user_id}/body-composition")
    assert resp.status_code == 200
    assert resp.json()["bmr"] == 0

    await client.put(f"/api/v1/users/{user_id}/profile", json=PROFILE)
    resp = await client.get(f"/api/v1/users/{user_id}/body-composition")
    assert resp.status_code == 200
    data = resp.json()
    assert data["bmr"] == 1780
    assert data["tdee"] == 2759
    assert data["body_fat"] == pytest.approx(16.1)


@pytest.mark.asyncio
async def test_put_profile_rejects_out_of_range_nutrition(client: AsyncClient, test_user):
    user_id, _ = test_user
    day = {"id": "n1", "date": "2025-06-01", "total_consumed_macros": {"calories": 1e308}}
    resp = await client.put(f"/api/v1/users/{user_id}/profile", json={"nutrition_logs": [day]})
    assert resp.status_code == 422

    day["total_consumed_macros"] = {"calories": -100}
    resp = await client.put(f"/api/v1/users/{user_id}/profile", json={"nutrition_logs": [day]})
    assert resp.status_code == 422
