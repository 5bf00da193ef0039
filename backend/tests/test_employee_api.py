"""Integration tests for the employee API."""
import pytest
from httpx import AsyncClient

ANA = {
    "name": "Ana Ruiz",
    "email": "ana@x.com",
    "designation": "Engineer",
    "department": "R&D",
    "salary": 90000,
    "date_of_joining": "2024-01-15",
}


@pytest.mark.asyncio
async def test_create_and_list_employee(client: AsyncClient, login_as) -> None:
    headers = await login_as()

    create_response = await client.post("/employees/", json=ANA, headers=headers)
    assert create_response.status_code == 201
    created = create_response.json()
    assert created["name"] == "Ana Ruiz"
    assert created["last_day_of_working"] is None
    me = (await client.get("/auth/me", headers=headers)).json()
    assert created["user_id"] == me["id"]

    list_response = await client.get("/employees/", headers=headers)
    assert list_response.status_code == 200
    employees = list_response.json()
    assert [e["id"] for e in employees] == [created["id"]]


@pytest.mark.asyncio
async def test_list_is_newest_first(client: AsyncClient, login_as) -> None:
    headers = await login_as()
    ids = []
    for name in ("First", "Second", "Third"):
        response = await client.post("/employees/", json={**ANA, "name": name}, headers=headers)
        ids.append(response.json()["id"])

    listed = (await client.get("/employees/", headers=headers)).json()
    assert [e["id"] for e in listed] == list(reversed(ids))


@pytest.mark.asyncio
async def test_update_overwrites_fields_and_keeps_owner(client: AsyncClient, login_as) -> None:
    headers = await login_as()
    created = (await client.post("/employees/", json=ANA, headers=headers)).json()

    response = await client.put(
        f"/employees/{created['id']}",
        json={**ANA, "last_day_of_working": "2024-06-01", "user_id": created["user_id"]},
        headers=headers,
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["id"] == created["id"]
    assert updated["last_day_of_working"] == "2024-06-01"
    assert updated["user_id"] == created["user_id"]
    assert len((await client.get("/employees/", headers=headers)).json()) == 1


@pytest.mark.asyncio
async def test_foreign_owner_is_rejected(client: AsyncClient, login_as) -> None:
    headers = await login_as()
    response = await client.post("/employees/", json={**ANA, "user_id": 9999}, headers=headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_removes_only_target(client: AsyncClient, login_as) -> None:
    headers = await login_as()
    keep = (await client.post("/employees/", json={**ANA, "name": "Keep"}, headers=headers)).json()
    drop = (await client.post("/employees/", json={**ANA, "name": "Drop"}, headers=headers)).json()

    response = await client.delete(f"/employees/{drop['id']}", headers=headers)
    assert response.status_code == 204

    listed = (await client.get("/employees/", headers=headers)).json()
    assert [e["id"] for e in listed] == [keep["id"]]
    missing = await client.get(f"/employees/{drop['id']}", headers=headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_other_accounts_rows_are_invisible(client: AsyncClient, login_as) -> None:
    acme = await login_as("owner", "acme")
    globex = await login_as("other", "globex")
    created = (await client.post("/employees/", json=ANA, headers=acme)).json()

    assert (await client.get("/employees/", headers=globex)).json() == []
    assert (await client.get(f"/employees/{created['id']}", headers=globex)).status_code == 404
    assert (await client.delete(f"/employees/{created['id']}", headers=globex)).status_code == 404


@pytest.mark.asyncio
async def test_missing_required_field_and_negative_salary(client: AsyncClient, login_as) -> None:
    headers = await login_as()
    without_name = {k: v for k, v in ANA.items() if k != "name"}
    assert (await client.post("/employees/", json=without_name, headers=headers)).status_code == 422
    negative = await client.post("/employees/", json={**ANA, "salary": -1}, headers=headers)
    assert negative.status_code == 422


@pytest.mark.asyncio
async def test_employees_require_token(client: AsyncClient) -> None:
    assert (await client.get("/employees/")).status_code == 401
    assert (await client.post("/employees/", json=ANA)).status_code == 401
