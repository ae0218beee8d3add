from __future__ import annotations

from fastapi.testclient import TestClient


def test_user_crud(client: TestClient) -> None:
    resp = client.post("/users", data={"id": "7", "name": "Ann", "max_tasks_per_day": "3"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "User created successfully"
    assert resp.json()["user"]["id"] == 7

    resp = client.get("/users/7")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Ann"
    assert resp.json()["max_tasks_per_day"] == 3

    resp = client.put("/users/7", data={"name": "Annie"})
    assert resp.status_code == 200
    assert resp.json()["user"]["name"] == "Annie"
    assert resp.json()["user"]["max_tasks_per_day"] == 3

    resp = client.put("/users/7", data={"max_tasks_per_day": "0"})
    assert resp.json()["user"]["max_tasks_per_day"] == 0

    assert [u["id"] for u in client.get("/users").json()] == [7]

    resp = client.delete("/users/7")
    assert resp.status_code == 200
    assert resp.json()["message"] == "User deleted successfully"

    resp = client.get("/users/7")
    assert resp.status_code == 400
    assert resp.json() == {"detail": "User ID not found"}


def test_create_user_validation(client: TestClient) -> None:
    resp = client.post("/users", data={"id": "x", "name": "A", "max_tasks_per_day": "1"})
    assert resp.json() == {"detail": "Invalid user id"}

    resp = client.post("/users", data={"id": "1", "name": " ", "max_tasks_per_day": "1"})
    assert resp.json() == {"detail": "Name cannot be empty"}

    resp = client.post("/users", data={"id": "1", "name": "A", "max_tasks_per_day": "-1"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "max_tasks_per_day must be >= 0"}

    resp = client.post("/users", data={"id": "1", "name": "A"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid max_tasks_per_day"}

    assert client.get("/users").json() == []


def test_duplicate_user_rejected(client: TestClient) -> None:
    client.post("/users", data={"id": "1", "name": "A", "max_tasks_per_day": "1"})
    resp = client.post("/users", data={"id": "1", "name": "B", "max_tasks_per_day": "5"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "User already exists"}
    assert client.get("/users/1").json()["name"] == "A"


def test_update_unknown_user(client: TestClient) -> None:
    resp = client.put("/users/5", data={"name": "ghost"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "User ID not found"}


def test_delete_user_cascades_to_tasks(client: TestClient) -> None:
    client.post("/users", data={"id": "1", "name": "A", "max_tasks_per_day": "5"})
    client.post("/users", data={"id": "2", "name": "B", "max_tasks_per_day": "5"})
    client.post("/users/1/tasks", data={"task": "one"})
    client.post("/users/1/tasks", data={"task": "two"})
    client.post("/users/2/tasks", data={"task": "keep"})

    resp = client.delete("/users/1")
    assert resp.status_code == 200
    assert resp.json()["deleted"] == 2

    assert client.get("/users/1/tasks").json() == []
    assert len(client.get("/users/2/tasks").json()) == 1
    assert client.post("/users/1/tasks", data={"task": "again"}).json() == {"detail": "User ID not found"}


def test_quota_endpoint(client: TestClient) -> None:
    client.post("/users", data={"id": "1", "name": "A", "max_tasks_per_day": "2"})
    client.post("/users/1/tasks", data={"task": "one"})

    resp = client.get("/users/1/quota")
    assert resp.status_code == 200
    assert resp.json() == {
        "user_id": 1,
        "day": "2024-03-14",
        "max_tasks_per_day": 2,
        "used_today": 1,
        "remaining": 1,
    }

    assert client.get("/users/9/quota").status_code == 400


def test_out_of_range_user_fields_400(client: TestClient) -> None:
    huge = "99999999999999999999"

    resp = client.post("/users", data={"id": huge, "name": "A", "max_tasks_per_day": "1"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid user id"}

    resp = client.post("/users", data={"id": "1", "name": "A", "max_tasks_per_day": huge})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid max_tasks_per_day"}

    # The limit column is a 32-bit INTEGER.
    resp = client.post("/users", data={"id": "1", "name": "A", "max_tasks_per_day": str(2**31)})
    assert resp.json() == {"detail": "Invalid max_tasks_per_day"}

    resp = client.get(f"/users/{huge}/quota")
    assert resp.json() == {"detail": "Invalid user id"}

    assert client.get("/users").json() == []
