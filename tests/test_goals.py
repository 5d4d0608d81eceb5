# tests/test_goals.py
from conftest import ALICE

VACATION = {"email": ALICE, "goalName": "Vacation", "targetAmount": "1000", "targetDate": "2025-12-01"}


def test_create_goal_applies_defaults(client, alice):
    resp = client.post("/goals/create", json=VACATION)
    assert resp.status_code == 201
    assert resp.json()["message"] == "Goal created"

    goal = client.post("/goals/get", json={"email": ALICE, "goalName": "Vacation"}).json()
    assert goal["targetAmount"] == 1000
    assert isinstance(goal["targetAmount"], int)
    assert goal["currentAmount"] == 0
    assert goal["status"] == "In Progress"
    assert goal["targetDate"].startswith("2025-12-01")
    assert goal["createdAt"] == goal["updatedAt"]


def test_create_goal_keeps_supplied_status_and_progress(client, alice):
    client.post("/goals/create", json={**VACATION, "currentAmount": "150", "status": "Paused"})
    goal = client.post("/goals/get", json={"email": ALICE, "goalName": "Vacation"}).json()
    assert goal["currentAmount"] == 150
    assert goal["status"] == "Paused"


def test_duplicate_goal_name_conflicts(client, alice):
    client.post("/goals/create", json=VACATION)
    resp = client.post("/goals/create", json=VACATION)
    assert resp.status_code == 400
    assert resp.json() == {"error": 'A goal named "Vacation" already exists.'}


def test_create_goal_missing_fields(client, alice):
    resp = client.post("/goals/create", json={"email": ALICE, "goalName": "Vacation"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields: targetAmount, targetDate."}


def test_rename_goal(client, alice):
    client.post("/goals/create", json=VACATION)
    resp = client.post("/goals/update", json={"email": ALICE, "goalName": "Vacation", "newGoalName": "Japan Trip"})
    assert resp.status_code == 200

    renamed = client.post("/goals/get", json={"email": ALICE, "goalName": "Japan Trip"}).json()
    assert renamed["targetAmount"] == 1000
    assert client.post("/goals/get", json={"email": ALICE, "goalName": "Vacation"}).status_code == 404


def test_rename_goal_onto_existing_name_conflicts(client, alice):
    client.post("/goals/create", json=VACATION)
    client.post("/goals/create", json={**VACATION, "goalName": "Car"})
    before = client.post("/goals/get", json={"email": ALICE, "goalName": "Vacation"}).json()

    resp = client.post("/goals/update", json={"email": ALICE, "goalName": "Vacation", "newGoalName": "Car", "currentAmount": 5})
    assert resp.status_code == 400
    assert resp.json() == {"error": 'A goal named "Car" already exists.'}
    assert client.post("/goals/get", json={"email": ALICE, "goalName": "Vacation"}).json() == before


def test_update_goal_progress(client, alice):
    client.post("/goals/create", json=VACATION)
    before = client.post("/goals/get", json={"email": ALICE, "goalName": "Vacation"}).json()

    client.post("/goals/update", json={"email": ALICE, "goalName": "Vacation", "currentAmount": "300"})
    after = client.post("/goals/get", json={"email": ALICE, "goalName": "Vacation"}).json()

    assert after["currentAmount"] == 300
    assert after["targetAmount"] == before["targetAmount"]
    assert after["status"] == before["status"]
    assert after["updatedAt"] > before["updatedAt"]


def test_list_goals_by_status(client, alice):
    client.post("/goals/create", json=VACATION)
    client.post("/goals/create", json={**VACATION, "goalName": "Car", "status": "Completed"})
    client.post("/goals/create", json={**VACATION, "goalName": "House"})

    assert len(client.post("/goals/list", json={"email": ALICE}).json()) == 3

    in_progress = client.post("/goals/list-by-status", json={"email": ALICE, "status": "In Progress"}).json()
    assert sorted(g["goalName"] for g in in_progress) == ["House", "Vacation"]


def test_delete_goal(client, alice):
    client.post("/goals/create", json=VACATION)
    resp = client.post("/goals/delete", json={"email": ALICE, "goalName": "Vacation"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Goal deleted"}

    resp = client.post("/goals/delete", json={"email": ALICE, "goalName": "Vacation"})
    assert resp.status_code == 404
    assert resp.json() == {"error": 'No goal found named "Vacation".'}
