# tests/test_trophies.py
from conftest import ALICE
from trophies import DEFAULT_TROPHIES, seed_default_trophies


def test_create_trophy_defaults(client):
    resp = client.post("/trophies/create", json={"trophyName": "saver"})
    assert resp.status_code == 201
    assert resp.json()["message"] == "Trophy created"
    assert resp.json()["trophyName"] == "saver"

    trophy = client.post("/trophies/get", json={"trophyName": "saver"}).json()
    assert trophy["displayName"] == "saver"
    assert trophy["description"] == ""
    assert trophy["points"] == 0


def test_create_trophy_coerces_points(client):
    client.post("/trophies/create", json={"trophyName": "saver", "displayName": "Super Saver", "points": "50"})
    trophy = client.post("/trophies/get", json={"trophyName": "saver"}).json()
    assert trophy["displayName"] == "Super Saver"
    assert trophy["points"] == 50


def test_duplicate_trophy_conflicts(client):
    client.post("/trophies/create", json={"trophyName": "saver"})
    resp = client.post("/trophies/create", json={"trophyName": "saver"})
    assert resp.status_code == 400


def test_trophy_requires_name(client):
    resp = client.post("/trophies/create", json={"points": 5})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields: trophyName."}


def test_update_and_rename_trophy(client):
    client.post("/trophies/create", json={"trophyName": "saver", "points": 5})
    client.post("/trophies/create", json={"trophyName": "spender"})

    clash = client.post("/trophies/update", json={"trophyName": "saver", "newTrophyName": "spender"})
    assert clash.status_code == 400

    resp = client.post("/trophies/update", json={"trophyName": "saver", "newTrophyName": "big_saver", "points": 75})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Trophy updated", "oldName": "saver", "newName": "big_saver"}

    trophy = client.post("/trophies/get", json={"trophyName": "big_saver"}).json()
    assert trophy["points"] == 75
    assert trophy["displayName"] == "saver"


def test_list_and_delete_trophies(client):
    client.post("/trophies/create", json={"trophyName": "a"})
    client.post("/trophies/create", json={"trophyName": "b"})
    assert len(client.post("/trophies/list").json()) == 2

    resp = client.post("/trophies/delete", json={"trophyName": "a"})
    assert resp.json() == {"message": "Trophy deleted", "trophyName": "a"}
    assert [t["trophyName"] for t in client.post("/trophies/list").json()] == ["b"]
    assert client.post("/trophies/delete", json={"trophyName": "a"}).status_code == 404


def test_earn_missing_trophy_is_404(client, alice):
    resp = client.post("/usersTrophies/earn", json={"email": ALICE, "trophyName": "ghost"})
    assert resp.status_code == 404
    assert resp.json() == {"error": 'No trophy found with name "ghost".'}


def test_earn_twice_conflicts(client, alice):
    client.post("/trophies/create", json={"trophyName": "saver"})
    first = client.post("/usersTrophies/earn", json={"email": ALICE, "trophyName": "saver"})
    assert first.status_code == 201
    assert first.json() == {"message": "User trophy earned", "trophyName": "saver", "userId": alice}

    second = client.post("/usersTrophies/earn", json={"email": ALICE, "trophyName": "saver"})
    assert second.status_code == 400
    assert second.json() == {"error": 'User already has trophy "saver".'}


def test_list_user_trophies_joins_catalog(client, alice):
    client.post("/trophies/create", json={"trophyName": "saver", "displayName": "Saver", "points": 10})
    client.post("/usersTrophies/earn", json={"email": ALICE, "trophyName": "saver"})

    earned = client.post("/usersTrophies/list", json={"email": ALICE}).json()
    assert len(earned) == 1
    entry = earned[0]
    assert entry["userId"] == alice
    assert entry["trophyName"] == "saver"
    assert entry["displayName"] == "Saver"
    assert entry["points"] == 10
    assert "earnedAt" in entry and "userTrophyId" in entry


def test_deleted_trophy_drops_out_of_user_list(client, alice):
    client.post("/trophies/create", json={"trophyName": "saver"})
    client.post("/trophies/create", json={"trophyName": "tracker"})
    client.post("/usersTrophies/earn", json={"email": ALICE, "trophyName": "saver"})
    client.post("/usersTrophies/earn", json={"email": ALICE, "trophyName": "tracker"})

    client.post("/trophies/delete", json={"trophyName": "saver"})

    resp = client.post("/usersTrophies/list", json={"email": ALICE})
    assert resp.status_code == 200
    assert [t["trophyName"] for t in resp.json()] == ["tracker"]


def test_list_user_trophies_empty(client, alice):
    assert client.post("/usersTrophies/list", json={"email": ALICE}).json() == []


def test_remove_user_trophy(client, alice):
    client.post("/trophies/create", json={"trophyName": "saver"})
    client.post("/usersTrophies/earn", json={"email": ALICE, "trophyName": "saver"})

    resp = client.post("/usersTrophies/delete", json={"email": ALICE, "trophyName": "saver"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "User trophy removed", "trophyName": "saver"}

    again = client.post("/usersTrophies/delete", json={"email": ALICE, "trophyName": "saver"})
    assert again.status_code == 404
    assert again.json() == {"error": 'User does not have trophy "saver".'}


def test_seed_default_trophies_is_idempotent(db, clock):
    created = seed_default_trophies(db)
    assert created == [t["trophyName"] for t in DEFAULT_TROPHIES]
    assert seed_default_trophies(db) == []
    assert len(db.docs("trophies")) == len(DEFAULT_TROPHIES)


def test_null_points_on_update_keeps_stored_points(client):
    client.post("/trophies/create", json={"trophyName": "saver", "points": 25})

    resp = client.post("/trophies/update", json={"trophyName": "saver", "points": None, "description": ""})
    assert resp.status_code == 200

    trophy = client.post("/trophies/get", json={"trophyName": "saver"}).json()
    assert trophy["points"] == 25
    assert trophy["description"] == ""
