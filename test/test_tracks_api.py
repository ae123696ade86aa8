from datetime import datetime, timedelta

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from catalog.query_builder import MAX_PAGE
from catalog.validation import current_year
from config import settings
from database.connection import TRACKS
from main import create_app

MISSING_ID = str(ObjectId())


# =============================================================================
# Create
# =============================================================================


def test_create_stamps_owner_and_defaults(alice, create_track):
    client, profile = alice
    track = create_track(client, title="X", artist="Y")
    assert ObjectId.is_valid(track["id"])
    assert track["createdBy"] == profile["id"]
    assert track["genre"] == "Other"
    assert track["durationSeconds"] == 0
    assert track["releaseYear"] == current_year()
    assert track["album"] == "" and track["coverUrl"] == ""
    assert track["createdAt"]


def test_create_ignores_client_supplied_owner(alice, bob, create_track):
    client, profile = alice
    _, other = bob
    track = create_track(client, createdBy=other["id"])
    assert track["createdBy"] == profile["id"]


def test_create_coerces_numbers(alice, create_track):
    client, _ = alice
    track = create_track(client, durationSeconds="215", releaseYear="1991", genre=" Rock ")
    assert (track["durationSeconds"], track["releaseYear"], track["genre"]) == (215, 1991, "Rock")
    track = create_track(client, durationSeconds="long", releaseYear=None)
    assert (track["durationSeconds"], track["releaseYear"]) == (0, current_year())


def test_create_requires_login(anon_client, db):
    resp = anon_client.post("/api/tracks", json={"title": "X", "artist": "Y"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized. Please login first."}
    assert db[TRACKS].count_documents({}) == 0


@pytest.mark.parametrize("payload", [
    {"title": "X"},
    {"artist": "Y"},
    {"title": "", "artist": "Y"},
    {"title": "T" * 201, "artist": "Y"},
    {"title": "X", "artist": "A" * 101},
])
def test_create_validation(alice, payload):
    client, _ = alice
    resp = client.post("/api/tracks", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()


# =============================================================================
# Get
# =============================================================================


def test_get_track(alice, anon_client, create_track):
    client, _ = alice
    track = create_track(client, title="Purple Rain", artist="Prince")
    resp = anon_client.get(f"/api/tracks/{track['id']}")
    assert resp.status_code == 200
    assert resp.json()["title"] == "Purple Rain"


def test_get_invalid_and_missing_ids(anon_client):
    resp = anon_client.get("/api/tracks/not-an-id")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid ID"}
    resp = anon_client.get(f"/api/tracks/{MISSING_ID}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Track not found"}


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_malformed_ids_never_reach_storage(alice, monkeypatch, method):
    client, _ = alice

    def boom(*args, **kwargs):
        raise AssertionError("storage was queried")

    monkeypatch.setattr("catalog.controllers.find_track", boom)
    kwargs = {"json": {"title": "New"}} if method == "put" else {}
    resp = getattr(client, method)("/api/tracks/12345", **kwargs)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid ID"}


# =============================================================================
# Update
# =============================================================================


def test_owner_updates_only_given_fields(alice, create_track, db):
    client, profile = alice
    track = create_track(client, title="Old", artist="Band", album="First")
    resp = client.put(f"/api/tracks/{track['id']}", json={"title": "New", "createdBy": "someone-else"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "Track updated successfully"}

    stored = db[TRACKS].find_one({"_id": ObjectId(track["id"])})
    assert stored["title"] == "New"
    assert stored["album"] == "First"
    assert str(stored["createdBy"]) == profile["id"]
    assert stored["updatedAt"] >= stored["createdAt"]


def test_other_user_cannot_update_or_delete(alice, bob, create_track, db):
    owner, _ = alice
    intruder, _ = bob
    track = create_track(owner, title="Mine")

    resp = intruder.put(f"/api/tracks/{track['id']}", json={"title": "Stolen"})
    assert resp.status_code == 403
    assert resp.json() == {"error": "Forbidden. You can only modify your own data."}
    resp = intruder.delete(f"/api/tracks/{track['id']}")
    assert resp.status_code == 403

    assert db[TRACKS].find_one({"_id": ObjectId(track["id"])})["title"] == "Mine"


def test_update_requires_login(alice, anon_client, create_track):
    client, _ = alice
    track = create_track(client)
    resp = anon_client.put(f"/api/tracks/{track['id']}", json={"title": "New"})
    assert resp.status_code == 401


def test_missing_track_is_404_before_authorization(anon_client):
    assert anon_client.put(f"/api/tracks/{MISSING_ID}", json={"title": "New"}).status_code == 404
    assert anon_client.delete(f"/api/tracks/{MISSING_ID}").status_code == 404


def test_update_validates_present_fields(alice, create_track):
    client, _ = alice
    track = create_track(client)
    resp = client.put(f"/api/tracks/{track['id']}", json={"title": "   "})
    assert resp.status_code == 400


def test_admin_updates_foreign_track(alice, admin, create_track, db):
    owner, profile = alice
    admin_client, _ = admin
    track = create_track(owner)
    resp = admin_client.put(f"/api/tracks/{track['id']}", json={"genre": "Jazz"})
    assert resp.status_code == 200
    stored = db[TRACKS].find_one({"_id": ObjectId(track["id"])})
    assert stored["genre"] == "Jazz"
    assert str(stored["createdBy"]) == profile["id"]


def test_update_of_track_deleted_midway_is_404(alice, create_track, db, monkeypatch):
    client, _ = alice
    track = create_track(client)

    import catalog.controllers as controllers
    real_update = controllers.update_track

    def delete_then_update(db_, track_id, owner_id, changes):
        db_[TRACKS].delete_one({"_id": track_id})
        return real_update(db_, track_id, owner_id, changes)

    monkeypatch.setattr(controllers, "update_track", delete_then_update)
    resp = client.put(f"/api/tracks/{track['id']}", json={"title": "Late"})
    assert resp.status_code == 404


# =============================================================================
# Delete
# =============================================================================


def test_owner_deletes_track(alice, anon_client, create_track):
    client, _ = alice
    track = create_track(client)
    resp = client.delete(f"/api/tracks/{track['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Track deleted successfully"}
    assert anon_client.get(f"/api/tracks/{track['id']}").status_code == 404


def test_admin_deletes_foreign_track(alice, admin, create_track):
    owner, _ = alice
    admin_client, _ = admin
    track = create_track(owner)
    resp = admin_client.delete(f"/api/tracks/{track['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Track deleted successfully"}


# =============================================================================
# List
# =============================================================================


@pytest.fixture
def sample_tracks(alice, create_track):
    client, _ = alice
    rows = [
        ("Blinding Lights", "The Weeknd", "Pop"),
        ("Starboy", "The Weeknd ft. Daft Punk", "R&B"),
        ("Bohemian Rhapsody", "Queen", "Rock"),
        ("Hotel California", "Eagles", "Rock"),
        ("Get Lucky", "Daft Punk", "Electronic"),
        ("Another One Bites the Dust", "Queen", "Rock"),
        ("Wonderwall (Remastered)", "Oasis", "Rock"),
    ]
    return [create_track(client, title=t, artist=a, genre=g) for t, a, g in rows]


def test_list_is_public_with_pagination(anon_client, sample_tracks):
    resp = anon_client.get("/api/tracks")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["items"]) == 7
    assert body["pagination"] == {
        "page": 1, "limit": 10, "total": 7, "totalPages": 1, "hasNext": False, "hasPrev": False,
    }


def test_list_pages(anon_client, sample_tracks):
    first = anon_client.get("/api/tracks", params={"limit": 3, "sortBy": "title"}).json()
    last = anon_client.get("/api/tracks", params={"limit": 3, "page": 3, "sortBy": "title"}).json()
    assert len(first["items"]) == 3
    assert first["pagination"]["totalPages"] == 3
    assert first["pagination"]["hasNext"] and not first["pagination"]["hasPrev"]
    assert len(last["items"]) == 1
    assert not last["pagination"]["hasNext"] and last["pagination"]["hasPrev"]


def test_limit_is_clamped(anon_client, sample_tracks):
    assert anon_client.get("/api/tracks", params={"limit": 1000}).json()["pagination"]["limit"] == 50
    assert anon_client.get("/api/tracks", params={"limit": "lots"}).json()["pagination"]["limit"] == 10
    assert anon_client.get("/api/tracks", params={"page": 0}).json()["pagination"]["page"] == 1


def test_filters(anon_client, sample_tracks):
    by_artist = anon_client.get("/api/tracks", params={"artist": "weeknd"}).json()
    assert {t["title"] for t in by_artist["items"]} == {"Blinding Lights", "Starboy"}

    rock_queen = anon_client.get("/api/tracks", params={"genre": "Rock", "artist": "QUEEN"}).json()
    assert rock_queen["pagination"]["total"] == 2

    assert anon_client.get("/api/tracks", params={"genre": "rock"}).json()["pagination"]["total"] == 0

    parens = anon_client.get("/api/tracks", params={"title": "(remastered)"}).json()
    assert [t["artist"] for t in parens["items"]] == ["Oasis"]


def test_total_counts_filtered_set(anon_client, sample_tracks):
    body = anon_client.get("/api/tracks", params={"genre": "Rock", "limit": 2}).json()
    assert body["pagination"]["total"] == 4
    assert body["pagination"]["totalPages"] == 2
    assert len(body["items"]) == 2


def test_sort_by_title_and_artist(anon_client, sample_tracks):
    titles = [t["title"] for t in anon_client.get("/api/tracks", params={"sortBy": "title"}).json()["items"]]
    assert titles == sorted(titles)
    artists = [t["artist"] for t in anon_client.get("/api/tracks", params={"sortBy": "artist"}).json()["items"]]
    assert artists == sorted(artists)


def test_sort_by_date_is_newest_first(anon_client, db):
    base = datetime(2024, 1, 1)
    db[TRACKS].insert_many([
        {"title": f"T{i}", "artist": "A", "createdBy": ObjectId(), "createdAt": base + timedelta(days=i)}
        for i in range(3)
    ])
    titles = [t["title"] for t in anon_client.get("/api/tracks", params={"sortBy": "date"}).json()["items"]]
    assert titles == ["T2", "T1", "T0"]


def test_repeated_query_is_identical(anon_client, sample_tracks):
    params = {"genre": "Rock", "sortBy": "artist", "limit": 3, "page": 1}
    assert anon_client.get("/api/tracks", params=params).json() == anon_client.get("/api/tracks", params=params).json()


def test_projection_keeps_id_and_owner(anon_client, sample_tracks):
    items = anon_client.get("/api/tracks", params={"fields": "title"}).json()["items"]
    assert items
    for item in items:
        assert set(item) == {"id", "title", "createdBy"}


def test_empty_fields_returns_full_records(anon_client, sample_tracks):
    item = anon_client.get("/api/tracks", params={"fields": ""}).json()["items"][0]
    assert {"id", "title", "artist", "genre", "createdBy", "createdAt"} <= set(item)


@pytest.mark.parametrize("env, debug", [("development", True), ("development", False), ("production", False)])
def test_storage_failure_is_a_generic_500(db, monkeypatch, env, debug):
    monkeypatch.setattr(settings, "ENV", env)
    monkeypatch.setattr(settings, "DEBUG", debug)

    def broken(*args, **kwargs):
        raise RuntimeError("connection reset by mongod at 10.0.0.3")

    monkeypatch.setattr("catalog.controllers.find_tracks", broken)
    with TestClient(create_app(database=db), raise_server_exceptions=False) as client:
        resp = client.get("/api/tracks")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error"}
    assert "10.0.0.3" not in resp.text


def test_oversized_page_is_clamped(anon_client, sample_tracks):
    body = anon_client.get("/api/tracks", params={"page": "99999999999999999999"}).json()
    assert body["items"] == []
    assert body["pagination"]["page"] == MAX_PAGE
    assert body["pagination"]["total"] == 7


@pytest.mark.parametrize("fields", ["$where", "title,title.x", "a..b", "title,info.$x"])
def test_unusable_projection_names_are_dropped(anon_client, sample_tracks, fields):
    resp = anon_client.get("/api/tracks", params={"fields": fields})
    assert resp.status_code == 200
    for item in resp.json()["items"]:
        assert set(item) <= {"id", "title", "createdBy"}
