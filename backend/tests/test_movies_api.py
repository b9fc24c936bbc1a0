"""
MovieNotes Backend: Movie Endpoint Tests
=========================================

What:  End-to-end tests of GET/POST/DELETE /movies against a real SQLite file.
How:   HTTPX AsyncClient over ASGITransport; each test has its own database.

What we test:
    ✅ Create echoes the payload and assigns fresh integer ids
    ✅ List returns exactly the stored notes, newest first
    ✅ Delete matches the TMDB id, never the note id
    ✅ Malformed requests are rejected with 422
    ✅ Store failures: list degrades to [], writes answer 500
"""

import pytest
from sqlalchemy import text


async def _create(client, **overrides):
    payload = {
        "tmdb_id": 550,
        "title": "Fight Club",
        "comment": "Rewatch with subtitles.",
        "user_name": "sam",
    }
    payload.update(overrides)
    response = await client.post("/movies", json=payload)
    assert response.status_code == 200
    return response.json()


async def _drop_movies_table(app):
    async with app.state.engine.begin() as conn:
        await conn.execute(text("DROP TABLE movies"))


class TestListMovies:
    """GET /movies"""

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_array(self, test_client):
        response = await test_client.get("/movies")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_lists_all_notes_newest_first(self, test_client):
        created = [
            await _create(test_client, tmdb_id=550, title="Fight Club"),
            await _create(test_client, tmdb_id=13, title="Forrest Gump"),
            await _create(test_client, tmdb_id=680, title="Pulp Fiction"),
        ]

        response = await test_client.get("/movies")

        assert response.status_code == 200
        assert response.json() == list(reversed(created))

    @pytest.mark.asyncio
    async def test_query_failure_degrades_to_empty_array(self, app, test_client):
        await _create(test_client)
        await _drop_movies_table(app)

        response = await test_client.get("/movies")

        assert response.status_code == 200
        assert response.json() == []


class TestAddMovie:
    """POST /movies"""

    @pytest.mark.asyncio
    async def test_create_echoes_payload(self, test_client, sample_movie_payload):
        response = await test_client.post("/movies", json=sample_movie_payload)

        assert response.status_code == 200
        body = response.json()
        assert isinstance(body["id"], int)
        assert {k: v for k, v in body.items() if k != "id"} == sample_movie_payload

    @pytest.mark.asyncio
    async def test_omitted_optionals_are_null(self, test_client):
        note = await _create(test_client)

        assert note["poster_path"] is None
        assert note["release_date"] is None

        listed = (await test_client.get("/movies")).json()
        assert listed == [note]

    @pytest.mark.asyncio
    async def test_explicit_nulls_accepted(self, test_client):
        note = await _create(test_client, poster_path=None, release_date=None)

        assert note["poster_path"] is None
        assert note["release_date"] is None

    @pytest.mark.asyncio
    async def test_ids_are_distinct(self, test_client):
        ids = [(await _create(test_client, title=f"Note {i}"))["id"] for i in range(5)]

        assert len(set(ids)) == 5
        assert all(isinstance(i, int) for i in ids)

    @pytest.mark.asyncio
    async def test_ids_are_not_reused_after_delete(self, test_client):
        await _create(test_client, tmdb_id=1)
        newest = await _create(test_client, tmdb_id=2)
        await test_client.delete("/movies/2")

        again = await _create(test_client, tmdb_id=3)

        assert again["id"] > newest["id"]

    @pytest.mark.asyncio
    async def test_round_trip_preserves_fields(self, test_client, sample_movie_payload):
        created = (await test_client.post("/movies", json=sample_movie_payload)).json()

        listed = (await test_client.get("/movies")).json()
        match = [m for m in listed if m["id"] == created["id"]]

        assert match == [created]
        assert {k: v for k, v in match[0].items() if k != "id"} == sample_movie_payload

    @pytest.mark.asyncio
    async def test_unicode_text_stored_unchanged(self, test_client):
        note = await _create(test_client, title="Amélie", comment="素晴らしい 🎬")

        listed = (await test_client.get("/movies")).json()

        assert listed[0]["title"] == "Amélie"
        assert listed[0]["comment"] == "素晴らしい 🎬"
        assert listed[0] == note

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["tmdb_id", "title", "comment", "user_name"])
    async def test_missing_required_field_rejected(self, test_client, sample_movie_payload, missing):
        del sample_movie_payload[missing]

        response = await test_client.post("/movies", json=sample_movie_payload)

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
        assert (await test_client.get("/movies")).json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value",
        [("tmdb_id", "550"), ("tmdb_id", 5.5), ("title", 42), ("poster_path", 7)],
    )
    async def test_wrong_type_rejected(self, test_client, sample_movie_payload, field, value):
        sample_movie_payload[field] = value

        response = await test_client.post("/movies", json=sample_movie_payload)

        assert response.status_code == 422
        assert response.json()["details"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tmdb_id", [2**63, -(2**63) - 1, 2**70])
    async def test_tmdb_id_outside_int64_rejected(self, test_client, sample_movie_payload, tmdb_id):
        sample_movie_payload["tmdb_id"] = tmdb_id

        response = await test_client.post("/movies", json=sample_movie_payload)

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
        assert (await test_client.get("/movies")).json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tmdb_id", [2**63 - 1, -(2**63)])
    async def test_tmdb_id_at_int64_bounds_stored(self, test_client, tmdb_id):
        note = await _create(test_client, tmdb_id=tmdb_id)

        assert note["tmdb_id"] == tmdb_id
        assert (await test_client.get("/movies")).json() == [note]

    @pytest.mark.asyncio
    async def test_invalid_json_rejected(self, test_client):
        response = await test_client.post(
            "/movies",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_store_failure_returns_500(self, app, test_client, sample_movie_payload):
        await _drop_movies_table(app)

        response = await test_client.post("/movies", json=sample_movie_payload)

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        # The process keeps serving
        assert (await test_client.get("/movies")).status_code == 200


class TestRemoveMovie:
    """DELETE /movies/{id}"""

    @pytest.mark.asyncio
    async def test_deletes_every_note_for_tmdb_id(self, test_client):
        keep = await _create(test_client, tmdb_id=13, title="Forrest Gump")
        await _create(test_client, tmdb_id=550, title="Fight Club")
        await _create(test_client, tmdb_id=550, title="Fight Club (director's cut)")

        response = await test_client.delete("/movies/550")

        assert response.status_code == 200
        assert response.content == b""
        assert (await test_client.get("/movies")).json() == [keep]

    @pytest.mark.asyncio
    async def test_unmatched_id_is_noop(self, test_client):
        await _create(test_client, tmdb_id=550)
        before = (await test_client.get("/movies")).json()

        response = await test_client.delete("/movies/999999")

        assert response.status_code == 200
        assert response.content == b""
        assert (await test_client.get("/movies")).json() == before

    @pytest.mark.asyncio
    async def test_primary_key_is_not_matched(self, test_client):
        note = await _create(test_client, tmdb_id=550)
        assert note["id"] != 550

        response = await test_client.delete(f"/movies/{note['id']}")

        assert response.status_code == 200
        assert (await test_client.get("/movies")).json() == [note]

    @pytest.mark.asyncio
    async def test_non_integer_id_rejected(self, test_client):
        await _create(test_client)

        response = await test_client.delete("/movies/fight-club")

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
        assert len((await test_client.get("/movies")).json()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tmdb_id", [2**63, -(2**63) - 1, 2**70])
    async def test_id_outside_int64_rejected(self, test_client, tmdb_id):
        note = await _create(test_client)

        response = await test_client.delete(f"/movies/{tmdb_id}")

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"
        assert (await test_client.get("/movies")).json() == [note]

    @pytest.mark.asyncio
    async def test_id_at_int64_max_deletes(self, test_client):
        await _create(test_client, tmdb_id=2**63 - 1)

        response = await test_client.delete(f"/movies/{2**63 - 1}")

        assert response.status_code == 200
        assert (await test_client.get("/movies")).json() == []

    @pytest.mark.asyncio
    async def test_negative_id_accepted(self, test_client):
        response = await test_client.delete("/movies/-1")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_store_failure_returns_500(self, app, test_client):
        await _drop_movies_table(app)

        response = await test_client.delete("/movies/550")

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
