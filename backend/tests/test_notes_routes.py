"""
NoteAPI Backend — Notes Route Tests
=====================================

What:  End-to-end tests for the six /notes operations.
How:   HTTPX AsyncClient against a fresh app per test (see conftest.py).

What we test:
    ✅ Create → get round trip, delete → 404
    ✅ List returns only the caller's notes, with or without trailing slash
    ✅ Replace overwrites all fields; partial update keeps missing ones
    ✅ Not-found texts for reads and writes, including non-numeric ids
    ✅ Integer-prefix parsing of path ids (ASCII digits only)
"""

import pytest

from noteapi.routes.notes import format_note_id, parse_note_id


async def _create(client, headers, **fields):
    response = await client.post("/notes", json=fields, headers=headers)
    assert response.status_code == 204
    return response


class TestCreateAndGet:

    @pytest.mark.asyncio
    async def test_create_returns_empty_204(self, test_client, admin_headers):
        response = await test_client.post(
            "/notes", json={"title": "a", "content": "b", "user": "u1"}, headers=admin_headers
        )

        assert response.status_code == 204
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_create_then_get(self, test_client, admin_headers):
        """The first note gets id 1 and comes back with the posted fields."""
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        response = await test_client.get("/notes/1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"id": 1, "title": "a", "content": "b", "user": "u1"}

    @pytest.mark.asyncio
    async def test_create_with_missing_fields_stores_null(self, test_client, admin_headers):
        await _create(test_client, admin_headers, title="only title")

        response = await test_client.get("/notes/1", headers=admin_headers)

        assert response.json() == {"id": 1, "title": "only title", "content": None, "user": None}

    @pytest.mark.asyncio
    async def test_create_without_body(self, test_client, note_store, admin_headers):
        response = await test_client.post("/notes", headers=admin_headers)

        assert response.status_code == 204
        assert note_store.get_by_id(1).title is None

    @pytest.mark.asyncio
    async def test_create_rejects_non_string_field(self, test_client, note_store, admin_headers):
        response = await test_client.post("/notes", json={"title": 5}, headers=admin_headers)

        assert response.status_code == 422
        assert len(note_store) == 0

    @pytest.mark.asyncio
    async def test_get_missing(self, test_client, admin_headers):
        response = await test_client.get("/notes/999", headers=admin_headers)

        assert response.status_code == 404
        assert response.text == "Note with ID 999 was not found."

    @pytest.mark.asyncio
    async def test_get_non_numeric_id(self, test_client, admin_headers):
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        response = await test_client.get("/notes/abc", headers=admin_headers)

        assert response.status_code == 404
        assert response.text == "Note with ID NaN was not found."

    @pytest.mark.asyncio
    async def test_get_numeric_prefix_id(self, test_client, admin_headers):
        """'1abc' addresses note 1."""
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        response = await test_client.get("/notes/1abc", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["id"] == 1

    @pytest.mark.asyncio
    async def test_get_non_ascii_digit_id(self, test_client, admin_headers):
        """Arabic-Indic digits are not an id; note 1 stays unreachable through them."""
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        response = await test_client.get("/notes/١", headers=admin_headers)

        assert response.status_code == 404
        assert response.text == "Note with ID NaN was not found."

    @pytest.mark.asyncio
    async def test_create_with_trailing_slash(self, test_client, note_store, admin_headers):
        """POST /notes/ stores the note itself instead of redirecting."""
        response = await test_client.post(
            "/notes/", json={"title": "a", "content": "b", "user": "u1"}, headers=admin_headers
        )

        assert response.status_code == 204
        assert note_store.get_by_id(1).title == "a"


class TestList:

    @pytest.mark.asyncio
    async def test_list_filters_by_authorization(self, test_client):
        """POST as any admin, then GET /notes as u1 sees only u1's note."""
        await _create(test_client, {"authorization": "admin-token"}, title="a", content="b", user="u1")
        await _create(test_client, {"authorization": "admin-token"}, title="x", content="y", user="u2")

        response = await test_client.get("/notes", headers={"authorization": "u1"})

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 1
        assert body[0]["title"] == "a"
        assert all(note["user"] == "u1" for note in body)

    @pytest.mark.asyncio
    async def test_list_empty_for_caller_without_notes(self, test_client, admin_headers):
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        response = await test_client.get("/notes", headers={"authorization": "u2"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_returns_all_of_callers_notes(self, test_client):
        headers = {"authorization": "u1"}
        await _create(test_client, headers, title="one", content="", user="u1")
        await _create(test_client, headers, title="two", content="", user="u1")

        response = await test_client.get("/notes", headers=headers)

        assert [n["title"] for n in response.json()] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_list_with_trailing_slash(self, test_client):
        headers = {"authorization": "u1"}
        await _create(test_client, headers, title="one", content="", user="u1")

        response = await test_client.get("/notes/", headers=headers)

        assert response.status_code == 200
        assert [n["title"] for n in response.json()] == ["one"]


class TestReplace:

    @pytest.mark.asyncio
    async def test_replace_overwrites_all_fields(self, test_client, note_store, admin_headers):
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        response = await test_client.put(
            "/notes/1", json={"title": "x", "content": "y", "user": "u2"}, headers=admin_headers
        )

        assert response.status_code == 204
        assert response.content == b""
        stored = note_store.get_by_id(1)
        assert (stored.id, stored.title, stored.content, stored.user) == (1, "x", "y", "u2")

    @pytest.mark.asyncio
    async def test_replace_missing_fields_become_null(self, test_client, note_store, admin_headers):
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        await test_client.put("/notes/1", json={"title": "x"}, headers=admin_headers)

        stored = note_store.get_by_id(1)
        assert stored.content is None
        assert stored.user is None

    @pytest.mark.asyncio
    async def test_replace_missing_note(self, test_client, note_store, admin_headers):
        response = await test_client.put(
            "/notes/7", json={"title": "x", "content": "y", "user": "u2"}, headers=admin_headers
        )

        assert response.status_code == 404
        assert response.text == "Die Notiz mit ID 7 wurde nicht gefunden."
        assert len(note_store) == 0


class TestPartialUpdate:

    @pytest.mark.asyncio
    async def test_patch_title_only_keeps_other_fields(self, test_client, note_store, admin_headers):
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        response = await test_client.patch("/notes/1", json={"title": "new"}, headers=admin_headers)

        assert response.status_code == 204
        stored = note_store.get_by_id(1)
        assert (stored.title, stored.content, stored.user) == ("new", "b", "u1")

    @pytest.mark.asyncio
    async def test_patch_null_field_keeps_current_value(self, test_client, note_store, admin_headers):
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        await test_client.patch(
            "/notes/1", json={"content": None, "user": "u2"}, headers=admin_headers
        )

        stored = note_store.get_by_id(1)
        assert (stored.title, stored.content, stored.user) == ("a", "b", "u2")

    @pytest.mark.asyncio
    async def test_patch_empty_body_changes_nothing(self, test_client, note_store, admin_headers):
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        response = await test_client.patch("/notes/1", json={}, headers=admin_headers)

        assert response.status_code == 204
        stored = note_store.get_by_id(1)
        assert (stored.title, stored.content, stored.user) == ("a", "b", "u1")

    @pytest.mark.asyncio
    async def test_patch_missing_note(self, test_client, admin_headers):
        response = await test_client.patch("/notes/abc", json={"title": "x"}, headers=admin_headers)

        assert response.status_code == 404
        assert response.text == "Die Notiz mit ID NaN wurde nicht gefunden."


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_then_get_is_404(self, test_client, admin_headers):
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        response = await test_client.delete("/notes/1", headers=admin_headers)
        assert response.status_code == 204
        assert response.content == b""

        response = await test_client.get("/notes/1", headers=admin_headers)
        assert response.status_code == 404
        assert response.text == "Note with ID 1 was not found."

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, test_client, admin_headers):
        response = await test_client.delete("/notes/3", headers=admin_headers)

        assert response.status_code == 404
        assert response.text == "Die Notiz mit ID 3 wurde nicht gefunden."

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client, admin_headers):
        await _create(test_client, admin_headers, title="a", content="b", user="u1")

        first = await test_client.delete("/notes/1", headers=admin_headers)
        second = await test_client.delete("/notes/1", headers=admin_headers)

        assert first.status_code == 204
        assert second.status_code == 404


class TestNoteIdParsing:
    """parse_note_id() follows integer-prefix semantics."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("12", 12),
            ("007", 7),
            ("12abc", 12),
            (" 5", 5),
            ("-3", -3),
            ("+4", 4),
            ("1.9", 1),
            ("abc", None),
            ("", None),
            ("-", None),
            ("١", None),
        ],
    )
    def test_parse(self, raw, expected):
        assert parse_note_id(raw) == expected

    def test_format(self):
        assert format_note_id(None) == "NaN"
        assert format_note_id(42) == "42"
