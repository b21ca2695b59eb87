"""Tests for the database diagnostic endpoint."""

from sqlalchemy.exc import OperationalError


def test_debug_db_lists_tables(client):
    response = client.get("/debug-db")
    assert response.status_code == 200
    names = [row["table_name"] for row in response.json()]
    for table in ("users", "students", "tutors", "sessions", "reports", "settings"):
        assert table in names


def test_debug_db_failure(client, monkeypatch):
    def boom():
        raise OperationalError("PRAGMA", {}, Exception("unreachable"))

    monkeypatch.setattr("tutorcenter.web.routes.debug.list_table_names", boom)

    response = client.get("/debug-db")
    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}
