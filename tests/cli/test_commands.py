"""Tests for the tutorcenter CLI."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tutorcenter.cli.commands import app
from tutorcenter.config.app_config import clear_config_cache
from tutorcenter.db.database import reset_db

runner = CliRunner()


@pytest.fixture
def db_url(tmp_path, monkeypatch):
    """Isolated database and default config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    clear_config_cache()
    yield f"sqlite:///{tmp_path / 'cli.db'}"
    reset_db()
    clear_config_cache()


class TestInitDb:
    def test_init_db(self, db_url, tmp_path):
        result = runner.invoke(app, ["init-db", "--database-url", db_url])
        assert result.exit_code == 0
        assert "Database initialized" in result.stdout
        assert (tmp_path / "cli.db").exists()

    def test_init_db_bad_url(self, db_url):
        """Unknown dialect exits with an error message."""
        result = runner.invoke(app, ["init-db", "--database-url", "nosuchdialect://x"])
        assert result.exit_code != 0


class TestSeed:
    def test_seed_reports_counts(self, db_url):
        result = runner.invoke(app, ["seed", "--database-url", db_url])
        assert result.exit_code == 0
        assert "Start seeding..." in result.stdout
        assert "Seeding finished." in result.stdout

    def test_seed_twice(self, db_url):
        runner.invoke(app, ["seed", "--database-url", db_url])
        result = runner.invoke(app, ["seed", "--database-url", db_url])
        assert result.exit_code == 0


class TestListing:
    def test_tables(self, db_url):
        result = runner.invoke(app, ["tables", "--database-url", db_url])
        assert result.exit_code == 0
        for name in ("students", "tutors", "sessions"):
            assert f"- {name}" in result.stdout

    def test_students_empty(self, db_url):
        result = runner.invoke(app, ["students", "--database-url", db_url])
        assert result.exit_code == 0
        assert "No students found" in result.stdout

    def test_students_after_seed(self, db_url):
        runner.invoke(app, ["seed", "--database-url", db_url])

        result = runner.invoke(app, ["students", "--database-url", db_url])
        assert result.exit_code == 0
        assert "John Doe" in result.stdout
        assert "Jane Smith" in result.stdout
        assert "95.5%" in result.stdout


class TestServe:
    def test_serve_runs_uvicorn(self, db_url):
        with patch("tutorcenter.cli.commands.uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--host", "0.0.0.0", "--port", "4000"])

        assert result.exit_code == 0
        mock_run.assert_called_once_with(
            "tutorcenter.web.api:app", host="0.0.0.0", port=4000, reload=False
        )

    def test_serve_uses_config_port(self, db_url, monkeypatch):
        monkeypatch.setenv("PORT", "5050")
        clear_config_cache()
        with patch("tutorcenter.cli.commands.uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0
        assert mock_run.call_args.kwargs["port"] == 5050
