"""
Tests for the guideconnect command-line interface.
"""

from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from guideconnect import __version__
from guideconnect.cli.main import app
from guideconnect.exceptions import ConflictError

runner = CliRunner()


class TestVersion:
    def test_version_option(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_command(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"Nepal Guide Connect {__version__}" in result.stdout


class TestCreateAdmin:
    def test_creates_account(self):
        with patch("guideconnect.cli.main._create_user", new_callable=AsyncMock) as create_user:
            result = runner.invoke(app, ["user", "create-admin", "--password", "namaste-123"])

        assert result.exit_code == 0
        name, email, password = create_user.await_args.args
        assert name == "Administrator"
        assert password == "namaste-123"

    def test_existing_account_fails(self):
        with patch(
            "guideconnect.cli.main._create_user",
            new_callable=AsyncMock,
            side_effect=ConflictError("An account with this email already exists"),
        ):
            result = runner.invoke(app, ["user", "create-admin", "--password", "namaste-123"])

        assert result.exit_code == 1
        assert "Could not create administrator" in result.stdout


class TestDbCommands:
    def test_seed(self):
        with patch("guideconnect.cli.main._db_seed", new_callable=AsyncMock) as db_seed:
            result = runner.invoke(app, ["db", "seed"])

        assert result.exit_code == 0
        db_seed.assert_awaited_once()

    def test_init_failure(self):
        with patch("guideconnect.cli.main._db_init", new_callable=AsyncMock, side_effect=OSError("disk full")):
            result = runner.invoke(app, ["db", "init"])

        assert result.exit_code == 1
        assert "Database initialization failed" in result.stdout
