from unittest.mock import patch

import pytest
from click.testing import CliRunner

from app import create_app
from app.modules.conftest import seed_submission
from core.pocketbase import ClientResponseError, ErrorKind
from core.pocketbase.fakes import FakePocketBase
from wapctl.cli import cli


@pytest.fixture()
def fake():
    return FakePocketBase()


@pytest.fixture()
def app_factory(fake):
    return lambda: create_app("testing", pocketbase_factory=lambda: fake)


def test_health_ok(app_factory):
    with patch("wapctl.commands.health.create_app", app_factory):
        result = CliRunner().invoke(cli, ["health"])
    assert result.exit_code == 0
    assert "API is healthy." in result.output


def test_health_unreachable(app_factory, fake):
    fake.fail_next(ClientResponseError(ErrorKind.COLLABORATOR_ERROR, "Could not reach the server (ConnectionError)."))
    with patch("wapctl.commands.health.create_app", app_factory):
        result = CliRunner().invoke(cli, ["health"])
    assert result.exit_code == 1
    assert "unreachable" in result.output


def test_submissions_list(app_factory, fake):
    seed_submission(fake, game_title="Compiler Quest")
    with patch("wapctl.commands.submissions_list.create_app", app_factory):
        result = CliRunner().invoke(cli, ["submissions:list", "--limit", "5"])
    assert result.exit_code == 0
    assert "Compiler Quest" in result.output
    assert fake.calls[-1][2]["perPage"] == 5


def test_submissions_list_empty(app_factory):
    with patch("wapctl.commands.submissions_list.create_app", app_factory):
        result = CliRunner().invoke(cli, ["submissions:list"])
    assert result.exit_code == 0
    assert "No submissions yet." in result.output
