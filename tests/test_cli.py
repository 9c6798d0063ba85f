"""
tests/test_cli.py

CLI commands end to end against the fake server. build_client is patched
to use the mock transport; config and tokens live under tmp_path.
"""

import httpx
import pytest
from click.testing import CliRunner

from pasty_client import UnauthenticatedClient
from pasty_client import cli as cli_module
from pasty_client.cli import cli
from pasty_client.core import tokens
from pasty_client.core.config import load_config

from .conftest import BASE_URL


@pytest.fixture
def runner(pasty_home, fake_pasty, monkeypatch):
    def build_client(base_url):
        return UnauthenticatedClient(base_url, transport=httpx.MockTransport(fake_pasty.handler))

    monkeypatch.setattr(cli_module, "build_client", build_client)
    return CliRunner()


def invoke(runner, *args, input=None):
    return runner.invoke(cli, ["--url", BASE_URL, *args], input=input)


def test_info(runner):
    result = invoke(runner, "info")
    assert result.exit_code == 0, result.output
    assert "v0.4.0-test" in result.output
    assert "unlimited" in result.output


def test_create_stores_token(runner, fake_pasty):
    result = invoke(runner, "create", input="hello from stdin")
    assert result.exit_code == 0, result.output

    paste_id = next(iter(fake_pasty.pastes))
    assert fake_pasty.pastes[paste_id]["content"] == "hello from stdin"
    assert tokens.get_token(BASE_URL, paste_id) == fake_pasty.tokens[paste_id]
    assert paste_id in result.output


def test_create_from_file_with_meta(runner, fake_pasty, tmp_path):
    source = tmp_path / "notes.txt"
    source.write_text("file body")

    result = invoke(runner, "create", str(source), "--meta", "lang=txt", "--no-save")
    assert result.exit_code == 0, result.output

    paste = next(iter(fake_pasty.pastes.values()))
    assert paste["content"] == "file body"
    assert paste["metadata"] == {"lang": "txt"}
    assert tokens.load_tokens() == {}


def test_create_rejects_bad_meta(runner, fake_pasty):
    result = invoke(runner, "create", "--meta", "novalue", input="x")
    assert result.exit_code == 2
    assert fake_pasty.requests == []


def test_create_rejects_empty_content(runner, fake_pasty):
    result = invoke(runner, "create", input="")
    assert result.exit_code == 1
    assert fake_pasty.requests == []


def test_create_rejects_undecodable_file(runner, fake_pasty, tmp_path):
    path = tmp_path / "binary.dat"
    path.write_bytes(b"\xff\xfe\x00bad")

    result = invoke(runner, "create", str(path))
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Not valid UTF-8 text" in result.output
    assert "Traceback" not in result.output
    assert fake_pasty.requests == []


def test_get_prints_raw_content(runner):
    invoke(runner, "create", input="line one\nline two\n")
    result = invoke(runner, "get", "p1")
    assert result.exit_code == 0
    assert result.output == "line one\nline two\n"


def test_get_json(runner):
    invoke(runner, "create", input="as json")
    result = invoke(runner, "get", "p1", "--json")
    assert result.exit_code == 0
    assert '"content": "as json"' in result.output


def test_get_missing_exits_1(runner):
    result = invoke(runner, "get", "missing")
    assert result.exit_code == 1
    assert "not found" in result.output.lower()


def test_update_uses_stored_token(runner, fake_pasty):
    invoke(runner, "create", input="v1")
    result = invoke(runner, "update", "p1", input="v2")
    assert result.exit_code == 0, result.output
    assert fake_pasty.pastes["p1"]["content"] == "v2"


def test_update_with_wrong_token_exits_1(runner, fake_pasty):
    invoke(runner, "create", "--no-save", input="v1")
    result = invoke(runner, "update", "p1", "--token", "wrong", input="v2")
    assert result.exit_code == 1
    assert "rejected" in result.output
    assert fake_pasty.pastes["p1"]["content"] == "v1"


def test_update_without_any_token_exits_1(runner, fake_pasty):
    invoke(runner, "create", "--no-save", input="v1")
    requests_before = len(fake_pasty.requests)
    result = invoke(runner, "update", "p1", input="v2")
    assert result.exit_code == 1
    assert "--token" in result.output
    assert len(fake_pasty.requests) == requests_before


def test_update_rejects_empty_content(runner, fake_pasty):
    invoke(runner, "create", input="v1")
    requests_before = len(fake_pasty.requests)
    result = invoke(runner, "update", "p1", input="")
    assert result.exit_code == 1
    assert "empty paste" in result.output
    assert len(fake_pasty.requests) == requests_before
    assert fake_pasty.pastes["p1"]["content"] == "v1"


def test_update_rejects_undecodable_file(runner, fake_pasty, tmp_path):
    invoke(runner, "create", input="v1")
    path = tmp_path / "binary.dat"
    path.write_bytes(b"\xff\xfe\x00bad")

    result = invoke(runner, "update", "p1", str(path))
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Not valid UTF-8 text" in result.output
    assert fake_pasty.pastes["p1"]["content"] == "v1"


def test_delete_forgets_token(runner, fake_pasty):
    invoke(runner, "create", input="bye")
    result = invoke(runner, "delete", "p1")
    assert result.exit_code == 0, result.output
    assert "p1" not in fake_pasty.pastes
    assert tokens.get_token(BASE_URL, "p1") is None


def test_config_sets_url(runner):
    result = runner.invoke(cli, ["config", "--url", "https://paste.example"])
    assert result.exit_code == 0, result.output
    assert load_config()["url"] == "https://paste.example"


def test_config_rejects_bad_url(runner):
    result = runner.invoke(cli, ["config", "--url", "not a url"])
    assert result.exit_code == 1
    assert load_config() == {}


def test_config_show(runner):
    result = runner.invoke(cli, ["config", "--show"])
    assert result.exit_code == 0
    assert "pasty.lus.pm" in result.output


def test_bad_instance_url_exits_1(runner):
    result = runner.invoke(cli, ["--url", "nope", "get", "p1"])
    assert result.exit_code == 1
