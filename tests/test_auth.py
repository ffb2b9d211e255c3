from __future__ import annotations

import json
import stat

from cli import auth
from cli.auth import TokenStorage


def test_file_storage_round_trip(tmp_path) -> None:
    storage = TokenStorage(use_keyring=False, config_dir=str(tmp_path / "store"))

    assert storage.get_token() is None

    storage.store_token("ah_secret-token")

    token_file = tmp_path / "store" / "token.json"
    assert json.loads(token_file.read_text()) == {"token": "ah_secret-token"}
    assert stat.S_IMODE(token_file.stat().st_mode) == 0o600
    assert storage.get_token() == "ah_secret-token"

    storage.clear_token()
    assert storage.get_token() is None
    assert not token_file.exists()


def test_corrupt_token_file_reads_as_absent(tmp_path) -> None:
    (tmp_path / "token.json").write_text("not json")
    storage = TokenStorage(use_keyring=False, config_dir=str(tmp_path))

    assert storage.get_token() is None


def test_keyring_preferred_when_available(tmp_path) -> None:
    class _Keyring:
        def __init__(self) -> None:
            self.values: dict = {}

        def set_password(self, service, username, value):
            self.values[(service, username)] = value

        def get_password(self, service, username):
            return self.values.get((service, username))

        def delete_password(self, service, username):
            self.values.pop((service, username))

    storage = TokenStorage(use_keyring=False, config_dir=str(tmp_path))
    storage._keyring = _Keyring()

    storage.store_token("ah_keyring-token")

    assert not (tmp_path / "token.json").exists()
    assert storage.get_token() == "ah_keyring-token"
    storage.clear_token()
    assert storage.get_token() is None


def test_keyring_failure_falls_back_to_file(tmp_path) -> None:
    class _BrokenKeyring:
        def set_password(self, *args):
            raise RuntimeError("no backend")

        def get_password(self, *args):
            raise RuntimeError("no backend")

        def delete_password(self, *args):
            raise RuntimeError("no backend")

    storage = TokenStorage(use_keyring=False, config_dir=str(tmp_path))
    storage._keyring = _BrokenKeyring()

    storage.store_token("ah_file-token")

    assert (tmp_path / "token.json").exists()
    assert storage.get_token() == "ah_file-token"


def test_env_token_wins(isolated_home, monkeypatch) -> None:
    auth.save_token("ah_stored-token")
    monkeypatch.setenv("AGENT_MESH_TOKEN", "ah_env-token")

    assert auth.load_token() == "ah_env-token"


def test_load_token_from_store(isolated_home) -> None:
    assert auth.load_token() is None

    auth.save_token("ah_stored-token")

    assert auth.load_token() == "ah_stored-token"


def test_blank_env_token_is_ignored(isolated_home, monkeypatch) -> None:
    monkeypatch.setenv("AGENT_MESH_TOKEN", "   ")

    assert auth.load_token() is None
