"""Shared fixtures for the credential helper test suite."""
import json
import subprocess
from pathlib import Path

import pytest

from git_credential_1password.credentials.domains import config_loader, op_client


class FakeOp:
    """Stand-in for ``subprocess.run`` that records op invocations.

    Responses are keyed by ``op item`` verb as (returncode, stdout, stderr).
    """

    def __init__(self):
        self.calls = []
        self.responses = {}

    def respond(self, verb, returncode=0, stdout="", stderr=""):
        self.responses[verb] = (returncode, stdout, stderr)

    def respond_item(self, username="alice", password="s3cr3t"):
        fields = [
            {"id": "username", "type": "STRING", "label": "username", "value": username},
            {"id": "password", "type": "CONCEALED", "label": "password", "value": password},
        ]
        self.respond("get", stdout=json.dumps(fields))

    def verbs(self):
        return [command[2] for command in self.calls]

    def call_for(self, verb):
        matches = [command for command in self.calls if command[2] == verb]
        assert matches, f"op item {verb} was never invoked"
        return matches[-1]

    def __call__(self, command, **kwargs):
        self.calls.append(list(command))
        returncode, stdout, stderr = self.responses.get(command[2], (0, "", ""))
        return subprocess.CompletedProcess(command, returncode, stdout, stderr)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the user's environment and config file out of every test."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)

    monkeypatch.delenv(config_loader.CONFIG_PATH_ENV, raising=False)
    for env_name in config_loader.ENV_OVERRIDES.values():
        monkeypatch.delenv(env_name, raising=False)

    return fake_home


@pytest.fixture
def fake_op(monkeypatch):
    """Replace subprocess.run in the op client with a recording fake."""
    fake = FakeOp()
    monkeypatch.setattr(op_client.subprocess, "run", fake)
    return fake


@pytest.fixture
def config_dir(isolated_env):
    """Default config directory under the fake home."""
    directory = isolated_env / ".config" / "git-credential-1password"
    directory.mkdir(parents=True, exist_ok=True)
    return directory
