"""Shared fixtures: in-memory shells, prompts and applications"""

import shlex
from typing import Dict, List, Optional, Tuple

import pytest

from fleet_deploy.core import Application, Config, LocalStorage, PathResolver
from fleet_deploy.remote.base import CommandResult, RemoteShell


class RecordingShell(RemoteShell):
    """Shell answering from in-memory files, binaries and canned outputs"""

    def __init__(self,
                 credentials=None,
                 paths=None,
                 current_release=None,
                 files: Optional[Dict[str, str]] = None,
                 binaries: Optional[List[str]] = None,
                 responses: Optional[Dict[str, Tuple[str, int]]] = None):
        super().__init__(credentials, paths, current_release)
        self.files = dict(files or {})
        self.binaries = set(binaries or [])
        self.responses = dict(responses or {})
        self.history: List[str] = []

    def _execute(self, command: str) -> CommandResult:
        self.history.append(command)

        for fragment, (output, status) in self.responses.items():
            if fragment in command:
                return CommandResult(command, output, status)

        if command.startswith("command -v "):
            binary = shlex.split(command)[-1]
            if binary in self.binaries:
                return CommandResult(command, f"/usr/bin/{binary}\n")
            return CommandResult(command, "", 1)

        if command.startswith("test -e "):
            path = shlex.split(command)[-1]
            return CommandResult(command, "", 0 if path in self.files else 1)

        if command.startswith("cat "):
            path = shlex.split(command)[-1]
            if path in self.files:
                return CommandResult(command, self.files[path])
            return CommandResult(command, "", 1)

        return CommandResult(command)


class RecordingShellFactory:
    """Creates recording shells and keeps them by host"""

    def __init__(self, **shell_kwargs):
        self.shell_kwargs = shell_kwargs
        self.shells: List[RecordingShell] = []

    def create(self, credentials, paths=None, current_release=None) -> RecordingShell:
        shell = RecordingShell(credentials, paths, current_release, **self.shell_kwargs)
        self.shells.append(shell)
        return shell

    def for_host(self, host: str) -> List[RecordingShell]:
        return [shell for shell in self.shells if shell.credentials.get("host") == host]


class FakePrompt:
    """Answers questions from a script and remembers what was asked"""

    def __init__(self, answers: Optional[Dict[str, str]] = None, choice: Optional[int] = None):
        self.answers = dict(answers or {})
        self.choice = choice
        self.questions: List[str] = []
        self.choices: List[List[str]] = []

    def ask(self, question: str, default: Optional[str] = None, password: bool = False) -> str:
        self.questions.append(question)
        for fragment, answer in self.answers.items():
            if fragment in question:
                return answer
        return default

    def ask_with(self, question: str, choices: List[str]) -> Optional[int]:
        self.questions.append(question)
        self.choices.append(list(choices))
        return self.choice


@pytest.fixture
def paths() -> PathResolver:
    """Application folder layout on a server"""
    return PathResolver("app", "/srv", None)


@pytest.fixture
def config_data() -> dict:
    """Two single-server connections used by default"""
    return {
        "application_name": "app",
        "default": ["production", "staging"],
        "connections": {
            "production": {"host": "web1.example.com", "username": "deploy"},
            "staging": {"host": "stage.example.com", "username": "deploy"},
        },
        "remote": {
            "root_directory": "/srv",
        },
    }


@pytest.fixture
def shell_factory() -> RecordingShellFactory:
    return RecordingShellFactory()


@pytest.fixture
def application(config_data, shell_factory) -> Application:
    """Application with in-memory storage and recording shells"""
    return Application(Config(config_data), LocalStorage(), shell_factory=shell_factory)


@pytest.fixture
def make_shell(paths):
    """Build a recording shell whose current release is 20240101000000"""
    def factory(**kwargs) -> RecordingShell:
        kwargs.setdefault("current_release", lambda: 20240101000000)
        return RecordingShell({"host": "web1.example.com"}, paths, **kwargs)

    return factory


@pytest.fixture
def make_prompt():
    return FakePrompt
