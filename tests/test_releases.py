"""Tests for ReleaseController"""

from datetime import datetime

import pytest

from fleet_deploy.constants import NO_RELEASES_MESSAGE, ROLLBACK_QUESTION
from fleet_deploy.core import LocalStorage, ReleaseController
from fleet_deploy.core.releases import normalize_release


@pytest.fixture
def storage() -> LocalStorage:
    storage = LocalStorage()
    storage.set(("releases", "production"), {"releases": [10, 15, 20], "current": 20})
    return storage


@pytest.fixture
def controller(storage) -> ReleaseController:
    return ReleaseController(storage, "production")


class TestRollback:
    """Tests for rollbacks"""

    def test_rollback_to_previous(self, controller):
        result = controller.rollback_to_previous()

        assert result.success
        assert result.release == 15
        assert controller.get_current_release() == 15

    def test_rollback_to_specific_release(self, controller):
        result = controller.rollback_to("10")

        assert result.success
        assert controller.get_current_release() == 10
        assert controller.get_previous_release() is None

    def test_unknown_release_is_ignored(self, controller):
        """The current release stays when the target is unknown"""
        assert controller.activate(999) is False

        result = controller.rollback_to(999)

        assert not result.success
        assert not result.unavailable
        assert controller.get_current_release() == 20

    def test_nothing_to_roll_back_to(self, storage):
        storage.set(("releases", "production"), {"releases": [20], "current": 20})
        controller = ReleaseController(storage, "production")

        result = controller.rollback_to_previous()

        assert result.unavailable
        assert result.message == NO_RELEASES_MESSAGE
        assert controller.get_current_release() == 20

    def test_interactive_rollback(self, controller, make_prompt):
        """Choices are listed newest first and the answer is 1-based"""
        prompt = make_prompt(choice=2)

        result = controller.rollback_interactive(prompt)

        assert result.success
        assert controller.get_current_release() == 15
        assert prompt.questions == [ROLLBACK_QUESTION]
        assert prompt.choices == [["20", "15", "10"]]

    @pytest.mark.parametrize("choice", [0, 4, None])
    def test_interactive_rollback_with_invalid_choice(self, controller, make_prompt, choice):
        result = controller.rollback_interactive(make_prompt(choice=choice))

        assert not result.success
        assert controller.get_current_release() == 20

    def test_handles_are_isolated(self, storage, controller):
        other = ReleaseController(storage, "staging")

        assert other.rollback_to_previous().unavailable
        assert controller.get_current_release() == 20


class TestReleaseLifecycle:
    """Tests for creating, syncing and activating releases"""

    def test_create_release(self, controller):
        release = controller.create_release(datetime(2024, 1, 20, 10, 15, 0))

        assert release == 20240120101500
        assert controller.get_releases() == [10, 15, 20, 20240120101500]
        assert controller.get_current_release() == 20

    def test_activate_updates_the_current_symlink(self, storage, make_shell, paths):
        shell = make_shell()
        controller = ReleaseController(storage, "production", shell=shell, paths=paths)

        assert controller.activate(15)
        assert shell.history == ["ln -sfn /srv/app/releases/15 /srv/app/current"]

    def test_sync_with_remote(self, make_shell, paths):
        shell = make_shell(responses={
            "ls -1": ("20240101000000\n20240102000000\nnot-a-release\n", 0),
        })
        controller = ReleaseController(LocalStorage(), "production", shell=shell, paths=paths)

        assert controller.sync_with_remote() == [20240101000000, 20240102000000]
        assert controller.get_current_release() == 20240102000000

    @pytest.mark.parametrize("value, expected", [
        ("20240101000000", 20240101000000),
        (15, 15),
        (True, None),
        ("latest", None),
    ])
    def test_normalize_release(self, value, expected):
        assert normalize_release(value) == expected
