"""Tests for the built-in tasks run through the queue executor"""

import json

import pytest

from fleet_deploy.constants import NO_RELEASES_MESSAGE
from fleet_deploy.models import OperationStatus
from fleet_deploy.services.queue_executor import TaskQueueExecutor

RELEASE_ID = 20240101000000
RELEASE = f"/srv/app/releases/{RELEASE_ID}"
LIST_RELEASES = "ls -1 /srv/app/releases"


def run(application, task, **options):
    options.setdefault("on", "production")
    result = TaskQueueExecutor(application).run(task, options)
    return result.targets["production"].tasks[0]


@pytest.fixture
def released(application, shell_factory):
    """The releases folder of production holds 10, 15 and 20"""
    shell_factory.shell_kwargs["responses"] = {LIST_RELEASES: ("10\n15\n20\n", 0)}
    return application


def current_release(application):
    return application.storage.get(("releases", "production", "current"))


class TestRollbackTask:
    """Tests for the rollback task"""

    def test_rolls_back_to_previous(self, released, shell_factory):
        task = run(released, "rollback")

        assert task.status == OperationStatus.SUCCESS
        assert current_release(released) == 15
        shell, = shell_factory.for_host("web1.example.com")
        assert shell.history == [LIST_RELEASES, "ln -sfn /srv/app/releases/15 /srv/app/current"]

    def test_rolls_back_to_given_release(self, released):
        run(released, "rollback", release="10")

        assert current_release(released) == 10

    def test_unknown_release_is_not_a_failure(self, released):
        task = run(released, "rollback", release="999")

        assert task.status == OperationStatus.SUCCESS
        assert current_release(released) == 20

    def test_no_previous_release(self, application):
        task = run(application, "rollback")

        assert task.status == OperationStatus.SUCCESS
        assert task.message == NO_RELEASES_MESSAGE

    def test_interactive_choice(self, released, make_prompt):
        released.prompt = make_prompt(choice=3)

        run(released, "rollback", list=True)

        assert current_release(released) == 10

    def test_interactive_choice_needs_a_prompt(self, released):
        task = run(released, "rollback", list=True)

        assert task.status == OperationStatus.FAILED
        assert current_release(released) == 20

    def test_history_follows_the_releases_folder(self, released):
        released.storage.set(("releases", "production"), {"releases": [5], "current": 5})

        run(released, "rollback")

        assert released.storage.get(("releases", "production", "releases")) == [10, 15, 20]
        assert current_release(released) == 15

    def test_unreadable_releases_folder_keeps_history(self, application, shell_factory):
        application.storage.set(("releases", "production"), {"releases": [10, 15], "current": 15})
        shell_factory.shell_kwargs["responses"] = {LIST_RELEASES: ("", 2)}

        run(application, "rollback")

        assert current_release(application) == 10


class TestCurrentTask:
    """Tests for the current task"""

    def test_without_release(self, application):
        assert run(application, "current").message == "No release has yet been deployed"

    def test_with_release(self, released):
        assert run(released, "current").message == "The current release is 20"


@pytest.fixture
def php_application(application, shell_factory):
    """Production serves a PHP application requiring ext-gd"""
    shell_factory.shell_kwargs.update(
        files={f"{RELEASE}/composer.json": json.dumps({"require": {"php": ">=7.4", "ext-gd": "*"}})},
        binaries=["composer", "php"],
        responses={
            LIST_RELEASES: (f"{RELEASE_ID}\n", 0),
            "php -m": ("gd\nmbstring\n", 0),
            "php --version": ("PHP 8.2.0 (cli)", 0),
        },
    )
    return application


class TestCheckTask:
    """Tests for the check task"""

    def test_ready_server(self, php_application):
        task = run(php_application, "check")

        assert task.status == OperationStatus.SUCCESS
        assert task.message == "production is ready to receive the application"

    def test_missing_extension(self, php_application, shell_factory):
        shell_factory.shell_kwargs["responses"]["php -m"] = ("mbstring\n", 0)

        assert run(php_application, "check").status == OperationStatus.FAILED

    def test_without_release_fails(self, application):
        task = run(application, "check")

        assert task.status == OperationStatus.FAILED
        assert task.message == "No release has yet been deployed on production"


class TestDependenciesTask:
    """Tests for the dependencies task"""

    def test_install(self, php_application, shell_factory):
        task = run(php_application, "dependencies")

        assert task.status == OperationStatus.SUCCESS
        shell, = shell_factory.for_host("web1.example.com")
        assert f"cd {RELEASE} && composer install --no-interaction --no-dev --prefer-dist" in shell.history

    def test_update(self, php_application, shell_factory):
        run(php_application, "dependencies", update=True)

        shell, = shell_factory.for_host("web1.example.com")
        assert any("composer update" in command for command in shell.history)
        assert not any("composer install" in command for command in shell.history)

    def test_without_release_fails(self, application, shell_factory):
        task = run(application, "dependencies")

        assert task.status == OperationStatus.FAILED
        shell, = shell_factory.for_host("web1.example.com")
        assert shell.history == [LIST_RELEASES]
