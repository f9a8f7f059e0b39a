"""Tests for loading and installing plugins"""

import sys
import textwrap
from unittest.mock import Mock, patch

import pytest

from fleet_deploy.api.exceptions import PluginError
from fleet_deploy.core import Application, Config, LocalStorage
from fleet_deploy.plugins import PluginInstaller, PluginLoader
from fleet_deploy.services.queue_executor import TaskQueueExecutor
from fleet_deploy.strategies import StrategyFactory
from fleet_deploy.tasks import CheckTask, get_task_class, registry

PLUGIN_MODULE = "fleet_greeting_plugin"

PLUGIN_SOURCE = textwrap.dedent('''
    from fleet_deploy.strategies import Strategy
    from fleet_deploy.tasks import CheckTask, Task


    class GreetTask(Task):
        name = "greet"

        def execute(self):
            return f"Hello {self.context.handle}"


    class YarnStrategy(Strategy):
        family = "dependencies"
        name = "yarn"
''')


@pytest.fixture(autouse=True)
def registries(monkeypatch):
    """Plugins register into copies of the global registries"""
    monkeypatch.setattr(registry, "_tasks", dict(registry._tasks))
    monkeypatch.setattr(StrategyFactory, "_strategies", dict(StrategyFactory._strategies))


@pytest.fixture
def plugin(tmp_path, monkeypatch):
    (tmp_path / f"{PLUGIN_MODULE}.py").write_text(PLUGIN_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    yield PLUGIN_MODULE
    sys.modules.pop(PLUGIN_MODULE, None)


class TestPluginLoader:
    """Tests for PluginLoader"""

    def test_registers_tasks_and_strategies(self, plugin):
        count = PluginLoader().load_from_module(plugin)

        assert count == 2
        assert get_task_class("greet").__module__ == plugin
        assert get_task_class("check") is CheckTask
        assert StrategyFactory.is_supported("dependencies", "yarn")

    def test_module_is_loaded_once(self, plugin):
        loader = PluginLoader()
        loader.load_from_module(plugin)

        assert loader.load_from_module(plugin) == 0

    def test_missing_module(self):
        assert PluginLoader().load_from_module("fleet_missing_plugin") == 0

    def test_configured_plugins_load_with_the_application(self, plugin, config_data, shell_factory):
        config_data["plugins"] = plugin
        application = Application(Config(config_data), LocalStorage(), shell_factory=shell_factory)

        result = TaskQueueExecutor(application).run("greet", {"on": "production"})

        assert result.targets["production"].tasks[0].message == "Hello production"


class TestPluginInstaller:
    """Tests for PluginInstaller"""

    @patch("fleet_deploy.plugins.installer.subprocess.run")
    def test_installs_with_pip(self, run):
        run.return_value = Mock(returncode=0, stderr="")

        PluginInstaller(python="/usr/bin/python3").install("fleet-deploy-yarn")

        run.assert_called_once_with(
            ["/usr/bin/python3", "-m", "pip", "install", "fleet-deploy-yarn"],
            capture_output=True,
            text=True
        )

    @patch("fleet_deploy.plugins.installer.subprocess.run")
    def test_pip_failure(self, run):
        run.return_value = Mock(
            returncode=1,
            stderr="Collecting nope\nERROR: No matching distribution found for nope\n"
        )

        with pytest.raises(PluginError) as exc_info:
            PluginInstaller().install("nope")

        assert str(exc_info.value) == (
            "Unable to install plugin nope: ERROR: No matching distribution found for nope"
        )

    @patch("fleet_deploy.plugins.installer.subprocess.run", side_effect=OSError("no python"))
    def test_python_cannot_run(self, run):
        with pytest.raises(PluginError):
            PluginInstaller().install("fleet-deploy-yarn")
