"""Tests for the command line interface"""

import json
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from fleet_deploy.cli.main import cli

CONFIG = """
application_name: app
default: production
connections:
  production:
    host: web1.example.com
    username: deploy
  staging:
    host: stage.example.com
    username: deploy
remote:
  root_directory: /srv
"""


@pytest.fixture
def project(tmp_path):
    config = tmp_path / ".fleet-deploy.yaml"
    config.write_text(CONFIG)
    return tmp_path


def invoke(project, *args):
    return CliRunner().invoke(
        cli,
        ["--config", str(project / ".fleet-deploy.yaml"), *args],
        env={"FLEET_DEPLOY_STORAGE": str(project / "state.json")}
    )


class TestCli:
    """Tests for the fleet-deploy commands"""

    def test_connections_as_json(self, project):
        result = invoke(project, "connections", "--output", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["active"] == ["production"]
        assert sorted(data["connections"]) == ["production", "staging"]

    def test_rollback(self, project):
        """Rolling back in pretend mode updates the stored history"""
        state = project / "state.json"
        state.write_text(json.dumps({"releases": {"production": {"releases": [10, 15], "current": 15}}}))

        result = invoke(project, "rollback", "--pretend")

        assert result.exit_code == 0
        assert json.loads(state.read_text())["releases"]["production"]["current"] == 10

    def test_rollback_to_release_on_stage(self, project):
        state = project / "state.json"
        state.write_text(json.dumps({"releases": {"staging/blue": {"releases": [10, 15], "current": 15}}}))

        result = invoke(project, "rollback", "10", "--on", "staging", "--stage", "blue", "--pretend")

        assert result.exit_code == 0
        assert json.loads(state.read_text())["releases"]["staging/blue"]["current"] == 10

    def test_invalid_connection(self, project):
        result = invoke(project, "current", "--on", "bogus", "--pretend")

        assert result.exit_code == 1
        assert "Invalid connection(s): bogus" in result.output

    def test_invalid_server_index(self, project):
        result = invoke(project, "current", "--server", "web", "--pretend")

        assert result.exit_code == 1
        assert "Invalid server index: web" in result.output

    @patch("fleet_deploy.plugins.installer.subprocess.run")
    def test_plugin_install(self, run, project):
        run.return_value = Mock(returncode=0, stderr="")

        result = invoke(project, "plugins", "install", "fleet-deploy-yarn")

        assert result.exit_code == 0
        assert "Installed fleet-deploy-yarn" in result.output

    @patch("fleet_deploy.plugins.installer.subprocess.run")
    def test_plugin_install_failure(self, run, project):
        run.return_value = Mock(returncode=1, stderr="ERROR: nope\n")

        result = invoke(project, "plugins", "install", "nope")

        assert result.exit_code == 1
        assert "Unable to install plugin nope: ERROR: nope" in result.output

    def test_missing_configuration(self, tmp_path):
        result = invoke(tmp_path, "current")

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output
