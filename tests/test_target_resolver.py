"""Tests for TargetResolver"""

from unittest.mock import Mock

import pytest

from fleet_deploy.api.exceptions import ConfigError, ConnectionError
from fleet_deploy.core import Config, LocalStorage, TargetResolver
from fleet_deploy.core.target_resolver import unify_servers_declarations


def make_resolver(data, storage=None, options=None, on_change=None) -> TargetResolver:
    return TargetResolver(
        Config(data),
        storage or LocalStorage(),
        options=(lambda: options) if options is not None else None,
        on_change=on_change
    )


@pytest.fixture
def multiserver_data() -> dict:
    return {
        "default": ["production"],
        "connections": {
            "production": {
                "servers": [
                    {"host": "web1.example.com", "username": "deploy"},
                    {"host": "web2.example.com", "username": "deploy"},
                ]
            },
            "staging": {"host": "stage.example.com", "username": "deploy"},
        },
        "stages": {"stages": ["blue", "green"]},
    }


class TestUnifyServersDeclarations:
    """Tests for unify_servers_declarations"""

    def test_bare_credentials_become_one_server(self):
        unified = unify_servers_declarations({"production": {"host": "a"}})

        assert unified == {"production": {"servers": [{"host": "a"}]}}

    def test_index_mappings_keep_their_index(self):
        """Servers stored by index land at that index"""
        unified = unify_servers_declarations({"production": {"servers": {"1": {"password": "x"}}}})

        assert unified["production"]["servers"] == [{}, {"password": "x"}]

    def test_empty_declaration_has_no_server(self):
        assert unify_servers_declarations({"production": None}) == {"production": {"servers": []}}


class TestHandles:
    """Tests for handle computation"""

    def test_single_server(self, config_data):
        resolver = make_resolver(config_data)

        assert resolver.get_handle() == "production"

    def test_stage_is_appended(self, config_data):
        resolver = make_resolver(config_data)
        resolver.set_stage("blue")

        assert resolver.get_handle() == "production/blue"

    def test_multiserver_includes_server_index(self, multiserver_data):
        resolver = make_resolver(multiserver_data)
        resolver.set_connection("production", 1)
        resolver.set_stage("green")

        assert resolver.is_multiserver("production")
        assert resolver.get_handle() == "production/1/green"

    def test_server_zero_is_kept(self, multiserver_data):
        resolver = make_resolver(multiserver_data)

        assert resolver.get_handle() == "production/0"

    def test_handle_is_cached_until_a_setter_runs(self, config_data):
        """Configuration changes do not alter a computed handle"""
        resolver = make_resolver(config_data)
        assert resolver.get_handle() == "production"

        resolver.config.set("connections.production", {
            "servers": [{"host": "web1.example.com"}, {"host": "web2.example.com"}]
        })
        assert resolver.get_handle() == "production"

        resolver.set_stage("blue")
        assert resolver.get_handle() == "production/0/blue"


class TestConnections:
    """Tests for connection selection"""

    def test_default_connections(self, config_data):
        resolver = make_resolver(config_data)

        assert resolver.get_connections() == ["production", "staging"]
        assert resolver.get_connection() == "production"

    def test_invalid_defaults_fall_back_to_remote_default(self, config_data):
        config_data["default"] = ["bogus"]
        config_data["remote"] = {"default": "staging"}
        resolver = make_resolver(config_data)

        assert resolver.get_connections() == ["staging"]

    def test_set_connections_filters_invalid_names(self, config_data):
        """Bogus names are dropped when at least one name is valid"""
        resolver = make_resolver(config_data)
        resolver.set_connections("production, bogus")

        assert resolver.get_connections() == ["production"]

    def test_set_connections_without_valid_name_raises(self, config_data):
        resolver = make_resolver(config_data)

        with pytest.raises(ConnectionError) as exc_info:
            resolver.set_connections(["bogus", "other"])

        assert exc_info.value.connections == ["bogus", "other"]
        assert exc_info.value.error_code == "FD001"

    def test_set_connections_resets_the_handle(self, config_data):
        resolver = make_resolver(config_data)
        assert resolver.get_handle() == "production"

        resolver.set_connections("staging")

        assert resolver.get_handle() == "staging"

    def test_set_connection_ignores_invalid_connections(self, config_data):
        on_change = Mock()
        resolver = make_resolver(config_data, on_change=on_change)
        resolver.set_connection("bogus")

        assert resolver.get_connection() == "production"
        on_change.assert_not_called()

    def test_set_connection_notifies(self, config_data):
        on_change = Mock()
        resolver = make_resolver(config_data, on_change=on_change)
        resolver.set_connection("staging")

        assert resolver.get_connection() == "staging"
        on_change.assert_called_once_with(resolver)

    def test_set_stage_notifies_only_for_a_stage(self, config_data):
        on_change = Mock()
        resolver = make_resolver(config_data, on_change=on_change)

        resolver.set_stage(None)
        on_change.assert_not_called()

        resolver.set_stage("blue")
        on_change.assert_called_once_with(resolver)

    def test_get_stages(self, multiserver_data):
        assert make_resolver(multiserver_data).get_stages() == ["blue", "green"]

    def test_disconnect(self, config_data):
        resolver = make_resolver(config_data)
        resolver.set_connections("staging")
        resolver.disconnect()

        assert resolver.get_connections() == ["production", "staging"]


class TestCredentials:
    """Tests for credential resolution"""

    def test_sources_merge_remote_then_config_then_storage(self):
        data = {
            "remote": {"connections": {"production": {"host": "a", "username": "x", "port": 22}}},
            "connections": {"production": {"host": "b"}},
        }
        storage = LocalStorage()
        storage.set("connections.production.servers.0", {"port": 2222})
        resolver = make_resolver(data, storage=storage)

        assert resolver.get_server_credentials("production", 0) == {
            "host": "b", "username": "x", "port": 2222,
        }

    def test_server_option_restricts_servers(self, multiserver_data):
        """Only the requested indices are returned, indices preserved"""
        resolver = make_resolver(multiserver_data, options={"server": "1"})

        credentials = resolver.get_connection_credentials("production")

        assert list(credentials) == [1]
        assert credentials[1]["host"] == "web2.example.com"

    def test_non_numeric_server_option(self, multiserver_data):
        resolver = make_resolver(multiserver_data, options={"server": "0,web2"})

        with pytest.raises(ConfigError) as exc_info:
            resolver.get_connection_credentials("production")

        assert str(exc_info.value) == "Invalid server index: web2"

    def test_get_targets(self, multiserver_data):
        resolver = make_resolver(multiserver_data)
        resolver.set_connections("production,staging")
        resolver.set_stage("blue")

        handles = [target.handle for target in resolver.get_targets()]

        assert handles == ["production/0/blue", "production/1/blue", "staging/blue"]

    def test_fork_is_independent(self, multiserver_data):
        """A forked resolver never changes the parent"""
        resolver = make_resolver(multiserver_data)
        fork = resolver.fork("production", 1, "green")
        fork.set_stage("blue")

        assert fork.get_handle() == "production/1/blue"
        assert resolver.get_stage() is None
        assert resolver.get_handle() == "production/0"
