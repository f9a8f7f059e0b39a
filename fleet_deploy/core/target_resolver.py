"""Resolution of the connection(s), server and stage an operation targets"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .config import Config, replace_recursive
from ..api.exceptions import ConfigError, ConnectionError
from ..constants import (
    CONFIG_CONNECTIONS_KEY,
    CONFIG_DEFAULT_KEY,
    CONFIG_REMOTE_CONNECTIONS_KEY,
    CONFIG_REMOTE_DEFAULT_KEY,
    CONFIG_STAGES_KEY,
    HANDLE_SEPARATOR,
    STORAGE_CONNECTIONS_KEY,
)
from ..models.connection import Connection, Target

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionContext:
    """Everything resolved for one command invocation

    Never mutated: setters replace the whole context.
    """
    connections: Optional[Tuple[str, ...]] = None
    connection: Optional[str] = None
    server: int = 0
    stage: Optional[str] = None
    handle: Optional[str] = None


def unify_servers_declarations(connections: Any) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
    """Unify every connection declaration into the ``{"servers": [...]}`` form

    A bare credential mapping becomes a one-server list. Servers stored as a
    mapping of indices (as the local storage writes them) keep their index.
    """
    unified = {}
    for name, declaration in dict(connections or {}).items():
        if not declaration:
            servers = []
        elif isinstance(declaration, dict) and 'servers' in declaration:
            servers = declaration['servers']
        else:
            servers = [declaration]

        unified[name] = {'servers': _servers_as_list(servers)}

    return unified


def _servers_as_list(servers: Any) -> List[Dict[str, Any]]:
    if isinstance(servers, dict):
        indexed = {int(index): credentials for index, credentials in servers.items()}
        size = max(indexed) + 1 if indexed else 0
        return [indexed.get(index, {}) for index in range(size)]

    return list(servers or [])


class TargetResolver:
    """Resolves and caches the active connection(s), server and stage"""

    def __init__(self,
                 config: Config,
                 storage: Config,
                 options: Optional[Callable[[], Optional[Mapping[str, Any]]]] = None,
                 on_change: Optional[Callable[['TargetResolver'], None]] = None,
                 context: Optional[ResolutionContext] = None):
        """Initialize target resolver

        Args:
            config: Project configuration (with the remote defaults under ``remote``)
            storage: Locally persisted state
            options: Returns the options of the bound command, if any
            on_change: Called when the connection or stage changes, to
                re-register stage scoped event hooks
            context: Initial resolution context
        """
        self.config = config
        self.storage = storage
        self._options = options
        self._on_change = on_change
        self.context = context or ResolutionContext()

    def _replace(self, **changes) -> None:
        self.context = dataclasses.replace(self.context, **changes)

    def _option(self, name: str) -> Any:
        options = self._options() if self._options else None
        return (options or {}).get(name)

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self)

    def fork(self, connection: str, server: int = 0, stage: Optional[str] = None) -> 'TargetResolver':
        """Independent resolver pinned to one target

        Args:
            connection: Connection name
            server: Server index
            stage: Stage, defaults to the current one

        Returns:
            A resolver sharing sources but not resolution state
        """
        context = ResolutionContext(
            connections=(connection,),
            connection=connection,
            server=server,
            stage=stage if stage is not None else self.get_stage(),
        )
        return TargetResolver(self.config, self.storage, self._options, context=context)

    def get_handle(self,
                   connection: Optional[str] = None,
                   server: Optional[int] = None,
                   stage: Optional[str] = None) -> str:
        """Build the current connection's handle

        Once computed the handle is returned as is until a setter changes
        the connection, server or stage. Handles of explicitly given targets
        are not cached.
        """
        explicit = connection is not None or server is not None or stage is not None
        if self.context.handle and not explicit:
            return self.context.handle

        connection = connection or self.get_connection()
        server = server if server is not None else self.get_server()
        stage = stage or self.get_stage()

        if self.is_multiserver(connection):
            parts = [part for part in (connection, server, stage) if part is not None and part != '']
        else:
            parts = [part for part in (connection, stage) if part]

        handle = HANDLE_SEPARATOR.join(str(part) for part in parts)
        if not explicit:
            self._replace(handle=handle)

        return handle

    ##################################################################
    # Servers
    ##################################################################

    def get_server(self) -> int:
        return self.context.server

    def is_multiserver(self, connection: Optional[str]) -> bool:
        """Check if a connection has more than one server"""
        return len(self.get_connection_credentials(connection)) > 1

    ##################################################################
    # Stages
    ##################################################################

    def get_stage(self) -> Optional[str]:
        return self.context.stage

    def set_stage(self, stage: Optional[str]) -> None:
        """Set the stage tasks will execute on"""
        if stage == self.context.stage:
            return

        self._replace(stage=stage, handle=None)

        if stage:
            self._notify()

    def get_stages(self) -> List[str]:
        """Get the stages declared in the configuration"""
        stages = self.config.get(CONFIG_STAGES_KEY) or []
        return [stages] if isinstance(stages, str) else list(stages)

    ##################################################################
    # Connections
    ##################################################################

    def get_available_connections(self) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
        """Merge remote defaults, project configuration and stored credentials

        Later sources win field by field.
        """
        storage = unify_servers_declarations(self.storage.get(STORAGE_CONNECTIONS_KEY))
        configuration = unify_servers_declarations(self.config.get(CONFIG_CONNECTIONS_KEY))
        remote = unify_servers_declarations(self.config.get(CONFIG_REMOTE_CONNECTIONS_KEY))

        return replace_recursive(remote, configuration, storage)

    def get_connection_model(self, name: str) -> Optional[Connection]:
        """Get a connection as a data model"""
        declaration = self.get_available_connections().get(name)
        if declaration is None:
            return None
        return Connection.from_dict(name, declaration, stages=self.get_stages())

    def is_valid_connection(self, connection: Optional[str]) -> bool:
        """Check if a connection has servers declared"""
        if not connection:
            return False

        available = self.get_available_connections()
        return bool(available.get(connection, {}).get('servers'))

    def get_connections(self) -> List[str]:
        """Get the connections in use"""
        if self.context.connections:
            return list(self.context.connections)

        configured = self.config.get(CONFIG_DEFAULT_KEY) or []
        if isinstance(configured, str):
            configured = [configured]
        default = self.config.get(CONFIG_REMOTE_DEFAULT_KEY)

        connections = [name for name in configured if self.is_valid_connection(name)]
        if not connections and default:
            connections = [default]

        self._replace(connections=tuple(connections))

        return connections

    def set_connections(self, connections: Union[str, Iterable[str]]) -> None:
        """Set the active connections

        Args:
            connections: A name, a comma separated list or an iterable of names

        Raises:
            ConnectionError: If none of the connections is valid
        """
        if isinstance(connections, str):
            connections = connections.split(',')
        connections = [name.strip() for name in connections if name and name.strip()]

        filtered = [name for name in connections if self.is_valid_connection(name)]
        if not filtered:
            raise ConnectionError(connections)

        rejected = [name for name in connections if name not in filtered]
        if rejected:
            logger.warning(f"Ignoring invalid connection(s): {', '.join(rejected)}")

        connection = self.context.connection if self.context.connection in filtered else None
        self._replace(connections=tuple(filtered), connection=connection, handle=None)

    def get_connection(self) -> Optional[str]:
        """Get the active connection"""
        if self.context.connection:
            return self.context.connection

        connections = self.get_connections()
        connection = connections[0] if connections else None
        self._replace(connection=connection)

        return connection

    def set_connection(self, connection: str, server: int = 0) -> None:
        """Set the current connection and server"""
        if not self.is_valid_connection(connection):
            return
        if self.context.connection == connection and self.context.server == server:
            return

        self._replace(connection=connection, server=server, handle=None)
        self._notify()

    def get_connection_credentials(self, connection: Optional[str] = None) -> Dict[int, Dict[str, Any]]:
        """Get the servers of a connection keyed by their index

        The ``server`` option of the bound command restricts the servers
        returned, original indices preserved.
        """
        connection = connection or self.get_connection()
        servers = self.get_available_connections().get(connection, {}).get('servers', [])
        credentials = dict(enumerate(servers))

        allowed = self._allowed_servers()
        if allowed is not None:
            credentials = {index: server for index, server in credentials.items() if index in allowed}

        return credentials

    def _allowed_servers(self) -> Optional[set]:
        allowed = self._option('server')
        if allowed is None or allowed == '' or allowed == ():
            return None

        if isinstance(allowed, str):
            allowed = allowed.split(',')
        elif isinstance(allowed, int):
            allowed = [allowed]

        indices = set()
        for index in allowed:
            if str(index).strip() == '':
                continue
            try:
                indices.add(int(index))
            except (TypeError, ValueError):
                raise ConfigError(f"Invalid server index: {index}")

        return indices

    def get_server_credentials(self,
                               connection: Optional[str] = None,
                               server: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """Get the credentials of one server"""
        credentials = self.get_connection_credentials(connection)
        server = server if server is not None else self.context.server

        return credentials.get(server)

    def get_targets(self) -> List[Target]:
        """Every (connection, server, stage) the active connections cover"""
        stage = self.get_stage()
        targets = []
        for connection in self.get_connections():
            servers = self.get_connection_credentials(connection)
            multiserver = len(servers) > 1
            for server in servers:
                targets.append(Target(connection, server, stage, multiserver=multiserver))

        return targets

    def disconnect(self) -> None:
        """Flush the active connection(s)"""
        self._replace(connection=None, connections=None)
