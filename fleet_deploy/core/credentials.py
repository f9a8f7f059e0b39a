"""Repository and per-target credentials"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config import Config
from .target_resolver import TargetResolver
from ..constants import (
    ALREADY_DEFINED,
    CONFIG_LIVE_CREDENTIALS_KEY,
    CONFIG_REMOTE_CONNECTIONS_KEY,
    CONFIG_SCM_KEY,
    CREDENTIALS_IN_URL_PATTERN,
    DEFAULT_BRANCH,
    REPOSITORY_CREDENTIAL_FIELDS,
    SERVER_REQUIRED_FIELDS,
    STORAGE_CONNECTIONS_KEY,
    STORAGE_CREDENTIALS_KEY,
)
from ..utils.git_utils import GitScm, run_local

logger = logging.getLogger(__name__)


class CredentialStore:
    """Merges, persists and exposes credentials for the resolved targets"""

    def __init__(self,
                 config: Config,
                 storage: Config,
                 resolver: TargetResolver,
                 scm: Optional[GitScm] = None,
                 runner: Optional[Callable[[str], List[str]]] = None,
                 options: Optional[Callable[[], Optional[Mapping[str, Any]]]] = None):
        """Initialize credential store

        Args:
            config: Live configuration
            storage: Locally persisted state
            resolver: Resolver of the current target
            scm: SCM command builder
            runner: Runs a local command and returns its output lines
            options: Returns the options of the bound command, if any
        """
        self.config = config
        self.storage = storage
        self.resolver = resolver
        self.scm = scm or GitScm()
        self.runner = runner or run_local
        self._options = options

    def _option(self, name: str) -> Any:
        options = self._options() if self._options else None
        return (options or {}).get(name)

    ##################################################################
    # Repository
    ##################################################################

    def get_repository_credentials(self) -> Dict[str, Any]:
        """Configured SCM settings overridden by stored credentials"""
        configured = dict(self.config.get(CONFIG_SCM_KEY) or {})
        stored = dict(self.storage.get(STORAGE_CREDENTIALS_KEY) or {})

        return {**configured, **stored}

    def get_repository_endpoint(self) -> Optional[str]:
        """URL of the repository with the credentials embedded"""
        repository = self.get_repository_credentials()
        username = repository.get('username')
        password = repository.get('password')
        endpoint = repository.get('repository')

        if endpoint and (username or password):
            credentials = f"{username}:{password}" if password else f"{username}"
            credentials += '@'

            endpoint = CREDENTIALS_IN_URL_PATTERN.sub('https://', endpoint)
            endpoint = endpoint.replace('https://', f"https://{credentials}")

        return endpoint

    def needs_credentials(self) -> bool:
        """Whether the repository is reached over HTTPS

        SSH endpoints authenticate with keys and need nothing more.
        """
        endpoint = self.get_repository_endpoint() or ''
        return endpoint.startswith('https://')

    def get_missing_repository_credentials(self) -> List[str]:
        """Fields to ask for before the repository can be reached"""
        if not self.needs_credentials():
            return []

        repository = self.get_repository_credentials()
        if any(repository.get(field) for field in REPOSITORY_CREDENTIAL_FIELDS):
            return []

        return list(REPOSITORY_CREDENTIAL_FIELDS)

    def store_repository_credentials(self, credentials: Dict[str, Any]) -> None:
        """Persist repository credentials gathered from the user"""
        stored = dict(self.storage.get(STORAGE_CREDENTIALS_KEY) or {})
        stored.update({key: value for key, value in credentials.items() if value})
        self.storage.set(STORAGE_CREDENTIALS_KEY, stored)

    def get_repository_branch(self) -> str:
        """Branch to deploy

        The ``branch`` option wins, then the configured branch, then the
        branch currently checked out, then ``master``.
        """
        branch = self._option('branch')
        if branch:
            return branch

        output = self.runner(self.scm.current_branch())
        fallback = output[0].strip() if output else ''
        fallback = fallback or DEFAULT_BRANCH

        return self.config.get(f"{CONFIG_SCM_KEY}.branch") or fallback

    ##################################################################
    # Servers
    ##################################################################

    def get_missing_server_credentials(self,
                                       connection: Optional[str] = None,
                                       server: Optional[int] = None) -> List[str]:
        """Required server fields that resolve to nothing"""
        credentials = self.resolver.get_server_credentials(connection, server) or {}
        return [field for field in SERVER_REQUIRED_FIELDS if not credentials.get(field)]

    def sync_connection_credentials(self,
                                    connection: Optional[str] = None,
                                    credentials: Optional[Dict[str, Any]] = None,
                                    server: int = 0) -> None:
        """Persist new credentials and mirror them in the live configuration

        Args:
            connection: Connection name, defaults to the active one
            credentials: New credentials for the server, if any
            server: Server index
        """
        connection = connection or self.resolver.get_connection()

        if credentials:
            filtered = self.filter_unsavable_credentials(connection, server, credentials)
            self.storage.set(
                (STORAGE_CONNECTIONS_KEY, connection, 'servers', str(server)),
                filtered
            )

            handle = self.resolver.get_handle(connection, server)
            self.config.set((CONFIG_LIVE_CREDENTIALS_KEY, handle), dict(credentials))
            logger.debug(f"Stored credentials for {handle}")

        servers = self.resolver.get_available_connections().get(connection, {}).get('servers', [])
        self.config.set(
            CONFIG_REMOTE_CONNECTIONS_KEY.split('.') + [connection],
            {'servers': servers}
        )

    def filter_unsavable_credentials(self,
                                     connection: Optional[str],
                                     server: int,
                                     credentials: Dict[str, Any]) -> Dict[str, Any]:
        """Drop the credentials already defined elsewhere

        A field whose resolved value is the ``True`` sentinel is never
        written to disk.
        """
        defined = self.resolver.get_server_credentials(connection, server) or {}

        return {
            key: value for key, value in credentials.items()
            if defined.get(key) is not ALREADY_DEFINED
        }
