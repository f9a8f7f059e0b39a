"""Connection and target data models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..constants import HANDLE_SEPARATOR


@dataclass
class Server:
    """One credential bundle inside a connection"""
    index: int
    credentials: Dict[str, Any] = field(default_factory=dict)

    @property
    def host(self) -> Optional[str]:
        """Host of the server, if declared"""
        return self.credentials.get("host")


@dataclass
class Connection:
    """Named deployment target made of one or more servers"""
    name: str
    servers: List[Server] = field(default_factory=list)
    stages: List[str] = field(default_factory=list)

    @property
    def is_multiserver(self) -> bool:
        """Whether the connection declares more than one server"""
        return len(self.servers) > 1

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any],
                  stages: Optional[List[str]] = None) -> 'Connection':
        """Create from a unified ``{"servers": [...]}`` declaration"""
        servers = [
            Server(index=index, credentials=dict(credentials or {}))
            for index, credentials in enumerate(data.get("servers", []))
        ]
        return cls(name=name, servers=servers, stages=list(stages or []))


@dataclass(frozen=True)
class Target:
    """A resolved (connection, server, stage) triple a task runs against"""
    connection: str
    server: int = 0
    stage: Optional[str] = None
    multiserver: bool = False

    @property
    def handle(self) -> str:
        """Canonical key for this target"""
        if self.multiserver:
            parts = [self.connection, self.server, self.stage]
            parts = [part for part in parts if part is not None and part != ""]
        else:
            parts = [part for part in (self.connection, self.stage) if part]

        return HANDLE_SEPARATOR.join(str(part) for part in parts)

    def __str__(self) -> str:
        return self.handle
