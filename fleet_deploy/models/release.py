"""Release models for fleet-deploy"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ReleaseHistory:
    """Known releases of one target and the one currently active"""
    releases: List[int] = field(default_factory=list)
    current: Optional[int] = None

    def __post_init__(self):
        self.releases = sorted(set(int(release) for release in self.releases))
        if self.current is not None:
            self.current = int(self.current)

    @property
    def newest_first(self) -> List[int]:
        """Releases ordered from the most recent to the oldest"""
        return list(reversed(self.releases))

    def previous(self) -> Optional[int]:
        """Release immediately before the current one"""
        if self.current not in self.releases:
            return None

        position = self.releases.index(self.current)
        return self.releases[position - 1] if position > 0 else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'releases': self.releases,
            'current': self.current,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ReleaseHistory':
        """Create from dictionary"""
        data = data or {}
        return cls(
            releases=data.get('releases', []),
            current=data.get('current'),
        )
