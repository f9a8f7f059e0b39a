"""Release history and activation for one target"""

import logging
import shlex
from datetime import datetime
from typing import Any, List, Optional

from .config import Config
from .paths import PathResolver
from ..constants import (
    NO_RELEASES_MESSAGE,
    RELEASE_ID_FORMAT,
    ROLLBACK_QUESTION,
    STORAGE_RELEASES_KEY,
)
from ..models.release import ReleaseHistory
from ..models.result import RollbackResult
from ..utils.formatting import format_release

logger = logging.getLogger(__name__)


def normalize_release(release: Any) -> Optional[int]:
    """Turn a release identifier into an int, None if it is not one"""
    if isinstance(release, bool):
        return None
    try:
        return int(str(release).strip())
    except (TypeError, ValueError):
        return None


class ReleaseController:
    """Tracks the releases of one target and which one is current

    This is the only place the current release is changed.
    """

    def __init__(self,
                 storage: Config,
                 handle: str,
                 shell=None,
                 paths: Optional[PathResolver] = None):
        """Initialize release controller

        Args:
            storage: Locally persisted state holding the histories
            handle: Handle of the target
            shell: Shell of the target, the ``current`` symlink is updated
                through it when given
            paths: Folder layout of the application on the target
        """
        self.storage = storage
        self.handle = handle
        self.shell = shell
        self.paths = paths

    @property
    def _key(self):
        return (STORAGE_RELEASES_KEY, self.handle)

    def _history(self) -> ReleaseHistory:
        return ReleaseHistory.from_dict(self.storage.get(self._key))

    def _save(self, history: ReleaseHistory) -> None:
        self.storage.set(self._key, history.to_dict())

    ##################################################################
    # Accessors
    ##################################################################

    def get_releases(self) -> List[int]:
        """Known releases, oldest first"""
        return self._history().releases

    def get_current_release(self) -> Optional[int]:
        return self._history().current

    def get_previous_release(self) -> Optional[int]:
        return self._history().previous()

    ##################################################################
    # Mutators
    ##################################################################

    def create_release(self, now: Optional[datetime] = None) -> int:
        """Register a new release identified by its creation time"""
        release = int((now or datetime.now()).strftime(RELEASE_ID_FORMAT))
        history = self._history()
        history.releases = sorted(set(history.releases + [release]))
        self._save(history)

        return release

    def sync_with_remote(self) -> List[int]:
        """Refresh the history from the releases folder of the target

        The stored history is kept when the folder cannot be listed or the
        shell only pretends to run commands.
        """
        if self.shell is None or self.paths is None or self.shell.pretend:
            return self.get_releases()

        listing = self.shell.run(f"ls -1 {shlex.quote(self.paths.get_releases_folder())}")
        if not listing.success:
            logger.warning(f"Unable to list the releases of {self.handle}, keeping the stored history")
            return self.get_releases()

        releases = [normalize_release(folder) for folder in listing.lines()]

        history = self._history()
        history.releases = sorted(set(release for release in releases if release is not None))
        if history.current not in history.releases:
            history.current = history.releases[-1] if history.releases else None
        self._save(history)

        return history.releases

    def activate(self, release: Any) -> bool:
        """Make a known release the current one

        Unknown identifiers are ignored and the current release stays.

        Returns:
            True if the release was activated
        """
        history = self._history()
        normalized = normalize_release(release)
        if normalized is None or normalized not in history.releases:
            logger.debug(f"Ignoring unknown release {release} on {self.handle}")
            return False

        history.current = normalized
        self._save(history)

        if self.shell is not None and self.paths is not None:
            self.shell.symlink(
                self.paths.get_release_folder(normalized),
                self.paths.get_current_folder()
            )

        logger.info(f"Release {normalized} is now current on {self.handle}")
        return True

    def rollback_to(self, release: Any) -> RollbackResult:
        """Roll back to a specific release"""
        if self.activate(release):
            return RollbackResult(
                success=True,
                release=normalize_release(release),
                message=f"Rolled back to release {release}"
            )

        return RollbackResult(
            success=False,
            release=self.get_current_release(),
            message=f"Unknown release {release}, current release unchanged"
        )

    def rollback_to_previous(self) -> RollbackResult:
        """Roll back to the release before the current one"""
        previous = self.get_previous_release()
        if previous is None:
            return RollbackResult(
                success=False,
                release=self.get_current_release(),
                message=NO_RELEASES_MESSAGE,
                unavailable=True
            )

        return self.rollback_to(previous)

    def rollback_interactive(self, prompt) -> RollbackResult:
        """Let the user pick the release to roll back to

        Args:
            prompt: Object with ``ask_with(question, choices)`` returning
                the 1-based position of the answer

        Returns:
            Rollback result
        """
        releases = self._history().newest_first
        if not releases:
            return RollbackResult(success=False, message=NO_RELEASES_MESSAGE, unavailable=True)

        choices = [format_release(release) for release in releases]
        position = prompt.ask_with(ROLLBACK_QUESTION, choices)

        if not isinstance(position, int) or not 1 <= position <= len(releases):
            return RollbackResult(
                success=False,
                release=self.get_current_release(),
                message=f"Invalid choice {position}, current release unchanged"
            )

        return self.rollback_to(releases[position - 1])
