"""Path resolution on the remote hosts"""

import posixpath
from typing import Optional, Union

from ..constants import (
    CURRENT_FOLDER,
    DEFAULT_ROOT_DIRECTORY,
    RELEASES_FOLDER,
    SHARED_FOLDER,
)


class PathResolver:
    """Resolves the folders of one application on a remote host

    Layout::

        <root>/<application>[/<stage>]/
        ├── current -> releases/20240120101500
        ├── releases/
        └── shared/
    """

    def __init__(self,
                 application_name: str,
                 root_directory: str = DEFAULT_ROOT_DIRECTORY,
                 stage: Optional[str] = None):
        """Initialize path resolver

        Args:
            application_name: Name of the deployed application
            root_directory: Folder holding every application
            stage: Stage, adds one folder level when set
        """
        self.application_name = application_name
        self.root_directory = root_directory or DEFAULT_ROOT_DIRECTORY
        self.stage = stage

    def get_home_folder(self) -> str:
        """Get the application folder, stage included"""
        parts = [self.root_directory, self.application_name]
        if self.stage:
            parts.append(self.stage)

        return posixpath.join(*parts)

    def get_folder(self, *parts: str) -> str:
        """Get a folder relative to the application folder"""
        return posixpath.join(self.get_home_folder(), *parts)

    def get_releases_folder(self) -> str:
        return self.get_folder(RELEASES_FOLDER)

    def get_release_folder(self, release: Union[int, str], path: Optional[str] = None) -> str:
        """Get the folder of a release, or a path inside it"""
        folder = posixpath.join(self.get_releases_folder(), str(release))
        return posixpath.join(folder, path) if path else folder

    def get_current_folder(self) -> str:
        return self.get_folder(CURRENT_FOLDER)

    def get_shared_folder(self, path: Optional[str] = None) -> str:
        """Get the shared folder, or a path inside it"""
        folder = self.get_folder(SHARED_FOLDER)
        return posixpath.join(folder, path) if path else folder
