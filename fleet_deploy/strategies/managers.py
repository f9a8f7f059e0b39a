"""Package managers of the supported runtimes"""

import json
import logging
import posixpath
import re
from typing import Any, Dict, List, Optional

from ..remote.base import CommandResult, RemoteShell


class PackageManager:
    """A dependency manager binary working on a manifest file"""

    binary: str = ""
    manifest: str = ""
    dependencies_folder: Optional[str] = None
    flags: Dict[str, List[str]] = {}

    def __init__(self, shell: RemoteShell):
        self.shell = shell
        self.logger = logging.getLogger(self.__class__.__name__)

    def get_binary(self) -> Optional[str]:
        """Path of the binary on the target"""
        return self.shell.which(self.binary)

    def get_manifest_path(self) -> Optional[str]:
        return self.shell.get_current_release_folder(self.manifest)

    def has_manifest(self) -> bool:
        """Whether the current release declares dependencies for this manager"""
        path = self.get_manifest_path()
        return bool(path) and self.shell.file_exists(path)

    def get_manifest_contents(self) -> Optional[str]:
        path = self.get_manifest_path()
        return self.shell.read_file(path) if path else None

    def is_executable(self) -> bool:
        """Binary installed and manifest present"""
        return self.has_manifest() and self.get_binary() is not None

    def get_dependencies_folder(self) -> Optional[str]:
        return self.dependencies_folder

    def command(self, action: str) -> str:
        """Full command line for an action"""
        return " ".join([self.binary, action] + list(self.flags.get(action, [])))

    def run_for_current_release(self, action: str) -> bool:
        """Run an action in the current release folder"""
        result: CommandResult = self.shell.run_for_current_release(self.command(action))
        if not result.success:
            self.logger.error(f"{self.binary} {action} failed with status {result.status}")
        return result.success


class JsonManifestMixin:
    """Managers whose manifest is a JSON document"""

    def get_manifest(self) -> Dict[str, Any]:
        contents = self.get_manifest_contents()
        if not contents:
            return {}
        try:
            data = json.loads(contents)
        except json.JSONDecodeError:
            self.logger.warning(f"Unreadable {self.manifest}")
            return {}
        return data if isinstance(data, dict) else {}


class Npm(JsonManifestMixin, PackageManager):
    binary = "npm"
    manifest = "package.json"
    dependencies_folder = "node_modules"
    flags = {
        "install": ["--no-audit", "--no-fund"],
    }


class Composer(JsonManifestMixin, PackageManager):
    binary = "composer"
    manifest = "composer.json"
    dependencies_folder = "vendor"
    flags = {
        "install": ["--no-interaction", "--no-dev", "--prefer-dist"],
        "update": ["--no-interaction", "--no-dev", "--prefer-dist"],
    }


class Bundler(PackageManager):
    binary = "bundle"
    manifest = "Gemfile"
    dependencies_folder = posixpath.join("vendor", "bundle")
    flags = {
        "install": ["--deployment"],
    }

    def get_ruby_requirement(self) -> Optional[str]:
        """Ruby version pinned in the Gemfile"""
        contents = self.get_manifest_contents() or ""
        match = re.search(r"""^\s*ruby\s+['"]([^'"]+)['"]""", contents, re.MULTILINE)
        return match.group(1) if match else None
