# File: xchedule/core/config_discovery.py
"""
Finds event config files in a workspace directory by identifier prefix.
"""

from pathlib import Path
from typing import List, Union

from xchedule.core.config_manager import Config
from xchedule.core.config_source import ConfigSource
from xchedule.exceptions import ConfigIOError, ResolutionError
from xchedule.utils.logger import LoggerMixin


class ConfigDiscovery(LoggerMixin):
    """Locates and loads the config file for a schedule identifier."""

    def candidates(self, prefix: str, workspace_dir: Union[str, Path]) -> List[Path]:
        """
        List readable config files in ``workspace_dir`` starting with ``prefix``.

        Only the top level of the directory is searched. A file named exactly
        ``prefix`` comes first, the rest follow sorted by file name, so the
        first match is the same on every platform.
        """
        workspace = Path(workspace_dir)
        try:
            entries = sorted(workspace.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise ConfigIOError(f"Fail to read events under dir {workspace}: {e}") from e

        self.logger.debug(f"Read from dir: {workspace}, files: {[p.name for p in entries]}")

        matches = [
            path for path in entries
            if path.name.startswith(prefix)
            and path.is_file()
            and Config.is_supported_type(path.suffix)
        ]
        return sorted(matches, key=lambda p: p.stem != prefix)

    def find(self, prefix: str, workspace_dir: Union[str, Path]) -> ConfigSource:
        """
        Load the first config file whose name starts with ``prefix``.

        Args:
            prefix: Schedule identifier
            workspace_dir: Directory to search

        Returns:
            ConfigSource for the file, format taken from its extension

        Raises:
            ResolutionError: No matching file
            ConfigIOError: Workspace or file can't be read
        """
        matches = self.candidates(prefix, workspace_dir)
        if not matches:
            raise ResolutionError(f"Can't find event config file for '{prefix}' in {workspace_dir}")

        if len(matches) > 1:
            self.logger.warning(
                f"Several files match '{prefix}': {[p.name for p in matches]}, using {matches[0].name}"
            )

        path = matches[0]
        self.logger.info(f"Read from file: {path.name} with config type: {path.suffix[1:]}")
        return ConfigSource.from_file(path)
