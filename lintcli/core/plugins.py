"""
Plugin discovery.

Resolves the plugin archives shipped in the installation root. This
only locates archives; loading them is left to the analysis engine.
"""

import logging
from pathlib import Path
from typing import Mapping, Optional, Tuple

from lintcli.core.config import Config, LintSettings
from lintcli.core.exceptions import PluginResolutionError
from lintcli.utils.validation import validate_directory

logger = logging.getLogger(__name__)

PluginSet = Tuple[Path, ...]

# Directory, under the installation root, holding plugin archives
PLUGINS_DIR = "plugins"

# File extensions recognized as plugin archives
PLUGIN_EXTENSIONS = (".zip", ".whl")


def resolve_plugins(home: Optional[Path] = None, environ: Mapping[str, str] = None) -> PluginSet:
    """
    Resolve the plugin archives of the installation.

    Only the immediate content of <home>/plugins is scanned. A missing
    plugins directory or an empty one yields an empty set.

    Args:
        home: Installation root; read from LINTCLI_HOME when omitted.
        environ: Environment to read settings from.

    Returns:
        Absolute paths of the plugin archives, sorted by file name.

    Raises:
        ConfigurationError: If no installation root is configured.
        PluginResolutionError: If the installation root is unusable.
    """
    if home is None:
        home = Config.get_home(environ)

    is_valid, error = validate_directory(home, LintSettings.HOME)
    if not is_valid:
        raise PluginResolutionError(
            f"Invalid lintcli home: {error}",
            details={"home": str(home)},
        )

    plugins_dir = Path(home).resolve() / PLUGINS_DIR
    if not plugins_dir.is_dir():
        logger.debug(f"No plugins directory in {home}")
        return ()

    try:
        plugins = tuple(
            path for path in sorted(plugins_dir.iterdir())
            if path.is_file() and path.suffix.lower() in PLUGIN_EXTENSIONS
        )
    except OSError as e:
        raise PluginResolutionError(
            f"Unable to list plugins in {plugins_dir}",
            details={"home": str(home)},
            cause=e,
        )

    for plugin in plugins:
        logger.debug(f"Plugin found: {plugin}")
    return plugins
