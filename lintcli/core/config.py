"""
Configuration management for lintcli.

Holds the immutable invocation options and resolves the process-wide
settings (installation root, project root, charset) from the
environment, optionally populated from a .env file.
"""

import codecs
import locale
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from lintcli.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class LintSettings:
    """Names of the settings read by lintcli."""

    # Installation root containing the plugins/ directory
    HOME = "LINTCLI_HOME"

    # Root directory of the project to analyze
    PROJECT_HOME = "LINTCLI_PROJECT_HOME"

    # Property (-D project.home=...) overriding PROJECT_HOME
    PROJECT_HOME_PROPERTY = "project.home"

    # Property naming the project in reports
    PROJECT_NAME_PROPERTY = "project.name"

    # Hidden directory, under the project root, receiving reports
    WORK_DIR = ".lintcli"


@dataclass(frozen=True)
class Options:
    """
    Options of one lintcli invocation.

    Resolved once from the command line and never modified; the same
    value is reused by every pass of an interactive session.
    """

    help: bool = False
    version: bool = False
    verbose: bool = False
    show_stack: bool = False
    interactive: bool = False
    charset: Optional[str] = None
    src: Optional[str] = None
    tests: Optional[str] = None
    html_report: Optional[str] = None
    properties: Mapping[str, str] = field(default_factory=dict)


def resolve_charset(name: Optional[str]) -> str:
    """
    Resolve a character encoding name to its canonical codec name.

    Args:
        name: Encoding name, or None for the platform default.

    Returns:
        Canonical codec name, usable with open() and str.encode().

    Raises:
        ConfigurationError: If the name is not a known encoding.
    """
    if name is None:
        name = locale.getpreferredencoding(False)
    try:
        return codecs.lookup(name).name
    except LookupError as e:
        raise ConfigurationError(f"Error creating charset: {name}", cause=e)


class Config:
    """
    Access to process-wide settings.

    Settings come from environment variables; load_env() additionally
    reads a .env file without overriding variables already set.
    """

    @staticmethod
    def load_env(dotenv_path: Optional[str] = None) -> bool:
        """
        Load settings from a .env file into the environment.

        Args:
            dotenv_path: Explicit file; searched from the working
                directory upwards when omitted.

        Returns:
            True if a file was found and loaded.
        """
        path = dotenv_path or find_dotenv(usecwd=True)
        if not path:
            return False
        logger.debug(f"Loading settings from {path}")
        return load_dotenv(path, override=False)

    @staticmethod
    def get_setting(name: str, environ: Mapping[str, str] = None) -> Optional[str]:
        """Get a setting, treating empty values as unset."""
        environ = os.environ if environ is None else environ
        value = environ.get(name)
        return value or None

    @classmethod
    def get_home(cls, environ: Mapping[str, str] = None) -> Path:
        """
        Get the installation root.

        Raises:
            ConfigurationError: If LINTCLI_HOME is not set.
        """
        value = cls.get_setting(LintSettings.HOME, environ)
        if value is None:
            raise ConfigurationError(
                f"Can't find lintcli home. Setting not set: {LintSettings.HOME}",
                setting=LintSettings.HOME,
            )
        return Path(value)

    @classmethod
    def get_project_home(cls, options: Options, environ: Mapping[str, str] = None) -> Path:
        """
        Get the root directory of the project to analyze.

        The project.home property takes precedence over the
        LINTCLI_PROJECT_HOME setting.

        Raises:
            ConfigurationError: If neither is set.
        """
        value = options.properties.get(LintSettings.PROJECT_HOME_PROPERTY)
        if not value:
            value = cls.get_setting(LintSettings.PROJECT_HOME, environ)
        if not value:
            raise ConfigurationError(
                f"Can't find project home. Setting not set: {LintSettings.PROJECT_HOME}",
                setting=LintSettings.PROJECT_HOME,
            )
        return Path(value)


def parse_properties(definitions) -> Dict[str, str]:
    """
    Parse KEY=VALUE definitions into a property bag.

    A definition without '=' sets the key to "true".
    """
    properties = {}
    for definition in definitions:
        key, sep, value = definition.partition("=")
        properties[key.strip()] = value if sep else "true"
    return properties
