"""
Analysis client.

Owns the lifecycle of the analysis engine and runs analysis passes:
collect the project files, analyze them into a fresh issue collector
and hand the collected issues to the report factory.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import List, Tuple

from lintcli.analysis.engine import AnalysisEngine, PluginEngine
from lintcli.analysis.entities import Issue
from lintcli.core.config import Config, LintSettings, Options
from lintcli.core.exceptions import (
    AnalysisError,
    ConfigurationError,
    EngineStartError,
    EngineStopError,
    IllegalStateError,
)
from lintcli.core.plugins import PluginSet, resolve_plugins
from lintcli.utils.validation import validate_directory

logger = logging.getLogger(__name__)


class ClientState(Enum):
    """Lifecycle state of an analysis client."""
    NOT_STARTED = "not started"
    RUNNING = "running"
    STOPPED = "stopped"


class IssueCollector:
    """Records issues in the order the engine reports them."""

    def __init__(self):
        self._issues: List[Issue] = []

    def handle(self, issue: Issue) -> None:
        self._issues.append(issue)

    def get(self) -> Tuple[Issue, ...]:
        return tuple(self._issues)


class AnalysisClient:
    """
    Lifecycle wrapper around an analysis engine.

    The client goes through NOT_STARTED -> RUNNING -> STOPPED exactly
    once. Analyses may only run while it is RUNNING.
    """

    def __init__(self, engine: AnalysisEngine, plugins: PluginSet = (), options: Options = None):
        self.engine = engine
        self.plugins = tuple(plugins)
        self.options = options or Options()
        self.state = ClientState.NOT_STARTED

    @classmethod
    def create(cls, options: Options, engine: AnalysisEngine = None) -> "AnalysisClient":
        """
        Build a client using the plugins of the installation.

        Raises:
            ConfigurationError: If no installation root is configured.
            PluginResolutionError: If the installation root is unusable.
        """
        plugins = resolve_plugins()
        return cls(engine or PluginEngine(), plugins, options)

    def is_running(self) -> bool:
        return self.state is ClientState.RUNNING

    def start(self) -> None:
        """
        Start the engine with the resolved plugins.

        Raises:
            IllegalStateError: If the client was already started.
            EngineStartError: If the engine rejects its configuration.
        """
        self._check_state("start", ClientState.NOT_STARTED)
        logger.debug(f"Starting engine with {len(self.plugins)} plugin(s)")
        try:
            self.engine.start(self.plugins, dict(self.options.properties))
        except Exception as e:
            raise EngineStartError(f"Unable to start analysis engine: {e}", cause=e)
        self.state = ClientState.RUNNING

    def run_analysis(self, options: Options, report_factory, file_finder) -> None:
        """
        Run one analysis pass over the project.

        No report is written when the project has no input file.

        Args:
            options: Invocation options.
            report_factory: Renders the collected issues.
            file_finder: Collects the input files of the project.

        Raises:
            IllegalStateError: If the client is not running.
            ConfigurationError: If no project root is configured or it
                is not a readable directory.
            AnalysisError: If collecting or analyzing files fails.
            ReportWriteError: If a report cannot be written.
        """
        self._check_state("run analysis", ClientState.RUNNING)

        project_home = self._project_home(options)
        try:
            input_files = file_finder.collect(project_home)
        except OSError as e:
            raise AnalysisError(f"Unable to collect files in {project_home}", cause=e)

        if not input_files:
            logger.info("No files to analyze")
            return

        logger.info(f"Analyzing {len(input_files)} file(s) in {project_home}")
        collector = IssueCollector()
        try:
            self.engine.analyze(input_files, collector.handle)
        except Exception as e:
            raise AnalysisError(f"Analysis failed: {e}", cause=e)

        report_factory.render(collector.get(), options, project_home, input_files)

    def stop(self) -> None:
        """
        Stop the engine.

        The client is STOPPED afterwards even if the engine fails to
        release its resources.

        Raises:
            IllegalStateError: If the client is not running.
            EngineStopError: If the engine fails to stop.
        """
        self._check_state("stop", ClientState.RUNNING)
        self.state = ClientState.STOPPED
        try:
            self.engine.stop()
        except Exception as e:
            raise EngineStopError(f"Unable to stop analysis engine: {e}", cause=e)

    @staticmethod
    def _project_home(options: Options) -> Path:
        """Resolve the project root and check it is a readable directory."""
        project_home = Config.get_project_home(options)

        if options.properties.get(LintSettings.PROJECT_HOME_PROPERTY):
            setting = LintSettings.PROJECT_HOME_PROPERTY
        else:
            setting = LintSettings.PROJECT_HOME

        is_valid, error = validate_directory(project_home, setting)
        if not is_valid:
            raise ConfigurationError(f"Invalid project home: {error}", setting=setting)
        return project_home

    def _check_state(self, operation: str, expected: ClientState) -> None:
        if self.state is not expected:
            raise IllegalStateError(operation, self.state.value)
