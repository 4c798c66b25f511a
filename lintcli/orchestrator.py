"""
Orchestration of one lintcli invocation.

Parses the command line, brings the analysis client up, runs a single
pass or an interactive loop of passes, shuts the client down and maps
the outcome to an exit code.
"""

import logging
import time
from typing import Optional, Sequence, TextIO

from lintcli.cli import parse_options, usage_text, version_text
from lintcli.core.client import AnalysisClient
from lintcli.core.config import Options, resolve_charset
from lintcli.core.exceptions import ArgumentParsingError, ConfigurationError, iter_causes
from lintcli.ingestion.finder import InputFileFinder
from lintcli.reporting.factory import ReportFactory
from lintcli.utils.logging_config import LogContext
from lintcli.utils.system import System

logger = logging.getLogger(__name__)

SUCCESS = 0
ERROR = 1


class Stats:
    """Wall-clock timing of an invocation."""

    def __init__(self):
        self.started_at: Optional[float] = None

    def start(self) -> None:
        self.started_at = time.monotonic()

    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        return time.monotonic() - self.started_at


def show_error(message: str, error: BaseException, show_stack: bool) -> None:
    """
    Log an error and the exceptions it wraps.

    With show_stack the full traceback, chained causes included, is
    logged. Otherwise only the messages are, one per distinct cause.
    """
    if show_stack:
        logger.error(message, exc_info=error)
        return

    logger.error(message)
    logger.error(str(error))

    previous = str(error)
    for cause in iter_causes(error):
        cause_message = str(cause)
        if cause_message and cause_message != previous:
            logger.error(f"Caused by: {cause_message}")
            previous = cause_message

    logger.error("")
    logger.error("Re-run lintcli using the -e switch to see the full stack trace")


class Orchestrator:
    """
    Runs the analysis passes of one invocation.

    The client is started once, used for every pass, and stopped once
    on every path where it was started.
    """

    def __init__(
        self,
        options: Options,
        client: AnalysisClient,
        report_factory: ReportFactory,
        file_finder: InputFileFinder,
        log_context: Optional[LogContext] = None,
    ):
        self.options = options
        self.client = client
        self.report_factory = report_factory
        self.file_finder = file_finder
        self.log_context = log_context or LogContext()
        self.input: Optional[TextIO] = None

    def set_in(self, stream: TextIO) -> None:
        """Set the stream read by interactive mode."""
        self.input = stream

    def run(self) -> int:
        """
        Run the invocation.

        Returns:
            SUCCESS or ERROR.
        """
        self.log_context.set_verbose(self.options.verbose)

        if self.options.help:
            logger.info(usage_text())
            return SUCCESS

        if self.options.version:
            logger.info(version_text())
            return SUCCESS

        stats = Stats()
        stats.start()

        try:
            self.client.start()
            try:
                if self.options.interactive:
                    self._run_interactive(stats)
                else:
                    self._run_once()
            finally:
                if self.client.is_running():
                    self.client.stop()
        except Exception as e:
            self._display_result(stats, "FAILURE")
            show_error("Error executing lintcli", e, self.options.show_stack)
            return ERROR

        if not self.options.interactive:
            self._display_result(stats, "SUCCESS")
        return SUCCESS

    def _run_once(self) -> None:
        self.client.run_analysis(self.options, self.report_factory, self.file_finder)

    def _run_interactive(self, stats: Stats) -> None:
        # A failing pass propagates and ends the session
        while self._wait_for_user():
            self._run_once()
            self._display_result(stats, "SUCCESS")

    def _wait_for_user(self) -> bool:
        """Block until a line is entered; False once input is closed."""
        if self.input is None:
            return False
        logger.info("")
        logger.info("Press ENTER to run the analysis, or close the input to exit")
        line = self.input.readline()
        return line != ""

    def _display_result(self, stats: Stats, result: str) -> None:
        logger.info("")
        logger.info("-" * 72)
        logger.info(f"EXECUTION {result}")
        logger.info("-" * 72)
        logger.info(f"Total time: {stats.elapsed():.3f}s")

    @classmethod
    def execute(
        cls,
        args: Sequence[str],
        system: System,
        log_context: Optional[LogContext] = None,
    ) -> None:
        """
        Run a full invocation and exit the process with its code.

        Args:
            args: Command-line arguments, without the program name.
            system: Process wrapper used for exit and standard input.
            log_context: Logging destination; the current one is kept
                when omitted.
        """
        log_context = log_context or LogContext()

        try:
            options = parse_options(args)
        except ArgumentParsingError as e:
            logger.error(f"Error parsing arguments: {e}")
            system.exit(ERROR)
            return

        try:
            charset = resolve_charset(options.charset)
        except ConfigurationError as e:
            logger.error(str(e))
            system.exit(ERROR)
            return

        log_context.set_verbose(options.verbose)

        report_factory = ReportFactory(charset, options.html_report)
        file_finder = InputFileFinder(options.src, options.tests, charset)

        client = None
        if not (options.help or options.version):
            try:
                client = AnalysisClient.create(options)
            except Exception as e:
                show_error("Error loading plugins", e, options.show_stack)
                system.exit(ERROR)
                return

        orchestrator = cls(options, client, report_factory, file_finder, log_context)
        orchestrator.set_in(system.stdin)
        system.exit(orchestrator.run())
