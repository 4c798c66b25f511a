"""
Unit tests for the orchestration of an invocation.
"""

import io
import shutil
import tempfile
import unittest
import zipfile
from pathlib import Path
from unittest import mock

from lintcli.core.client import AnalysisClient
from lintcli.core.config import LintSettings, Options
from lintcli.ingestion.finder import InputFileFinder
from lintcli.orchestrator import ERROR, SUCCESS, Orchestrator
from lintcli.reporting.factory import ReportFactory
from lintcli.utils.logging_config import LogContext
from lintcli.utils.system import System

TODO_PLUGIN = '''
def analyze(input_file):
    for number, line in enumerate(input_file.read_text().splitlines(), start=1):
        if "TODO" in line:
            yield {"rule_key": "todo:S1135", "message": "Complete the task", "line": number}
'''


def create_exception():
    """Build an error wrapping a cause, as the client raises them."""
    error = RuntimeError("analysis failed")
    error.__cause__ = ValueError("invalid operation")
    return error


class OrchestratorTestCase(unittest.TestCase):
    """Shared fixtures: captured output and a mock client."""

    def setUp(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.log_context = LogContext()
        self.log_context.set_sinks(self.out, self.err)
        self.log_context.set_level("INFO")

        self.client = mock.create_autospec(AnalysisClient, instance=True)
        self.running = {"value": False}
        self.client.start.side_effect = self._start
        self.client.stop.side_effect = self._stop
        self.client.is_running.side_effect = lambda: self.running["value"]

        self.report_factory = mock.create_autospec(ReportFactory, instance=True)
        self.file_finder = mock.create_autospec(InputFileFinder, instance=True)

    def _start(self):
        self.running["value"] = True

    def _stop(self):
        self.running["value"] = False

    def _orchestrator(self, stdin=None, **options):
        orchestrator = Orchestrator(
            Options(**options),
            self.client,
            self.report_factory,
            self.file_finder,
            self.log_context,
        )
        if stdin is not None:
            orchestrator.set_in(io.StringIO(stdin))
        return orchestrator


class TestRun(OrchestratorTestCase):
    """Tests for single-pass and informational runs."""

    def test_successful_run(self):
        result = self._orchestrator().run()

        self.assertEqual(result, SUCCESS)
        self.client.start.assert_called_once()
        self.client.run_analysis.assert_called_once_with(
            Options(), self.report_factory, self.file_finder
        )
        self.client.stop.assert_called_once()
        self.assertIn("EXECUTION SUCCESS", self.out.getvalue())
        self.assertIn("Total time:", self.out.getvalue())
        self.assertEqual(self.err.getvalue(), "")

    def test_help(self):
        """Test that help does not touch the client."""
        result = self._orchestrator(help=True).run()

        self.assertEqual(result, SUCCESS)
        self.assertEqual(self.client.mock_calls, [])
        self.assertIn("Usage: lintcli", self.out.getvalue())

    def test_version(self):
        result = self._orchestrator(version=True).run()

        self.assertEqual(result, SUCCESS)
        self.assertEqual(self.client.mock_calls, [])
        self.assertIn("lintcli ", self.out.getvalue())

    def test_error_start(self):
        """Test that a client failing to start is never stopped."""
        self.client.start.side_effect = create_exception()

        result = self._orchestrator().run()

        self.assertEqual(result, ERROR)
        self.client.stop.assert_not_called()
        self.client.run_analysis.assert_not_called()
        self.assertIn("EXECUTION FAILURE", self.out.getvalue())
        self.assertIn("Error executing lintcli", self.err.getvalue())
        self.assertIn("invalid operation", self.err.getvalue())
        self.assertIn("-e switch", self.err.getvalue())

    def test_error_stop(self):
        def fail_stop():
            self._stop()
            raise create_exception()

        self.client.stop.side_effect = fail_stop

        result = self._orchestrator().run()

        self.assertEqual(result, ERROR)
        self.client.stop.assert_called_once()
        self.assertIn("EXECUTION FAILURE", self.out.getvalue())

    def test_error_analysis(self):
        """Test that the client is stopped after a failed pass."""
        self.client.run_analysis.side_effect = create_exception()

        result = self._orchestrator().run()

        self.assertEqual(result, ERROR)
        self.client.stop.assert_called_once()
        self.assertNotIn("EXECUTION SUCCESS", self.out.getvalue())
        self.assertIn("EXECUTION FAILURE", self.out.getvalue())

    def test_show_stack(self):
        self.client.run_analysis.side_effect = create_exception()

        result = self._orchestrator(show_stack=True).run()

        self.assertEqual(result, ERROR)
        err = self.err.getvalue()
        self.assertIn("analysis failed", err)
        self.assertIn("invalid operation", err)
        self.assertIn("Traceback", err)
        self.assertNotIn("-e switch", err)

    def test_verbose(self):
        self._orchestrator(verbose=True).run()
        self.assertTrue(self.log_context.is_debug_enabled())

        self._orchestrator(verbose=False).run()
        self.assertFalse(self.log_context.is_debug_enabled())


class TestInteractive(OrchestratorTestCase):
    """Tests for interactive sessions."""

    def test_one_line_one_pass(self):
        result = self._orchestrator(stdin="\n", interactive=True).run()

        self.assertEqual(result, SUCCESS)
        self.assertEqual(self.client.run_analysis.call_count, 1)
        self.client.start.assert_called_once()
        self.client.stop.assert_called_once()

    def test_two_lines_two_passes(self):
        result = self._orchestrator(stdin="\n\n", interactive=True).run()

        self.assertEqual(result, SUCCESS)
        self.assertEqual(self.client.run_analysis.call_count, 2)
        self.assertEqual(self.out.getvalue().count("EXECUTION SUCCESS"), 2)
        self.client.start.assert_called_once()
        self.client.stop.assert_called_once()

    def test_closed_input(self):
        """Test that end of input exits without running a pass."""
        result = self._orchestrator(stdin="", interactive=True).run()

        self.assertEqual(result, SUCCESS)
        self.client.run_analysis.assert_not_called()
        self.client.stop.assert_called_once()

    def test_no_input_stream(self):
        result = self._orchestrator(interactive=True).run()

        self.assertEqual(result, SUCCESS)
        self.client.run_analysis.assert_not_called()
        self.client.stop.assert_called_once()

    def test_failed_pass_ends_session(self):
        self.client.run_analysis.side_effect = create_exception()

        result = self._orchestrator(stdin="\n\n\n", interactive=True).run()

        self.assertEqual(result, ERROR)
        self.assertEqual(self.client.run_analysis.call_count, 1)
        self.client.stop.assert_called_once()


class TestExecute(OrchestratorTestCase):
    """Tests for full invocations through execute()."""

    def setUp(self):
        super().setUp()
        self.system = mock.Mock(spec=System)
        self.system.stdin = io.StringIO("")

    def test_unrecognized_option(self):
        Orchestrator.execute(["-bogus"], self.system, self.log_context)

        self.system.exit.assert_called_once_with(ERROR)
        self.assertIn(
            "ERROR: Error parsing arguments: Unrecognized option: -bogus",
            self.err.getvalue(),
        )

    def test_invalid_charset(self):
        Orchestrator.execute(["--charset", "invalid"], self.system, self.log_context)

        self.system.exit.assert_called_once_with(ERROR)
        self.assertIn("ERROR: Error creating charset: invalid", self.err.getvalue())

    def test_home_not_set(self):
        with mock.patch.dict("os.environ", {}, clear=True):
            Orchestrator.execute([], self.system, self.log_context)

        self.system.exit.assert_called_once_with(ERROR)
        err = self.err.getvalue()
        self.assertIn("Error loading plugins", err)
        self.assertIn("Setting not set: LINTCLI_HOME", err)

    def test_help_without_home(self):
        """Test that help works without an installation."""
        with mock.patch.dict("os.environ", {}, clear=True):
            Orchestrator.execute(["-h"], self.system, self.log_context)

        self.system.exit.assert_called_once_with(SUCCESS)
        self.assertIn("Usage: lintcli", self.out.getvalue())

    def test_version_without_home(self):
        with mock.patch.dict("os.environ", {}, clear=True):
            Orchestrator.execute(["--version"], self.system, self.log_context)

        self.system.exit.assert_called_once_with(SUCCESS)


class TestEndToEnd(OrchestratorTestCase):
    """Runs a real invocation against a plugin archive and a project."""

    def setUp(self):
        super().setUp()
        self.home = Path(tempfile.mkdtemp())
        self.project = Path(tempfile.mkdtemp())

        plugins_dir = self.home / "plugins"
        plugins_dir.mkdir()
        with zipfile.ZipFile(plugins_dir / "todo.zip", "w") as archive:
            archive.writestr("lintcli_plugin.py", TODO_PLUGIN)

        (self.project / "main.py").write_text("x = 1\n# TODO remove\n")

        self.system = mock.Mock(spec=System)
        self.system.stdin = io.StringIO("")

    def tearDown(self):
        shutil.rmtree(self.home)
        shutil.rmtree(self.project)

    def test_analysis_writes_report(self):
        environ = {LintSettings.HOME: str(self.home)}
        with mock.patch.dict("os.environ", environ, clear=True):
            Orchestrator.execute(
                [f"-Dproject.home={self.project}", "--charset", "utf-8"],
                self.system,
                self.log_context,
            )

        self.system.exit.assert_called_once_with(SUCCESS)
        report = self.project / ".lintcli" / "lintcli-report.html"
        self.assertTrue(report.exists())
        content = report.read_text(encoding="utf-8")
        self.assertIn("todo:S1135", content)
        self.assertIn("main.py", content)
        self.assertIn("1 issue", self.out.getvalue())
        self.assertIn("EXECUTION SUCCESS", self.out.getvalue())

    def test_empty_project(self):
        (self.project / "main.py").unlink()
        environ = {
            LintSettings.HOME: str(self.home),
            LintSettings.PROJECT_HOME: str(self.project),
        }
        with mock.patch.dict("os.environ", environ, clear=True):
            Orchestrator.execute(["--charset", "utf-8"], self.system, self.log_context)

        self.system.exit.assert_called_once_with(SUCCESS)
        self.assertIn("No files to analyze", self.out.getvalue())
        self.assertFalse((self.project / ".lintcli").exists())


if __name__ == "__main__":
    unittest.main()
