"""
Analysis engine interface and the default plugin-based engine.

The engine is the capability driven by the analysis client: it is
started with a set of plugin archives, analyzes batches of input
files while reporting issues through a callback, and is stopped to
release its plugins.
"""

import importlib.util
import logging
import zipimport
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, List, Mapping, Sequence

from lintcli.analysis.entities import InputFile, Issue

logger = logging.getLogger(__name__)

IssueSink = Callable[[Issue], None]

# Module every plugin archive must provide at its top level
PLUGIN_MODULE = "lintcli_plugin"

# Highest plugin API version understood by this engine
PLUGIN_API_VERSION = 1


class AnalysisEngine(ABC):
    """
    Abstract analysis engine.

    analyze() must deliver every issue to the sink before it returns.
    """

    @abstractmethod
    def start(self, plugins: Sequence[Path], properties: Mapping[str, str]) -> None:
        """Load the plugins and apply the global configuration."""
        pass

    @abstractmethod
    def analyze(
        self,
        input_files: Sequence[InputFile],
        issue_sink: IssueSink,
    ) -> None:
        """Analyze the files, reporting each issue to the sink."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Release all resources held by the engine."""
        pass


@dataclass
class LoadedPlugin:
    """A plugin module imported from an archive."""

    key: str
    location: Path
    module: ModuleType

    def analyze(self, input_file: InputFile) -> List[Issue]:
        results = self.module.analyze(input_file) or []
        return [self._to_issue(result, input_file) for result in results]

    def _to_issue(self, result: Any, input_file: InputFile) -> Issue:
        if isinstance(result, Issue):
            return result
        if isinstance(result, Mapping):
            return Issue.from_dict(result, default_file=input_file.path)
        raise TypeError(
            f"Plugin {self.key} returned {type(result).__name__}, expected an Issue or a mapping"
        )


class PluginEngine(AnalysisEngine):
    """
    Engine dispatching every input file to plugins loaded from archives.

    A plugin archive is a zip file (a .zip or a pure-Python wheel)
    holding a top-level ``lintcli_plugin`` module that defines
    ``analyze(input_file)``, returning Issues or issue mappings. It
    may also define ``KEY``, ``API_VERSION``, ``start(properties)``
    and ``stop()``.
    """

    def __init__(self):
        self.plugins: List[LoadedPlugin] = []

    def start(self, plugins: Sequence[Path], properties: Mapping[str, str]) -> None:
        loaded = [self._load_plugin(Path(location)) for location in plugins]

        started: List[LoadedPlugin] = []
        for plugin in loaded:
            hook = getattr(plugin.module, "start", None)
            try:
                if callable(hook):
                    hook(dict(properties))
            except Exception:
                logger.debug(f"Plugin {plugin.key} failed to start, stopping started plugins")
                self._stop_plugins(started)
                raise
            started.append(plugin)

        self.plugins = loaded
        logger.debug(f"Engine started with {len(loaded)} plugin(s)")

    def analyze(
        self,
        input_files: Sequence[InputFile],
        issue_sink: IssueSink,
    ) -> None:
        for input_file in input_files:
            logger.debug(f"Analyzing {input_file.path}")
            for plugin in self.plugins:
                for issue in plugin.analyze(input_file):
                    issue_sink(issue)

    def stop(self) -> None:
        plugins, self.plugins = self.plugins, []
        self._stop_plugins(plugins)
        logger.debug("Engine stopped")

    @staticmethod
    def _stop_plugins(plugins: Sequence[LoadedPlugin]) -> None:
        """Run the stop hooks, last started first."""
        for plugin in reversed(plugins):
            hook = getattr(plugin.module, "stop", None)
            if callable(hook):
                hook()

    def _load_plugin(self, location: Path) -> LoadedPlugin:
        """
        Import the plugin module from an archive.

        Raises:
            ValueError: If the archive is not a usable plugin.
        """
        try:
            importer = zipimport.zipimporter(str(location))
        except zipimport.ZipImportError as e:
            raise ValueError(f"Invalid plugin archive {location}: {e}") from e

        spec = importer.find_spec(PLUGIN_MODULE)
        if spec is None:
            raise ValueError(f"Plugin archive {location} has no {PLUGIN_MODULE} module")

        # Not registered in sys.modules: every archive uses the same module name
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        api_version = getattr(module, "API_VERSION", PLUGIN_API_VERSION)
        if api_version > PLUGIN_API_VERSION:
            raise ValueError(
                f"Plugin {location.name} requires API version {api_version}, "
                f"engine supports up to {PLUGIN_API_VERSION}"
            )
        if not callable(getattr(module, "analyze", None)):
            raise ValueError(f"Plugin {location.name} does not define analyze()")

        key = getattr(module, "KEY", None) or location.stem
        logger.debug(f"Loaded plugin {key} from {location}")
        return LoadedPlugin(key=key, location=location, module=module)
