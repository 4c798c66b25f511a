"""
Custom exceptions for lintcli.

Provides a hierarchy of exceptions for the different phases of an
invocation, enabling precise error handling and clear failure reporting.
"""

from typing import Iterator, Optional


class LintError(Exception):
    """Base exception for all lintcli errors."""

    def __init__(
        self,
        message: str,
        stage: str = None,
        details: dict = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.details = details or {}
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> Optional[BaseException]:
        """The wrapped exception, if any."""
        return self.__cause__

    def __str__(self):
        base_msg = super().__str__()
        if self.stage:
            return f"[{self.stage}] {base_msg}"
        return base_msg


class ArgumentParsingError(LintError):
    """Raised when the command line cannot be parsed."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, details=details)


class ConfigurationError(LintError):
    """Raised when a required setting is missing or invalid."""

    def __init__(self, message: str, setting: str = None, cause: BaseException = None):
        super().__init__(message, details={"setting": setting} if setting else None, cause=cause)
        self.setting = setting


class PluginResolutionError(LintError):
    """Raised when the installation root cannot be scanned for plugins."""

    def __init__(self, message: str, details: dict = None, cause: BaseException = None):
        super().__init__(message, stage="Plugins", details=details, cause=cause)


class EngineStartError(LintError):
    """Raised when the analysis engine rejects its configuration."""

    def __init__(self, message: str, details: dict = None, cause: BaseException = None):
        super().__init__(message, stage="EngineStart", details=details, cause=cause)


class AnalysisError(LintError):
    """Raised when an analysis pass fails."""

    def __init__(self, message: str, details: dict = None, cause: BaseException = None):
        super().__init__(message, stage="Analysis", details=details, cause=cause)


class ReportWriteError(LintError):
    """Raised when a report artifact cannot be written."""

    def __init__(self, message: str, details: dict = None, cause: BaseException = None):
        super().__init__(message, stage="Report", details=details, cause=cause)


class EngineStopError(LintError):
    """Raised when the analysis engine fails to release its resources."""

    def __init__(self, message: str, details: dict = None, cause: BaseException = None):
        super().__init__(message, stage="EngineStop", details=details, cause=cause)


class IllegalStateError(LintError):
    """Raised when the analysis client lifecycle is used out of order."""

    def __init__(self, operation: str, state: str):
        super().__init__(
            f"Cannot {operation} while client is {state}",
            details={"operation": operation, "state": state},
        )


def iter_causes(error: BaseException) -> Iterator[BaseException]:
    """
    Walk the chain of exceptions wrapped by an error.

    Follows explicit causes first and implicit context otherwise,
    stopping on cycles.

    Args:
        error: Exception whose causes should be listed.

    Yields:
        Each wrapped exception, outermost first. The error itself
        is not included.
    """
    seen = {id(error)}
    current = error
    while True:
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__context__ is not None and not current.__suppress_context__:
            current = current.__context__
        else:
            return
        if id(current) in seen:
            return
        seen.add(id(current))
        yield current
