"""Exception hierarchy for dependency checking."""

from __future__ import annotations


class DependencyCheckError(Exception):
    """Base class for every error raised by this package."""


class ParseError(DependencyCheckError):
    """Raised when Gradle output cannot be parsed."""


class DependencyImportError(DependencyCheckError):
    """Raised when a saved dependency tree cannot be imported."""


class NoDependenciesFoundError(ParseError, DependencyImportError):
    """Raised when input holds no dependencies at all."""

    def __init__(self, message: str = "No dependencies found in input") -> None:
        super().__init__(message)


class InvalidLineError(ParseError):
    """Raised when a dependency line has an unexpected shape."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Failed to parse dependency line: {line}")
        self.line = line


class UnreadableFileError(DependencyImportError):
    """Raised when an import file cannot be read."""

    def __init__(self, path: str) -> None:
        super().__init__(f"The file could not be read: {path}")
        self.path = path


class RunnerError(DependencyCheckError):
    """Raised when running Gradle fails."""


class GradlewNotFoundError(RunnerError):
    """Raised when the Gradle wrapper script is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"gradlew not found at: {path}")
        self.path = path


class ExecutionFailedError(RunnerError):
    """Raised when Gradle exits with a failure status."""

    def __init__(self, exit_code: int, stderr: str) -> None:
        super().__init__(f"Gradle execution failed (exit code {exit_code}): {stderr}")
        self.exit_code = exit_code
        self.stderr = stderr


class LaunchFailedError(RunnerError):
    """Raised when Gradle could not be started."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to launch Gradle: {reason}")
        self.reason = reason


class ExportError(DependencyCheckError):
    """Raised when a report or tree cannot be written out."""