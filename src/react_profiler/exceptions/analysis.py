"""Analysis-related exceptions: loading and decoding analyzer inputs."""

from pathlib import Path
from typing import Dict, Optional

from .base import ProfilerError


class AnalysisError(ProfilerError):
    """Base class for analysis-related errors."""
    pass


class InputLoadError(AnalysisError):
    """Raised when an input capture cannot be read or decoded."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot load input file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class InputFormatError(AnalysisError):
    """Raised when an input decodes but does not have the expected shape."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Malformed {source} input",
            details={"source": source, "reason": reason},
        )
        self.source = source
        self.reason = reason


class BuildStatsError(AnalysisError):
    """Raised when the bundler cannot produce build statistics."""

    def __init__(self, reason: str, command: Optional[str] = None):
        details: Dict[str, str] = {"reason": reason}
        if command is not None:
            details["command"] = command

        super().__init__("Failed to generate build statistics", details=details)
        self.reason = reason
        self.command = command
