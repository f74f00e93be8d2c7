"""Base formatter interface for React Profiler report rendering."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..models import AnalysisResult


class BaseFormatter(ABC):
    """Abstract base class for report formatters.

    File formatters set ``filename``; console-only formatters leave it None.
    """

    filename: Optional[str] = None

    @abstractmethod
    def render(self, result: AnalysisResult) -> None:
        """Render the result to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, result: AnalysisResult) -> str:
        """Return formatted string representation of the result."""

    def write(self, result: AnalysisResult, output_dir: Path) -> Path:
        if self.filename is None:
            raise ValueError(f"{type(self).__name__} does not write report files")
        path = Path(output_dir) / self.filename
        path.write_text(self.format(result), encoding="utf-8")
        return path
