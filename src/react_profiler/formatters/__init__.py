"""Report formatters for React Profiler."""

from pathlib import Path
from typing import Iterable, Union

from ..models import AnalysisResult
from ..summary import calculate_summary
from .base import BaseFormatter
from .html_formatter import HtmlFormatter
from .json_formatter import JsonFormatter
from .markdown_formatter import MarkdownFormatter
from .rich_formatter import RichFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "json", "html", "markdown", "rich"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "json": JsonFormatter,
        "html": HtmlFormatter,
        "markdown": MarkdownFormatter,
        "rich": RichFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


def write_reports(
    result: AnalysisResult, output_dir: Union[str, Path], formats: Iterable[str]
) -> list[Path]:
    """Summarize ``result`` and write one report file per format.

    Returns:
        Paths of the written reports, in ``formats`` order
    """
    formatters = [get_formatter(name) for name in formats]
    calculate_summary(result)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    return [formatter.write(result, output_dir) for formatter in formatters]


__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "HtmlFormatter",
    "MarkdownFormatter",
    "RichFormatter",
    "get_formatter",
    "write_reports",
]
