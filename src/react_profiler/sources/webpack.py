"""Produce build statistics by running the project's webpack CLI."""

from __future__ import annotations

import json
import shlex
import subprocess
from pathlib import Path
from typing import Optional, Union

from ..exceptions import BuildStatsError
from ..logging_config import get_logger
from ..models import BuildStatistics

logger = get_logger(__name__)


class WebpackCliSource:
    """Run ``npx webpack --config <cfg> --json`` inside the project."""

    def __init__(
        self,
        project_path: Union[str, Path],
        config_path: Optional[Union[str, Path]] = None,
        timeout: int = 300,
    ):
        self.project_path = Path(project_path).resolve()
        self.config_path = (
            Path(config_path) if config_path else self.project_path / "webpack.config.js"
        )
        self.timeout = timeout

    @property
    def command(self) -> list[str]:
        return ["npx", "webpack", "--config", str(self.config_path), "--json"]

    def load(self) -> BuildStatistics:
        cmd = self.command
        printable = shlex.join(cmd)
        if not self.config_path.exists():
            raise BuildStatsError(f"webpack config not found: {self.config_path}", printable)

        logger.info(f"Running {printable} in {self.project_path}")
        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.project_path),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise BuildStatsError("npx is not installed or not on PATH", printable) from e
        except subprocess.TimeoutExpired as e:
            raise BuildStatsError(f"webpack timed out after {self.timeout}s", printable) from e
        except OSError as e:
            raise BuildStatsError(f"could not run npx: {e}", printable) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip().splitlines()
            tail = stderr[-1] if stderr else f"exit status {result.returncode}"
            raise BuildStatsError(f"webpack failed: {tail}", printable)

        return self.parse(result.stdout, printable)

    @staticmethod
    def parse(output: str, command: Optional[str] = None) -> BuildStatistics:
        """Decode ``--json`` output, skipping any log lines printed before it."""
        start = output.find("{")
        if start < 0:
            raise BuildStatsError("webpack printed no JSON statistics", command)
        try:
            data = json.loads(output[start:])
        except json.JSONDecodeError as e:
            raise BuildStatsError(f"could not parse webpack statistics: {e}", command) from e
        if not isinstance(data, dict):
            raise BuildStatsError("webpack statistics must be a JSON object", command)
        return BuildStatistics.from_dict(data)
