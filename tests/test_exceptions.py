"""Tests for the exception hierarchy."""

from pathlib import Path

import pytest

from react_profiler.exceptions import (
    AnalysisError,
    BuildStatsError,
    ConfigurationError,
    InputFormatError,
    InputLoadError,
    InvalidConfigError,
    InvalidPathError,
    ProfilerError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            InvalidPathError(Path("/x"), "missing"),
            InvalidConfigError("formats", ["pdf"], "unknown format"),
        ],
    )
    def test_configuration_errors(self, error):
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, ProfilerError)

    @pytest.mark.parametrize(
        "error",
        [
            InputLoadError(Path("a.json"), "gone"),
            InputFormatError("render events", "bad"),
            BuildStatsError("webpack failed"),
        ],
    )
    def test_analysis_errors(self, error):
        assert isinstance(error, AnalysisError)
        assert isinstance(error, ProfilerError)


class TestMessages:
    def test_details_in_str(self):
        error = InputLoadError(Path("a.json"), "gone")
        assert str(error) == "Cannot load input file: a.json (filepath=a.json, reason=gone)"

    def test_plain_message(self):
        assert str(ProfilerError("plain")) == "plain"

    def test_build_stats_command_detail(self):
        error = BuildStatsError("timed out", command="npx webpack --json")
        assert error.details == {"reason": "timed out", "command": "npx webpack --json"}
        assert BuildStatsError("x").command is None
