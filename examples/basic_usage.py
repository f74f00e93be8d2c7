#!/usr/bin/env python3
"""
Example: Basic usage of React Profiler as a Python library
"""

from react_profiler import ThresholdConfig, analyze
from react_profiler.formatters import write_reports

# Bundle analysis from pre-built stats plus captured render events
result = analyze(
    "/path/to/react-app",
    stats_file="/path/to/react-app/stats.json",
    render_events_file="/path/to/captures/render-events.json",
    analyze_memory=False,
    thresholds=ThresholdConfig(bundle_size_bytes=300_000),
)

# Print recommendations
for name in ("bundle", "rerenders", "memory"):
    analysis = getattr(result.analyses, name)
    if analysis is None:
        continue
    for rec in analysis.recommendations:
        print(f"[{rec.severity}] {rec.title}")
        print(f"  {rec.description}")
        print(f"  -> {rec.fix} ({rec.estimated_impact})")
        print()

for name, message in result.failures.items():
    print(f"{name} analysis failed: {message}")

paths = write_reports(result, "profiler-reports", ["json", "markdown"])
print(f"Analysis complete: {result.summary.total_issues} issue(s), "
      f"{result.summary.critical_issues} critical; reports: {', '.join(map(str, paths))}")
