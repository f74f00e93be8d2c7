"""Tests for bundle composition analysis."""

import logging

import pytest

from react_profiler.analyzers.bundle import (
    analyze_bundle,
    calculate_asset_metrics,
    find_duplicate_modules,
    find_large_modules,
    module_stem,
    summarize_chunks,
)
from react_profiler.config import ThresholdConfig
from react_profiler.models import BuildStatistics


def _categories(analysis):
    return [r.category for r in analysis.recommendations]


class TestAnalyzeBundle:
    def test_total_size_is_sum_of_assets(self, stats):
        analysis = analyze_bundle(stats)
        assert analysis.total_size == 810000

    def test_metrics_partition_total(self, stats):
        analysis = analyze_bundle(stats)
        assert analysis.metrics.total == analysis.total_size

    def test_recommendations_in_rule_order(self, stats):
        analysis = analyze_bundle(stats)
        assert _categories(analysis) == [
            "bundle-size",
            "chunk-size",
            "large-module",
            "large-module",
            "large-module",
            "duplicate-modules",
        ]

    def test_bundle_size_is_critical(self, stats):
        rec = analyze_bundle(stats).recommendations[0]
        assert rec.severity == "critical"
        assert rec.description == (
            "Total bundle size is 791.02 KB, which exceeds the recommended 500KB limit."
        )
        assert "lazy" in rec.code_example

    def test_every_recommendation_has_impact(self, stats):
        for rec in analyze_bundle(stats).recommendations:
            assert rec.estimated_impact

    def test_empty_stats(self):
        analysis = analyze_bundle(BuildStatistics())
        assert analysis.total_size == 0
        assert analysis.chunks == []
        assert analysis.large_modules == []
        assert analysis.duplicates == []
        assert analysis.recommendations == []

    def test_at_threshold_is_not_over(self):
        stats = BuildStatistics.from_dict({"assets": [{"name": "main.js", "size": 500000}]})
        assert "bundle-size" not in _categories(analyze_bundle(stats))

    def test_custom_thresholds(self, stats):
        thresholds = ThresholdConfig(bundle_size_bytes=1_000_000, chunk_size_bytes=1_000_000)
        categories = _categories(analyze_bundle(stats, thresholds))
        assert "bundle-size" not in categories
        assert "chunk-size" not in categories


class TestChunks:
    def test_sorted_by_size_descending(self, stats):
        chunks = summarize_chunks(stats)
        assert [c.name for c in chunks] == ["vendor", "main"]

    def test_equal_sizes_keep_input_order(self):
        stats = BuildStatistics.from_dict(
            {
                "chunks": [{"names": [name], "size": 10} for name in "abcde"]
                + [{"names": ["z"], "size": 20}]
            }
        )
        assert [c.name for c in summarize_chunks(stats)] == ["z", "a", "b", "c", "d", "e"]

    def test_module_list_is_counted(self, stats):
        chunks = {c.name: c for c in summarize_chunks(stats)}
        assert chunks["main"].modules == 2
        assert chunks["vendor"].modules == 3

    def test_name_falls_back_to_id_then_unknown(self):
        stats = BuildStatistics.from_dict(
            {"chunks": [{"id": 7, "size": 10}, {"size": 5}]}
        )
        assert [c.name for c in summarize_chunks(stats)] == ["7", "unknown"]

    def test_only_chunks_over_limit_warn(self, stats):
        recs = [r for r in analyze_bundle(stats).recommendations if r.category == "chunk-size"]
        assert len(recs) == 1
        assert recs[0].title == "Large chunk detected: vendor"


class TestLargeModules:
    def test_strictly_over_threshold(self, stats):
        modules = find_large_modules(stats)
        assert [m.size for m in modules] == [230000, 230000, 120000]
        assert all(m.size > 50000 for m in modules)

    def test_capped_at_limit(self):
        stats = BuildStatistics.from_dict(
            {"modules": [{"name": f"m{i}.js", "size": 60000 + i} for i in range(30)]}
        )
        modules = find_large_modules(stats)
        assert len(modules) == 20
        assert modules[0].size == 60029

    def test_only_top_three_recommended(self):
        stats = BuildStatistics.from_dict(
            {"modules": [{"name": f"m{i}.js", "size": 60000 + i} for i in range(5)]}
        )
        recs = [r for r in analyze_bundle(stats).recommendations if r.category == "large-module"]
        assert [r.title for r in recs] == [
            "Large module: m4.js",
            "Large module: m3.js",
            "Large module: m2.js",
        ]

    def test_reasons_accept_dicts_and_strings(self):
        stats = BuildStatistics.from_dict(
            {
                "modules": [
                    {
                        "name": "big.js",
                        "size": 90000,
                        "reasons": [{"moduleName": "App.tsx"}, "entry", {}],
                    }
                ]
            }
        )
        assert find_large_modules(stats)[0].reasons == ["App.tsx", "entry", "unknown"]


class TestDuplicates:
    def test_lodash_detected(self, stats):
        duplicates = find_duplicate_modules(stats)
        assert len(duplicates) == 1
        dup = duplicates[0]
        assert dup.name == "lodash"
        assert dup.instances == 2
        assert dup.total_size == 460000
        assert dup.locations == [
            "node_modules/lodash/lodash.js",
            "node_modules/other-package/node_modules/lodash/lodash.js",
        ]

    def test_savings_estimate(self, stats):
        rec = next(
            r for r in analyze_bundle(stats).recommendations if r.category == "duplicate-modules"
        )
        assert rec.estimated_impact == "Could save 224.61 KB"

    @pytest.mark.parametrize(
        "name,stem",
        [
            ("./src/components/Button.tsx", "Button"),
            ("src\\utils\\format.js", "format"),
            ("lodash", "lodash"),
            ("styles.css", "styles.css"),
        ],
    )
    def test_module_stem(self, name, stem):
        assert module_stem(name) == stem

    def test_groups_by_base_filename(self):
        stats = BuildStatistics.from_dict(
            {
                "modules": [
                    {"name": "./src/a/Button.tsx", "size": 100, "identifier": "a"},
                    {"name": "./src/b/Button.jsx", "size": 300, "identifier": "b"},
                    {"name": "./src/Other.js", "size": 50, "identifier": "c"},
                ]
            }
        )
        duplicates = find_duplicate_modules(stats)
        assert [(d.name, d.instances, d.total_size) for d in duplicates] == [("Button", 2, 400)]

    def test_vendor_names_excluded_by_default(self, caplog):
        stats = BuildStatistics.from_dict(
            {
                "modules": [
                    {"name": "./node_modules/lodash/lodash.js", "size": 1},
                    {"name": "./node_modules/x/node_modules/lodash/lodash.js", "size": 1},
                    {"name": "(webpack)/buildin/global.js", "size": 1},
                ]
            }
        )
        with caplog.at_level(logging.WARNING, logger="react_profiler"):
            assert find_duplicate_modules(stats) == []
        assert "lodash" in caplog.text

    def test_vendor_names_included_when_enabled(self):
        stats = BuildStatistics.from_dict(
            {
                "modules": [
                    {"name": "./node_modules/lodash/lodash.js", "size": 1},
                    {"name": "./node_modules/x/node_modules/lodash/lodash.js", "size": 1},
                ]
            }
        )
        thresholds = ThresholdConfig(include_vendor_duplicates=True)
        assert [d.name for d in find_duplicate_modules(stats, thresholds)] == ["lodash"]

    def test_sorted_by_total_size(self):
        stats = BuildStatistics.from_dict(
            {
                "modules": [
                    {"name": "a/x.js", "size": 10},
                    {"name": "b/x.js", "size": 10},
                    {"name": "a/y.js", "size": 100},
                    {"name": "b/y.js", "size": 100},
                ]
            }
        )
        assert [d.name for d in find_duplicate_modules(stats)] == ["y", "x"]


class TestAssetMetrics:
    def test_buckets(self, stats):
        metrics = calculate_asset_metrics(stats)
        assert metrics.js_size == 750000
        assert metrics.css_size == 50000
        assert metrics.image_size == 10000
        assert metrics.other_size == 0

    def test_unrecognized_extensions_are_other(self):
        stats = BuildStatistics.from_dict(
            {
                "assets": [
                    {"name": "main.js.map", "size": 5},
                    {"name": "font.woff2", "size": 7},
                    {"name": "icon.svg", "size": 3},
                    {"name": "photo.JPG", "size": 11},
                ]
            }
        )
        metrics = calculate_asset_metrics(stats)
        assert metrics.image_size == 3
        assert metrics.other_size == 23


class TestStatsDecoding:
    def test_children_are_flattened(self, stats_data):
        data = {"children": [stats_data, {"assets": [{"name": "worker.js", "size": 1000}]}]}
        stats = BuildStatistics.from_dict(data)
        assert len(stats.assets) == 5
        assert len(stats.modules) == 5

    def test_missing_numbers_default_to_zero(self):
        stats = BuildStatistics.from_dict(
            {"assets": [{"name": "a.js"}], "chunks": [{"id": "c", "modules": 4}]}
        )
        assert stats.assets[0].size == 0
        assert stats.chunks[0].size == 0
        assert stats.chunks[0].module_count == 4
