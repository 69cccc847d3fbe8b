"""Tests for single- and multi-source analysis."""

import logging
import time

import pytest

from teestat.analysis import CombinedStats
from teestat.parser import SnapshotDecodeError
from teestat.parser.types import Direction, HookState
from teestat.pipeline import (
    SourceResult,
    SourceStatus,
    analyze,
    analyze_many,
    analyze_paths,
    analyze_sources,
    merge_results,
)

from fixtures.builders import (
    create_stream,
    create_test_snapshot,
    create_test_state,
    direction_timeline,
    dump_lines_for,
    write_snapshot_dump,
)


def _failing_source(snapshots, fail_after=1):
    """Yield a few snapshots, then fail the way a corrupt dump does."""
    for index, snapshot in enumerate(snapshots):
        if index == fail_after:
            raise SnapshotDecodeError("corrupt.jsonl", index + 1, "truncated")
        yield snapshot


def _slow_source(snapshots, delay=0.05):
    time.sleep(delay)
    yield from snapshots


class TestAnalyze:
    """Single-source pipeline."""

    def test_counts_changes_per_player(self):
        stream = create_stream(
            {
                "alpha": direction_timeline([10, 35]),
                "beta": direction_timeline([5]),
            }
        )

        results = analyze(stream)

        assert list(results) == ["alpha", "beta"]
        assert results["alpha"].direction_changes == 2
        assert results["alpha"].direction_change_rate_max == pytest.approx(2.0)
        assert results["beta"].direction_changes == 1
        assert results["beta"].direction_change_rate_average == 0.0

    def test_name_filter_is_case_insensitive_substring(self):
        stream = create_stream(
            {
                "[CLAN] Runner": direction_timeline([10]),
                "other": direction_timeline([10]),
            }
        )

        assert list(analyze(stream, "clan")) == ["[CLAN] Runner"]

    def test_callable_name_filter(self):
        stream = create_stream(
            {"a": direction_timeline([1]), "bb": direction_timeline([1])}
        )

        assert list(analyze(stream, lambda name: len(name) == 2)) == ["bb"]

    def test_player_without_character_is_skipped_for_that_tick(self):
        stream = [
            create_test_snapshot({"tee": create_test_state(0, Direction.LEFT)}),
            create_test_snapshot({"tee": None}),
            create_test_snapshot({"tee": create_test_state(2, Direction.RIGHT)}),
        ]

        stats = analyze(stream)["tee"]

        assert stats.direction_changes == 1

    def test_hook_engagement_changes(self):
        stream = create_stream(
            {
                "hooker": [
                    (0, Direction.NONE, HookState.IDLE),
                    (25, Direction.NONE, HookState.FLYING),
                    (30, Direction.NONE, HookState.GRABBED),
                    (50, Direction.NONE, HookState.RETRACT_START),
                ]
            }
        )

        stats = analyze(stream)["hooker"]

        assert stats.hook_changes == 2
        assert stats.hook_state_change_rate_max == pytest.approx(2.0)
        assert stats.overall_changes == 2

    def test_empty_source(self):
        assert analyze([]) == {}


class TestMergeResults:
    def test_later_entry_replaces_earlier(self, caplog):
        first = CombinedStats(direction_changes=1, overall_changes=1)
        second = CombinedStats(hook_changes=2, overall_changes=2)

        with caplog.at_level(logging.DEBUG, logger="teestat.pipeline"):
            merged = merge_results([{"tee": first}, {"tee": second, "x": first}])

        assert merged == {"tee": second, "x": first}
        assert "replaces an earlier entry" in caplog.text


class TestAnalyzeMany:
    """Parallel analysis with an ordered merge."""

    def test_duplicate_player_takes_last_source(self):
        source1 = create_stream({"shared": direction_timeline([10, 20, 30])})
        source2 = create_stream({"shared": direction_timeline([50])})

        merged = analyze_many([source1, source2])

        assert merged["shared"] == analyze(source2)["shared"]
        assert merged["shared"].direction_changes == 1

    def test_merge_ignores_completion_order(self):
        source1 = create_stream({"shared": direction_timeline([10, 20, 30])})
        source2 = create_stream({"shared": direction_timeline([50])})
        expected = analyze(source2)["shared"]

        merged = analyze_many(
            [_slow_source(source1), source2], max_workers=2
        )

        assert merged["shared"] == expected

    def test_failed_source_contributes_nothing(self):
        good = create_stream({"good": direction_timeline([10, 20])})
        bad = _failing_source(
            create_stream({"bad": direction_timeline([1, 2, 3])}), fail_after=2
        )
        other = create_stream({"other": direction_timeline([5])})

        merged = analyze_many([good, bad, other])

        assert set(merged) == {"good", "other"}
        assert merged["good"] == analyze(good)["good"]

    def test_repeated_runs_are_identical(self):
        def sources():
            return [
                create_stream({"a": direction_timeline([3, 9]), "b": direction_timeline([4])}),
                create_stream({"b": direction_timeline([7, 8]), "c": direction_timeline([2])}),
                create_stream({"a": direction_timeline([11])}),
            ]

        first = analyze_many(sources(), max_workers=3)
        for _ in range(5):
            assert analyze_many(sources(), max_workers=3) == first

    def test_no_sources(self):
        assert analyze_many([]) == {}


class TestAnalyzeSources:
    def test_results_follow_input_order(self):
        sources = [
            _slow_source(create_stream({"slow": direction_timeline([1])})),
            create_stream({"fast": direction_timeline([1])}),
        ]

        results = analyze_sources(sources, labels=["slow.jsonl", "fast.jsonl"])

        assert [r.label for r in results] == ["slow.jsonl", "fast.jsonl"]
        assert all(r.status == SourceStatus.SUCCESS for r in results)

    def test_failure_is_reported_per_source(self, caplog):
        sources = [
            create_stream({"ok": direction_timeline([1])}),
            _failing_source(create_stream({"bad": direction_timeline([1])})),
        ]

        with caplog.at_level(logging.WARNING, logger="teestat.pipeline"):
            results = analyze_sources(sources)

        assert results[0].status == SourceStatus.SUCCESS
        assert results[1].status == SourceStatus.ERROR
        assert results[1].stats == {}
        assert "truncated" in results[1].error
        assert "Failed to analyze source #1" in caplog.text

    def test_label_count_must_match(self):
        with pytest.raises(ValueError, match="one-to-one"):
            analyze_sources([[]], labels=["a", "b"])

    def test_source_result_str(self):
        ok = SourceResult(SourceStatus.SUCCESS, "a.jsonl", {"x": CombinedStats()})
        bad = SourceResult(SourceStatus.ERROR, "b.jsonl", error="boom")

        assert str(ok) == "✓ a.jsonl (1 players)"
        assert str(bad) == "✗ b.jsonl: boom"


class TestAnalyzePaths:
    def test_missing_file_fails_only_its_source(self, tmp_path):
        present = write_snapshot_dump(
            tmp_path / "present.jsonl",
            dump_lines_for({"tee": [(0, "None", "Idle"), (10, "Left", "Flying")]}),
        )
        missing = tmp_path / "missing.jsonl"

        results = analyze_paths([present, missing])

        assert results[0].status == SourceStatus.SUCCESS
        assert results[0].stats["tee"].overall_changes == 2
        assert results[1].status == SourceStatus.ERROR
        assert "Demo file not found" in results[1].error

    def test_name_filter_applies_to_every_file(self, tmp_path):
        paths = [
            write_snapshot_dump(
                tmp_path / f"run{i}.jsonl",
                dump_lines_for(
                    {
                        "keep": [(0, "None", "Idle"), (i + 1, "Right", "Idle")],
                        "drop": [(0, "None", "Idle")],
                    }
                ),
            )
            for i in range(3)
        ]

        results = analyze_paths(paths, name_filter="KEEP", max_workers=2)

        assert all(list(r.stats) == ["keep"] for r in results)
