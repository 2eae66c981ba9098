"""Tests for progress aggregation."""

import pytest
from conftest import make_item

from curriculum.models import WatchEvent
from curriculum.progress import (
    NO_DATA,
    OK,
    aggregate_progress,
    completed_video_ids,
    most_watched,
    video_progress,
)


class TestAggregateProgress:
    """Test watched/unwatched totals."""

    def test_example_two_of_five(self):
        """2 completed out of 5 videos is 40%."""
        items = [make_item(i, "Sales") for i in range(1, 6)]
        summary = aggregate_progress(items, {"1", "2"})
        assert summary.status == OK
        assert summary.watched_count == 2
        assert summary.unwatched_count == 3
        assert summary.watched_percent == 40

    def test_no_items_is_no_data(self):
        """An empty library reports NO_DATA, not 0% progress."""
        summary = aggregate_progress([], {"1"})
        assert summary.status == NO_DATA
        assert summary.empty
        assert summary.watched_percent == 0
        assert summary.total_count == 0

    def test_completed_ids_outside_library_ignored(self):
        """Completed ids for deleted videos do not count."""
        items = [make_item("a", "X"), make_item("b", "X")]
        summary = aggregate_progress(items, {"a", "zombie"})
        assert summary.watched_count == 1
        assert summary.watched_count + summary.unwatched_count == summary.total_count

    def test_percent_rounds_half_up(self):
        """1 of 8 is 12.5% which displays as 13%."""
        items = [make_item(i, "X") for i in range(8)]
        assert aggregate_progress(items, {"0"}).watched_percent == 13

    def test_percent_within_bounds(self, library):
        """Percent stays in [0, 100] and counts always add up."""
        all_ids = {i.id for i in library}
        for completed in (set(), {"sales-1"}, all_ids):
            summary = aggregate_progress(library, completed)
            assert 0 <= summary.watched_percent <= 100
            assert summary.watched_count + summary.unwatched_count == summary.total_count
        assert aggregate_progress(library, all_ids).watched_percent == 100

    def test_same_input_same_summary(self, library):
        """Aggregating the same snapshot twice gives the same summary."""
        completed = {"sales-1", "ai-2"}
        assert aggregate_progress(library, completed) == aggregate_progress(library, completed)


class TestCompletedIds:
    """Test the definition of a watched video."""

    def test_any_completed_event_wins(self, watch_events):
        """A later completed event counts even after an incomplete one."""
        assert completed_video_ids(watch_events) == {"sales-1", "sales-2"}

    def test_events_without_video_id_ignored(self):
        """Events missing a video id never count."""
        assert completed_video_ids([WatchEvent("u1", "", completed=True)]) == set()


class TestVideoProgress:
    """Test per-video playback progress."""

    def test_first_event_used(self, watch_events):
        """The first event for a video decides its progress."""
        items = [make_item("sales-2", "Sales", duration_label="10 min")]
        assert video_progress(items, watch_events)["sales-2"] == pytest.approx(30.0)

    def test_capped_at_100(self):
        """Positions beyond the duration cap at 100%."""
        items = [make_item("v", "X", duration_label="5")]
        events = [WatchEvent("u1", "v", last_position=12)]
        assert video_progress(items, events)["v"] == 100.0

    def test_missing_duration_or_event_is_zero(self):
        """No parseable duration or no event means 0%."""
        items = [make_item("a", "X", duration_label="n/a"), make_item("b", "X", duration_label="3 min")]
        events = [WatchEvent("u1", "a", last_position=2)]
        assert video_progress(items, events) == {"a": 0.0, "b": 0.0}

    def test_most_watched_ties_keep_library_order(self):
        """Ranking is by progress, ties in library order."""
        items = [make_item(x, "X") for x in "abcd"]
        progress = {"a": 10.0, "b": 50.0, "c": 10.0, "d": 0.0}
        assert [i.id for i in most_watched(items, progress)] == ["b", "a", "c"]
