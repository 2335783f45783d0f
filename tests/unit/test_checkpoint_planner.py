"""Unit tests for checkpoint planning and quiz sizing."""

import pytest

from reading_buddy.services.checkpoint_planner import (
    CHECKPOINT_INTERVAL,
    plan_segments,
    suggest_checkpoints,
    suggest_question_count,
)


@pytest.mark.parametrize(
    "total_pages,expected",
    [
        (0, []),
        (10, []),
        (50, []),
        (51, [50]),
        (100, [50]),
        (101, [50, 100]),
        (150, [50, 100]),
        (189, [50, 100, 150]),
    ],
)
def test_suggest_checkpoints(total_pages, expected):
    assert suggest_checkpoints(total_pages) == expected


def test_negative_page_count_has_no_checkpoints():
    assert suggest_checkpoints(-20) == []


@pytest.mark.parametrize("total_pages", [0, 1, 49, 50, 51, 99, 100, 101, 200, 500, 1234])
def test_checkpoints_ascending_bounded_and_counted(total_pages):
    checkpoints = suggest_checkpoints(total_pages)

    assert all(b > a for a, b in zip(checkpoints, checkpoints[1:]))
    assert all(c < total_pages for c in checkpoints)
    assert all(c % CHECKPOINT_INTERVAL == 0 and c > 0 for c in checkpoints)
    assert len(checkpoints) == max(0, (total_pages - 1) // CHECKPOINT_INTERVAL)


@pytest.mark.parametrize(
    "length,expected",
    [
        (0, 3),
        (1, 3),
        (20, 3),
        (21, 5),
        (50, 5),
        (51, 7),
        (100, 7),
        (101, 10),
        (1000, 10),
    ],
)
def test_suggest_question_count_tiers(length, expected):
    assert suggest_question_count(length) == expected


def test_question_count_is_monotonic():
    counts = [suggest_question_count(n) for n in range(0, 250)]
    assert counts == sorted(counts)


def test_plan_short_book_has_single_trailing_segment():
    plan = plan_segments(36)

    assert plan.checkpoints == []
    assert len(plan.segments) == 1
    segment = plan.segments[0]
    assert (segment.start_page, segment.end_page) == (1, 36)
    assert segment.checkpoint_page is None
    assert segment.question_count == 5
    assert plan.checkpoint_segments == []
    assert plan.total_questions == 0


def test_plan_segments_cover_book():
    plan = plan_segments(189)

    assert plan.checkpoints == [50, 100, 150]
    assert [(s.start_page, s.end_page) for s in plan.segments] == [
        (1, 50),
        (51, 100),
        (101, 150),
        (151, 189),
    ]
    assert [s.checkpoint_page for s in plan.segments] == [50, 100, 150, None]
    assert [s.question_count for s in plan.segments] == [5, 5, 5, 5]
    assert plan.total_questions == 15
    assert plan.total_segment_questions == 20
    assert sum(s.page_count for s in plan.segments) == 189


def test_plan_segment_after_checkpoint_on_exact_multiple():
    plan = plan_segments(100)

    assert [(s.start_page, s.end_page) for s in plan.segments] == [(1, 50), (51, 100)]
    assert plan.segments[-1].checkpoint_page is None


@pytest.mark.parametrize("total_pages", [0, -3])
def test_plan_empty_book(total_pages):
    plan = plan_segments(total_pages)

    assert plan.total_pages == 0
    assert plan.segments == []
    assert plan.total_questions == 0


def test_planning_is_idempotent():
    assert plan_segments(321) == plan_segments(321)
    assert suggest_checkpoints(321) == suggest_checkpoints(321)
