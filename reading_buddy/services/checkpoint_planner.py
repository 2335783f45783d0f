"""Reading checkpoint planning.

Decides where automatic comprehension checkpoints fall in a book and how
many quiz questions each checkpoint segment gets. All functions are pure.
"""

from typing import List

import structlog

from reading_buddy.models.checkpoint import CheckpointPlan, Segment

logger = structlog.get_logger()

CHECKPOINT_INTERVAL = 50

# (inclusive upper bound on segment length, question count)
QUESTION_TIERS = ((20, 3), (50, 5), (100, 7))
MAX_QUESTION_COUNT = 10


def suggest_checkpoints(total_pages: int) -> List[int]:
    """
    Suggest checkpoint pages every CHECKPOINT_INTERVAL pages.

    Checkpoints are multiples of the interval strictly below total_pages,
    so a book of 50 pages or fewer gets none. Negative input behaves like
    zero.

    Args:
        total_pages: Total pages in the book

    Returns:
        Ascending list of checkpoint page numbers
    """
    return list(range(CHECKPOINT_INTERVAL, total_pages, CHECKPOINT_INTERVAL))


def suggest_question_count(page_range_length: int) -> int:
    """Suggest how many questions a quiz over page_range_length pages gets."""
    for upper_bound, count in QUESTION_TIERS:
        if page_range_length <= upper_bound:
            return count
    return MAX_QUESTION_COUNT


def plan_segments(total_pages: int) -> CheckpointPlan:
    """
    Split a book into checkpoint segments with question budgets.

    Each checkpoint closes the segment starting right after the previous
    one. Pages after the last checkpoint form a trailing segment with no
    checkpoint, so the segments cover pages 1..total_pages exactly once.

    Args:
        total_pages: Total pages in the book

    Returns:
        CheckpointPlan (empty for books with no pages)
    """
    if total_pages <= 0:
        return CheckpointPlan(total_pages=0)

    checkpoints = suggest_checkpoints(total_pages)
    segments: List[Segment] = []
    start = 1

    for checkpoint in checkpoints:
        segments.append(
            Segment(
                start_page=start,
                end_page=checkpoint,
                question_count=suggest_question_count(checkpoint - start + 1),
                checkpoint_page=checkpoint,
            )
        )
        start = checkpoint + 1

    # checkpoints are strictly below total_pages, so the tail is never empty
    segments.append(
        Segment(
            start_page=start,
            end_page=total_pages,
            question_count=suggest_question_count(total_pages - start + 1),
        )
    )

    plan = CheckpointPlan(
        total_pages=total_pages, checkpoints=checkpoints, segments=segments
    )
    logger.debug(
        "checkpoint_plan_built",
        total_pages=total_pages,
        checkpoints=len(checkpoints),
        total_questions=plan.total_questions,
    )
    return plan
