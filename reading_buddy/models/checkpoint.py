"""Data models for reading checkpoint plans."""

from pydantic import BaseModel, Field
from typing import List, Optional


class Segment(BaseModel):
    """Inclusive page span closed by a checkpoint or the end of the book"""

    start_page: int = Field(..., ge=1)
    end_page: int = Field(..., ge=1)
    question_count: int = Field(..., ge=1)
    checkpoint_page: Optional[int] = None  # None for the trailing segment

    @property
    def page_count(self) -> int:
        return self.end_page - self.start_page + 1


class CheckpointPlan(BaseModel):
    """Checkpoint pages and the segments they delimit"""

    total_pages: int = Field(0, ge=0)
    checkpoints: List[int] = Field(default_factory=list)
    segments: List[Segment] = Field(default_factory=list)

    @property
    def total_questions(self) -> int:
        """Questions across checkpoint quizzes; the trailing segment has none"""
        return sum(s.question_count for s in self.checkpoint_segments)

    @property
    def total_segment_questions(self) -> int:
        return sum(s.question_count for s in self.segments)

    @property
    def checkpoint_segments(self) -> List[Segment]:
        """Segments that end at a checkpoint page"""
        return [s for s in self.segments if s.checkpoint_page is not None]
