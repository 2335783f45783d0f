"""Quiz request and response models.

The quiz generator is an external AI service. These models describe what
the core hands it (QuizGenerationInput) and what a validated answer looks
like (QuizPayload).
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class QuizType(str, Enum):
    """Where a quiz is used"""

    CLASSROOM = "classroom"
    CHECKPOINT = "checkpoint"


class QuizGenerationInput(BaseModel):
    """Everything the quiz generator needs for one quiz"""

    title: str = Field(..., min_length=1)
    author: Optional[str] = None
    genre: Optional[str] = None
    quiz_type: QuizType = QuizType.CHECKPOINT
    question_count: int = Field(..., ge=1)
    checkpoint_page: Optional[int] = Field(default=None, ge=1)
    page_range_start: Optional[int] = Field(default=None, ge=1)
    page_range_end: Optional[int] = Field(default=None, ge=1)
    content: str = ""
    total_words: int = Field(default=0, ge=0)


class QuizQuestion(BaseModel):
    """A single multiple-choice question"""

    question: str
    options: List[str] = Field(..., min_length=1)
    answer_index: int = Field(0, ge=0)
    explanation: Optional[str] = None
    correct_feedback: Optional[str] = None
    incorrect_feedback: Optional[str] = None


class QuizPayload(BaseModel):
    """Validated quiz returned by the generator"""

    title: str
    description: Optional[str] = None
    questions: List[QuizQuestion] = Field(..., min_length=1)
