"""Checkpoint quiz request building and response parsing."""

from reading_buddy.services.quiz.prompt_builder import QuizPromptBuilder
from reading_buddy.services.quiz.quiz_planner import CheckpointQuizPlanner
from reading_buddy.services.quiz.response_parser import QuizResponseParser

__all__ = [
    "QuizPromptBuilder",
    "QuizResponseParser",
    "CheckpointQuizPlanner",
]
