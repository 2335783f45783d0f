"""Quiz Response Parser Module

This module handles:
- Parsing generator JSON responses (with or without code fences)
- Normalizing loosely shaped questions
- Creating a validated QuizPayload
"""

import json
import re
from typing import Any, Dict, List

import structlog

from reading_buddy.models.quiz import QuizPayload, QuizQuestion
from reading_buddy.utils.exceptions import QuizParseError

logger = structlog.get_logger()

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class QuizResponseParser:
    """Parses quiz generator responses into QuizPayload objects."""

    def parse(
        self,
        text: str,
        question_count: int,
        fallback_title: str,
    ) -> QuizPayload:
        """Parse generator text into a quiz.

        Args:
            text: Raw response text
            question_count: Requested count; extra questions are dropped
            fallback_title: Title used when the response has none

        Returns:
            Validated QuizPayload

        Raises:
            QuizParseError: If the response has no usable questions
        """
        data = self._parse_json(self._clean_json_content(text))

        raw_questions = data.get("questions")
        if not isinstance(raw_questions, list) or not raw_questions:
            raise QuizParseError("Response did not include quiz questions")

        questions = [
            self._normalize_question(raw, index)
            for index, raw in enumerate(raw_questions)
        ]
        if question_count > 0:
            questions = questions[:question_count]

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            title = fallback_title

        description = data.get("description")
        payload = QuizPayload(
            title=title,
            description=description if isinstance(description, str) else None,
            questions=questions,
        )

        logger.debug(
            "quiz_response_parsed",
            questions_found=len(raw_questions),
            questions_kept=len(payload.questions),
        )
        return payload

    def _clean_json_content(self, content: str) -> str:
        """Remove code block markers around JSON."""
        content = content.strip()

        if content.startswith("```json"):
            content = content[7:]
        elif content.startswith("```"):
            content = content[3:]

        if content.endswith("```"):
            content = content[:-3]

        return content.strip()

    def _parse_json(self, content: str) -> Dict[str, Any]:
        """Parse JSON, falling back to the outermost {...} block."""
        try:
            result = json.loads(content)
        except json.JSONDecodeError as e:
            match = _JSON_OBJECT.search(content)
            if not match:
                raise QuizParseError(
                    f"Invalid JSON in quiz response: {e}\nContent: {content[:500]}"
                )
            try:
                result = json.loads(match.group(0))
            except json.JSONDecodeError as inner:
                raise QuizParseError(f"Invalid JSON in quiz response: {inner}")

        if not isinstance(result, dict):
            raise QuizParseError("Quiz response must be a JSON object")
        return result

    def _normalize_question(self, raw: Any, index: int) -> QuizQuestion:
        if not isinstance(raw, dict):
            raise QuizParseError(f"Question {index + 1} is not an object")

        raw_options = raw.get("options")
        options: List[str] = (
            [str(option) for option in raw_options]
            if isinstance(raw_options, list)
            else []
        )
        if not options:
            raise QuizParseError(f"Question {index + 1} is missing options.")

        answer_index = next(
            (
                value
                for value in (raw.get("answerIndex"), raw.get("correct_answer"))
                if isinstance(value, int) and not isinstance(value, bool)
            ),
            None,
        )
        if answer_index is None or not 0 <= answer_index < len(options):
            logger.warning(
                "quiz_answer_index_clamped", question=index + 1, value=answer_index
            )
            answer_index = 0

        question = raw.get("question")
        return QuizQuestion(
            question=question if isinstance(question, str) else f"Question {index + 1}",
            options=options,
            answer_index=answer_index,
            explanation=self._optional_str(raw.get("explanation")),
            correct_feedback=self._optional_str(raw.get("correctFeedback")),
            incorrect_feedback=self._optional_str(raw.get("incorrectFeedback")),
        )

    @staticmethod
    def _optional_str(value: Any) -> str | None:
        return value if isinstance(value, str) else None
