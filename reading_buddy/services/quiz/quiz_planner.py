"""Checkpoint quiz planning.

Turns a book into one quiz generation request per checkpoint: the segment's
formatted page text plus its question budget. The requests are handed to
the external quiz generator by the host application.
"""

from typing import List, Optional

import structlog

from reading_buddy.models.quiz import QuizGenerationInput, QuizType
from reading_buddy.models.text_extraction import BookTextContent, PageRange
from reading_buddy.services.checkpoint_planner import plan_segments
from reading_buddy.services.quiz.prompt_builder import QuizPromptBuilder
from reading_buddy.services.text_extractor import TextExtractor, format_range_text
from reading_buddy.utils.rate_limiter import RateLimitGate

logger = structlog.get_logger()


class CheckpointQuizPlanner:
    """Builds checkpoint quiz requests for a book"""

    def __init__(
        self,
        extractor: TextExtractor,
        rate_limit_gate: Optional[RateLimitGate] = None,
        prompt_builder: Optional[QuizPromptBuilder] = None,
    ):
        self.extractor = extractor
        self.rate_limit_gate = rate_limit_gate or RateLimitGate()
        self.prompt_builder = prompt_builder or QuizPromptBuilder()

    async def build_requests(
        self,
        reference: str,
        title: str,
        total_pages: int,
        requester_id: str = "system",
        author: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> List[QuizGenerationInput]:
        """
        Build one quiz request per checkpoint segment.

        The pages up to the last checkpoint are extracted in a single call
        and split by segment. Books without checkpoints yield no requests and
        are not charged against the quiz_generation limit.

        Args:
            reference: Document reference of the book PDF
            title: Book title
            total_pages: Page count stored for the book
            requester_id: Identifier charged against the quiz_generation limit

        Raises:
            RateLimitError: Requester exceeded the quiz generation limit
            UnresolvableDocumentError, InvalidRangeError, ExtractionFailure:
                propagated from text extraction
        """
        plan = plan_segments(total_pages)
        segments = plan.checkpoint_segments
        if not segments:
            logger.info(
                "checkpoint_quizzes_skipped",
                title=title,
                total_pages=total_pages,
                reason="book_too_short",
            )
            return []

        self.rate_limit_gate.enforce(requester_id, "quiz_generation")

        content = await self.extractor.extract(
            reference, PageRange(start=1, end=segments[-1].end_page)
        )

        requests: List[QuizGenerationInput] = []
        for segment in segments:
            segment_content = BookTextContent.from_pages(
                [
                    p
                    for p in content.pages
                    if segment.start_page <= p.page_number <= segment.end_page
                ]
            )
            requests.append(
                QuizGenerationInput(
                    title=title,
                    author=author,
                    genre=genre,
                    quiz_type=QuizType.CHECKPOINT,
                    question_count=segment.question_count,
                    checkpoint_page=segment.checkpoint_page,
                    page_range_start=segment.start_page,
                    page_range_end=segment.end_page,
                    content=format_range_text(segment_content),
                    total_words=segment_content.total_words,
                )
            )

        logger.info(
            "checkpoint_quiz_requests_built",
            title=title,
            requests=len(requests),
            total_questions=sum(r.question_count for r in requests),
        )
        return requests

    def build_prompts(self, requests: List[QuizGenerationInput]) -> List[str]:
        return [self.prompt_builder.build(r) for r in requests]
