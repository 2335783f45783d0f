"""Quiz Prompt Builder Module

This module handles:
- Building multiple-choice quiz prompts from book content
- Formatting book metadata and page range context
- Describing the JSON structure the generator must return
"""

import structlog

from reading_buddy.models.quiz import QuizGenerationInput, QuizType

logger = structlog.get_logger()


class QuizPromptBuilder:
    """Builds quiz generation prompts for the AI text generator.

    The prompts include:
    - Book metadata for context
    - Checkpoint and page range context
    - The formatted page text
    - JSON schema for structured output
    """

    def build(self, quiz_input: QuizGenerationInput) -> str:
        """Build quiz prompt.

        Args:
            quiz_input: Book metadata, question budget and formatted content

        Returns:
            Formatted prompt string
        """
        prompt = self._build_prompt_template(
            quiz_input=quiz_input,
            book_line=self._format_book_line(quiz_input),
            checkpoint_line=self._format_checkpoint_line(quiz_input),
            page_range=self._format_page_range(quiz_input),
        )

        logger.debug(
            "quiz_prompt_built",
            title=quiz_input.title,
            quiz_type=quiz_input.quiz_type.value,
            question_count=quiz_input.question_count,
            prompt_length=len(prompt),
        )

        return prompt

    def _format_book_line(self, quiz_input: QuizGenerationInput) -> str:
        line = f'Book: "{quiz_input.title}"'
        if quiz_input.author:
            line += f" by {quiz_input.author}"
        if quiz_input.genre:
            line += f"\nGenre: {quiz_input.genre}"
        return line

    def _format_checkpoint_line(self, quiz_input: QuizGenerationInput) -> str:
        if quiz_input.quiz_type == QuizType.CHECKPOINT and quiz_input.checkpoint_page:
            return f"This is a checkpoint quiz at page {quiz_input.checkpoint_page}."
        return ""

    def _format_page_range(self, quiz_input: QuizGenerationInput) -> str:
        if quiz_input.page_range_start and quiz_input.page_range_end:
            return f"Pages {quiz_input.page_range_start}-{quiz_input.page_range_end}"
        return "Provided pages"

    def _build_prompt_template(
        self,
        quiz_input: QuizGenerationInput,
        book_line: str,
        checkpoint_line: str,
        page_range: str,
    ) -> str:
        return f"""You are an educational assistant creating a {quiz_input.quiz_type.value} quiz for students aged 10-16.

{book_line}
{checkpoint_line}
{page_range}
Target question count: {quiz_input.question_count}

Use the provided book content to generate multiple-choice questions:
{quiz_input.content}

Instructions:
- Focus strictly on the provided content. Do not invent facts.
- Include a mix of easy, medium, and hard questions.
- Ensure every question has four options and a zero-based answerIndex pointing to the correct option.
- Provide a brief explanation for each correct answer.

Respond with JSON only:
{{
  "title": "{quiz_input.title} Quiz",
  "description": "Optional short quiz description",
  "questions": [
    {{
      "question": "Question text",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "answerIndex": 0,
      "explanation": "Brief reason"
    }}
  ]
}}"""
