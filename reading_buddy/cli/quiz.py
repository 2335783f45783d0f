"""Quiz plan command.

Builds the checkpoint quiz requests for a book without calling the
quiz generator.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from reading_buddy.cli.utils import handle_errors, load_config, display_warning
from reading_buddy.observability.context import (
    correlation_id_context,
    new_correlation_id,
)
from reading_buddy.services.config_manager import build_text_extractor
from reading_buddy.services.quiz.quiz_planner import CheckpointQuizPlanner
from reading_buddy.utils.rate_limiter import RateLimitGate


@handle_errors
def quiz_plan_command(
    reference: str = typer.Argument(..., help="Book PDF: public URL or local path"),
    title: str = typer.Option(..., "--title", help="Book title"),
    pages: int = typer.Option(..., "--pages", help="Total pages in the book"),
    author: Optional[str] = typer.Option(None, "--author"),
    genre: Optional[str] = typer.Option(None, "--genre"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML"
    ),
    prompts: bool = typer.Option(False, "--prompts", help="Print full prompts"),
    as_json: bool = typer.Option(False, "--json", help="Print requests as JSON"),
):
    """Build checkpoint quiz requests for a book."""
    config = load_config(config_path)
    planner = CheckpointQuizPlanner(
        extractor=build_text_extractor(config),
        rate_limit_gate=RateLimitGate(config.rate_limits),
    )

    with correlation_id_context(new_correlation_id("quiz-plan")):
        requests = asyncio.run(
            planner.build_requests(
                reference, title=title, total_pages=pages, author=author, genre=genre
            )
        )

    if not requests:
        display_warning("Book too short for checkpoint quizzes")
        return

    if as_json:
        typer.echo(
            json.dumps([r.model_dump(mode="json") for r in requests], indent=2)
        )
        return

    if prompts:
        typer.echo("\n\n---\n\n".join(planner.build_prompts(requests)))
        return

    for request in requests:
        typer.echo(
            f"Checkpoint page {request.checkpoint_page}: "
            f"pages {request.page_range_start}-{request.page_range_end}, "
            f"{request.question_count} questions, {request.total_words} words"
        )
