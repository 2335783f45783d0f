"""Checkpoints command.

Shows where automatic checkpoints fall for a book and how many questions
each segment's quiz gets.
"""

import json

import typer

from reading_buddy.cli.utils import handle_errors, display_info, display_warning
from reading_buddy.services.checkpoint_planner import plan_segments


@handle_errors
def checkpoints_command(
    total_pages: int = typer.Argument(..., help="Total pages in the book"),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON"),
):
    """Plan reading checkpoints and quiz sizes for a book."""
    plan = plan_segments(total_pages)

    if as_json:
        typer.echo(json.dumps(plan.model_dump(mode="json"), indent=2))
        return

    typer.echo(f"Pages: {plan.total_pages}")
    typer.echo(f"Suggested checkpoints: {len(plan.checkpoints)}")
    if not plan.checkpoints:
        display_warning("Book too short for checkpoints (50 pages or fewer)")
    else:
        typer.echo(f"Checkpoint pages: {', '.join(str(c) for c in plan.checkpoints)}")

    typer.echo("-" * 70)
    for index, segment in enumerate(plan.segments, start=1):
        label = (
            f"Page {segment.checkpoint_page:>4}"
            if segment.checkpoint_page is not None
            else "End      "
        )
        typer.echo(
            f"{index}. {label} | "
            f"Range: {segment.start_page:>4}-{segment.end_page:<4} "
            f"({segment.page_count:>3} pages) | "
            f"{segment.question_count} questions"
        )
    typer.echo("-" * 70)
    display_info(f"Total questions: {plan.total_questions}")
