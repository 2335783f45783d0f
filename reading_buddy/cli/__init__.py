"""Reading Buddy CLI Package.

Usage:
    python -m reading_buddy.cli checkpoints 189
    python -m reading_buddy.cli extract books/owl-moon.pdf --start 1 --end 10
    python -m reading_buddy.cli quiz-plan books/owl-moon.pdf --title "Owl Moon" --pages 120
    python -m reading_buddy.cli validate config/reading_buddy.yaml
"""

import typer

from reading_buddy.cli.checkpoints import checkpoints_command
from reading_buddy.cli.extract import extract_command
from reading_buddy.cli.quiz import quiz_plan_command
from reading_buddy.cli.validate import validate_command

app = typer.Typer(help="Reading Buddy: book checkpoints, text extraction and quizzes")

app.command(name="checkpoints")(checkpoints_command)
app.command(name="extract")(extract_command)
app.command(name="quiz-plan")(quiz_plan_command)
app.command(name="validate")(validate_command)

__all__ = [
    "app",
    "checkpoints_command",
    "extract_command",
    "quiz_plan_command",
    "validate_command",
]
