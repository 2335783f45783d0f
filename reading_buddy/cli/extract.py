"""Extract command.

Extracts a book's page text and reports or prints it.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from reading_buddy.cli.utils import (
    handle_errors,
    load_config,
    display_error,
    display_success,
    display_warning,
)
from reading_buddy.models.text_extraction import PageRange
from reading_buddy.observability.context import (
    correlation_id_context,
    new_correlation_id,
)
from reading_buddy.services.config_manager import build_text_extractor
from reading_buddy.services.text_extractor import format_range_text


@handle_errors
def extract_command(
    reference: str = typer.Argument(..., help="Book PDF: public URL or local path"),
    start: Optional[int] = typer.Option(None, "--start", help="First page"),
    end: Optional[int] = typer.Option(None, "--end", help="Last page"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML"
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the result in its stored JSON shape"
    ),
    formatted: bool = typer.Option(
        False, "--format", help="Print [Page N] formatted text"
    ),
):
    """Extract per-page text from a book PDF."""
    if (start is None) != (end is None):
        display_error("Provide both --start and --end, or neither")
        raise typer.Exit(code=1)

    config = load_config(config_path)
    extractor = build_text_extractor(config)
    page_range = PageRange(start=start, end=end) if start is not None else None

    with correlation_id_context(new_correlation_id("extract")):
        content = asyncio.run(extractor.extract(reference, page_range))

    if as_json:
        typer.echo(json.dumps(content.to_storage_dict(), indent=2))
        return

    if formatted:
        typer.echo(format_range_text(content))
        return

    display_success("Extraction completed")
    typer.echo(f"  Total pages: {content.total_pages}")
    typer.echo(f"  Total words: {content.total_words}")
    typer.echo(f"  Extraction method: {content.extraction_method.value}")
    if content.total_words < 100:
        display_warning(
            f"Only {content.total_words} words extracted. "
            "This might be an image-based PDF."
        )
    if content.pages:
        typer.echo(f"  Preview: {content.pages[0].text[:200]}")
