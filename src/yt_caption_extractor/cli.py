"""
cli.py — Command-line interface for yt-caption-extractor.

Provides the `yt-captions` command group (registered as a console script
in pyproject.toml):

    get       Extract a video's caption transcript.
    content   Like get, but falls back to the description / metadata.
    quality   Assess whether a text file reads like spoken dialogue.

Usage examples:
    yt-captions get "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    yt-captions get dQw4w9WgXcQ --lang de --format json
    YOUTUBE_API_KEY=... yt-captions -v content https://youtu.be/dQw4w9WgXcQ
    yt-captions quality transcript.txt
"""

from __future__ import annotations

import json
import sys

import click

from yt_caption_extractor.config import get_settings
from yt_caption_extractor.content import resolve_content
from yt_caption_extractor.errors import CaptionError
from yt_caption_extractor.extractor import extract_captions, format_json
from yt_caption_extractor.log import setup_logging
from yt_caption_extractor.quality import assess_quality


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _emit(text: str, output: str | None) -> None:
    """Write text to a file if --output was given, otherwise to stdout."""
    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.write("\n")
        click.echo(f"Written to {output}", err=True)
    else:
        click.echo(text)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


_api_key_option = click.option(
    "--api-key",
    envvar="YOUTUBE_API_KEY",
    default=None,
    help="YouTube Data API key (or set YOUTUBE_API_KEY). Without it the Data API step is skipped.",
)
_lang_option = click.option(
    "--lang", "-l",
    default=None,
    help="Target caption language code. Defaults to the configured target language (en).",
)
_format_option = click.option(
    "--format", "-f",
    "fmt",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format: plain transcript text or a JSON document with details.",
)
_output_option = click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write output to a file instead of stdout.",
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(verbose: bool) -> None:
    """
    YouTube Caption Extractor — recover the spoken transcript of a video.
    """
    setup_logging("DEBUG" if verbose else get_settings().log_level)


# ---------------------------------------------------------------------------
# Subcommand: get
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
@_api_key_option
@_lang_option
@_format_option
@_output_option
def get(video: str, api_key: str | None, lang: str | None, fmt: str, output: str | None) -> None:
    """
    Extract the caption transcript of a YouTube video.

    VIDEO can be a full YouTube URL or an 11-character video ID.  Exits with
    status 1 when the video has no retrievable captions.
    """
    try:
        result = extract_captions(video, api_key=api_key, language=lang)
    except CaptionError as exc:
        _fail(exc.message)

    if fmt == "json":
        _emit(json.dumps(format_json(result), indent=2, ensure_ascii=False), output)
        if not result.found:
            sys.exit(1)
        return

    if not result.found:
        _fail(f"No captions could be extracted for video {result.video_id}.")
    _emit(result.transcript.text, output)


# ---------------------------------------------------------------------------
# Subcommand: content
# ---------------------------------------------------------------------------

@main.command()
@click.argument("video", metavar="URL_OR_ID")
@_api_key_option
@_lang_option
@_format_option
@_output_option
def content(video: str, api_key: str | None, lang: str | None, fmt: str, output: str | None) -> None:
    """
    Get text to summarise: captions if possible, else description or metadata.

    The source is reported on stderr (and in the JSON output) because only
    "captions" is the actual spoken content of the video.
    """
    try:
        resolved = resolve_content(video, api_key=api_key, language=lang)
    except CaptionError as exc:
        _fail(exc.message)

    if fmt == "json":
        _emit(json.dumps(resolved.to_dict(), indent=2, ensure_ascii=False), output)
        return

    if resolved.source != "captions":
        click.echo(f"Note: no captions available, using the video {resolved.source}.", err=True)
    _emit(resolved.text, output)


# ---------------------------------------------------------------------------
# Subcommand: quality
# ---------------------------------------------------------------------------

@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
def quality(source) -> None:
    """
    Assess whether the text in SOURCE reads like spoken dialogue.

    SOURCE is a text file, or "-" (the default) to read stdin.
    """
    assessment = assess_quality(source.read())
    click.echo(f"Confidence:    {assessment.confidence.value}")
    click.echo(f"Likely spoken: {'yes' if assessment.likely_spoken else 'maybe'}")
    click.echo(f"Pronoun ratio: {assessment.pronoun_ratio:.3f}")
    click.echo(f"Reason:        {assessment.reason}")
