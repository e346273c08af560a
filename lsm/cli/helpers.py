from __future__ import annotations
import click
from ..config import load_typed_config
from ..version import __version__

from .shared import get_store


@click.group()
@click.version_option(version=__version__, prog_name="levenshtein-stream-matcher")
@click.option('--progress/--no-progress', default=None, help='Enable/disable progress logging (overrides config)')
@click.option('--progress-interval', type=int, default=None, help='Log progress every N candidates (overrides config)')
@click.pass_context
def cli(ctx: click.Context, progress: bool | None, progress_interval: int | None):
    """Streaming fuzzy matcher based on the Levenshtein distance.

    \b
    TYPICAL WORKFLOWS:

    \b
    Match a JSON-lines file:
      lsm match kitten --field word --threshold 0.5 --input words.jsonl

    \b
    Sentence-level matching (token edit distance):
      lsm match "the quick fox" --sentence --field text --input docs.jsonl

    \b
    Using the record store:
      lsm import-records words.jsonl --collection words
      lsm match kitten --field word --collection words --limit 10
      lsm command '{"levenshtein": "words", "sourceTerm": "kitten", ...}'

    \b
    Diagnostics:
      lsm score kitten sitting   # Show bound, distance and score of one pair

    \b
    Configuration is read from LSM__* environment variables or a .env file
    (e.g. LSM__MATCHING__DISTANCE_BACKEND=rapidfuzz).
    """
    # Tests inject a ready config dict through CliRunner.invoke(obj=...)
    if not isinstance(ctx.obj, dict):
        ctx.obj = load_typed_config().to_dict()

    # Override logging config from CLI flags
    if progress is not None:
        ctx.obj.setdefault('logging', {})['progress_enabled'] = progress
    if progress_interval is not None:
        ctx.obj.setdefault('logging', {})['progress_interval'] = progress_interval


def fail(ctx: click.Context, message: str) -> None:
    """Print a red error line and exit with status 1."""
    click.echo(click.style(f"Error: {message}", fg='red'), err=True)
    ctx.exit(1)


__all__ = ["cli", "fail", "get_store"]
