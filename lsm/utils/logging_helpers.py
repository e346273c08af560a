"""Logging helper utilities for consistent progress reporting."""

import logging
import click

logger = logging.getLogger(__name__)


def log_progress(
    processed: int,
    total: int | None,
    accepted: int = 0,
    pruned: int = 0,
    elapsed_seconds: float = 0.0,
    item_name: str = "candidates"
) -> None:
    """Log scan progress with consistent formatting.

    Args:
        processed: Number of candidates scored so far
        total: Total number of candidates (None if unknown, e.g. streaming sources)
        accepted: Count of candidates that met the threshold
        pruned: Count of candidates rejected by the length bound
        elapsed_seconds: Time elapsed since start
        item_name: Name of items being processed
    """
    parts = [
        f"{click.style(f'{processed}', fg='cyan')} {item_name} scanned"
    ]

    if total:
        pct = (processed / total * 100) if total > 0 else 0
        parts[0] = f"{click.style(f'{processed}/{total}', fg='cyan')} {item_name} ({pct:.0f}%)"

    if accepted > 0:
        parts.append(f"{click.style(f'{accepted} matched', fg='green')}")
    if pruned > 0:
        parts.append(f"{click.style(f'{pruned} pruned', fg='yellow')}")

    if elapsed_seconds > 0:
        rate = processed / elapsed_seconds
        parts.append(f"{rate:.1f} {item_name}/s")

    logger.info(" | ".join(parts))


def format_summary(
    hits: int,
    scanned: int,
    pruned: int,
    compared: int,
    duration_seconds: float = 0.0,
    stopped_by_limit: bool = False,
) -> str:
    """Format a scan summary line with colored counts."""
    parts = [
        click.style('✓', fg='green'),
        "Scan:",
        click.style(f'{hits} hits', fg='green'),
        f"from {scanned} candidates",
        click.style(f'{compared} compared', fg='blue'),
        click.style(f'{pruned} pruned', fg='yellow'),
    ]

    if stopped_by_limit:
        parts.append(click.style('(limit reached)', fg='magenta'))

    if duration_seconds > 0:
        parts.append(f"in {duration_seconds:.2f}s")

    return " ".join(parts)


__all__ = ["log_progress", "format_summary"]
