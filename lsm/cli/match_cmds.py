"""Matching commands: match, score, command."""

from __future__ import annotations
import json
import logging

import click

from .helpers import cli, fail, get_store
from .shared import dump_json, parse_cli_value
from ..commands import build_registry
from ..errors import LsmError
from ..match import (
    DistanceBackend,
    FieldErrorPolicy,
    MatchConfig,
    MatchMode,
    MatchingEngine,
    get_distance_function,
    score_pair,
)
from ..match.scoring import comparison_units
from ..sources import JsonLinesSource, SQLiteSource, field_equals

logger = logging.getLogger(__name__)


@cli.command()
@click.argument('source_term')
@click.option('--field', 'field_name', required=True, help='Record field holding the text to compare')
@click.option('--threshold', type=click.FloatRange(0.0, 1.0), default=None, help='Minimum similarity (default: matching.threshold)')
@click.option('--word', 'mode', flag_value='word', default='word', help='Compare characters (default)')
@click.option('--sentence', 'mode', flag_value='sentence', help='Compare separator-delimited tokens')
@click.option('--separators', default=None, help='Token delimiter characters (default: matching.separators)')
@click.option('--limit', type=click.IntRange(min=0), default=None, help='Stop after N hits')
@click.option('--output-field', default=None, help='Emit only this field of each matched record')
@click.option('--input', 'input_path', type=click.Path(exists=True, dir_okay=False), default=None, help='JSON-lines file of candidate records')
@click.option('--collection', default=None, help='Record store collection (used when --input is not given)')
@click.option('--key', 'key_field', default=None, help='Field identifying a record; repeated keys are skipped')
@click.option('--where', 'where', default=None, help='Only scan records with FIELD=VALUE')
@click.option('--backend', type=click.Choice([b.value for b in DistanceBackend]), default=None, help='Distance implementation')
@click.option('--skip-bad-records', is_flag=True, help='Skip records whose field is missing or not text instead of aborting')
@click.option('--pretty', is_flag=True, help='Indent JSON output')
@click.pass_context
def match(ctx: click.Context, source_term: str, field_name: str, threshold: float | None, mode: str,
          separators: str | None, limit: int | None, output_field: str | None, input_path: str | None,
          collection: str | None, key_field: str | None, where: str | None, backend: str | None,
          skip_bad_records: bool, pretty: bool):
    """Match SOURCE_TERM against candidate records and print the results as JSON.

    Results keep scan order. Each result carries the matched record (or its
    --output-field value), the similarity score and the edit distance.
    """
    cfg = ctx.obj
    matching = cfg.get('matching', {})
    logging_cfg = cfg.get('logging', {})

    predicate = None
    if where:
        if '=' not in where:
            fail(ctx, "--where expects FIELD=VALUE")
        name, raw_value = where.split('=', 1)
        predicate = field_equals(name.strip(), parse_cli_value(raw_value))
    key = (lambda rec: json.dumps(rec.get(key_field), sort_keys=True, default=str)) if key_field else None

    try:
        config = MatchConfig(
            source_term=source_term,
            threshold=threshold if threshold is not None else matching.get('threshold', 0.8),
            field=field_name,
            mode=MatchMode(mode),
            separators=separators if separators is not None else matching.get('separators', " .,;:"),
            limit=limit,
            output_field=output_field,
        )
        engine = MatchingEngine(
            config,
            distance_backend=backend or matching.get('distance_backend', 'native'),
            on_field_error=FieldErrorPolicy.SKIP if skip_bad_records else matching.get('on_field_error', 'abort'),
            progress_enabled=logging_cfg.get('progress_enabled', False),
            progress_interval=int(logging_cfg.get('progress_interval', 1000)),
        )

        if input_path:
            source = JsonLinesSource(input_path, key=key, predicate=predicate)
            result_set = engine.run(source)
        else:
            with get_store(cfg) as store:
                source = SQLiteSource(store, collection or cfg['database']['collection'], predicate=predicate)
                result_set = engine.run(source)
    except LsmError as e:
        fail(ctx, str(e.args[0] if e.args else e))
        return

    logger.debug(f"[match] source stats: {source.stats()}")
    click.echo(dump_json(result_set.to_dict(), pretty=pretty))


@cli.command()
@click.argument('source')
@click.argument('candidate')
@click.option('--sentence', is_flag=True, help='Compare tokens instead of characters')
@click.option('--separators', default=None, help='Token delimiter characters (default: matching.separators)')
@click.option('--threshold', type=click.FloatRange(0.0, 1.0), default=0.0, show_default=True, help='Threshold used for the bound pre-filter')
@click.pass_context
def score(ctx: click.Context, source: str, candidate: str, sentence: bool, separators: str | None, threshold: float):
    """Show how one SOURCE/CANDIDATE pair is scored (diagnostics)."""
    matching = ctx.obj.get('matching', {})
    config = MatchConfig(
        source_term=source,
        threshold=threshold,
        field="_",
        mode=MatchMode.SENTENCE if sentence else MatchMode.WORD,
        separators=separators if separators is not None else matching.get('separators', " .,;:"),
    )
    distance_fn = get_distance_function(matching.get('distance_backend', 'native'))
    pair = score_pair(source, candidate, config, distance_fn)

    click.echo(click.style(f"=== Scoring ({config.mode.value} mode) ===", fg='cyan', bold=True))
    click.echo(f"Source units:    {list(comparison_units(source, config))}")
    click.echo(f"Candidate units: {list(comparison_units(candidate, config))}")
    click.echo(f"Max similarity:  {pair.max_similarity:.4f}")
    if pair.pruned:
        click.echo(click.style(f"Pruned: bound <= threshold ({threshold})", fg='yellow'))
    else:
        click.echo(f"Distance:        {pair.distance}")
    verdict = click.style('accepted', fg='green') if pair.score >= threshold else click.style('rejected', fg='red')
    click.echo(f"Score:           {pair.score:.4f} ({verdict})")


@cli.command('command')
@click.argument('request_json')
@click.option('--pretty', is_flag=True, help='Indent JSON output')
@click.pass_context
def run_command(ctx: click.Context, request_json: str, pretty: bool):
    """Dispatch a command document against the record store.

    \b
    Example:
      lsm command '{"levenshtein": "words", "sourceTerm": "kitten",
                    "threshold": 0.5, "word": true, "sentence": false,
                    "separators": " ", "field": "word", "limit": 5}'
    """
    cfg = ctx.obj
    try:
        request = json.loads(request_json)
    except json.JSONDecodeError as e:
        fail(ctx, f"request is not valid JSON: {e.msg}")
        return
    if not isinstance(request, dict):
        fail(ctx, "request must be a JSON object")
        return

    registry = build_registry(cfg.get('matching', {}), cfg.get('logging', {}))
    try:
        with get_store(cfg) as store:
            response = registry.dispatch(request, lambda collection: SQLiteSource(store, collection))
    except LsmError as e:
        fail(ctx, str(e))
        return

    click.echo(dump_json(response, pretty=pretty))
    if not response.get('ok'):
        ctx.exit(1)


__all__ = ["match", "score", "run_command"]
