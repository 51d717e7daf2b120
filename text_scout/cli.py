#!/usr/bin/env python3
# === FILE: text_scout/cli.py ===
"""
Command-line entry point for the TextScout crawler.

Commands:
  crawl     Run a crawl from the configured (or given) seed URLs
  config    Show the effective configuration

Common options:
  --config PATH       Path to the YAML/JSON config (default: configs/default.yaml,
                      built-in defaults when that file is absent)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  URLS...             Seed URLs, replacing start_urls from the config
  --depth INT         Maximum link depth (override max_depth)
  --concurrency INT   Number of parallel fetch workers
  --output-dir DIR    Directory receiving the extracted text
  --limit INT         Maximum number of fetches (override max_pages)
  --clean             Wipe the output directory before crawling
  --json PATH         Save the crawl summary as JSON
  --pretty            Indent JSON output
  --crawl-timeout SEC Timeout for the whole crawl (seconds)

Also:
  --version, -v       Show the TextScout version

Example:
  text_scout --config configs/default.yaml crawl --depth 2 --json summary.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from text_scout import __version__
from text_scout.config import DEFAULT_CONFIG, CrawlerConfig, load_config
from text_scout.logger import DEFAULT_FORMAT, configure
from text_scout.report.json_report import render_json, summary_payload
from text_scout.scanner import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='TextScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to the YAML/JSON configuration file '
         '(default: configs/default.yaml if present, else built-in defaults).'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stdout only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """TextScout command group."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        if config_path is None and not DEFAULT_CONFIG.exists():
            cfg = CrawlerConfig()
        else:
            cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1)
@click.option('--depth', '-d', 'max_depth', type=click.IntRange(min=0), default=None,
              help='Maximum link depth (override max_depth)')
@click.option('--concurrency', '-n', 'concurrency', type=click.IntRange(min=1), default=None,
              help='Number of parallel fetch workers')
@click.option('--output-dir', '-o', 'output_dir', default=None,
              type=click.Path(file_okay=False, path_type=Path),
              help='Directory receiving the extracted text')
@click.option('--limit', '-l', 'limit', type=click.IntRange(min=1), default=None,
              help='Maximum number of fetches (override max_pages)')
@click.option('--clean', is_flag=True, default=None,
              help='Wipe the output directory before crawling')
@click.option('--json', '-j', 'json_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Save the crawl summary as JSON')
@click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None,
              help='Timeout for the whole crawl (seconds)')
@click.pass_context
def crawl(ctx, urls, max_depth, concurrency, output_dir, limit, clean, json_output, pretty, crawl_timeout):
    """Crawl from the seed URLs and append extracted text to the output directory."""
    try:
        cfg = ctx.obj['config'].with_overrides(
            start_urls=list(urls) or None,
            max_depth=max_depth,
            concurrency=concurrency,
            output_dir=output_dir,
            max_pages=limit,
            clean_output=clean or None,
        )
    except ValueError as e:
        print_error(f'Invalid option: {e}')

    try:
        if crawl_timeout:
            summary = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            summary = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    if json_output:
        try:
            saved = render_json(summary, json_output, pretty=pretty)
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')
        click.echo(f'JSON summary: {saved}')
        return

    click.echo(json.dumps(summary_payload(summary), ensure_ascii=False, indent=2 if pretty else None))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
