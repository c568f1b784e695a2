#!/usr/bin/env python3
"""
Command line entry point of wcag_scout.

Commands:
  audit [URL]     Crawl the site, run axe-core on every page, write reports
  discover [URL]  Crawl the site without auditing and list the URLs found
  config [URL]    Show the effective configuration

URL falls back to $SITE_URL, then to ``start_url`` from the config file,
then to https://example.com. Bare hostnames get ``https://``.

Global options:
  --config PATH       YAML/JSON settings file
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FORMAT Logging format string

Exit status: 0 on success, 1 on invalid input or a fatal error,
2 with ``audit --fail-on-violations`` when any violation was found.

Example:
  wcag-scout audit example.com --max-depth 2 --json wcag-report.json --pretty
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click

from wcag_scout import __version__
from wcag_scout.config import START_URL_ENV, AuditConfig, load_config
from wcag_scout.crawler.urls import normalize_url
from wcag_scout.engine import start_scan
from wcag_scout.errors import InvalidUrl
from wcag_scout.logger import init_logging
from wcag_scout.report import render_html, render_json, render_url_list

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


_CRAWL_OPTIONS = (
    click.option('--max-depth', '-d', 'max_depth', type=click.IntRange(min=0), default=None,
                 help='Maximum link depth from the start page (default 1)'),
    click.option('--concurrency', '-n', 'concurrency', type=click.IntRange(min=1), default=None,
                 help='Pages audited at the same time (default 3)'),
    click.option('--delay', 'politeness_delay', type=click.FloatRange(min=0), default=None,
                 help='Pause before each discovered link, seconds (default 0.5)'),
    click.option('--page-timeout', 'page_timeout', type=click.FloatRange(min=0, min_open=True), default=None,
                 help='Time budget per page, seconds (default 60)'),
    click.option('--crawl-timeout', 'crawl_timeout', type=click.FloatRange(min=0, min_open=True), default=None,
                 help='Time budget for the whole crawl, seconds'),
    click.option('--axe-source', 'axe_source', default=None,
                 help='URL or file path of axe.min.js'),
)


def crawl_options(func: Callable) -> Callable:
    """Options shared by the commands that crawl."""
    for option in reversed(_CRAWL_OPTIONS):
        func = option(func)
    return func


def build_config(ctx: click.Context, url: Optional[str], **overrides: Any) -> AuditConfig:
    """Merge config file, URL and CLI overrides; exit with status 1 on invalid input."""
    if url is not None:
        try:
            url = normalize_url(url)
        except InvalidUrl as e:
            print_error(f'{e}. Usage: {ctx.command_path} https://site.com (or set {START_URL_ENV}).')
    try:
        return load_config(ctx.obj['config_path'], start_url=url, **overrides)
    except Exception as e:
        print_error(f'Error loading configuration: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='wcag_scout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML or JSON settings file.'
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
    help='Log file (stdout only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Crawl a site and audit its pages for accessibility (axe-core)."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('audit', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False, envvar=START_URL_ENV)
@crawl_options
@click.option(
    '--html', 'html_output',
    default='wcag-report.html',
    show_default=True,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='HTML report path'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also save a JSON report'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with report.html.j2 (bundled template if omitted)'
)
@click.option('--pretty', is_flag=True, help='Indent the JSON report')
@click.option('--fail-on-violations', is_flag=True, help='Exit with status 2 when violations are found')
@click.pass_context
def audit(ctx, url, html_output, json_output, template_dir, pretty, fail_on_violations, **overrides):
    """Crawl URL and audit every page reached."""
    cfg = build_config(ctx, url, **overrides)
    click.echo(f'Starting WCAG audit of {cfg.start_url}')
    try:
        report = asyncio.run(start_scan(cfg))
    except Exception as e:
        print_error(f'Audit failed: {e}')

    try:
        saved_html = render_html(report, template_dir, html_output)
        click.echo(f'HTML report: {saved_html}')
        if json_output:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
    except Exception as e:
        print_error(f'Error saving report: {e}')

    summary = report.summary
    click.echo(
        f'Pages audited: {summary.total_pages}, violations: {summary.total_violations}, '
        f'average per page: {summary.average_per_page:.1f}'
    )
    if report.failed:
        click.echo(f'Pages that could not be audited: {len(report.failed)}')
    if fail_on_violations and report.has_violations:
        ctx.exit(2)


@cli.command('discover', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False, envvar=START_URL_ENV)
@crawl_options
@click.option(
    '--output', '-o', 'output',
    default='urls-discovered.txt',
    show_default=True,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='File for the discovered URLs'
)
@click.pass_context
def discover(ctx, url, output, **overrides):
    """Crawl URL without auditing and save every same-domain URL found."""
    cfg = build_config(ctx, url, **overrides)
    click.echo(f'Discovering URLs from {cfg.start_url}')
    try:
        report = asyncio.run(start_scan(cfg, audit=False))
    except Exception as e:
        print_error(f'Discovery failed: {e}')

    try:
        saved = render_url_list(report.discovered, output)
    except OSError as e:
        print_error(f'Error saving URL list: {e}')
    click.echo(f'Unique URLs found: {len(report.discovered)}')
    click.echo(f'Saved to: {saved}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False, envvar=START_URL_ENV)
@click.pass_context
def show_config(ctx, url):
    """Show the effective configuration as JSON."""
    cfg = build_config(ctx, url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
