# === FILE: news_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска NewsScout через командную строку.

Команды:
  check     Проверить домены в Google News и сохранить отчёт
  regions   Показать доступные регионы
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (необязательно)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только консоль, если не указан)
  --log-format FORMAT Формат логирования

Команда check опции:
  -i, --input FILE         Файл с доменами (по одному в строке)
  -o, --output FILE        Файл отчёта (default: results.json; .csv/.html по расширению)
  --headless/--no-headless Запуск браузера без окна / с окном
  -v, --verbose            Подробный вывод хода поиска
  -r, --region REGION      Регион (en-US, es-ES, fr-FR, it-IT, de-DE, pt-BR или all)
  -s, --strategy NAME      Стратегия поиска (можно несколько раз)
  --engine browser|http    Способ загрузки страниц
  --concurrency N          Сколько доменов проверять одновременно
  --timeout SEC            Таймаут загрузки страницы

Пример:
  news-scout check -i domains.txt -o results.csv --region all
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from pydantic import ValidationError

from news_scout import __version__
from news_scout.aggregator import BatchReport
from news_scout.config import REGION_CHOICES, REGIONS, CheckerConfig, load_config, resolve_regions
from news_scout.domains import load_domains
from news_scout.engine import BatchRunner
from news_scout.errors import InputError, OutputError
from news_scout.fetcher import create_fetcher
from news_scout.logger import DEFAULT_FORMAT, configure
from news_scout.report import write_report
from news_scout.strategies import STRATEGIES, select_strategies
from news_scout.validator import DomainResult

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def print_error(message: str, code: int = 1):
    click.secho(message, fg='red', err=True)
    sys.exit(code)


def _override(cfg: CheckerConfig, updates: Dict[str, Any]) -> CheckerConfig:
    """Новая проверенная конфигурация с опциями CLI поверх файла."""
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        return cfg
    return CheckerConfig(**{**cfg.model_dump(), **updates})


def _print_result(result: DomainResult) -> None:
    if result.is_valid_source:
        status = click.style('VALID SOURCE', fg='green')
    else:
        status = click.style('NOT A SOURCE', fg='red')
    suffix = f' | {result.validation_url}' if result.validation_url else ''
    click.echo(f'{status} | {result.domain}{suffix}')


def _print_summary(report: BatchReport) -> None:
    click.echo()
    click.secho('Results Summary:', fg='yellow', bold=True)
    click.secho(
        f'Valid Sources: {report.valid_count}/{report.total} ({report.percentage}%)',
        fg='green',
    )

    click.echo()
    click.secho('Valid Google News Sources:', fg='green', bold=True)
    for r in report.valid:
        click.echo(f'{r.domain} | {r.validation_url or ""}')

    click.echo()
    click.secho('Not Google News Sources:', fg='red', bold=True)
    for r in report.invalid:
        click.echo(r.domain)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', message='NewsScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только консоль, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """NewsScout: проверка доменов как источников Google News."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except InputError as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg
    ctx.obj['log'] = dict(level=log_level, log_file=log_file, log_format=log_format)


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--input', '-i', 'input_path',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл с доменами, по одному в строке (встроенный список, если не указан)'
)
@click.option(
    '--output', '-o', 'output_path',
    default='results.json',
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл отчёта: .csv → CSV, .html → HTML, иначе JSON'
)
@click.option(
    '--headless/--no-headless', 'headless',
    default=None,
    help='Запускать Chrome без окна (по умолчанию) или в видимом режиме'
)
@click.option(
    '--verbose', '-v', is_flag=True,
    help='Подробный вывод хода поиска'
)
@click.option(
    '--region', '-r', 'region',
    default=None,
    metavar='REGION',
    help=f'Регион: {", ".join(REGION_CHOICES)} (default: en-US)'
)
@click.option(
    '--strategy', '-s', 'strategy_names',
    multiple=True,
    metavar='NAME',
    help='Стратегия поиска (можно указать несколько раз)'
)
@click.option(
    '--engine', 'engine',
    default=None,
    type=click.Choice(['browser', 'http']),
    help='Загрузка страниц браузером (Playwright) или по HTTP'
)
@click.option(
    '--concurrency', 'concurrency',
    type=int,
    default=None,
    help='Сколько доменов проверять одновременно'
)
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Таймаут загрузки одной страницы (секунд)'
)
@click.pass_context
def check(ctx, input_path, output_path, headless, verbose, region, strategy_names,
          engine, concurrency, timeout):
    """Проверить домены и сохранить отчёт."""
    if verbose:
        log = ctx.obj['log']
        configure(
            level='DEBUG',
            log_file=str(log['log_file']) if log['log_file'] else None,
            log_format=log['log_format'],
        )

    try:
        cfg = _override(ctx.obj['config'], {
            'headless': headless,
            'engine': engine,
            'concurrency': concurrency,
            'page_timeout': timeout,
            'regions': resolve_regions(region) if region is not None else None,
            'strategies': tuple(strategy_names) or None,
        })
        strategies = select_strategies(cfg.strategies)
    except (ValueError, ValidationError) as e:
        print_error(f'Ошибка в параметрах: {e}')

    try:
        domains = load_domains(input_path)
    except InputError as e:
        print_error(str(e))

    click.secho('Google News Domain Checker', fg='blue', bold=True)
    click.secho(f'Checking {len(domains)} domains against Google News...', fg='bright_black')

    holder: Dict[str, Optional[BatchRunner]] = {'runner': None}
    interrupted = False

    with click.progressbar(length=len(domains), label='Progress', file=sys.stderr) as bar:

        def on_progress(result: DomainResult, done: int, total: int) -> None:
            bar.update(1)
            _print_result(result)

        async def _runner() -> BatchReport:
            async with create_fetcher(cfg) as fetcher:
                runner = BatchRunner(cfg, fetcher, strategies=strategies)
                holder['runner'] = runner
                return await runner.run(domains, on_progress)

        try:
            report = asyncio.run(_runner())
        except KeyboardInterrupt:
            interrupted = True
            runner = holder['runner']
            report = runner.partial_report() if runner else BatchReport()
        except Exception as e:
            print_error(f'Ошибка при проверке: {e}')

    _print_summary(report)

    try:
        saved = write_report(report, output_path)
        click.secho(f'\nResults saved to {saved}', fg='blue')
    except OutputError as e:
        click.secho(str(e), fg='red', err=True)

    if interrupted:
        click.secho('Interrupted: partial results only', fg='yellow', err=True)
        sys.exit(130)


@cli.command('regions', context_settings=CONTEXT_SETTINGS)
def show_regions():
    """Показать регионы и стратегии поиска."""
    for code, r in REGIONS.items():
        click.echo(f'{code}\tgl={r.gl}\tceid={r.ceid}')
    click.echo()
    for s in STRATEGIES:
        mark = '*' if s.enabled else ' '
        click.echo(f'{mark} {s.name}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
