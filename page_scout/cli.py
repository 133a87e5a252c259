# === FILE: page_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера PageScout через командную строку.

Команды:
  crawl     Запустить обход от стартового URL и вывести/сохранить отчёт
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  SEED                Стартовый URL (override seed_url)
  --budget INT        Макс. число уникальных URL (override budget)
  --delay SEC         Пауза между запросами (override delay)
  --timeout SEC       Таймаут одного запроса (override timeout)
  --sink KIND         mongo | jsonl | memory
  --output PATH       Файл для sink=jsonl
  --dry-run           Ничего не сохранять (sink=memory)
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами
  --pretty            Преформатировать JSON-вывод (отступ 2)

Дополнительно:
  --version, -v       Показать версию PageScout

Пример:
  page_scout crawl https://example.com --budget 50 --sink jsonl --output pages.jsonl
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from page_scout import __version__
from page_scout.aggregator import aggregate_results
from page_scout.config import apply_overrides, load_config
from page_scout.engine import start_crawl
from page_scout.logger import DEFAULT_FORMAT, init_logging
from page_scout.report.html_report import render_html
from page_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PageScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд PageScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('seed', required=False)
@click.option('--budget', '-b', 'budget', type=int, default=None,
              help='Макс. число уникальных URL (override budget)')
@click.option('--delay', 'delay', type=float, default=None,
              help='Пауза между запросами, секунд (override delay)')
@click.option('--timeout', 'timeout', type=float, default=None,
              help='Таймаут одного запроса, секунд (override timeout)')
@click.option('--sink', 'sink', type=click.Choice(['mongo', 'jsonl', 'memory']), default=None,
              help='Куда сохранять страницы (override sink)')
@click.option('--output', '-o', 'output_path', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Файл для sink=jsonl')
@click.option('--dry-run', is_flag=True, help='Ничего не сохранять, только обойти')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def crawl(ctx, seed, budget, delay, timeout, sink, output_path, dry_run,
          json_output, html_output, template_dir, pretty):
    """Запустить обход и сгенерировать отчёт."""
    try:
        cfg = apply_overrides(
            ctx.obj['config'],
            seed_url=seed,
            budget=budget,
            delay=delay,
            timeout=timeout,
            sink='memory' if dry_run else sink,
            output_path=str(output_path) if output_path else None,
        )
    except ValidationError as e:
        print_error(f'Некорректные параметры: {e}')

    click.echo(f'Starting crawl from: {cfg.seed_url}')
    try:
        stats = asyncio.run(start_crawl(cfg))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    report = aggregate_results(stats)

    # Без файлов отчёта печатаем JSON в stdout
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    data = ctx.obj['config'].model_dump(mode='json')
    if data.get('mongodb_uri'):
        data['mongodb_uri'] = '***'
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
