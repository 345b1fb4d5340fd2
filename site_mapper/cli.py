#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteMapper через командную строку.

Использование:
  site-mapper SEED_URL OUTPUT_FILE [OPTIONS]

Аргументы:
  SEED_URL            Абсолютный адрес (http/https), с которого начинается обход
  OUTPUT_FILE         Куда сохранить JSON-граф сайта

Опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --concurrency INT   Макс. число одновременных загрузок (0 — без ограничения)
  --timeout SEC       Таймаут одного запроса (секунд)
  --user-agent TEXT   Заголовок User-Agent
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования
  --version, -v       Показать версию SiteMapper

Пример:
  site-mapper https://example.com reports/example.json --pretty --concurrency 20
"""
import asyncio
import sys
from pathlib import Path
from urllib.parse import urlsplit

import click

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.engine import start_crawl
from site_mapper.logger import DEFAULT_FORMAT, init_logging
from site_mapper.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _is_absolute_http_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.hostname)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.argument('seed_url')
@click.argument(
    'output_file',
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=0),
    default=None,
    help='Макс. число одновременных загрузок (0 — без ограничения)'
)
@click.option(
    '--timeout', 'timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут одного запроса (секунд)'
)
@click.option(
    '--user-agent', 'user_agent',
    default=None,
    help='Заголовок User-Agent'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
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
def cli(seed_url, output_file, config_path, concurrency, timeout, user_agent, pretty,
        log_level, log_file, log_format):
    """Обойти сайт SEED_URL и сохранить граф страниц в OUTPUT_FILE."""
    logger = init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    overrides = {
        key: value
        for key, value in (
            ('concurrency', concurrency),
            ('timeout', timeout),
            ('user_agent', user_agent),
        )
        if value is not None
    }
    if overrides:
        # model_validate so that the field validators run on CLI values too
        try:
            cfg = cfg.model_validate({**cfg.model_dump(), **overrides})
        except ValueError as e:
            print_error(f'Некорректные параметры: {e}')

    if not _is_absolute_http_url(seed_url):
        print_error(f'Некорректный адрес для обхода: {seed_url}')

    try:
        result = asyncio.run(start_crawl(seed_url, cfg))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    for line in result.errors:
        logger.warning(line)

    try:
        saved = render_json(result.graph, output_file, pretty=pretty)
    except OSError as e:
        print_error(f'Ошибка при сохранении JSON: {e}')
    click.echo(f'JSON report: {saved}')


if __name__ == "__main__":
    cli()
