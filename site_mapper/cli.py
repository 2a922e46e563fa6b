#!/usr/bin/env python3
"""
Точка входа для запуска SiteMapper через командную строку.

Команды:
  crawl [URL]   Обойти все страницы домена и вывести ссылки каждой страницы
  config [URL]  Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (необязателен, если указан URL)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --json PATH              Сохранить JSON-отчёт в файл
  --html PATH              Сохранить HTML-отчёт в файл
  --template DIR           Папка с шаблоном report.html.j2
  --max-concurrency INT    Лимит одновременных запросов (override max_concurrency)
  --quiet                  Не печатать страницы, только итог

Пример:
  site-mapper crawl https://example.com/ --json map.json
"""
import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from site_mapper import __version__
from site_mapper.config import CrawlerConfig, load_config
from site_mapper.crawler.models import Page
from site_mapper.logger import init_logging
from site_mapper.report.html_report import render_html
from site_mapper.report.json_report import render_json
from site_mapper.scanner import start_scan

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def print_page(page: Page) -> None:
    click.echo(f"URL:\t{page.location}")
    if page.error is not None:
        click.echo(f"Error: {page.error}")
        return
    click.echo("Links:")
    for link in page.links:
        click.echo(f"\t{link}")
    click.echo()


def _build_config(ctx: click.Context, url: Optional[str], **overrides) -> CrawlerConfig:
    config_path = ctx.obj['config_path']
    if config_path is None and url is None:
        print_error('Укажите URL сайта или --config (например: site-mapper crawl https://bbc.co.uk/)')
    try:
        return load_config(config_path, base_url=url, **overrides)
    except ValidationError as e:
        print_error(f'Некорректная конфигурация: {e}')
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(name)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteMapper CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
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
    help='Папка с Jinja2-шаблоном report.html.j2 (по умолчанию встроенный)'
)
@click.option(
    '--max-concurrency', 'max_concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Лимит одновременных запросов (override max_concurrency)'
)
@click.option(
    '--quiet', '-q', is_flag=True,
    help='Не печатать страницы, только итоговую строку'
)
@click.pass_context
def crawl(ctx, url, json_output, html_output, template_dir, max_concurrency, quiet):
    """Обойти домен, начиная с URL, и вывести найденные ссылки."""
    cfg = _build_config(ctx, url, max_concurrency=max_concurrency)
    try:
        report = asyncio.run(start_scan(cfg, on_page=None if quiet else print_page))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    click.echo(report.summary())

    if json_output:
        try:
            saved_json = render_json(report, json_output)
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
@click.argument('url', required=False)
@click.pass_context
def show_config(ctx, url):
    """Показать текущую конфигурацию в JSON."""
    cfg = _build_config(ctx, url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
