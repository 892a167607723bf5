#!/usr/bin/env python3
"""
Точка входа для запуска переноса SiteMigrate через командную строку.

Команды:
  run       Перенести все страницы и доски из конфигурации
  config    Показать текущую конфигурацию

Общие опции (все необязательны, без них используются встроенные цели):
  --config PATH       Путь к YAML/JSON-конфигу
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда run опции:
  --json PATH         Сохранить JSON-сводку запуска в файл

Дополнительно:
  --version, -v       Показать версию SiteMigrate

Пример:
  site-migrate run
  site-migrate --config configs/site.yaml --log-level DEBUG run --json run.json
"""
import sys
from pathlib import Path

import click

from site_migrate import __version__
from site_migrate.config import load_config
from site_migrate.engine import Engine
from site_migrate.logger import DEFAULT_FORMAT, init_logging
from site_migrate.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMigrate, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON (по умолчанию встроенная).'
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
    """Группа команд SiteMigrate CLI."""
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


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-сводку в файл'
)
@click.pass_context
def run(ctx, json_output):
    """Перенести все страницы и доски."""
    cfg = ctx.obj['config']
    click.echo(f'Migrating {len(cfg.pages)} page(s) and {len(cfg.boards)} board(s) from {cfg.site_root}')
    try:
        report = Engine(cfg).start()
    except Exception as e:
        print_error(f'Ошибка при переносе: {e}')

    click.echo(report.summary())
    for entry in report.failed:
        click.echo(f"  failed: {entry['name']}: {entry.get('error', '')}")

    if json_output:
        try:
            saved = render_json(report, json_output)
            click.echo(f'JSON report: {saved}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
