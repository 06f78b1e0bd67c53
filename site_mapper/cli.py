#!/usr/bin/env python3
"""
Точка входа SiteMapper для командной строки.

Команды:
  run       Обойти сайт, перезаписать sitemap.xml и дописать запись в журнал
  config    Показать текущую конфигурацию
  history   Показать журнал запусков (JSON)

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда run опции:
  --list              Вывести найденные URL
  --json PATH         Сохранить JSON-отчёт о запуске

Пример:
  site-mapper --config configs/default.yaml run --list
"""
import json
import sys
from pathlib import Path

import click

from site_mapper import __version__
from site_mapper.config import load_config
from site_mapper.engine import run_crawl
from site_mapper.history import read_history
from site_mapper.logger import init_logging
from site_mapper.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="SiteMapper, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default="configs/default.yaml",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Путь к файлу конфигурации YAML/JSON."
)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Уровень логирования"
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Путь к файлу логов (stderr, если не указан)"
)
@click.option(
    "--log-format", "log_format",
    default="%(asctime)s %(levelname)s %(message)s",
    show_default=True,
    help="Строка формата для логов"
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Генератор sitemap.xml для одного хоста."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f"Ошибка загрузки конфигурации: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("run", context_settings=CONTEXT_SETTINGS)
@click.option("--list", "list_urls", is_flag=True, help="Вывести найденные URL")
@click.option(
    "--json", "-j", "json_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить JSON-отчёт о запуске"
)
@click.pass_context
def run(ctx, list_urls, json_output):
    """Обойти сайт и перезаписать sitemap."""
    cfg = ctx.obj["config"]
    result = run_crawl(cfg)
    if not result.ok:
        print_error(result.message)

    click.echo(result.message)
    if list_urls:
        for url in result.urls:
            click.echo(url)
    if json_output:
        try:
            saved = render_json(result, json_output)
        except OSError as e:
            print_error(f"Ошибка при сохранении JSON: {e}")
        click.echo(f"JSON report: {saved}")


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj["config"]
    click.echo(cfg.model_dump_json(indent=2))


@cli.command("history", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_history(ctx):
    """Показать журнал запусков в JSON (старые сверху)."""
    cfg = ctx.obj["config"]
    records = [
        {"timestamp": r.timestamp.isoformat(), "count": r.count}
        for r in read_history(cfg.history_path)
    ]
    click.echo(json.dumps(records, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    cli()
