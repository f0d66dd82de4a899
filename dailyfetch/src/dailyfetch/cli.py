import sys
import json
import logging
import click
from .errors import ValidationError, format_error
from .logging import configure_logging
from .config import load_settings
from .providers import history_image, history_text, poetry, weather, news
from .digest import daily as daily_digest
from .export.paths import get_export_dir
from .export.json_export import to_jsonable
from . import __version__

# Configure logging at module level
configure_logging()
logger = logging.getLogger(__name__)


def _print_json(data, fallback=False):
    """Helper to print standard JSON envelope."""
    payload = {
        "ok": True,
        "data": to_jsonable(data),
        "meta": {
            "version": 1,
            "fallback": fallback
        }
    }
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@click.group()
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.option("--settings", "settings_path", default="dailyfetch.yaml", show_default=True, help="Settings YAML file")
@click.pass_context
def cli(ctx, verbose, settings_path):
    """dailyfetch: daily content fetcher (history, poetry, weather, news)."""
    if verbose:
        configure_logging(logging.DEBUG)
    ctx.obj = load_settings(settings_path)


@cli.group()
def history():
    """This day in history."""
    pass


@history.command("image")
@click.option("--redirect", is_flag=True, help="Use the 302 redirect mode")
@click.option("--mock", is_flag=True, help="Fall back to the mock image on failure")
def history_image_cmd(redirect, mock):
    """Fetch the history image URL."""
    if redirect:
        result = history_image.get_today_in_history_redirect()
    else:
        result = history_image.get_today_in_history()

    if not result.success and mock:
        logger.info(f"History image failed ({result.message}), using mock data")
        _print_json(history_image.get_mock_data(), fallback=True)
        return
    _print_json(result)


@history.command("text")
@click.option("--month", type=click.IntRange(1, 12), help="Month (1-12)")
@click.option("--day", type=click.IntRange(1, 31), help="Day of month (1-31)")
def history_text_cmd(month, day):
    """Fetch a textual history event for today or a given date."""
    if (month is None) != (day is None):
        raise click.BadParameter("--month and --day must be given together.")
    if month is not None:
        result = history_text.get_history_by_date(month, day)
    else:
        result = history_text.get_today_in_history_text()
    _print_json(result)


@history.command("facts")
def history_facts_cmd():
    """Print a random history blurb."""
    _print_json(history_image.get_history_facts())


@history.command("date")
def history_date_cmd():
    """Print today's date breakdown."""
    _print_json(history_text.get_today_date_info())


@cli.command("poetry")
@click.option("--backup", is_flag=True, help="Skip the API and use a bundled poem")
@click.option("--fallback", is_flag=True, help="Use a bundled poem if the API fails")
def poetry_cmd(backup, fallback):
    """Fetch the daily poem."""
    if backup:
        _print_json(poetry.get_backup_poetry(), fallback=True)
        return

    result = poetry.get_daily_poetry()
    if not result.success and fallback:
        logger.info(f"Daily poem failed ({result.message}), using backup")
        _print_json(poetry.get_backup_poetry(), fallback=True)
        return
    _print_json(result)


@cli.command("weather")
@click.argument("view", type=click.Choice(["current", "forecast", "realtime", "raw"]), default="current")
@click.option("--city", default=None, help="City name (defaults to settings)")
@click.pass_obj
def weather_cmd(settings, view, city):
    """Fetch weather for a city."""
    city = city or settings["city"]
    if view == "current":
        _print_json(weather.get_current_weather(city))
    elif view == "forecast":
        _print_json(weather.get_forecast(city))
    elif view == "realtime":
        _print_json(weather.get_real_time_weather(city))
    else:
        _print_json(weather.get_weather_details(city))


@cli.command("news")
@click.argument("view", type=click.Choice(["list", "top", "raw"]), default="list")
def news_cmd(view):
    """Fetch the daily news digest."""
    if view == "list":
        _print_json(news.get_news_list())
    elif view == "top":
        _print_json(news.get_top_stories())
    else:
        _print_json(news.get_daily_news())


@cli.command()
@click.option("--city", default=None, help="City name (defaults to settings)")
@click.option("--out", default=None, help="Export root directory")
@click.option("--workers", default=None, type=int, help="Max parallel fetches")
@click.pass_obj
def digest(settings, city, out, workers):
    """
    Fetch every provider and write the daily digest as JSON + Markdown.
    """
    workers = workers if workers is not None else settings["workers"]
    if workers < 1:
        raise click.BadParameter("--workers must be >= 1.")

    city = city or settings["city"]
    out_dir = get_export_dir(out or settings["out"])
    logger.info(f"Generating daily digest for {city} (workers={workers})")
    report_path = daily_digest.generate_daily_digest(city, out_dir, max_workers=workers)

    _print_json({
        "digest_file": str(report_path),
        "json_file": str(report_path.with_suffix(".json")),
        "city": city,
    })


@cli.command()
def version():
    """Print version information."""
    _print_json({"version": __version__})


def main():
    """Entry point for the CLI."""
    try:
        cli(standalone_mode=False)
    except Exception as e:
        if isinstance(e, click.exceptions.Exit):
            sys.exit(e.exit_code)
        if isinstance(e, click.exceptions.Abort):
            sys.exit(130)

        if isinstance(e, click.UsageError):
            e = ValidationError(e.format_message(), {"command": e.ctx.command_path if e.ctx else None})
        print(format_error(e))
        sys.exit(1)

if __name__ == "__main__":
    main()
