import datetime
import logging
import random
import concurrent.futures
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..export import json_export, md_export
from ..export.json_export import to_jsonable
from ..providers import history_image, history_text, news, poetry, weather

logger = logging.getLogger(__name__)


def collect_daily_content(
    city: Optional[str] = None,
    *,
    max_workers: int = 5,
    now: Optional[datetime.datetime] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Fetch every provider concurrently and assemble one JSON-ready dict.

    Weather and news already degrade to mock data on their own. For the
    history image and the poem the fallback is applied here: a failed
    result is swapped for the mock image / a backup poem. A failed history
    text result is kept as the failure envelope.
    """
    now = now or datetime.datetime.now()

    jobs: Dict[str, Callable[[], Any]] = {
        "history_image": history_image.get_today_in_history,
        "history_text": lambda: history_text.get_today_in_history_text(now=now),
        "poetry": poetry.get_daily_poetry,
        "weather_details": lambda: weather.get_weather_details(city),
        "news_digest": news.get_daily_news,
    }

    results: Dict[str, Any] = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(fn): name for name, fn in jobs.items()}
        for fut in concurrent.futures.as_completed(futures):
            name = futures[fut]
            results[name] = fut.result()
            logger.debug(f"Fetched {name}")

    if not results["history_image"].success:
        logger.info(f"History image unavailable ({results['history_image'].message}), using mock")
        results["history_image"] = history_image.get_mock_data(now=now)

    if not results["poetry"].success:
        logger.info(f"Daily poem unavailable ({results['poetry'].message}), using backup")
        results["poetry"] = poetry.get_backup_poetry(rng=rng, now=now)

    details = results["weather_details"]
    digest = results["news_digest"]

    return {
        "date": history_image.get_today_date_info(now).model_dump(),
        "fact": history_image.get_history_facts(rng),
        "history_image": to_jsonable(results["history_image"]),
        "history_text": to_jsonable(results["history_text"]),
        "poetry": to_jsonable(results["poetry"]),
        "weather": to_jsonable(weather.get_current_weather(city, now=now, details=details)),
        "forecast": to_jsonable(weather.get_forecast(city, details=details)),
        "news_date": digest.get("date"),
        "news": to_jsonable(news.get_news_list(digest)),
        "top_stories": to_jsonable(news.get_top_stories(digest)),
    }


def generate_daily_digest(
    city: Optional[str],
    out_dir: Path,
    *,
    max_workers: int = 5,
    now: Optional[datetime.datetime] = None,
    rng: Optional[random.Random] = None,
) -> Path:
    """
    Collect today's content and write daily_{date}.json and daily_{date}.md.
    Returns the Markdown path.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    now = now or datetime.datetime.now()
    day_str = now.date().isoformat()

    content = collect_daily_content(city, max_workers=max_workers, now=now, rng=rng)

    json_path = out_dir / f"daily_{day_str}.json"
    md_path = out_dir / f"daily_{day_str}.md"
    json_export.export_json(content, json_path)
    md_export.export_daily_md(content, md_path)
    logger.info(f"Daily digest written to {md_path}")
    return md_path
