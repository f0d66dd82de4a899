from pathlib import Path
from typing import Any, Dict, List

from ..providers.news import format_date
from ..providers.weather import format_temperature, format_wind_direction


def _weather_lines(current: Dict[str, Any], forecast: List[Dict[str, Any]]) -> List[str]:
    lines = ["## 天气", ""]
    if current:
        lines.append(
            f"**{current.get('city') or ''}** {current.get('current_weather') or ''} "
            f"{format_temperature(current.get('current_temp'))} "
            f"({format_temperature(current.get('low_temp'))} ~ {format_temperature(current.get('high_temp'))})"
        )
        wind = format_wind_direction(current.get('wind_dir') or '')
        if current.get('wind_speed') is not None:
            wind = f"{wind} {current['wind_speed']}".strip()
        humidity = "--" if current.get('humidity') is None else f"{current['humidity']}%"
        lines.append(f"- 风向: {wind or '--'} | 湿度: {humidity}")
        if current.get("description"):
            lines.append(f"- {current['description']}")
    else:
        lines.append("暂无实时天气")
    lines.append("")

    if forecast:
        lines.append("| 日期 | 星期 | 天气 | 温度 |")
        lines.append("|---|---|---|---|")
        for day in forecast:
            sky = day.get("weather_from") or ""
            if day.get("weather_to") and day.get("weather_to") != sky:
                sky = f"{sky}转{day['weather_to']}"
            temps = f"{format_temperature(day.get('low_temp'))} ~ {format_temperature(day.get('high_temp'))}"
            lines.append(f"| {day.get('date')} | {day.get('day') or ''} | {sky} | {temps} |")
        lines.append("")
    return lines


def _news_lines(title: str, items: List[Dict[str, Any]]) -> List[str]:
    lines = [f"## {title}", ""]
    if not items:
        lines.append("暂无内容")
    for item in items:
        hint = f" ({item['hint']})" if item.get("hint") else ""
        lines.append(f"- [{item.get('title')}]({item.get('share_url') or item.get('url')}){hint}")
    lines.append("")
    return lines


def export_daily_md(content: Dict[str, Any], path: Path):
    """Export a collected daily digest to Markdown."""
    date_info = content.get("date") or {}
    lines = [f"# 每日简报: {date_info.get('full_date_string', '')}", ""]

    image = content.get("history_image") or {}
    lines.append("## 历史上的今天")
    lines.append("")
    if image.get("success"):
        lines.append(f"![历史上的今天]({image.get('data')})")
    text = content.get("history_text") or {}
    if text.get("success"):
        event = text.get("data") or {}
        lines.append(f"- {event.get('fullDate')}: [{event.get('title')}]({event.get('url')})")
    else:
        lines.append(f"- {text.get('message') or '暂无历史事件'}")
    if content.get("fact"):
        lines.append(f"- {content['fact']}")
    lines.append("")

    poem = content.get("poetry") or {}
    lines.append("## 每日诗词")
    lines.append("")
    lines.append(f"> {(poem.get('data') or {}).get('content', '')}")
    lines.append("")

    lines.extend(_weather_lines(content.get("weather"), content.get("forecast") or []))
    lines.extend(_news_lines("头条", content.get("top_stories") or []))
    lines.extend(_news_lines("知乎日报", content.get("news") or []))

    news_date = content.get("news_date")
    if news_date:
        lines.append(f"_日报日期: {format_date(news_date)}_")

    with open(path, 'w', encoding='utf-8') as f:
        f.write("\n".join(lines))
