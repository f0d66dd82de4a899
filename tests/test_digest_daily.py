import datetime
import json
import random
import tempfile
import unittest
from pathlib import Path
from unittest import mock
import sys

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "dailyfetch" / "src"
sys.path.insert(0, str(SRC))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from dailyfetch.digest import daily
from dailyfetch.providers import history_image, poetry
from helpers import connection_error, json_response

NOW = datetime.datetime(2025, 12, 26, 16, 5, 0)


def _fake_get(url, params=None, **kwargs):
    """Route each endpoint to a canned response."""
    if "historypic" in url:
        return json_response({"code": 200, "msg": "ok", "data": "https://example.com/h.jpg", "request_id": "h1"})
    if "zici" in url:
        return json_response({"code": 200, "title": "圣诞节次日", "y": "1898", "m": "12", "d": "26",
                              "url": "https://example.com/e", "words": "历史"})
    if "yiyan" in url:
        return json_response({"code": 200, "data": "海内存知己，天涯若比邻。", "request_id": "p1"})
    if "weatherDetails" in url:
        return json_response({"code": 200, "data": {
            "city": params["city"],
            "data": [{
                "date": "2025-12-26", "day": "星期五", "high_temp": 5, "low_temp": -1,
                "weather_from": "晴", "weather_to": "晴", "wind_from": "北风", "wind_to": "微风",
                "real_time_weather": [
                    {"time": "09:00", "temperature": 0, "weather": "晴", "wind_dir": "NE"},
                    {"time": "15:00", "temperature": 4, "weather": "晴", "wind_dir": "N"},
                ],
            }],
        }})
    if "zhihu-news" in url:
        return json_response({"date": "20251226", "news": [], "top_stories": []})
    raise AssertionError(f"unexpected url {url}")


class TestCollectDailyContent(unittest.TestCase):
    @mock.patch("requests.get", side_effect=_fake_get)
    def test_live_content(self, _get):
        content = daily.collect_daily_content("北京", now=NOW, rng=random.Random(1))

        self.assertEqual(content["date"]["full_date_string"], "2025年12月26日 星期五")
        self.assertEqual(content["history_image"]["data"], "https://example.com/h.jpg")
        self.assertEqual(content["history_image"]["requestId"], "h1")
        self.assertEqual(content["history_text"]["data"]["fullDate"], "1898年12月26日")
        self.assertNotIn("full_date", content["history_text"]["data"])
        self.assertEqual(content["poetry"]["data"]["content"], "海内存知己，天涯若比邻。")
        self.assertEqual(content["poetry"]["data"]["requestId"], "p1")
        self.assertEqual(content["weather"]["city"], "北京")
        self.assertEqual(content["weather"]["current_temp"], 4)
        self.assertEqual(len(content["forecast"]), 1)
        self.assertEqual(content["news"], [])
        self.assertEqual(content["news_date"], "20251226")

    @mock.patch("requests.get", side_effect=connection_error)
    def test_everything_offline(self, _get):
        content = daily.collect_daily_content("北京", now=NOW, rng=random.Random(3))

        # caller-side fallbacks
        self.assertTrue(content["history_image"]["success"])
        self.assertEqual(content["history_image"]["data"], history_image.MOCK_IMAGE_URL)
        self.assertTrue(content["poetry"]["success"])
        self.assertIn(content["poetry"]["data"]["content"], poetry.BACKUP_POEMS)
        self.assertTrue(content["poetry"]["requestId"].startswith("backup-"))
        # history text has no fallback
        self.assertFalse(content["history_text"]["success"])
        self.assertIsNone(content["history_text"]["data"])
        # providers with built-in mocks
        self.assertEqual(content["weather"]["city"], "郑州")
        self.assertEqual(content["weather"]["current_temp"], 7)
        self.assertEqual(len(content["forecast"]), 3)
        self.assertEqual(len(content["news"]), 6)
        self.assertEqual(len(content["top_stories"]), 3)


class TestGenerateDailyDigest(unittest.TestCase):
    @mock.patch("requests.get", side_effect=connection_error)
    def test_writes_json_and_markdown(self, _get):
        with tempfile.TemporaryDirectory() as tmpdir:
            out_dir = Path(tmpdir) / "digests"
            md_path = daily.generate_daily_digest("郑州", out_dir, now=NOW, rng=random.Random(0))

            self.assertEqual(md_path.name, "daily_2025-12-26.md")
            json_path = out_dir / "daily_2025-12-26.json"
            self.assertTrue(json_path.exists())

            exported = json.loads(json_path.read_text(encoding="utf-8"))
            self.assertEqual(exported["forecast"][0]["date"], "2025-12-26")

            md = md_path.read_text(encoding="utf-8")
            self.assertIn("# 每日简报: 2025年12月26日 星期五", md)
            self.assertIn(history_image.MOCK_IMAGE_URL, md)
            self.assertIn("7°C", md)
            self.assertIn("北风", md)
            self.assertIn("2021年12月24日", md)
            self.assertIn("用臭鼬的臭臭臭鼬", md)

    @mock.patch("requests.get", side_effect=_fake_get)
    def test_markdown_omits_missing_reading_values(self, _get):
        # the live readings carry neither humidity nor wind speed
        with tempfile.TemporaryDirectory() as tmpdir:
            md_path = daily.generate_daily_digest("北京", Path(tmpdir), now=NOW, rng=random.Random(0))
            md = md_path.read_text(encoding="utf-8")

        self.assertNotIn("None", md)
        self.assertIn("- 风向: 北风 | 湿度: --", md)
        self.assertIn("- 1898年12月26日: [圣诞节次日](https://example.com/e)", md)


if __name__ == "__main__":
    unittest.main()
