import unittest
from pathlib import Path
from unittest import mock
import sys

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "dailyfetch" / "src"
sys.path.insert(0, str(SRC))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from dailyfetch.providers import news
from helpers import connection_error, json_response

GET = "dailyfetch.providers.news.requests.get"

DIGEST = {
    "date": "20260105",
    "news": [
        {
            "id": 9800001,
            "title": "为什么冬天的星空更亮？",
            "image": "https://pic1.zhimg.com/a.jpg",
            "thumbnail": "https://pic1.zhimg.com/a_t.jpg",
            "hint": "天文爱好者 · 3 分钟阅读",
            "url": "https://daily.zhihu.com/story/9800001",
            "share_url": "http://daily.zhihu.com/story/9800001",
            "image_hue": "0x112233",
            "ga_prefix": "010507",
            "type": 0,
        },
    ],
    "top_stories": [
        {
            "id": 9800002,
            "title": "一杯咖啡的旅程",
            "image": "https://pic2.zhimg.com/b.jpg",
            "hint": "作者 / 咖啡师",
            "url": "https://daily.zhihu.com/story/9800002",
            "share_url": "http://daily.zhihu.com/story/9800002",
            "image_hue": "0x445566",
            "ga_prefix": "010407",
            "image_source": "Unsplash",
        },
    ],
}


class TestDailyNews(unittest.TestCase):
    @mock.patch(GET)
    def test_success_trusts_transport(self, get):
        get.return_value = json_response(DIGEST)

        self.assertEqual(news.get_daily_news(), DIGEST)
        _, kwargs = get.call_args
        self.assertEqual(kwargs["params"], {"aa1": "xiarou"})

    @mock.patch(GET, side_effect=connection_error)
    def test_network_error_returns_mock(self, _get):
        self.assertEqual(news.get_daily_news(), news.get_mock_data())

    @mock.patch(GET)
    def test_http_error_returns_mock(self, get):
        get.return_value = json_response({"error": "bad gateway"}, status_code=502)

        self.assertEqual(news.get_daily_news(), news.get_mock_data())


class TestNewsViews(unittest.TestCase):
    @mock.patch(GET)
    def test_news_list_shape(self, get):
        get.return_value = json_response(DIGEST)

        items = news.get_news_list()

        self.assertEqual(len(items), 1)
        dumped = items[0].model_dump()
        self.assertEqual(set(dumped), {
            "id", "title", "image", "thumbnail", "hint",
            "url", "share_url", "image_hue", "ga_prefix",
        })
        self.assertEqual(dumped["thumbnail"], "https://pic1.zhimg.com/a_t.jpg")

    @mock.patch(GET)
    def test_top_stories_shape(self, get):
        get.return_value = json_response(DIGEST)

        stories = news.get_top_stories()

        dumped = stories[0].model_dump()
        self.assertIn("image_source", dumped)
        self.assertNotIn("thumbnail", dumped)
        self.assertEqual(dumped["image_source"], "Unsplash")

    @mock.patch(GET)
    def test_missing_sections_give_empty_lists(self, get):
        get.return_value = json_response({"date": "20260105"})

        self.assertEqual(news.get_news_list(), [])
        self.assertEqual(news.get_top_stories(), [])

    def test_one_bad_item_does_not_empty_the_list(self):
        digest = {
            "news": [
                {"id": 1, "title": "第一条", "url": "https://daily.zhihu.com/story/1"},
                {"id": 2, "url": "https://daily.zhihu.com/story/2"},
                "not-an-item",
                {"id": 3, "title": "第三条", "extra_field": True},
            ],
            "top_stories": [None, {"id": 4, "title": "头条"}],
        }

        items = news.get_news_list(digest)

        self.assertEqual([i.id for i in items], [1, 2, 3])
        self.assertIsNone(items[1].title)
        self.assertNotIn("extra_field", items[2].model_dump())
        self.assertEqual([s.id for s in news.get_top_stories(digest)], [4])

    def test_non_list_section_gives_empty_list(self):
        self.assertEqual(news.get_news_list({"news": {"id": 1}}), [])

    @mock.patch(GET, side_effect=connection_error)
    def test_views_fall_back_to_mock(self, _get):
        self.assertEqual(len(news.get_news_list()), 6)
        self.assertEqual(len(news.get_top_stories()), 3)

    def test_views_accept_prefetched_digest(self):
        with mock.patch(GET) as get:
            items = news.get_news_list(DIGEST)
            get.assert_not_called()
        self.assertEqual(items[0].id, 9800001)


class TestFormatDate(unittest.TestCase):
    def test_format_date(self):
        self.assertEqual(news.format_date("20211224"), "2021年12月24日")
        self.assertEqual(news.format_date(""), "")

    def test_malformed_input_does_not_raise(self):
        self.assertEqual(news.format_date("2021"), "2021年月日")
        self.assertEqual(news.format_date("abcdefgh"), "abcd年ef月gh日")


if __name__ == "__main__":
    unittest.main()
