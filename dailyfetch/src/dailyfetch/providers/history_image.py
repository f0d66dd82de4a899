import logging
import random
import datetime
from typing import Optional

import requests

from ..config import HISTORY_IMAGE_URL, get_http_timeout
from ..models.dates import DateInfo
from ..models.result import FetchResult

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "网络错误，请稍后重试"
FAILURE_MESSAGE = "获取历史上的今天失败"
MOCK_IMAGE_URL = "https://cdn.xxhzm.cn/v2api/cache/history/2024-12-26.jpg"

_WEEKDAYS = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")

_HISTORY_FACTS = [
    "今天是计算机科学的重要日子",
    "文学史上诞生了伟大的作品",
    "科技领域取得了重大突破",
    "艺术领域留下了珍贵遗产",
    "历史事件改变了世界进程",
]


def _millis(now: datetime.datetime) -> str:
    return str(int(now.timestamp() * 1000))


def get_today_in_history() -> FetchResult:
    """
    Fetch the "this day in history" image URL.
    Success is the `code` field inside the body, not the HTTP status.
    """
    try:
        resp = requests.get(HISTORY_IMAGE_URL, timeout=get_http_timeout())
    except requests.RequestException as e:
        logger.error(f"History image request failed: {e}")
        return FetchResult.failure(NETWORK_ERROR_MESSAGE)

    try:
        payload = resp.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        logger.warning("History image API returned a non-object body")
        return FetchResult.failure(FAILURE_MESSAGE)

    request_id = payload.get("request_id")
    if request_id is not None:
        request_id = str(request_id)

    image_url = payload.get("data")
    if payload.get("code") == 200 and image_url:
        return FetchResult(
            success=True,
            data=image_url,
            message=str(payload.get("msg") or ""),
            request_id=request_id,
        )

    logger.warning(f"History image API returned an error: {payload.get('msg')}")
    return FetchResult.failure(str(payload.get("msg") or FAILURE_MESSAGE), request_id)


def get_today_in_history_redirect() -> FetchResult:
    """
    Redirect mode: the API answers 302 with the image in `Location`.
    Redirects are not followed; anything but a 302 with Location fails.
    """
    try:
        resp = requests.get(
            HISTORY_IMAGE_URL,
            params={"return": "302"},
            allow_redirects=False,
            timeout=get_http_timeout(),
        )
    except requests.RequestException as e:
        logger.error(f"History image redirect request failed: {e}")
        return FetchResult.failure(FAILURE_MESSAGE)

    location = resp.headers.get("Location")
    if resp.status_code == 302 and location:
        return FetchResult(success=True, data=location, message="获取成功")

    logger.error(f"History image redirect missing (status={resp.status_code})")
    return FetchResult.failure(FAILURE_MESSAGE)


def get_today_date_info(now: Optional[datetime.datetime] = None) -> DateInfo:
    """Today's date broken down for display."""
    now = now or datetime.datetime.now()
    week_day = _WEEKDAYS[now.weekday()]
    return DateInfo(
        year=now.year,
        month=now.month,
        day=now.day,
        week_day=week_day,
        date_string=f"{now.month}月{now.day}日",
        full_date_string=f"{now.year}年{now.month}月{now.day}日 {week_day}",
    )


def get_history_facts(rng: Optional[random.Random] = None) -> str:
    """Illustrative filler line, not backed by any data source."""
    return (rng or random).choice(_HISTORY_FACTS)


def get_mock_data(now: Optional[datetime.datetime] = None) -> FetchResult:
    now = now or datetime.datetime.now()
    return FetchResult(
        success=True,
        data=MOCK_IMAGE_URL,
        message="历史上的今天",
        request_id=f"mock_{_millis(now)}",
    )
