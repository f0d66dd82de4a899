import logging
import datetime
from typing import Optional

import requests
from pydantic import ValidationError

from ..config import HISTORY_TEXT_URL, get_apihz_credentials, get_http_timeout
from ..models.dates import HistoryDateInfo
from ..models.history import HistoryEvent
from ..models.result import FetchResult

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "网络错误，请稍后重试"
FAILURE_MESSAGE = "获取历史上的今天文字信息失败"

_MONTH_NAMES = (
    "一月", "二月", "三月", "四月", "五月", "六月",
    "七月", "八月", "九月", "十月", "十一月", "十二月",
)
# Indexed by datetime.weekday(): Monday == 0
_WEEK_NAMES = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")


def get_today_in_history_text(
    month: Optional[int] = None,
    day: Optional[int] = None,
    now: Optional[datetime.datetime] = None,
) -> FetchResult:
    """
    Fetch a textual "on this day" event.

    Pass both `month` and `day` to ask for another date; with either one
    missing the API answers for today. The API has no request id of its
    own, so the envelope is stamped with the current epoch milliseconds.
    """
    params = dict(get_apihz_credentials())
    if month and day:
        params["m"] = month
        params["d"] = day

    try:
        resp = requests.get(HISTORY_TEXT_URL, params=params, timeout=get_http_timeout())
    except requests.RequestException as e:
        logger.error(f"History text request failed: {e}")
        return FetchResult.failure(NETWORK_ERROR_MESSAGE)

    stamp = str(int((now or datetime.datetime.now()).timestamp() * 1000))

    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        logger.warning("History text API returned a non-object body")
        return FetchResult.failure(FAILURE_MESSAGE, stamp)

    if payload.get("code") != 200:
        logger.warning(f"History text API returned an error: {payload.get('msg')}")
        return FetchResult.failure(str(payload.get("msg") or FAILURE_MESSAGE), stamp)

    y, m, d = payload.get("y"), payload.get("m"), payload.get("d")
    try:
        event = HistoryEvent(
            title=payload.get("title"),
            year=y,
            month=m,
            day=d,
            url=payload.get("url"),
            keywords=payload.get("words"),
            full_date=f"{y}年{m}月{d}日",
        )
    except ValidationError as e:
        logger.warning(f"History text payload has unexpected fields: {e}")
        return FetchResult.failure(FAILURE_MESSAGE, stamp)
    return FetchResult(success=True, data=event, message="获取成功", request_id=stamp)


def get_history_by_date(
    month: int,
    day: int,
    now: Optional[datetime.datetime] = None,
) -> FetchResult:
    return get_today_in_history_text(month, day, now=now)


def get_today_date_info(now: Optional[datetime.datetime] = None) -> HistoryDateInfo:
    now = now or datetime.datetime.now()
    week = _WEEK_NAMES[now.weekday()]
    return HistoryDateInfo(
        year=now.year,
        month=now.month,
        day=now.day,
        week=week,
        month_name=_MONTH_NAMES[now.month - 1],
        date_string=f"{now.month}月{now.day}日",
        full_date_string=f"{now.year}年{now.month}月{now.day}日 {week}",
        month_day_string=f"{now.month}/{now.day}",
    )
