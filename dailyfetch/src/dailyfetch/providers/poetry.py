import logging
import random
import datetime
from typing import Optional

import requests

from ..config import POETRY_URL, get_http_timeout
from ..models.poetry import PoetryData
from ..models.result import FetchResult

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "网络错误，请稍后重试"
FAILURE_MESSAGE = "获取古诗词失败"
BACKUP_MESSAGE = "使用备用数据"

BACKUP_POEMS = (
    "漫向寒炉醉玉瓶，唤君同赏小窗明。《浣溪沙·和无咎韵》 — 陆游",
    "静夜思 — 床前明月光，疑是地上霜。举头望明月，低头思故乡。",
    "春眠不觉晓，处处闻啼鸟。夜来风雨声，花落知多少。",
    "锄禾日当午，汗滴禾下土。谁知盘中餐，粒粒皆辛苦。",
    "白日依山尽，黄河入海流。欲穷千里目，更上一层楼。",
)


def get_daily_poetry() -> FetchResult:
    """
    Fetch the daily poem. Failures are returned as-is; call
    get_backup_poetry() when a poem is needed regardless.
    """
    try:
        resp = requests.get(POETRY_URL, params={"type": "poetry"}, timeout=get_http_timeout())
    except requests.RequestException as e:
        logger.error(f"Poetry request failed: {e}")
        return FetchResult.failure(NETWORK_ERROR_MESSAGE)

    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        logger.warning("Poetry API returned a non-object body")
        return FetchResult.failure(FAILURE_MESSAGE)

    request_id = payload.get("request_id")
    if request_id is not None:
        request_id = str(request_id)

    content = payload.get("data")
    if payload.get("code") != 200 or not isinstance(content, str) or not content:
        logger.warning(f"Poetry API returned an error: {payload.get('msg')}")
        return FetchResult.failure(str(payload.get("msg") or FAILURE_MESSAGE), request_id)

    return FetchResult(
        success=True,
        data=PoetryData(content=content, request_id=request_id),
        message="获取成功",
        request_id=request_id,
    )


def get_backup_poetry(
    rng: Optional[random.Random] = None,
    now: Optional[datetime.datetime] = None,
) -> FetchResult:
    """Pick one of the bundled classical poems."""
    content = (rng or random).choice(BACKUP_POEMS)
    request_id = f"backup-{int((now or datetime.datetime.now()).timestamp() * 1000)}"
    return FetchResult(
        success=True,
        data=PoetryData(content=content, request_id=request_id),
        message=BACKUP_MESSAGE,
        request_id=request_id,
    )
