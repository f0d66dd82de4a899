import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ValidationError

logger = logging.getLogger(__name__)

HISTORY_IMAGE_URL = "https://v2.xxapi.cn/api/historypic"
HISTORY_TEXT_URL = "https://cn.apihz.cn/api/zici/today.php"
POETRY_URL = "https://v2.xxapi.cn/api/yiyan"
WEATHER_URL = "https://v2.xxapi.cn/api/weatherDetails"
NEWS_URL = "https://v.api.aa1.cn/api/zhihu-news/index.php"

# Public credentials published by the upstream services. Register at
# http://www.apihz.cn for a private id/key pair.
PUBLIC_APIHZ_ID = "88888888"
PUBLIC_APIHZ_KEY = "88888888"
PUBLIC_WEATHER_KEY = "f7016be2271ae751"
NEWS_QUERY = {"aa1": "xiarou"}

DEFAULT_CITY = "郑州"

_TEMPLATE_VALUES = ("", "your_key_here")


def load_env_file(path: str = ".env"):
    """
    Load environment variables from a .env file into os.environ.
    Does not override existing strings.
    """
    p = Path(path)
    if not p.exists():
        return

    try:
        with open(p, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                if '=' in line:
                    key, val = line.split('=', 1)
                    key = key.strip()
                    val = val.strip().strip('"').strip("'")
                    if key not in os.environ:
                        os.environ[key] = val
    except OSError as e:
        logger.warning(f"Failed to load .env: {e}")

# Load on import
load_env_file()


def _env(name: str, default: str) -> str:
    value = os.environ.get(name)
    # Handle the template default left in .env.example
    if value is None or value.strip() in _TEMPLATE_VALUES:
        return default
    return value.strip()


def get_weather_key() -> str:
    return _env("DAILYFETCH_WEATHER_KEY", PUBLIC_WEATHER_KEY)


def get_apihz_credentials() -> Dict[str, str]:
    """Credential pair sent as `id`/`key` query parameters."""
    return {
        "id": _env("DAILYFETCH_APIHZ_ID", PUBLIC_APIHZ_ID),
        "key": _env("DAILYFETCH_APIHZ_KEY", PUBLIC_APIHZ_KEY),
    }


def get_default_city() -> str:
    return _env("DAILYFETCH_DEFAULT_CITY", DEFAULT_CITY)


def get_http_timeout() -> Optional[float]:
    """
    Request timeout in seconds, or None to keep the transport default
    (requests waits indefinitely).
    """
    raw = os.environ.get("DAILYFETCH_HTTP_TIMEOUT")
    if not raw or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid DAILYFETCH_HTTP_TIMEOUT={raw!r}")
        return None
    return timeout if timeout > 0 else None


def load_settings(path: str = "dailyfetch.yaml") -> Dict[str, Any]:
    """
    Load CLI defaults from YAML. A missing file yields defaults.
    Expected shape:
      dailyfetch:
        city: "郑州"
        workers: 5
        out: "./exports"
    """
    settings: Dict[str, Any] = {
        "city": get_default_city(),
        "workers": 5,
        "out": "./exports",
    }

    p = Path(path)
    if not p.exists():
        return settings

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid settings YAML: {e}")

    if not isinstance(data, dict):
        raise ValidationError("Settings file must be a mapping.")

    section = data.get("dailyfetch")
    if section is None:
        return settings
    if not isinstance(section, dict):
        raise ValidationError("Settings file must contain a 'dailyfetch' object.")

    city = section.get("city")
    if city is not None:
        if not isinstance(city, str) or not city.strip():
            raise ValidationError("'dailyfetch.city' must be a non-empty string.")
        settings["city"] = city.strip()

    workers = section.get("workers")
    if workers is not None:
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ValidationError("'dailyfetch.workers' must be an integer >= 1.")
        settings["workers"] = workers

    out = section.get("out")
    if out is not None:
        if not isinstance(out, str) or not out.strip():
            raise ValidationError("'dailyfetch.out' must be a non-empty path.")
        settings["out"] = out.strip()

    return settings
