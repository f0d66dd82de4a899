import logging
import datetime
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from ..config import WEATHER_URL, get_default_city, get_http_timeout, get_weather_key
from ..models.weather import CurrentWeather, ForecastDay, RealTimeReading, WeatherDay

logger = logging.getLogger(__name__)

WIND_DIRECTIONS = {
    "N": "北风",
    "NE": "东北风",
    "E": "东风",
    "SE": "东南风",
    "S": "南风",
    "SW": "西南风",
    "W": "西风",
    "NW": "西北风",
}


def get_weather_details(city: Optional[str] = None) -> Dict[str, Any]:
    """
    Fetch the raw multi-day payload for a city:
    {"city": ..., "data": [{day..., "real_time_weather": [...]}, ...]}

    Never fails: any error is logged and the mock dataset is returned.
    """
    city = city or get_default_city()
    params = {"city": city, "key": get_weather_key()}

    try:
        resp = requests.get(WEATHER_URL, params=params, timeout=get_http_timeout())
        payload = resp.json()
    except requests.RequestException as e:
        logger.error(f"Weather request failed for {city}: {e}")
        return get_mock_data()
    except ValueError as e:
        logger.error(f"Weather response for {city} is not JSON: {e}")
        return get_mock_data()

    if not isinstance(payload, dict) or payload.get("code") != 200:
        msg = payload.get("msg") if isinstance(payload, dict) else None
        logger.warning(f"Weather API returned an error for {city}: {msg}")
        return get_mock_data()

    data = payload.get("data")
    if not isinstance(data, dict):
        logger.warning(f"Weather payload for {city} has no data object")
        return get_mock_data()
    return data


def _days(details: Any) -> List[Any]:
    if isinstance(details, dict) and isinstance(details.get("data"), list):
        return details["data"]
    return []


def _parse_readings(raw: Any) -> List[RealTimeReading]:
    """Parse readings one by one, dropping entries that are not objects."""
    readings = []
    for item in raw or []:
        try:
            readings.append(RealTimeReading.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed weather reading: {e}")
    return readings


def _select_reading(readings: List[RealTimeReading], hour: int) -> RealTimeReading:
    # Last reading at or before `hour`; the first one if `hour` precedes them all.
    # An unreadable time ends the scan.
    selected = readings[0]
    for reading in readings:
        try:
            reading_hour = reading.hour
        except ValueError:
            break
        if reading_hour <= hour:
            selected = reading
        else:
            break
    return selected


def get_current_weather(
    city: Optional[str] = None,
    now: Optional[datetime.datetime] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Optional[CurrentWeather]:
    """
    Today's high/low combined with the most recent intraday reading.
    Returns None when there is no day (or no reading) to report.
    `details` skips the fetch when the raw payload is already at hand.
    """
    if details is None:
        details = get_weather_details(city)
    days = _days(details)
    if not days:
        return None

    now = now or datetime.datetime.now()
    try:
        today = WeatherDay.model_validate(days[0])
    except ValidationError as e:
        logger.error(f"Failed to derive current weather: {e}")
        return None

    readings = _parse_readings(today.real_time_weather)
    if not readings:
        return None
    current = _select_reading(readings, now.hour)

    return CurrentWeather(
        city=details.get("city"),
        date=today.date,
        day=today.day,
        high_temp=today.high_temp,
        low_temp=today.low_temp,
        current_temp=current.temperature,
        current_weather=current.weather,
        humidity=current.humidity,
        wind_speed=current.wind_speed,
        wind_dir=current.wind_dir,
        pressure=current.pressure,
        description=current.description,
    )


def get_forecast(
    city: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> List[ForecastDay]:
    """Per-day summary without the intraday readings."""
    if details is None:
        details = get_weather_details(city)
    forecast = []
    for day in _days(details):
        try:
            forecast.append(ForecastDay.model_validate(day))
        except ValidationError as e:
            logger.warning(f"Skipping malformed forecast day: {e}")
    return forecast


def get_real_time_weather(city: Optional[str] = None) -> List[RealTimeReading]:
    days = _days(get_weather_details(city))
    if not days:
        return []
    try:
        today = WeatherDay.model_validate(days[0])
    except ValidationError as e:
        logger.error(f"Failed to read real-time weather: {e}")
        return []
    return _parse_readings(today.real_time_weather)


def format_temperature(temp) -> str:
    if temp is None:
        return "--"
    return f"{temp}°C"


def format_wind_direction(code: str) -> str:
    return WIND_DIRECTIONS.get(code, code)


def get_mock_data() -> Dict[str, Any]:
    """Three-day dataset; only the first day has intraday readings."""
    return {
        "city": "郑州",
        "data": [
            {
                "date": "2025-12-26",
                "day": "星期四",
                "high_temp": 8,
                "low_temp": 2,
                "weather_from": "多云",
                "weather_to": "晴",
                "wind_from": "北风",
                "wind_to": "微风",
                "real_time_weather": [
                    {
                        "time": "08:00",
                        "temperature": 3,
                        "weather": "多云",
                        "humidity": 65,
                        "wind_speed": 3,
                        "wind_dir": "N",
                        "pressure": 1013,
                        "precipitation": 0,
                        "cloud_cover": 40,
                        "description": "多云，气温较低",
                    },
                    {
                        "time": "14:00",
                        "temperature": 7,
                        "weather": "晴",
                        "humidity": 45,
                        "wind_speed": 2,
                        "wind_dir": "N",
                        "pressure": 1015,
                        "precipitation": 0,
                        "cloud_cover": 20,
                        "description": "晴间多云，气温适宜",
                    },
                    {
                        "time": "20:00",
                        "temperature": 4,
                        "weather": "晴",
                        "humidity": 55,
                        "wind_speed": 2,
                        "wind_dir": "N",
                        "pressure": 1016,
                        "precipitation": 0,
                        "cloud_cover": 10,
                        "description": "晴朗，夜间较冷",
                    },
                ],
            },
            {
                "date": "2025-12-27",
                "day": "星期五",
                "high_temp": 6,
                "low_temp": 0,
                "weather_from": "晴",
                "weather_to": "多云",
                "wind_from": "北风",
                "wind_to": "微风",
                "real_time_weather": [],
            },
            {
                "date": "2025-12-28",
                "day": "星期六",
                "high_temp": 9,
                "low_temp": 1,
                "weather_from": "晴",
                "weather_to": "多云",
                "wind_from": "南风",
                "wind_to": "微风",
                "real_time_weather": [],
            },
        ],
    }
