from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict

class RealTimeReading(BaseModel):
    """
    One intraday reading. `time` is "HH:MM"; readings arrive ordered
    by time and are kept in that order. Values are passed through as sent.
    """
    model_config = ConfigDict(extra="ignore")

    time: Optional[Any] = None
    temperature: Optional[Any] = None
    weather: Optional[Any] = None
    humidity: Optional[Any] = None
    wind_speed: Optional[Any] = None
    wind_dir: Optional[Any] = None
    pressure: Optional[Any] = None
    precipitation: Optional[Any] = None
    cloud_cover: Optional[Any] = None
    description: Optional[Any] = None

    @property
    def hour(self) -> int:
        """Hour of `time`; raises ValueError when it is not "HH:MM"."""
        return int(str(self.time).split(":")[0])

class ForecastDay(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date: Optional[Any] = None
    day: Optional[Any] = None
    high_temp: Optional[Any] = None
    low_temp: Optional[Any] = None
    weather_from: Optional[Any] = None
    weather_to: Optional[Any] = None
    wind_from: Optional[Any] = None
    wind_to: Optional[Any] = None

class WeatherDay(ForecastDay):
    # Raw reading dicts, parsed one by one by the provider
    real_time_weather: Optional[List[Any]] = None

class CurrentWeather(BaseModel):
    """Day high/low combined with the reading nearest before now."""
    city: Optional[Any] = None
    date: Optional[Any] = None
    day: Optional[Any] = None
    high_temp: Optional[Any] = None
    low_temp: Optional[Any] = None
    current_temp: Optional[Any] = None
    current_weather: Optional[Any] = None
    humidity: Optional[Any] = None
    wind_speed: Optional[Any] = None
    wind_dir: Optional[Any] = None
    pressure: Optional[Any] = None
    description: Optional[Any] = None
