from pydantic import BaseModel

class DateInfo(BaseModel):
    """Calendar breakdown of the current day, computed locally."""
    year: int
    month: int
    day: int
    week_day: str
    date_string: str       # 12月26日
    full_date_string: str  # 2025年12月26日 星期五

class HistoryDateInfo(BaseModel):
    year: int
    month: int
    day: int
    week: str
    month_name: str
    date_string: str
    full_date_string: str
    month_day_string: str  # 12/26
