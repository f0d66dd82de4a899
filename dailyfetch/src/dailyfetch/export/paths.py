import datetime
from pathlib import Path
from typing import Optional

def get_export_dir(root: str = "./exports", day: Optional[datetime.date] = None) -> Path:
    """
    Get (and create) the export directory for a day.
    Structure: {root}/daily/{YYYY-MM}/
    """
    day = day or datetime.date.today()
    path = Path(root) / "daily" / day.strftime("%Y-%m")
    path.mkdir(parents=True, exist_ok=True)
    return path
