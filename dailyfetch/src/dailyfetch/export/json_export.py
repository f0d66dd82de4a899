import json
from pathlib import Path
from typing import Any

def to_jsonable(value: Any) -> Any:
    """Dump pydantic models (and lists of them) to plain JSON types."""
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    return value

def export_json(data: Any, path: Path):
    """
    Export data to a UTF-8 JSON file, keeping Chinese text readable.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(to_jsonable(data), f, indent=2, ensure_ascii=False, default=str)
