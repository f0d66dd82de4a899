import json
import traceback
from typing import Any, Dict, Optional


class DailyFetchError(Exception):
    """Error reported to the CLI user with a type name and optional details."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DailyFetchError):
    """Bad command-line input or a malformed settings file."""


def error_payload(e: Exception) -> Dict[str, Any]:
    """
    Envelope for a failed command. Errors we raise ourselves keep their
    class name; anything else is an "UnknownError" carrying the traceback
    of the exception being handled.
    """
    if isinstance(e, DailyFetchError):
        error = {"type": type(e).__name__, "message": e.message, "details": e.details}
    else:
        error = {
            "type": "UnknownError",
            "message": str(e) or type(e).__name__,
            "details": {"traceback": traceback.format_exc().splitlines()},
        }
    return {"ok": False, "error": error, "meta": {"version": 1}}


def format_error(e: Exception) -> str:
    return json.dumps(error_payload(e), indent=2, ensure_ascii=False)
