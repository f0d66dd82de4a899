from unittest import mock

import requests


def json_response(payload, status_code=200, headers=None):
    """Fake requests.Response whose .json() returns `payload`."""
    resp = mock.MagicMock()
    resp.status_code = status_code
    resp.headers = headers or {}
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        resp.raise_for_status.return_value = None
    return resp


def text_response(body, status_code=200):
    """Fake response whose body is not JSON."""
    resp = json_response(None, status_code=status_code)
    resp.text = body
    resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    return resp


def connection_error(*args, **kwargs):
    raise requests.ConnectionError("Name or service not known")
