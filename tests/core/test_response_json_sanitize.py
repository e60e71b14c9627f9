import json
import math

from genmeta_backend.routes.core.response import _json_response, safe_error_message
from genmeta_backend.shared import Result


def test_json_response_sanitizes_non_finite_floats():
    result = Result.Ok({"a": math.nan, "nested": {"x": math.inf}, "items": [1.0, -math.inf]})
    payload = json.loads(_json_response(result).text)
    data = payload["data"]

    assert data["a"] is None
    assert data["nested"]["x"] is None
    assert data["items"] == [1.0, None]


def test_json_response_error_envelope():
    response = _json_response(Result.Err("INVALID_INPUT", "Missing 'src' query parameter"))
    payload = json.loads(response.text)

    assert response.status == 200
    assert payload == {
        "ok": False,
        "data": None,
        "error": "Missing 'src' query parameter",
        "code": "INVALID_INPUT",
        "meta": {},
    }


def test_safe_error_message_hides_details(monkeypatch):
    from genmeta_backend.routes.core import response as response_mod

    monkeypatch.setattr(response_mod, "DEBUG_MODE", False)
    assert safe_error_message(RuntimeError("secret"), "Failed") == "Failed"
    monkeypatch.setattr(response_mod, "DEBUG_MODE", True)
    assert safe_error_message(RuntimeError("secret"), "Failed") == "Failed: secret"
