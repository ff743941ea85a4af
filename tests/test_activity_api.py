"""ActivityAPI request building and failure normalisation."""

from __future__ import annotations

import pytest
import requests

from conftest import FakeResp
from trackandfeel.api_client import create_default_session, get_default_session
from trackandfeel.errors import ActivityAPIError, ActivityNotFoundError
from trackandfeel.store import build_store


def test_list_activities_builds_url_and_params(make_api):
    api, session = make_api(lambda url, **kw: FakeResp(200, {"items": [{"id": "a"}]}))

    data = api.list_activities(20, 40)

    assert data == {"items": [{"id": "a"}]}
    assert session.calls == [
        {
            "url": "http://backend:8080/api/activities",
            "params": {"limit": 20, "offset": 40},
            "timeout": 3,
        }
    ]


def test_get_activity_track_quotes_identifier(make_api):
    api, session = make_api(lambda url, **kw: FakeResp(200, {"summary": {}}))

    api.get_activity_track("a b/c")

    assert session.calls[0]["url"] == "http://backend:8080/api/activities/a%20b%2Fc/track"
    assert session.calls[0]["params"] is None


def test_server_error_includes_plain_text_detail(make_api):
    api, _ = make_api(lambda url, **kw: FakeResp(500, None, text="db error\n"))

    with pytest.raises(ActivityAPIError) as excinfo:
        api.list_activities(20, 0)

    assert not isinstance(excinfo.value, ActivityNotFoundError)
    assert str(excinfo.value) == "list activities request failed (HTTP 500) | db error"


def test_not_found_maps_to_specific_error(make_api):
    api, _ = make_api(lambda url, **kw: FakeResp(404, None, text="404 page not found"))

    with pytest.raises(ActivityNotFoundError) as excinfo:
        api.get_activity_track("abc")

    assert "HTTP 404" in str(excinfo.value)
    assert "activity abc track" in str(excinfo.value)


def test_json_error_body_is_summarised(make_api):
    api, _ = make_api(lambda url, **kw: FakeResp(400, {"error": "bad id"}))

    with pytest.raises(ActivityAPIError, match=r"HTTP 400\) \| bad id"):
        api.get_activity_track("nope")


def test_network_failure_is_wrapped(make_api):
    def handler(url, **kw):
        raise requests.ConnectionError("refused")

    api, _ = make_api(handler)

    with pytest.raises(ActivityAPIError, match="network error: ConnectionError") as excinfo:
        api.list_activities(20, 0)

    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_non_json_success_body_is_an_error(make_api):
    api, _ = make_api(lambda url, **kw: FakeResp(200, None, text="<html>"))

    with pytest.raises(ActivityAPIError, match="non-JSON payload"):
        api.get_activity_track("a")


def test_unexpected_payload_type_is_an_error(make_api):
    api, _ = make_api(lambda url, **kw: FakeResp(200, [1, 2, 3]))

    with pytest.raises(ActivityAPIError, match="unexpected payload type list"):
        api.list_activities(20, 0)


def test_close_closes_session(make_api):
    api, session = make_api(lambda url, **kw: FakeResp(200, {}))

    api.close()

    assert session.closed
    assert api.base_url == "http://backend:8080"


def test_default_session_never_retries():
    session = create_default_session()

    adapter = session.get_adapter("http://backend:8080/api/activities")
    assert adapter.max_retries.total == 0
    assert session.headers["Accept"] == "application/json"
    assert get_default_session() is get_default_session()


def test_build_store_uses_given_base_url():
    store = build_store("http://localhost:9999/")

    assert store._api.base_url == "http://localhost:9999"
    assert store.unit in ("kmh", "mps", "pace")
    store.close()
