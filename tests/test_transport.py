import json

import httpx
import pytest

from bunnynet.transport import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    APIError,
    ClientError,
    Page,
    Transport,
    collect_all,
    iterate_pages,
)

BASE = "http://api.example.com"


def make(handler, api_key="placeholder", user_agent="test-agent"):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return Transport(api_key, BASE, user_agent, client)


def recording(response_factory):
    seen = []

    def handler(request):
        request.read()
        seen.append(request)
        return response_factory(request)

    return seen, handler


def test_request_sets_headers():
    seen, handler = recording(lambda r: httpx.Response(200, json={"ok": True}))
    result = make(handler).request_json("GET", "/thing")
    assert result == {"ok": True}
    req = seen[0]
    assert req.headers["AccessKey"] == "placeholder"
    assert req.headers["User-Agent"] == "test-agent"
    assert req.headers["Accept"] == "application/json"
    assert req.url.path == "/thing"
    assert req.method == "GET"


def test_trailing_slash_in_base_url():
    seen, handler = recording(lambda r: httpx.Response(200, json={}))
    client = httpx.Client(transport=httpx.MockTransport(handler))
    Transport("placeholder", BASE + "/", "ua", client).request("GET", "/x")
    assert str(seen[0].url) == BASE + "/x"


def test_request_json_sends_body_and_params():
    seen, handler = recording(lambda r: httpx.Response(200, json={"Id": 7}))
    result = make(handler).request_json(
        "POST", "/zone", json={"Name": "abc"}, params={"search": "q"}
    )
    assert result == {"Id": 7}
    assert json.loads(seen[0].content) == {"Name": "abc"}
    assert seen[0].url.params["search"] == "q"


def test_set_api_key_changes_header():
    seen, handler = recording(lambda r: httpx.Response(200, json={"Id": 3}))
    transport = make(handler)
    transport.set_api_key("secret")
    result = transport.request_json("GET", "/x")
    assert result == {"Id": 3}
    assert seen[0].headers["AccessKey"] == "secret"


def test_api_error_from_json_body():
    body = {"ErrorKey": "zone.not_found", "Field": "Id", "Message": "missing"}
    _, handler = recording(lambda r: httpx.Response(404, json=body))
    with pytest.raises(APIError) as info:
        make(handler).request("GET", "/x")
    assert info.value.status_code == 404
    assert info.value.error_key == "zone.not_found"
    assert info.value.field == "Id"
    assert info.value.message == "missing"


def test_api_error_from_text_body():
    _, handler = recording(lambda r: httpx.Response(500, text="boom"))
    with pytest.raises(APIError) as info:
        make(handler).request_json("GET", "/x")
    assert info.value.status_code == 500
    assert info.value.message == "boom"


def test_network_failure_is_client_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ClientError) as info:
        make(handler).request("GET", "/x")
    assert isinstance(info.value.cause, httpx.ConnectError)


def test_invalid_json_is_client_error():
    _, handler = recording(lambda r: httpx.Response(200, text="not json"))
    with pytest.raises(ClientError):
        make(handler).request_json("GET", "/x")


def test_request_page_parses_items():
    payload = {
        "Items": [{"v": 1}, {"v": 2}],
        "CurrentPage": 1,
        "TotalItems": 2,
        "HasMoreItems": False,
    }
    seen, handler = recording(lambda r: httpx.Response(200, json=payload))
    page = make(handler).request_page("/list", {"page": "1"}, lambda d: d["v"])
    assert page.items == [1, 2]
    assert page.current_page == 1
    assert page.total_items == 2
    assert page.has_more_items is False
    assert seen[0].url.params["page"] == "1"


def test_page_from_json_without_items():
    page = Page.from_json({}, lambda d: d)
    assert page.items == []
    assert page.has_more_items is False


def test_page_from_json_rejects_non_object():
    with pytest.raises(ClientError):
        Page.from_json([1, 2], lambda d: d)


def test_upload_sends_multipart():
    seen, handler = recording(lambda r: httpx.Response(200, json={"ok": True}))
    result = make(handler).upload("/imp", "file", "import.txt", b"payload-data")
    assert result == {"ok": True}
    req = seen[0]
    assert req.method == "POST"
    assert req.headers["Content-Type"].startswith("multipart/form-data")
    assert b'name="file"; filename="import.txt"' in req.content
    assert b"payload-data" in req.content
    assert req.headers["AccessKey"] == "placeholder"


def test_upload_error_status():
    _, handler = recording(lambda r: httpx.Response(400, json={"Message": "bad"}))
    with pytest.raises(APIError) as info:
        make(handler).upload("/imp", "file", "import.txt", b"x")
    assert info.value.message == "bad"


def _pages(data, size):
    calls = []

    def fetch(page, per_page):
        calls.append((page, per_page))
        start = (page - 1) * size
        chunk = data[start : start + size]
        return Page(chunk, page, len(data), start + size < len(data))

    return calls, fetch


def test_collect_all_walks_every_page():
    data = list(range(7))
    calls, fetch = _pages(data, 3)
    assert collect_all(fetch, 3) == data
    assert [c[0] for c in calls] == [DEFAULT_PAGE, DEFAULT_PAGE + 1, DEFAULT_PAGE + 2]
    assert all(c[1] == 3 for c in calls)


def test_non_positive_per_page_uses_default():
    calls, fetch = _pages([1], 1)
    assert list(iterate_pages(fetch, 0)) == [1]
    assert calls[0][1] == DEFAULT_PER_PAGE


def test_stops_on_empty_page_even_if_more_claimed():
    calls = []

    def fetch(page, per_page):
        calls.append(page)
        return Page([], page, 0, True)

    assert collect_all(fetch, 5) == []
    assert len(calls) == 1