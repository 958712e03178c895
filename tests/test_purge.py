import httpx
import pytest

from bunnynet.purge import PurgeOptions, PurgeService
from bunnynet.transport import APIError, Transport

TARGET = "http://cdn.example.com/a.png"


def service(status=200):
    seen = []

    def handler(request):
        request.read()
        seen.append(request)
        return httpx.Response(status, text="" if status < 400 else "denied")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    transport = Transport("placeholder", "http://api.example.com", "ua", client)
    return seen, PurgeService(transport)


def test_to_query_params_sync():
    assert PurgeOptions(TARGET).to_query_params() == {"url": TARGET}


def test_to_query_params_async():
    params = PurgeOptions(TARGET, async_=True).to_query_params()
    assert params == {"url": TARGET, "async": "true"}


def test_purge_url_posts_query():
    seen, svc = service()
    svc.purge_url(PurgeOptions(TARGET))
    req = seen[0]
    assert req.method == "POST"
    assert req.url.path == "/purge"
    assert dict(req.url.params) == {"url": TARGET}
    assert req.content == b""


def test_purge_shorthand_with_async():
    seen, svc = service()
    svc.purge(TARGET, True)
    assert dict(seen[0].url.params) == {"url": TARGET, "async": "true"}


def test_set_api_key_applies_to_requests():
    seen, svc = service()
    svc.set_api_key("token")
    svc.purge(TARGET)
    assert seen[0].headers["AccessKey"] == "token"


def test_purge_error_raises():
    _, svc = service(status=401)
    with pytest.raises(APIError) as info:
        svc.purge(TARGET)
    assert info.value.status_code == 401
    assert info.value.message == "denied"