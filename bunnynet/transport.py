"""HTTP transport shared by the API services: requests, errors and paging."""

from __future__ import annotations

import json as _json
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import httpx

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 1000
DEFAULT_USER_AGENT = "bunnynet-python"

T = TypeVar("T")


class ClientError(Exception):
    """A request could not be built, sent or its response understood."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        text = f"{message}: {cause}" if cause is not None else message
        super().__init__(text)
        self.message = message
        self.cause = cause


class APIError(Exception):
    """The API answered with an error status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_key: str = "",
        field: str = "",
    ) -> None:
        super().__init__(f"API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.error_key = error_key
        self.field = field

    @classmethod
    def from_response(cls, response: httpx.Response) -> APIError:
        """Build an error from an HTTP error response."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            return cls(
                response.status_code,
                str(body.get("Message") or response.reason_phrase),
                str(body.get("ErrorKey") or ""),
                str(body.get("Field") or ""),
            )
        text = response.text.strip()
        return cls(response.status_code, text or response.reason_phrase)


@dataclass
class Page(Generic[T]):
    """One page of a paginated listing."""

    items: list[T] = field(default_factory=list)
    current_page: int = 0
    total_items: int = 0
    has_more_items: bool = False

    @classmethod
    def from_json(cls, data: Any, parse_item: Callable[[Any], T]) -> Page[T]:
        if not isinstance(data, dict):
            raise ClientError("failed to parse paginated response: not an object")
        return cls(
            items=[parse_item(item) for item in data.get("Items") or []],
            current_page=int(data.get("CurrentPage") or 0),
            total_items=int(data.get("TotalItems") or 0),
            has_more_items=bool(data.get("HasMoreItems", False)),
        )


class Transport:
    """Sends authenticated requests to the API."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self.client.close()

    def set_api_key(self, api_key: str) -> None:
        """Replace the key used to authenticate requests."""
        self.api_key = api_key

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "AccessKey": self.api_key,
            "User-Agent": self.user_agent,
        }

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self.client.request(
                method, self.base_url + path, headers=self._headers(), **kwargs
            )
        except httpx.HTTPError as exc:
            raise ClientError("failed to send request", exc) from exc
        if response.status_code >= 400:
            raise APIError.from_response(response)
        return response

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request and return the successful response."""
        kwargs: dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = dict(params)
        return self._send(method, path, **kwargs)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return _json.loads(response.content)
        except ValueError as exc:
            raise ClientError("failed to parse response", exc) from exc

    def request_json(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        return self._decode(self.request(method, path, json=json, params=params))

    def request_page(
        self,
        path: str,
        params: Mapping[str, str] | None,
        parse_item: Callable[[Any], T],
    ) -> Page[T]:
        """Fetch one page of a listing with GET."""
        return Page.from_json(self.request_json("GET", path, params=params), parse_item)

    def upload(self, path: str, field: str, filename: str, data: bytes) -> Any:
        """POST data as a multipart file and return the decoded JSON body."""
        response = self._send("POST", path, files={field: (filename, data)})
        return self._decode(response)


def iterate_pages(
    fetch: Callable[[int, int], Page[T]], per_page: int = DEFAULT_PER_PAGE
) -> Iterator[T]:
    """Yield every item of a listing, fetching page after page."""
    if per_page <= 0:
        per_page = DEFAULT_PER_PAGE
    page = DEFAULT_PAGE
    while True:
        result = fetch(page, per_page)
        yield from result.items
        if not result.has_more_items or not result.items:
            return
        page += 1


def collect_all(
    fetch: Callable[[int, int], Page[T]], per_page: int = DEFAULT_PER_PAGE
) -> list[T]:
    """Return every item of a listing across all pages."""
    return list(iterate_pages(fetch, per_page))