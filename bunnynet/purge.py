"""Purging single URLs from the CDN cache."""

from __future__ import annotations

from dataclasses import dataclass

from bunnynet.transport import Transport


@dataclass
class PurgeOptions:
    """Which URL to purge and whether to wait for the purge to finish."""

    url: str
    async_: bool = False

    def to_query_params(self) -> dict[str, str]:
        params = {"url": self.url}
        if self.async_:
            params["async"] = "true"
        return params


class PurgeService:
    """Purges URLs from the CDN cache."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def set_api_key(self, api_key: str) -> None:
        """Replace the key used to authenticate requests."""
        self.transport.set_api_key(api_key)

    def purge_url(self, options: PurgeOptions) -> None:
        """Purge the URL described by the options."""
        self.transport.request("POST", "/purge", params=options.to_query_params())

    def purge(self, url: str, async_: bool = False) -> None:
        """Purge a URL; a shorthand for purge_url."""
        self.purge_url(PurgeOptions(url=url, async_=async_))