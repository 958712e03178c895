"""Operations on pull zones, their hostnames, referrers, edge rules and statistics."""

from __future__ import annotations

from bunnynet.pullzone_models import (
    AddCertificateOptions,
    AddHostnameOptions,
    AddOrUpdateEdgeRuleOptions,
    AddPullZoneOptions,
    BlockedIPOptions,
    CheckAvailabilityOptions,
    CheckAvailabilityResponse,
    HostnameOptions,
    LoadFreeCertificateOptions,
    OptimizerStatistics,
    OriginShieldQueueStatistics,
    PullZone,
    PurgeCacheOptions,
    RemoveCertificateOptions,
    RemoveHostnameOptions,
    SetEdgeRuleEnabledOptions,
    SetForceSSLOptions,
    StatisticsOptions,
)
from bunnynet.transport import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    Page,
    Transport,
    collect_all,
)


class PullZoneService:
    """Lists, creates, configures and deletes pull zones."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def set_api_key(self, api_key: str) -> None:
        """Replace the key used to authenticate requests."""
        self.transport.set_api_key(api_key)

    @staticmethod
    def _zone_path(zone_id: int, suffix: str = "") -> str:
        return f"/pullzone/{int(zone_id)}{suffix}"

    def _post(self, zone_id: int, suffix: str, body: object = None) -> None:
        self.transport.request("POST", self._zone_path(zone_id, suffix), json=body)

    def list(
        self,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        search: str = "",
        include_certificate: bool = False,
    ) -> Page[PullZone]:
        """Return one page of pull zones, optionally filtered by a search term."""
        params = {"page": str(page), "perPage": str(per_page)}
        if search:
            params["search"] = search
        if include_certificate:
            params["includeCertificate"] = "true"
        return self.transport.request_page("/pullzone", params, PullZone.from_json)

    def list_all(
        self,
        per_page: int = DEFAULT_PER_PAGE,
        search: str = "",
        include_certificate: bool = False,
    ) -> list[PullZone]:
        """Return every pull zone across all pages."""
        return collect_all(
            lambda page, size: self.list(page, size, search, include_certificate),
            per_page,
        )

    def get(self, zone_id: int, include_certificate: bool = False) -> PullZone:
        """Return the pull zone with the given id."""
        params = {"includeCertificate": "true"} if include_certificate else None
        data = self.transport.request_json("GET", self._zone_path(zone_id), params=params)
        return PullZone.from_json(data)

    def add(self, options: AddPullZoneOptions) -> PullZone:
        """Create a pull zone and return it."""
        data = self.transport.request_json("POST", "/pullzone", json=options.to_json())
        return PullZone.from_json(data)

    def update(self, zone_id: int, pull_zone: PullZone) -> PullZone:
        """Send a changed pull zone configuration and return the stored result."""
        data = self.transport.request_json(
            "POST", self._zone_path(zone_id), json=pull_zone.to_json()
        )
        return PullZone.from_json(data)

    def delete(self, zone_id: int) -> None:
        """Delete a pull zone."""
        self.transport.request("DELETE", self._zone_path(zone_id))

    def purge_cache(self, zone_id: int, options: PurgeCacheOptions | None = None) -> None:
        """Purge the cache of a pull zone, optionally only objects with a cache tag."""
        body = options.to_json() if options is not None else None
        self._post(zone_id, "/purgeCache", body)

    def add_hostname(self, zone_id: int, options: AddHostnameOptions) -> None:
        """Link a hostname to a pull zone."""
        self._post(zone_id, "/addHostname", options.to_json())

    def remove_hostname(self, zone_id: int, options: RemoveHostnameOptions) -> None:
        """Unlink a hostname from a pull zone."""
        self.transport.request(
            "DELETE", self._zone_path(zone_id, "/removeHostname"), json=options.to_json()
        )

    def add_certificate(self, zone_id: int, options: AddCertificateOptions) -> None:
        """Install a custom certificate for a hostname."""
        self._post(zone_id, "/addCertificate", options.to_json())

    def remove_certificate(self, zone_id: int, options: RemoveCertificateOptions) -> None:
        """Remove the certificate of a hostname."""
        self.transport.request(
            "DELETE", self._zone_path(zone_id, "/removeCertificate"), json=options.to_json()
        )

    def set_force_ssl(self, zone_id: int, options: SetForceSSLOptions) -> None:
        """Turn forced SSL on or off for a hostname."""
        self._post(zone_id, "/setForceSSL", options.to_json())

    def reset_security_key(self, zone_id: int) -> None:
        """Generate a new token authentication key for a pull zone."""
        self._post(zone_id, "/resetSecurityKey")

    def add_allowed_referrer(self, zone_id: int, options: HostnameOptions) -> None:
        """Allow a referrer hostname."""
        self._post(zone_id, "/addAllowedReferrer", options.to_json())

    def remove_allowed_referrer(self, zone_id: int, options: HostnameOptions) -> None:
        """Stop allowing a referrer hostname."""
        self._post(zone_id, "/removeAllowedReferrer", options.to_json())

    def add_blocked_referrer(self, zone_id: int, options: HostnameOptions) -> None:
        """Block a referrer hostname."""
        self._post(zone_id, "/addBlockedReferrer", options.to_json())

    def remove_blocked_referrer(self, zone_id: int, options: HostnameOptions) -> None:
        """Stop blocking a referrer hostname."""
        self._post(zone_id, "/removeBlockedReferrer", options.to_json())

    def add_blocked_ip(self, zone_id: int, options: BlockedIPOptions) -> None:
        """Block an IP address."""
        self._post(zone_id, "/addBlockedIp", options.to_json())

    def remove_blocked_ip(self, zone_id: int, options: BlockedIPOptions) -> None:
        """Stop blocking an IP address."""
        self._post(zone_id, "/removeBlockedIp", options.to_json())

    def add_or_update_edge_rule(
        self, zone_id: int, options: AddOrUpdateEdgeRuleOptions
    ) -> None:
        """Add an edge rule, or update the one with the given GUID."""
        self._post(zone_id, "/edgerules/addOrUpdate", options.to_json())

    def delete_edge_rule(self, zone_id: int, edge_rule_id: str) -> None:
        """Delete an edge rule."""
        self.transport.request("DELETE", self._zone_path(zone_id, f"/edgerules/{edge_rule_id}"))

    def set_edge_rule_enabled(
        self, zone_id: int, edge_rule_id: str, options: SetEdgeRuleEnabledOptions
    ) -> None:
        """Turn an edge rule on or off."""
        self._post(zone_id, f"/edgerules/{edge_rule_id}/setEdgeRuleEnabled", options.to_json())

    def get_origin_shield_queue_statistics(
        self, zone_id: int, options: StatisticsOptions | None = None
    ) -> OriginShieldQueueStatistics:
        """Return the origin shield queue statistics of a pull zone."""
        params = options.to_query_params() if options is not None else None
        data = self.transport.request_json(
            "GET", self._zone_path(zone_id, "/originshield/queuestatistics"), params=params
        )
        return OriginShieldQueueStatistics.from_json(data)

    def get_optimizer_statistics(
        self, zone_id: int, options: StatisticsOptions | None = None
    ) -> OptimizerStatistics:
        """Return the optimizer statistics of a pull zone."""
        params = options.to_query_params() if options is not None else None
        data = self.transport.request_json(
            "GET", self._zone_path(zone_id, "/optimizer/statistics"), params=params
        )
        return OptimizerStatistics.from_json(data)

    def load_free_certificate(self, options: LoadFreeCertificateOptions) -> None:
        """Request a free SSL certificate for a hostname."""
        self.transport.request(
            "GET", "/pullzone/loadFreeCertificate", params=options.to_query_params()
        )

    def check_availability(self, options: CheckAvailabilityOptions) -> CheckAvailabilityResponse:
        """Check whether a pull zone name is free."""
        data = self.transport.request_json(
            "POST", "/pullzone/checkavailability", json=options.to_json()
        )
        return CheckAvailabilityResponse.from_json(data)