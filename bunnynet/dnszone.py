"""Operations on DNS zones and their records."""

from __future__ import annotations

from bunnynet.dns_models import (
    AddDNSRecordOptions,
    AddDNSZoneOptions,
    CheckZoneAvailabilityOptions,
    DNSRecord,
    DNSSecInfo,
    DNSZone,
    ImportResult,
    UpdateDNSRecordOptions,
    UpdateDNSZoneOptions,
    ZoneAvailabilityResult,
)
from bunnynet.transport import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    Page,
    Transport,
    collect_all,
)


class DNSZoneService:
    """Lists, creates, changes and deletes DNS zones and records."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def set_api_key(self, api_key: str) -> None:
        """Replace the key used to authenticate requests."""
        self.transport.set_api_key(api_key)

    @staticmethod
    def _zone_path(zone_id: int, suffix: str = "") -> str:
        return f"/dnszone/{int(zone_id)}{suffix}"

    def list(
        self,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
        search: str = "",
    ) -> Page[DNSZone]:
        """Return one page of DNS zones, optionally filtered by a search term."""
        params = {"page": str(page), "perPage": str(per_page)}
        if search:
            params["search"] = search
        return self.transport.request_page("/dnszone", params, DNSZone.from_json)

    def list_all(self, per_page: int = DEFAULT_PER_PAGE, search: str = "") -> list[DNSZone]:
        """Return every DNS zone across all pages."""
        return collect_all(lambda page, size: self.list(page, size, search), per_page)

    def get(self, zone_id: int) -> DNSZone:
        """Return the DNS zone with the given id."""
        return DNSZone.from_json(self.transport.request_json("GET", self._zone_path(zone_id)))

    def add(self, options: AddDNSZoneOptions) -> DNSZone:
        """Create a DNS zone and return it."""
        data = self.transport.request_json("POST", "/dnszone", json=options.to_json())
        return DNSZone.from_json(data)

    def update(self, zone_id: int, options: UpdateDNSZoneOptions) -> DNSZone:
        """Change the settings of a DNS zone and return it."""
        data = self.transport.request_json(
            "POST", self._zone_path(zone_id), json=options.to_json()
        )
        return DNSZone.from_json(data)

    def delete(self, zone_id: int) -> None:
        """Delete a DNS zone."""
        self.transport.request("DELETE", self._zone_path(zone_id))

    def enable_dnssec(self, zone_id: int) -> DNSSecInfo:
        """Turn DNSSEC on for a zone and return its DNSSEC details."""
        data = self.transport.request_json("POST", self._zone_path(zone_id, "/dnssec"))
        return DNSSecInfo.from_json(data)

    def disable_dnssec(self, zone_id: int) -> DNSSecInfo:
        """Turn DNSSEC off for a zone and return its DNSSEC details."""
        data = self.transport.request_json("DELETE", self._zone_path(zone_id, "/dnssec"))
        return DNSSecInfo.from_json(data)

    def export(self, zone_id: int) -> bytes:
        """Return the exported zone file."""
        return self.transport.request("GET", self._zone_path(zone_id, "/export")).content

    def check_availability(self, options: CheckZoneAvailabilityOptions) -> ZoneAvailabilityResult:
        """Check whether a zone name can be added."""
        data = self.transport.request_json(
            "POST", "/dnszone/checkavailability", json=options.to_json()
        )
        return ZoneAvailabilityResult.from_json(data)

    def add_record(self, zone_id: int, options: AddDNSRecordOptions) -> DNSRecord:
        """Add a record to a zone and return it."""
        data = self.transport.request_json(
            "PUT", self._zone_path(zone_id, "/records"), json=options.to_json()
        )
        return DNSRecord.from_json(data)

    def update_record(
        self, zone_id: int, record_id: int, options: UpdateDNSRecordOptions
    ) -> None:
        """Change a record of a zone."""
        self.transport.request(
            "POST",
            self._zone_path(zone_id, f"/records/{int(record_id)}"),
            json=options.to_json(),
        )

    def delete_record(self, zone_id: int, record_id: int) -> None:
        """Delete a record from a zone."""
        self.transport.request("DELETE", self._zone_path(zone_id, f"/records/{int(record_id)}"))

    def import_records(self, zone_id: int, data: bytes) -> ImportResult:
        """Upload zone file data into a zone and return the import counts."""
        result = self.transport.upload(
            self._zone_path(zone_id, "/import"), "file", "import.txt", data
        )
        return ImportResult.from_json(result)