"""Data types exchanged with the DNS zone endpoints."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Callable, TypeVar

from bunnynet.transport import ClientError

E = TypeVar("E", bound=IntEnum)


class DNSRecordType(IntEnum):
    """Kind of a DNS record."""

    A = 0
    AAAA = 1
    CNAME = 2
    TXT = 3
    MX = 4
    REDIRECT = 5
    FLATTEN = 6
    PULL_ZONE = 7
    SRV = 8
    CAA = 9
    PTR = 10
    SCRIPT = 11
    NS = 12


class MonitorStatus(IntEnum):
    """Health reported by a record monitor."""

    UNKNOWN = 0
    ONLINE = 1
    OFFLINE = 2


class MonitorType(IntEnum):
    """How a record is monitored."""

    NONE = 0
    PING = 1
    HTTP = 2
    MONITOR = 3


class SmartRoutingType(IntEnum):
    """How a record is routed between endpoints."""

    NONE = 0
    LATENCY = 1
    GEOLOCATION = 2


class LogAnonymizationType(IntEnum):
    """How client addresses are anonymized in logs."""

    ONE_DIGIT = 0
    DROP = 1


# Helpers for reading loosely typed JSON values.


def _object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ClientError(f"failed to parse {what}: not an object")
    return data


def _convert(value: Any, kind: Callable[[Any], Any], default: Any, key: str) -> Any:
    if value is None:
        return default
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise ClientError(f"failed to parse field {key}", exc) from exc


def _int(data: dict[str, Any], key: str) -> int:
    return _convert(data.get(key), int, 0, key)


def _float(data: dict[str, Any], key: str) -> float:
    return _convert(data.get(key), float, 0.0, key)


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ClientError(f"failed to parse field {key}: not a string")
    return value


def _bool(data: dict[str, Any], key: str) -> bool:
    return bool(data.get(key, False))


def _enum(data: dict[str, Any], key: str, enum_cls: type[E]) -> E | int:
    """Return the enum member for the value, or the bare number if it is unknown."""
    number = _int(data, key)
    try:
        return enum_cls(number)
    except ValueError:
        return number


_FRACTION = re.compile(r"\.(\d+)")


def _time(data: dict[str, Any], key: str) -> datetime | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ClientError(f"failed to parse field {key}: not a string")
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ClientError(f"failed to parse field {key}", exc) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _omit_empty(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in pairs if value}


@dataclass
class GeoLocationInfo:
    """Geographic position attached to a record."""

    country: str = ""
    city: str = ""
    latitude: float = 0.0
    longitude: float = 0.0

    @classmethod
    def from_json(cls, data: Any) -> GeoLocationInfo:
        if data is None:
            return cls()
        obj = _object(data, "geolocation info")
        return cls(
            country=_str(obj, "Country"),
            city=_str(obj, "City"),
            latitude=_float(obj, "Latitude"),
            longitude=_float(obj, "Longitude"),
        )


@dataclass
class IPGeoLocationInfo:
    """Where the address of a record is located and who owns it."""

    country_code: str = ""
    country: str = ""
    asn: int = 0
    organization_name: str = ""
    city: str = ""

    @classmethod
    def from_json(cls, data: Any) -> IPGeoLocationInfo:
        if data is None:
            return cls()
        obj = _object(data, "IP geolocation info")
        return cls(
            country_code=_str(obj, "CountryCode"),
            country=_str(obj, "Country"),
            asn=_int(obj, "ASN"),
            organization_name=_str(obj, "OrganizationName"),
            city=_str(obj, "City"),
        )


@dataclass
class EnvironmentalVariable:
    """A name and value passed to a script record."""

    name: str = ""
    value: str = ""

    @classmethod
    def from_json(cls, data: Any) -> EnvironmentalVariable:
        obj = _object(data, "environmental variable")
        return cls(name=_str(obj, "Name"), value=_str(obj, "Value"))

    def to_json(self) -> dict[str, Any]:
        return {"Name": self.name, "Value": self.value}


def _variables(data: dict[str, Any]) -> list[EnvironmentalVariable]:
    return [EnvironmentalVariable.from_json(item) for item in data.get("EnviromentalVariables") or []]


@dataclass
class DNSRecord:
    """A record in a DNS zone."""

    id: int = 0
    type: DNSRecordType | int = DNSRecordType.A
    ttl: int = 0
    value: str = ""
    name: str = ""
    weight: int = 0
    priority: int = 0
    port: int = 0
    flags: int = 0
    tag: str = ""
    accelerated: bool = False
    accelerated_pull_zone_id: int = 0
    link_name: str = ""
    ip_geolocation_info: IPGeoLocationInfo = field(default_factory=IPGeoLocationInfo)
    geolocation_info: GeoLocationInfo = field(default_factory=GeoLocationInfo)
    monitor_status: MonitorStatus | int = MonitorStatus.UNKNOWN
    monitor_type: MonitorType | int = MonitorType.NONE
    geolocation_latitude: float = 0.0
    geolocation_longitude: float = 0.0
    environmental_variables: list[EnvironmentalVariable] = field(default_factory=list)
    latency_zone: str = ""
    smart_routing_type: SmartRoutingType | int = SmartRoutingType.NONE
    disabled: bool = False
    comment: str = ""

    @classmethod
    def from_json(cls, data: Any) -> DNSRecord:
        obj = _object(data, "DNS record")
        return cls(
            id=_int(obj, "Id"),
            type=_enum(obj, "Type", DNSRecordType),
            ttl=_int(obj, "Ttl"),
            value=_str(obj, "Value"),
            name=_str(obj, "Name"),
            weight=_int(obj, "Weight"),
            priority=_int(obj, "Priority"),
            port=_int(obj, "Port"),
            flags=_int(obj, "Flags"),
            tag=_str(obj, "Tag"),
            accelerated=_bool(obj, "Accelerated"),
            accelerated_pull_zone_id=_int(obj, "AcceleratedPullZoneId"),
            link_name=_str(obj, "LinkName"),
            ip_geolocation_info=IPGeoLocationInfo.from_json(obj.get("IPGeoLocationInfo")),
            geolocation_info=GeoLocationInfo.from_json(obj.get("GeolocationInfo")),
            monitor_status=_enum(obj, "MonitorStatus", MonitorStatus),
            monitor_type=_enum(obj, "MonitorType", MonitorType),
            geolocation_latitude=_float(obj, "GeolocationLatitude"),
            geolocation_longitude=_float(obj, "GeolocationLongitude"),
            environmental_variables=_variables(obj),
            latency_zone=_str(obj, "LatencyZone"),
            smart_routing_type=_enum(obj, "SmartRoutingType", SmartRoutingType),
            disabled=_bool(obj, "Disabled"),
            comment=_str(obj, "Comment"),
        )


@dataclass(kw_only=True)
class _RecordOptions:
    type: DNSRecordType | int = DNSRecordType.A
    ttl: int = 0
    value: str = ""
    name: str = ""
    weight: int = 0
    priority: int = 0
    flags: int = 0
    tag: str = ""
    port: int = 0
    pull_zone_id: int = 0
    script_id: int = 0
    accelerated: bool = False
    monitor_type: MonitorType | int = MonitorType.NONE
    geolocation_latitude: float = 0.0
    geolocation_longitude: float = 0.0
    latency_zone: str = ""
    smart_routing_type: SmartRoutingType | int = SmartRoutingType.NONE
    disabled: bool = False
    environmental_variables: list[EnvironmentalVariable] = field(default_factory=list)
    comment: str = ""

    def _record_json(self) -> dict[str, Any]:
        body: dict[str, Any] = {"Type": int(self.type)}
        body.update(
            _omit_empty(
                [
                    ("Ttl", self.ttl),
                    ("Value", self.value),
                    ("Name", self.name),
                    ("Weight", self.weight),
                    ("Priority", self.priority),
                    ("Flags", self.flags),
                    ("Tag", self.tag),
                    ("Port", self.port),
                    ("PullZoneId", self.pull_zone_id),
                    ("ScriptId", self.script_id),
                    ("Accelerated", self.accelerated),
                    ("MonitorType", int(self.monitor_type)),
                    ("GeolocationLatitude", self.geolocation_latitude),
                    ("GeolocationLongitude", self.geolocation_longitude),
                    ("LatencyZone", self.latency_zone),
                    ("SmartRoutingType", int(self.smart_routing_type)),
                    ("Disabled", self.disabled),
                    (
                        "EnviromentalVariables",
                        [variable.to_json() for variable in self.environmental_variables],
                    ),
                    ("Comment", self.comment),
                ]
            )
        )
        return body


@dataclass(kw_only=True)
class AddDNSRecordOptions(_RecordOptions):
    """Fields of a record to add; zero values are left out of the request."""

    def to_json(self) -> dict[str, Any]:
        return self._record_json()


@dataclass(kw_only=True)
class UpdateDNSRecordOptions(_RecordOptions):
    """Fields of a record to update; zero values are left out of the request."""

    id: int = 0

    def to_json(self) -> dict[str, Any]:
        return {"Id": self.id, **self._record_json()}


@dataclass
class DNSZone:
    """A DNS zone and its records."""

    id: int = 0
    domain: str = ""
    records: list[DNSRecord] = field(default_factory=list)
    date_modified: datetime | None = None
    date_created: datetime | None = None
    nameservers_detected: bool = False
    custom_nameservers_enabled: bool = False
    nameserver1: str = ""
    nameserver2: str = ""
    soa_email: str = ""
    nameservers_next_check: datetime | None = None
    dnssec_enabled: bool = False
    logging_enabled: bool = False
    logging_ip_anonymization_enabled: bool = False
    log_anonymization_type: LogAnonymizationType | int = LogAnonymizationType.ONE_DIGIT

    @classmethod
    def from_json(cls, data: Any) -> DNSZone:
        obj = _object(data, "DNS zone")
        return cls(
            id=_int(obj, "Id"),
            domain=_str(obj, "Domain"),
            records=[DNSRecord.from_json(item) for item in obj.get("Records") or []],
            date_modified=_time(obj, "DateModified"),
            date_created=_time(obj, "DateCreated"),
            nameservers_detected=_bool(obj, "NameserversDetected"),
            custom_nameservers_enabled=_bool(obj, "CustomNameserversEnabled"),
            nameserver1=_str(obj, "Nameserver1"),
            nameserver2=_str(obj, "Nameserver2"),
            soa_email=_str(obj, "SoaEmail"),
            nameservers_next_check=_time(obj, "NameserversNextCheck"),
            dnssec_enabled=_bool(obj, "DnsSecEnabled"),
            logging_enabled=_bool(obj, "LoggingEnabled"),
            logging_ip_anonymization_enabled=_bool(obj, "LoggingIPAnonymizationEnabled"),
            log_anonymization_type=_enum(obj, "LogAnonymizationType", LogAnonymizationType),
        )


@dataclass
class AddDNSZoneOptions:
    """The domain of a zone to create."""

    domain: str

    def to_json(self) -> dict[str, Any]:
        return {"Domain": self.domain}


@dataclass
class UpdateDNSZoneOptions:
    """Zone settings to change; zero values are left out of the request."""

    custom_nameservers_enabled: bool = False
    nameserver1: str = ""
    nameserver2: str = ""
    soa_email: str = ""
    logging_enabled: bool = False
    log_anonymization_type: LogAnonymizationType | int = LogAnonymizationType.ONE_DIGIT
    logging_ip_anonymization_enabled: bool = False

    def to_json(self) -> dict[str, Any]:
        return _omit_empty(
            [
                ("CustomNameserversEnabled", self.custom_nameservers_enabled),
                ("Nameserver1", self.nameserver1),
                ("Nameserver2", self.nameserver2),
                ("SoaEmail", self.soa_email),
                ("LoggingEnabled", self.logging_enabled),
                ("LogAnonymizationType", int(self.log_anonymization_type)),
                ("LoggingIPAnonymizationEnabled", self.logging_ip_anonymization_enabled),
            ]
        )


@dataclass
class DNSSecInfo:
    """DNSSEC state and key material of a zone."""

    enabled: bool = False
    ds_record: str = ""
    digest: str = ""
    digest_type: str = ""
    algorithm: int = 0
    public_key: str = ""
    key_tag: int = 0
    flags: int = 0

    @classmethod
    def from_json(cls, data: Any) -> DNSSecInfo:
        obj = _object(data, "DNSSEC info")
        return cls(
            enabled=_bool(obj, "Enabled"),
            ds_record=_str(obj, "DsRecord"),
            digest=_str(obj, "Digest"),
            digest_type=_str(obj, "DigestType"),
            algorithm=_int(obj, "Algorithm"),
            public_key=_str(obj, "PublicKey"),
            key_tag=_int(obj, "KeyTag"),
            flags=_int(obj, "Flags"),
        )


@dataclass
class ImportResult:
    """Counts of records handled by a zone import."""

    records_successful: int = 0
    records_failed: int = 0
    records_skipped: int = 0

    @classmethod
    def from_json(cls, data: Any) -> ImportResult:
        obj = _object(data, "import result")
        return cls(
            records_successful=_int(obj, "RecordsSuccessful"),
            records_failed=_int(obj, "RecordsFailed"),
            records_skipped=_int(obj, "RecordsSkipped"),
        )


@dataclass
class CheckZoneAvailabilityOptions:
    """The zone name whose availability is checked."""

    name: str

    def to_json(self) -> dict[str, Any]:
        return {"Name": self.name}


@dataclass
class ZoneAvailabilityResult:
    """Whether a zone name is free, with an explanation."""

    available: bool = False
    message: str = ""

    @classmethod
    def from_json(cls, data: Any) -> ZoneAvailabilityResult:
        obj = _object(data, "zone availability result")
        return cls(available=_bool(obj, "Available"), message=_str(obj, "Message"))