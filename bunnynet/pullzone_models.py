"""Data types exchanged with the pull zone endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Callable, NamedTuple, TypeVar

from bunnynet.dns_models import _bool, _float, _int, _object, _str
from bunnynet.transport import ClientError

M = TypeVar("M")


class _Codec(NamedTuple):
    decode: Callable[[dict[str, Any], str], Any]
    encode: Callable[[Any], Any]


def _identity(value: Any) -> Any:
    return value


def _strings(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ClientError(f"failed to parse field {key}: not a list of strings")
    return list(value)


def _mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ClientError(f"failed to parse field {key}: not an object")
    return dict(value)


_INT = _Codec(_int, _identity)
_FLOAT = _Codec(_float, _identity)
_STR = _Codec(_str, _identity)
_BOOL = _Codec(_bool, _identity)
_STRINGS = _Codec(_strings, list)
_MAPPING = _Codec(_mapping, dict)


def _list_of(item_cls: Any) -> _Codec:
    def decode(data: dict[str, Any], key: str) -> list[Any]:
        value = data.get(key)
        if value is None:
            return []
        if not isinstance(value, list):
            raise ClientError(f"failed to parse field {key}: not a list")
        return [item_cls.from_json(item) for item in value]

    return _Codec(decode, lambda items: [item.to_json() for item in items])


def _wire(key: str, codec: _Codec, *, omit_empty: bool = False, **kwargs: Any) -> Any:
    return field(metadata={"key": key, "codec": codec, "omit_empty": omit_empty}, **kwargs)


def _int_f(key: str, **kwargs: Any) -> Any:
    return _wire(key, _INT, default=0, **kwargs)


def _float_f(key: str, **kwargs: Any) -> Any:
    return _wire(key, _FLOAT, default=0.0, **kwargs)


def _str_f(key: str, **kwargs: Any) -> Any:
    return _wire(key, _STR, default="", **kwargs)


def _bool_f(key: str, **kwargs: Any) -> Any:
    return _wire(key, _BOOL, default=False, **kwargs)


def _strings_f(key: str, **kwargs: Any) -> Any:
    return _wire(key, _STRINGS, default_factory=list, **kwargs)


def _mapping_f(key: str) -> Any:
    return _wire(key, _MAPPING, default_factory=dict)


def _list_f(key: str, item_cls: Any) -> Any:
    return _wire(key, _list_of(item_cls), default_factory=list)


def _decode_fields(cls: type[M], data: Any, what: str) -> M:
    obj = _object(data, what)
    values = {
        f.name: f.metadata["codec"].decode(obj, f.metadata["key"])
        for f in fields(cls)  # type: ignore[arg-type]
        if "codec" in f.metadata
    }
    return cls(**values)


def _encode_fields(instance: Any) -> dict[str, Any]:
    body: dict[str, Any] = {}
    for f in fields(instance):
        meta = f.metadata
        if "codec" not in meta:
            continue
        value = meta["codec"].encode(getattr(instance, f.name))
        if meta["omit_empty"] and not value:
            continue
        body[meta["key"]] = value
    return body


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class Hostname:
    """A hostname linked to a pull zone."""

    id: int = _int_f("Id")
    value: str = _str_f("Value")
    force_ssl: bool = _bool_f("ForceSSL")
    is_system_hostname: bool = _bool_f("IsSystemHostname")
    has_certificate: bool = _bool_f("HasCertificate")
    certificate: str = _str_f("Certificate", omit_empty=True)
    certificate_key: str = _str_f("CertificateKey", omit_empty=True)

    @classmethod
    def from_json(cls, data: Any) -> Hostname:
        return _decode_fields(cls, data, "hostname")

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class EdgeRuleTrigger:
    """A condition that fires an edge rule."""

    type: int = _int_f("Type")
    pattern_matches: list[str] = _strings_f("PatternMatches")
    pattern_matching_type: int = _int_f("PatternMatchingType")
    parameter1: str = _str_f("Parameter1")
    trigger_matching_type: int = _int_f("TriggerMatchingType")

    @classmethod
    def from_json(cls, data: Any) -> EdgeRuleTrigger:
        return _decode_fields(cls, data, "edge rule trigger")

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class EdgeRule:
    """An edge rule configured on a pull zone."""

    guid: str = _str_f("Guid")
    action_type: int = _int_f("ActionType")
    action_parameter1: str = _str_f("ActionParameter1")
    action_parameter2: str = _str_f("ActionParameter2")
    triggers: list[EdgeRuleTrigger] = _list_f("Triggers", EdgeRuleTrigger)
    description: str = _str_f("Description")
    enabled: bool = _bool_f("Enabled")

    @classmethod
    def from_json(cls, data: Any) -> EdgeRule:
        return _decode_fields(cls, data, "edge rule")

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class PullZone:
    """A pull zone and its full configuration."""

    id: int = _int_f("Id")
    name: str = _str_f("Name")
    origin_url: str = _str_f("OriginUrl")
    enabled: bool = _bool_f("Enabled")
    hostnames: list[Hostname] = _list_f("Hostnames", Hostname)
    storage_zone_id: int = _int_f("StorageZoneId")
    edge_script_id: int = _int_f("EdgeScriptId")
    allowed_referrers: list[str] = _strings_f("AllowedReferrers")
    blocked_referrers: list[str] = _strings_f("BlockedReferrers")
    blocked_ips: list[str] = _strings_f("BlockedIps")
    enable_geo_zone_us: bool = _bool_f("EnableGeoZoneUS")
    enable_geo_zone_eu: bool = _bool_f("EnableGeoZoneEU")
    enable_geo_zone_asia: bool = _bool_f("EnableGeoZoneASIA")
    enable_geo_zone_sa: bool = _bool_f("EnableGeoZoneSA")
    enable_geo_zone_af: bool = _bool_f("EnableGeoZoneAF")
    zone_security_enabled: bool = _bool_f("ZoneSecurityEnabled")
    zone_security_key: str = _str_f("ZoneSecurityKey")
    zone_security_include_hash_remote_ip: bool = _bool_f("ZoneSecurityIncludeHashRemoteIP")
    ignore_query_strings: bool = _bool_f("IgnoreQueryStrings")
    monthly_bandwidth_limit: int = _int_f("MonthlyBandwidthLimit")
    monthly_bandwidth_used: int = _int_f("MonthlyBandwidthUsed")
    monthly_charges: float = _float_f("MonthlyCharges")
    add_host_header: bool = _bool_f("AddHostHeader")
    origin_host_header: str = _str_f("OriginHostHeader")
    type: int = _int_f("Type")
    access_control_origin_header_extensions: list[str] = _strings_f(
        "AccessControlOriginHeaderExtensions"
    )
    enable_access_control_origin_header: bool = _bool_f("EnableAccessControlOriginHeader")
    disable_cookies: bool = _bool_f("DisableCookies")
    budget_redirected_countries: list[str] = _strings_f("BudgetRedirectedCountries")
    blocked_countries: list[str] = _strings_f("BlockedCountries")
    enable_origin_shield: bool = _bool_f("EnableOriginShield")
    cache_control_max_age_override: int = _int_f("CacheControlMaxAgeOverride")
    cache_control_public_max_age_override: int = _int_f("CacheControlPublicMaxAgeOverride")
    burst_size: int = _int_f("BurstSize")
    request_limit: int = _int_f("RequestLimit")
    block_root_path_access: bool = _bool_f("BlockRootPathAccess")
    block_post_requests: bool = _bool_f("BlockPostRequests")
    limit_rate_per_second: float = _float_f("LimitRatePerSecond")
    limit_rate_after: float = _float_f("LimitRateAfter")
    connection_limit_per_ip_count: int = _int_f("ConnectionLimitPerIPCount")
    add_canonical_header: bool = _bool_f("AddCanonicalHeader")
    enable_logging: bool = _bool_f("EnableLogging")
    enable_cache_slice: bool = _bool_f("EnableCacheSlice")
    enable_smart_cache: bool = _bool_f("EnableSmartCache")
    edge_rules: list[EdgeRule] = _list_f("EdgeRules", EdgeRule)
    enable_webp_vary: bool = _bool_f("EnableWebPVary")
    enable_avif_vary: bool = _bool_f("EnableAvifVary")
    enable_country_code_vary: bool = _bool_f("EnableCountryCodeVary")
    enable_mobile_vary: bool = _bool_f("EnableMobileVary")
    enable_cookie_vary: bool = _bool_f("EnableCookieVary")
    cookie_vary_parameters: list[str] = _strings_f("CookieVaryParameters")
    enable_hostname_vary: bool = _bool_f("EnableHostnameVary")
    cname_domain: str = _str_f("CnameDomain")
    logging_ip_anonymization_enabled: bool = _bool_f("LoggingIPAnonymizationEnabled")
    enable_tls1: bool = _bool_f("EnableTLS1")
    enable_tls1_1: bool = _bool_f("EnableTLS1_1")
    verify_origin_ssl: bool = _bool_f("VerifyOriginSSL")
    log_forwarding_enabled: bool = _bool_f("LogForwardingEnabled")
    log_forwarding_hostname: str = _str_f("LogForwardingHostname")
    log_forwarding_port: int = _int_f("LogForwardingPort")
    log_forwarding_token: str = _str_f("LogForwardingToken")
    log_forwarding_protocol: int = _int_f("LogForwardingProtocol")
    logging_save_to_storage: bool = _bool_f("LoggingSaveToStorage")
    logging_storage_zone_id: int = _int_f("LoggingStorageZoneId")
    follow_redirects: bool = _bool_f("FollowRedirects")
    origin_retries: int = _int_f("OriginRetries")
    origin_connect_timeout: int = _int_f("OriginConnectTimeout")
    origin_response_timeout: int = _int_f("OriginResponseTimeout")
    use_stale_while_updating: bool = _bool_f("UseStaleWhileUpdating")
    use_stale_while_offline: bool = _bool_f("UseStaleWhileOffline")
    origin_retry_5xx_responses: bool = _bool_f("OriginRetry5XXResponses")
    origin_retry_connection_timeout: bool = _bool_f("OriginRetryConnectionTimeout")
    origin_retry_response_timeout: bool = _bool_f("OriginRetryResponseTimeout")
    origin_retry_delay: int = _int_f("OriginRetryDelay")
    query_string_vary_parameters: list[str] = _strings_f("QueryStringVaryParameters")
    origin_shield_enable_concurrency_limit: bool = _bool_f("OriginShieldEnableConcurrencyLimit")
    origin_shield_max_concurrent_requests: int = _int_f("OriginShieldMaxConcurrentRequests")
    enable_safe_hop: bool = _bool_f("EnableSafeHop")
    cache_error_responses: bool = _bool_f("CacheErrorResponses")
    origin_shield_queue_max_wait_time: int = _int_f("OriginShieldQueueMaxWaitTime")
    origin_shield_max_queued_requests: int = _int_f("OriginShieldMaxQueuedRequests")
    use_background_update: bool = _bool_f("UseBackgroundUpdate")
    enable_auto_ssl: bool = _bool_f("EnableAutoSSL")
    enable_query_string_ordering: bool = _bool_f("EnableQueryStringOrdering")
    log_anonymization_type: int = _int_f("LogAnonymizationType")
    log_format: int = _int_f("LogFormat")
    log_forwarding_format: int = _int_f("LogForwardingFormat")
    origin_type: int = _int_f("OriginType")
    enable_request_coalescing: bool = _bool_f("EnableRequestCoalescing")
    request_coalescing_timeout: int = _int_f("RequestCoalescingTimeout")
    disable_lets_encrypt: bool = _bool_f("DisableLetsEncrypt")
    preloading_screen_enabled: bool = _bool_f("PreloadingScreenEnabled")
    preloading_screen_logo_url: str = _str_f("PreloadingScreenLogoUrl")

    @classmethod
    def from_json(cls, data: Any) -> PullZone:
        return _decode_fields(cls, data, "pull zone")

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class AddPullZoneOptions:
    """Settings of a pull zone to create; zero values are left out of the request."""

    name: str = _wire("Name", _STR)
    origin_url: str = _wire("OriginUrl", _STR)
    type: int = _int_f("Type", omit_empty=True)
    allowed_referrers: list[str] = _strings_f("AllowedReferrers", omit_empty=True)
    blocked_referrers: list[str] = _strings_f("BlockedReferrers", omit_empty=True)
    blocked_ips: list[str] = _strings_f("BlockedIps", omit_empty=True)
    enable_geo_zone_us: bool = _bool_f("EnableGeoZoneUS", omit_empty=True)
    enable_geo_zone_eu: bool = _bool_f("EnableGeoZoneEU", omit_empty=True)
    enable_geo_zone_asia: bool = _bool_f("EnableGeoZoneASIA", omit_empty=True)
    enable_geo_zone_sa: bool = _bool_f("EnableGeoZoneSA", omit_empty=True)
    enable_geo_zone_af: bool = _bool_f("EnableGeoZoneAF", omit_empty=True)

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class AddHostnameOptions:
    """A hostname to add to a pull zone."""

    hostname: str = _wire("Hostname", _STR)

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class RemoveHostnameOptions:
    """A hostname to remove from a pull zone."""

    hostname: str = _wire("Hostname", _STR)

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class AddCertificateOptions:
    """A custom certificate, Base64 encoded, for a hostname."""

    hostname: str = _wire("Hostname", _STR)
    certificate: str = _wire("Certificate", _STR)
    certificate_key: str = _wire("CertificateKey", _STR)

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class RemoveCertificateOptions:
    """A hostname whose certificate is removed."""

    hostname: str = _wire("Hostname", _STR)

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class SetForceSSLOptions:
    """Whether a hostname forces SSL."""

    hostname: str = _wire("Hostname", _STR)
    force_ssl: bool = _bool_f("ForceSSL")

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class HostnameOptions:
    """A hostname to operate on, such as a referrer."""

    hostname: str = _wire("Hostname", _STR)

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class BlockedIPOptions:
    """An IP address to block or unblock."""

    blocked_ip: str = _wire("BlockedIp", _STR)

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class AddOrUpdateEdgeRuleOptions:
    """An edge rule to add, or to update when the GUID is set."""

    guid: str = _str_f("Guid", omit_empty=True)
    action_type: int = _int_f("ActionType")
    action_parameter1: str = _str_f("ActionParameter1", omit_empty=True)
    action_parameter2: str = _str_f("ActionParameter2", omit_empty=True)
    triggers: list[EdgeRuleTrigger] = _list_f("Triggers", EdgeRuleTrigger)
    description: str = _str_f("Description", omit_empty=True)
    enabled: bool = _bool_f("Enabled")

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class SetEdgeRuleEnabledOptions:
    """Turns an edge rule on or off."""

    id: int = _int_f("Id")
    value: bool = _bool_f("Value")

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class PurgeCacheOptions:
    """An optional cache tag restricting what a purge removes."""

    cache_tag: str = _str_f("CacheTag", omit_empty=True)

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class CheckAvailabilityOptions:
    """A pull zone name whose availability is checked."""

    name: str = _wire("Name", _STR)

    def to_json(self) -> dict[str, Any]:
        return _encode_fields(self)


@dataclass
class CheckAvailabilityResponse:
    """Whether a pull zone name is free."""

    available: bool = _bool_f("Available")

    @classmethod
    def from_json(cls, data: Any) -> CheckAvailabilityResponse:
        return _decode_fields(cls, data, "availability response")


@dataclass
class OriginShieldQueueStatistics:
    """Charts of concurrent and queued origin shield requests."""

    concurrent_requests_chart: dict[str, Any] = _mapping_f("ConcurrentRequestsChart")
    queued_requests_chart: dict[str, Any] = _mapping_f("QueuedRequestsChart")

    @classmethod
    def from_json(cls, data: Any) -> OriginShieldQueueStatistics:
        return _decode_fields(cls, data, "origin shield queue statistics")


@dataclass
class OptimizerStatistics:
    """Charts and totals describing the optimizer's work."""

    requests_optimized_chart: dict[str, Any] = _mapping_f("RequestsOptimizedChart")
    average_compression_chart: dict[str, Any] = _mapping_f("AverageCompressionChart")
    traffic_saved_chart: dict[str, Any] = _mapping_f("TrafficSavedChart")
    average_processing_time_chart: dict[str, Any] = _mapping_f("AverageProcessingTimeChart")
    total_requests_optimized: float = _float_f("TotalRequestsOptimized")
    total_traffic_saved: float = _float_f("TotalTrafficSaved")
    average_processing_time: float = _float_f("AverageProcessingTime")
    average_compression_ratio: float = _float_f("AverageCompressionRatio")

    @classmethod
    def from_json(cls, data: Any) -> OptimizerStatistics:
        return _decode_fields(cls, data, "optimizer statistics")


@dataclass
class StatisticsOptions:
    """The period and grouping of requested statistics."""

    date_from: datetime | None = None
    date_to: datetime | None = None
    hourly: bool = False

    def to_query_params(self) -> dict[str, str]:
        """Return the query parameters, with dates as RFC 3339 in UTC."""
        params: dict[str, str] = {}
        if self.date_from is not None:
            params["dateFrom"] = _rfc3339(self.date_from)
        if self.date_to is not None:
            params["dateTo"] = _rfc3339(self.date_to)
        if self.hourly:
            params["hourly"] = "true"
        return params


@dataclass
class LoadFreeCertificateOptions:
    """The hostname a free certificate is loaded for."""

    hostname: str

    def to_query_params(self) -> dict[str, str]:
        return {"hostname": self.hostname}