from datetime import datetime, timezone

import pytest

from bunnynet.dns_models import (
    AddDNSRecordOptions,
    AddDNSZoneOptions,
    CheckZoneAvailabilityOptions,
    DNSRecord,
    DNSRecordType,
    DNSSecInfo,
    DNSZone,
    EnvironmentalVariable,
    ImportResult,
    LogAnonymizationType,
    MonitorStatus,
    MonitorType,
    SmartRoutingType,
    UpdateDNSRecordOptions,
    UpdateDNSZoneOptions,
    ZoneAvailabilityResult,
)
from bunnynet.transport import ClientError


def record_payload():
    return {
        "Id": 42,
        "Type": 2,
        "Ttl": 300,
        "Value": "target.example.com",
        "Name": "www",
        "Weight": 10,
        "Priority": 5,
        "Port": 443,
        "Flags": 1,
        "Tag": "issue",
        "Accelerated": True,
        "AcceleratedPullZoneId": 7,
        "LinkName": "link",
        "IPGeoLocationInfo": {"CountryCode": "DE", "Country": "Germany", "ASN": 64500,
                              "OrganizationName": "Example Org", "City": "Berlin"},
        "GeolocationInfo": {"Country": "France", "City": "Paris", "Latitude": 48.5, "Longitude": 2.25},
        "MonitorStatus": 1,
        "MonitorType": 2,
        "GeolocationLatitude": 1.5,
        "GeolocationLongitude": -3.5,
        "EnviromentalVariables": [{"Name": "MODE", "Value": "prod"}],
        "LatencyZone": "eu",
        "SmartRoutingType": 1,
        "Disabled": False,
        "Comment": "main site",
    }


def test_record_from_json_reads_all_fields():
    record = DNSRecord.from_json(record_payload())
    assert record.id == 42
    assert record.type is DNSRecordType.CNAME
    assert record.ttl == 300
    assert record.value == "target.example.com"
    assert record.port == 443
    assert record.accelerated is True
    assert record.ip_geolocation_info.asn == 64500
    assert record.ip_geolocation_info.city == "Berlin"
    assert record.geolocation_info.latitude == 48.5
    assert record.monitor_status is MonitorStatus.ONLINE
    assert record.monitor_type is MonitorType.HTTP
    assert record.smart_routing_type is SmartRoutingType.LATENCY
    assert record.environmental_variables == [EnvironmentalVariable("MODE", "prod")]
    assert record.comment == "main site"


def test_record_from_json_defaults_for_missing_fields():
    record = DNSRecord.from_json({"Id": 1, "GeolocationInfo": None})
    assert record.type is DNSRecordType.A
    assert record.environmental_variables == []
    assert record.geolocation_info.country == ""
    assert record.monitor_status is MonitorStatus.UNKNOWN


def test_record_unknown_type_is_kept_as_number():
    record = DNSRecord.from_json({"Type": 99})
    assert record.type == 99


def test_record_from_json_rejects_non_object():
    with pytest.raises(ClientError):
        DNSRecord.from_json([1, 2])


def test_record_from_json_rejects_bad_number():
    with pytest.raises(ClientError):
        DNSRecord.from_json({"Ttl": "soon"})


def test_add_record_options_default_sends_only_type():
    assert AddDNSRecordOptions().to_json() == {"Type": 0}


def test_add_record_options_omits_zero_values():
    options = AddDNSRecordOptions(
        type=DNSRecordType.TXT,
        name="_verify",
        value="abc",
        ttl=120,
        environmental_variables=[EnvironmentalVariable("K", "V")],
    )
    body = options.to_json()
    assert body == {
        "Type": int(DNSRecordType.TXT),
        "Ttl": 120,
        "Value": "abc",
        "Name": "_verify",
        "EnviromentalVariables": [{"Name": "K", "Value": "V"}],
    }


def test_add_record_options_includes_enums_when_set():
    body = AddDNSRecordOptions(
        type=DNSRecordType.A,
        monitor_type=MonitorType.PING,
        smart_routing_type=SmartRoutingType.GEOLOCATION,
        disabled=True,
    ).to_json()
    assert body["MonitorType"] == int(MonitorType.PING)
    assert body["SmartRoutingType"] == int(SmartRoutingType.GEOLOCATION)
    assert body["Disabled"] is True
    assert "Ttl" not in body


def test_update_record_options_always_sends_id_and_type():
    body = UpdateDNSRecordOptions(id=42, value="1.2.3.4").to_json()
    assert body == {"Id": 42, "Type": 0, "Value": "1.2.3.4"}


def test_environmental_variable_round_trip():
    variable = EnvironmentalVariable(name="REGION", value="north")
    assert EnvironmentalVariable.from_json(variable.to_json()) == variable


def test_zone_from_json_parses_records_and_dates():
    zone = DNSZone.from_json(
        {
            "Id": 9,
            "Domain": "example.com",
            "Records": [record_payload()],
            "DateModified": "2024-03-01T12:30:45Z",
            "DateCreated": "2023-01-02T03:04:05.1234567Z",
            "SoaEmail": "hostmaster@example.com",
            "DnsSecEnabled": True,
            "LogAnonymizationType": 1,
        }
    )
    assert zone.domain == "example.com"
    assert [record.id for record in zone.records] == [42]
    assert zone.date_modified == datetime(2024, 3, 1, 12, 30, 45, tzinfo=timezone.utc)
    assert zone.date_created == datetime(2023, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc)
    assert zone.nameservers_next_check is None
    assert zone.dnssec_enabled is True
    assert zone.log_anonymization_type is LogAnonymizationType.DROP


def test_zone_date_without_offset_is_utc():
    zone = DNSZone.from_json({"DateCreated": "2024-03-01T12:30:45"})
    assert zone.date_created.tzinfo == timezone.utc
    assert zone.date_created.hour == 12


def test_zone_invalid_date_raises():
    with pytest.raises(ClientError):
        DNSZone.from_json({"DateCreated": "yesterday"})


def test_zone_options_to_json():
    assert AddDNSZoneOptions("example.com").to_json() == {"Domain": "example.com"}
    assert CheckZoneAvailabilityOptions("example.org").to_json() == {"Name": "example.org"}


def test_update_zone_options_empty_by_default():
    assert UpdateDNSZoneOptions().to_json() == {}


def test_update_zone_options_sends_set_values():
    body = UpdateDNSZoneOptions(
        soa_email="admin@example.com",
        logging_enabled=True,
        log_anonymization_type=LogAnonymizationType.DROP,
    ).to_json()
    assert body == {
        "SoaEmail": "admin@example.com",
        "LoggingEnabled": True,
        "LogAnonymizationType": int(LogAnonymizationType.DROP),
    }


def test_dnssec_info_from_json():
    info = DNSSecInfo.from_json(
        {"Enabled": True, "DsRecord": "ds", "Digest": "dg", "DigestType": "SHA256",
         "Algorithm": 13, "PublicKey": "pk", "KeyTag": 2371, "Flags": 257}
    )
    assert info.enabled is True
    assert info.digest_type == "SHA256"
    assert info.algorithm == 13
    assert info.key_tag == 2371
    assert info.flags == 257


def test_import_result_from_json():
    result = ImportResult.from_json({"RecordsSuccessful": 3, "RecordsFailed": 1})
    assert (result.records_successful, result.records_failed, result.records_skipped) == (3, 1, 0)


def test_zone_availability_result_from_json():
    result = ZoneAvailabilityResult.from_json({"Available": True, "Message": "free"})
    assert result.available is True
    assert result.message == "free"


def test_availability_result_rejects_non_object():
    with pytest.raises(ClientError):
        ZoneAvailabilityResult.from_json("yes")