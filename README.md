# bunnynet

A synchronous Python client for the Bunny.net CDN API, built on `httpx`. It covers
three areas:

- **Purging** (`bunnynet.purge`): remove a single URL from the CDN cache.
- **DNS zones** (`bunnynet.dnszone`, `bunnynet.dns_models`): list, create, update
  and delete zones, manage records, turn DNSSEC on and off, check name
  availability, export zone files and import records.
- **Pull zones** (`bunnynet.pullzone`, `bunnynet.pullzone_models`): list, create,
  update and delete pull zones, and manage hostnames, certificates, referrers,
  blocked IPs, edge rules and statistics.

All requests go through one `Transport` (`bunnynet.transport`). It holds the API
key, the base URL, the user agent and an `httpx.Client`, and sends the key in an
`AccessKey` header with every request. Each service is built on a transport.

## Installation

```
pip install bunnynet
```

To run the test suite, install the test extra and run pytest:

```
pip install "bunnynet[test]"
pytest
```

## Setting up

```python
import httpx

from bunnynet.transport import Transport

transport = Transport(
    api_key="placeholder",
    base_url="https://api.example.com",
    user_agent="my-app/1.0",      # optional, defaults to "bunnynet-python"
    client=httpx.Client(),        # optional
)
```

`base_url` is the root URL of the API; a trailing slash is dropped. If no
`client` is given, the transport creates its own `httpx.Client` and closes it in
`close()` or when used as a context manager:

```python
with Transport(api_key="placeholder", base_url="https://api.example.com") as transport:
    ...
```

A client passed in is left open. To change the key later, call
`transport.set_api_key(...)`; every service also has `set_api_key`, which does
the same on its transport.

## Purging a URL

```python
from bunnynet.purge import PurgeOptions, PurgeService

purge = PurgeService(transport)

# Wait until the purge has finished
purge.purge("https://cdn.example.com/styles/site.css")

# Or fill in the options yourself; async_=True does not wait
purge.purge_url(PurgeOptions(url="https://cdn.example.com/app.js", async_=True))
```

The URL and the `async` flag are sent as query parameters of `POST /purge`.

## DNS zones

```python
from bunnynet.dns_models import (
    AddDNSRecordOptions,
    AddDNSZoneOptions,
    DNSRecordType,
    UpdateDNSRecordOptions,
    UpdateDNSZoneOptions,
)
from bunnynet.dnszone import DNSZoneService

dns = DNSZoneService(transport)

zone = dns.add(AddDNSZoneOptions(domain="example.com"))

record = dns.add_record(
    zone.id,
    AddDNSRecordOptions(type=DNSRecordType.A, name="www", value="192.0.2.10", ttl=300),
)
dns.update_record(
    zone.id,
    record.id,
    UpdateDNSRecordOptions(id=record.id, type=DNSRecordType.A, value="192.0.2.11"),
)
dns.update(zone.id, UpdateDNSZoneOptions(logging_enabled=True))

# One page, or every zone fetched page by page
page = dns.list(page=1, per_page=100, search="example")
print(page.total_items, page.has_more_items)
for z in dns.list_all(per_page=100):
    print(z.id, z.domain)

zone_file = dns.export(zone.id)               # raw bytes of the zone file
result = dns.import_records(zone.id, zone_file)
print(result.records_successful, result.records_failed, result.records_skipped)

dns.delete_record(zone.id, record.id)
dns.delete(zone.id)
```

`enable_dnssec` and `disable_dnssec` return a `DNSSecInfo`;
`check_availability` takes a `CheckZoneAvailabilityOptions` and returns a
`ZoneAvailabilityResult`.

The option classes leave zero values (0, empty strings, `False`, empty lists) out
of the request body; only the record `Type` (and `Id` for updates) is always
sent. Record types, monitor states and similar fields are `IntEnum`s such as
`DNSRecordType`, `MonitorType` and `SmartRoutingType`; a number the enum does not
know is kept as a plain `int`. Zone dates are parsed into timezone-aware
`datetime` values (UTC when the API gives no offset), or `None` when absent.

## Pull zones

```python
from datetime import datetime, timezone

from bunnynet.pullzone import PullZoneService
from bunnynet.pullzone_models import (
    AddHostnameOptions,
    AddOrUpdateEdgeRuleOptions,
    AddPullZoneOptions,
    BlockedIPOptions,
    EdgeRuleTrigger,
    PurgeCacheOptions,
    SetEdgeRuleEnabledOptions,
    StatisticsOptions,
)

pull_zones = PullZoneService(transport)

zone = pull_zones.add(AddPullZoneOptions(name="my-assets", origin_url="https://origin.example.com"))

pull_zones.add_hostname(zone.id, AddHostnameOptions(hostname="cdn.example.com"))
pull_zones.add_blocked_ip(zone.id, BlockedIPOptions(blocked_ip="198.51.100.7"))
pull_zones.purge_cache(zone.id, PurgeCacheOptions(cache_tag="images"))

# Fetch, change a setting and send the whole configuration back
current = pull_zones.get(zone.id, include_certificate=False)
current.enable_logging = True
pull_zones.update(zone.id, current)

pull_zones.add_or_update_edge_rule(
    zone.id,
    AddOrUpdateEdgeRuleOptions(
        action_type=1,
        triggers=[EdgeRuleTrigger(type=0, pattern_matches=["*/private/*"])],
        enabled=True,
    ),
)

stats = pull_zones.get_optimizer_statistics(
    zone.id,
    StatisticsOptions(date_from=datetime(2024, 1, 1, tzinfo=timezone.utc), hourly=True),
)
print(stats.total_requests_optimized)

for z in pull_zones.list_all(per_page=100, search="my-"):
    print(z.id, z.name)
```

Other calls: `remove_hostname`, `add_certificate`, `remove_certificate`,
`set_force_ssl`, `reset_security_key`, `add_allowed_referrer`,
`remove_allowed_referrer`, `add_blocked_referrer`, `remove_blocked_referrer`,
`remove_blocked_ip`, `set_edge_rule_enabled` (with `SetEdgeRuleEnabledOptions`),
`delete_edge_rule`, `get_origin_shield_queue_statistics`,
`load_free_certificate` (with `LoadFreeCertificateOptions`) and
`check_availability` (with `CheckAvailabilityOptions`, returning a
`CheckAvailabilityResponse`). `StatisticsOptions` sends its dates as RFC 3339
timestamps in UTC; a naive `datetime` is taken to be UTC.

## Paging

`list` on either service returns a `Page` with `items`, `current_page`,
`total_items` and `has_more_items`. `list_all` keeps fetching pages, starting at
page 1, until a page says there are no more items or comes back empty. A
`per_page` of zero or less means the default of 1000. The helpers behind it,
`iterate_pages` (a generator) and `collect_all`, are in `bunnynet.transport` and
take any function `fetch(page, per_page)` that returns a `Page`.

## Errors

Failures are raised as exceptions from `bunnynet.transport`:

- `APIError`: the API answered with status 400 or above. It carries
  `status_code`, `message`, and, when the body is a JSON object, `error_key`
  and `field`.
- `ClientError`: the request could not be sent, or the response could not be
  decoded. The underlying exception is in `cause`.

```python
from bunnynet.transport import APIError, ClientError

try:
    dns.get(12345)
except APIError as exc:
    print("API refused the request:", exc.status_code, exc.message)
except ClientError as exc:
    print("request failed:", exc)
```

## What this package does not do

It is a library only: there is no command-line tool. It is synchronous, with no
async client, and it does not retry failed requests. It covers URL purging, DNS
zones and pull zones; other parts of the Bunny.net API, such as storage zones or
account and billing endpoints, have no service here.