# stealthreq

Browser-like request shaping for crawlers and scrapers, without tying you to
any particular HTTP client.

`stealthreq` picks realistic header values (User-Agent, Accept-Language,
Accept-Encoding, Cache-Control, Upgrade-Insecure-Requests, Referer and
friends), keeps them within a header budget, samples a timing jitter to wait
before sending, and chooses a simulated TLS fingerprint profile (JA3 string,
its MD5 hash, ALPN order, cipher suites and extensions) that you can hand to
your own TLS stack. It also has safety guards for authenticated scanning and
building blocks for checking responses for signs of a web application
firewall.

It uses only the Python standard library and needs Python 3.11 or later.
Install the `test` extra to run the test suite with pytest.

## Applying a policy to a request

Anything that can take headers works. Subclass `MutableRequest` and implement
`set_header`:

```python
from stealthreq.policy import MutableRequest, StealthPolicy


class HeaderBag(MutableRequest):
    def __init__(self):
        self.headers = []

    def set_header(self, name, value):
        self.headers.append((name, value))


request = HeaderBag()
policy = StealthPolicy().with_seed(7)
applied = policy.apply(request)

print(applied.user_agent)
print(applied.applied_headers)
print(applied.jitter)             # a datetime.timedelta
print(applied.tls_profile.name)
```

`AppliedRequestProfile` reports the User-Agent that was set, every header
that was applied, the delay to wait before sending, and the TLS profile to
use. `MutableRequest.set_user_agent(value)` is a shortcut that sets the
`User-Agent` header.

A seed makes the outcome repeatable: two policies with the same seed produce
the same headers, jitter and TLS profile. Without a seed every call to
`apply` draws a fresh random seed. To drive several requests from one random
stream, pass your own `random.Random` to `apply_with_rng`; `next_jitter(rng)`
and `next_tls_profile(rng)` draw those two parts on their own.

`StealthPolicy` is immutable. The builder methods each return a new policy
and leave the original untouched:

- `with_seed(seed)` sets or clears (`None`) the deterministic seed
- `with_timing(jitter)` takes a `TimingJitter` from `stealthreq.timing`
- `with_headers(headers)` takes a `HeaderPolicy` from `stealthreq.headers`
- `with_tls_rotation(tls)` takes a `TlsRotationPolicy` from `stealthreq.tls`
- `with_header_budget(n)` caps the number of headers; a budget below one is
  raised to one, and headers are dropped at random while the User-Agent is
  kept
- `with_rotate_tls(flag)` turns per-request TLS profile rotation on or off;
  with rotation off the first profile in the pool is always used

The defaults are a header budget of 6, a jitter of 80–250 ms, the built-in
header pools and TLS profiles, and rotation on.

If no headers come out, or no User-Agent among them (for example because the
`user_agents` pool is empty), `apply` raises `InternalError` from
`stealthreq.errors`.

## The parts of a policy

- `TimingJitter(min_ms, max_ms)` draws a uniform delay with
  `sample_delay(rng)`; an inverted range always gives `min_ms`.
  `burstiness()` is true when the range width is even, and then
  `HeaderPolicy.materialize` adds `DNT` and `Sec-Fetch-*` headers.
  `TimingJitterConfig` holds the same bounds (80–350 ms by default) and
  turns into a jitter with `to_jitter()`.
- `HeaderPolicy` holds the value pools and `materialize(rng, header_budget,
  timing)` samples one header list from them. `to_dict()` and
  `from_dict(data)` convert it to and from plain data.
  `HeaderPolicyConfig` holds just the referer hosts, extra headers and the
  `Pragma: no-cache` switch, and `into_profile()` combines them with the
  built-in pools.
- `TlsRotationPolicy` picks a `TlsFingerprint` with `rotate(rng)`; an empty
  pool yields a fixed profile named `fallback`. `build_default_profiles()`
  returns the three built-in browser profiles, `compute_ja3_hash(ja3)` the
  MD5 hex digest of a JA3 string, and `TlsFingerprint.as_header_hints()` a
  pair of hint headers carrying the hash.

## Configuring from TOML

```python
from stealthreq.config import StealthProfileConfig

config = StealthProfileConfig.from_toml("""
seed = 42
jitter_ms_min = 100
jitter_ms_max = 500
header_budget = 6
rotate_tls = true

[headers]
referer_hosts = ["https://example.com"]
extra_headers = [["Accept", "text/html"]]
include_pragmas = false

[tls]
enabled = true
""")
policy = config.build()
```

Every top-level key is optional. The defaults are a jitter of 80–350 ms, a
header budget of 4, TLS rotation on, and no seed. Leaving out `[headers]`
keeps the default referer hosts, `Accept` extra header and `Pragma` header;
a `[headers]` table starts from none of them, so list what you want. A
`[tls]` table must set `enabled`.

Invalid TOML, values of the wrong type or outside the unsigned 64-bit range,
`jitter_ms_min` greater than `jitter_ms_max`, or a `header_budget` of zero
raise `ConfigError`. Both `ConfigError` and `InternalError` derive from
`StealthError`. `validate()` runs the same consistency checks on a
configuration built in code.

## Safety guards for authenticated scanning

When a scanner runs with real user credentials, some endpoints must never be
hit: account deletion, logout, payment transfers.

```python
from stealthreq.safety import SafetyConfig, is_safe_endpoint, is_safe_method, is_safe_request

config = SafetyConfig()
is_safe_request("GET", "/api/users", config)        # True
is_safe_request("GET", "/account/delete", config)   # False
is_safe_endpoint("%2Flogout", config)               # False, paths are URL-decoded
is_safe_request("DELETE", "/api/users/1", config)   # False, method is blocked
is_safe_method("HEAD")                              # True
```

Matching is case-insensitive and ignores the query string. The built-in
list is `DANGEROUS_ENDPOINTS`; blocked methods default to DELETE and PATCH.
Entries in `config.blocked_endpoints` match as substrings, or as patterns
when they contain `.*` as a wildcard; add your own to the set. Setting
`config.enabled` to false allows everything.

`gaussian_delay(min_ms, max_ms, rng)` gives a normally distributed delay
clamped to the range, which reads as more human than a uniform one.

## WAF signals

`stealthreq.waf` holds the pieces for checking a response for firewall
markers:

- `stealthreq.waf.snapshot.HttpResponseSnapshot` captures status, headers
  and body bytes, and `context()` builds a `ResponseContext` with ASCII-
  lowercased headers and body and the cookie names found in `set-cookie`
  and `cookie` headers (see `extract_cookies` in `stealthreq.waf.helpers`).
- `stealthreq.waf.check.Check` is one test on a context: a header present,
  a header or body substring, a cookie name, prefix or substring, a status
  code, or `all_of` / `any_of` combinations. Build it from a mapping tagged
  with `type`, for example
  `Check.from_dict({"type": "header_exists", "value": "cf-ray"})`, and run it
  with `evaluate(ctx)`.
- `stealthreq.waf.fingerprint` defines `WafFingerprint` (name, confidence,
  indicators), `WafEncoding`, `parse_encoding(name)` and
  `MIN_CONFIDENCE_THRESHOLD`.

## What it does not do

The package does not send requests or perform TLS handshakes; it only
decides what to send. It also ships no set of WAF signatures and no function
that scores a response against them to name a firewall or suggest
encodings: you write the checks, evaluate them, and fill in a
`WafFingerprint` yourself.