"""Human-like request shaping: headers, timing jitter, TLS profiles, safety guards and WAF checks."""

__version__ = "0.2.0"