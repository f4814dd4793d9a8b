import pytest

from stealthreq.waf.fingerprint import (
    WafEncoding,
    WafFingerprint,
    parse_encoding,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("UrlEncode", WafEncoding.URL_ENCODE),
        ("DoubleUrlEncode", WafEncoding.DOUBLE_URL_ENCODE),
        ("HtmlEncode", WafEncoding.HTML_ENCODE),
        ("UnicodeEncode", WafEncoding.UNICODE_ENCODE),
        ("Base64Encode", WafEncoding.BASE64_ENCODE),
        ("HexEncode", WafEncoding.HEX_ENCODE),
    ],
)
def test_parse_known_encodings(name, expected):
    assert parse_encoding(name) is expected


@pytest.mark.parametrize("name", ["urlencode", "", "Rot13"])
def test_parse_unknown_encoding(name):
    assert parse_encoding(name) is None


def test_every_encoding_round_trips():
    for encoding in WafEncoding:
        assert parse_encoding(encoding.value) is encoding


def test_fingerprint_equality():
    a = WafFingerprint(name="Unknown", confidence=0.6, indicators=[])
    b = WafFingerprint(name="Unknown", confidence=0.6)
    assert a == b
    assert a != WafFingerprint(name="Unknown", confidence=0.7)