from datetime import timedelta

import pytest

from stealthreq.config import StealthProfileConfig
from stealthreq.errors import ConfigError, StealthError
from stealthreq.headers import HeaderPolicyConfig
from stealthreq.policy import MutableRequest
from stealthreq.timing import TimingJitter
from stealthreq.tls import TlsRotationConfig


class MockReq(MutableRequest):
    def __init__(self):
        self.headers = []

    def set_header(self, name, value):
        self.headers.append((name, value))


def test_default_config_builds():
    config = StealthProfileConfig()
    assert config.rotate_tls is True
    assert config.header_budget == 4
    applied = config.build().apply(MockReq())
    assert len(applied.applied_headers) > 0


def test_from_toml_minimal():
    config = StealthProfileConfig.from_toml("")
    assert config.jitter_ms_min == 80
    assert config.jitter_ms_max == 350
    assert config.header_budget == 4
    assert config.seed is None
    assert config.headers == HeaderPolicyConfig()
    assert config.tls == TlsRotationConfig(enabled=True)


def test_from_toml_full():
    config = StealthProfileConfig.from_toml(
        """
        seed = 42
        jitter_ms_min = 100
        jitter_ms_max = 500
        [headers]
        include_pragmas = false
        """
    )
    assert config.seed == 42
    assert config.jitter_ms_min == 100
    assert config.jitter_ms_max == 500
    assert config.headers.include_pragmas is False


def test_headers_section_starts_from_empty_values():
    config = StealthProfileConfig.from_toml("[headers]\n")
    assert config.headers.referer_hosts == []
    assert config.headers.extra_headers == []
    assert config.headers.include_pragmas is False


def test_extra_headers_parse_as_pairs():
    config = StealthProfileConfig.from_toml(
        '[headers]\nextra_headers = [["X-Test", "1"]]\n'
    )
    assert config.headers.extra_headers == [("X-Test", "1")]


def test_from_toml_invalid_errors():
    with pytest.raises(ConfigError):
        StealthProfileConfig.from_toml("{{invalid")


def test_config_error_message():
    with pytest.raises(StealthError) as info:
        StealthProfileConfig.from_toml("header_budget = 0")
    assert "configuration error" in str(info.value)


def test_config_with_seed_deterministic():
    policy1 = StealthProfileConfig.from_toml("seed = 42").build()
    policy2 = StealthProfileConfig.from_toml("seed = 42").build()
    applied1 = policy1.apply(MockReq())
    applied2 = policy2.apply(MockReq())
    assert applied1.user_agent == applied2.user_agent
    assert applied1.applied_headers == applied2.applied_headers
    assert applied1.tls_profile.name == applied2.tls_profile.name


def test_toml_config_parse():
    text = """
jitter_ms_min = 50
jitter_ms_max = 100
header_budget = 7
rotate_tls = true
seed = 123

[headers]
referer_hosts = ["https://example.com"]
include_pragmas = true

[tls]
enabled = true
"""
    cfg = StealthProfileConfig.from_toml(text)
    assert cfg.jitter_ms_min == 50
    assert cfg.jitter_ms_max == 100
    assert cfg.header_budget == 7
    assert cfg.headers.referer_hosts == ["https://example.com"]
    assert cfg.tls.enabled is True


def test_tls_section_requires_enabled():
    with pytest.raises(ConfigError, match="enabled"):
        StealthProfileConfig.from_toml("[tls]\n")


def test_wrong_type_is_rejected():
    with pytest.raises(ConfigError):
        StealthProfileConfig.from_toml('jitter_ms_min = "fast"')


def test_negative_value_is_rejected():
    with pytest.raises(ConfigError):
        StealthProfileConfig.from_toml("jitter_ms_min = -5")


def test_custom_config_build():
    cfg = StealthProfileConfig(
        jitter_ms_min=10,
        jitter_ms_max=20,
        header_budget=3,
        seed=44,
        rotate_tls=False,
        headers=HeaderPolicyConfig(),
        tls=TlsRotationConfig(enabled=False),
    )
    policy = cfg.build()
    applied = policy.apply(MockReq())
    assert 0 < len(applied.applied_headers) <= 3
    assert applied.user_agent != ""
    assert timedelta(milliseconds=10) <= applied.jitter <= timedelta(milliseconds=20)
    assert applied.tls_profile.name == "chrome-desktop-121"


def test_build_carries_settings():
    cfg = StealthProfileConfig(jitter_ms_min=5, jitter_ms_max=9, header_budget=2, seed=7)
    policy = cfg.build()
    assert policy.seed == 7
    assert policy.header_budget == 2
    assert policy.jitter == TimingJitter(5, 9)
    assert policy.tls.enable is True


def test_toml_config_empty_string():
    cfg = StealthProfileConfig.from_toml("")
    assert cfg.jitter_ms_min == 80
    assert cfg.jitter_ms_max == 350


def test_toml_config_missing_required_fields():
    cfg = StealthProfileConfig.from_toml("\nseed = 123\n")
    assert cfg.seed == 123
    assert cfg.header_budget == 4


def test_toml_config_invalid_header_budget_zero():
    with pytest.raises(ConfigError, match="header_budget"):
        StealthProfileConfig.from_toml("\nheader_budget = 0\n")


def test_toml_config_inverted_jitter_range():
    with pytest.raises(ConfigError, match="jitter_ms_min"):
        StealthProfileConfig.from_toml("\njitter_ms_min = 500\njitter_ms_max = 100\n")


def test_toml_config_very_large_seed():
    cfg = StealthProfileConfig.from_toml("\nseed = 18446744073709551615\n")
    assert cfg.seed == 18446744073709551615


def test_toml_config_malformed():
    with pytest.raises(ConfigError):
        StealthProfileConfig.from_toml('\n[headers\nreferer_hosts = ["example.com"\n')


def test_validate_on_direct_construction():
    with pytest.raises(ConfigError):
        StealthProfileConfig(jitter_ms_min=300, jitter_ms_max=100).validate()


def test_config_build_with_missing_optional_fields():
    cfg = StealthProfileConfig(
        jitter_ms_min=100,
        jitter_ms_max=200,
        header_budget=5,
        seed=None,
        rotate_tls=False,
        headers=HeaderPolicyConfig(),
        tls=TlsRotationConfig(enabled=False),
    )
    applied = cfg.build().apply(MockReq())
    assert 0 < len(applied.applied_headers) <= 5