from stealthreq.errors import ConfigError, InternalError, StealthError


def test_config_error_message_mentions_configuration():
    err = ConfigError("invalid header budget")
    assert "configuration error" in str(err)
    assert "invalid header budget" in str(err)
    assert err.detail == "invalid header budget"


def test_config_error_message_has_fix_hint():
    err = ConfigError("jitter_ms_min cannot exceed jitter_ms_max")
    assert str(err).startswith(
        "stealth profile configuration error: jitter_ms_min cannot exceed jitter_ms_max."
    )
    assert "header_budget >= 1" in str(err)


def test_internal_error_message():
    err = InternalError("no headers generated")
    assert str(err).startswith("stealth policy error: no headers generated.")
    assert err.detail == "no headers generated"


def test_errors_share_base_class():
    config_err = ConfigError("bad")
    internal_err = InternalError("User-Agent not generated")
    assert issubclass(ConfigError, StealthError)
    assert issubclass(InternalError, StealthError)
    assert config_err.detail == "bad"
    assert internal_err.detail == "User-Agent not generated"
    assert str(internal_err).startswith("stealth policy error: User-Agent not generated.")


def test_config_error_is_value_error():
    err = ConfigError("header_budget must be >= 1")
    assert issubclass(ConfigError, ValueError)
    assert "header_budget must be >= 1" in str(err)
    assert err.detail == "header_budget must be >= 1"