import pytest

from extstats.config import Settings
from extstats.errors import ExtStatsError


def test_defaults():
    s = Settings.from_env({})
    assert s.top_count == 500
    assert s.pause is True
    assert s.use_delims is False
    assert s.debug is False
    assert s.log_level == "WARNING"
    assert s.tab_size == 3


def test_environment_overrides():
    s = Settings.from_env({
        "EXTSTATS_TOP": "25",
        "EXTSTATS_NO_PAUSE": "true",
        "EXTSTATS_DELIMS": "1",
        "EXTSTATS_DEBUG": "yes",
        "EXTSTATS_LOG_LEVEL": "debug",
    })
    assert (s.top_count, s.pause, s.use_delims, s.debug, s.log_level) == (25, False, True, True, "DEBUG")


def test_keyword_overrides_win():
    s = Settings.from_env({}, targets=["/x"], walk=True)
    assert s.targets == ["/x"]
    assert s.walk is True


@pytest.mark.parametrize(
    "env",
    [
        {"EXTSTATS_TOP": "0"},
        {"EXTSTATS_TOP": "ten"},
        {"EXTSTATS_NO_PAUSE": "maybe"},
        {"EXTSTATS_LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_values_raise(env):
    with pytest.raises(ExtStatsError):
        Settings.from_env(env)
