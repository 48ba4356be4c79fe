import pytest

from toolhub.config import DEFAULT_AI_API_URL, ConfigError, load_settings


def test_defaults_from_empty_env():
    s = load_settings({})
    assert s.port == 3000
    assert str(s.ai_api_url) == DEFAULT_AI_API_URL
    assert s.ai_api_key == ""
    assert s.ai_enabled is False


def test_reads_and_coerces_env():
    s = load_settings(
        {
            "PORT": "8080",
            "CLAUDE_API_KEY": "sk-test",
            "CLAUDE_API_URL": "http://localhost:9000/v1/messages",
            "AI_TIMEOUT_SECONDS": "2.5",
        }
    )
    assert s.port == 8080
    assert s.ai_enabled is True
    assert str(s.ai_api_url) == "http://localhost:9000/v1/messages"
    assert s.ai_timeout_s == 2.5


def test_empty_values_fall_back_to_defaults():
    s = load_settings({"PORT": "", "CLAUDE_API_URL": ""})
    assert s.port == 3000
    assert str(s.ai_api_url) == DEFAULT_AI_API_URL


def test_whitespace_key_does_not_enable_ai():
    assert load_settings({"CLAUDE_API_KEY": "   "}).ai_enabled is False


@pytest.mark.parametrize(
    "env, var",
    [
        ({"PORT": "not-a-port"}, "PORT"),
        ({"PORT": "70000"}, "PORT"),
        ({"CLAUDE_API_URL": "not a url"}, "CLAUDE_API_URL"),
        ({"AI_TIMEOUT_SECONDS": "0"}, "AI_TIMEOUT_SECONDS"),
    ],
)
def test_invalid_values_fail_fast(env, var):
    with pytest.raises(ConfigError) as exc:
        load_settings(env)
    assert var in str(exc.value)


def test_settings_are_immutable():
    s = load_settings({})
    with pytest.raises(Exception):
        s.port = 1


def test_log_level_is_case_insensitive():
    assert load_settings({"LOG_LEVEL": "debug"}).log_level == "DEBUG"


def test_unknown_log_level_fails_fast():
    with pytest.raises(ConfigError) as exc:
        load_settings({"LOG_LEVEL": "LOUD"})
    assert "LOG_LEVEL" in str(exc.value)
