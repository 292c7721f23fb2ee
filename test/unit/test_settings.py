from pathlib import Path

import pytest

from revwalk.models.settings import DEFAULT_ANCESTRY_SEARCH_LIMIT, Settings

ENVVARS = (
    "REVWALK_MAX_COUNT",
    "REVWALK_ANCESTRY_SEARCH_LIMIT",
    "REVWALK_TIME_LIMIT",
    "REVWALK_LOG_LEVEL",
    "REVWALK_LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for envvar in ENVVARS:
        monkeypatch.delenv(envvar, raising=False)


def test_defaults() -> None:
    settings = Settings.from_env()
    assert settings == Settings()
    assert settings.max_count is None
    assert settings.ancestry_search_limit == DEFAULT_ANCESTRY_SEARCH_LIMIT
    assert settings.time_limit is None
    assert settings.log_level == "WARNING"
    assert settings.log_to_file is None


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REVWALK_MAX_COUNT", "10")
    monkeypatch.setenv("REVWALK_ANCESTRY_SEARCH_LIMIT", "50")
    monkeypatch.setenv("REVWALK_TIME_LIMIT", "2.5")
    monkeypatch.setenv("REVWALK_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("REVWALK_LOG_FILE", "/tmp/revwalk.log")

    settings = Settings.from_env()

    assert settings.max_count == 10
    assert settings.ancestry_search_limit == 50
    assert settings.time_limit == 2.5
    assert settings.log_level == "DEBUG"
    assert settings.log_to_file == Path("/tmp/revwalk.log")


def test_kwargs_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REVWALK_MAX_COUNT", "10")
    settings = Settings.from_env(max_count=3, ancestry_search_limit=None)
    assert settings.max_count == 3
    assert settings.ancestry_search_limit is None


def test_empty_envvar_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REVWALK_MAX_COUNT", "")
    assert Settings.from_env().max_count is None
