import pytest

from gridmix.config import DEFAULT_CLEAN_SOURCES, Settings, load_settings, load_settings_from_yaml
from gridmix.exceptions import ConfigError

ENV_VARS = [
    "GRIDMIX_CONFIG",
    "GRIDMIX_API_URL",
    "GRIDMIX_TIMEOUT",
    "GRIDMIX_CLEAN_SOURCES",
    "GRIDMIX_INTERVALS_PER_HOUR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    settings = Settings()
    assert settings.clean_sources == DEFAULT_CLEAN_SOURCES
    assert settings.intervals_per_hour == 2
    assert settings.horizon_hours == 48
    assert settings.forecast_days == 3


def test_load_from_yaml(tmp_path):
    path = tmp_path / "gridmix.yaml"
    path.write_text(
        "gridmix:\n"
        "  api_base_url: https://example.test/\n"
        "  timeout: 5\n"
        "  intervals_per_hour: 4\n"
        "  clean_sources: [wind, solar]\n"
    )
    settings = load_settings_from_yaml(path)
    assert settings.api_base_url == "https://example.test"
    assert settings.timeout == 5.0
    assert settings.intervals_per_hour == 4
    assert settings.clean_sources == frozenset({"wind", "solar"})
    assert settings.horizon_hours == 48


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "gridmix.yaml"
    path.write_text("intervals_per_hour: 4\n")
    monkeypatch.setenv("GRIDMIX_INTERVALS_PER_HOUR", "1")
    monkeypatch.setenv("GRIDMIX_CLEAN_SOURCES", "wind, nuclear")

    settings = load_settings(path)

    assert settings.intervals_per_hour == 1
    assert settings.clean_sources == frozenset({"wind", "nuclear"})


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("horizon_hours: 24\n")
    monkeypatch.setenv("GRIDMIX_CONFIG", str(path))
    assert load_settings().horizon_hours == 24


@pytest.mark.parametrize(
    "content",
    [
        "intervals_per_hour: 0\n",
        "intervals_per_hour: 1.5\n",
        "intervals_per_hour: half\n",
        "timeout: -1\n",
        "clean_sources: []\n",
        "clean_sources: 42\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_yaml_values(tmp_path, content):
    path = tmp_path / "gridmix.yaml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_settings_from_yaml(path)


def test_missing_config_file(tmp_path, monkeypatch):
    monkeypatch.setenv("GRIDMIX_CONFIG", str(tmp_path / "missing.yaml"))
    with pytest.raises(ConfigError, match="Could not read"):
        load_settings()


def test_malformed_yaml(tmp_path):
    path = tmp_path / "gridmix.yaml"
    path.write_text("gridmix: [unclosed\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_settings_from_yaml(path)
