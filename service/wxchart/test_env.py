import os
import pytest

from .env import DataSourceConfig


@pytest.fixture
def clear_env(monkeypatch):
    for k in ["WXCHART_DATA_URL", "WXCHART_DATA_DIR", "WXCHART_FETCH_TIMEOUT"]:
        monkeypatch.delenv(k, raising=False)


def test_from_env_defaults(clear_env):
    config = DataSourceConfig.from_env()
    assert config.base_url is None
    assert config.data_dir == "."
    assert config.timeout == 10


def test_from_env_url(monkeypatch, clear_env):
    monkeypatch.setenv("WXCHART_DATA_URL", "https://example.com/data/")
    monkeypatch.setenv("WXCHART_FETCH_TIMEOUT", "2.5")

    config = DataSourceConfig.from_env()

    assert config.timeout == 2.5
    assert config.location("wind-daily.csv") == "https://example.com/data/wind-daily.csv"
    assert config.describe() == "https://example.com/data/"


def test_empty_url_means_local_files(monkeypatch, clear_env, tmp_path):
    monkeypatch.setenv("WXCHART_DATA_URL", "")
    monkeypatch.setenv("WXCHART_DATA_DIR", str(tmp_path))

    config = DataSourceConfig.from_env()

    assert config.base_url is None
    assert config.location("weather-day.csv") == os.path.join(
        str(tmp_path), "weather-day.csv"
    )
