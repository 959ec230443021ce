"""
Tests for configuration loading and the command line entry point.
"""

from datetime import datetime
from unittest.mock import patch

import pytest
import pytz

from wod_accept import main as main_module
from wod_accept.config import Config
from wod_accept.utils.timezone import format_timestamp, to_utc


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("POLL_INTERVAL_MS", "FETCH_TIMEOUT", "PUSHOVER_API_URL"):
        monkeypatch.delenv(key, raising=False)


def test_defaults(tmp_path):
    config = Config(str(tmp_path), "token", "user")

    assert config.watch_dir == tmp_path.resolve()
    assert config.credentials.token == "token"
    assert config.credentials.user == "user"
    assert config.poll_interval == 0.1
    assert config.fetch_timeout is None
    assert config.pushover_api_url == "https://api.pushover.net/1/messages.json"


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("POLL_INTERVAL_MS", "250")
    monkeypatch.setenv("FETCH_TIMEOUT", "12.5")
    monkeypatch.setenv("PUSHOVER_API_URL", "https://pushover.example/1/messages.json")

    config = Config(str(tmp_path), "token", "user")

    assert config.poll_interval == 0.25
    assert config.fetch_timeout == 12.5
    assert config.pushover_api_url == "https://pushover.example/1/messages.json"


def test_credentials_are_immutable(tmp_path):
    config = Config(str(tmp_path), "token", "user")

    with pytest.raises(AttributeError):
        config.credentials.token = "other"


@pytest.mark.parametrize("env, message", [
    ({"POLL_INTERVAL_MS": "0"}, "POLL_INTERVAL_MS"),
    ({"POLL_INTERVAL_MS": "fast"}, "POLL_INTERVAL_MS"),
    ({"FETCH_TIMEOUT": "-1"}, "FETCH_TIMEOUT"),
    ({"FETCH_TIMEOUT": "soon"}, "FETCH_TIMEOUT"),
])
def test_invalid_settings(tmp_path, monkeypatch, env, message):
    for key, value in env.items():
        monkeypatch.setenv(key, value)

    with pytest.raises(ValueError, match=message):
        Config(str(tmp_path), "token", "user")


def test_missing_watch_dir(tmp_path):
    with pytest.raises(ValueError, match="does not exist"):
        Config(str(tmp_path / "nope"), "token", "user")


def test_watch_dir_must_be_directory(tmp_path):
    path = tmp_path / "file.eml"
    path.write_text("x")

    with pytest.raises(ValueError):
        Config(str(path), "token", "user")


def test_empty_credentials(tmp_path):
    with pytest.raises(ValueError, match="token"):
        Config(str(tmp_path), " ", "user")


def test_main_exits_on_bad_directory(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main_module.main([str(tmp_path / "nope"), "token", "user"])

    assert exc_info.value.code == 1


def test_main_requires_three_arguments():
    with pytest.raises(SystemExit) as exc_info:
        main_module.main(["only-one"])

    assert exc_info.value.code == 2


def test_main_starts_watcher(tmp_path):
    with patch.object(main_module.WodAcceptBot, "start") as start:
        main_module.main([str(tmp_path), "token", "user"])

    start.assert_called_once()


def test_main_exits_on_watcher_failure(tmp_path):
    with patch.object(main_module.DirectoryWatcher, "run_forever", side_effect=OSError("inotify")):
        with pytest.raises(SystemExit) as exc_info:
            main_module.main([str(tmp_path), "token", "user"])

    assert exc_info.value.code == 1


def test_bot_wires_pipeline_into_watcher(tmp_path):
    bot = main_module.WodAcceptBot(Config(str(tmp_path), "token", "user"))

    assert bot.watcher.handle_event == bot.pipeline.handle_event
    assert bot.watcher.poll_interval == 0.1
    assert bot.notifier.credentials.user == "user"


def test_timestamp_rendering():
    assert format_timestamp(datetime(2024, 10, 15, 18, 30)) == "2024-10-15 18:30:00 +0000 UTC"
    assert to_utc(datetime(2024, 10, 15, 18, 30)) == datetime(2024, 10, 15, 18, 30, tzinfo=pytz.UTC)
    amsterdam = pytz.timezone("Europe/Amsterdam").localize(datetime(2024, 10, 15, 20, 30))
    assert to_utc(amsterdam).hour == 18
