"""Settings file handling, socket detection and logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from simdock import settings_manager
from simdock.settings_manager import (
    DEFAULT_SETTINGS,
    SettingsManager,
    configure_logging,
    default_socket_path,
)


def test_defaults_without_file(tmp_path: Path) -> None:
    settings = SettingsManager(str(tmp_path / "settings.json"))

    assert settings.get_all() == DEFAULT_SETTINGS
    assert not (tmp_path / "settings.json").exists()


def test_user_values_override_defaults(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"docker_socket_path": "/tmp/d.sock"}), encoding="utf-8")

    settings = SettingsManager(str(path))

    assert settings.get("docker_socket_path") == "/tmp/d.sock"
    assert settings.get("log_level") == "INFO"


@pytest.mark.parametrize("content", ["{broken", "[1, 2]"])
def test_invalid_file_falls_back_to_defaults(tmp_path: Path, content: str) -> None:
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")

    assert SettingsManager(str(path)).get_all() == DEFAULT_SETTINGS


def test_set_saves_and_reloads(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    settings = SettingsManager(str(path))

    settings.set("log_level", "DEBUG")

    assert SettingsManager(str(path)).get("log_level") == "DEBUG"


def test_reset_to_defaults(tmp_path: Path) -> None:
    settings = SettingsManager(str(tmp_path / "settings.json"))
    settings.update({"log_level": "ERROR", "docker_socket_path": "/x.sock"}, save=False)

    settings.reset_to_defaults(save=False)

    assert settings.get_all() == DEFAULT_SETTINGS


def test_user_settings_path_honours_xdg(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(settings_manager.os, "name", "posix")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert SettingsManager.get_user_settings_path() == str(tmp_path / "simdock" / "settings.json")


def test_default_socket_path_from_docker_host(monkeypatch) -> None:
    monkeypatch.setenv("DOCKER_HOST", "unix:///run/docker.sock")

    assert default_socket_path() == "/run/docker.sock"


def test_default_socket_path_ignores_tcp_host(monkeypatch) -> None:
    monkeypatch.setenv("DOCKER_HOST", "tcp://10.0.0.1:2375")
    monkeypatch.setattr(settings_manager.platform, "system", lambda: "Linux")

    assert default_socket_path() == "/var/run/docker.sock"


def test_default_socket_path_macos(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("DOCKER_HOST", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(settings_manager.platform, "system", lambda: "Darwin")
    sock = tmp_path / ".docker" / "run" / "docker.sock"
    sock.parent.mkdir(parents=True)
    sock.touch()

    assert default_socket_path() == str(sock)


def test_configure_logging_sets_level() -> None:
    configure_logging("debug")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert root.handlers[0].formatter._fmt == settings_manager.LOG_FORMAT


def test_configure_logging_invalid_level() -> None:
    with pytest.raises(ValueError):
        configure_logging("LOUD")
