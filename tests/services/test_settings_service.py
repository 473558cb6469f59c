import json
import logging

import pytest
from pydantic import ValidationError

from selo_project.src.services.settings_service import KernelSettings, SettingsService


def test_defaults(isolated_settings):
    svc = SettingsService()
    assert svc.path == isolated_settings
    assert svc.triangulation_snap_radius() == 0.001
    assert svc.buffer_join_style() == "mitre"
    assert svc.buffer_mitre_limit() == 10.0
    assert svc.buffer_quad_segs() == 8
    assert svc.log_level() == "INFO"


def test_is_singleton():
    assert SettingsService() is SettingsService()


def test_set_save_reload(isolated_settings):
    svc = SettingsService()
    svc.set("buffer_mitre_limit", 5.0)
    svc.set("buffer_join_style", "bevel")
    svc.save()
    assert json.loads(isolated_settings.read_text())["buffer_mitre_limit"] == 5.0

    SettingsService.reset_instance()
    reloaded = SettingsService()
    assert reloaded is not svc
    assert reloaded.buffer_mitre_limit() == 5.0
    assert reloaded.buffer_join_style() == "bevel"


def test_out_of_range_value_is_rejected():
    svc = SettingsService()
    with pytest.raises(ValidationError):
        svc.set("buffer_quad_segs", 0)
    with pytest.raises(ValidationError):
        svc.set("buffer_join_style", "zigzag")
    assert svc.buffer_quad_segs() == 8


def test_unknown_key():
    svc = SettingsService()
    with pytest.raises(KeyError):
        svc.set("last_scale", 2.0)
    assert svc.get("last_scale", "fallback") == "fallback"
    assert svc.get("buffer_quad_segs") == 8


def test_corrupt_file_falls_back_to_defaults(isolated_settings, caplog):
    isolated_settings.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        svc = SettingsService()
    assert svc.settings == KernelSettings()
    assert "Failed to load settings" in caplog.text


def test_invalid_stored_value_falls_back_to_defaults(isolated_settings):
    isolated_settings.write_text(json.dumps({"buffer_mitre_limit": -1}), encoding="utf-8")
    assert SettingsService().buffer_mitre_limit() == 10.0


def test_unknown_stored_keys_are_ignored(isolated_settings):
    isolated_settings.write_text(
        json.dumps({"triangulation_snap_radius": 0.5, "theme": "dark"}), encoding="utf-8",
    )
    assert SettingsService().triangulation_snap_radius() == 0.5


def test_reset_restores_defaults():
    svc = SettingsService()
    svc.set("log_level", "DEBUG")
    svc.reset()
    assert svc.log_level() == "INFO"
