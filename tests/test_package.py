"""Tests for package metadata read by setup.py."""

import backup_monitor


def test_setup_metadata_present():
    assert backup_monitor.__version__ == "0.1.0"
    assert backup_monitor.__author__


def test_no_placeholder_project_url():
    assert not hasattr(backup_monitor, "__url__")
