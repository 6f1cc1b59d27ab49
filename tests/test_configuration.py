# SPDX-License-Identifier: MIT

import pytest

from timbers.configuration import (
    CONFIG_ENV_VAR,
    ensure_configuration_file,
    get_default_configuration,
    load_configuration,
    resolve_config_path,
)
from timbers.errors import UserError


def test_missing_file_gives_defaults(tmp_path):
    assert load_configuration(tmp_path / "missing.yaml") == get_default_configuration()


def test_partial_file_is_filled_with_defaults(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("commit_entries: false\nledger_dir: .ledger\n")

    configuration = load_configuration(config_path)

    assert configuration["commit_entries"] is False
    assert configuration["ledger_dir"] == ".ledger"
    assert configuration["stage_entries"] is True
    assert configuration["group_strategy"] == "auto"


def test_invalid_group_strategy(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("group_strategy: weekly\n")

    with pytest.raises(UserError):
        load_configuration(config_path)


def test_non_mapping_file(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n")

    with pytest.raises(UserError):
        load_configuration(config_path)


def test_environment_override(tmp_path, monkeypatch):
    config_path = tmp_path / "elsewhere.yaml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_path))

    assert resolve_config_path() == config_path


def test_ensure_configuration_file(tmp_path):
    config_path = tmp_path / "nested" / "config.yaml"

    assert ensure_configuration_file(config_path) == config_path
    assert load_configuration(config_path) == get_default_configuration()
