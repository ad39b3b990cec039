"""Tests for configuration models and the YAML loader."""

import pytest
from pydantic import ValidationError

from future_pytest.config import ConfigLoader, FutureMatcherConfig


def test_defaults():
    cfg = FutureMatcherConfig()

    assert cfg.default_timeout == 5.0
    assert cfg.log_level == "INFO"
    assert cfg.log_evaluations is True


def test_log_level_is_normalized():
    assert FutureMatcherConfig(log_level="debug").log_level == "DEBUG"

    with pytest.raises(ValidationError):
        FutureMatcherConfig(log_level="chatty")


@pytest.mark.parametrize("timeout", [0, -3])
def test_timeout_must_be_positive(timeout):
    with pytest.raises(ValidationError):
        FutureMatcherConfig(default_timeout=timeout)


def test_load_explicit_file(tmp_path):
    (tmp_path / "custom.yaml").write_text("default_timeout: 0.75\nlog_level: warning\n")

    cfg = ConfigLoader.load("custom.yaml", tmp_path)

    assert cfg.default_timeout == 0.75
    assert cfg.log_level == "WARNING"


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader.load("absent.yaml", tmp_path)


def test_search_walks_up_to_rootdir(tmp_path):
    (tmp_path / "future_matchers.yml").write_text("log_evaluations: false\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    found = ConfigLoader.find_config_file(nested, tmp_path)

    assert found == (tmp_path / "future_matchers.yml").resolve()
    assert ConfigLoader.load(root_dir=tmp_path, start_dir=nested).log_evaluations is False


def test_nearest_file_wins(tmp_path):
    (tmp_path / "future_matchers.yaml").write_text("default_timeout: 1\n")
    nested = tmp_path / "pkg"
    nested.mkdir()
    (nested / ".future_matchers.yaml").write_text("default_timeout: 2\n")

    assert ConfigLoader.load(root_dir=tmp_path, start_dir=nested).default_timeout == 2


def test_file_above_rootdir_is_ignored(tmp_path):
    (tmp_path / "future_matchers.yaml").write_text("default_timeout: 42\n")
    project = tmp_path / "project"
    (project / "tests").mkdir(parents=True)

    assert ConfigLoader.find_config_file(project / "tests", project) is None
    assert ConfigLoader.load(root_dir=project, start_dir=project / "tests") == FutureMatcherConfig()


def test_start_outside_rootdir_only_searches_rootdir(tmp_path):
    project = tmp_path / "project"
    elsewhere = tmp_path / "elsewhere"
    project.mkdir()
    elsewhere.mkdir()
    (elsewhere / "future_matchers.yaml").write_text("default_timeout: 7\n")
    (project / "future_matchers.yaml").write_text("default_timeout: 3\n")

    assert ConfigLoader.load(root_dir=project, start_dir=elsewhere).default_timeout == 3


def test_non_mapping_file_is_rejected(tmp_path):
    (tmp_path / "future_matchers.yaml").write_text("- 1\n- 2\n")

    with pytest.raises(ValueError, match="expected a mapping"):
        ConfigLoader.load(root_dir=tmp_path)


def test_empty_file_gives_defaults(tmp_path):
    (tmp_path / "future_matchers.yaml").write_text("")

    assert ConfigLoader.load(root_dir=tmp_path) == FutureMatcherConfig()


def test_merge_prefers_explicitly_set_fields():
    base = FutureMatcherConfig(default_timeout=9, log_level="ERROR")
    override = FutureMatcherConfig(default_timeout=1)

    merged = ConfigLoader.merge_configs(base, override)

    assert merged.default_timeout == 1
    assert merged.log_level == "ERROR"
