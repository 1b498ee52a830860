from __future__ import annotations

from datetime import date

import pytest

from grephuman.config import DEFAULT_CONFIG, _deep_merge_dict, cutoff_from, load_config
from grephuman.errors import ConfigError, GrepHumanError


def test_missing_pyproject_gives_defaults(tmp_path):
    config = load_config(tmp_path / "pyproject.toml")
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG
    config["settings"]["enabled"] = False
    assert DEFAULT_CONFIG["settings"]["enabled"] is True


def test_pyproject_section_is_merged(tmp_path):
    pytest.importorskip("tomli")
    path = tmp_path / "pyproject.toml"
    path.write_text(
        "[tool.grephuman]\n"
        'cutoff_date = "2023-03-14"\n'
        "debounce_seconds = 0.5\n"
        "[tool.grephuman.settings]\n"
        "enabled = false\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config["cutoff_date"] == "2023-03-14"
    assert config["debounce_seconds"] == 0.5
    assert config["settings"] == {"enabled": False, "directory": "os-default"}
    assert config["result_selector"] == DEFAULT_CONFIG["result_selector"]


def test_native_toml_date(tmp_path):
    pytest.importorskip("tomli")
    path = tmp_path / "pyproject.toml"
    path.write_text("[tool.grephuman]\ncutoff_date = 2023-03-14\n", encoding="utf-8")
    assert cutoff_from(load_config(path)) == date(2023, 3, 14)


def test_broken_pyproject_falls_back(tmp_path):
    path = tmp_path / "pyproject.toml"
    path.write_text("[tool.grephuman\n", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_deep_merge():
    base = {"a": {"b": 1, "c": 2}, "d": 3}
    assert _deep_merge_dict(base, {"a": {"c": 5}, "e": 6}) == {
        "a": {"b": 1, "c": 5},
        "d": 3,
        "e": 6,
    }


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2022-11-30", date(2022, 11, 30)),
        (date(2021, 1, 1), date(2021, 1, 1)),
    ],
)
def test_cutoff_from(raw, expected):
    assert cutoff_from({"cutoff_date": raw}) == expected


def test_cutoff_default():
    assert cutoff_from({}) == date(2022, 11, 30)


@pytest.mark.parametrize("raw", ["30/11/2022", "soon", 2022])
def test_cutoff_invalid(raw):
    with pytest.raises(ConfigError) as info:
        cutoff_from({"cutoff_date": raw})
    assert isinstance(info.value, GrepHumanError)


def test_override_does_not_leak_into_defaults(tmp_path):
    pytest.importorskip("tomli")
    path = tmp_path / "pyproject.toml"
    path.write_text(
        '[tool.grephuman]\nsearch_hosts = ["bing."]\n'
        '[tool.grephuman.settings]\ndirectory = "/tmp/elsewhere"\n',
        encoding="utf-8",
    )
    config = load_config(path)
    assert config["search_hosts"] == ["bing."]
    assert config["settings"] == {"enabled": True, "directory": "/tmp/elsewhere"}
    assert DEFAULT_CONFIG["search_hosts"] == ["google."]
    assert DEFAULT_CONFIG["settings"]["directory"] == "os-default"
