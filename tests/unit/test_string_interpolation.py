import pytest

from lsh.exceptions import ConfigError
from lsh.UTILS.string_interpolation import expand, expand_values


@pytest.mark.parametrize("template, expected", [
    ("${HOME}/app.jar", "/root/app.jar"),
    ("${EMPTY:-fallback}", "fallback"),
    ("${MISSING:-fallback}", "fallback"),
    ("${HOME:-fallback}", "/root"),
    ("${HOME:+set}", "set"),
    ("${EMPTY:+set}", ""),
    ("$HOME and ${", "$HOME and ${"),
])
def test_expand(template, expected):
    assert expand(template, {"HOME": "/root", "EMPTY": ""}) == expected


def test_unset_reference():
    with pytest.raises(ConfigError, match=r"Variable MISSING is not set \(in application\)"):
        expand("${MISSING}", {}, "application")


def test_expand_values_walks_strings_only():
    data = {
        "${KEY}": "${VALUE}",
        "nested": {"items": ["${VALUE}", 3, None, True]},
        "timeout": 300,
    }
    assert expand_values(data, {"KEY": "k", "VALUE": "v"}) == {
        "${KEY}": "v",
        "nested": {"items": ["v", 3, None, True]},
        "timeout": 300,
    }


def test_expand_values_reports_list_position():
    with pytest.raises(ConfigError, match=r"in nested\[1\]"):
        expand_values({"nested": ["ok", "${MISSING}"]}, {})
