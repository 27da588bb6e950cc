# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
ANSI color codes and assertions on captured console output.
"""
import re
from enum import Enum

ESC = "\x1b"

_ANSI_SEQUENCE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z]')


class AnsiColor(Enum):
    """
    Foreground colors understood by ANSI terminals.
    """
    DEFAULT = "39"
    BLACK = "30"
    RED = "31"
    GREEN = "32"
    YELLOW = "33"
    BLUE = "34"
    MAGENTA = "35"
    CYAN = "36"
    WHITE = "37"
    BRIGHT_BLACK = "90"
    BRIGHT_RED = "91"
    BRIGHT_GREEN = "92"
    BRIGHT_YELLOW = "93"
    BRIGHT_BLUE = "94"
    BRIGHT_MAGENTA = "95"
    BRIGHT_CYAN = "96"
    BRIGHT_WHITE = "97"

    def __str__(self) -> str:
        return self.value


def colored_string(color: AnsiColor, text: str) -> str:
    """
    Returns text wrapped in the escape sequence a script prints for color.
    """
    return f"{ESC}[0;{color}m{text}{ESC}[0m"


def strip_ansi(text: str) -> str:
    """Removes ANSI escape sequences from text."""
    return _ANSI_SEQUENCE.sub('', text)


def assert_colored(output: str, color: AnsiColor, text: str) -> None:
    """
    Asserts that output contains text in the given foreground color.

    :param output: Captured container output, escape sequences preserved.
    :param color: Expected color.
    :param text: Expected text.
    :raises AssertionError: If the colored text is absent.
    """
    expected = colored_string(color, text)
    if expected not in output:
        raise AssertionError(
            f"Expected output to contain {expected!r} ({color.name}) but was:\n{output}"
        )


def assert_launched(output: str) -> None:
    """
    Asserts that the launch script reported success.

    :raises AssertionError: If "Launched" does not appear in output.
    """
    if "Launched" not in output:
        raise AssertionError(f"Expected output to contain 'Launched' but was:\n{output}")
