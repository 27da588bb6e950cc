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
Expansion of ${VAR} references in parsed configuration values.
"""
import re
from typing import Any, Dict

from ..exceptions import ConfigError

# ${NAME}, ${NAME:-fallback} or ${NAME:+replacement}
_REFERENCE = re.compile(r'\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<op>[-+])(?P<word>[^}]*))?\}')


def expand(value: str, variables: Dict[str, str], where: str = "") -> str:
    """
    Expands the references in a single string.

    An empty variable counts as unset for the fallback and replacement forms;
    a bare ${NAME} must be defined.

    :param value: String possibly containing references.
    :param variables: Known variables.
    :param where: Location of the value, used in error messages.
    :raises ConfigError: If a bare reference names an undefined variable.
    """
    def substitute(match):
        current = variables.get(match.group('name'))
        op = match.group('op')
        if op == '-':
            return current or match.group('word')
        if op == '+':
            return match.group('word') if current else ''
        if current is None:
            location = f" (in {where})" if where else ""
            raise ConfigError(f"Variable {match.group('name')} is not set{location}")
        return current

    return _REFERENCE.sub(substitute, value)


def expand_values(data: Any, variables: Dict[str, str], where: str = "") -> Any:
    """
    Returns a copy of parsed YAML data with every string value expanded.
    Mapping keys and non-string scalars are left as they are.
    """
    if isinstance(data, dict):
        return {
            key: expand_values(item, variables, f"{where}.{key}" if where else str(key))
            for key, item in data.items()
        }
    if isinstance(data, list):
        return [
            expand_values(item, variables, f"{where}[{index}]")
            for index, item in enumerate(data)
        ]
    if isinstance(data, str):
        return expand(data, variables, where)
    return data
