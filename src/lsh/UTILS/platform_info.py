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
Utilities for reporting the host architecture the way the JVM does.
"""
import os
import platform
from typing import Optional

OS_ARCH_ENV = "LSH_OS_ARCH"

# platform.machine() spellings -> os.arch
_MACHINE_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}


def normalize_machine(machine: str) -> str:
    """
    Converts a platform.machine() value into its os.arch spelling.
    Unknown machines are lower-cased and returned unchanged.
    """
    lowered = machine.lower()
    return _MACHINE_ALIASES.get(lowered, lowered)


def os_arch(override: Optional[str] = None) -> str:
    """
    Returns the os.arch value for this host.

    :param override: Explicit value, typically from the harness configuration.
    :return: The override, the LSH_OS_ARCH environment variable, or the
             normalised machine name, in that order.
    """
    if override is not None:
        return override
    env_value = os.environ.get(OS_ARCH_ENV)
    if env_value is not None:
        return env_value
    return normalize_machine(platform.machine())
