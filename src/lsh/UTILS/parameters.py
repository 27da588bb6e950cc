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
Enumeration of (operating system, version) test parameters from the
configuration directory tree.
"""
import os
from typing import Callable, List, Tuple

OsFilter = Callable[[str], bool]


def parameters(os_filter: OsFilter, conf_root: str) -> List[Tuple[str, str]]:
    """
    Lists one (os, version) pair per version directory of every OS directory
    under conf_root accepted by os_filter.

    :param os_filter: Predicate receiving the path of each OS directory.
    :param conf_root: Directory laid out as <OS>/<version>/Dockerfile.
    :return: Pairs in directory listing order.
    :raises FileNotFoundError: If conf_root does not exist.
    """
    pairs = []
    for os_name in os.listdir(conf_root):
        os_dir = os.path.join(conf_root, os_name)
        if not os.path.isdir(os_dir) or not os_filter(os_dir):
            continue
        for version in os.listdir(os_dir):
            if os.path.isdir(os.path.join(os_dir, version)):
                pairs.append((os_name, version))
    return pairs


def all_operating_systems(os_dir: str) -> bool:
    return True


def os_named(*names: str) -> OsFilter:
    """
    Builds a filter accepting only the named OS directories.
    """
    wanted = set(names)
    return lambda os_dir: os.path.basename(os.path.normpath(os_dir)) in wanted
