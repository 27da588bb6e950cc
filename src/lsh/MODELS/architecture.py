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
CPU architectures supported by the container images.
"""
from enum import Enum
from typing import Optional


class Architecture(str, Enum):
    """
    Architecture of the machine running the containers.
    Values match the JVM's os.arch property.
    """

    AMD64 = "amd64"
    AARCH64 = "aarch64"

    @classmethod
    def current(cls, os_arch: Optional[str]) -> Optional["Architecture"]:
        """
        Returns the architecture for an os.arch value.

        :param os_arch: The os.arch value, may be None.
        :return: The matching architecture or None if it is not supported.
        """
        if os_arch is None:
            return None
        for arch in cls:
            if arch.value == os_arch:
                return arch
        return None


DEFAULT_JAVA_DOWNLOAD_URLS = {
    Architecture.AMD64: "https://download.bell-sw.com/java/8u382+6/bellsoft-jdk8u382+6-linux-amd64.tar.gz",
    Architecture.AARCH64: "https://download.bell-sw.com/java/8u382+6/bellsoft-jdk8u382+6-linux-aarch64.tar.gz",
}
