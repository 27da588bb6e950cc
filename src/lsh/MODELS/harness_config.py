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
Configuration for the launch script harness.
"""
import os
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .architecture import Architecture, DEFAULT_JAVA_DOWNLOAD_URLS

APPLICATION_NAME = "spring-boot-launch-script-tests-app"


def default_application_path(name: str = APPLICATION_NAME) -> str:
    """
    Location of the prebuilt application jar produced by the app build.
    """
    return "build/{0}/build/libs/{0}.jar".format(name)


class HarnessConfig(BaseModel):
    """
    Where the fixtures live, which application is launched and how the
    containers are built and awaited.
    """
    model_config = ConfigDict(extra="forbid")

    conf_root: str = os.path.join("tests", "resources", "conf")
    scripts_root: str = os.path.join("tests", "resources", "scripts")
    application: str = Field(default_factory=default_application_path)

    image_prefix: str = "spring-boot-launch-script"
    startup_timeout: float = 300.0
    poll_interval: float = 0.1

    java_download_urls: Dict[Architecture, str] = Field(
        default_factory=lambda: dict(DEFAULT_JAVA_DOWNLOAD_URLS)
    )
    os_arch: Optional[str] = None

    def resolve_paths(self, base_dir: str) -> "HarnessConfig":
        """
        Returns a copy with relative paths anchored at base_dir.

        :param base_dir: Directory the relative paths were written against.
        """
        def anchor(path: str) -> str:
            if os.path.isabs(path):
                return path
            return os.path.normpath(os.path.join(base_dir, path))

        return self.model_copy(update={
            "conf_root": anchor(self.conf_root),
            "scripts_root": anchor(self.scripts_root),
            "application": anchor(self.application),
        })
