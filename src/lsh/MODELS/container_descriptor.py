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
Models describing a one-shot launch script container before it is handed
to the Docker engine.
"""
import os
from typing import Dict, List

from pydantic import BaseModel, field_validator, model_validator


class FileCopy(BaseModel):
    """
    A host file copied to an absolute path inside the container.
    """
    source: str
    target: str

    @field_validator("target")
    @classmethod
    def absolute_target(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Container path must be absolute: {value}")
        return value


class ContainerDescriptor(BaseModel):
    """
    Complete configuration of a launch script container: how to build its
    image, which files to copy in, what to run and how long to wait for it.
    """
    image_name: str
    dockerfile: str
    build_context: str
    build_args: Dict[str, str] = {}

    copies: List[FileCopy] = []
    command: List[str]

    startup_timeout: float = 300.0
    poll_interval: float = 0.1

    @field_validator("command")
    @classmethod
    def non_empty_command(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("Container command must not be empty")
        return value

    @field_validator("startup_timeout", "poll_interval")
    @classmethod
    def positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Timeouts and intervals must be positive")
        return value

    @model_validator(mode="after")
    def check_files_exist(self) -> "ContainerDescriptor":
        if not os.path.isfile(self.dockerfile):
            raise ValueError(f"Dockerfile not found: {self.dockerfile}")
        for copy in self.copies:
            if not os.path.isfile(copy.source):
                raise ValueError(f"File to copy not found: {copy.source}")
        return self

    @property
    def dockerfile_name(self) -> str:
        """The Dockerfile path relative to the build context."""
        return os.path.relpath(self.dockerfile, self.build_context)
