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
Errors raised by the launch script harness.
"""


class HarnessError(Exception):
    """Base class for all harness failures."""


class ConfigError(HarnessError):
    """Raised when the harness configuration cannot be loaded."""


class UnknownArchitectureError(HarnessError):
    """
    Raised when the current os.arch value does not map to a known architecture.
    """

    def __init__(self, os_arch):
        self.os_arch = os_arch
        super().__init__(
            f"Failed to find current architecture. Value of os.arch is: '{os_arch}'"
        )


class MissingDownloadUrlError(HarnessError):
    """
    Raised when a known architecture has no JDK download URL configured.
    """

    def __init__(self, architecture):
        self.architecture = architecture
        super().__init__(
            f"No JDK download URL for architecture {architecture.name} found"
        )


class MissingApplicationError(HarnessError):
    """Raised when the prebuilt application jar does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Could not find {path}. Have you built it?")


class StartupTimeoutError(HarnessError):
    """Raised when a one-shot container does not exit within its timeout."""

    def __init__(self, container_name: str, timeout: float):
        self.container_name = container_name
        self.timeout = timeout
        super().__init__(
            f"Container {container_name} did not finish within {timeout:g} seconds"
        )


class MissingFixtureError(HarnessError):
    """Raised when a Dockerfile or test script the container needs is missing."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Could not find {path}")


class InvalidContainerError(HarnessError):
    """Raised when the assembled container configuration fails validation."""
