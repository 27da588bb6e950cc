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
The launch script harness: assembles a container for an (os, version, script)
triple, runs it and returns what the script printed.
"""
import logging
import os
import time
from typing import Optional

import docker
from pydantic import ValidationError

from ..exceptions import (
    InvalidContainerError, MissingApplicationError, MissingDownloadUrlError, MissingFixtureError,
    UnknownArchitectureError,
)
from ..MODELS.architecture import Architecture
from ..MODELS.container_descriptor import ContainerDescriptor, FileCopy
from ..MODELS.harness_config import HarnessConfig
from ..RUNNERS.launch_container import LaunchScriptContainer
from ..UTILS.ansi import assert_launched
from ..UTILS.parameters import OsFilter, parameters
from ..UTILS.platform_info import os_arch
from .log_consumers import LoggerConsumer, ToStringConsumer

logger = logging.getLogger(__name__)

JAVA_DOWNLOAD_URL_ARG = "JAVA_DOWNLOAD_URL"
TEST_FUNCTIONS = "test-functions.sh"


def java_download_url(config: HarnessConfig) -> str:
    """
    Resolves the JDK download URL for the current architecture.

    :raises UnknownArchitectureError: If os.arch is not a supported architecture.
    :raises MissingDownloadUrlError: If the architecture has no URL configured.
    """
    arch_value = os_arch(config.os_arch)
    architecture = Architecture.current(arch_value)
    if architecture is None:
        raise UnknownArchitectureError(arch_value)
    url = config.java_download_urls.get(architecture)
    if url is None:
        raise MissingDownloadUrlError(architecture)
    return url


def find_application(config: HarnessConfig) -> str:
    """
    Returns the absolute path of the prebuilt application jar.

    :raises MissingApplicationError: If the jar has not been built.
    """
    if not os.path.isfile(config.application):
        raise MissingApplicationError(config.application)
    return os.path.abspath(config.application)


class LaunchScriptHarness:
    """
    Runs the launch scripts of one scripts directory against the configured
    operating system images.
    """

    def __init__(self,
                 scripts_dir: str,
                 config: Optional[HarnessConfig] = None,
                 client: Optional[docker.DockerClient] = None):
        """
        :param scripts_dir: Directory under the scripts root holding test-functions.sh
                            and the test scripts.
        :param config: Harness configuration, defaults apply when omitted.
        :param client: Docker client, created from the environment on first use.
        """
        self.scripts_dir = scripts_dir
        self.config = config or HarnessConfig()
        self.client = client

    def parameters(self, os_filter: OsFilter):
        return parameters(os_filter, self.config.conf_root)

    def descriptor(self, os_name: str, version: str, script: str) -> ContainerDescriptor:
        """
        Assembles the container for a test.

        The download URL is resolved first so an unsupported architecture fails
        before anything else is looked up.
        """
        download_url = java_download_url(self.config)
        application = find_application(self.config)

        build_context = os.path.join(self.config.conf_root, os_name, version)
        dockerfile = os.path.join(build_context, "Dockerfile")
        scripts = os.path.join(self.config.scripts_root, self.scripts_dir)
        test_functions = os.path.join(scripts, TEST_FUNCTIONS)
        test_script = os.path.join(scripts, script)
        for path in (dockerfile, test_functions, test_script):
            if not os.path.isfile(path):
                raise MissingFixtureError(path)

        try:
            return ContainerDescriptor(
                image_name=f"{self.config.image_prefix}/{os_name.lower()}-{version}",
                dockerfile=dockerfile,
                build_context=build_context,
                build_args={JAVA_DOWNLOAD_URL_ARG: download_url},
                copies=[
                    FileCopy(source=application, target="/app.jar"),
                    FileCopy(source=test_functions, target=f"/{TEST_FUNCTIONS}"),
                    FileCopy(source=test_script, target=f"/{script}"),
                ],
                command=[
                    "/bin/bash", "-c",
                    f"chown root:root *.sh && chown root:root *.jar && chmod +x {script} && ./{script}",
                ],
                startup_timeout=self.config.startup_timeout,
                poll_interval=self.config.poll_interval,
            )
        except ValidationError as e:
            raise InvalidContainerError(str(e)) from e

    def do_test(self, os_name: str, version: str, script: str) -> str:
        """
        Runs script in a container for the given OS version.

        :return: Everything the container printed, ANSI escape sequences included.
        """
        descriptor = self.descriptor(os_name, version, script)
        output = ToStringConsumer().with_remove_ansi_codes(False)
        if self.client is None:
            self.client = docker.from_env()

        with LaunchScriptContainer(descriptor, self.client) as container:
            container.with_log_consumer(output)
            container.with_log_consumer(LoggerConsumer(logging.getLogger("docker")))
            container.start()
            while container.is_running():
                time.sleep(descriptor.poll_interval)
        return output.to_utf8_string()

    def do_launch(self, os_name: str, version: str, script: str) -> str:
        """
        Runs script and asserts that it reported "Launched".
        """
        output = self.do_test(os_name, version, script)
        assert_launched(output)
        return output
