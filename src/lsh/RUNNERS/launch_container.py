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
A one-shot container running a launch script, with its output streamed to
log consumers.
"""
import io
import logging
import os
import tarfile
import threading
from typing import List, Optional

import docker
from docker.errors import APIError, NotFound

from ..BUILDERS.image_builder import ImageBuilder
from ..MANAGERS.log_consumers import LogConsumer
from ..MODELS.container_descriptor import ContainerDescriptor, FileCopy
from .startup_check import OneShotStartupCheck, StartupState

logger = logging.getLogger(__name__)


class LaunchScriptContainer:
    """
    Builds the descriptor's image, copies the fixtures in, runs the command
    and waits for the container to exit.

    Use as a context manager so the container is always removed.
    """

    def __init__(self,
                 descriptor: ContainerDescriptor,
                 client: Optional[docker.DockerClient] = None,
                 startup_check: Optional[OneShotStartupCheck] = None):
        """
        :param descriptor: What to build and run.
        :param client: Docker client, defaults to docker.from_env().
        :param startup_check: Defaults to a one-shot check using the descriptor's timeout.
        """
        self.descriptor = descriptor
        self.client = client or docker.from_env()
        self.startup_check = startup_check or OneShotStartupCheck(
            descriptor.startup_timeout, descriptor.poll_interval
        )
        self.builder = ImageBuilder(self.client)
        self.consumers: List[LogConsumer] = []
        self.container = None
        self._follower: Optional[threading.Thread] = None

    def with_log_consumer(self, consumer: LogConsumer) -> "LaunchScriptContainer":
        self.consumers.append(consumer)
        return self

    def start(self) -> StartupState:
        """
        Builds the image, creates and starts the container, then blocks until
        the startup check completes.

        :return: The startup state, SUCCESSFUL or FAILED.
        :raises StartupTimeoutError: If the container does not exit in time.
        """
        self.builder.build(self.descriptor)
        self.container = self.client.containers.create(
            self.descriptor.image_name,
            command=self.descriptor.command,
        )
        for copy in self.descriptor.copies:
            self._copy_to_container(copy)

        logger.info("Starting container %s (%s)", self.container.name, self.descriptor.image_name)
        self.container.start()

        self._follower = threading.Thread(
            target=self._follow_output,
            name=f"log-follower-{self.container.name}",
            daemon=True,
        )
        self._follower.start()

        state = self.startup_check.wait_until_finished(self.container)
        if state is StartupState.FAILED:
            logger.warning("Container %s exited with code %s", self.container.name, self.exit_code)
        return state

    def is_running(self) -> bool:
        """
        Checks whether the container is currently running.
        """
        if self.container is None:
            return False
        try:
            self.container.reload()
        except NotFound:
            return False
        return self.container.status in ("running", "restarting")

    @property
    def exit_code(self) -> Optional[int]:
        if self.container is None:
            return None
        return self.container.attrs.get("State", {}).get("ExitCode")

    def close(self, timeout: float = 10.0) -> None:
        """
        Waits for the output stream to drain and removes the container.

        :param timeout: Seconds to wait for the output stream.
        """
        if self._follower is not None:
            self._follower.join(timeout=timeout)
            self._follower = None
        if self.container is not None:
            try:
                self.container.remove(force=True)
            except NotFound:
                pass
            self.container = None

    def __enter__(self) -> "LaunchScriptContainer":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def _copy_to_container(self, copy: FileCopy) -> None:
        """
        Copies a host file into the created container as root-owned, mode 0644.
        """
        target_dir, target_name = os.path.split(copy.target)

        def owned_by_root(info: tarfile.TarInfo) -> tarfile.TarInfo:
            info.uid = info.gid = 0
            info.uname = info.gname = "root"
            info.mode = 0o644
            return info

        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w") as tar:
            tar.add(copy.source, arcname=target_name, filter=owned_by_root)
        logger.debug("Copying %s to %s", copy.source, copy.target)
        self.container.put_archive(target_dir or "/", buffer.getvalue())

    def _follow_output(self) -> None:
        """
        Streams combined stdout/stderr into every consumer until the container exits.
        """
        container = self.container
        try:
            for chunk in container.logs(stream=True, follow=True, stdout=True, stderr=True):
                for consumer in self.consumers:
                    consumer.accept(chunk)
        except APIError as e:
            logger.warning("Output stream of %s interrupted: %s", container.name, e)
        finally:
            for consumer in self.consumers:
                consumer.close()
