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
Builders turning a container descriptor's Dockerfile into a Docker image.
"""
import logging

from docker import DockerClient
from docker.models.images import Image

from ..MODELS.container_descriptor import ContainerDescriptor
from ..PARSERS.dockerfile_parser import DockerfileParser

logger = logging.getLogger(__name__)


class ImageBuilder:
    """
    Builds the image of a launch script container through the Docker engine.
    """
    def __init__(self, client: DockerClient):
        """
        :param client: Docker client used for the build.
        """
        self.client = client
        self.parser = DockerfileParser()

    def build(self, descriptor: ContainerDescriptor) -> Image:
        """
        Builds and tags the descriptor's image, passing its build arguments.

        :param descriptor: The container descriptor.
        :return: The built image.
        :raises docker.errors.BuildError: If the build fails.
        """
        summary = self.parser.parse(descriptor.dockerfile)
        for arg in descriptor.build_args:
            if not summary.declares(arg):
                logger.warning("%s does not declare ARG %s", descriptor.dockerfile, arg)

        logger.info("Building image %s from %s", descriptor.image_name, summary.base_image)
        image, output = self.client.images.build(
            path=descriptor.build_context,
            dockerfile=descriptor.dockerfile_name,
            tag=descriptor.image_name,
            buildargs=descriptor.build_args,
            rm=True,
        )
        for entry in output:
            line = entry.get("stream", "").rstrip()
            if line:
                logger.debug("[%s] %s", descriptor.image_name, line)
        return image
