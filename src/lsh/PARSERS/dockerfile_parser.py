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
Parsers for the per-OS Dockerfiles, extracting the base image and build arguments.
"""
import re
from typing import Dict, List, Optional

from pydantic import BaseModel


class Instruction(BaseModel):
    """
    A single Dockerfile instruction.
    """
    instruction: str
    arguments: str


class DockerfileSummary(BaseModel):
    """
    What the harness needs to know about a Dockerfile before building it.
    """
    base_image: Optional[str] = None
    build_args: Dict[str, Optional[str]] = {}

    def declares(self, arg: str) -> bool:
        return arg in self.build_args


class DockerfileParser:
    """
    Parser for Dockerfile instructions.
    """
    def parse(self, dockerfile_path: str) -> DockerfileSummary:
        """
        Parses a Dockerfile from a file path.

        Args:
            dockerfile_path (str): Path to the Dockerfile.

        Returns:
            DockerfileSummary: Base image and declared build arguments.
        """
        with open(dockerfile_path, 'r') as f:
            content = f.read()
        return self.summarize(self.parse_from_string(content))

    def parse_from_string(self, content: str) -> List[Instruction]:
        """
        Splits Dockerfile content into instructions.

        Args:
            content (str): Content of the Dockerfile.

        Returns:
            List[Instruction]: Instructions in file order.
        """
        content = re.sub(r'^\s*#.*$', '', content, flags=re.MULTILINE)
        content = re.sub(r'\\[ \t]*\r?\n', ' ', content)

        pattern = re.compile(r'^[ \t]*([A-Za-z]+)[ \t]+(.*)$', re.MULTILINE)
        return [
            Instruction(instruction=m.group(1).upper(), arguments=m.group(2).strip())
            for m in pattern.finditer(content)
        ]

    def summarize(self, instructions: List[Instruction]) -> DockerfileSummary:
        """
        Collects the first FROM image and every ARG declaration.

        Args:
            instructions (List[Instruction]): Parsed instructions.

        Returns:
            DockerfileSummary: The summary.
        """
        summary = DockerfileSummary()
        for inst in instructions:
            if inst.instruction == "FROM" and summary.base_image is None:
                # FROM [--platform=...] image [AS name]
                parts = [p for p in inst.arguments.split() if not p.startswith("--")]
                if parts:
                    summary.base_image = parts[0]
            elif inst.instruction == "ARG":
                for declaration in inst.arguments.split():
                    if '=' in declaration:
                        name, default = declaration.split('=', 1)
                        summary.build_args[name] = default
                    else:
                        summary.build_args[declaration] = None
        return summary
