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
Consumers receiving the output stream of a container.
"""
import logging
import threading
from typing import List, Optional

from ..UTILS.ansi import strip_ansi


class LogConsumer:
    """
    Receives raw output chunks from a container as they are produced.
    """
    def accept(self, chunk: bytes) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Called once the output stream has ended."""


class ToStringConsumer(LogConsumer):
    """
    Collects all output in memory.
    """
    def __init__(self, remove_ansi_codes: bool = True):
        """
        :param remove_ansi_codes: Strip escape sequences from the collected text.
        """
        self.remove_ansi_codes = remove_ansi_codes
        self._chunks: List[bytes] = []
        self._lock = threading.Lock()

    def with_remove_ansi_codes(self, remove: bool) -> "ToStringConsumer":
        self.remove_ansi_codes = remove
        return self

    def accept(self, chunk: bytes) -> None:
        with self._lock:
            self._chunks.append(chunk)

    def to_utf8_string(self) -> str:
        """
        Returns everything collected so far decoded as UTF-8.
        """
        with self._lock:
            data = b"".join(self._chunks)
        text = data.decode("utf-8", errors="replace")
        if self.remove_ansi_codes:
            return strip_ansi(text)
        return text


class LoggerConsumer(LogConsumer):
    """
    Forwards output to a logger, one record per line.
    """
    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO, prefix: str = ""):
        """
        :param logger: Target logger, defaults to the "docker" logger.
        :param level: Level of the emitted records.
        :param prefix: Text prepended to every line, e.g. the container name.
        """
        self.logger = logger or logging.getLogger("docker")
        self.level = level
        self.prefix = prefix
        self._pending = b""

    def accept(self, chunk: bytes) -> None:
        data = self._pending + chunk
        *lines, self._pending = data.split(b"\n")
        for line in lines:
            self._emit(line)

    def close(self) -> None:
        if self._pending:
            self._emit(self._pending)
            self._pending = b""

    def _emit(self, line: bytes) -> None:
        text = line.decode("utf-8", errors="replace").rstrip("\r")
        self.logger.log(self.level, "%s%s", self.prefix, text)
