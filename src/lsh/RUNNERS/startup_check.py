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
Startup check for containers that run a single task and exit.
"""
import logging
import time
from enum import Enum

from tenacity import RetryError, Retrying, retry_if_result, stop_after_delay, wait_fixed

from ..exceptions import StartupTimeoutError

logger = logging.getLogger(__name__)

_ACTIVE_STATUSES = ("created", "running", "restarting")


class StartupState(str, Enum):
    """Outcome of a startup check."""

    NOT_YET_KNOWN = "not_yet_known"
    SUCCESSFUL = "successful"
    FAILED = "failed"


class OneShotStartupCheck:
    """
    Considers a container started once it has exited. A zero exit code is a
    success, anything else a failure; still running after the timeout is an error.
    """

    def __init__(self, timeout: float = 300.0, interval: float = 0.1, sleep=time.sleep):
        """
        :param timeout: Seconds to wait for the container to exit.
        :param interval: Seconds between state checks.
        :param sleep: Sleep function, replaceable in tests.
        """
        self.timeout = timeout
        self.interval = interval
        self.sleep = sleep

    def state(self, container) -> StartupState:
        """
        Reads the current state of a container.
        """
        container.reload()
        if container.status in _ACTIVE_STATUSES:
            return StartupState.NOT_YET_KNOWN
        exit_code = container.attrs.get("State", {}).get("ExitCode")
        if exit_code == 0:
            return StartupState.SUCCESSFUL
        return StartupState.FAILED

    def wait_until_finished(self, container) -> StartupState:
        """
        Polls the container until it exits.

        :param container: A started docker container.
        :return: SUCCESSFUL or FAILED.
        :raises StartupTimeoutError: If the container is still running after the timeout.
        """
        retryer = Retrying(
            stop=stop_after_delay(self.timeout),
            wait=wait_fixed(self.interval),
            retry=retry_if_result(lambda state: state is StartupState.NOT_YET_KNOWN),
            sleep=self.sleep,
        )
        try:
            state = retryer(self.state, container)
        except RetryError as e:
            raise StartupTimeoutError(container.name, self.timeout) from e
        logger.debug("Container %s finished: %s", container.name, state.value)
        return state
