"""
Runs the bundled launch scripts in real containers for every configured OS.

Needs a Docker daemon and the prebuilt application jar; enable with
LSH_INTEGRATION=1.
"""
import os

import docker
import pytest
from docker.errors import DockerException

from lsh.MANAGERS.launch_harness import LaunchScriptHarness
from lsh.PARSERS.config_parser import ConfigParser
from lsh.UTILS.ansi import AnsiColor, assert_colored, assert_launched
from lsh.UTILS.parameters import all_operating_systems, parameters

ROOT = os.path.join(os.path.dirname(__file__), "..", "..")
CONFIG = ConfigParser().load(os.path.join(ROOT, "harness.yml"))


def _docker_available() -> bool:
    try:
        docker.from_env().ping()
        return True
    except DockerException:
        return False


pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.environ.get("LSH_INTEGRATION") != "1" or not _docker_available(),
        reason="set LSH_INTEGRATION=1 with a running Docker daemon",
    ),
]


@pytest.fixture
def harness():
    return LaunchScriptHarness("launch", CONFIG)


@pytest.mark.parametrize("os_name, version", parameters(all_operating_systems, CONFIG.conf_root))
def test_launch(harness, os_name, version):
    output = harness.do_launch(os_name, version, "test-launch.sh")
    assert_colored(output, AnsiColor.GREEN, "Started")


@pytest.mark.parametrize("os_name, version", parameters(all_operating_systems, CONFIG.conf_root))
def test_launch_without_application(harness, os_name, version):
    output = harness.do_test(os_name, version, "test-launch-missing-jar.sh")
    assert_colored(output, AnsiColor.RED, "Failed to start")
    with pytest.raises(AssertionError):
        assert_launched(output)
