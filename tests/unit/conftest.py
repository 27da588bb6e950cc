"""
Fixture layouts shared by the unit tests.
"""
import pytest

from lsh.MODELS.harness_config import HarnessConfig


@pytest.fixture
def workspace(tmp_path):
    """
    A conf/scripts/application layout with one Ubuntu version.
    """
    version_dir = tmp_path / "conf" / "Ubuntu" / "jammy-20230624"
    version_dir.mkdir(parents=True)
    (version_dir / "Dockerfile").write_text(
        "FROM ubuntu:jammy-20230624\nARG JAVA_DOWNLOAD_URL=https://example.com/jdk.tar.gz\n"
    )
    scripts = tmp_path / "scripts" / "launch"
    scripts.mkdir(parents=True)
    (scripts / "test-functions.sh").write_text("status_ok() { echo -e \"$1\"; }\n")
    (scripts / "test-launch.sh").write_text("source ./test-functions.sh\necho Launched\n")
    (tmp_path / "app.jar").write_bytes(b"PK\x03\x04")
    return tmp_path


@pytest.fixture
def config(workspace):
    return HarnessConfig(
        conf_root=str(workspace / "conf"),
        scripts_root=str(workspace / "scripts"),
        application=str(workspace / "app.jar"),
        os_arch="amd64",
        startup_timeout=5,
        poll_interval=0.01,
    )
