"""
Unit tests for loading the harness configuration.
"""
import os

import pytest

from lsh.exceptions import ConfigError
from lsh.MODELS.architecture import Architecture, DEFAULT_JAVA_DOWNLOAD_URLS
from lsh.MODELS.harness_config import HarnessConfig, default_application_path
from lsh.PARSERS.config_parser import ConfigParser


class TestParseFromString:

    def test_empty_document_uses_defaults(self):
        config = ConfigParser(context={}).parse_from_string("")
        assert config == HarnessConfig()
        assert config.startup_timeout == 300
        assert config.poll_interval == 0.1
        assert config.java_download_urls == DEFAULT_JAVA_DOWNLOAD_URLS
        assert config.application == default_application_path()

    def test_interpolation(self):
        content = (
            "image_prefix: ${PREFIX}\n"
            "os_arch: ${ARCH:-amd64}\n"
            "application: ${APP:+custom.jar}\n"
        )
        config = ConfigParser(context={"PREFIX": "launch", "APP": "set"}).parse_from_string(content)
        assert config.image_prefix == "launch"
        assert config.os_arch == "amd64"
        assert config.application == "custom.jar"

    def test_unset_variable(self):
        with pytest.raises(ConfigError, match="PREFIX"):
            ConfigParser(context={}).parse_from_string("image_prefix: ${PREFIX}")

    def test_references_in_comments_are_ignored(self):
        content = "# override with ${LSH_UNSET_IN_COMMENT}\nimage_prefix: launch  # or ${ALSO_UNSET}\n"
        assert ConfigParser(context={}).parse_from_string(content).image_prefix == "launch"

    def test_unset_variable_names_its_key(self):
        content = "java_download_urls:\n  amd64: ${JDK_URL}\n"
        with pytest.raises(ConfigError, match=r"JDK_URL is not set \(in java_download_urls.amd64\)"):
            ConfigParser(context={}).parse_from_string(content)

    def test_expanded_numbers_are_validated(self):
        config = ConfigParser(context={"TIMEOUT": "60"}).parse_from_string("startup_timeout: ${TIMEOUT}\n")
        assert config.startup_timeout == 60

    def test_download_urls_keyed_by_os_arch(self):
        content = "java_download_urls:\n  aarch64: https://example.com/arm.tar.gz\n"
        config = ConfigParser(context={}).parse_from_string(content)
        assert config.java_download_urls == {Architecture.AARCH64: "https://example.com/arm.tar.gz"}

    @pytest.mark.parametrize("content", [
        "unknown_key: 1",
        "startup_timeout: soon",
        "- a\n- b",
        "key: [unclosed",
        "java_download_urls:\n  sparc: https://example.com",
    ])
    def test_invalid_documents(self, content):
        with pytest.raises(ConfigError):
            ConfigParser(context={}).parse_from_string(content)


class TestLoad:

    def test_relative_paths_follow_config_file(self, tmp_path):
        config_file = tmp_path / "harness.yml"
        config_file.write_text("conf_root: conf\napplication: /opt/app.jar\n")
        config = ConfigParser(context={}).load(str(config_file))
        assert config.conf_root == os.path.join(str(tmp_path), "conf")
        assert config.scripts_root == os.path.join(str(tmp_path), "tests", "resources", "scripts")
        assert config.application == "/opt/app.jar"

    def test_env_file_values(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("LSH_PREFIX=from-dotenv\n")
        config_file = tmp_path / "harness.yml"
        config_file.write_text("image_prefix: ${LSH_PREFIX}\n")
        parser = ConfigParser(env_file=str(env_file), context={"LSH_PREFIX": "from-environment"})
        assert parser.load(str(config_file)).image_prefix == "from-dotenv"

    def test_missing_env_file(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigParser(env_file=str(tmp_path / "missing.env"))

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigParser(context={}).load(str(tmp_path / "missing.yml"))

    def test_defaults_without_config_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = ConfigParser(context={}).load()
        assert config.conf_root == os.path.join(str(tmp_path), "tests", "resources", "conf")

    def test_default_config_file_is_picked_up(self, tmp_path, monkeypatch):
        (tmp_path / "harness.yml").write_text("image_prefix: local\n")
        monkeypatch.chdir(tmp_path)
        assert ConfigParser(context={}).load().image_prefix == "local"

    def test_repository_configuration(self):
        root = os.path.join(os.path.dirname(__file__), "..", "..")
        config = ConfigParser(context={}).load(os.path.join(root, "harness.yml"))
        assert os.path.isdir(config.conf_root)
        assert os.path.isdir(config.scripts_root)
        assert config.java_download_urls == DEFAULT_JAVA_DOWNLOAD_URLS
