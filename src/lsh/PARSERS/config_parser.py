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
Loading of the harness configuration from YAML and .env files.
"""
import os
from typing import Dict, Optional

import yaml
from dotenv import dotenv_values
from pydantic import ValidationError

from ..exceptions import ConfigError
from ..MODELS.harness_config import HarnessConfig
from ..UTILS.string_interpolation import expand_values

DEFAULT_CONFIG_FILE = "harness.yml"


class ConfigParser:
    """
    Parser for harness.yml files.

    Values may reference environment variables; the process environment is
    merged with an optional .env file before interpolation.
    """
    def __init__(self, env_file: Optional[str] = None, context: Optional[Dict[str, str]] = None):
        """
        :param env_file: Optional .env file whose values override the environment.
        :param context: Explicit interpolation context, replaces os.environ.
        """
        self.context = dict(os.environ) if context is None else dict(context)
        if env_file:
            if not os.path.isfile(env_file):
                raise ConfigError(f"Environment file not found: {env_file}")
            self.context.update(
                {k: v for k, v in dotenv_values(env_file).items() if v is not None}
            )

    def load(self, config_path: Optional[str] = None) -> HarnessConfig:
        """
        Loads the configuration.

        :param config_path: Path to a YAML file. When omitted, harness.yml in the
                            working directory is used if present, defaults otherwise.
        :return: Configuration with relative paths resolved.
        """
        if config_path is None:
            if not os.path.isfile(DEFAULT_CONFIG_FILE):
                return HarnessConfig().resolve_paths(os.getcwd())
            config_path = DEFAULT_CONFIG_FILE

        try:
            with open(config_path, 'r') as f:
                content = f.read()
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e

        base_dir = os.path.dirname(os.path.abspath(config_path))
        return self.parse_from_string(content).resolve_paths(base_dir)

    def parse_from_string(self, content: str) -> HarnessConfig:
        """
        Parses configuration from YAML text without resolving paths.

        :param content: YAML content.
        :return: The parsed configuration.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")
        data = expand_values(data, self.context)

        try:
            return HarnessConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(str(e)) from e
