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
Command Line Interface for LSH.
"""
import logging

import click
from docker.errors import DockerException

from ..exceptions import HarnessError
from ..MANAGERS.launch_harness import LaunchScriptHarness, java_download_url
from ..MODELS.architecture import Architecture
from ..PARSERS.config_parser import ConfigParser
from ..UTILS.ansi import assert_launched
from ..UTILS.parameters import all_operating_systems, os_named
from ..UTILS.platform_info import os_arch


@click.group()
@click.option('--config', '-c', 'config_path', default=None, help='Harness configuration file (default: harness.yml)')
@click.option('--env-file', default=None, help='.env file used for ${VAR} interpolation')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, env_file, verbose):
    """
    LSH - Launch Script Harness.

    Runs launch scripts inside per-OS Docker containers and checks their output.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s - %(message)s",
    )
    ctx.ensure_object(dict)
    try:
        ctx.obj['config'] = ConfigParser(env_file=env_file).load(config_path)
    except HarnessError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.pass_context
def arch(ctx):
    """Show the detected architecture and JDK download URL."""
    config = ctx.obj['config']
    value = os_arch(config.os_arch)
    architecture = Architecture.current(value)
    click.echo(f"os.arch:      {value}")
    click.echo(f"architecture: {architecture.name if architecture else '-'}")
    try:
        click.echo(f"download url: {java_download_url(config)}")
    except HarnessError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)


@cli.command()
@click.option('--os', 'os_names', multiple=True, help='Only list these operating systems')
@click.pass_context
def params(ctx, os_names):
    """List (os, version) test parameters."""
    config = ctx.obj['config']
    os_filter = os_named(*os_names) if os_names else all_operating_systems
    try:
        pairs = LaunchScriptHarness("", config).parameters(os_filter)
    except FileNotFoundError:
        click.echo(f"Error: {config.conf_root} not found.")
        ctx.exit(1)
    for os_name, version in pairs:
        click.echo(f"{os_name} {version}")


@cli.command()
@click.argument('os_name')
@click.argument('version')
@click.argument('script')
@click.option('--scripts-dir', '-s', required=True, help='Directory under the scripts root')
@click.option('--expect-launched/--no-expect-launched', default=True, help='Require "Launched" in the output')
@click.pass_context
def run(ctx, os_name, version, script, scripts_dir, expect_launched):
    """Run SCRIPT in the OS_NAME VERSION container and print its output."""
    harness = LaunchScriptHarness(scripts_dir, ctx.obj['config'])
    try:
        output = harness.do_test(os_name, version, script)
    except (HarnessError, DockerException) as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)

    click.echo(output, nl=False)
    if expect_launched:
        try:
            assert_launched(output)
        except AssertionError:
            click.echo("Error: script did not report 'Launched'.")
            ctx.exit(1)


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
