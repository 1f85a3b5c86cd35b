"""
    Android application build orchestrator command-line tool.
"""

import click

from apkbuild import __version__
from apkbuild._internals import pass_state
from apkbuild.modules import run, tasks


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Increase output verbosity.")
@click.option(
    "--project-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Android project directory. Defaults to the closest directory holding an AndroidManifest.xml.",
)
@click.option("--sdk-dir", type=click.Path(file_okay=False), help="Android SDK location, overrides SDK_DIR.")
@click.option("-s", "--serial", help="Direct device commands to the device or emulator with the given serial number.")
@click.option("-e", "--emulator", is_flag=True, help="Direct device commands to the only running emulator.")
@click.option("-d", "--device", is_flag=True, help="Direct device commands to the only connected USB device.")
@click.version_option(version=__version__)
@pass_state
@click.pass_context
def apkbuild(context, state, verbose, project_dir, sdk_dir, serial, emulator, device):
    """Build, install and uninstall Android applications."""
    # --verbose | -v
    state.verbosity = verbose
    state.project_dir = project_dir

    if sdk_dir is not None:
        state.overrides["SDK_DIR"] = sdk_dir

    selected = [flag for flag, value in (("--serial", serial), ("--emulator", emulator), ("--device", device)) if value]
    if len(selected) > 1:
        raise click.UsageError(f"Options {', '.join(selected)} are mutually exclusive.")

    # Device selection is kept as separate arguments, never as a single string
    if serial:
        state.device_args = ("-s", serial)
    elif emulator:
        state.device_args = ("-e",)
    elif device:
        state.device_args = ("-d",)

    if context.invoked_subcommand is None:
        # apkbuild called with no subcommand
        click.echo(context.get_help())


# Add modules to apkbuild
apkbuild.add_command(run)
apkbuild.add_command(tasks)
