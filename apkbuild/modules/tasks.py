"""
    Tasks listing module.
"""
import click

from apkbuild import DEFAULT_TASK
from apkbuild.pipeline import build_pipeline
from apkbuild.tasks import list_tasks


@click.command()
def tasks():
    """List the available tasks, their description and dependencies."""
    list_tasks(build_pipeline(), default_task=DEFAULT_TASK)
