"""
    Tasks running module.
"""
import click
from click.exceptions import Exit

from apkbuild import DEFAULT_TASK
from apkbuild._internals import pass_state
from apkbuild._utils import ExitError
from apkbuild.conf import ConfigError
from apkbuild.context import BuildContext
from apkbuild.graph import GraphError
from apkbuild.pipeline import build_pipeline
from apkbuild.runner import TaskRunner
from apkbuild.tasks import print_execution_order


@click.command()
@click.option("--dry-run", is_flag=True, help="Show the tasks that would run, in order, without running them.")
@click.argument("tasks", nargs=-1)
@pass_state
def run(state, dry_run, tasks):
    """ Perform specified task(s) and all of its dependencies.

    When no task is given, the default task (assemble) is run.
    """
    graph = build_pipeline()
    tasks = tasks or (DEFAULT_TASK,)

    # Unknown tasks and malformed graphs are reported before anything runs
    try:
        order = graph.execution_order(tasks)
    except GraphError as exc:
        raise ExitError(1, str(exc))

    if dry_run:
        print_execution_order(order)
        return

    try:
        context = BuildContext.from_project(project_dir=state.project_dir,
                                            overrides=state.overrides,
                                            device_args=state.device_args)
    except ConfigError as exc:
        raise ExitError(1, str(exc))

    state.project_name = context.project_name

    report = TaskRunner(context=context).run(graph, tasks)
    if not report.succeeded:
        raise Exit(report.exit_code)
