"""
    Tasks execution.
"""
from rich.markup import escape

from apkbuild.command import ExternalCommand
from apkbuild.command import ExternalCommandError
from apkbuild.logger import get_tasks_logger
from apkbuild.logger import raw_logger
from apkbuild.task import TaskStatus


class TaskExecutionError(RuntimeError):
    """ A task's action failed. Carries the task name and, for external tools, the command line, exit code and
    captured error output.
    """

    def __init__(self, task_name, cause):
        self.task_name = task_name
        self.cause = cause

        if isinstance(cause, ExternalCommandError):
            self.command = cause.command
            self.exit_code = cause.exit_code
            self.stderr = cause.stderr
        else:
            self.command = None
            self.exit_code = None
            self.stderr = ""

        super().__init__(f"Task `{task_name}` failed: {cause}")


class RunReport:
    """ Outcome of a run: the status each task ended up with, in execution order, and the first failure found. """

    def __init__(self, statuses, errors):
        self.statuses = statuses
        self.errors = errors

    @property
    def failure(self):
        return self.errors[0] if self.errors else None

    @property
    def succeeded(self):
        return not self.errors

    @property
    def exit_code(self):
        """ 0 for a successful run, the exit code of the failing external command when there is one, 1 otherwise.
        A command killed by signal N gives 128 + N, the way shells report it.
        """
        if self.succeeded:
            return 0

        exit_code = self.failure.exit_code
        if exit_code is not None and exit_code < 0:
            return 128 - exit_code

        return exit_code or 1

    def tasks_with(self, status):
        return [name for name, task_status in self.statuses.items() if task_status == status]


class TaskRunner:
    """ Runs tasks of a graph in dependency order, one at a time, on the calling thread. """

    def __init__(self, context=None, logger=None):
        """
        Args:
            context (BuildContext, optional): Value handed to every callable action.
            logger (logging.Logger, optional): Logger for task progress. Defaults to the tasks logger.
        """
        self.context = context
        self._logger = logger

    @property
    def logger(self):
        if self._logger is None:
            self._logger = get_tasks_logger(project=getattr(self.context, "project_name", None))
        return self._logger

    def run(self, graph, start_tasks):
        """ Run the given tasks and all of their dependencies.
        When a task fails, every task depending on it is skipped; tasks in independent branches still run.
        Nothing that already succeeded is undone.

        Args:
            graph (TaskGraph): Graph holding the tasks.
            start_tasks (iterable(str)): Names of the tasks to run.

        Raises:
            GraphError: When a task is unknown or the graph holds a cycle. Raised before anything runs.

        Returns:
            RunReport: Final status of every task run and the failures found.
        """
        order = graph.execution_order(start_tasks)

        for name in order:
            graph[name].reset()

        errors = []
        for name in order:
            task = graph[name]

            if task.status == TaskStatus.SKIPPED:
                self.logger.info(f"[bold yellow]⤳[/bold yellow] Skipping task [bold italic]{name}[/bold italic]")
                continue

            error = self._run_task(task)
            if error is None:
                continue

            errors.append(error)
            for dependent in graph.dependents(name):
                if dependent in order and graph[dependent].status == TaskStatus.PENDING:
                    graph[dependent].status = TaskStatus.SKIPPED

        if errors:
            self.logger.critical("[red]✘[/red] [bold on red]Aborting build[/bold on red]")

        return RunReport(statuses={name: graph[name].status for name in order}, errors=errors)

    def _run_task(self, task):
        """ Run a single task, updating its status. Returns the failure, if any. """
        task.status = TaskStatus.RUNNING
        self.logger.info(f"[bold yellow]➜[/bold yellow] Starting task [bold italic]{task.name}[/bold italic]")

        try:
            self._execute(task.action)

        except Exception as exc:
            task.status = TaskStatus.FAILED
            error = TaskExecutionError(task_name=task.name, cause=exc)

            self.logger.error(f"[bold red]![/bold red] Error in task [bold italic]{task.name}[/bold italic]: "
                              f"{escape(str(exc))}")
            if error.stderr:
                raw_logger.error(error.stderr.rstrip())

            return error

        task.status = TaskStatus.SUCCEEDED
        self.logger.info(f"[green]✔[/green] Completed task [bold italic]{task.name}[/bold italic]")
        return None

    def _execute(self, action):
        if action is None:
            return
        if isinstance(action, ExternalCommand):
            action.execute()
        else:
            action(self.context)
