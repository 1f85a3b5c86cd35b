"""
    Task object definition.
"""
from enum import Enum


class TaskStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class Task:
    """ Named unit of build work. Holds the names of the tasks that must be completed before it and the
    action to perform. The status is only changed by the task runner.
    """
    def __init__(self, name, action=None, dependencies=None, description=""):
        """ Task object initialization

        Args:
            name (str): Unique name of the task within its graph.
            action (ExternalCommand | callable, optional): Work to perform. Callables receive the build context.
                Defaults to None, meaning the task only aggregates its dependencies.
            dependencies (list(str), optional): Names of the tasks this one depends on. Defaults to an empty list.
            description (str, optional): Human readable description. Defaults to the action's docstring, if any.
        """
        self.name = name
        self.action = action
        self.dependencies = [] if dependencies is None else list(dependencies)

        if not description and callable(action):
            description = (getattr(action, "__doc__", None) or "").strip()
        self.description = description

        self.status = TaskStatus.PENDING

    def reset(self):
        self.status = TaskStatus.PENDING

    def __repr__(self):
        return f"Task({self.name!r}, status={self.status.value})"
