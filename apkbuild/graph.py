"""
    Task dependency graph and execution ordering.
"""
from apkbuild.task import Task


class GraphError(RuntimeError):
    pass


class DuplicateTaskError(GraphError):
    pass


class UnknownDependencyError(GraphError):
    pass


class UnknownTaskError(GraphError):
    pass


class CycleError(GraphError):
    """ A dependency cycle was found. `cycle` holds the task names along the loop, first name repeated last. """

    def __init__(self, cycle):
        self.cycle = list(cycle)
        super().__init__(f"Dependency cycle detected: {' -> '.join(self.cycle)}.")


_UNVISITED, _IN_PROGRESS, _DONE = range(3)


class TaskGraph:
    """ Set of named tasks and the depends-on relation between them.
    Tasks are kept in registration order, which is used to break ties when ordering tasks for execution.
    """

    def __init__(self):
        self._tasks = {}

    def add_task(self, name, depends_on=(), action=None, description=""):
        """ Create and register a task.

        Args:
            name (str): Name of the task.
            depends_on (iterable(str), optional): Names of already registered tasks this task depends on.
            action (ExternalCommand | callable, optional): Work to perform when the task runs.
            description (str, optional): Human readable description of the task.

        Raises:
            DuplicateTaskError: When a task with the same name is already registered.
            UnknownDependencyError: When any dependency has not been registered yet.

        Returns:
            Task: The registered task.
        """
        return self.add(Task(name, action=action, dependencies=depends_on, description=description))

    def add(self, task):
        """ Register an already built task. Dependencies must be registered before their dependents. """
        if task.name in self._tasks:
            raise DuplicateTaskError(f"Task `{task.name}` is already defined.")

        unknown = [dependency for dependency in task.dependencies if dependency not in self._tasks]
        if unknown:
            raise UnknownDependencyError(f"Task `{task.name}` depends on undefined task(s) {', '.join(unknown)}.")

        self._tasks[task.name] = task
        return task

    def add_dependency(self, name, dependency):
        """ Make task `name` depend on task `dependency`.
        The graph is not modified if the new edge would close a cycle.

        Raises:
            UnknownDependencyError: When either task is not registered.
            CycleError: When `dependency` already depends, directly or not, on `name`.
        """
        for task_name in (name, dependency):
            if task_name not in self._tasks:
                raise UnknownDependencyError(f"Undefined task `{task_name}`.")

        task = self._tasks[name]
        if dependency in task.dependencies:
            return

        path = self._find_path(dependency, name)
        if path is not None:
            raise CycleError([name] + path)

        task.dependencies.append(dependency)

    def _find_path(self, source, target):
        """ Dependency path from `source` down to `target`, both included. None if there is none. """
        if source == target:
            return [source]

        seen = set()
        stack = [(source, [source])]
        while stack:
            current, path = stack.pop()
            for dependency in self._tasks[current].dependencies:
                if dependency == target:
                    return path + [target]
                if dependency not in seen:
                    seen.add(dependency)
                    stack.append((dependency, path + [dependency]))

        return None

    def _registration_index(self):
        return {name: index for index, name in enumerate(self._tasks)}

    def topological_order(self):
        """ Order all tasks so that every task comes after all of its dependencies.
        Depth first traversal over the tasks and their dependencies in registration order, so the result is the
        same for the same sequence of registrations.

        Raises:
            CycleError: If a cycle is found, naming the tasks involved.

        Returns:
            list(str): Task names in execution order.
        """
        index = self._registration_index()
        colors = dict.fromkeys(self._tasks, _UNVISITED)
        order = []

        for root in self._tasks:
            if colors[root] != _UNVISITED:
                continue

            colors[root] = _IN_PROGRESS
            # Each frame holds a task name and the iterator over its pending dependencies
            stack = [(root, iter(sorted(self._tasks[root].dependencies, key=index.__getitem__)))]
            while stack:
                name, dependencies = stack[-1]
                dependency = next(dependencies, None)

                if dependency is None:
                    stack.pop()
                    colors[name] = _DONE
                    order.append(name)

                elif colors[dependency] == _IN_PROGRESS:
                    path = [frame_name for frame_name, _ in stack]
                    raise CycleError(path[path.index(dependency):] + [dependency])

                elif colors[dependency] == _UNVISITED:
                    colors[dependency] = _IN_PROGRESS
                    stack.append(
                        (dependency, iter(sorted(self._tasks[dependency].dependencies, key=index.__getitem__)))
                    )

        return order

    def closure(self, names):
        """ Given tasks plus all of their transitive dependencies.

        Raises:
            UnknownTaskError: When any of the given names is not a registered task.
        """
        closure = set()
        pending = [self[name].name for name in names]

        while pending:
            name = pending.pop()
            if name in closure:
                continue
            closure.add(name)
            pending.extend(self._tasks[name].dependencies)

        return closure

    def execution_order(self, names):
        """ Topological order restricted to the given tasks and their dependencies. """
        closure = self.closure(names)
        return [name for name in self.topological_order() if name in closure]

    def dependents(self, name):
        """ All tasks that depend, directly or transitively, on the given one. """
        if name not in self._tasks:
            raise UnknownTaskError(f"Unrecognized task `{name}`.")

        dependents = set()

        changed = True
        while changed:
            changed = False
            for task in self._tasks.values():
                if task.name in dependents:
                    continue
                if any(dependency == name or dependency in dependents for dependency in task.dependencies):
                    dependents.add(task.name)
                    changed = True

        return dependents

    def __getitem__(self, name):
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTaskError(f"Unrecognized task `{name}`.") from None

    def __contains__(self, name):
        return name in self._tasks

    def __iter__(self):
        return iter(self._tasks.values())

    def __len__(self):
        return len(self._tasks)
