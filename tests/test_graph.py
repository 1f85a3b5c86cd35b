import pytest

from apkbuild.graph import TaskGraph
from apkbuild.graph import CycleError
from apkbuild.graph import DuplicateTaskError
from apkbuild.graph import UnknownDependencyError
from apkbuild.graph import UnknownTaskError
from apkbuild.task import Task


@pytest.fixture
def diamond():
    graph = TaskGraph()
    graph.add_task("A")
    graph.add_task("B", depends_on=["A"])
    graph.add_task("C", depends_on=["A"])
    graph.add_task("D", depends_on=["B", "C"])

    return graph


def test_add_task():
    graph = TaskGraph()
    task = graph.add_task("compile", description="Compile sources")

    assert isinstance(task, Task)
    assert "compile" in graph
    assert graph["compile"] is task
    assert task.description == "Compile sources"
    assert len(graph) == 1


def test_add_task_duplicate_name():
    graph = TaskGraph()
    graph.add_task("compile")

    with pytest.raises(DuplicateTaskError, match="Task `compile` is already defined."):
        graph.add_task("compile")


def test_add_task_unknown_dependency():
    graph = TaskGraph()

    with pytest.raises(UnknownDependencyError, match="Task `compile` depends on undefined task"):
        graph.add_task("compile", depends_on=["process-resources"])

    assert "compile" not in graph


def test_topological_order_breaks_ties_by_registration(diamond):
    assert diamond.topological_order() == ["A", "B", "C", "D"]


def test_topological_order_ignores_dependency_declaration_order():
    graph = TaskGraph()
    graph.add_task("A")
    graph.add_task("B", depends_on=["A"])
    graph.add_task("C", depends_on=["A"])
    graph.add_task("D", depends_on=["C", "B"])

    assert graph.topological_order() == ["A", "B", "C", "D"]


def test_topological_order_is_deterministic(diamond):
    assert all(diamond.topological_order() == ["A", "B", "C", "D"] for _ in range(10))


@pytest.mark.parametrize(
    "tasks",
    [
        [("a", []), ("b", ["a"]), ("c", ["b"]), ("d", ["a"]), ("e", ["d", "c"])],
        [("x", []), ("y", []), ("z", ["y", "x"]), ("w", ["z"]), ("v", ["x"])],
        [("solo", [])],
    ],
)
def test_topological_order_respects_dependencies(tasks):
    graph = TaskGraph()
    for name, dependencies in tasks:
        graph.add_task(name, depends_on=dependencies)

    order = graph.topological_order()

    assert sorted(order) == sorted(name for name, _ in tasks)
    for name, dependencies in tasks:
        assert all(order.index(dependency) < order.index(name) for dependency in dependencies)


def test_add_dependency():
    graph = TaskGraph()
    graph.add_task("lint")
    graph.add_task("compile")

    graph.add_dependency("lint", "compile")

    assert graph["lint"].dependencies == ["compile"]
    assert graph.topological_order() == ["compile", "lint"]


def test_add_dependency_closing_a_cycle_leaves_graph_unchanged():
    graph = TaskGraph()
    graph.add_task("A")
    graph.add_task("B", depends_on=["A"])

    with pytest.raises(CycleError) as exc_info:
        graph.add_dependency("A", "B")

    assert exc_info.value.cycle == ["A", "B", "A"]
    assert "A -> B -> A" in str(exc_info.value)
    assert graph["A"].dependencies == []
    assert graph.topological_order() == ["A", "B"]


def test_add_dependency_on_itself():
    graph = TaskGraph()
    graph.add_task("A")

    with pytest.raises(CycleError):
        graph.add_dependency("A", "A")

    assert graph["A"].dependencies == []


def test_add_dependency_transitive_cycle(diamond):
    with pytest.raises(CycleError) as exc_info:
        diamond.add_dependency("A", "D")

    cycle = exc_info.value.cycle
    assert cycle[0] == cycle[-1] == "A"
    assert "D" in cycle
    assert diamond["A"].dependencies == []


def test_add_dependency_unknown_task(diamond):
    with pytest.raises(UnknownDependencyError, match="Undefined task `E`."):
        diamond.add_dependency("A", "E")


def test_topological_order_detects_cycles():
    graph = TaskGraph()
    graph.add(Task("A"))
    graph.add(Task("B", dependencies=["A"]))
    # Tamper with the dependencies to bypass the registration checks
    graph["A"].dependencies.append("B")

    with pytest.raises(CycleError) as exc_info:
        graph.topological_order()

    assert exc_info.value.cycle == ["A", "B", "A"]


def test_closure(diamond):
    assert diamond.closure(["B"]) == {"A", "B"}
    assert diamond.closure(["D"]) == {"A", "B", "C", "D"}
    assert diamond.closure(["B", "C"]) == {"A", "B", "C"}


def test_closure_unknown_task(diamond):
    with pytest.raises(UnknownTaskError, match="Unrecognized task `E`."):
        diamond.closure(["E"])


def test_execution_order(diamond):
    assert diamond.execution_order(["C"]) == ["A", "C"]
    assert diamond.execution_order(["C", "B"]) == ["A", "B", "C"]


def test_dependents(diamond):
    assert diamond.dependents("A") == {"B", "C", "D"}
    assert diamond.dependents("B") == {"D"}
    assert diamond.dependents("D") == set()


def test_iteration_follows_registration(diamond):
    assert [task.name for task in diamond] == ["A", "B", "C", "D"]


def test_getitem_unknown_task(diamond):
    with pytest.raises(UnknownTaskError):
        diamond["E"]
