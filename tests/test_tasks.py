from apkbuild.graph import TaskGraph
from apkbuild.tasks import list_tasks
from apkbuild.tasks import print_execution_order
from apkbuild.tasks import _CREDIT_LINE


def test_list_tasks(capsys):
    graph = TaskGraph()
    graph.add_task("clean", description="Delete build outputs")
    graph.add_task("assemble", depends_on=["clean"], description="Build everything\nin one go")

    list_tasks(graph, default_task="assemble")

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Tasks in pipeline:"
    assert lines[2].split() == ["clean", "Delete", "build", "outputs"]
    assert lines[3].split() == ["assemble", "[Default]", "Build", "everything"]
    assert lines[4].split() == ["in", "one", "go"]
    assert lines[5].split() == ["depends", "on:", "clean"]
    assert lines[-1] == _CREDIT_LINE


def test_list_tasks_empty_graph(capsys):
    list_tasks(TaskGraph())

    assert capsys.readouterr().out == "  No tasks defined.\n"


def test_print_execution_order(capsys):
    print_execution_order(["process-resources", "compile"])

    assert capsys.readouterr().out == "Tasks to run:\n\n  1. process-resources\n  2. compile\n"
