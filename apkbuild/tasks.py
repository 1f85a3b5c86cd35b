"""
    Tasks listing.
"""
import click

from apkbuild import __version__


_CREDIT_LINE = f"Powered by apkbuild {__version__}"
_DEFAULT = "Default"


def list_tasks(graph, default_task=None):
    """ Print all tasks of the graph in a neat table-like format, in registration order.
    Indicates which task is the default one and what each task depends on.

    Args:
        graph (TaskGraph): Graph containing the tasks.
        default_task (str, optional): Name of the task run when none is given.
    """
    if not len(graph):
        click.echo("  No tasks defined.")
        return

    # Header
    click.echo("Tasks in pipeline:\n")

    tasks_grid = []
    for task in graph:
        task_attrs = f"[{_DEFAULT}]" if task.name == default_task else ""
        # Split multiline descriptions to be able to handle them as a column
        doc_lines = task.description.splitlines()
        if task.dependencies:
            doc_lines.append(f"depends on: {', '.join(task.dependencies)}")

        tasks_grid.append((task.name, task_attrs, doc_lines))

    name_column_width = max(len(name) for name, _, _ in tasks_grid)
    attr_column_width = max(len(attr) for _, attr, _ in tasks_grid)

    # Body
    for name, attr, doc in tasks_grid:
        doc_line = "" if not doc else doc[0]
        click.echo(f"  {name:<{name_column_width}}  {attr: ^{attr_column_width}}\t{doc_line}")
        # Print the remaining lines with the correct indentation
        for doc_line in doc[1:]:
            click.echo(f"    {'': <{name_column_width + attr_column_width}}\t{doc_line}")

    # Footer
    click.echo(f"\n{_CREDIT_LINE}")


def print_execution_order(order):
    """ Print the tasks that would run, in order. """
    click.echo("Tasks to run:\n")
    for position, name in enumerate(order, start=1):
        click.echo(f"  {position}. {name}")
