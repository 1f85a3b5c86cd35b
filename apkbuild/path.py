"""
    Utilities to obtain relevant files' and directories' locations
"""

from pathlib import Path
from subprocess import CalledProcessError
from subprocess import PIPE
from subprocess import run


MANIFEST_FILENAME = "AndroidManifest.xml"


class NotARepositoryError(RuntimeError):
    """When you are not running inside a git repository directory"""


def get_working_path():
    """Get the interpreters current directory.

    Returns:
        str: Current working directory.
    """
    return Path.cwd().as_posix()


def get_root_path():
    """Get the path to the root of the Git repository.

    Raises:
        NotARepositoryError: If the current directory is not within a git repository.

    Returns:
        str: Root of the repository.
    """
    try:
        root = run(
            ["git", "rev-parse", "--show-toplevel"], stdout=PIPE, stderr=PIPE, check=True, encoding="utf-8"
        ).stdout

    except (CalledProcessError, FileNotFoundError):
        raise NotARepositoryError("Not running in a git repository.")
    else:
        return root.strip()


def get_project_path(filename=MANIFEST_FILENAME):
    """Get the path to the Android project directory, the one holding the manifest file.
    Search through the current directory up to the repository's root directory, or up to the
    filesystem root when not running within a git repository.

    Args:
        filename (str, optional): Name of the manifest file. Defaults to "AndroidManifest.xml".

    Returns:
        str: Project directory. The current directory if no manifest is found.
    """
    cur_path = Path(get_working_path())

    try:
        root_path = Path(get_root_path())
    except NotARepositoryError:
        root_path = Path(cur_path.anchor)

    search_path = cur_path
    while True:
        if (search_path / filename).is_file():
            return search_path.as_posix()

        if search_path == root_path or search_path == search_path.parent:
            break

        search_path = search_path.parent

    return cur_path.as_posix()
