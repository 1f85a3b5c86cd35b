"""
    General use utilities.
"""

import platform

from click.exceptions import Exit

from apkbuild import logger


def executable_name(name):
    """Platform specific file name of an SDK executable.

    Args:
        name (str): Tool name, e.g. `adb`.

    Returns:
        str: `name.exe` on Windows, `name` everywhere else.
    """
    return f"{name}.exe" if platform.system() == "Windows" else name


class ExitError(Exit):
    """
    Raise an Exit exception but also print an error description.
    """

    def __init__(self, exit_code: int, error_description: str):
        logger.error(error_description)
        super(ExitError, self).__init__(exit_code)
