"""
    Project properties loading utility.
"""
from pathlib import Path

from yaenv.core import Env
from yaenv.core import EnvError

from apkbuild import logger
from apkbuild.path import get_project_path


# Lowest to highest precedence
PROPERTIES_FILES = ("default", "build", "local")


class ConfigError(RuntimeError):
    pass


def load(project_path=None, overlays=PROPERTIES_FILES):
    """ Load the properties files of the project and merge them in a dictionary.
    Files are applied in the given order, values in later files override the ones already loaded, so by default
    `local.properties` overrides `build.properties` which in turn overrides `default.properties`.
    Missing files are ignored.

    Args:
        project_path (str, optional): Directory holding the properties files. Defaults to the project directory
            found from the current working directory.
        overlays (tuple(str), optional): Base names of the properties files, lowest precedence first.

    Raises:
        ConfigError: When a properties file can't be parsed.

    Returns:
        dict: All properties defined in the loaded files, values as strings.
    """
    project_path = Path(project_path if project_path is not None else get_project_path())

    config_dict = {}

    for overlay in overlays:
        properties_file = project_path / f"{overlay}.properties"
        if not properties_file.is_file():
            continue

        logger.debug(f"Found properties file {properties_file.as_posix()}")

        try:
            for key, val in Env(properties_file.as_posix()):
                config_dict[key] = "" if val is None else str(val)
        except EnvError as exc:
            raise ConfigError(f"Malformed properties file {properties_file.as_posix()}: {exc}. Keys must be "
                              "upper case (e.g. `SDK_DIR`) and values holding spaces must be quoted.") from exc

    return config_dict
