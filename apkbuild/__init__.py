"""
    Android application build orchestrator.
"""

# pylint: disable=wrong-import-position

__version__ = "0.1.0"
__contact__ = "https://github.com/apkbuild/apkbuild"

DEFAULT_TASK = "assemble"

from apkbuild import logger
from apkbuild.apkbuild import apkbuild
