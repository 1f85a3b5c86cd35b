"""
    Build context: configuration resolved once at the start of a build and shared by all tasks.
"""
import os
import shlex
import xml.etree.ElementTree as ElementTree
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from apkbuild import conf
from apkbuild import logger
from apkbuild._casting import as_bool
from apkbuild._utils import executable_name
from apkbuild.conf import ConfigError
from apkbuild.path import MANIFEST_FILENAME
from apkbuild.path import get_project_path


ANDROID_NAMESPACE = "http://schemas.android.com/apk/res/android"
SDK_ENV_VARS = ("ANDROID_HOME", "ANDROID_SDK_ROOT")

DEFAULTS = {
    "OUT_DIR": "build",
    "SOURCE_DIR": "src",
    "RESOURCE_DIR": "res",
    "ASSETS_DIR": "assets",
    "GEN_DIR": "gen",
    "MANIFEST": MANIFEST_FILENAME,
    "PROGUARD_CONFIG": "proguard.cfg",
    "ADB_DEVICE_ARG": "",
}

# Tools shipped in the SDK and the directory they live in when no build tools version is set
_PLATFORM_TOOLS = ("adb",)
_BUILD_TOOLS = ("aapt", "dx", "zipalign")
_SDK_TOOLS = ("apkbuilder",)


@dataclass(frozen=True)
class SigningConfig:
    keystore: Path
    alias: str
    store_password: str = ""
    key_password: str = ""


@dataclass(frozen=True)
class Manifest:
    package: Optional[str]
    has_code: bool = True


def read_manifest(manifest_path):
    """ Extract the application package name and the `android:hasCode` flag from an Android manifest.

    Args:
        manifest_path (Path): Manifest file.

    Raises:
        ConfigError: When the file is missing or is not valid XML.

    Returns:
        Manifest: `package` is None when the manifest does not define it; `has_code` defaults to True.
    """
    manifest_path = Path(manifest_path)
    if not manifest_path.is_file():
        raise ConfigError(f"Android manifest not found at {manifest_path.as_posix()}.")

    try:
        root = ElementTree.parse(manifest_path).getroot()
    except ElementTree.ParseError as exc:
        raise ConfigError(f"Malformed Android manifest {manifest_path.as_posix()}: {exc}.") from exc

    if root.tag != "manifest":
        raise ConfigError(f"Root element of {manifest_path.as_posix()} is not `manifest`.")

    package = root.get("package") or None

    has_code = True
    application = root.find("application")
    if application is not None:
        has_code = as_bool(application.get(f"{{{ANDROID_NAMESPACE}}}hasCode"), default=True)

    return Manifest(package=package, has_code=has_code)


@dataclass(frozen=True)
class BuildContext:
    """ Resolved environment of a build: SDK location, tool paths, project layout and manifest values.
    Read only once created.
    """
    project_dir: Path
    project_name: str
    sdk_dir: Path
    target: str
    tools: Mapping[str, Path]
    android_jar: Path
    out_dir: Path
    source_dir: Path
    resource_dir: Path
    assets_dir: Path
    gen_dir: Path
    manifest_path: Path
    manifest_package: Optional[str] = None
    has_code: bool = True
    device_args: Tuple[str, ...] = ()
    proguard_config: Optional[Path] = None
    signing: Optional[SigningConfig] = None
    properties: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_project(cls, project_dir=None, overrides=None, device_args=None, environ=None):
        """ Resolve the build context of an Android project.

        Args:
            project_dir (str | Path, optional): Project directory. Defaults to the one found from the current
                working directory.
            overrides (dict, optional): Property values taking precedence over the ones in the properties files.
            device_args (iterable(str), optional): adb device selection arguments. Defaults to the split value of
                the `ADB_DEVICE_ARG` property.
            environ (dict, optional): Environment variables to look the SDK up in. Defaults to `os.environ`.

        Raises:
            ConfigError: When a properties file is malformed, the SDK location or target platform is not set or
                the manifest can't be read.

        Returns:
            BuildContext: The resolved context.
        """
        if project_dir is None:
            project_dir = get_project_path()
        project_dir = Path(project_dir).resolve()

        properties = conf.load(project_path=project_dir)

        properties.update({key: str(value) for key, value in (overrides or {}).items() if value is not None})
        values = {**DEFAULTS, **properties}

        sdk_dir = _resolve_sdk_dir(values, os.environ if environ is None else environ)

        target = values.get("TARGET", "").strip()
        if not target:
            raise ConfigError("Target platform is not set. Please set `TARGET` (e.g. `android-8`) in the project "
                              "properties.")

        android_jar = sdk_dir / "platforms" / target / "android.jar"
        if not android_jar.exists():
            logger.warning(f"Platform library {android_jar.as_posix()} not found.")

        project_path = lambda key: project_dir / values[key]

        manifest_path = project_path("MANIFEST")
        manifest = read_manifest(manifest_path)
        if manifest.package is None:
            logger.warning(f"No package defined in {manifest_path.as_posix()}.")

        proguard_config = project_path("PROGUARD_CONFIG")

        return cls(
            project_dir=project_dir,
            project_name=values.get("PROJECT_NAME") or project_dir.name,
            sdk_dir=sdk_dir,
            target=target,
            tools=MappingProxyType(_resolve_tools(sdk_dir, values.get("BUILD_TOOLS_VERSION", "").strip())),
            android_jar=android_jar,
            out_dir=project_path("OUT_DIR"),
            source_dir=project_path("SOURCE_DIR"),
            resource_dir=project_path("RESOURCE_DIR"),
            assets_dir=project_path("ASSETS_DIR"),
            gen_dir=project_path("GEN_DIR"),
            manifest_path=manifest_path,
            manifest_package=manifest.package,
            has_code=manifest.has_code,
            device_args=tuple(shlex.split(values["ADB_DEVICE_ARG"]) if device_args is None else device_args),
            proguard_config=proguard_config if proguard_config.is_file() else None,
            signing=_resolve_signing(project_dir, values),
            properties=MappingProxyType(properties),
        )

    def tool(self, name):
        """ Path to the given SDK tool. Tools not known to the SDK layout are looked up in the PATH by name. """
        return self.tools.get(name, Path(name))

    def out_file(self, suffix):
        """ File in the output directory named after the project. """
        return self.out_dir / f"{self.project_name}{suffix}"

    @property
    def classes_dir(self):
        return self.out_dir / "classes"

    @property
    def dex_file(self):
        return self.out_dir / "classes.dex"

    @property
    def jar_file(self):
        return self.out_file(".jar")

    @property
    def proguard_jar(self):
        return self.out_file("-proguard.jar")

    @property
    def resource_package(self):
        return self.out_file(".ap_")

    @property
    def debug_unaligned_package(self):
        return self.out_file("-debug-unaligned.apk")

    @property
    def debug_package(self):
        return self.out_file("-debug.apk")

    @property
    def unsigned_package(self):
        return self.out_file("-unsigned.apk")

    @property
    def unaligned_package(self):
        return self.out_file("-unaligned.apk")

    @property
    def release_package(self):
        return self.out_file("-release.apk")


def _resolve_sdk_dir(values, environ):
    sdk_dir = values.get("SDK_DIR", "").strip()
    source = "SDK_DIR property"

    if not sdk_dir:
        for env_var in SDK_ENV_VARS:
            if environ.get(env_var):
                sdk_dir, source = environ[env_var], f"{env_var} environment variable"
                break

    if not sdk_dir:
        raise ConfigError("Android SDK location is not set. Please set `SDK_DIR` in `local.properties`, "
                          f"or define one of {', '.join(SDK_ENV_VARS)}.")

    sdk_dir = Path(sdk_dir).expanduser()
    if not sdk_dir.is_dir():
        raise ConfigError(f"Android SDK directory {sdk_dir.as_posix()} (from {source}) does not exist.")

    return sdk_dir


def _resolve_tools(sdk_dir, build_tools_version):
    """ Map each SDK tool to its location.
    With a build tools version, aapt, dx and zipalign come from `build-tools/<version>`, otherwise from
    `platform-tools` as older SDKs lay them out.
    """
    build_tools_dir = (sdk_dir / "build-tools" / build_tools_version if build_tools_version
                       else sdk_dir / "platform-tools")

    tools = {}
    for name in _PLATFORM_TOOLS:
        tools[name] = sdk_dir / "platform-tools" / executable_name(name)
    for name in _BUILD_TOOLS:
        tools[name] = build_tools_dir / executable_name(name)
    for name in _SDK_TOOLS:
        tools[name] = sdk_dir / "tools" / executable_name(name)

    return tools


def _resolve_signing(project_dir, values):
    keystore = values.get("KEY_STORE", "").strip()
    if not keystore:
        return None

    alias = values.get("KEY_ALIAS", "").strip()
    if not alias:
        raise ConfigError("`KEY_STORE` is set but `KEY_ALIAS` is not. Both are required to sign release packages.")

    return SigningConfig(keystore=project_dir / Path(keystore).expanduser(),
                         alias=alias,
                         store_password=values.get("KEY_STORE_PASSWORD", ""),
                         key_password=values.get("KEY_ALIAS_PASSWORD", ""))
