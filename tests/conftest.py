from pathlib import Path

import pytest
import click

from apkbuild._internals import State
from apkbuild.context import BuildContext


MANIFEST = """<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android"
          package="com.example.hello"
          android:versionCode="1"
          android:versionName="1.0">
    <application android:label="Hello"{application_attrs}>
        <activity android:name=".Main" />
    </application>
</manifest>
"""

MANIFEST_WITHOUT_PACKAGE = """<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android">
    <application android:label="Hello" />
</manifest>
"""

MAIN_ACTIVITY = """package com.example.hello;

public class Main extends android.app.Activity {}
"""


@pytest.fixture
def click_context():
    def context(verbose=True,
                project_name="hello"):
        state = State()
        state.verbosity = verbose
        state.project_name = project_name

        return click.Context(command=click.Command("apkbuild"),
                             obj=state)

    return context


@pytest.fixture
def with_click_context(click_context):
    """ Utility fixture to use a default apkbuild click context without
    the need of a `with` statement. """
    with click_context():
        yield


@pytest.fixture
def sdk_dir(tmp_path):
    """ Minimal Android SDK layout. Tools are not real executables. """
    sdk = tmp_path / "android-sdk"
    (sdk / "platforms" / "android-8").mkdir(parents=True)
    (sdk / "platforms" / "android-8" / "android.jar").write_bytes(b"")
    (sdk / "platform-tools").mkdir()
    (sdk / "tools").mkdir()

    return sdk


@pytest.fixture
def android_project(tmp_path, sdk_dir):
    """ Android project with one activity, pointing to the fake SDK. """
    def project(manifest=MANIFEST.format(application_attrs=""), local_properties=None, default_properties=None):
        project_dir = tmp_path / "hello"
        project_dir.mkdir(exist_ok=True)

        (project_dir / "AndroidManifest.xml").write_text(manifest)
        (project_dir / "res" / "values").mkdir(parents=True, exist_ok=True)
        source_dir = project_dir / "src" / "com" / "example" / "hello"
        source_dir.mkdir(parents=True, exist_ok=True)
        (source_dir / "Main.java").write_text(MAIN_ACTIVITY)

        (project_dir / "default.properties").write_text(
            default_properties if default_properties is not None else "TARGET=android-8\n"
        )
        (project_dir / "local.properties").write_text(
            local_properties if local_properties is not None else f"SDK_DIR={sdk_dir.as_posix()}\n"
        )

        return project_dir

    return project


@pytest.fixture
def build_context(android_project):
    """ Build context of the default Android project, resolved without looking at the environment. """
    return BuildContext.from_project(project_dir=android_project(), environ={})
