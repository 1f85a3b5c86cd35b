"""
    Android build pipeline: the fixed set of tasks that turn an Android project into an installable package.
"""
import os

from apkbuild import logger
from apkbuild.command import ExternalCommand
from apkbuild.conf import ConfigError
from apkbuild.graph import TaskGraph


PROCESS_RESOURCES = "process-resources"
COMPILE = "compile"
JAR = "jar"
PROGUARD = "proguard"
PACKAGE = "package"
ASSEMBLE = "assemble"
INSTALL = "install"
UNINSTALL = "uninstall"

ZIPALIGN_BOUNDARY = "4"


def process_resources(context):
    """Generate R.java source file from Android resource XML files"""
    context.gen_dir.mkdir(parents=True, exist_ok=True)

    ExternalCommand(context.tool("aapt"),
                    ["package", "-m",
                     "-J", context.gen_dir,
                     "-M", context.manifest_path,
                     "-S", context.resource_dir,
                     "-I", context.android_jar],
                    cwd=context.project_dir).execute()


def compile_sources(context):
    """Compile the Java sources and the generated resource classes"""
    sources = [path
               for source_dir in (context.source_dir, context.gen_dir)
               for path in sorted(source_dir.rglob("*.java"))]

    if not sources:
        logger.warning("No Java sources found, nothing to compile.")
        return

    context.classes_dir.mkdir(parents=True, exist_ok=True)

    ExternalCommand(context.tool("javac"),
                    ["-encoding", "UTF-8",
                     "-d", context.classes_dir,
                     "-bootclasspath", context.android_jar,
                     "-sourcepath", os.pathsep.join((str(context.source_dir), str(context.gen_dir))),
                     *sources],
                    cwd=context.project_dir).execute()


def jar(context):
    """Assemble the compiled classes into a jar"""
    context.classes_dir.mkdir(parents=True, exist_ok=True)

    ExternalCommand(context.tool("jar"),
                    ["cf", context.jar_file, "-C", context.classes_dir, "."],
                    cwd=context.project_dir).execute()


def proguard(context):
    """Process classes and JARs with ProGuard"""
    args = ["-injars", context.jar_file,
            "-outjars", context.proguard_jar,
            "-libraryjars", context.android_jar]

    if context.proguard_config is not None:
        args.append(f"@{context.proguard_config}")
    else:
        logger.info("No ProGuard configuration found, running with default settings.")

    ExternalCommand(context.tool("proguard"), args, cwd=context.project_dir).execute()


def package(context):
    """Creates the Android application apk package, optionally signed, zipaligned"""
    context.out_dir.mkdir(parents=True, exist_ok=True)

    dex_args = []
    if context.has_code:
        ExternalCommand(context.tool("dx"),
                        ["--dex", f"--output={context.dex_file}", context.jar_file],
                        cwd=context.project_dir).execute()
        dex_args = ["-f", context.dex_file]
    else:
        logger.info("Application has no code, skipping dex conversion.")

    aapt_args = ["package", "-f",
                 "-M", context.manifest_path,
                 "-S", context.resource_dir]
    if context.assets_dir.is_dir():
        aapt_args.extend(["-A", context.assets_dir])
    aapt_args.extend(["-I", context.android_jar, "-F", context.resource_package])

    ExternalCommand(context.tool("aapt"), aapt_args, cwd=context.project_dir).execute()

    # Debug package, signed with the SDK debug key by apkbuilder
    ExternalCommand(context.tool("apkbuilder"),
                    [context.debug_unaligned_package, "-z", context.resource_package, *dex_args],
                    cwd=context.project_dir).execute()
    _zipalign(context, context.debug_unaligned_package, context.debug_package)

    if context.signing is None:
        logger.debug("No keystore configured, skipping release package.")
        return

    ExternalCommand(context.tool("apkbuilder"),
                    [context.unsigned_package, "-u", "-z", context.resource_package, *dex_args],
                    cwd=context.project_dir).execute()
    _sign(context, context.unsigned_package, context.unaligned_package)
    _zipalign(context, context.unaligned_package, context.release_package)


def _sign(context, source, destination):
    signing = context.signing
    args = ["-keystore", signing.keystore]
    if signing.store_password:
        args.extend(["-storepass", signing.store_password])
    if signing.key_password:
        args.extend(["-keypass", signing.key_password])
    args.extend(["-signedjar", destination, source, signing.alias])

    ExternalCommand(context.tool("jarsigner"), args, cwd=context.project_dir).execute()


def _zipalign(context, source, destination):
    ExternalCommand(context.tool("zipalign"),
                    ["-f", ZIPALIGN_BOUNDARY, source, destination],
                    cwd=context.project_dir).execute()


def install(context):
    """Installs the debug package onto a running emulator or device"""
    logger.info(f"Installing {context.debug_package.name} onto default emulator or device...")

    ExternalCommand(context.tool("adb"),
                    [*context.device_args, "install", "-r", context.debug_package]).execute()


def uninstall(context):
    """Uninstalls the application from a running emulator or device"""
    if not context.manifest_package:
        raise ConfigError(f"Unable to uninstall, no package is defined in {context.manifest_path.name}.")

    logger.info(f"Uninstalling {context.manifest_package} from the default emulator or device...")

    ExternalCommand(context.tool("adb"),
                    [*context.device_args, "uninstall", context.manifest_package]).execute()


def build_pipeline():
    """ Wire the Android build tasks into a graph.
    Actions receive the build context when run, so the graph can be inspected without one.

    Returns:
        TaskGraph: The pipeline.
    """
    graph = TaskGraph()

    graph.add_task(PROCESS_RESOURCES, action=process_resources)
    graph.add_task(COMPILE, depends_on=[PROCESS_RESOURCES], action=compile_sources)
    graph.add_task(JAR, depends_on=[COMPILE], action=jar)
    graph.add_task(PROGUARD, depends_on=[JAR], action=proguard)
    graph.add_task(PACKAGE, depends_on=[JAR], action=package)
    graph.add_task(ASSEMBLE, depends_on=[PACKAGE], description="Assembles the application packages")
    graph.add_task(INSTALL, depends_on=[ASSEMBLE], action=install)
    graph.add_task(UNINSTALL, action=uninstall)

    return graph
