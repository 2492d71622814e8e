"""Populate the staging root that becomes the package's file tree."""

import logging
import shutil
from pathlib import Path

from mesospkg.models import BuildRequest, InitSystem, OsTag
from mesospkg.utils.parsers.platform_tables import init_system
from mesospkg.utils.parsers.version import version_at_least
from mesospkg.utils.tools import ToolRunner

logger = logging.getLogger(__name__)

ASSETS = Path(__file__).resolve().parent.parent / "assets"

ZK_DEFAULT = "zk://localhost:2181/mesos\n"
WORK_DIR_DEFAULT = "/var/lib/mesos\n"
QUORUM_DEFAULT = "1\n"
WORK_DIR_DEFAULTS_SINCE = "0.19.0"

# Asset directory and destination for each init-script family.
INIT_LAYOUTS = {
    InitSystem.SYSTEMD: ("systemd", "lib/systemd/system"),
    InitSystem.SYSVINIT: ("init.d", "etc/init.d"),
    InitSystem.UPSTART: ("upstart", "etc/init"),
}

# Upstream moved the jars between releases; first existing dir wins.
JAR_DIRS = ("src/java/target", "src/java")


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


def install_defaults(root: Path, version: str) -> None:
    """Write documentation, default env files and ZooKeeper/work-dir config."""
    for directory in ("usr/share/doc/mesos", "etc/default", "var/log/mesos", "var/lib/mesos"):
        (root / directory).mkdir(parents=True, exist_ok=True)

    for default in sorted((ASSETS / "default").iterdir()):
        shutil.copy(default, root / "etc/default" / default.name)

    _write(root / "etc/mesos/zk", ZK_DEFAULT)

    if version_at_least(version, WORK_DIR_DEFAULTS_SINCE):
        _write(root / "etc/mesos-master/work_dir", WORK_DIR_DEFAULT)
        _write(root / "etc/mesos-master/quorum", QUORUM_DEFAULT)
        _write(root / "etc/mesos-slave/work_dir", WORK_DIR_DEFAULT)


def link_legacy_libs(root: Path) -> list[Path]:
    """Link usr/local/lib/libmesos* to usr/lib when usr/local/lib is absent.

    Links are relative so the tree stays valid wherever it is installed.
    """
    legacy = root / "usr/local/lib"
    if legacy.exists():
        return []

    legacy.mkdir(parents=True)
    links = []
    for lib in sorted((root / "usr/lib").glob("libmesos*")):
        link = legacy / lib.name
        link.symlink_to(Path("../../lib") / lib.name)
        links.append(link)
    logger.debug("Created %d legacy library links", len(links))
    return links


def install_init_scripts(root: Path, os_tag: OsTag) -> InitSystem:
    """Install the init wrapper and the init-script family for os_tag.

    Raises:
        UnsupportedPlatformError: If os_tag has no init-script entry

    """
    system = init_system(os_tag)
    asset_dir, destination = INIT_LAYOUTS[system]
    logger.info("Installing %s init scripts for %s", system.value, os_tag)

    bin_dir = root / "usr/bin"
    bin_dir.mkdir(parents=True, exist_ok=True)
    wrapper = bin_dir / "mesos-init-wrapper"
    shutil.copy2(ASSETS / "mesos-init-wrapper", wrapper)
    wrapper.chmod(0o755)

    target = root / destination
    target.mkdir(parents=True, exist_ok=True)
    for script in sorted((ASSETS / asset_dir).iterdir()):
        shutil.copy2(script, target / script.name)
        if system is InitSystem.SYSVINIT:
            (target / script.name).chmod(0o755)
    return system


def install_extra_libs(root: Path, extra_libs: tuple[Path, ...]) -> None:
    """Copy each extra library into usr/lib."""
    lib_dir = root / "usr/lib"
    lib_dir.mkdir(parents=True, exist_ok=True)
    for lib in extra_libs:
        logger.info("Adding extra library %s", lib)
        shutil.copy2(lib, lib_dir / lib.name)


def install_jars(root: Path, build_dir: Path) -> list[Path]:
    """Copy mesos-*.jar from whichever upstream output dir exists."""
    for candidate in JAR_DIRS:
        jar_dir = build_dir / candidate
        if jar_dir.is_dir():
            break
    else:
        logger.warning("No Java output directory under %s", build_dir)
        return []

    java_dir = root / "usr/share/java"
    java_dir.mkdir(parents=True, exist_ok=True)
    copied = []
    for jar in sorted(jar_dir.glob("mesos-*.jar")):
        shutil.copy2(jar, java_dir / jar.name)
        copied.append(java_dir / jar.name)
    logger.info("Copied %d jars from %s", len(copied), jar_dir)
    return copied


def stage(request: BuildRequest, version: str, os_tag: OsTag, runner: ToolRunner) -> Path:
    """Install the build into a fresh staging root and add packaging files.

    Args:
        request: The build request
        version: Resolved Mesos version
        os_tag: Detected OS tag, selects the init-script family
        runner: Tool runner used for `make install`

    Returns:
        Path to the populated staging root

    """
    root = request.staging_dir.resolve()
    if root.exists():
        shutil.rmtree(root)
    root.mkdir(parents=True)

    runner.run(["make", "install", f"DESTDIR={root}"], cwd=request.build_dir)

    install_defaults(root, version)
    shutil.copy(request.src_dir / "CHANGELOG", root / "usr/share/doc/mesos/CHANGELOG")
    link_legacy_libs(root)
    install_init_scripts(root, os_tag)
    if request.extra_libs:
        install_extra_libs(root, request.extra_libs)
    if request.java_enabled:
        install_jars(root, request.build_dir)

    logger.info("Staged installation in %s", root)
    return root
