"""Steering file discovery.

Steering files are found in two fixed locations, both scanned non-recursively:

- Global: ``$CODEX_HOME/steering/*.md``
- Project: ``<repo_root>/.codex/steering/*.md``

Load order is global files first, then project files, each sorted by display
path, so project guidance always lands after (and overrides) global guidance.

The repository root is the nearest ancestor of the working directory that
contains a ``.git`` entry (directory, or file for worktrees and submodules).
Without one, the working directory itself is the root.
"""

import logging
import os
import stat
from pathlib import Path

from .exceptions import SteeringIOError
from .models import DirectoryHealth
from .models import Scope
from .models import SteeringConfig
from .models import SteeringDiscovery
from .models import SteeringFile

logger = logging.getLogger(__name__)

GLOBAL_STEERING_DIR = "steering"
PROJECT_STEERING_DIR = ".codex/steering"
STEERING_SUFFIX = ".md"


def discover_repo_root(cwd: Path) -> Path:
    """Find the repository root that owns ``cwd``.

    Args:
        cwd: Working directory to start from

    Returns:
        Nearest ancestor (or ``cwd`` itself) containing ``.git``, otherwise ``cwd`` unchanged

    Raises:
        SteeringIOError: If probing a ``.git`` entry fails for a reason other than absence
    """
    try:
        cursor = Path(cwd).resolve(strict=True)
    except OSError:
        cursor = Path(cwd)

    # The filesystem root itself is never probed.
    while cursor.parent != cursor:
        marker = cursor / ".git"
        try:
            os.stat(marker)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise SteeringIOError(f"Failed to probe {marker}: {e}") from e
        else:
            return cursor
        cursor = cursor.parent

    return Path(cwd)


def display_path_for(scope: Scope, file_name: str) -> str:
    """Build the scope-prefixed display path for a steering file name.

    Bytes in the name that are not valid UTF-8 become U+FFFD, so the display
    path can always be encoded.
    """
    file_name = os.fsencode(file_name).decode("utf-8", "replace")
    if scope is Scope.GLOBAL:
        return f"$CODEX_HOME/{GLOBAL_STEERING_DIR}/{file_name}"
    return f"{PROJECT_STEERING_DIR}/{file_name}"


def list_md_files(directory: Path, scope: Scope) -> tuple[DirectoryHealth, list[SteeringFile]]:
    """List the regular ``.md`` files directly inside ``directory``.

    Symlinks are skipped even when they point at valid files, so a crafted
    link cannot pull in content from outside the steering directory.

    Args:
        directory: Steering directory to scan
        scope: Scope assigned to every file found

    Returns:
        Directory health and the unsorted list of candidate files
    """
    try:
        entries = list(directory.iterdir())
    except FileNotFoundError:
        return DirectoryHealth.missing(), []
    except OSError as e:
        logger.warning(f"Failed to list {scope.value} steering directory {directory}: {e}")
        return DirectoryHealth.error(str(e)), []

    files = []
    for path in entries:
        if path.suffix != STEERING_SUFFIX:
            continue

        try:
            mode = path.lstat().st_mode
        except OSError as e:
            logger.warning(f"Failed to stat steering file {path}: {e}")
            continue

        if not stat.S_ISREG(mode):
            logger.debug(f"Skipping non-regular steering entry {path}")
            continue

        files.append(SteeringFile(scope=scope, path=path, display_path=display_path_for(scope, path.name)))

    return DirectoryHealth.present(), files


def discover_steering_files(config: SteeringConfig) -> SteeringDiscovery:
    """Discover global and project steering files in load order.

    Unreadable or missing directories are recorded in the result rather than
    raised, so one broken scope never hides the other.

    Raises:
        SteeringIOError: If repository root detection fails
    """
    repo_root = discover_repo_root(config.cwd)
    codex_home = Path(config.codex_home)
    global_dir = codex_home / GLOBAL_STEERING_DIR
    project_dir = repo_root / PROJECT_STEERING_DIR

    global_state, global_files = list_md_files(global_dir, Scope.GLOBAL)
    project_state, project_files = list_md_files(project_dir, Scope.PROJECT)

    global_files.sort(key=lambda f: f.display_path)
    project_files.sort(key=lambda f: f.display_path)

    return SteeringDiscovery(
        codex_home=codex_home,
        repo_root=repo_root,
        global_dir=global_dir,
        project_dir=project_dir,
        files=(*global_files, *project_files),
        global_dir_state=global_state,
        project_dir_state=project_state,
    )
