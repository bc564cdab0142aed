"""Data models for codex-steering."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

DEFAULT_DOC_MAX_BYTES = 32 * 1024


class Scope(Enum):
    """Origin of a steering document.

    The value is the label used in prompt headers and reports.
    """

    GLOBAL = "global"
    PROJECT = "project"


class DirState(Enum):
    """Health of a scanned steering directory."""

    MISSING = "missing"
    PRESENT = "present"
    ERROR = "error"


@dataclass(frozen=True)
class DirectoryHealth:
    """Outcome of listing one steering directory.

    Attributes:
        state: Whether the directory was missing, listed, or unreadable
        message: Error text, only set when state is ERROR
    """

    state: DirState
    message: str | None = None

    @classmethod
    def missing(cls) -> "DirectoryHealth":
        """Directory does not exist."""
        return cls(DirState.MISSING)

    @classmethod
    def present(cls) -> "DirectoryHealth":
        """Directory was listed."""
        return cls(DirState.PRESENT)

    @classmethod
    def error(cls, message: str) -> "DirectoryHealth":
        """Directory exists but could not be listed."""
        return cls(DirState.ERROR, message)


@dataclass(frozen=True)
class SteeringFile:
    """A discovered steering document.

    Attributes:
        scope: Global or project
        path: Absolute path to the file on disk
        display_path: Scope-prefixed name used for ordering, headers and reports
    """

    scope: Scope
    path: Path
    display_path: str


@dataclass(frozen=True)
class SteeringDiscovery:
    """Result of scanning both steering directories.

    ``files`` holds global files then project files, each sorted by display path.
    """

    codex_home: Path
    repo_root: Path
    global_dir: Path
    project_dir: Path
    files: tuple[SteeringFile, ...]
    global_dir_state: DirectoryHealth
    project_dir_state: DirectoryHealth


class OmissionReason(Enum):
    """Why a discovered file was left out of the combined text."""

    DISABLED = "disabled"
    EMPTY = "empty"
    NON_UTF8 = "non-utf8"
    OVER_BUDGET = "over-budget"
    IO = "io-error"


@dataclass(frozen=True)
class Included:
    """File made it into the combined text.

    Attributes:
        bytes: UTF-8 length of the included text
        truncated: True when the full file exceeded the remaining budget
    """

    bytes: int
    truncated: bool = False


@dataclass(frozen=True)
class Omitted:
    """File was skipped; ``message`` carries the error text for IO omissions."""

    reason: OmissionReason
    message: str | None = None


FileStatus = Included | Omitted


@dataclass(frozen=True)
class SteeringFileOutcome:
    """What happened to one discovered file during loading."""

    scope: Scope
    path: Path
    display_path: str
    status: FileStatus

    @classmethod
    def for_file(cls, file: SteeringFile, status: FileStatus) -> "SteeringFileOutcome":
        """Outcome carrying the identity of a discovered file."""
        return cls(scope=file.scope, path=file.path, display_path=file.display_path, status=status)

    @property
    def included(self) -> bool:
        """True if the file made it into the combined text."""
        return isinstance(self.status, Included)


@dataclass(frozen=True)
class SteeringLoadResult:
    """Everything a consumer needs after loading steering documents.

    Attributes:
        enabled: False when loading was switched off or the budget is zero
        max_bytes: Configured budget
        discovery: The discovery this load was based on
        files: One outcome per discovered file, in discovery order
        combined: Text to inject, or None when nothing was produced
    """

    enabled: bool
    max_bytes: int
    discovery: SteeringDiscovery
    files: tuple[SteeringFileOutcome, ...]
    combined: str | None


@dataclass(frozen=True)
class SteeringConfig:
    """Inputs consumed by discovery and loading.

    Attributes:
        cwd: Starting point for repository root detection
        codex_home: Base directory of the global scope
        steering_enabled: False disables loading entirely
        steering_doc_max_bytes: Total byte budget for included text
    """

    cwd: Path
    codex_home: Path
    steering_enabled: bool = True
    steering_doc_max_bytes: int = DEFAULT_DOC_MAX_BYTES


class SettingsScope(Enum):
    """Settings file scope.

    Determines which settings file to target for write operations.
    """

    USER = "user"
    PROJECT = "project"
    LOCAL = "local"


@dataclass(frozen=True)
class SettingsPaths:
    """Paths to the three settings files.

    Attributes:
        user: User-global settings (``$CODEX_HOME/settings.yaml``)
        project: Repository settings, usually committed
        local: Machine-specific repository settings, usually ignored by git
    """

    user: Path
    project: Path
    local: Path
