"""codex-steering: Budgeted loading of global and project steering documents.

Steering documents are short Markdown files that add persistent guidance to
a model prompt. They are discovered in two scopes:
- Global (``$CODEX_HOME/steering/*.md``)
- Project (``<repo_root>/.codex/steering/*.md``)

Global files load first and project files second, each group sorted by name,
so project guidance overrides global guidance by appearing later. Loading is
capped by a byte budget; files that are truncated, empty, undecodable or
over budget are reported per file.

Public API:
    load_steering_docs: Discover and load documents (async)
    load_steering_docs_sync: Blocking variant
    discover_steering_files: Discovery only
    discover_repo_root: Repository root detection
    load_config, SteeringSettings: Build a SteeringConfig from settings files
    format_load_report: Human-readable status lines
    SteeringError, SteeringIOError, ConfigFileError, ConfigValidationError: Exception types

Example:
    ```python
    from codex_steering import load_config, load_steering_docs_sync

    config = load_config()
    result = load_steering_docs_sync(config)
    if result.combined:
        prompt_parts.append(result.combined)
    ```
"""

from .discovery import discover_repo_root
from .discovery import discover_steering_files
from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .exceptions import SteeringError
from .exceptions import SteeringIOError
from .loader import load_steering_docs
from .loader import load_steering_docs_sync
from .models import DEFAULT_DOC_MAX_BYTES
from .models import DirectoryHealth
from .models import DirState
from .models import Included
from .models import OmissionReason
from .models import Omitted
from .models import Scope
from .models import SettingsPaths
from .models import SettingsScope
from .models import SteeringConfig
from .models import SteeringDiscovery
from .models import SteeringFile
from .models import SteeringFileOutcome
from .models import SteeringLoadResult
from .report import format_load_report
from .settings import SteeringSettings
from .settings import default_settings_paths
from .settings import load_config
from .settings import resolve_codex_home

__version__ = "0.1.0"

__all__ = [
    "load_steering_docs",
    "load_steering_docs_sync",
    "discover_steering_files",
    "discover_repo_root",
    "load_config",
    "resolve_codex_home",
    "default_settings_paths",
    "SteeringSettings",
    "format_load_report",
    "DEFAULT_DOC_MAX_BYTES",
    "Scope",
    "DirState",
    "DirectoryHealth",
    "SteeringFile",
    "SteeringDiscovery",
    "OmissionReason",
    "Included",
    "Omitted",
    "SteeringFileOutcome",
    "SteeringLoadResult",
    "SteeringConfig",
    "SettingsScope",
    "SettingsPaths",
    "SteeringError",
    "SteeringIOError",
    "ConfigFileError",
    "ConfigValidationError",
]
