"""Human-readable summaries of a steering load."""

from .models import DirectoryHealth
from .models import DirState
from .models import Included
from .models import SteeringFileOutcome
from .models import SteeringLoadResult


def format_load_report(result: SteeringLoadResult) -> list[str]:
    """Describe a load result line by line.

    Example output::

        steering: enabled (max 32768 bytes)
        global dir /home/me/.codex/steering: present
        project dir /repo/.codex/steering: missing
        $CODEX_HOME/steering/style.md: included 120 bytes
        .codex/steering/big.md: omitted (over-budget)
    """
    discovery = result.discovery
    status = "enabled" if result.enabled else "disabled"
    lines = [
        f"steering: {status} (max {result.max_bytes} bytes)",
        f"global dir {discovery.global_dir}: {_describe_health(discovery.global_dir_state)}",
        f"project dir {discovery.project_dir}: {_describe_health(discovery.project_dir_state)}",
    ]
    lines.extend(f"{outcome.display_path}: {_describe_outcome(outcome)}" for outcome in result.files)
    return lines


def _describe_health(health: DirectoryHealth) -> str:
    if health.state is DirState.ERROR:
        return f"error ({health.message})"
    return health.state.value


def _describe_outcome(outcome: SteeringFileOutcome) -> str:
    status = outcome.status
    if isinstance(status, Included):
        return f"included {status.bytes} bytes" + (", truncated" if status.truncated else "")
    if status.message:
        return f"omitted ({status.reason.value}: {status.message})"
    return f"omitted ({status.reason.value})"
