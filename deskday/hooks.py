"""Event hooks for Deskday.

Widgets only signal that something happened; hooks turn those signals into
side effects (sounds, desktop notifications, chat messages) by running shell
commands. Configured via hooks.yaml in the workspace root:

    on_work_complete:
      - notify-send "Pomodoro" "Time for a break"
      - command: paplay ~/sounds/bell.oga
        timeout: 5

Hook points:
- on_work_complete, on_break_complete
- on_water_reminder
- on_holiday_today, on_special_date
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

from deskday.fileio import read_yaml
from deskday.workspace import hooks_config_path, workspace_root

logger = logging.getLogger(__name__)

VALID_HOOK_POINTS = {
    "on_work_complete",
    "on_break_complete",
    "on_water_reminder",
    "on_holiday_today",
    "on_special_date",
}

DEFAULT_TIMEOUT = 30


def load_hooks_config(root: Path | None = None) -> dict[str, Any]:
    """Load hooks configuration from hooks.yaml."""
    if root is None:
        root = workspace_root()
    path = hooks_config_path(root)
    if not path.exists():
        return {}
    return read_yaml(path)


def _parse_hook(hook: Any) -> tuple[str, int] | None:
    """A hook entry is a bare command string or {command, timeout}."""
    if isinstance(hook, str):
        return (hook, DEFAULT_TIMEOUT) if hook.strip() else None
    if isinstance(hook, dict) and hook.get("command"):
        return str(hook["command"]), int(hook.get("timeout", DEFAULT_TIMEOUT))
    return None


def _run_command(command: str, timeout: int, payload: str, cwd: Path) -> dict[str, Any]:
    try:
        proc = subprocess.run(
            command,
            shell=True,
            input=payload,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=str(cwd),
        )
    except subprocess.TimeoutExpired:
        return {"exit_code": -1, "error": f"Hook timed out after {timeout}s"}
    except OSError as e:
        return {"exit_code": -1, "error": str(e)}
    return {
        "exit_code": proc.returncode,
        "stdout": proc.stdout[:4096],
        "stderr": proc.stderr[:4096],
    }


def run_hooks(
    hook_point: str,
    context: dict[str, Any],
    root: Path | None = None,
) -> list[dict[str, Any]]:
    """Run every command registered for *hook_point*, in order.

    The event name and *context* are passed as one JSON object on stdin.
    Failures are reported in the results and logged, never raised.
    """
    if hook_point not in VALID_HOOK_POINTS:
        return []
    if root is None:
        root = workspace_root()

    hooks = load_hooks_config(root).get(hook_point) or []
    if not isinstance(hooks, list):
        return []

    payload = json.dumps({"event": hook_point, **context}, ensure_ascii=False, default=str)
    results = []
    for hook in hooks:
        parsed = _parse_hook(hook)
        if parsed is None:
            continue
        command, timeout = parsed
        result = {"command": command, "hook_point": hook_point, **_run_command(command, timeout, payload, root)}
        if result["exit_code"] != 0:
            logger.warning("Hook %r for %s failed: %s", command, hook_point,
                           result.get("error") or result.get("stderr", "").strip())
        results.append(result)
    return results
