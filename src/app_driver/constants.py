"""Global constants."""

import pathlib


def _find_project_root() -> pathlib.Path:
    """Nearest ancestor of cwd, then of this package, holding a root marker."""
    markers = ("app-driver.json", ".git")
    for start in (pathlib.Path.cwd(), pathlib.Path(__file__).resolve().parent):
        for d in [start, *start.parents]:
            if any((d / m).exists() for m in markers):
                return d
    return pathlib.Path.cwd()


PROJECT_ROOT = _find_project_root()

CONFIG_FILE = str(PROJECT_ROOT / "app-driver.json")
DEFAULT_TIMEOUT_MS = 10000
DEFAULT_LOG_TAIL = 20

# Wire format keys
CONDITION_NAME_KEY = "conditionName"
CONDITIONS_KEY = "conditions"
COMMAND_KEY = "command"
TIMEOUT_KEY = "timeout"
