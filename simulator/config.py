"""Run defaults loaded from a KEY=VALUE env file."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

from cpu_sched.constants import ALGORITHM_NAMES, DEFAULT_ALGORITHM, NO_LIMIT

DEFAULT_ENV_FILE = ".env"

_TRUE_VALUES = {"1", "true", "yes", "on", "y"}
_FALSE_VALUES = {"0", "false", "no", "off", "n"}


@dataclass(frozen=True, slots=True)
class RunDefaults:
    """Defaults for CLI arguments that were not given explicitly."""

    algorithm: str = DEFAULT_ALGORITHM.value
    quantum: int | None = None
    limit: int = NO_LIMIT
    trace: bool = False
    stats: bool = True


def load_run_defaults(env_file: str = DEFAULT_ENV_FILE) -> RunDefaults:
    """Load run defaults from an env file, warning about unusable values.

    Keys: ALGORITHM, QUANTUM, LIMIT, TRACE, STATS. A missing file yields the
    built-in defaults.
    """

    env = _parse_env_file(env_file)

    algorithm = env.get("ALGORITHM", "").strip().upper() or DEFAULT_ALGORITHM.value
    if algorithm not in ALGORITHM_NAMES:
        _warn(f"ALGORITHM={algorithm!r} is unknown. Using {DEFAULT_ALGORITHM.value!r}.")
        algorithm = DEFAULT_ALGORITHM.value

    return RunDefaults(
        algorithm=algorithm,
        quantum=_env_opt_int(env, "QUANTUM", default=None, minimum=1),
        limit=_env_int(env, "LIMIT", default=NO_LIMIT, minimum=0),
        trace=_env_bool(env, "TRACE", default=False),
        stats=_env_bool(env, "STATS", default=True),
    )


def _warn(msg: str) -> None:
    print(f"Warning: {msg}", file=sys.stderr)


def _parse_env_file(path: str) -> dict[str, str]:
    env_path = Path(path)
    if not env_path.exists():
        return {}

    env: dict[str, str] = {}
    for lineno, line in enumerate(env_path.read_text(encoding="utf-8").splitlines(), start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        if text.startswith("export "):
            text = text[7:].strip()
        if "=" not in text:
            _warn(f"Ignoring invalid env line {lineno} in {path!r}: {line!r}")
            continue

        key, value = text.split("=", 1)
        key = key.strip()
        value = value.strip()

        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]

        if key:
            env[key] = value

    return env


def _env_int(env: dict[str, str], key: str, default: int, minimum: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        parsed = int(raw)
    except ValueError:
        _warn(f"{key} must be an integer, got {raw!r}. Using {default}.")
        return default
    if parsed < minimum:
        _warn(f"{key} must be >= {minimum}, got {parsed}. Using {default}.")
        return default
    return parsed


def _env_opt_int(env: dict[str, str], key: str, default: int | None, minimum: int) -> int | None:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        parsed = int(raw)
    except ValueError:
        _warn(f"{key} must be an integer, got {raw!r}. Using {default}.")
        return default
    if parsed < minimum:
        _warn(f"{key} must be >= {minimum}, got {parsed}. Using {default}.")
        return default
    return parsed


def _env_bool(env: dict[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or raw == "":
        return default

    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    _warn(
        f"{key} must be one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}, got {raw!r}. "
        f"Using {default}."
    )
    return default
