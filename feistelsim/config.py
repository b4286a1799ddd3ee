"""
Simulator Configuration

Default parameters for the simulator and the command-line presenter,
optionally overridden through environment variables.
"""

import os
from typing import Any, Dict, Optional, Mapping

# Default parameters
DEFAULT_PARAMS = {
    'rounds': 4,               # Rounds used when the caller does not pick one
    'min_rounds': 1,
    'max_rounds': 16,          # Upper bound offered to human-facing callers
    'strict_encoding': False,  # Reject code points above 255 instead of truncating
    'log_level': 'WARNING'
}

ENV_PREFIX = 'FEISTELSIM_'

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


def _parse_int(name: str, raw: str) -> int:
    """
    Parse an integer environment value.

    Args:
        name: Parameter name, used in the error message
        raw: The raw environment value

    Returns:
        The parsed integer

    Raises:
        ValueError: If raw is not an integer
    """
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}") from None


def _parse_bool(name: str, raw: str) -> bool:
    """
    Parse a boolean environment value such as 'yes', 'off' or '1'.

    Args:
        name: Parameter name, used in the error message
        raw: The raw environment value

    Returns:
        The parsed boolean

    Raises:
        ValueError: If raw is not a recognised boolean
    """
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{ENV_PREFIX}{name.upper()} must be a boolean, got {raw!r}")


def _parse_log_level(raw: str) -> str:
    """
    Parse a logging level name, case-insensitively.

    Args:
        raw: The raw environment value

    Returns:
        The upper-case level name

    Raises:
        ValueError: If raw is not one of LOG_LEVELS
    """
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return level


def load_params(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Build the effective parameters from DEFAULT_PARAMS and the environment.

    Recognised variables are FEISTELSIM_ROUNDS, FEISTELSIM_MAX_ROUNDS,
    FEISTELSIM_STRICT_ENCODING and FEISTELSIM_LOG_LEVEL. Lowering only the
    maximum below the built-in default round count lowers the default with it.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        A new dictionary of parameters

    Raises:
        ValueError: If a variable is malformed or the values are inconsistent
    """
    if environ is None:
        environ = os.environ

    params = dict(DEFAULT_PARAMS)

    rounds_set = False
    for name in ('rounds', 'max_rounds'):
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None:
            params[name] = _parse_int(name, raw)
            rounds_set = rounds_set or name == 'rounds'

    raw = environ.get(ENV_PREFIX + 'STRICT_ENCODING')
    if raw is not None:
        params['strict_encoding'] = _parse_bool('strict_encoding', raw)

    raw = environ.get(ENV_PREFIX + 'LOG_LEVEL')
    if raw:
        params['log_level'] = _parse_log_level(raw)

    if params['max_rounds'] < params['min_rounds']:
        raise ValueError(
            f"max_rounds ({params['max_rounds']}) must be at least min_rounds ({params['min_rounds']})"
        )

    if not rounds_set:
        params['rounds'] = min(params['rounds'], params['max_rounds'])
    elif not params['min_rounds'] <= params['rounds'] <= params['max_rounds']:
        raise ValueError(
            f"{ENV_PREFIX}ROUNDS must lie in [{params['min_rounds']}, {params['max_rounds']}], "
            f"got {params['rounds']}"
        )

    return params
