"""
Sorted key/value snapshots of the process environment, interpreter
properties and a naming service.

These are not part of the job report; the MCP server exposes them for
ad-hoc inspection.  Every call builds a fresh dict whose keys are inserted
in ascending order.
"""

from __future__ import annotations

import getpass
import logging
import os
import platform
import sys
from collections.abc import Callable, Mapping

import requests

logger = logging.getLogger(__name__)

# Root context the directory lookup is asked to list.
DIRECTORY_ROOT = "java:comp/env"


def _sorted(mapping: Mapping) -> dict[str, str]:
    return {str(k): str(mapping[k]) for k in sorted(mapping, key=str)}


def get_environment_variables() -> dict[str, str]:
    """Return the process environment sorted by variable name."""
    return _sorted(os.environ)


def _user_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # no passwd entry and no LOGNAME/USER (e.g. an arbitrary container uid)
        return ""


def get_system_properties() -> dict[str, str]:
    """Return interpreter and platform properties sorted by key.

    Keys follow the dotted naming of JVM system properties so the two kinds
    of report read alike (``os.name``, ``user.home``, ``python.version``...).
    """
    props = {
        "file.encoding": sys.getfilesystemencoding(),
        "file.separator": os.sep,
        "line.separator": repr(os.linesep)[1:-1],
        "os.arch": platform.machine(),
        "os.name": platform.system(),
        "os.version": platform.release(),
        "path.separator": os.pathsep,
        "python.executable": sys.executable,
        "python.implementation": platform.python_implementation(),
        "python.version": platform.python_version(),
        "python.version.detailed": sys.version,
        "user.dir": os.getcwd(),
        "user.home": os.path.expanduser("~"),
        "user.name": _user_name(),
    }
    return _sorted(props)


def get_directory_bindings(lookup: Callable[[str], Mapping[str, str]]) -> dict[str, str]:
    """List the bindings under DIRECTORY_ROOT, sorted by binding class name.

    *lookup* is called once with the root context name and returns a mapping
    of binding class name to binding name.  The naming service is treated as
    unreliable: any failure is logged and yields an empty snapshot.  There is
    no second attempt.
    """
    try:
        bindings = lookup(DIRECTORY_ROOT)
    except (requests.RequestException, OSError, LookupError, ValueError) as exc:
        logger.warning("Directory lookup of %s failed: %s", DIRECTORY_ROOT, exc, exc_info=True)
        return {}
    if not bindings:
        return {}
    return _sorted(bindings)
