"""
Message tables for the dump-info report.

Each table maps a message id to a ``str.format`` template.  The ``default``
table is the format downstream log scrapers rely on; ``legacy`` reproduces
the "Found ...:" lines older installations printed.
"""

from __future__ import annotations

import enum


class Section(enum.Enum):
    SERVER = "server"
    NODE = "node"
    TOOL = "tool"
    PLUGIN = "plugin"


SERVER = "DumpInfo.Hudson"
NODE_ONLINE = "DumpInfo.Computer.Online"
NODE_OFFLINE = "DumpInfo.Computer.Offline"
TOOL_JDK = "DumpInfo.Tool.JDK"
PLUGIN = "DumpInfo.Plugin"

DEFAULT_STYLE = "default"

CATALOGS: dict[str, dict[str, str]] = {
    "default": {
        SERVER: "{name} v{version}",
        NODE_ONLINE: "{name}: online with {executors} executor(s) - {url}",
        NODE_OFFLINE: "{name}: offline with {executors} executor(s) - {url}",
        TOOL_JDK: "{name} at {home}",
        PLUGIN: "{name} v{version} - {url}",
    },
    "legacy": {
        SERVER: "Found Hudson: {name} v{version}",
        NODE_ONLINE: "Found computer: {name} (ONLINE) with {executors} executors - {url}",
        NODE_OFFLINE: "Found computer: {name} (OFFLINE) with {executors} executors - {url}",
        TOOL_JDK: "Found JDK: {name} at {home}",
        PLUGIN: "Found plugin: {name} v{version} - {url}",
    },
}


def get_catalog(style: str = DEFAULT_STYLE) -> dict[str, str]:
    """Return the message table for *style*.

    Raises ValueError for an unknown style so a typo in configuration
    surfaces immediately instead of producing an empty report.
    """
    try:
        return CATALOGS[style]
    except KeyError:
        known = ", ".join(sorted(CATALOGS))
        raise ValueError(f"Unknown message style '{style}'. Expected one of: {known}.") from None


def render(message_id: str, style: str = DEFAULT_STYLE, **fields) -> str:
    return get_catalog(style)[message_id].format(**fields)
