"""Read-only views of the Jenkins facts that go into a dump-info report."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ServerIdentity:
    display_name: str
    version: str


@dataclass(frozen=True)
class Node:
    """A build agent (or the built-in node) as the controller reports it.

    ``relative_url`` is the path below the controller's root URL, e.g.
    ``computer/agent-1/``.
    """

    display_name: str
    is_online: bool
    executor_count: int
    relative_url: str


@dataclass(frozen=True)
class ToolInstallation:
    name: str
    home: str


@dataclass(frozen=True)
class PluginDescriptor:
    long_name: str
    version: str
    url: str
