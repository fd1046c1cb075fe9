"""
Dump-info report: server identity, then nodes, JDKs and plugins.

The facts come from an ``Inventory`` of accessor callables, so the report
can be driven by the live Jenkins client or by plain test data alike.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TextIO

from dumpinfo import formatters, messages
from dumpinfo.messages import Section
from dumpinfo.model import Node, PluginDescriptor, ServerIdentity, ToolInstallation

logger = logging.getLogger(__name__)

_FALSE_VALUES = ("false", "0", "no")


def _env_flag(name: str, default: bool = True) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in _FALSE_VALUES


@dataclass(frozen=True)
class DumpInfoConfig:
    """Which optional sections to write.  The server line is always written."""

    dump_nodes: bool = True
    dump_tools: bool = True
    dump_plugins: bool = True
    style: str = messages.DEFAULT_STYLE

    def __post_init__(self):
        # reject unknown styles before any inventory accessor runs
        messages.get_catalog(self.style)

    @classmethod
    def from_env(cls) -> DumpInfoConfig:
        """Read DUMP_NODES, DUMP_TOOLS, DUMP_PLUGINS and DUMP_INFO_STYLE."""
        style = os.environ.get("DUMP_INFO_STYLE", "").strip() or messages.DEFAULT_STYLE
        return cls(
            dump_nodes=_env_flag("DUMP_NODES"),
            dump_tools=_env_flag("DUMP_TOOLS"),
            dump_plugins=_env_flag("DUMP_PLUGINS"),
            style=style,
        )

    def enabled(self, section: Section) -> bool:
        if section is Section.SERVER:
            return True
        return {
            Section.NODE: self.dump_nodes,
            Section.TOOL: self.dump_tools,
            Section.PLUGIN: self.dump_plugins,
        }[section]


@dataclass(frozen=True)
class Inventory:
    """Read-only accessors for the controller's inventory.

    Each accessor is only called when its section is enabled.
    """

    server_identity: Callable[[], ServerIdentity | None]
    root_url: Callable[[], str]
    nodes: Callable[[], Iterable[Node] | None]
    tools: Callable[[], Iterable[ToolInstallation] | None]
    plugins: Callable[[], Iterable[PluginDescriptor] | None]


def run(sink: TextIO | None, config: DumpInfoConfig, inventory: Inventory) -> None:
    """Write the report to *sink*.

    Sections are written in a fixed order: server, nodes, tools, plugins.
    Errors raised by the inventory accessors are not caught.
    """
    if sink is None:
        return

    style = config.style
    formatters.dump_server(sink, inventory.server_identity(), style)

    if config.enabled(Section.NODE):
        formatters.dump_nodes(sink, inventory.root_url(), inventory.nodes(), style)

    if config.enabled(Section.TOOL):
        formatters.dump_tools(sink, inventory.tools(), style)

    if config.enabled(Section.PLUGIN):
        formatters.dump_plugin_manager(sink, inventory.plugins, style)

    logger.debug(
        "Dump info written (nodes=%s, tools=%s, plugins=%s, style=%s)",
        config.dump_nodes, config.dump_tools, config.dump_plugins, style,
    )
