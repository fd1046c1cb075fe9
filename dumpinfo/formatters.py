"""
Turn Jenkins inventory objects into console-log lines.

There is one ``format_*`` function per entity type, returning the line (or
None for a None input), and one ``dump_*`` function per section, writing
lines to a text sink.  Every ``dump_*`` function is safe to call with a None
sink or a None collection: it simply writes nothing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TextIO

from dumpinfo import messages
from dumpinfo.model import Node, PluginDescriptor, ServerIdentity, ToolInstallation


def format_server(identity: ServerIdentity | None, style: str = messages.DEFAULT_STYLE) -> str | None:
    if identity is None:
        return None
    return messages.render(
        messages.SERVER, style, name=identity.display_name, version=identity.version,
    )


def format_node_url(base_url: str, relative_url: str) -> str:
    """Join the controller root URL and a node path.

    Plain concatenation: the node path is not URL-encoded and slashes are
    not normalized, so a root URL ending in '/' yields '//'.
    """
    return f"{base_url}/{relative_url}"


def format_node(node: Node | None, base_url: str, style: str = messages.DEFAULT_STYLE) -> str | None:
    if node is None:
        return None
    message_id = messages.NODE_ONLINE if node.is_online else messages.NODE_OFFLINE
    return messages.render(
        message_id,
        style,
        name=node.display_name,
        executors=node.executor_count,
        url=format_node_url(base_url, node.relative_url),
    )


def format_tool(tool: ToolInstallation | None, style: str = messages.DEFAULT_STYLE) -> str | None:
    if tool is None:
        return None
    return messages.render(messages.TOOL_JDK, style, name=tool.name, home=tool.home)


def format_plugin(plugin: PluginDescriptor | None, style: str = messages.DEFAULT_STYLE) -> str | None:
    if plugin is None:
        return None
    return messages.render(
        messages.PLUGIN, style, name=plugin.long_name, version=plugin.version, url=plugin.url,
    )


def _write(sink: TextIO, line: str | None) -> None:
    if line is not None:
        print(line, file=sink)


def dump_server(sink: TextIO | None, identity: ServerIdentity | None,
                style: str = messages.DEFAULT_STYLE) -> None:
    if sink is None:
        return
    _write(sink, format_server(identity, style))


def dump_nodes(sink: TextIO | None, base_url: str, nodes: Iterable[Node] | None,
               style: str = messages.DEFAULT_STYLE) -> None:
    """Write one line per node, in the order the controller listed them."""
    if sink is None or nodes is None:
        return
    for node in nodes:
        _write(sink, format_node(node, base_url, style))


def dump_tools(sink: TextIO | None, tools: Iterable[ToolInstallation] | None,
               style: str = messages.DEFAULT_STYLE) -> None:
    if sink is None or tools is None:
        return
    for tool in tools:
        _write(sink, format_tool(tool, style))


def dump_plugins(
    sink: TextIO | None,
    plugins: Iterable[PluginDescriptor] | Mapping[str, PluginDescriptor] | None,
    style: str = messages.DEFAULT_STYLE,
) -> None:
    """Write one line per plugin.

    A mapping (e.g. keyed by short name) is walked in insertion order; the
    plugins are never re-sorted here.
    """
    if sink is None or plugins is None:
        return
    if isinstance(plugins, Mapping):
        plugins = plugins.values()
    for plugin in plugins:
        _write(sink, format_plugin(plugin, style))


def dump_plugin_manager(sink: TextIO | None, plugin_manager, style: str = messages.DEFAULT_STYLE) -> None:
    """Dump the plugins held by a plugin manager.

    *plugin_manager* is either an object with a ``plugins`` attribute or a
    zero-argument callable returning the plugin collection.
    """
    if sink is None or plugin_manager is None:
        return
    if callable(plugin_manager):
        plugins = plugin_manager()
    else:
        plugins = plugin_manager.plugins
    dump_plugins(sink, plugins, style)
