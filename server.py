"""
Jenkins Dump Info MCP Server

A Model Context Protocol server that returns the same diagnostic snapshot a
job writes to its console log (server identity, agents, JDKs, plugins), plus
sorted environment, interpreter-property and JNDI snapshots.

Transport: Streamable HTTP by default (MCP_TRANSPORT=http, host 0.0.0.0, port 8000).
           Set MCP_TRANSPORT=stdio to use stdio instead (e.g. for Cursor/Claude Desktop).
Logs:      All application logs go to stderr to avoid corrupting the JSON-RPC stream.
"""

import io
import logging
import os
import sys

import requests
from dotenv import load_dotenv
from fastmcp import FastMCP

from dumpinfo import jenkins_api, snapshots
from dumpinfo.reporter import DumpInfoConfig, Inventory, run

load_dotenv()

# Route all library and application logs to stderr, never stdout.
logging.basicConfig(
    stream=sys.stderr,
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("dumpinfo-mcp")

_MAX_SNAPSHOT_LINES = 200

mcp = FastMCP(
    "Jenkins Dump Info",
    instructions=(
        "You are a Jenkins diagnostics assistant. "
        "Use dump_info for the server version, agent status, JDK locations and plugin inventory "
        "exactly as a job would print them at start-up. "
        "Use get_environment_snapshot and get_system_properties_snapshot to inspect the machine "
        "this server runs on, and get_directory_bindings for the controller's JNDI bindings."
    ),
)


def _handle_error(exc: Exception, context: str) -> str:
    """Convert common exceptions into readable strings for the AI."""
    if isinstance(exc, requests.HTTPError):
        status = exc.response.status_code
        if status == 401:
            return f"[{context}] Authentication failed (401). Check JENKINS_USER and JENKINS_TOKEN."
        if status == 403:
            return (
                f"[{context}] Permission denied (403). Check the user's permissions; "
                "listing JDKs and JNDI bindings uses the script console, which needs Overall/Administer."
            )
        return f"[{context}] Jenkins API error {status}: {exc.response.text[:300]}"
    if isinstance(exc, (ConnectionError, TimeoutError, ValueError)):
        return f"[{context}] {exc}"
    return f"[{context}] Unexpected error: {exc}"


def _render_report(config: DumpInfoConfig, inventory: Inventory) -> str:
    buf = io.StringIO()
    run(buf, config, inventory)
    return buf.getvalue().rstrip("\n")


def _format_snapshot(title: str, snapshot: dict, name_filter: str = "") -> str:
    """Render a sorted snapshot as 'key = value' lines, capped for the context window."""
    if name_filter:
        nf = name_filter.lower()
        snapshot = {k: v for k, v in snapshot.items() if nf in k.lower()}

    if not snapshot:
        return f"{title}: nothing to show."

    lines = [f"{title} ({len(snapshot)}):\n"]
    for i, (k, v) in enumerate(snapshot.items()):
        if i >= _MAX_SNAPSHOT_LINES:
            lines.append(f"\n  [{len(snapshot) - _MAX_SNAPSHOT_LINES} more entries not shown]")
            break
        lines.append(f"  {k} = {v}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Report Tool
# ---------------------------------------------------------------------------


@mcp.tool
def dump_info(
    include_nodes: bool = True,
    include_tools: bool = True,
    include_plugins: bool = True,
    style: str = "default",
) -> str:
    """Server name and version, then agents, JDKs and plugins as a job's
    console log would show them.

    Args:
        include_nodes: List agents with online state, executors and URL.
        include_tools: List configured JDK installations (needs admin rights).
        include_plugins: List installed plugins with version and homepage.
        style: Message table: 'default' or 'legacy' ("Found ...:" lines).
    """
    try:
        config = DumpInfoConfig(
            dump_nodes=include_nodes,
            dump_tools=include_tools,
            dump_plugins=include_plugins,
            style=style,
        )
        return _render_report(config, jenkins_api.inventory())
    except Exception as exc:
        return _handle_error(exc, "dump_info")


# ---------------------------------------------------------------------------
# Snapshot Tools
# ---------------------------------------------------------------------------


@mcp.tool
def get_environment_snapshot(name_filter: str = "") -> str:
    """Environment variables of this server process, sorted by name.

    Args:
        name_filter: Only show variables whose name contains this text (case-insensitive).
    """
    return _format_snapshot(
        "Environment variables", snapshots.get_environment_variables(), name_filter,
    )


@mcp.tool
def get_system_properties_snapshot(name_filter: str = "") -> str:
    """Interpreter and platform properties (os.name, python.version, user.home, ...).

    Args:
        name_filter: Only show properties whose key contains this text (case-insensitive).
    """
    return _format_snapshot(
        "System properties", snapshots.get_system_properties(), name_filter,
    )


@mcp.tool
def get_directory_bindings() -> str:
    """JNDI bindings under java:comp/env on the Jenkins controller, sorted
    by class name.  An unreachable naming service shows as no bindings."""
    bindings = snapshots.get_directory_bindings(jenkins_api.get_jndi_bindings)
    return _format_snapshot(f"JNDI bindings under {snapshots.DIRECTORY_ROOT}", bindings)


def main() -> None:
    import socket

    transport = os.getenv("MCP_TRANSPORT", "http")
    host = os.getenv("MCP_HOST", "0.0.0.0")
    port = int(os.getenv("MCP_PORT", "8000"))

    if transport == "stdio":
        mcp.run(transport="stdio", show_banner=False)
    else:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as _s:
            try:
                _s.connect(("8.8.8.8", 80))
                external_ip = _s.getsockname()[0]
            except OSError:
                external_ip = "127.0.0.1"

        print(
            f"Jenkins Dump Info MCP server starting\n"
            f"  Local:    http://127.0.0.1:{port}/mcp\n"
            f"  Network:  http://{external_ip}:{port}/mcp",
            file=sys.stderr,
        )
        mcp.run(transport=transport, host=host, port=port, show_banner=False)


if __name__ == "__main__":
    main()
