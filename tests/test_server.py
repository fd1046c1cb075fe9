"""Tests for the MCP server helpers: report rendering, snapshot output, errors."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import requests

from dumpinfo.model import Node, ServerIdentity
from dumpinfo.reporter import DumpInfoConfig, Inventory
import server
from server import _MAX_SNAPSHOT_LINES, _format_snapshot, _handle_error, _render_report


def _http_error(status: int, text: str = "") -> requests.HTTPError:
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status
    resp.text = text
    return requests.HTTPError(response=resp)


class TestRenderReport:
    def test_two_line_report(self):
        inv = Inventory(
            server_identity=lambda: ServerIdentity("CI", "2.0"),
            root_url=lambda: "http://ci",
            nodes=lambda: [Node("agent-1", True, 2, "computer/agent-1")],
            tools=MagicMock(),
            plugins=MagicMock(),
        )
        config = DumpInfoConfig(dump_nodes=True, dump_tools=False, dump_plugins=False)
        assert _render_report(config, inv) == (
            "CI v2.0\n"
            "agent-1: online with 2 executor(s) - http://ci/computer/agent-1"
        )


class TestFormatSnapshot:
    def test_lines_in_snapshot_order(self):
        out = _format_snapshot("Env", {"A": "1", "B": "2"})
        assert out.splitlines() == ["Env (2):", "", "  A = 1", "  B = 2"]

    def test_filter_is_case_insensitive(self):
        out = _format_snapshot("Env", {"JAVA_HOME": "/opt/jdk", "PATH": "/bin"}, "java")
        assert "JAVA_HOME" in out
        assert "PATH" not in out

    def test_empty(self):
        assert _format_snapshot("JNDI bindings", {}) == "JNDI bindings: nothing to show."

    def test_capped(self):
        snapshot = {f"K{i:04d}": str(i) for i in range(_MAX_SNAPSHOT_LINES + 5)}
        out = _format_snapshot("Env", snapshot)
        assert "[5 more entries not shown]" in out
        assert f"K{_MAX_SNAPSHOT_LINES:04d}" not in out


class TestHandleError:
    def test_auth(self):
        assert "Authentication failed" in _handle_error(_http_error(401), "dump_info")

    def test_forbidden_is_not_blamed_on_jdks(self):
        msg = _handle_error(_http_error(403), "dump_info")
        assert "Permission denied (403)" in msg
        assert "script console" in msg
        assert not msg.startswith("[dump_info] Permission denied (403). Listing JDKs")

    def test_other_status(self):
        msg = _handle_error(_http_error(500, "boom"), "dump_info")
        assert msg.startswith("[dump_info] Jenkins API error 500")

    def test_connection(self):
        assert _handle_error(ConnectionError("Cannot reach Jenkins"), "x") == "[x] Cannot reach Jenkins"

    def test_unexpected(self):
        assert "Unexpected error" in _handle_error(RuntimeError("?"), "x")


class TestDumpInfoTool:
    @patch("server.jenkins_api.inventory")
    def test_unknown_style_checked_before_jenkins_is_contacted(self, mock_inventory):
        tool = getattr(server.dump_info, "fn", server.dump_info)
        result = tool(style="fancy")
        assert "Unknown message style 'fancy'" in result
        mock_inventory.assert_not_called()
