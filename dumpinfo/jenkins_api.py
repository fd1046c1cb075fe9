"""
Read-only wrappers for the Jenkins calls behind a dump-info report.

All functions raise meaningful exceptions rather than returning error strings,
so callers (the CLI and the MCP tools) can decide how to surface the failure.
Each request is made exactly once.
"""

import json
import logging
import os

import requests
from dotenv import load_dotenv

from dumpinfo.model import Node, PluginDescriptor, ServerIdentity, ToolInstallation
from dumpinfo.reporter import Inventory

load_dotenv()

logger = logging.getLogger(__name__)

_JENKINS_URL = os.environ.get("JENKINS_URL", "").rstrip("/")
_JENKINS_USER = os.environ.get("JENKINS_USER", "")
_JENKINS_TOKEN = os.environ.get("JENKINS_TOKEN", "")

_MISSING = [k for k, v in {
    "JENKINS_URL": _JENKINS_URL,
    "JENKINS_USER": _JENKINS_USER,
    "JENKINS_TOKEN": _JENKINS_TOKEN,
}.items() if not v]

if _MISSING:
    raise EnvironmentError(
        f"Missing required environment variables: {', '.join(_MISSING)}. "
        "Copy .env.example to .env and fill in your credentials."
    )

_AUTH = (_JENKINS_USER, _JENKINS_TOKEN)
_TIMEOUT = 30

_VERIFY_SSL = os.environ.get("JENKINS_VERIFY_SSL", "true").lower() not in ("false", "0", "no")

if not _VERIFY_SSL:
    import urllib3
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

# Jenkins.getDisplayName() is a fixed string; the REST API does not report it.
_DISPLAY_NAME = os.environ.get("JENKINS_DISPLAY_NAME", "Jenkins")

_BUILT_IN_CLASSES = frozenset({
    "hudson.model.Hudson$MasterComputer",
    "jenkins.model.Jenkins$MasterComputer",
})
# Jenkins before 2.307 named the controller "master" and served it at (master).
_BUILT_IN_URL = "computer/(built-in)/"
_LEGACY_MASTER_URL = "computer/(master)/"

_JDKS_SCRIPT = """\
import groovy.json.JsonOutput
def jdks = jenkins.model.Jenkins.get().getJDKs().collect { [name: it.name, home: it.home] }
println(JsonOutput.toJson(jdks))
"""

_BINDINGS_SCRIPT = """\
import groovy.json.JsonOutput
import javax.naming.InitialContext
def bindings = [:]
def list = new InitialContext().lookup("%s").listBindings("")
while (list.hasMore()) {
    def item = list.next()
    bindings[item.className] = item.name
}
println(JsonOutput.toJson(bindings))
"""


def _request(method: str, path: str, **kwargs) -> requests.Response:
    """Single HTTP request against the controller, with readable failures."""
    url = f"{_JENKINS_URL}{path}"
    try:
        response = requests.request(
            method, url, auth=_AUTH, timeout=_TIMEOUT, verify=_VERIFY_SSL, **kwargs,
        )
        response.raise_for_status()
        return response
    except requests.HTTPError as exc:
        logger.debug("Jenkins HTTP %s for %s", exc.response.status_code, url)
        raise
    except requests.ConnectionError:
        raise ConnectionError(
            f"Cannot reach Jenkins at {_JENKINS_URL}. "
            "Verify the server is running and JENKINS_URL is correct."
        )
    except requests.Timeout:
        raise TimeoutError(
            f"Jenkins did not respond within {_TIMEOUT} seconds ({url})."
        )


def _get(path: str, **kwargs) -> requests.Response:
    return _request("GET", path, **kwargs)


def _post(path: str, **kwargs) -> requests.Response:
    return _request("POST", path, **kwargs)


def run_script(script: str):
    """Run a Groovy script on the controller and decode its JSON output.

    Requires Overall/Administer.  The script console answers 200 even when
    the script throws (the stack trace becomes the body), so a body that is
    not JSON raises ValueError.
    """
    text = _post("/scriptText", data={"script": script}).text.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        first_line = text.splitlines()[0] if text else "(empty response)"
        raise ValueError(f"Script console returned non-JSON output: {first_line[:300]}") from exc


def get_root_url() -> str:
    """The controller's root URL as configured (no trailing slash)."""
    return _JENKINS_URL


def get_server_identity() -> ServerIdentity:
    """Display name and version; the version comes from the X-Jenkins header."""
    response = _get("/api/json?tree=mode")
    return ServerIdentity(
        display_name=_DISPLAY_NAME,
        version=response.headers.get("X-Jenkins", "unknown"),
    )


def _node_url(computer: dict) -> str:
    """Path of a computer below the root URL, left unencoded."""
    if computer.get("_class") in _BUILT_IN_CLASSES:
        if computer.get("displayName") == "master":
            return _LEGACY_MASTER_URL
        return _BUILT_IN_URL
    return f"computer/{computer.get('displayName', '')}/"


def get_nodes() -> list[Node]:
    """List the controller's computers in the order Jenkins reports them."""
    path = "/computer/api/json?tree=computer[_class,displayName,offline,numExecutors]"
    data = _get(path).json()
    return [
        Node(
            display_name=c.get("displayName", ""),
            is_online=not c.get("offline", True),
            executor_count=c.get("numExecutors", 0),
            relative_url=_node_url(c),
        )
        for c in data.get("computer") or []
    ]


def get_jdks() -> list[ToolInstallation]:
    """JDK installations from the global tool configuration."""
    data = run_script(_JDKS_SCRIPT) or []
    return [
        ToolInstallation(name=j.get("name", ""), home=j.get("home") or "")
        for j in data
    ]


def get_plugins() -> list[PluginDescriptor]:
    """Installed plugins, in plugin-manager order."""
    path = "/pluginManager/api/json?tree=plugins[shortName,longName,version,url]"
    data = _get(path).json()
    return [
        PluginDescriptor(
            long_name=p.get("longName") or p.get("shortName", ""),
            version=p.get("version", ""),
            url=p.get("url") or "",
        )
        for p in data.get("plugins") or []
    ]


def get_jndi_bindings(root: str) -> dict:
    """Map binding class name -> binding name for the JNDI context *root*."""
    data = run_script(_BINDINGS_SCRIPT % root)
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected JNDI listing for {root}: {type(data).__name__}")
    return data


def inventory() -> Inventory:
    """Inventory backed by this Jenkins client."""
    return Inventory(
        server_identity=get_server_identity,
        root_url=get_root_url,
        nodes=get_nodes,
        tools=get_jdks,
        plugins=get_plugins,
    )
