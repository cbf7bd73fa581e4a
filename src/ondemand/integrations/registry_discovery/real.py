"""Package index discovery by asking pip for its effective configuration."""

import os
import re
import sys

from ondemand.errors import OnDemandError, ResolutionError
from ondemand.integrations.executor.abc import Executor
from ondemand.integrations.registry_discovery.abc import RegistryDiscovery

PIP_INDEX_URL_ENV = "PIP_INDEX_URL"
PIP_DEFAULT_INDEX_URL = "https://pypi.org/simple"

# Most specific scope first, mirroring pip's own precedence
SCOPE_PRECEDENCE = (":env:", "install", "global", "user", "site")

_CONFIG_LINE = re.compile(r"^(?P<scope>[^.\s]+)\.index-url\s*=\s*(?P<value>.*)$")


def parse_pip_config_list(output: str) -> dict[str, str]:
    """Extract index-url values per scope from `pip config list` output.

    Lines look like ``global.index-url='https://example/simple'``.

    Returns:
        Mapping of scope (":env:", "global", ...) to URL
    """
    found: dict[str, str] = {}
    for line in output.splitlines():
        match = _CONFIG_LINE.match(line.strip())
        if match is None:
            continue
        value = match.group("value").strip().strip("'\"")
        if value:
            found[match.group("scope")] = value
    return found


class RealRegistryDiscovery(RegistryDiscovery):
    """Production implementation querying pip through an Executor.

    Precedence: $PIP_INDEX_URL, then the most specific index-url reported by
    `pip config list`, then pip's built-in default index when pip reports
    nothing configured. A pip invocation that fails is an error, not a reason
    to fall back.
    """

    def __init__(self, executor: Executor, python: str | None = None) -> None:
        """Create discovery backed by an executor.

        Args:
            executor: Executor used to run pip
            python: Interpreter whose pip is asked, defaults to sys.executable
        """
        self._executor = executor
        self._python = python or sys.executable

    async def discover(self) -> str:
        env_url = os.environ.get(PIP_INDEX_URL_ENV, "").strip()
        if env_url:
            return env_url

        try:
            result = await self._executor.run([self._python, "-m", "pip", "config", "list"])
        except OnDemandError as e:
            raise ResolutionError(str(e)) from e

        by_scope = parse_pip_config_list(result.stdout)
        for scope in SCOPE_PRECEDENCE:
            if scope in by_scope:
                return by_scope[scope]
        for url in by_scope.values():
            return url
        return PIP_DEFAULT_INDEX_URL
