"""Lazy resolution of the package index URL."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace

from ondemand.errors import ResolutionError
from ondemand.integrations.config_store.abc import OnDemandConfig
from ondemand.integrations.registry_discovery.abc import RegistryDiscovery

logger = logging.getLogger(__name__)


async def resolve_registry(
    config: OnDemandConfig, discovery: RegistryDiscovery
) -> tuple[OnDemandConfig, str]:
    """Resolve the package index URL for config.

    A configured URL is returned unchanged without querying discovery.
    Otherwise discovery is queried once and a new config carrying the URL is
    returned; the input config is never mutated.

    Returns:
        (config', url) where config' is config itself when nothing changed

    Raises:
        ResolutionError: If discovery fails or reports an empty URL
    """
    if config.registry:
        return config, config.registry

    url = (await discovery.discover()).strip()
    if not url:
        raise ResolutionError("discovery returned an empty index URL")

    logger.info("Using package index '%s'.", url)
    return replace(config, registry=url), url


class RegistryResolver:
    """Owns the current config and serializes index resolution.

    Concurrent callers share one discovery query. Once resolved, the URL is
    kept for the life of the resolver, so discovery runs at most once per
    process. A failed discovery is not remembered; the next call retries.
    """

    def __init__(
        self,
        config: OnDemandConfig,
        discovery: RegistryDiscovery,
        on_update: Callable[[OnDemandConfig], None] | None = None,
    ) -> None:
        """Create resolver.

        Args:
            config: Starting configuration
            discovery: Index discovery capability
            on_update: Called once with the new config when resolution fills
                in the URL, typically ConfigStore.save. An OSError it raises
                is logged and does not fail the resolution
        """
        self._config = config
        self._discovery = discovery
        self._on_update = on_update
        self._lock = asyncio.Lock()

    @property
    def config(self) -> OnDemandConfig:
        return self._config

    async def resolve(self) -> str:
        async with self._lock:
            updated, url = await resolve_registry(self._config, self._discovery)
            if updated is not self._config:
                self._config = updated
                if self._on_update is not None:
                    try:
                        self._on_update(updated)
                    except OSError as e:
                        logger.warning(
                            "Could not save package index '%s', it will be resolved again "
                            "next run: %s",
                            url,
                            e,
                        )
            return url
