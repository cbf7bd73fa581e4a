"""Package index discovery integration."""

from ondemand.integrations.registry_discovery.abc import RegistryDiscovery
from ondemand.integrations.registry_discovery.fake import FakeRegistryDiscovery
from ondemand.integrations.registry_discovery.real import RealRegistryDiscovery

__all__ = ["FakeRegistryDiscovery", "RealRegistryDiscovery", "RegistryDiscovery"]
