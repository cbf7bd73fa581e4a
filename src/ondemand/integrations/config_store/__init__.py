"""Configuration persistence integration."""

from ondemand.integrations.config_store.abc import ConfigStore, OnDemandConfig
from ondemand.integrations.config_store.fake import InMemoryConfigStore
from ondemand.integrations.config_store.real import RealConfigStore

__all__ = ["ConfigStore", "InMemoryConfigStore", "OnDemandConfig", "RealConfigStore"]
