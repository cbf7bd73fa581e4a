"""Installed package loading integration."""

from ondemand.integrations.module_loader.abc import ModuleLoader
from ondemand.integrations.module_loader.fake import FakeModuleLoader
from ondemand.integrations.module_loader.real import RealModuleLoader

__all__ = ["FakeModuleLoader", "ModuleLoader", "RealModuleLoader"]
