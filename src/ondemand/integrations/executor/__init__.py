"""External command execution integration."""

from ondemand.integrations.executor.abc import Executor, format_command
from ondemand.integrations.executor.fake import FakeExecutor
from ondemand.integrations.executor.logged import LoggingExecutor
from ondemand.integrations.executor.real import RealExecutor

__all__ = ["Executor", "FakeExecutor", "LoggingExecutor", "RealExecutor", "format_command"]
