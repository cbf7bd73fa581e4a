"""Filesystem-backed configuration store.

Reads ~/.ondemand/config.toml with tomllib and writes it back with tomlkit so
that comments and formatting added by the user survive a save.
"""

import os
import tomllib
from pathlib import Path

import tomlkit

from ondemand.integrations.config_store.abc import (
    ConfigStore,
    OnDemandConfig,
    default_package_path,
)

CONFIG_PATH_ENV = "ONDEMAND_CONFIG"
PACKAGE_PATH_ENV = "ONDEMAND_PACKAGE_PATH"
REGISTRY_ENV = "ONDEMAND_REGISTRY"


class RealConfigStore(ConfigStore):
    """Production implementation reading and writing a TOML file."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Create store for a config file.

        Args:
            config_path: Explicit location, defaults to $ONDEMAND_CONFIG or
                ~/.ondemand/config.toml
        """
        self._config_path = config_path

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path).expanduser()
        return Path.home() / ".ondemand" / "config.toml"

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> OnDemandConfig:
        """Load config from TOML, then apply environment overrides.

        Raises:
            ValueError: If the file is not valid TOML or a key has the wrong type
        """
        data: dict[str, object] = {}
        config_path = self.path()
        if config_path.exists():
            try:
                data = tomllib.loads(config_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

        package_path = data.get("package_path", "")
        if not isinstance(package_path, str):
            raise ValueError(f"'package_path' in {config_path} must be a string")
        registry = data.get("registry", "")
        if not isinstance(registry, str):
            raise ValueError(f"'registry' in {config_path} must be a string")

        package_path = os.environ.get(PACKAGE_PATH_ENV, package_path)
        registry = os.environ.get(REGISTRY_ENV, registry)

        return OnDemandConfig(
            package_path=(
                Path(package_path).expanduser().resolve()
                if package_path
                else default_package_path()
            ),
            registry=registry,
        )

    def save(self, config: OnDemandConfig) -> None:
        """Write config, keeping any existing comments.

        Raises:
            PermissionError: If the file or its directory cannot be written
        """
        config_path = self.path()

        if config_path.exists():
            with config_path.open("r", encoding="utf-8") as f:
                doc = tomlkit.load(f)
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("ondemand configuration"))

        doc["package_path"] = str(config.package_path)
        doc["registry"] = config.registry

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with config_path.open("w", encoding="utf-8") as f:
                tomlkit.dump(doc, f)
        except PermissionError:
            raise PermissionError(
                f"Cannot write config file: {config_path}\n"
                f"Check permissions on {config_path.parent}"
            ) from None
