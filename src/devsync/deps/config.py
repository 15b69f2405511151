"""Configuration dependency injection for devsync."""

from typing import Annotated

from fastapi import Depends

from devsync.config import ConfigManager, DevSyncConfig


def get_app_config() -> DevSyncConfig:  # pragma: no cover
    return ConfigManager().config


AppConfigDep = Annotated[DevSyncConfig, Depends(get_app_config)]
