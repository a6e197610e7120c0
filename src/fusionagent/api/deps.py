"""Dependency injection for FastAPI routes.

Provides the singleton config service and fusion engine. Tests replace them
through app.dependency_overrides.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from fusionagent.channels.authority import AuthorityTable
from fusionagent.channels.registry import ChannelRegistry, build_default_registry
from fusionagent.engine.fusion import FusionEngine
from fusionagent.services import ConfigService


@lru_cache
def get_config_service() -> ConfigService:
    """Get the singleton ConfigService instance."""
    return ConfigService()


@lru_cache
def get_channel_registry() -> ChannelRegistry:
    """Get the shared, read-only ChannelRegistry."""
    return build_default_registry()


@lru_cache
def get_fusion_engine() -> FusionEngine:
    """Get the singleton FusionEngine instance.

    The engine holds only read-only state (registry, authority table, config),
    so one instance serves every request.
    """
    config = get_config_service().load()
    return FusionEngine(
        registry=get_channel_registry(),
        authority=AuthorityTable.with_overrides(config.fusion.authority_overrides),
        config=config.fusion,
    )


ChannelRegistryDep = Annotated[ChannelRegistry, Depends(get_channel_registry)]
FusionEngineDep = Annotated[FusionEngine, Depends(get_fusion_engine)]
