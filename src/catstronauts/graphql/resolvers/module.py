from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...datasources.errors import NotFound
from ...logging import get_logger
from ..context import get_track_api
from .track import module_from_api

if TYPE_CHECKING:
    from ..types.track import Module

logger = get_logger(__name__)


async def resolve_module_by_id(info: strawberry.Info, id: str) -> Module:
    """Resolve a single module by its ID."""
    try:
        module = await get_track_api(info).get_module(id)
    except NotFound:
        logger.info("Module not found", module_id=id)
        raise

    return module_from_api(module)
