"""Context weight use cases - read and set a source's retrieval weight."""

import logging

from contextvault.domain.exceptions import NotFound, ValidationError
from contextvault.domain.value_objects import SourceType, is_valid_weight

logger = logging.getLogger(__name__)

# Item types as named by the workspace UI.
_ITEM_TYPES = {
    "document": SourceType.DOCUMENT,
    "url": SourceType.URL,
    "notebook": SourceType.NOTE,
    "note": SourceType.NOTE,
    "youtube": SourceType.YOUTUBE,
}


def resolve_item_type(item_type: object) -> SourceType:
    if not isinstance(item_type, str):
        raise ValidationError("itemType must be a string")
    try:
        return _ITEM_TYPES[item_type]
    except KeyError:
        raise ValidationError(
            "Invalid itemType. Must be document, url, notebook or youtube"
        ) from None


class UpdateContextWeightUseCase:
    """Set context_weight on every chunk of a source. Weight 0 excludes it from retrieval."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, item_id: str, item_type: str, weight: object) -> int:
        """Returns the number of chunks updated."""
        if not str(item_id or "").strip():
            raise ValidationError("itemId is required")
        source_type = resolve_item_type(item_type)
        if not is_valid_weight(weight):
            raise ValidationError("Weight must be between 0 and 100")

        async with self._uow_factory() as uow:
            updated = await uow.chunks.update_weight(source_type, str(item_id), weight)
        logger.info(
            "Context weight of %s %s set to %d (%d chunks)", source_type, item_id, weight, updated
        )
        return updated


class GetContextWeightUseCase:
    """Read the context weight of a source."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, item_id: str, item_type: str) -> int:
        if not str(item_id or "").strip():
            raise ValidationError("itemId is required")
        source_type = resolve_item_type(item_type)
        async with self._uow_factory() as uow:
            weight = await uow.chunks.get_weight(source_type, str(item_id))
        if weight is None:
            raise NotFound(f"No context chunks for {source_type} {item_id}")
        return weight
