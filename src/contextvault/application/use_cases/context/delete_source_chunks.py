"""Delete source chunks use case - cascade for a deleted or re-ingested source."""

from contextvault.domain.exceptions import ValidationError
from contextvault.domain.value_objects import SourceType


class DeleteSourceChunksUseCase:
    """Remove every chunk cut from one source."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, source_type: str, source_id: str) -> int:
        """Returns the number of chunks deleted."""
        if source_type not in {s.value for s in SourceType}:
            raise ValidationError(f"Unknown source type: {source_type}")
        async with self._uow_factory() as uow:
            return await uow.chunks.delete_by_source(source_type, str(source_id))
