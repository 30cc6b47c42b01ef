"""Pipeline protocol for end-to-end searches."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from ambos.data import SourceType

if TYPE_CHECKING:
    from ambos.pipeline.osint import PipelineResult


class Pipeline(Protocol):
    """Interface for end-to-end search pipelines."""

    async def run(
        self,
        query: str,
        *,
        language: str = "en",
        source_type: SourceType = SourceType.NEWS,
        platforms: Sequence[str] = (),
    ) -> "PipelineResult":
        """Enrich ``query``, fetch matching articles and analyze them."""
        ...
