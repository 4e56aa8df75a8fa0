"""
World info file read by the web viewer.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

CHUNKS_PER_REGION = 32
BLOCKS_PER_CHUNK = 16


class ExportDetailLevelType(IntEnum):
    """Kind of geometry exported for a detail level."""

    BLOCKS = 0
    HEIGHTMAP = 1


@dataclass
class ExportDetailLevel:
    """One view of the exported world, e.g. all blocks close up, heightmap far away."""

    filename: str = ""
    type: ExportDetailLevelType = ExportDetailLevelType.BLOCKS
    chunk_span: int = field(default=1, metadata={"json": "chunkSpan"})
    block_span: int = field(default=1, metadata={"json": "blockSpan"})
    distance: int = 0

    @property
    def chunks_in_region(self) -> int:
        return CHUNKS_PER_REGION // self.chunk_span

    @property
    def blocks_in_chunk(self) -> int:
        return BLOCKS_PER_CHUNK * self.chunk_span


@dataclass
class WorldInfo:
    """The world info file contains information for the viewer."""

    home: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    materials: Optional[list[str]] = None
    views: Optional[list[ExportDetailLevel]] = None
