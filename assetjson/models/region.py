"""
Region info cache files.

A region info file keeps the last exported timestamp of every chunk, per
detail level, so that an export can skip unchanged chunks or resume after it
was interrupted. Property names are PascalCase, as written by the exporter.
"""

from dataclasses import dataclass, field
from typing import Optional

from .world import ExportDetailLevel


@dataclass
class RegionInfoDetailLevel:
    """Chunk timestamps for one ExportDetailLevel."""

    filename: Optional[str] = field(default=None, metadata={"json": "Filename"})
    timestamps: Optional[list[int]] = field(default=None, metadata={"json": "Timestamps"})


@dataclass
class RegionInfo:
    views: list[RegionInfoDetailLevel] = field(
        default_factory=list, metadata={"json": "Views"}
    )

    def _get_or_create(self, view: ExportDetailLevel) -> RegionInfoDetailLevel:
        for info in self.views:
            if info.filename == view.filename:
                return info

        info = RegionInfoDetailLevel(
            filename=view.filename,
            timestamps=[0] * (view.chunks_in_region * view.chunks_in_region),
        )
        self.views.append(info)
        return info

    def get_chunk_timestamp(self, view: ExportDetailLevel, x: int, z: int) -> int:
        """Last update time of the chunk at (x, z) in this region."""
        info = self._get_or_create(view)
        if info.timestamps is None:
            return 0
        return info.timestamps[x + z * view.chunks_in_region]

    def set_chunk_timestamp(self, view: ExportDetailLevel, x: int, z: int, value: int) -> None:
        info = self._get_or_create(view)
        if info.timestamps is None:
            return
        info.timestamps[x + z * view.chunks_in_region] = value
