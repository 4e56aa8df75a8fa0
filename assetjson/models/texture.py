"""
Texture meta files (.mcmeta) carrying animation data.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TextureAnimation:
    """Animation settings of an animated texture."""

    frame_time: int = field(default=1, metadata={"json": "frametime"})
    frames: Optional[list[int]] = None


@dataclass
class TextureMeta:
    """The texture meta file. This contains animation data."""

    animation: Optional[TextureAnimation] = None
