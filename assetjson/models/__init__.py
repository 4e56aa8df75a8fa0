"""
Record types exchanged with the asset export pipeline.
"""

from .blockstate import (
    BlockState,
    BlockStateMultipart,
    BlockStateVariant,
    BlockStateVariants,
    BlockStateWhen,
)
from .model import (
    Axis,
    Direction,
    Model,
    ModelDisplay,
    ModelElement,
    ModelElementFace,
    ModelElementFaces,
    ModelRotation,
    ModelTransform,
)
from .region import RegionInfo, RegionInfoDetailLevel
from .texture import TextureAnimation, TextureMeta
from .world import ExportDetailLevel, ExportDetailLevelType, WorldInfo

__all__ = [
    "BlockState", "BlockStateMultipart", "BlockStateVariant", "BlockStateVariants",
    "BlockStateWhen",
    "Axis", "Direction", "Model", "ModelDisplay", "ModelElement", "ModelElementFace",
    "ModelElementFaces", "ModelRotation", "ModelTransform",
    "RegionInfo", "RegionInfoDetailLevel",
    "TextureAnimation", "TextureMeta",
    "ExportDetailLevel", "ExportDetailLevelType", "WorldInfo",
]
