"""
Block and item model definitions (assets/<namespace>/models/*.json).
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional

from ..core.string_map import StringMap

# Guards against reference cycles in texture tables
MAX_TEXTURE_REFERENCE_DEPTH = 16


class Axis(Enum):
    X = "x"
    Y = "y"
    Z = "z"


class Direction(Enum):
    DOWN = "down"
    UP = "up"
    NORTH = "north"
    SOUTH = "south"
    WEST = "west"
    EAST = "east"


@dataclass
class ModelTransform:
    rotation: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    translation: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    scale: list[float] = field(default_factory=lambda: [1.0, 1.0, 1.0])


@dataclass
class ModelDisplay:
    """Transforms applied when the model is shown in a given context."""

    gui: Optional[ModelTransform] = None
    ground: Optional[ModelTransform] = None
    fixed: Optional[ModelTransform] = None
    third_person_right_hand: Optional[ModelTransform] = field(
        default=None, metadata={"json": "thirdperson_righthand"}
    )
    first_person_right_hand: Optional[ModelTransform] = field(
        default=None, metadata={"json": "firstperson_righthand"}
    )
    first_person_left_hand: Optional[ModelTransform] = field(
        default=None, metadata={"json": "firstperson_lefthand"}
    )

    @staticmethod
    def merge(
        display: Optional["ModelDisplay"], parent: Optional["ModelDisplay"]
    ) -> Optional["ModelDisplay"]:
        """Combine two displays, transforms of ``display`` taking precedence."""
        if display is None:
            return parent
        if parent is None:
            return display
        return ModelDisplay(**{
            f.name: getattr(display, f.name) or getattr(parent, f.name)
            for f in fields(ModelDisplay)
        })


@dataclass
class ModelRotation:
    origin: list[float] = field(default_factory=lambda: [8.0, 8.0, 8.0])
    axis: Axis = Axis.Y
    angle: float = 0.0
    rescale: bool = False


@dataclass
class ModelElementFace:
    uv: Optional[list[float]] = None
    rotation: Optional[int] = None
    texture: Optional[str] = None
    cull_face: Optional[Direction] = field(default=None, metadata={"json": "cullface"})
    tint_index: Optional[int] = field(default=None, metadata={"json": "tintindex"})


@dataclass
class ModelElementFaces:
    down: Optional[ModelElementFace] = None
    up: Optional[ModelElementFace] = None
    north: Optional[ModelElementFace] = None
    south: Optional[ModelElementFace] = None
    west: Optional[ModelElementFace] = None
    east: Optional[ModelElementFace] = None

    def get_faces(self) -> list[tuple[Direction, ModelElementFace]]:
        """Faces that are defined, with their direction."""
        result = []
        for direction in Direction:
            face = getattr(self, direction.value)
            if face is not None:
                result.append((direction, face))
        return result


@dataclass
class ModelElement:
    """A cuboid of the model, in 1/16 block units."""

    from_: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0], metadata={"json": "from"})
    to: list[float] = field(default_factory=lambda: [16.0, 16.0, 16.0])
    rotation: Optional[ModelRotation] = None
    shade: Optional[bool] = None
    faces: Optional[ModelElementFaces] = None


@dataclass
class Model:
    """A model file. Textures are a string map, which some packs fill with non-string values."""

    gui_light: Optional[str] = None
    display: Optional[ModelDisplay] = None
    parent: Optional[str] = None
    ambient_occlusion: Optional[bool] = field(default=None, metadata={"json": "ambientocclusion"})
    textures: Optional[StringMap] = None
    elements: Optional[list[ModelElement]] = None

    def merge(self, parent: "Model") -> "Model":
        """Combine this model with its already loaded parent.

        Values of this model win; texture tables are merged key by key. The
        result keeps the parent's own parent so that the chain can be walked
        further.
        """
        return Model(
            gui_light=self.gui_light if self.gui_light is not None else parent.gui_light,
            display=ModelDisplay.merge(self.display, parent.display),
            parent=parent.parent,
            ambient_occlusion=(
                self.ambient_occlusion
                if self.ambient_occlusion is not None
                else parent.ambient_occlusion
            ),
            textures=_merge_textures(self.textures, parent.textures),
            elements=self.elements if self.elements is not None else parent.elements,
        )

    def resolve_texture(self, key: Optional[str]) -> Optional[str]:
        """Follow '#name' references through the texture table.

        Returns the texture path, or None when the reference cannot be
        resolved.
        """
        for _ in range(MAX_TEXTURE_REFERENCE_DEPTH):
            if key is None:
                return None
            if not key.startswith("#"):
                return key
            if self.textures is None:
                return None
            key = self.textures.get(key[1:])
        return None


def _merge_textures(
    textures: Optional[StringMap], parent: Optional[StringMap]
) -> Optional[StringMap]:
    if textures is None:
        return parent
    if parent is None:
        return textures
    merged = StringMap(parent)
    merged.update(textures)
    return merged
