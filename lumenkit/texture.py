"""Textures: constant, mixed and procedural values looked up at surface hits."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Optional, Sequence, Tuple, TypeVar, Union

from lumenkit.vector import Vec3

T = TypeVar("T")
C = TypeVar("C")

Point2 = Tuple[float, float]


@dataclass
class Intersection:
    """The geometric record of a ray hitting a surface."""

    t: float = 0.0
    position: Vec3 = field(default_factory=lambda: Vec3(0.0))
    uv: Point2 = (0.0, 0.0)
    geometry_normal: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 1.0))


@dataclass
class TextureCoord(Generic[C]):
    """A texture coordinate with its optional screen-space derivatives."""

    coord: C
    dcdx: Optional[C] = None
    dcdy: Optional[C] = None


class Texture(ABC, Generic[T]):
    """A value that varies over a surface."""

    @abstractmethod
    def eval(self, intersection: Intersection) -> T:
        """Value of the texture at ``intersection``."""


class ConstantTexture(Texture[T]):
    """The same value everywhere."""

    def __init__(self, value: T):
        self.value = value

    def eval(self, intersection: Intersection) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"ConstantTexture({self.value!r})"


class MixTexture(Texture[T]):
    """Blend of two textures, ``factor`` weighting the first."""

    def __init__(self, src_a: Texture[T], src_b: Texture[T], factor: Texture[float]):
        self.src_a = src_a
        self.src_b = src_b
        self.factor = factor

    def eval(self, intersection: Intersection) -> T:
        alpha = self.factor.eval(intersection)
        return self.src_a.eval(intersection) * alpha + self.src_b.eval(intersection) * (1 - alpha)


class TextureMapping(ABC, Generic[C]):
    """Maps a surface hit to texture coordinates."""

    @abstractmethod
    def mapping(self, intersection: Intersection) -> TextureCoord[C]:
        """Texture coordinate of ``intersection``."""


class UVTextureMapping2D(TextureMapping[Point2]):
    """Uses the surface's own uv parameterisation."""

    def mapping(self, intersection: Intersection) -> TextureCoord[Point2]:
        return TextureCoord(tuple(intersection.uv))


class NaturalTextureMapping3D(TextureMapping[Vec3]):
    """Uses the hit position in world space."""

    def mapping(self, intersection: Intersection) -> TextureCoord[Vec3]:
        return TextureCoord(intersection.position)


class StdTexture(Texture[T], Generic[T, C]):
    """A texture evaluated at coordinates produced by a mapping."""

    def __init__(self, mapping: TextureMapping[C]):
        self.mapping = mapping

    def eval(self, intersection: Intersection) -> T:
        return self.eval_coord(self.mapping.mapping(intersection))

    @abstractmethod
    def eval_coord(self, coord: TextureCoord[C]) -> T:
        """Value of the texture at a texture coordinate."""


class Checkerboard2D(StdTexture[float, Point2]):
    """Alternating 0/1 unit squares in uv space."""

    def __init__(self, mapping: Optional[TextureMapping[Point2]] = None):
        super().__init__(mapping if mapping is not None else UVTextureMapping2D())

    def eval_coord(self, coord: TextureCoord[Point2]) -> float:
        u, v = coord.coord
        return 1.0 if int(math.floor(u) + math.floor(v)) & 1 else 0.0


class Checkerboard3D(StdTexture[float, Vec3]):
    """Alternating 0/1 unit cubes in world space."""

    def __init__(self, mapping: Optional[TextureMapping[Vec3]] = None):
        super().__init__(mapping if mapping is not None else NaturalTextureMapping3D())

    def eval_coord(self, coord: TextureCoord[Vec3]) -> float:
        x, y, z = coord.coord
        return 1.0 if int(math.floor(x) + math.floor(y) + math.floor(z)) & 1 else 0.0


def _constant_from_number(value: float, default: Any) -> Union[float, Vec3]:
    if isinstance(default, Vec3):
        return Vec3(float(value))
    return float(value)


def _vec_from_list(values: Sequence[Any]) -> Vec3:
    if len(values) == 1:
        return Vec3(float(values[0]))
    if len(values) == 3:
        return Vec3(*(float(v) for v in values))
    raise ValueError(f"a colour needs one or three components, got {len(values)}")


def load_texture(config: Any, default: Any = None) -> Optional[Texture[Any]]:
    """Build a texture from a configuration value.

    Numbers and arrays become constant textures. Anything that gives no
    texture (null, objects) falls back to a constant ``default``, or to
    ``None`` when no default is given. Image file names are not supported.
    """
    texture: Optional[Texture[Any]] = None
    if config is None or isinstance(config, bool):
        texture = None
    elif isinstance(config, (int, float)):
        texture = ConstantTexture(_constant_from_number(config, default))
    elif isinstance(config, (list, tuple)):
        texture = ConstantTexture(_vec_from_list(config))
    elif isinstance(config, str):
        raise ValueError(f"image textures are not supported: {config!r}")
    if texture is None and default is not None:
        return ConstantTexture(default)
    return texture


def load_texture_field(parent: Mapping[str, Any], field: str, default: Any) -> Texture[Any]:
    """Build the texture stored under ``field``, or a constant ``default`` if absent."""
    if field not in parent:
        return ConstantTexture(default)
    return load_texture(parent[field], default)