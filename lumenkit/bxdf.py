"""Scattering-function interface shared by all surface models."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Sequence

from lumenkit.vector import Vec3


class BxDFType(IntFlag):
    """Lobe classification of a scattering event."""

    REFLECTION = 1 << 0
    TRANSMISSION = 1 << 1
    DIFFUSE = 1 << 2
    GLOSSY = 1 << 3
    SPECULAR = 1 << 4
    ALL = DIFFUSE | GLOSSY | SPECULAR | REFLECTION | TRANSMISSION


def match_flags(type_to_match: BxDFType, flags: BxDFType) -> bool:
    """True when every bit of ``flags`` is present in ``type_to_match``."""
    return (type_to_match & flags) == flags


@dataclass
class BxDFSampleResult:
    """Outcome of sampling an incident direction."""

    s: Vec3 = field(default_factory=lambda: Vec3(0.0))
    direction_in: Vec3 = field(default_factory=lambda: Vec3(0.0))
    pdf: float = 0.0
    sample_type: BxDFType = BxDFType(0)


class BxDF(ABC):
    """A scattering function in the local shading frame.

    ``out`` points towards the camera, ``inc`` towards the light.
    Subclasses implement ``_f`` and ``_sample``; the public ``f`` and
    ``sample`` add the radiance scaling for non-adjoint transport.
    """

    def is_null(self) -> bool:
        """Whether light passes straight through without change."""
        return False

    @abstractmethod
    def pdf(self, out: Vec3, inc: Vec3) -> float:
        """Solid-angle density of sampling ``inc`` given ``out``."""

    def sample(self, out: Vec3, sample: Sequence[float], adjoint: bool = False) -> BxDFSampleResult:
        result = self._sample(out, sample)
        if not adjoint:
            scale = self.eta(out, result.direction_in) ** 2
            result = dataclasses.replace(result, s=result.s * scale)
        return result

    def f(self, out: Vec3, inc: Vec3, adjoint: bool = False) -> Vec3:
        result = self._f(out, inc)
        if not adjoint:
            result = result * self.eta(out, inc) ** 2
        return result

    def eta(self, out: Vec3, inc: Vec3) -> float:
        """Relative index of refraction across the event."""
        return 1.0

    def roughness(self) -> float:
        """Estimate of surface roughness in [0, 1]."""
        return 0.0

    @abstractmethod
    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        """Sample an incident direction without transport scaling."""

    @abstractmethod
    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        """Evaluate the scattering function without transport scaling."""


class NullBxDF(BxDF):
    """Marks a surface that light passes through directly."""

    def is_null(self) -> bool:
        return True

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        return 0.0

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        return BxDFSampleResult()

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        return Vec3(0.0)