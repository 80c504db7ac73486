"""Ideal specular reflection."""

from __future__ import annotations

from typing import Sequence

from lumenkit.bxdf import BxDF, BxDFSampleResult, BxDFType
from lumenkit.vector import Vec3


class MirrorBxDF(BxDF):
    """A perfect mirror: all light leaves in the reflected direction."""

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        return Vec3(0.0)

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        return 0.0

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        direction = Vec3(-out.x, -out.y, out.z)
        return BxDFSampleResult(
            s=Vec3(1.0) / abs(direction.z),
            direction_in=direction,
            pdf=1.0,
            sample_type=BxDFType.REFLECTION | BxDFType.SPECULAR,
        )

    def roughness(self) -> float:
        return 0.0