"""Ideal diffuse (Lambertian) reflection."""

from __future__ import annotations

import math
from typing import Sequence

from lumenkit.bxdf import BxDF, BxDFSampleResult, BxDFType
from lumenkit.vector import (
    Vec3,
    square_to_uniform_hemisphere,
    square_to_uniform_hemisphere_pdf,
)


class LambertianBxDF(BxDF):
    """Scatters light equally in all directions above the surface."""

    def __init__(self, albedo: Vec3):
        self.albedo = albedo

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        if inc.z < 0 or out.z < 0:
            return Vec3(0.0)
        return self.albedo * (1.0 / math.pi)

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        return square_to_uniform_hemisphere_pdf(inc)

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        wi = square_to_uniform_hemisphere(sample)
        return BxDFSampleResult(
            s=self._f(out, wi),
            direction_in=wi,
            pdf=self.pdf(out, wi),
            sample_type=BxDFType.DIFFUSE | BxDFType.REFLECTION,
        )

    def roughness(self) -> float:
        return 1.0