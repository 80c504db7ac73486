"""Smooth and rough metallic reflection."""

from __future__ import annotations

import math
from typing import Sequence

from lumenkit.bxdf import BxDF, BxDFSampleResult, BxDFType
from lumenkit.fresnel import conductor_reflectance_rgb
from lumenkit.microfacet import MicrofacetDistribution
from lumenkit.vector import Vec3, abs_cos_theta, cos2_theta, cos_theta, reflect


def _quotient(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


class ConductorBxDF(BxDF):
    """A perfectly smooth conductor with complex index ``eta + i k``."""

    def __init__(self, eta: Vec3, k: Vec3, albedo: Vec3):
        self.eta_rgb = eta
        self.k = k
        self.albedo = albedo

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        return Vec3(0.0)

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        return 0.0

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        direction = reflect(out)
        fresnel = conductor_reflectance_rgb(self.eta_rgb, self.k, out.z)
        return BxDFSampleResult(
            s=self.albedo * fresnel / abs(direction.z),
            direction_in=direction,
            pdf=1.0,
            sample_type=BxDFType.REFLECTION | BxDFType.SPECULAR,
        )

    def roughness(self) -> float:
        return 0.0


class RoughConductorBxDF(BxDF):
    """A conductor with a microfacet surface."""

    def __init__(
        self,
        eta: Vec3,
        k: Vec3,
        albedo: Vec3,
        u_roughness: float,
        v_roughness: float,
        distrib: MicrofacetDistribution,
    ):
        self.eta_rgb = eta
        self.k = k
        self.albedo = albedo
        self.distrib = distrib
        self.alpha = (
            distrib.roughness_to_alpha(u_roughness),
            distrib.roughness_to_alpha(v_roughness),
        )

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        cos_o, cos_i = abs_cos_theta(out), abs_cos_theta(inc)
        wh = inc + out
        if cos_i == 0 or cos_o == 0:
            return Vec3(0.0)
        if wh.x == 0 and wh.y == 0 and wh.z == 0:
            return Vec3(0.0)
        wh = wh.normalized()
        cos_i_h = inc.dot(wh if wh.z > 0 else -wh)
        fresnel = conductor_reflectance_rgb(self.eta_rgb, self.k, cos_i_h)
        scale = (
            self.distrib.d(wh, self.alpha)
            * self.distrib.g(out, inc, self.alpha)
            / (4.0 * cos_i * cos_o)
        )
        return self.albedo * (fresnel * scale)

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        if cos_theta(out) * cos2_theta(inc) < 0:
            return 0.0
        wh = (out + inc).normalized()
        return _quotient(self.distrib.pdf(out, wh, self.alpha), 4.0 * out.dot(wh))

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        wh = self.distrib.sample_wh(out, sample, self.alpha)
        inc = reflect(out, wh)
        if cos_theta(out) * cos2_theta(inc) < 0:
            return BxDFSampleResult()
        return BxDFSampleResult(
            s=self._f(out, inc),
            direction_in=inc,
            pdf=_quotient(self.distrib.pdf(out, wh, self.alpha), 4.0 * out.dot(wh)),
            sample_type=BxDFType.REFLECTION | BxDFType.GLOSSY,
        )

    def roughness(self) -> float:
        return (self.alpha[0] + self.alpha[1]) / 2.0