"""Plastic: a diffuse base under a smooth or rough dielectric coat."""

from __future__ import annotations

import math
from typing import Sequence

from lumenkit.bxdf import BxDF, BxDFSampleResult, BxDFType
from lumenkit.fresnel import dielectric_reflectance
from lumenkit.microfacet import MicrofacetDistribution
from lumenkit.vector import (
    Vec3,
    cos_theta,
    reflect,
    square_to_cosine_hemisphere,
    square_to_cosine_hemisphere_pdf,
)

# Tolerance on cosines for treating two directions as a specular pair.
EPSILON = 1e-4


def _quotient(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _diffuse_term(diffuse_r: Vec3, ior: float, out: Vec3, inc: Vec3) -> tuple[float, Vec3]:
    f_out = dielectric_reflectance(1.0 / ior, out.z)
    f_in = dielectric_reflectance(1.0 / ior, inc.z)
    return f_out, diffuse_r * ((1.0 - f_out) * (1.0 - f_in) * (1.0 / (ior * ior)) / math.pi)


class PlasticBxDF(BxDF):
    """A smooth specular coat over a diffuse substrate."""

    def __init__(self, specular_r: Vec3, diffuse_r: Vec3, ior: float):
        self.specular_r = specular_r
        self.diffuse_r = diffuse_r
        self.ior = ior

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        if cos_theta(out) <= 0 or cos_theta(inc) <= 0:
            return 0.0
        ls, ld = self.specular_r.luminance(), self.diffuse_r.luminance()
        if ls + ld <= 0:
            return 0.0
        spec_prob = ls / (ls + ld)
        diff_prob = 1.0 - spec_prob
        if abs(out.z - inc.z) > EPSILON:
            spec_prob = 0.0
        diff_prob *= square_to_cosine_hemisphere_pdf(inc)
        return spec_prob + diff_prob

    def roughness(self) -> float:
        ls, ld = self.specular_r.luminance(), self.diffuse_r.luminance()
        return 1.0 - _quotient(ls, ls + ld)

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        if cos_theta(out) <= 0:
            return BxDFSampleResult()
        ls, ld = self.specular_r.luminance(), self.diffuse_r.luminance()
        if ls + ld <= 0:
            return BxDFSampleResult()
        spec_prob = ls / (ls + ld)
        if sample[0] < spec_prob:
            inc = reflect(out)
            sample_type = BxDFType.REFLECTION | BxDFType.SPECULAR
        else:
            remapped = ((sample[0] - spec_prob) / (1.0 - spec_prob), sample[1])
            inc = square_to_cosine_hemisphere(remapped)
            sample_type = BxDFType.REFLECTION | BxDFType.DIFFUSE
        return BxDFSampleResult(
            s=self._f(out, inc),
            direction_in=inc,
            pdf=self.pdf(out, inc),
            sample_type=sample_type,
        )

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        if out.z <= 0 or inc.z <= 0:
            return Vec3(0.0)
        specular = Vec3(0.0)
        if abs(out.z - inc.z) < EPSILON:
            specular = self.specular_r / inc.z
        _, diffuse = _diffuse_term(self.diffuse_r, self.ior, out, inc)
        return specular + diffuse


class RoughPlasticBxDF(BxDF):
    """A microfacet coat over a diffuse substrate."""

    def __init__(
        self,
        glossy_r: Vec3,
        diffuse_r: Vec3,
        ior: float,
        u_roughness: float,
        v_roughness: float,
        distrib: MicrofacetDistribution,
    ):
        self.glossy_r = glossy_r
        self.diffuse_r = diffuse_r
        self.ior = ior
        self.distrib = distrib
        self.alpha = (
            distrib.roughness_to_alpha(u_roughness),
            distrib.roughness_to_alpha(v_roughness),
        )

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        if cos_theta(out) <= 0 or cos_theta(inc) <= 0:
            return 0.0
        ls, ld = self.glossy_r.luminance(), self.diffuse_r.luminance()
        if ls + ld <= 0:
            return 0.0
        diff_prob = 1.0 - ls / (ls + ld)
        wh = (out + inc).normalized()
        glossy_prob = _quotient(self.distrib.d(wh, self.alpha), 4.0 * wh.dot(out))
        diff_prob *= square_to_cosine_hemisphere_pdf(inc)
        return glossy_prob + diff_prob

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        if cos_theta(out) <= 0:
            return BxDFSampleResult()
        ls, ld = self.glossy_r.luminance(), self.diffuse_r.luminance()
        if ls + ld <= 0:
            return BxDFSampleResult()
        spec_prob = ls / (ls + ld)
        if sample[0] < spec_prob:
            remapped = ((spec_prob - sample[0]) / spec_prob, sample[1])
            wh = self.distrib.sample_wh(out, remapped, self.alpha)
            inc = reflect(out, wh)
            sample_type = BxDFType.REFLECTION | BxDFType.GLOSSY
        else:
            remapped = ((sample[0] - spec_prob) / (1.0 - spec_prob), sample[1])
            inc = square_to_cosine_hemisphere(remapped)
            sample_type = BxDFType.REFLECTION | BxDFType.DIFFUSE
        return BxDFSampleResult(
            s=self._f(out, inc),
            direction_in=inc,
            pdf=self.pdf(out, inc),
            sample_type=sample_type,
        )

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        if out.z <= 0 or inc.z <= 0:
            return Vec3(0.0)
        wh = (out + inc).normalized()
        d = self.distrib.d(wh, self.alpha)
        g = self.distrib.g(out, inc, self.alpha)
        f_out, diffuse = _diffuse_term(self.diffuse_r, self.ior, out, inc)
        glossy = Vec3(f_out * d * g / (4.0 * out.z * inc.z))
        return glossy + diffuse

    def roughness(self) -> float:
        ls, ld = self.glossy_r.luminance(), self.diffuse_r.luminance()
        glossy_prob = _quotient(ls, ls + ld)
        glossy_roughness = (self.alpha[0] + self.alpha[1]) / 2.0
        return 1.0 + (glossy_roughness - 1.0) * glossy_prob