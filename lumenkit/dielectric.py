"""Smooth and rough dielectric interfaces (glass, water)."""

from __future__ import annotations

import math
import random
from typing import Sequence

from lumenkit.bxdf import BxDF, BxDFSampleResult, BxDFType
from lumenkit.fresnel import dielectric_reflectance, dielectric_reflectance_with_transmission
from lumenkit.microfacet import MicrofacetDistribution
from lumenkit.vector import Vec3, reflect


def _quotient(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _relative_eta(ior: float, out: Vec3, inc: Vec3) -> float:
    if out.z * inc.z > 0:
        return 1.0
    return 1.0 / ior if out.z > 0 else ior


class DielectricBxDF(BxDF):
    """A perfectly smooth boundary that both reflects and refracts."""

    def __init__(self, ior: float, specular_r: Vec3, specular_t: Vec3):
        self.ior = ior
        self.inv_ior = 1.0 / ior
        self.specular_r = specular_r
        self.specular_t = specular_t

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        return Vec3(0.0)

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        return 0.0

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        eta = self.ior if out.z < 0.0 else self.inv_ior
        fresnel, cos_t = dielectric_reflectance_with_transmission(eta, abs(out.z))
        if sample[0] <= fresnel:
            direction = reflect(out)
            return BxDFSampleResult(
                s=self.specular_r * fresnel / abs(direction.z),
                direction_in=direction,
                pdf=fresnel,
                sample_type=BxDFType.REFLECTION | BxDFType.SPECULAR,
            )
        direction = Vec3(-eta * out.x, -eta * out.y, -math.copysign(cos_t, out.z))
        return BxDFSampleResult(
            s=self.specular_t * (1.0 - fresnel) / abs(direction.z),
            direction_in=direction,
            pdf=1.0 - fresnel,
            sample_type=BxDFType.TRANSMISSION | BxDFType.SPECULAR,
        )

    def eta(self, out: Vec3, inc: Vec3) -> float:
        return _relative_eta(self.ior, out, inc)

    def roughness(self) -> float:
        return 0.0


class RoughDielectricBxDF(BxDF):
    """A dielectric boundary with a microfacet surface.

    The choice between reflection and refraction draws from ``rng``.
    """

    def __init__(
        self,
        ior: float,
        specular_r: Vec3,
        specular_t: Vec3,
        u_roughness: float,
        v_roughness: float,
        distrib: MicrofacetDistribution,
        rng: random.Random | None = None,
    ):
        self.ior = ior
        self.glossy_r = specular_r
        self.glossy_t = specular_t
        self.distrib = distrib
        self.alpha = (
            distrib.roughness_to_alpha(u_roughness),
            distrib.roughness_to_alpha(v_roughness),
        )
        self._rng = rng if rng is not None else random.Random()

    def _half_vector(self, out: Vec3, inc: Vec3, reflected: bool) -> tuple[float, Vec3]:
        eta = 1.0 / self.ior if out.z > 0 else self.ior
        if reflected:
            wh = (inc + out).normalized() * math.copysign(1.0, out.z)
        else:
            wh = -(inc + out * eta).normalized()
        return eta, wh

    def _f_lobe(self, out: Vec3, inc: Vec3, reflected: bool) -> Vec3:
        eta, wh = self._half_vector(out, inc, reflected)
        fresnel = dielectric_reflectance(1.0 / self.ior, out.dot(wh))
        d = self.distrib.d(wh, self.alpha)
        g = self.distrib.g(inc, out, self.alpha)
        if reflected:
            return self.glossy_r * _quotient(fresnel * d * g / 4.0, abs(inc.z * out.z))
        wh_dot_in = wh.dot(inc)
        wh_dot_out = wh.dot(out)
        denom = eta * wh_dot_out + wh_dot_in
        factor = abs(_quotient(wh_dot_in * wh_dot_out, inc.z * out.z * denom * denom))
        return self.glossy_t * ((1.0 - fresnel) * d * g * factor)

    def _pdf_lobe(self, out: Vec3, inc: Vec3, reflected: bool) -> float:
        eta, wh = self._half_vector(out, inc, reflected)
        fresnel = dielectric_reflectance(1.0 / self.ior, out.dot(wh))
        wh_pdf = self.distrib.pdf(out, wh, self.alpha)
        if wh_pdf < 1e-50:
            return 0.0
        if reflected:
            return _quotient(fresnel * wh_pdf, 4.0 * abs(out.dot(wh)))
        denom = out.dot(wh) * eta + inc.dot(wh)
        dwh_dwi = _quotient(abs(inc.dot(wh)), denom * denom)
        return wh_pdf * (1.0 - fresnel) * dwh_dwi

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        return self._f_lobe(out, inc, out.z * inc.z > 0)

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        return self._pdf_lobe(out, inc, out.z * inc.z > 0)

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        wh = self.distrib.sample_wh(out, sample, self.alpha)
        wh_dot_out = out.dot(wh)
        fresnel, cos_t = dielectric_reflectance_with_transmission(1.0 / self.ior, wh_dot_out)
        reflected = self._rng.random() < fresnel
        if reflected:
            inc = -out + 2.0 * wh_dot_out * wh
            sample_type = BxDFType.REFLECTION | BxDFType.GLOSSY
        else:
            eta = self.ior if wh_dot_out < 0.0 else 1.0 / self.ior
            sign = 1.0 if wh_dot_out > 0 else -1.0
            inc = (eta * wh_dot_out - sign * cos_t) * wh - eta * out
            sample_type = BxDFType.TRANSMISSION | BxDFType.GLOSSY
        return BxDFSampleResult(
            s=self._f_lobe(out, inc, reflected),
            direction_in=inc,
            pdf=self._pdf_lobe(out, inc, reflected),
            sample_type=sample_type,
        )

    def eta(self, out: Vec3, inc: Vec3) -> float:
        return _relative_eta(self.ior, out, inc)

    def roughness(self) -> float:
        return (self.alpha[0] + self.alpha[1]) / 2.0