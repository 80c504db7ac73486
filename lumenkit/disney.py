"""Disney principled BSDF: a weighted blend of diffuse, metal, clear-coat, glass and sheen lobes."""

from __future__ import annotations

import bisect
import itertools
import math
import random
from dataclasses import dataclass
from typing import Sequence

from lumenkit.bxdf import BxDF, BxDFSampleResult, BxDFType
from lumenkit.fresnel import dielectric_reflectance, dielectric_reflectance_with_transmission
from lumenkit.microfacet import GGXDistribution
from lumenkit.vector import Vec3, abs_cos_theta, cos_theta, square_to_cosine_hemisphere

_CLEAR_COAT_ETA = 1.5
_CLEAR_COAT_ROUGHNESS = 0.25


def _quotient(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _anisotropic_alpha(roughness: float, anisotropic: float) -> tuple[float, float]:
    aspect = math.sqrt(1.0 - 0.9 * anisotropic)
    r2 = roughness * roughness
    return max(0.0001, r2 / aspect), max(0.0001, r2 * aspect)


def _smith_masking_gtr2(v: Vec3, roughness: float) -> float:
    alpha = roughness * roughness
    a2 = alpha * alpha
    lam = (-1.0 + math.sqrt(1.0 + _quotient(v.x * v.x * a2 + v.y * v.y * a2, v.z * v.z))) / 2.0
    return 1.0 / (1.0 + lam)


def _clear_coat_alpha(gloss: float) -> float:
    return (1.0 - gloss) * 0.1 + gloss * 0.001


def _cosine_pdf(out: Vec3, inc: Vec3) -> float:
    if inc.z < 0 or out.z < 0:
        return 0.0
    return max(inc.z, 0.0) / math.pi


class _Lobe:
    """Shared completion of a sampled direction into a full sample record."""

    def eval(self, out: Vec3, inc: Vec3) -> Vec3:  # pragma: no cover - overridden
        raise NotImplementedError

    def pdf(self, out: Vec3, inc: Vec3) -> float:  # pragma: no cover - overridden
        raise NotImplementedError

    def _complete(self, out: Vec3, direction: Vec3, sample_type: BxDFType) -> BxDFSampleResult:
        return BxDFSampleResult(
            s=self.eval(out, direction),
            direction_in=direction,
            pdf=self.pdf(out, direction),
            sample_type=sample_type,
        )


@dataclass(frozen=True)
class DisneyDiffuse(_Lobe):
    """Retro-reflective diffuse lobe blended with a subsurface approximation."""

    base_color: Vec3
    roughness: float
    subsurface: float

    def eval(self, out: Vec3, inc: Vec3) -> Vec3:
        if inc.z < 0 or out.z < 0:
            return Vec3(0.0)
        wh = (inc + out).normalized()
        base = self.base_color / math.pi
        h_dot_in = abs(wh.dot(inc))

        fd90 = 0.5 + 2.0 * self.roughness * h_dot_in * h_dot_in

        def fd(w: Vec3) -> float:
            return 1.0 + (fd90 - 1.0) * (1.0 - abs_cos_theta(w)) ** 5

        base_diffuse = base * (fd(out) * fd(inc))

        fss90 = self.roughness * h_dot_in

        def fss(w: Vec3) -> float:
            return 1.0 + (fss90 - 1.0) * (1.0 - abs_cos_theta(w)) ** 5

        scale = fss(inc) * fss(out) * (
            _quotient(1.0, abs_cos_theta(inc) + abs_cos_theta(out)) - 0.5
        ) + 0.5
        subsurface = base * (1.25 * scale)
        return base_diffuse * (1.0 - self.subsurface) + subsurface * self.subsurface

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        return _cosine_pdf(out, inc)

    def sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        direction = square_to_cosine_hemisphere(sample)
        return self._complete(out, direction, BxDFType.REFLECTION | BxDFType.GLOSSY)


class DisneyMetal(_Lobe):
    """Anisotropic GGX specular lobe with Schlick Fresnel tinted by the base colour."""

    def __init__(self, base_color: Vec3, roughness: float, anisotropic: float):
        self.base_color = base_color
        roughness = min(max(roughness, 0.01), 1.0)
        self.alpha = _anisotropic_alpha(roughness, anisotropic)
        self.distrib = GGXDistribution(True)

    def eval(self, out: Vec3, inc: Vec3) -> Vec3:
        if inc.z < 0 or out.z < 0:
            return Vec3(0.0)
        wh = (inc + out).normalized()
        fresnel = self.base_color + (Vec3(1.0) - self.base_color) * (1.0 - abs_cos_theta(wh)) ** 5
        g = self.distrib.g1(inc, self.alpha) * self.distrib.g1(out, self.alpha)
        d = self.distrib.d(wh, self.alpha)
        return fresnel * (d * g) / (4.0 * abs_cos_theta(inc) * abs_cos_theta(out))

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        if inc.z < 0 or out.z < 0:
            return 0.0
        wh = (inc + out).normalized()
        return _quotient(self.distrib.pdf(out, wh, self.alpha), 4.0 * out.dot(wh))

    def sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        if cos_theta(out) < 0:
            return self._complete(out, Vec3(0.0), BxDFType(0))
        wh = self.distrib.sample_wh(out, sample, self.alpha)
        reflected = (-out + 2.0 * out.dot(wh) * wh).normalized()
        return self._complete(out, reflected, BxDFType.REFLECTION | BxDFType.GLOSSY)


@dataclass(frozen=True)
class DisneyClearCoat(_Lobe):
    """Fixed-index GTR1 coat lobe whose width is set by the gloss."""

    clear_coat_gloss: float

    def eval(self, out: Vec3, inc: Vec3) -> Vec3:
        if inc.z < 0 or out.z < 0:
            return Vec3(0.0)
        wh = (inc + out).normalized()
        r0 = ((_CLEAR_COAT_ETA - 1.0) / (_CLEAR_COAT_ETA + 1.0)) ** 2
        fresnel = r0 + (1.0 - r0) * (1.0 - abs(wh.dot(inc))) ** 5
        alpha_g = _clear_coat_alpha(self.clear_coat_gloss)
        d = (alpha_g * alpha_g - 1.0) / (
            math.pi * 2.0 * math.log(alpha_g) * (1.0 + (alpha_g * alpha_g - 1.0) * wh.z * wh.z)
        )
        g = _smith_masking_gtr2(inc, _CLEAR_COAT_ROUGHNESS) * _smith_masking_gtr2(
            out, _CLEAR_COAT_ROUGHNESS
        )
        return Vec3(fresnel) * (d * g) / (4.0 * abs(inc.z * out.z))

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        if cos_theta(out) < 0 or cos_theta(inc) < 0:
            return 0.0
        wh = (inc + out).normalized()
        alpha_g = _clear_coat_alpha(self.clear_coat_gloss)
        alpha_g2 = alpha_g * alpha_g
        d = (alpha_g2 - 1.0) / math.log(alpha_g2) / math.pi / (1.0 + (alpha_g2 - 1.0) * wh.z * wh.z)
        return _quotient(d * abs_cos_theta(wh), 4.0 * abs(wh.dot(inc)))

    def sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        if cos_theta(out) < 0:
            return self._complete(out, Vec3(0.0), BxDFType(0))
        u, v = sample
        alpha_g = _clear_coat_alpha(self.clear_coat_gloss)
        alpha_g2 = alpha_g * alpha_g
        cos_t = math.sqrt((1.0 - alpha_g2 ** (1.0 - u)) / (1.0 - alpha_g2))
        sin_t = math.sqrt(max(0.0, 1.0 - cos_t * cos_t))
        phi = v * math.pi * 2.0
        wh = Vec3(sin_t * math.cos(phi), sin_t * math.sin(phi), cos_t)
        direction = (-out + 2.0 * out.dot(wh) * wh).normalized()
        return self._complete(out, direction, BxDFType.GLOSSY | BxDFType.REFLECTION)


class DisneyGlass(_Lobe):
    """Rough dielectric lobe; reflection versus refraction is drawn from ``rng``."""

    def __init__(
        self,
        base_color: Vec3,
        roughness: float,
        anisotropic: float,
        eta: float,
        rng: random.Random | None = None,
    ):
        self.base_color = base_color
        self.eta = eta
        roughness = min(max(roughness, 0.01), 1.0)
        self.alpha = _anisotropic_alpha(roughness, anisotropic)
        self.distrib = GGXDistribution(True)
        self._rng = rng if rng is not None else random.Random()

    def _half_vector(self, out: Vec3, inc: Vec3) -> tuple[bool, float, Vec3]:
        reflected = cos_theta(out) * cos_theta(inc) > 0
        eta = 1.0 / self.eta if out.z > 0 else self.eta
        if reflected:
            wh = (inc + out).normalized() * math.copysign(1.0, out.z)
        else:
            wh = -(inc + out * eta).normalized()
        return reflected, eta, wh

    def eval(self, out: Vec3, inc: Vec3) -> Vec3:
        reflected, eta, wh = self._half_vector(out, inc)
        fresnel = dielectric_reflectance(1.0 / self.eta, out.dot(wh))
        d = self.distrib.d(wh, self.alpha)
        g = self.distrib.g1(out, self.alpha) * self.distrib.g1(inc, self.alpha)
        if reflected:
            return self.base_color * (fresnel * d * g) / (4.0 * abs(inc.z * out.z))
        denom = wh.dot(out) * eta + wh.dot(inc)
        factor = _quotient(
            (1.0 - fresnel) * d * g * abs(wh.dot(out) * wh.dot(inc)),
            abs(inc.z * out.z) * abs(denom * denom),
        )
        return self.base_color.sqrt() * factor

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        reflected, eta, wh = self._half_vector(out, inc)
        fresnel = dielectric_reflectance(1.0 / self.eta, out.dot(wh))
        wh_pdf = self.distrib.pdf(out, wh, self.alpha)
        if reflected:
            return _quotient(fresnel * wh_pdf, 4.0 * abs(out.dot(wh)))
        denom = out.dot(wh) * eta + inc.dot(wh)
        dwh_dwi = _quotient(abs(inc.dot(wh)), denom * denom)
        return wh_pdf * (1.0 - fresnel) * dwh_dwi

    def sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        wh = self.distrib.sample_wh(out, sample, self.alpha)
        wh_dot_out = wh.dot(out)
        fresnel, cos_t = dielectric_reflectance_with_transmission(1.0 / self.eta, wh_dot_out)
        if self._rng.random() < fresnel:
            direction = -out + 2.0 * out.dot(wh) * wh
            return self._complete(out, direction, BxDFType.REFLECTION | BxDFType.GLOSSY)
        eta = self.eta if wh_dot_out < 0 else 1.0 / self.eta
        sign = 1.0 if wh_dot_out > 0 else -1.0
        direction = (eta * wh_dot_out - sign * cos_t) * wh - eta * out
        return self._complete(out, direction, BxDFType.TRANSMISSION | BxDFType.GLOSSY)


@dataclass(frozen=True)
class DisneySheen(_Lobe):
    """Grazing-angle sheen, optionally tinted towards the base hue."""

    base_color: Vec3
    sheen_tint: float

    def eval(self, out: Vec3, inc: Vec3) -> Vec3:
        if inc.z < 0 or out.z < 0:
            return Vec3(0.0)
        wh = (inc + out).normalized()
        lum = self.base_color.luminance()
        tint = self.base_color / lum if lum > 0 else Vec3(1.0)
        sheen = Vec3(1.0 - self.sheen_tint) + tint * self.sheen_tint
        return sheen * (1.0 - abs(wh.dot(inc))) ** 5

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        return _cosine_pdf(out, inc)

    def sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        direction = square_to_cosine_hemisphere(sample)
        return self._complete(out, direction, BxDFType.REFLECTION | BxDFType.GLOSSY)


class DisneyBSDF(BxDF):
    """The principled BSDF built from its five lobes and their weights."""

    def __init__(
        self,
        base_color: Vec3,
        specular_transmission: float,
        metallic: float,
        subsurface: float,
        specular: float,
        roughness: float,
        specular_tint: float,
        anisotropic: float,
        sheen: float,
        sheen_tint: float,
        clear_coat: float,
        clear_coat_gloss: float,
        eta: float,
        rng: random.Random | None = None,
    ):
        self._rng = rng if rng is not None else random.Random()
        self.diffuse = DisneyDiffuse(base_color, roughness, subsurface)
        self.metal = DisneyMetal(base_color, roughness, anisotropic)
        self.clear_coat_lobe = DisneyClearCoat(clear_coat_gloss)
        self.glass = DisneyGlass(base_color, roughness, anisotropic, eta, rng=self._rng)
        self.sheen_lobe = DisneySheen(base_color, sheen_tint)
        self.specular_transmission = specular_transmission
        self.metallic = metallic
        self.specular = specular
        self._roughness = roughness
        self.sheen = sheen
        self.clear_coat = clear_coat
        self.ior = eta

    def _weights(self) -> tuple[float, float, float, float]:
        """Diffuse, metal, glass and clear-coat weights."""
        m, st = self.metallic, self.specular_transmission
        return (1 - m) * (1 - st), 1 - st * (1 - m), (1 - m) * st, 0.25 * self.clear_coat

    def _f(self, out: Vec3, inc: Vec3) -> Vec3:
        glass_weight = (1 - self.metallic) * self.specular_transmission
        glass = self.metal.eval(out, inc) * glass_weight if glass_weight > 0 else Vec3(0.0)
        if cos_theta(out) < 0:
            return glass
        diffuse_w = (1 - self.specular_transmission) * (1 - self.metallic)
        metal_w = 1 - self.specular_transmission * (1 - self.metallic)
        sheen_w = (1 - self.metallic) * self.sheen
        coat_w = 0.25 * self.clear_coat
        total = glass
        for weight, lobe in (
            (diffuse_w, self.diffuse),
            (metal_w, self.metal),
            (coat_w, self.clear_coat_lobe),
            (sheen_w, self.sheen_lobe),
        ):
            if weight > 0:
                total = total + lobe.eval(out, inc) * weight
        return total

    def pdf(self, out: Vec3, inc: Vec3) -> float:
        if out.z < 0:
            return self.glass.pdf(out, inc)
        diffuse_w, metal_w, glass_w, coat_w = self._weights()
        all_weight = diffuse_w + metal_w + glass_w + coat_w
        total = 0.0
        for weight, lobe in (
            (diffuse_w, self.diffuse),
            (metal_w, self.metal),
            (coat_w, self.clear_coat_lobe),
            (glass_w, self.sheen_lobe),
        ):
            if weight > 0:
                total += weight * lobe.pdf(out, inc)
        return _quotient(total, all_weight)

    def _sample(self, out: Vec3, sample: Sequence[float]) -> BxDFSampleResult:
        if out.z < 0:
            return self.glass.sample(out, sample)
        weights = self._weights()
        lobes = (self.diffuse, self.metal, self.glass, self.clear_coat_lobe)
        total = sum(weights)
        if total > 0:
            cdf = [c / total for c in itertools.accumulate(weights)]
        else:
            cdf = [(i + 1) / len(weights) for i in range(len(weights))]
        index = min(bisect.bisect_right(cdf, self._rng.random()), len(lobes) - 1)
        return lobes[index].sample(out, sample)

    def eta(self, out: Vec3, inc: Vec3) -> float:
        if cos_theta(out) * cos_theta(inc) > 0:
            return 1.0
        return 1.0 / self.ior if out.z > 0 else self.ior

    def roughness(self) -> float:
        return self._roughness