"""Microfacet normal distributions: Beckmann and GGX."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Mapping, Sequence

from lumenkit.vector import (
    Vec3,
    abs_cos_theta,
    cos2_phi,
    cos2_theta,
    sin2_phi,
    tan2_theta,
    tan_theta,
)

Alpha = Sequence[float]


class MicrofacetDistribution(ABC):
    """A distribution of microfacet normals with Smith shadowing."""

    def __init__(self, sample_visible_area: bool):
        self.sample_visible_area = sample_visible_area

    @abstractmethod
    def roughness_to_alpha(self, roughness: float) -> float:
        """Map a user roughness to the distribution's alpha."""

    @abstractmethod
    def d(self, wh: Vec3, alpha: Alpha) -> float:
        """Density of microfacet normal ``wh``."""

    @abstractmethod
    def lambda_(self, w: Vec3, alpha: Alpha) -> float:
        """Smith auxiliary function for direction ``w``."""

    def g1(self, w: Vec3, alpha: Alpha) -> float:
        """Smith masking for one direction."""
        return 1.0 / (1.0 + self.lambda_(w, alpha))

    def g(self, wo: Vec3, wi: Vec3, alpha: Alpha) -> float:
        """Height-correlated masking-shadowing."""
        return 1.0 / (1.0 + self.lambda_(wo, alpha) + self.lambda_(wi, alpha))

    @abstractmethod
    def sample_wh(self, wo: Vec3, u: Sequence[float], alpha: Alpha) -> Vec3:
        """Sample a microfacet normal."""

    def pdf(self, wo: Vec3, wh: Vec3, alpha: Alpha) -> float:
        """Density of ``sample_wh`` producing ``wh``."""
        if self.sample_visible_area:
            cos_o = abs_cos_theta(wo)
            if cos_o == 0:
                return math.nan
            return self.d(wh, alpha) * self.g1(wo, alpha) * abs(wo.dot(wh)) / cos_o
        return self.d(wh, alpha) * abs_cos_theta(wh)


class BeckmannDistribution(MicrofacetDistribution):
    """Beckmann distribution; visible-normal sampling is not supported."""

    def __init__(self, sample_visible_area: bool = False):
        super().__init__(False)

    def roughness_to_alpha(self, roughness: float) -> float:
        return max(roughness, 1e-3)

    def d(self, wh: Vec3, alpha: Alpha) -> float:
        ax, ay = alpha
        tan2 = tan2_theta(wh)
        if math.isinf(tan2):
            return 0.0
        cos4 = cos2_theta(wh) * cos2_theta(wh)
        return math.exp(-tan2 * (cos2_phi(wh) / (ax * ax) + sin2_phi(wh) / (ay * ay))) / (
            math.pi * ax * ay * cos4
        )

    def lambda_(self, w: Vec3, alpha: Alpha) -> float:
        ax, ay = alpha
        abs_tan = abs(tan_theta(w))
        if math.isinf(abs_tan):
            return 0.0
        a_w = math.sqrt(cos2_phi(w) * ax * ax + sin2_phi(w) * ay * ay)
        denom = a_w * abs_tan
        if denom == 0:
            return 0.0
        a = 1.0 / denom
        if a >= 1.6:
            return 0.0
        return (1.0 - 1.259 * a + 0.396 * a * a) / (3.535 * a + 2.181 * a * a)

    def sample_wh(self, wo: Vec3, u: Sequence[float], alpha: Alpha) -> Vec3:
        ax, ay = alpha
        u0, u1 = u
        if ax == ay:
            tan2 = -math.log(1.0 - u0) * ax * ax
            phi = u1 * 2.0 * math.pi
        else:
            phi = math.atan(ay / ax * math.tan(2.0 * math.pi * u1 + 0.5 * math.pi))
            if u1 > 0.5:
                phi += math.pi
            sin_phi, cos_phi = math.sin(phi), math.cos(phi)
            tan2 = -math.log(1.0 - u0) / (
                cos_phi * cos_phi / (ax * ax) + sin_phi * sin_phi / (ay * ay)
            )
        cos_t = math.sqrt(1.0 / (1.0 + tan2))
        sin_t = 0.0 if tan2 == 0 else math.sqrt(1.0 / (1.0 + 1.0 / tan2))
        return Vec3(sin_t * math.cos(phi), sin_t * math.sin(phi), cos_t)


class GGXDistribution(MicrofacetDistribution):
    """Trowbridge-Reitz (GGX) distribution, sampling visible normals by default."""

    def __init__(self, sample_visible_area: bool = True):
        super().__init__(sample_visible_area)

    def roughness_to_alpha(self, roughness: float) -> float:
        return roughness

    def d(self, wh: Vec3, alpha: Alpha) -> float:
        ax, ay = alpha
        t = wh.x * wh.x / (ax * ax) + wh.y * wh.y / (ay * ay) + wh.z * wh.z
        return 1.0 / (math.pi * ax * ay * t * t)

    def g(self, wo: Vec3, wi: Vec3, alpha: Alpha) -> float:
        return self.g1(wo, alpha) * self.g1(wi, alpha)

    def lambda_(self, w: Vec3, alpha: Alpha) -> float:
        ax, ay = alpha
        num = w.x * w.x * ax * ax + w.y * w.y * ay * ay
        z2 = w.z * w.z
        if z2 == 0:
            return math.inf if num > 0 else math.nan
        return (-1.0 + math.sqrt(1.0 + num / z2)) / 2.0

    def sample_wh(self, wo: Vec3, u: Sequence[float], alpha: Alpha) -> Vec3:
        ax, ay = alpha
        u0, u1 = u
        if self.sample_visible_area:
            if wo.z < 0:
                return self.sample_wh(-wo, u, alpha)
            h = Vec3(ax * wo.x, ay * wo.y, wo.z).normalized()
            r = math.sqrt(u0)
            phi = 2.0 * math.pi * u1
            t1 = r * math.cos(phi)
            t2 = r * math.sin(phi)
            s = (1.0 + h.z) / 2.0
            t2 = (1.0 - s) * math.sqrt(1.0 - t1 * t1) + s * t2
            disk_z = math.sqrt(max(0.0, 1.0 - t1 * t1 - t2 * t2))
            lensq = h.x * h.x + h.y * h.y
            basis1 = Vec3(-h.y, h.x, 0.0).normalized() if lensq > 0 else Vec3(1.0, 0.0, 0.0)
            basis2 = h.cross(basis1)
            n = t1 * basis1 + t2 * basis2 + disk_z * h
            return Vec3(ax * n.x, ay * n.y, max(0.0, n.z)).normalized()

        phi = 2.0 * math.pi * u1
        if ax == ay:
            tan2 = ax * ay * u0 / (1.0 - u0)
        else:
            phi = math.atan(ay / ax * math.tan(2.0 * math.pi * u1 + 0.5 * math.pi))
            if u1 > 0.5:
                phi += math.pi
            sin_phi, cos_phi = math.sin(phi), math.cos(phi)
            alpha2 = 1.0 / (cos_phi * cos_phi / (ax * ax) + sin_phi * sin_phi / (ay * ay))
            tan2 = alpha2 * u0 / (1.0 - u0)
        cos_t = 1.0 / math.sqrt(1.0 + tan2)
        sin_t = math.sqrt(max(0.0, 1.0 - cos_t * cos_t))
        return Vec3(sin_t * math.cos(phi), sin_t * math.sin(phi), cos_t)


def load_distribution(config: Mapping[str, object]) -> MicrofacetDistribution:
    """Build the distribution named by ``config["distribution"]`` (Beckmann if absent)."""
    if "distribution" not in config:
        return BeckmannDistribution()
    name = config["distribution"]
    if name == "beckmann":
        return BeckmannDistribution()
    if name == "ggx":
        return GGXDistribution()
    raise ValueError(f"unknown microfacet distribution: {name!r}")