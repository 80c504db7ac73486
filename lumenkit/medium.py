"""Participating media: phase functions, absorbing and scattering volumes."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple

from lumenkit.texture import Intersection
from lumenkit.vector import Vec3, square_to_uniform_sphere

_INV_FOUR_PI = 0.25 / math.pi


@dataclass
class Ray:
    """A half-line with a valid parameter interval."""

    origin: Vec3
    direction: Vec3
    time_min: float = 0.0
    time_max: float = math.inf

    def at(self, t: float) -> Vec3:
        """Point at parameter ``t`` along the ray."""
        return self.origin + self.direction * t


@dataclass
class MediumSampleRecord:
    """Result of sampling a free-flight distance through a medium.

    ``scattered`` is true when the sample lands inside the medium, in which
    case ``scatter_point``, ``sigma_a`` and ``sigma_s`` are filled in.
    """

    scattered: bool = False
    march_length: float = 0.0
    pdf: float = 0.0
    scatter_point: Vec3 = field(default_factory=lambda: Vec3(0.0))
    wi: Vec3 = field(default_factory=lambda: Vec3(0.0))
    tr: Vec3 = field(default_factory=lambda: Vec3(0.0))
    sigma_a: Vec3 = field(default_factory=lambda: Vec3(0.0))
    sigma_s: Vec3 = field(default_factory=lambda: Vec3(0.0))


class PhaseFunction(ABC):
    """Angular distribution of scattering inside a medium."""

    @abstractmethod
    def eval_phase(self, wo: Vec3, wi: Vec3, scatter_point: Vec3) -> Tuple[float, float, bool]:
        """Return the phase value, its pdf, and whether it is a delta distribution."""

    @abstractmethod
    def sample_phase(
        self, wo: Vec3, scatter_point: Vec3, sample: Sequence[float]
    ) -> Tuple[Vec3, float, float, bool]:
        """Return a sampled direction, phase value, pdf, and delta flag."""


class IsotropicPhase(PhaseFunction):
    """Scatters equally in every direction."""

    def eval_phase(self, wo: Vec3, wi: Vec3, scatter_point: Vec3) -> Tuple[float, float, bool]:
        return _INV_FOUR_PI, _INV_FOUR_PI, False

    def sample_phase(
        self, wo: Vec3, scatter_point: Vec3, sample: Sequence[float]
    ) -> Tuple[Vec3, float, float, bool]:
        return square_to_uniform_sphere(sample), _INV_FOUR_PI, _INV_FOUR_PI, False


class Medium(ABC):
    """A volume that attenuates and possibly scatters light."""

    def __init__(self, phase: PhaseFunction):
        self.phase = phase

    @abstractmethod
    def sample_distance(
        self, ray: Ray, its: Intersection, sample: Sequence[float]
    ) -> MediumSampleRecord:
        """Sample how far the ray travels before a collision or the boundary."""

    @abstractmethod
    def eval_transmittance(self, start: Vec3, end: Vec3) -> Vec3:
        """Fraction of light surviving the straight path from ``start`` to ``end``."""

    def eval_phase(self, wo: Vec3, wi: Vec3, scatter_point: Vec3) -> Tuple[float, float, bool]:
        return self.phase.eval_phase(wo, wi, scatter_point)

    def sample_phase(
        self, wo: Vec3, scatter_point: Vec3, sample: Sequence[float]
    ) -> Tuple[Vec3, float, float, bool]:
        return self.phase.sample_phase(wo, scatter_point, sample)


class BeerslawMedium(Medium):
    """A purely absorbing medium; rays never scatter inside it."""

    def __init__(self, density: Vec3, phase: PhaseFunction):
        super().__init__(phase)
        self.density = density

    def sample_distance(
        self, ray: Ray, its: Intersection, sample: Sequence[float]
    ) -> MediumSampleRecord:
        return MediumSampleRecord(
            scattered=False,
            march_length=its.t,
            pdf=1.0,
            tr=self.eval_transmittance(ray.origin, its.position),
        )

    def eval_transmittance(self, start: Vec3, end: Vec3) -> Vec3:
        distance = (end - start).length()
        return (self.density * -distance).exp()


class HomogeneousMedium(Medium):
    """A medium with constant extinction and single-scattering albedo."""

    def __init__(self, sigma_t: Vec3, albedo: Vec3, phase: PhaseFunction):
        super().__init__(phase)
        self.sigma_t = sigma_t
        self.albedo = albedo
        self.sigma_s = albedo * sigma_t
        self.sigma_a = sigma_t - self.sigma_s

    def sample_distance(
        self, ray: Ray, its: Intersection, sample: Sequence[float]
    ) -> MediumSampleRecord:
        x, y = sample
        channels = len(self.sigma_t)
        channel = min(max(int(x * channels), 0), channels - 1)
        survival = 1.0 - y
        sigma = self.sigma_t[channel]
        if survival <= 0.0 or sigma == 0.0:
            dist = math.inf
        else:
            dist = -math.log(survival) / sigma

        if dist < its.t:
            point = ray.at(dist)
            pdf = sum(s * math.exp(-s * dist) for s in self.sigma_t) / channels
            return MediumSampleRecord(
                scattered=True,
                march_length=dist,
                pdf=pdf,
                scatter_point=point,
                tr=self.eval_transmittance(ray.origin, point),
                sigma_a=self.sigma_a,
                sigma_s=self.sigma_s,
            )
        pdf = sum(math.exp(-s * its.t) for s in self.sigma_t) / channels
        return MediumSampleRecord(
            scattered=False,
            march_length=its.t,
            pdf=pdf,
            tr=self.eval_transmittance(ray.origin, its.position),
        )

    def eval_transmittance(self, start: Vec3, end: Vec3) -> Vec3:
        dist = (end - start).length()
        return Vec3(*(math.exp(-s * dist) for s in self.sigma_t))


def _rgb(config: Mapping[str, Any], key: str, default: float) -> Vec3:
    if key not in config:
        return Vec3(default)
    value = config[key]
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Vec3(float(value))
    values = list(value)
    if len(values) == 1:
        return Vec3(float(values[0]))
    if len(values) == 3:
        return Vec3(*(float(v) for v in values))
    raise ValueError(f"{key!r} needs one or three components, got {len(values)}")


def load_medium(config: Mapping[str, Any]) -> Optional[Medium]:
    """Build a medium from its configuration; an unknown type gives ``None``."""
    medium_type = config["type"]
    if medium_type == "beers_law":
        return BeerslawMedium(_rgb(config, "intensity", 1.0), IsotropicPhase())
    if medium_type == "homogeneous":
        return HomogeneousMedium(
            _rgb(config, "sigmaT", 0.1), _rgb(config, "albedo", 0.8), IsotropicPhase()
        )
    return None


def load_medium_map(config: Any) -> dict[str, Optional[Medium]]:
    """Build named media from a list of configurations; anything else gives an empty map."""
    if not isinstance(config, list):
        return {}
    return {entry["name"]: load_medium(entry) for entry in config}