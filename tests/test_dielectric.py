import math
import random

import pytest

from lumenkit.bxdf import BxDFType, match_flags
from lumenkit.dielectric import DielectricBxDF, RoughDielectricBxDF
from lumenkit.fresnel import dielectric_reflectance
from lumenkit.microfacet import GGXDistribution
from lumenkit.vector import Vec3

OUT = Vec3(0.6, 0.0, 0.8)


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def approx(v, tol=1e-9):
    return pytest.approx(tuple(v), rel=tol, abs=tol)


def test_eta_depends_on_sides():
    bxdf = DielectricBxDF(1.5, Vec3(1.0), Vec3(1.0))
    up, down = Vec3(0.0, 0.0, 1.0), Vec3(0.0, 0.0, -1.0)
    assert bxdf.eta(up, up) == 1.0
    assert bxdf.eta(up, down) == pytest.approx(1 / 1.5)
    assert bxdf.eta(down, up) == 1.5


def test_smooth_reflection_branch():
    bxdf = DielectricBxDF(1.5, Vec3(1.0), Vec3(1.0))
    result = bxdf.sample(OUT, (0.0, 0.5))
    assert tuple(result.direction_in) == approx(Vec3(-0.6, 0.0, 0.8))
    assert result.pdf == pytest.approx(dielectric_reflectance(1 / 1.5, 0.8))
    assert match_flags(result.sample_type, BxDFType.REFLECTION | BxDFType.SPECULAR)


def test_smooth_transmission_obeys_snell():
    bxdf = DielectricBxDF(1.5, Vec3(1.0), Vec3(1.0))
    result = bxdf.sample(OUT, (1.0, 0.5), adjoint=True)
    d = result.direction_in
    assert d.z < 0
    assert d.x == pytest.approx(-OUT.x / 1.5)
    assert d.length() == pytest.approx(1.0)
    assert result.pdf == pytest.approx(1 - dielectric_reflectance(1 / 1.5, 0.8))
    assert match_flags(result.sample_type, BxDFType.TRANSMISSION | BxDFType.SPECULAR)


def test_smooth_transmission_scaled_by_eta_squared():
    bxdf = DielectricBxDF(1.5, Vec3(1.0), Vec3(1.0))
    radiance = bxdf.sample(OUT, (1.0, 0.5), adjoint=False)
    importance = bxdf.sample(OUT, (1.0, 0.5), adjoint=True)
    scale = bxdf.eta(OUT, importance.direction_in) ** 2
    assert tuple(radiance.s) == approx(importance.s * scale)


def test_total_internal_reflection():
    bxdf = DielectricBxDF(1.5, Vec3(1.0), Vec3(1.0))
    out = Vec3(0.9, 0.0, -math.sqrt(1 - 0.81))
    result = bxdf.sample(out, (1.0, 0.0))
    assert result.pdf == 1.0
    assert result.direction_in.z < 0
    assert match_flags(result.sample_type, BxDFType.REFLECTION)


def test_smooth_f_pdf_roughness_zero():
    bxdf = DielectricBxDF(1.5, Vec3(1.0), Vec3(1.0))
    assert bxdf.f(OUT, Vec3(0.0, 0.0, 1.0)) == Vec3(0.0)
    assert bxdf.pdf(OUT, Vec3(0.0, 0.0, 1.0)) == 0.0
    assert bxdf.roughness() == 0.0


def test_rough_roughness_and_eta():
    bxdf = RoughDielectricBxDF(1.5, Vec3(1.0), Vec3(1.0), 0.1, 0.3, GGXDistribution())
    assert bxdf.roughness() == pytest.approx((0.1 + 0.3) / 2)
    assert bxdf.eta(Vec3(0.0, 0.0, -1.0), Vec3(0.0, 0.0, 1.0)) == 1.5


def test_rough_reflection_is_reciprocal():
    bxdf = RoughDielectricBxDF(1.5, Vec3(1.0), Vec3(1.0), 0.3, 0.3, GGXDistribution())
    inc = Vec3(-0.2, 0.1, math.sqrt(0.95))
    assert tuple(bxdf.f(OUT, inc)) == approx(bxdf.f(inc, OUT))
    assert bxdf.pdf(OUT, inc) > 0


def test_rough_sample_reflection_lobe():
    bxdf = RoughDielectricBxDF(
        1.5, Vec3(1.0), Vec3(1.0), 0.2, 0.2, GGXDistribution(), rng=FixedRandom(0.0)
    )
    result = bxdf.sample(OUT, (0.3, 0.6), adjoint=True)
    assert result.direction_in.z > 0
    assert match_flags(result.sample_type, BxDFType.REFLECTION | BxDFType.GLOSSY)
    assert result.pdf == pytest.approx(bxdf.pdf(OUT, result.direction_in), rel=1e-6)
    assert tuple(result.s) == approx(bxdf.f(OUT, result.direction_in, adjoint=True), tol=1e-6)


def test_rough_sample_transmission_lobe():
    bxdf = RoughDielectricBxDF(
        1.5, Vec3(1.0), Vec3(1.0), 0.2, 0.2, GGXDistribution(), rng=FixedRandom(0.99999)
    )
    result = bxdf.sample(OUT, (0.3, 0.6), adjoint=True)
    assert result.direction_in.z < 0
    assert result.direction_in.length() == pytest.approx(1.0, rel=1e-6)
    assert match_flags(result.sample_type, BxDFType.TRANSMISSION | BxDFType.GLOSSY)
    assert result.pdf > 0
    assert result.pdf == pytest.approx(bxdf.pdf(OUT, result.direction_in), rel=1e-6)
    assert tuple(result.s) == approx(bxdf.f(OUT, result.direction_in, adjoint=True), tol=1e-6)