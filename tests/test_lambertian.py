import math

import pytest

from lumenkit.bxdf import BxDFType, match_flags
from lumenkit.lambertian import LambertianBxDF
from lumenkit.vector import Vec3, square_to_uniform_hemisphere_pdf


def approx(v, tol=1e-9):
    return pytest.approx(tuple(v), rel=tol, abs=tol)


OUT = Vec3(0.0, 0.6, 0.8)
INC = Vec3(0.6, 0.0, 0.8)


def test_f_is_zero_below_surface():
    bxdf = LambertianBxDF(Vec3(0.5, 0.6, 0.7))
    assert bxdf.f(OUT, Vec3(0.0, 0.0, -1.0)) == Vec3(0.0)
    assert bxdf.f(Vec3(0.0, 0.0, -1.0), INC) == Vec3(0.0)


def test_f_is_albedo_over_pi():
    albedo = Vec3(0.5, 0.6, 0.7)
    bxdf = LambertianBxDF(albedo)
    assert tuple(bxdf.f(OUT, INC)) == approx(albedo / math.pi)


def test_f_is_reciprocal():
    bxdf = LambertianBxDF(Vec3(0.3))
    assert tuple(bxdf.f(OUT, INC)) == approx(bxdf.f(INC, OUT))


def test_pdf_matches_uniform_hemisphere():
    bxdf = LambertianBxDF(Vec3(1.0))
    assert bxdf.pdf(OUT, INC) == square_to_uniform_hemisphere_pdf(INC)
    assert bxdf.pdf(OUT, Vec3(0.0, 0.0, -1.0)) == 0.0


def test_sample_is_consistent_with_f_and_pdf():
    bxdf = LambertianBxDF(Vec3(0.2, 0.4, 0.6))
    result = bxdf.sample(OUT, (0.3, 0.7))
    assert result.direction_in.z >= 0
    assert result.direction_in.length() == pytest.approx(1.0)
    assert result.pdf == bxdf.pdf(OUT, result.direction_in)
    assert tuple(result.s) == approx(bxdf.f(OUT, result.direction_in))
    assert match_flags(result.sample_type, BxDFType.DIFFUSE | BxDFType.REFLECTION)
    assert not match_flags(result.sample_type, BxDFType.SPECULAR)


def test_adjoint_does_not_change_value():
    bxdf = LambertianBxDF(Vec3(0.9))
    assert bxdf.f(OUT, INC, adjoint=True) == bxdf.f(OUT, INC, adjoint=False)


def test_roughness_and_null():
    bxdf = LambertianBxDF(Vec3(1.0))
    assert bxdf.roughness() == 1.0
    assert bxdf.is_null() is False