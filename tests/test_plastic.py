import math

from lumenkit.bxdf import BxDFType, match_flags
from lumenkit.microfacet import GGXDistribution
from lumenkit.plastic import PlasticBxDF, RoughPlasticBxDF
from lumenkit.vector import Vec3, reflect

OUT = Vec3(0.6, 0.0, 0.8)
INC = Vec3(-0.2, 0.1, math.sqrt(0.95))
BELOW = Vec3(0.0, 0.6, -0.8)


def close(a, b, tol=1e-9):
    return all(math.isclose(x, y, rel_tol=tol, abs_tol=tol) for x, y in zip(a, b))


def test_smooth_zero_below_surface():
    bxdf = PlasticBxDF(Vec3(1.0), Vec3(0.5), 1.5)
    assert bxdf.pdf(OUT, BELOW) == 0.0
    assert bxdf.f(OUT, BELOW) == Vec3(0.0)
    assert bxdf.f(BELOW, OUT) == Vec3(0.0)


def test_smooth_pdf_zero_without_albedo():
    bxdf = PlasticBxDF(Vec3(0.0), Vec3(0.0), 1.5)
    assert bxdf.pdf(OUT, INC) == 0.0
    assert bxdf.sample(OUT, (0.5, 0.5)).pdf == 0.0


def test_smooth_specular_spike_adds_specular_over_cosine():
    inc = reflect(OUT)
    with_spec = PlasticBxDF(Vec3(1.0), Vec3(0.5), 1.5)
    without_spec = PlasticBxDF(Vec3(0.0), Vec3(0.5), 1.5)
    difference = with_spec.f(OUT, inc) - without_spec.f(OUT, inc)
    assert close(difference, Vec3(1.0) / inc.z)


def test_smooth_diffuse_part_is_reciprocal():
    bxdf = PlasticBxDF(Vec3(0.0), Vec3(0.5, 0.4, 0.3), 1.5)
    assert close(bxdf.f(OUT, INC), bxdf.f(INC, OUT))


def test_smooth_sample_specular_branch():
    bxdf = PlasticBxDF(Vec3(1.0), Vec3(0.5), 1.5)
    result = bxdf.sample(OUT, (0.0, 0.3))
    assert close(result.direction_in, reflect(OUT))
    assert match_flags(result.sample_type, BxDFType.REFLECTION | BxDFType.SPECULAR)


def test_smooth_sample_diffuse_branch_consistent():
    bxdf = PlasticBxDF(Vec3(1.0), Vec3(0.5), 1.5)
    result = bxdf.sample(OUT, (0.99, 0.3))
    assert result.direction_in.z > 0
    assert match_flags(result.sample_type, BxDFType.REFLECTION | BxDFType.DIFFUSE)
    assert result.pdf == bxdf.pdf(OUT, result.direction_in)
    assert close(result.s, bxdf.f(OUT, result.direction_in))


def test_smooth_sample_below_returns_empty():
    result = PlasticBxDF(Vec3(1.0), Vec3(0.5), 1.5).sample(BELOW, (0.5, 0.5))
    assert result.pdf == 0.0
    assert result.direction_in == Vec3(0.0)


def test_smooth_roughness():
    assert PlasticBxDF(Vec3(0.0), Vec3(0.5), 1.5).roughness() == 1.0
    assert math.isclose(PlasticBxDF(Vec3(0.5), Vec3(0.5), 1.5).roughness(), 0.5)


def test_rough_roughness_interpolates():
    assert RoughPlasticBxDF(Vec3(0.0), Vec3(0.5), 1.5, 0.2, 0.2, GGXDistribution()).roughness() == 1.0
    bxdf = RoughPlasticBxDF(Vec3(0.5), Vec3(0.5), 1.5, 0.2, 0.2, GGXDistribution())
    assert math.isclose(bxdf.roughness(), 0.6)


def test_rough_zero_below_surface():
    bxdf = RoughPlasticBxDF(Vec3(1.0), Vec3(0.5), 1.5, 0.3, 0.3, GGXDistribution())
    assert bxdf.pdf(OUT, BELOW) == 0.0
    assert bxdf.f(OUT, BELOW) == Vec3(0.0)


def test_rough_f_positive_above():
    bxdf = RoughPlasticBxDF(Vec3(1.0), Vec3(0.5), 1.5, 0.3, 0.3, GGXDistribution())
    assert all(c > 0 for c in bxdf.f(OUT, INC))
    assert bxdf.pdf(OUT, INC) > 0


def test_rough_sample_diffuse_branch_consistent():
    bxdf = RoughPlasticBxDF(Vec3(1.0), Vec3(0.5), 1.5, 0.3, 0.3, GGXDistribution())
    result = bxdf.sample(OUT, (0.99, 0.4))
    assert match_flags(result.sample_type, BxDFType.REFLECTION | BxDFType.DIFFUSE)
    assert result.pdf == bxdf.pdf(OUT, result.direction_in)
    assert close(result.s, bxdf.f(OUT, result.direction_in))


def test_rough_sample_glossy_branch():
    bxdf = RoughPlasticBxDF(Vec3(1.0), Vec3(0.5), 1.5, 0.2, 0.2, GGXDistribution())
    result = bxdf.sample(OUT, (0.1, 0.4))
    assert match_flags(result.sample_type, BxDFType.REFLECTION | BxDFType.GLOSSY)
    assert math.isclose(result.direction_in.length(), 1.0, rel_tol=1e-6)
    assert result.pdf == bxdf.pdf(OUT, result.direction_in)