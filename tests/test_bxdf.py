import pytest

from lumenkit.bxdf import BxDF, BxDFSampleResult, BxDFType, NullBxDF, match_flags
from lumenkit.vector import Vec3


class _Refractive(BxDF):
    def __init__(self, ior):
        self.ior = ior

    def pdf(self, out, inc):
        return 0.5

    def eta(self, out, inc):
        if out.z * inc.z > 0:
            return 1.0
        return 1.0 / self.ior if out.z > 0 else self.ior

    def _sample(self, out, sample):
        return BxDFSampleResult(
            s=Vec3(2.0),
            direction_in=Vec3(0.0, 0.0, -1.0),
            pdf=0.5,
            sample_type=BxDFType.TRANSMISSION | BxDFType.GLOSSY,
        )

    def _f(self, out, inc):
        return Vec3(2.0)


OUT = Vec3(0.0, 0.0, 1.0)


def test_match_flags_subset():
    combined = BxDFType.REFLECTION | BxDFType.GLOSSY
    assert match_flags(combined, BxDFType.REFLECTION)
    assert match_flags(combined, combined)
    assert not match_flags(BxDFType.REFLECTION, BxDFType.GLOSSY)
    assert match_flags(BxDFType.ALL, BxDFType.SPECULAR | BxDFType.TRANSMISSION)


def test_default_sample_result_is_empty():
    r = BxDFSampleResult()
    assert r.s == Vec3(0.0)
    assert r.pdf == 0.0
    assert r.sample_type == BxDFType(0)


def test_null_bxdf():
    b = NullBxDF()
    assert b.is_null()
    assert b.pdf(OUT, -OUT) == 0.0
    assert b.f(OUT, -OUT) == Vec3(0.0)
    result = b.sample(OUT, (0.3, 0.4))
    assert result.s == Vec3(0.0)
    assert result.pdf == 0.0


def test_abstract_bxdf_cannot_be_built():
    with pytest.raises(TypeError):
        BxDF()


def test_defaults_of_concrete_bxdf():
    b = _Refractive(1.5)
    assert BxDF.is_null(b) is False
    assert BxDF.roughness(b) == 0.0


def test_non_adjoint_sample_scaled_by_eta_squared():
    b = _Refractive(1.5)
    radiance = b.sample(OUT, (0.1, 0.2), False)
    importance = b.sample(OUT, (0.1, 0.2), True)
    factor = b.eta(OUT, importance.direction_in) ** 2
    assert tuple(radiance.s) == pytest.approx(tuple(importance.s * factor))
    assert radiance.direction_in == importance.direction_in
    assert radiance.pdf == importance.pdf
    assert radiance.s != importance.s


def test_non_adjoint_f_scaled_only_across_interface():
    b = _Refractive(1.5)
    inc_t = Vec3(0.0, 0.0, -1.0)
    inc_r = Vec3(0.0, 0.6, 0.8)
    assert tuple(b.f(OUT, inc_t, False)) == pytest.approx(
        tuple(b.f(OUT, inc_t, True) * b.eta(OUT, inc_t) ** 2)
    )
    assert b.f(OUT, inc_r, False) == b.f(OUT, inc_r, True)