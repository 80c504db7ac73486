import pytest

from lumenkit.fresnel import (
    conductor_reflectance,
    conductor_reflectance_rgb,
    dielectric_reflectance,
    dielectric_reflectance_with_transmission,
)
from lumenkit.vector import Vec3

COPPER_ETA = Vec3(0.2004376970, 0.9240334304, 1.1022119527)
COPPER_K = Vec3(3.9129485033, 2.4528477015, 2.1421879552)
COSINES = [0.05, 0.2, 0.4, 0.6, 0.8, 0.95, 1.0]


def test_normal_incidence_glass():
    assert dielectric_reflectance(1 / 1.5, 1.0) == pytest.approx(0.04)


def test_matched_index_reflects_nothing():
    for c in COSINES:
        assert dielectric_reflectance(1.0, c) == pytest.approx(0.0, abs=1e-12)


def test_total_internal_reflection():
    assert dielectric_reflectance_with_transmission(1.5, 0.1) == (1.0, 0.0)


def test_negative_cosine_flips_interface():
    for c in COSINES:
        assert dielectric_reflectance(1.5, -c) == pytest.approx(dielectric_reflectance(1 / 1.5, c))


def test_transmission_obeys_snell():
    eta = 1 / 1.3
    for c in COSINES:
        f, cos_t = dielectric_reflectance_with_transmission(eta, c)
        assert f == dielectric_reflectance(eta, c)
        assert eta * eta * (1 - c * c) + cos_t * cos_t == pytest.approx(1.0)
        assert 0.0 <= f <= 1.0


def test_reflectance_grows_towards_grazing():
    values = [dielectric_reflectance(1 / 1.5, c) for c in COSINES]
    assert values == sorted(values, reverse=True)


def test_conductor_grazing_reflects_everything():
    assert conductor_reflectance(0.2, 3.9, 0.0) == pytest.approx(1.0)


def test_conductor_matched_index_at_normal_incidence():
    assert conductor_reflectance(1.0, 0.0, 1.0) == pytest.approx(0.0, abs=1e-12)


def test_conductor_rgb_matches_channels():
    for c in COSINES:
        rgb = conductor_reflectance_rgb(COPPER_ETA, COPPER_K, c)
        for i in range(3):
            assert rgb[i] == conductor_reflectance(COPPER_ETA[i], COPPER_K[i], c)
            assert 0.0 <= rgb[i] <= 1.0