"""Fresnel reflectance for dielectric and conducting interfaces."""

from __future__ import annotations

import math

from lumenkit.vector import Vec3


def dielectric_reflectance_with_transmission(eta: float, cos_theta_i: float) -> tuple[float, float]:
    """Return the unpolarised reflectance and the cosine of the refracted angle.

    ``eta`` is the ratio of the incident to the transmitted index. A negative
    cosine means the ray arrives from the other side, so ``eta`` is inverted.
    Total internal reflection gives ``(1.0, 0.0)``.
    """
    if cos_theta_i < 0.0:
        eta = 1.0 / eta
        cos_theta_i = -cos_theta_i
    sin_theta_t_sq = eta * eta * (1.0 - cos_theta_i * cos_theta_i)
    if sin_theta_t_sq > 1.0:
        return 1.0, 0.0
    cos_theta_t = math.sqrt(max(1.0 - sin_theta_t_sq, 0.0))
    rs = (eta * cos_theta_i - cos_theta_t) / (eta * cos_theta_i + cos_theta_t)
    rp = (eta * cos_theta_t - cos_theta_i) / (eta * cos_theta_t + cos_theta_i)
    return (rs * rs + rp * rp) * 0.5, cos_theta_t


def dielectric_reflectance(eta: float, cos_theta_i: float) -> float:
    """Unpolarised reflectance of a dielectric interface."""
    return dielectric_reflectance_with_transmission(eta, cos_theta_i)[0]


def conductor_reflectance(eta: float, k: float, cos_theta_i: float) -> float:
    """Reflectance of a conductor with complex index ``eta + i k`` for one channel."""
    cos_sq = cos_theta_i * cos_theta_i
    sin_sq = max(1.0 - cos_sq, 0.0)
    sin_qu = sin_sq * sin_sq

    inner = eta * eta - k * k - sin_sq
    a_sq_plus_b_sq = math.sqrt(max(inner * inner + 4.0 * eta * eta * k * k, 0.0))
    a = math.sqrt(max((a_sq_plus_b_sq + inner) * 0.5, 0.0))

    rs = ((a_sq_plus_b_sq + cos_sq) - (2.0 * a * cos_theta_i)) / (
        (a_sq_plus_b_sq + cos_sq) + (2.0 * a * cos_theta_i)
    )
    rp = ((cos_sq * a_sq_plus_b_sq + sin_qu) - (2.0 * a * cos_theta_i * sin_sq)) / (
        (cos_sq * a_sq_plus_b_sq + sin_qu) + (2.0 * a * cos_theta_i * sin_sq)
    )
    return 0.5 * (rs + rs * rp)


def conductor_reflectance_rgb(eta: Vec3, k: Vec3, cos_theta_i: float) -> Vec3:
    """Per-channel conductor reflectance."""
    return Vec3(
        *(conductor_reflectance(e, kk, cos_theta_i) for e, kk in zip(eta, k))
    )