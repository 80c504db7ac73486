"""Three-component vectors, shading-frame trigonometry and sample warping."""

from __future__ import annotations

import math
from typing import Iterator, Sequence, Union

Number = Union[int, float]

# Linear-RGB luminance weights.
_LUMINANCE_WEIGHTS = (0.212671, 0.715160, 0.072169)


def _div(a: float, b: float) -> float:
    """Divide with IEEE semantics: a zero divisor gives an infinity or NaN."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


class Vec3:
    """An immutable triple used for directions, points and RGB spectra.

    ``Vec3(v)`` fills all three components with ``v``.
    """

    __slots__ = ("x", "y", "z")

    x: float
    y: float
    z: float

    def __init__(self, x: Number = 0.0, y: Number | None = None, z: Number | None = None):
        if y is None and z is None:
            y = z = x
        elif y is None or z is None:
            raise TypeError("Vec3 takes either one value or three")
        object.__setattr__(self, "x", float(x))
        object.__setattr__(self, "y", float(y))
        object.__setattr__(self, "z", float(z))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Vec3 is immutable")

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __repr__(self) -> str:
        return f"Vec3({self.x!r}, {self.y!r}, {self.z!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Vec3):
            return (self.x, self.y, self.z) == (other.x, other.y, other.z)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    @staticmethod
    def _coerce(other: object) -> Vec3 | None:
        if isinstance(other, Vec3):
            return other
        if isinstance(other, (int, float)):
            return Vec3(other)
        return None

    def __add__(self, other: object) -> Vec3:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)

    __radd__ = __add__

    def __sub__(self, other: object) -> Vec3:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Vec3(self.x - o.x, self.y - o.y, self.z - o.z)

    def __rsub__(self, other: object) -> Vec3:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __mul__(self, other: object) -> Vec3:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Vec3(self.x * o.x, self.y * o.y, self.z * o.z)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Vec3:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Vec3(_div(self.x, o.x), _div(self.y, o.y), _div(self.z, o.z))

    def __rtruediv__(self, other: object) -> Vec3:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o / self

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        """Inner product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Right-handed cross product."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; a zero vector yields NaNs."""
        return self / self.length()

    def luminance(self) -> float:
        """Luminance of the triple read as a linear RGB colour."""
        wr, wg, wb = _LUMINANCE_WEIGHTS
        return wr * self.x + wg * self.y + wb * self.z

    def sqrt(self) -> Vec3:
        """Component-wise square root."""
        return Vec3(math.sqrt(self.x), math.sqrt(self.y), math.sqrt(self.z))

    def exp(self) -> Vec3:
        """Component-wise exponential."""
        return Vec3(math.exp(self.x), math.exp(self.y), math.exp(self.z))


_UP = Vec3(0.0, 0.0, 1.0)


def cos_theta(w: Vec3) -> float:
    return w.z


def cos2_theta(w: Vec3) -> float:
    return w.z * w.z


def abs_cos_theta(w: Vec3) -> float:
    return abs(w.z)


def sin2_theta(w: Vec3) -> float:
    return max(0.0, 1.0 - cos2_theta(w))


def sin_theta(w: Vec3) -> float:
    return math.sqrt(sin2_theta(w))


def tan_theta(w: Vec3) -> float:
    return _div(sin_theta(w), cos_theta(w))


def tan2_theta(w: Vec3) -> float:
    return _div(sin2_theta(w), cos2_theta(w))


def cos_phi(w: Vec3) -> float:
    s = sin_theta(w)
    return 1.0 if s == 0 else min(max(w.x / s, -1.0), 1.0)


def sin_phi(w: Vec3) -> float:
    s = sin_theta(w)
    return 0.0 if s == 0 else min(max(w.y / s, -1.0), 1.0)


def cos2_phi(w: Vec3) -> float:
    return cos_phi(w) * cos_phi(w)


def sin2_phi(w: Vec3) -> float:
    return sin_phi(w) * sin_phi(w)


def reflect(w: Vec3, normal: Vec3 = _UP) -> Vec3:
    """Mirror ``w`` about ``normal`` (the local z axis by default)."""
    return -w + 2.0 * w.dot(normal) * normal


def square_to_cosine_hemisphere(sample: Sequence[float]) -> Vec3:
    """Map a point of the unit square to a cosine-weighted hemisphere direction."""
    u, v = sample
    r = math.sqrt(u)
    phi = 2.0 * math.pi * v
    return Vec3(r * math.cos(phi), r * math.sin(phi), math.sqrt(max(0.0, 1.0 - u)))


def square_to_cosine_hemisphere_pdf(w: Vec3) -> float:
    return w.z / math.pi if w.z > 0 else 0.0


def square_to_uniform_hemisphere(sample: Sequence[float]) -> Vec3:
    """Map a point of the unit square to a uniformly distributed upper-hemisphere direction."""
    u, v = sample
    z = u
    r = math.sqrt(max(0.0, 1.0 - z * z))
    phi = 2.0 * math.pi * v
    return Vec3(r * math.cos(phi), r * math.sin(phi), z)


def square_to_uniform_hemisphere_pdf(w: Vec3) -> float:
    return 1.0 / (2.0 * math.pi) if w.z >= 0 else 0.0


def square_to_uniform_sphere(sample: Sequence[float]) -> Vec3:
    """Map a point of the unit square to a uniformly distributed sphere direction."""
    u, v = sample
    z = 1.0 - 2.0 * u
    r = math.sqrt(max(0.0, 1.0 - z * z))
    phi = 2.0 * math.pi * v
    return Vec3(r * math.cos(phi), r * math.sin(phi), z)