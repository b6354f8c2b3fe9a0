"""
2-D Vector
==========

Immutable field-plane vector with polar and Cartesian views. Every other
part of the navigation stack (routes, docking geometry, motion execution)
is expressed in terms of this type.

Angles are radians measured counter-clockwise from the field X axis.
Theta is not normalized; consumers treat it as periodic.
"""

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Vector:
    """2-D vector stored in Cartesian form.

    Build one with ``Vector.make_polar(r, theta)`` or
    ``Vector.make_cartesian(x, y)``; ``r`` and ``theta`` give the polar view.

    A zero-length vector has no angle of its own. ``zero_theta`` carries the
    angle it was built with so that a zero-length leg still turns the robot;
    it does not take part in equality.
    """
    x: float = 0.0
    y: float = 0.0
    zero_theta: Optional[float] = field(default=None, compare=False)

    @classmethod
    def make_polar(cls, r: float, theta: float) -> 'Vector':
        """Create a vector from length and angle (radians).

        Raises:
            ValueError: if r is negative.
        """
        if r < 0:
            raise ValueError(f"Vector length must be non-negative, got {r}")
        return cls(r * math.cos(theta), r * math.sin(theta), theta)

    @classmethod
    def make_cartesian(cls, x: float, y: float) -> 'Vector':
        return cls(float(x), float(y))

    @property
    def r(self) -> float:
        """Magnitude."""
        return math.hypot(self.x, self.y)

    @property
    def theta(self) -> float:
        """Angle in radians, in (-pi, pi].

        A zero-length vector reports zero_theta as given, or 0 if unset.
        """
        if self.x == 0.0 and self.y == 0.0 and self.zero_theta is not None:
            return self.zero_theta
        return math.atan2(self.y, self.x)

    def mul_scalar(self, k: float) -> 'Vector':
        theta = self.theta if k >= 0 else self.theta + math.pi
        return Vector(self.x * k, self.y * k, theta)

    def normal(self) -> 'Vector':
        """Perpendicular of the same length, rotated 90 degrees clockwise."""
        return Vector(self.y, -self.x)

    def add(self, other: 'Vector') -> 'Vector':
        return Vector(self.x + other.x, self.y + other.y)

    def sub(self, other: 'Vector') -> 'Vector':
        return Vector(self.x - other.x, self.y - other.y)

    def dot(self, other: 'Vector') -> float:
        return self.x * other.x + self.y * other.y

    def is_close(self, other: 'Vector', tol: float = 1e-9) -> bool:
        """True if both Cartesian components agree within tol."""
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol

    def __add__(self, other: 'Vector') -> 'Vector':
        return self.add(other)

    def __sub__(self, other: 'Vector') -> 'Vector':
        return self.sub(other)

    def __mul__(self, k: float) -> 'Vector':
        return self.mul_scalar(k)

    __rmul__ = __mul__

    def __neg__(self) -> 'Vector':
        return Vector(-self.x, -self.y)

    def to_polar_string(self) -> str:
        return f"(r={self.r:.3f}, theta={math.degrees(self.theta):.2f}deg)"

    def __repr__(self) -> str:
        return f"Vector(x={self.x:.4f}, y={self.y:.4f})"
