# tlkit/tl_smith.py
"""
Smith chart engine.

A :class:`SmithPoint` holds the normalized impedance z, the reflection
coefficient Γ and the normalized admittance y of one point on the chart.
The three are made consistent when the point is built and a point is never
modified afterwards; moving along the line returns a new point.
"""
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from .tl_core import vswr_from_gamma, return_loss_dB, mismatch_loss_dB
from .tl_errors import InvalidParameterError, require_count, require_positive

TWO_PI = 2*np.pi


def _is_infinite(z: complex) -> bool:
    return bool(np.isinf(z.real) or np.isinf(z.imag))


def _reciprocal(z: complex) -> complex:
    if z == 0:
        return complex(np.inf)
    if _is_infinite(z):
        return 0j
    return 1/z


@dataclass(frozen=True)
class SmithPoint:
    z_normalized: complex   # z = Z/Z0 = r + jx
    gamma: complex          # Γ
    y_normalized: complex   # y = Y·Z0 = g + jb

    @classmethod
    def from_impedance(cls, z_normalized: complex) -> "SmithPoint":
        z = complex(z_normalized)
        if _is_infinite(z):
            gamma = 1+0j
        elif z == -1:
            gamma = complex(np.inf)
        else:
            gamma = (z - 1)/(z + 1)
        return cls(z, gamma, _reciprocal(z))

    @classmethod
    def from_gamma(cls, gamma: complex) -> "SmithPoint":
        gamma = complex(gamma)
        z = complex(np.inf) if gamma == 1 else (1 + gamma)/(1 - gamma)
        return cls(z, gamma, _reciprocal(z))

    @classmethod
    def from_admittance(cls, y_normalized: complex) -> "SmithPoint":
        return cls.from_impedance(_reciprocal(complex(y_normalized)))

    @classmethod
    def from_impedance_and_z0(cls, Z: complex, Z0: float) -> "SmithPoint":
        require_positive('Z0', Z0)
        return cls.from_impedance(complex(Z)/Z0)

    def impedance(self, Z0: float) -> complex:
        return self.z_normalized*Z0

    def admittance(self, Z0: float) -> complex:
        return self.y_normalized/Z0

    @property
    def r(self) -> float:
        return self.z_normalized.real

    @property
    def x(self) -> float:
        return self.z_normalized.imag

    @property
    def g(self) -> float:
        return self.y_normalized.real

    @property
    def b(self) -> float:
        return self.y_normalized.imag

    @property
    def gamma_magnitude(self) -> float:
        return abs(self.gamma)

    @property
    def gamma_angle_rad(self) -> float:
        return float(np.angle(self.gamma))

    @property
    def gamma_angle_deg(self) -> float:
        return float(np.degrees(np.angle(self.gamma)))

    def vswr(self) -> float:
        return vswr_from_gamma(self.gamma)

    def return_loss_dB(self) -> float:
        return return_loss_dB(self.gamma)

    def mismatch_loss_dB(self) -> float:
        return mismatch_loss_dB(self.gamma)

    def _rotate(self, angle: float) -> "SmithPoint":
        # whole turns are dropped so a half-wavelength move returns the same Γ
        angle = float(np.fmod(angle, TWO_PI))
        if angle == 0:
            return self
        mag = abs(self.gamma)
        return SmithPoint.from_gamma(mag*np.exp(1j*(np.angle(self.gamma) + angle)))

    def move_toward_generator(self, beta_l: float) -> "SmithPoint":
        """Rotate clockwise: Γ·e^(-j2βl)."""
        return self._rotate(-2*beta_l)

    def move_toward_load(self, beta_l: float) -> "SmithPoint":
        """Rotate counter-clockwise: Γ·e^(+j2βl)."""
        return self._rotate(2*beta_l)

# ----------------------------
# Chart geometry
# ----------------------------

@dataclass(frozen=True)
class ConstantRCircle:
    r: float
    center_x: float
    center_y: float
    radius: float


def constant_r_circle(r: float) -> ConstantRCircle:
    """Center (r/(1+r), 0), radius 1/(1+r); shrinks to the point Γ = 1 as r → ∞."""
    if np.isnan(r) or r < 0:
        raise InvalidParameterError('r', f"normalized resistance must be >= 0, got {r!r}")
    if np.isinf(r):
        return ConstantRCircle(r=r, center_x=1.0, center_y=0.0, radius=0.0)
    return ConstantRCircle(r=r, center_x=r/(1 + r), center_y=0.0, radius=1/(1 + r))


@dataclass(frozen=True)
class ConstantXCircle:
    x: float
    center_x: float
    center_y: float
    radius: float

    @property
    def is_real_axis(self) -> bool:
        return np.isinf(self.radius)


def constant_x_circle(x: float) -> ConstantXCircle:
    """Center (1, 1/x), radius |1/x|; x = 0 is the real axis."""
    if x == 0:
        return ConstantXCircle(x=0.0, center_x=1.0, center_y=np.inf, radius=np.inf)
    return ConstantXCircle(x=x, center_x=1.0, center_y=1/x, radius=abs(1/x))


@dataclass(frozen=True)
class SwrCircle:
    vswr: float
    gamma_magnitude: float
    radius: float


def swr_circle(vswr: float) -> SwrCircle:
    if np.isnan(vswr) or vswr < 1:
        raise InvalidParameterError('vswr', f"must be >= 1, got {vswr!r}")
    g = 1.0 if np.isinf(vswr) else (vswr - 1)/(vswr + 1)
    return SwrCircle(vswr=vswr, gamma_magnitude=g, radius=g)


def swr_circle_from_gamma(gamma: complex) -> SwrCircle:
    g = abs(gamma)
    return SwrCircle(vswr=vswr_from_gamma(gamma), gamma_magnitude=g, radius=g)


def swr_circle_points(gamma_magnitude: float, num_points: int) -> np.ndarray:
    """(num_points, 2) array of (Γr, Γi) on the constant-|Γ| circle."""
    n = require_count('num_points', num_points, 2)
    angle = TWO_PI*np.arange(n)/n
    return np.column_stack([gamma_magnitude*np.cos(angle), gamma_magnitude*np.sin(angle)])


def trace_toward_generator(load_point: SmithPoint, num_points: int,
                           total_electrical_length: float) -> list[SmithPoint]:
    """Points from the load (βl = 0) to the generator (βl = total)."""
    n = require_count('num_points', num_points, 2)
    return [load_point.move_toward_generator(bl)
            for bl in np.linspace(0.0, total_electrical_length, n)]


def q_circle_points(q: float, num_points: int) -> np.ndarray:
    """Locus |x|/r = Q in the Γ plane: upper half from r=0 outwards, then the mirrored lower half."""
    require_positive('q', q)
    n = require_count('num_points', num_points, 2)
    # tan mapping spreads r over [0, large) without reaching infinity
    r = np.tan(np.linspace(0.0, 1.0, n)*np.pi/2*0.99)
    upper = (r + 1j*q*r - 1)/(r + 1j*q*r + 1)
    lower = np.conj(upper)[::-1]
    pts = np.concatenate([upper, lower])
    return np.column_stack([pts.real, pts.imag])
