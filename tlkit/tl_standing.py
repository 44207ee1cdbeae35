# tlkit/tl_standing.py
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from .tl_core import (
    C0, LineInputs, basic_params, gamma_of_impedance, vswr_from_gamma,
    Zin_lossless, wrap_half_wavelength
)
from .tl_errors import require_positive, require_count

@dataclass(frozen=True)
class StandingWaveParams:
    """Lossless line, distances d measured from the load toward the generator."""
    Z0: float
    ZL: complex
    f: float
    beta: float     # rad/m
    length: float   # m

    def __post_init__(self):
        require_positive('Z0', self.Z0)
        require_positive('f', self.f)
        require_positive('beta', self.beta)
        require_positive('length', self.length)

    @classmethod
    def from_phase_velocity(cls, Z0: float, ZL: complex, f: float, length: float,
                            vp: float = C0) -> "StandingWaveParams":
        require_positive('vp', vp)
        return cls(Z0=Z0, ZL=complex(ZL), f=f, beta=2*np.pi*f/vp, length=length)

    @property
    def Gamma_L(self) -> complex:
        return gamma_of_impedance(self.ZL, self.Z0)

    @property
    def wavelength(self) -> float:
        return 2*np.pi/self.beta

    def vswr(self) -> float:
        return vswr_from_gamma(self.Gamma_L)

    def _rotated_gamma(self, d):
        return self.Gamma_L*np.exp(-2j*self.beta*np.asarray(d, dtype=float))

    def voltage_magnitude(self, d):
        """|V(d)| = |1 + Γ_L·e^(-j2βd)| (normalized to V+ = 1)."""
        return np.abs(1 + self._rotated_gamma(d))

    def current_magnitude(self, d):
        """|I(d)| = |1 - Γ_L·e^(-j2βd)| (normalized to V+/Z0 = 1)."""
        return np.abs(1 - self._rotated_gamma(d))

    def impedance_at(self, d: float) -> complex:
        return Zin_lossless(self.ZL, self.Z0, self.beta*d)

    @property
    def v_max(self) -> float:
        return 1 + abs(self.Gamma_L)

    @property
    def v_min(self) -> float:
        return 1 - abs(self.Gamma_L)

    def first_voltage_minimum(self) -> float:
        """Γ_L·e^(-j2βd) = -|Γ_L|: d = (π - ∠Γ_L)/(2β) in [0, λ/2)."""
        d = (np.pi - np.angle(self.Gamma_L))/(2*self.beta)
        return wrap_half_wavelength(d, self.wavelength)

    def first_voltage_maximum(self) -> float:
        """Γ_L·e^(-j2βd) = +|Γ_L|: d = -∠Γ_L/(2β) in [0, λ/2)."""
        d = -np.angle(self.Gamma_L)/(2*self.beta)
        return wrap_half_wavelength(d, self.wavelength)

    def distances(self, npts: int) -> np.ndarray:
        n = require_count('npts', npts, 2)
        return np.linspace(0.0, self.length, n)

    def sample_voltage(self, npts: int):
        d = self.distances(npts)
        return d, self.voltage_magnitude(d)

    def sample_current(self, npts: int):
        d = self.distances(npts)
        return d, self.current_magnitude(d)

    def sample_impedance(self, npts: int):
        d = self.distances(npts)
        Z = np.array([self.impedance_at(x) for x in d])
        return d, Z.real, Z.imag


def waves_along_line(inp: LineInputs, npts: int = 200):
    """Return z-grid and complex V(z), I(z) along 0..l.
       Convention: z=0 at source, z=l at load. """
    require_count('npts', npts, 2)
    d = basic_params(inp)
    z = np.linspace(0, inp.l, npts)
    # reflect at load:
    Vp = inp.Vplus
    Vm_over_Vp = d.Gamma_L * np.exp(-2*d.gamma*inp.l)
    V = Vp*np.exp(-d.gamma*z) + (Vp*Vm_over_Vp)*np.exp(d.gamma*z)
    I = (Vp/d.Z0)*np.exp(-d.gamma*z) - (Vp*Vm_over_Vp/d.Z0)*np.exp(d.gamma*z)
    return z, V, I, d
