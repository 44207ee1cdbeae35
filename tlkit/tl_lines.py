# tlkit/tl_lines.py
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from scipy.optimize import brentq
from loguru import logger
from .tl_core import C0, MU0, EPS0, gamma_Z0
from .tl_errors import InvalidParameterError, require_positive, require_non_negative

# ----------------------------
# Per-unit-length parameters
# ----------------------------

def skin_depth(f: float, mu: float, sigma: float) -> float:
    """Skin depth δ = 1/√(π·f·μ·σ) (m)."""
    return 1.0/np.sqrt(np.pi*f*mu*sigma)


@dataclass(frozen=True)
class LineParameters:
    R: float  # ohm/m
    L: float  # H/m
    G: float  # S/m
    C: float  # F/m

    def __post_init__(self):
        require_non_negative('R', self.R)
        require_positive('L', self.L)
        require_non_negative('G', self.G)
        require_positive('C', self.C)

    def characteristic_impedance(self, f: float) -> complex:
        """Z0 = √((R+jωL)/(G+jωC))."""
        require_positive('f', f)
        return gamma_Z0(self.R, self.L, self.G, self.C, 2*np.pi*f)[1]

    def propagation_constant(self, f: float) -> complex:
        """γ = α + jβ with α >= 0."""
        require_positive('f', f)
        return gamma_Z0(self.R, self.L, self.G, self.C, 2*np.pi*f)[0]

    def z0_lossless(self) -> float:
        return float(np.sqrt(self.L/self.C))

    def phase_velocity_lossless(self) -> float:
        return float(1.0/np.sqrt(self.L*self.C))

    def phase_velocity(self, f: float) -> float:
        return float(2*np.pi*f/self.propagation_constant(f).imag)

    def wavelength(self, f: float) -> float:
        return float(2*np.pi/self.propagation_constant(f).imag)

    def attenuation_dB_per_m(self, f: float) -> float:
        # 20·log10(e) dB per neper
        return float(20*np.log10(np.e)*self.propagation_constant(f).real)

# ----------------------------
# Line geometries
# ----------------------------

@dataclass(frozen=True)
class TwoWireLine:
    wire_radius: float              # m
    separation: float               # center-to-center (m)
    epsilon_r: float = 1.0
    mu_r: float = 1.0
    sigma_conductor: float = 0.0    # S/m, 0 = perfect conductor
    sigma_dielectric: float = 0.0   # S/m

    def __post_init__(self):
        require_positive('wire_radius', self.wire_radius)
        require_positive('separation', self.separation)
        if self.separation <= 2*self.wire_radius:
            raise InvalidParameterError(
                'separation', f"must exceed the wire diameter {2*self.wire_radius!r}, got {self.separation!r}")
        require_positive('epsilon_r', self.epsilon_r)
        require_positive('mu_r', self.mu_r)
        require_non_negative('sigma_conductor', self.sigma_conductor)
        require_non_negative('sigma_dielectric', self.sigma_dielectric)

    def parameters(self, f: float) -> LineParameters:
        """L = (μ/π)·acosh(d/2a), C = πε/acosh(d/2a), skin-effect R, dielectric G."""
        require_positive('f', f)
        mu = self.mu_r*MU0
        eps = self.epsilon_r*EPS0
        acosh_val = np.arccosh(self.separation/(2*self.wire_radius))
        R = 0.0
        if self.sigma_conductor > 0:
            delta = skin_depth(f, mu, self.sigma_conductor)
            R = 2.0/(np.pi*self.wire_radius*delta*self.sigma_conductor)
        G = np.pi*self.sigma_dielectric/acosh_val
        return LineParameters(R=float(R), L=float(mu*acosh_val/np.pi),
                              G=float(G), C=float(np.pi*eps/acosh_val))


@dataclass(frozen=True)
class CoaxialLine:
    inner_radius: float             # m
    outer_radius: float             # inner radius of the shield (m)
    epsilon_r: float = 1.0
    mu_r: float = 1.0
    sigma_conductor: float = 0.0
    sigma_dielectric: float = 0.0

    def __post_init__(self):
        require_positive('inner_radius', self.inner_radius)
        require_positive('outer_radius', self.outer_radius)
        if self.inner_radius >= self.outer_radius:
            raise InvalidParameterError(
                'inner_radius', f"must be smaller than outer_radius {self.outer_radius!r}, got {self.inner_radius!r}")
        require_positive('epsilon_r', self.epsilon_r)
        require_positive('mu_r', self.mu_r)
        require_non_negative('sigma_conductor', self.sigma_conductor)
        require_non_negative('sigma_dielectric', self.sigma_dielectric)

    def parameters(self, f: float) -> LineParameters:
        """L = (μ/2π)·ln(b/a), C = 2πε/ln(b/a)."""
        require_positive('f', f)
        mu = self.mu_r*MU0
        eps = self.epsilon_r*EPS0
        ln_ratio = np.log(self.outer_radius/self.inner_radius)
        R = 0.0
        if self.sigma_conductor > 0:
            delta = skin_depth(f, mu, self.sigma_conductor)
            R = (1/self.inner_radius + 1/self.outer_radius)/(2*np.pi*delta*self.sigma_conductor)
        G = 2*np.pi*self.sigma_dielectric/ln_ratio
        return LineParameters(R=float(R), L=float(mu*ln_ratio/(2*np.pi)),
                              G=float(G), C=float(2*np.pi*eps/ln_ratio))


def microstrip_z0(u, er: float):
    """Hammerstad-Jensen Z0 and ε_eff for width/height ratio u (scalar or array)."""
    u = np.asarray(u, dtype=float)
    F = np.where(u <= 1.0,
                 (1 + 12/u)**-0.5 + 0.04*(1 - u)**2,
                 (1 + 12/u)**-0.5)
    eps_eff = (er + 1)/2 + (er - 1)/2*F
    narrow = 60/np.sqrt(eps_eff)*np.log(8/u + u/4)
    wide = 120*np.pi/(np.sqrt(eps_eff)*(u + 1.393 + 0.667*np.log(u + 1.444)))
    return np.where(u <= 1.0, narrow, wide), eps_eff


@dataclass(frozen=True)
class MicrostripLine:
    width: float       # m
    height: float      # substrate thickness (m)
    epsilon_r: float

    def __post_init__(self):
        require_positive('width', self.width)
        require_positive('height', self.height)
        if not self.epsilon_r >= 1.0:
            raise InvalidParameterError('epsilon_r', f"must be >= 1, got {self.epsilon_r!r}")

    @classmethod
    def for_impedance(cls, z0: float, height: float, epsilon_r: float) -> "MicrostripLine":
        """Strip width giving the target Z0 on the given substrate."""
        require_positive('z0', z0)
        require_positive('height', height)
        u_lo, u_hi = 1e-3, 1e3
        z_hi, z_lo = (float(z) for z in microstrip_z0(np.array([u_lo, u_hi]), epsilon_r)[0])
        if not z_lo <= z0 <= z_hi:
            raise InvalidParameterError(
                'z0', f"must lie in [{z_lo:.3g}, {z_hi:.3g}] ohm for epsilon_r={epsilon_r}, got {z0!r}")
        u = brentq(lambda x: float(microstrip_z0(x, epsilon_r)[0]) - z0, u_lo, u_hi, xtol=1e-12)
        logger.debug(f"microstrip synthesis: Z0={z0} ohm -> w/h={u:.5g}")
        return cls(width=float(u*height), height=height, epsilon_r=epsilon_r)

    @property
    def u(self) -> float:
        return self.width/self.height

    def effective_epsilon_r(self) -> float:
        return float(microstrip_z0(self.u, self.epsilon_r)[1])

    def characteristic_impedance(self) -> float:
        return float(microstrip_z0(self.u, self.epsilon_r)[0])

    def phase_velocity(self) -> float:
        return float(C0/np.sqrt(self.effective_epsilon_r()))

    def parameters(self) -> LineParameters:
        """Lossless RLGC consistent with Z0 and v_p."""
        z0 = self.characteristic_impedance()
        vp = self.phase_velocity()
        return LineParameters(R=0.0, L=z0/vp, G=0.0, C=1.0/(z0*vp))
