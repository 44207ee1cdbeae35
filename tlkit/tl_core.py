# tlkit/tl_core.py
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from scipy.constants import c as C0, mu_0 as MU0, epsilon_0 as EPS0
from .tl_errors import InvalidParameterError, require_positive, require_non_negative


# ----------------------------
# Complex immittance utilities
# ----------------------------

def gamma_of_impedance(Z: complex, Z0: complex) -> complex:
    """Reflection coefficient Γ = (Z - Z0)/(Z + Z0) at a port with reference Z0."""
    if Z0 == 0:
        raise InvalidParameterError('Z0', 'reference impedance must be non-zero')
    Z = complex(Z)
    if np.isinf(Z.real) or np.isinf(Z.imag):
        return 1+0j  # open circuit
    if Z + Z0 == 0:
        return complex(np.inf)
    return (Z - Z0)/(Z + Z0)


def impedance_of_gamma(Gamma: complex, Z0: complex) -> complex:
    """Impedance Z = Z0·(1+Γ)/(1-Γ); Γ = 1 is an open circuit (complex infinity)."""
    Gamma = complex(Gamma)
    if Gamma == 1:
        return complex(np.inf)
    return Z0*(1 + Gamma)/(1 - Gamma)


def vswr_from_gamma(Gamma: complex) -> float:
    """Voltage standing wave ratio. |Γ| = 1 has no finite bound and yields inf."""
    g = abs(Gamma)
    if g >= 1:
        return np.inf
    return (1 + g)/(1 - g)


def return_loss_dB(Gamma: complex) -> float:
    g = abs(Gamma)
    if g == 0:
        return np.inf
    return float(-20*np.log10(g))


def mismatch_loss_dB(Gamma: complex) -> float:
    g = abs(Gamma)
    if g >= 1:
        return np.inf
    return float(-10*np.log10(1 - g**2))


def Zin_lossless(ZL: complex, Z0: float, beta_l: float) -> complex:
    """Input impedance of a lossless line of electrical length βl terminated by ZL."""
    ZL = complex(ZL)
    if np.isinf(ZL.real) or np.isinf(ZL.imag):
        # open circuit: Zin = -j·Z0·cot(βl)
        t = np.tan(beta_l)
        return complex(np.inf) if t == 0 else complex(-1j*Z0/t)
    t = np.tan(beta_l)
    den = Z0 + 1j*ZL*t
    if den == 0:
        return complex(np.inf)
    return complex(Z0*(ZL + 1j*Z0*t)/den)


def Zin_at_distance(ZL: complex, Z0: complex, gamma: complex, d: float) -> complex:
    """Input impedance looking into a lossy segment of length d terminated by ZL."""
    tanh_gd = np.tanh(gamma*d)
    return complex(Z0*(ZL + Z0*tanh_gd)/(Z0 + ZL*tanh_gd))


def wrap_half_wavelength(d: float, wavelength: float) -> float:
    """Map a distance onto [0, λ/2)."""
    half = 0.5*wavelength
    d = float(d) % half
    # float modulo of a tiny negative number can round up to exactly λ/2
    return 0.0 if d >= half else d


# ----------------------------
# Single line analysis
# ----------------------------

def gamma_Z0(R, L, G, C, omega):
    """Propagation constant γ = α + jβ (α >= 0) and characteristic impedance Z0."""
    z = R + 1j*omega*L
    y = G + 1j*omega*C
    gamma = np.sqrt(z*y)
    if np.real(gamma) < 0:
        gamma = -gamma
    Z0 = np.sqrt(z/y)
    return complex(gamma), complex(Z0)


@dataclass(frozen=True)
class LineInputs:
    R: float      # ohm/m
    L: float      # H/m
    G: float      # S/m
    C: float      # F/m
    f: float      # Hz
    l: float      # m
    ZL: complex   # load impedance (ohm)
    Vplus: float = 1.0  # forward wave amplitude (arbitrary)

    def __post_init__(self):
        require_non_negative('R', self.R)
        require_positive('L', self.L)
        require_non_negative('G', self.G)
        require_positive('C', self.C)
        require_positive('f', self.f)
        require_positive('l', self.l)


@dataclass(frozen=True)
class LineDerived:
    omega: float
    gamma: complex  # alpha + j*beta
    alpha: float
    beta: float
    Z0: complex
    vp: float
    lamb: float
    tau: float
    Gamma_L: complex
    VSWR: float
    RL_dB: float
    ML_dB: float
    Zin: complex


def basic_params(inp: LineInputs) -> LineDerived:
    w = 2*np.pi*inp.f
    gamma, Z0 = gamma_Z0(inp.R, inp.L, inp.G, inp.C, w)
    alpha, beta = gamma.real, gamma.imag
    vp = w/beta
    lamb = 2*np.pi/beta
    tau = inp.l/vp
    Gamma_L = gamma_of_impedance(inp.ZL, Z0)
    Zin = Zin_at_distance(inp.ZL, Z0, gamma, inp.l)
    return LineDerived(
        omega=w, gamma=gamma, alpha=float(alpha), beta=float(beta),
        Z0=Z0, vp=float(vp), lamb=float(lamb), tau=float(tau),
        Gamma_L=Gamma_L, VSWR=vswr_from_gamma(Gamma_L), RL_dB=return_loss_dB(Gamma_L),
        ML_dB=mismatch_loss_dB(Gamma_L), Zin=Zin
    )
