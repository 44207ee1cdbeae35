# tlkit/tl_matching.py
from __future__ import annotations
import numpy as np
from enum import Enum
from typing import Union
from dataclasses import dataclass
from scipy.special import comb
from loguru import logger
from .tl_core import C0, gamma_of_impedance, vswr_from_gamma, Zin_lossless
from .tl_network import ABCD, cascade
from .tl_errors import InvalidParameterError, require_positive, require_count
from .tl_settings import DEFAULT_SETTINGS

# ----------------------------
# Dataclasses for results
# ----------------------------

@dataclass(frozen=True)
class QWTResult:
    Zt: float           # section impedance √(Z0·RL)
    l_qw: float         # physical length λ/4 at f0 (m)
    f0: float
    bandwidth: float    # fractional bandwidth Δf/f0 for max_vswr, 2.0 = everywhere
    max_vswr: float
    Z0: float
    RL: float

    def gamma_at(self, f: float) -> complex:
        return quarter_wave_gamma(self.Zt, self.Z0, self.RL, self.f0, f)

    def vswr_at(self, f: float) -> float:
        return vswr_from_gamma(self.gamma_at(f))

@dataclass(frozen=True)
class MultiSectionResult:
    Z_sections: tuple   # source → load
    l_section: float    # every section is λ/4 at f0 (m)
    f0: float
    Z0: float
    RL: float

    @property
    def n_sections(self) -> int:
        return len(self.Z_sections)

    def Zin_at(self, f: float) -> complex:
        theta = 0.5*np.pi*f/self.f0
        net = cascade(ABCD.lossless_line(Zk, theta) for Zk in self.Z_sections)
        return net.input_impedance(self.RL)

    def gamma_at(self, f: float) -> complex:
        return gamma_of_impedance(self.Zin_at(f), self.Z0)

# ----------------------------
# Quarter-wave transformers
# ----------------------------

def _check_real_match(Z0, RL, f0, vp):
    require_positive('Z0', Z0)
    require_positive('RL', RL)
    require_positive('f0', f0)
    require_positive('vp', vp)

def quarter_wave_gamma(Zt: float, Z0: float, RL: float, f0: float, f: float) -> complex:
    """Γ looking into a λ/4 (at f0) section of impedance Zt terminated by RL, evaluated at f."""
    require_positive('f0', f0)
    theta = 0.5*np.pi*f/f0
    return gamma_of_impedance(Zin_lossless(RL, Zt, theta), Z0)

def quarter_wave_transform(
    Z0: float, RL: float, f0: float, vp: float = C0, max_vswr: float | None = None
) -> QWTResult:
    """Single-section λ/4 transformer between real Z0 and real RL."""
    _check_real_match(Z0, RL, f0, vp)
    if max_vswr is None:
        max_vswr = DEFAULT_SETTINGS.max_vswr
    if np.isnan(max_vswr) or max_vswr < 1:
        raise InvalidParameterError('max_vswr', f"must be >= 1, got {max_vswr!r}")

    Zt = float(np.sqrt(Z0*RL))
    Gm = 1.0 if np.isinf(max_vswr) else (max_vswr - 1)/(max_vswr + 1)
    if Z0 == RL:
        bandwidth = 2.0
    else:
        cos_arg = Gm*2*Zt/abs(Z0 - RL)
        # |arg| > 1: the load is within max_vswr at every frequency
        bandwidth = 2.0 if abs(cos_arg) > 1 else float(2 - (4/np.pi)*np.arccos(cos_arg))

    return QWTResult(Zt=Zt, l_qw=vp/(4*f0), f0=f0, bandwidth=bandwidth,
                     max_vswr=max_vswr, Z0=Z0, RL=RL)

def binomial_transform(
    Z0: float, RL: float, f0: float, n_sections: int, vp: float = C0
) -> MultiSectionResult:
    """N-section maximally flat transformer: ln(Z_{k+1}/Z_k) = 2^-N·C(N,k)·ln(RL/Z0)."""
    _check_real_match(Z0, RL, f0, vp)
    N = require_count('n_sections', n_sections, 1)
    ln_ratio = np.log(RL/Z0)
    # accumulate in the log domain, Z_k = Z0·exp(Σ steps)
    steps = np.array([comb(N, k, exact=True) for k in range(N)], dtype=float)*ln_ratio/2**N
    Z_sections = tuple(float(Z0*np.exp(s)) for s in np.cumsum(steps))
    logger.debug(f"binomial transformer N={N}: {['%.4g' % z for z in Z_sections]}")
    return MultiSectionResult(Z_sections=Z_sections, l_section=vp/(4*f0), f0=f0, Z0=Z0, RL=RL)

# ----------------------------
# Lumped L-networks
# ----------------------------

class LNetworkTopology(Enum):
    # named from the load: the first element sits directly across/in series with the load
    SHUNT_SERIES = 'shunt-series'   # shunt B across the load, series X toward the source
    SERIES_SHUNT = 'series-shunt'   # series X next to the load, shunt B toward the source

@dataclass(frozen=True)
class Inductor:
    henries: float

@dataclass(frozen=True)
class Capacitor:
    farads: float

ComponentValue = Union[Inductor, Capacitor]

def component_from_reactance(X: float, omega: float) -> ComponentValue:
    if X >= 0:
        return Inductor(henries=X/omega)
    return Capacitor(farads=-1.0/(omega*X))

def component_from_susceptance(B: float, omega: float) -> ComponentValue:
    if B >= 0:
        return Capacitor(farads=B/omega)
    return Inductor(henries=-1.0/(omega*B))

@dataclass(frozen=True)
class LNetworkMatch:
    topology: LNetworkTopology
    x_series: float                     # ohm
    b_shunt: float                      # S
    series_component: ComponentValue
    shunt_component: ComponentValue

def _shunt_series_branches(Z0, RL, XL):
    den = RL**2 + XL**2
    root = np.sqrt(RL/Z0)*np.sqrt(RL**2 + XL**2 - Z0*RL)
    for sign in (1.0, -1.0):
        B = (XL + sign*root)/den
        X = 1/B + XL*Z0/RL - Z0/(B*RL)
        yield B, X

def _series_shunt_branches(Z0, RL, XL):
    for sign in (1.0, -1.0):
        X = sign*np.sqrt(RL*(Z0 - RL)) - XL
        B = sign*np.sqrt((Z0 - RL)/RL)/Z0
        yield B, X

def l_network(Z0: float, ZL: complex, f: float) -> tuple[LNetworkMatch, ...]:
    """
    Lumped L-network from a real source Z0 to a complex load ZL at frequency f.

    RL > Z0 uses the shunt element across the load, RL < Z0 the series element
    next to the load; each has a ± branch. Branches whose intermediate values
    are not real are dropped, so 0, 1 or 2 matches come back. RL == Z0 needs
    no network and returns an empty tuple.
    """
    require_positive('Z0', Z0)
    require_positive('f', f)
    omega = 2*np.pi*f
    RL, XL = float(np.real(ZL)), float(np.imag(ZL))
    if RL == Z0:
        return ()

    if RL > Z0:
        topology, branches = LNetworkTopology.SHUNT_SERIES, _shunt_series_branches
    else:
        topology, branches = LNetworkTopology.SERIES_SHUNT, _series_shunt_branches

    solutions = []
    with np.errstate(invalid='ignore', divide='ignore'):
        for B, X in branches(np.float64(Z0), np.float64(RL), np.float64(XL)):
            if not (np.isfinite(B) and np.isfinite(X)):
                logger.debug(f"L-network {topology.value}: dropped non-real branch (B={B}, X={X})")
                continue
            solutions.append(LNetworkMatch(
                topology=topology,
                x_series=float(X),
                b_shunt=float(B),
                series_component=component_from_reactance(float(X), omega),
                shunt_component=component_from_susceptance(float(B), omega),
            ))
    return tuple(solutions)

def l_network_input_impedance(match: LNetworkMatch, ZL: complex) -> complex:
    """Impedance seen by the source looking into the L-network terminated by ZL."""
    series = ABCD.series(1j*match.x_series)
    shunt = ABCD.shunt(1j*match.b_shunt)
    if match.topology is LNetworkTopology.SHUNT_SERIES:
        net = cascade([series, shunt])
    else:
        net = cascade([shunt, series])
    return net.input_impedance(ZL)
