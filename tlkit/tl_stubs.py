# tlkit/tl_stubs.py
from __future__ import annotations
import numpy as np
from enum import Enum
from dataclasses import dataclass
from loguru import logger
from .tl_core import C0, gamma_of_impedance, Zin_lossless, wrap_half_wavelength
from .tl_errors import require_positive

class StubType(Enum):
    OPEN = 'open'
    SHORT = 'short'

@dataclass(frozen=True)
class StubResult:
    d: float            # load → stub attachment point (m), in [0, λ/2)
    l_stub: float       # stub length (m), in [0, λ/2)
    d_wavelengths: float
    l_wavelengths: float
    stub_type: StubType

# ----------------------------
# Stub helpers
# ----------------------------

def stub_impedance(Z0: float, beta: float, l_stub: float, stub_type: StubType) -> complex:
    """Input impedance of a lossless stub: short jZ0·tan(βl), open -jZ0·cot(βl)."""
    load = 0j if stub_type is StubType.SHORT else complex(np.inf)
    return Zin_lossless(load, Z0, beta*l_stub)

def _stub_length(b_target: float, beta: float, lamb: float, stub_type: StubType) -> float:
    """Length whose normalized input susceptance equals b_target."""
    if stub_type is StubType.SHORT:
        # short: b = -1/tan(βl)
        if b_target == 0:
            logger.debug("short stub with zero target susceptance: singular, using βl = π/2")
            bl = 0.5*np.pi
        else:
            bl = np.arctan(-1.0/b_target)
    else:
        # open: b = tan(βl)
        bl = np.arctan(b_target)
    return wrap_half_wavelength(bl/beta, lamb)

def _line_susceptance(Gamma_L: complex, beta: float, d: float) -> float:
    Gd = Gamma_L*np.exp(-2j*beta*d)
    if Gd == -1:
        return np.inf
    return float(((1 - Gd)/(1 + Gd)).imag)

# ----------------------------
# Matching: single-stub shunt
# ----------------------------

def single_stub(
    Z0: float, ZL: complex, f: float, vp: float = C0, stub_type: StubType = StubType.SHORT
) -> tuple[StubResult, StubResult]:
    """
    Shunt single-stub tuner on a lossless line.

    The stub sits where the normalized admittance has unit conductance, i.e.
    cos(θr - 2βd) = -|Γ|. The two roots φ = ±arccos(-|Γ|) give the two
    solutions, which coincide for degenerate loads.
    """
    require_positive('Z0', Z0)
    require_positive('f', f)
    require_positive('vp', vp)
    lamb = vp/f
    beta = 2*np.pi/lamb

    Gamma_L = gamma_of_impedance(ZL, Z0)
    mag = min(abs(Gamma_L), 1.0)
    theta_r = float(np.angle(Gamma_L))

    phi_1 = float(np.arccos(-mag))
    results = []
    for phi in (phi_1, -phi_1):
        d = wrap_half_wavelength((theta_r - phi)/(2*beta), lamb)
        b_line = _line_susceptance(Gamma_L, beta, d)
        l_stub = _stub_length(-b_line, beta, lamb, stub_type)
        results.append(StubResult(d=d, l_stub=l_stub, d_wavelengths=d/lamb,
                                  l_wavelengths=l_stub/lamb, stub_type=stub_type))
    logger.debug(f"single stub ({stub_type.value}): d={[r.d for r in results]}, l={[r.l_stub for r in results]}")
    return tuple(results)

def _parallel(Z1: complex, Z2: complex) -> complex:
    Y = sum(0j if np.isinf(abs(Z)) else (np.inf if Z == 0 else 1/Z) for Z in (Z1, Z2))
    if np.isinf(abs(Y)):
        return 0j
    return complex(np.inf) if Y == 0 else 1/Y

def stub_input_impedance(Z0: float, ZL: complex, res: StubResult, f: float, vp: float = C0) -> complex:
    """Impedance at the attachment point: line section ∥ stub."""
    beta = 2*np.pi*f/vp
    Z_line = Zin_lossless(ZL, Z0, beta*res.d)
    Z_stub = stub_impedance(Z0, beta, res.l_stub, res.stub_type)
    return _parallel(Z_line, Z_stub)

def verify_single_stub(Z0: float, ZL: complex, res: StubResult, f: float, vp: float = C0) -> float:
    """|Γ| looking into the matched section; ~0 for a correct design."""
    return abs(gamma_of_impedance(stub_input_impedance(Z0, ZL, res, f, vp), Z0))

def best_single_stub(
    Z0: float, ZL: complex, f: float, vp: float = C0, stub_type: StubType = StubType.SHORT
) -> StubResult:
    results = single_stub(Z0, ZL, f, vp, stub_type)
    return min(results, key=lambda r: (round(verify_single_stub(Z0, ZL, r, f, vp), 9), r.d + r.l_stub))
