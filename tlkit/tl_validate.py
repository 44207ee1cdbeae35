# tlkit/tl_validate.py
import numpy as np
import pytest
from .tl_core import (
    C0, LineInputs, basic_params, gamma_of_impedance, impedance_of_gamma, vswr_from_gamma,
    return_loss_dB, mismatch_loss_dB, Zin_lossless, Zin_at_distance, wrap_half_wavelength
)
from .tl_lines import LineParameters, TwoWireLine, CoaxialLine, MicrostripLine
from .tl_network import ABCD, cascade
from .tl_errors import InvalidParameterError

def approx(a, b, tol=1e-3):
    """Relative tolerance check: |a-b| <= tol*(1+|b|)."""
    return abs(a - b) <= tol * (1 + abs(b))

def test_matched():
    """
    Lossless benchmark: choose L and C so that Z0 = sqrt(L/C) = 50 ohm.
    With R=G=0 and ZL=50 Ω (purely real), we must have Γ≈0 and VSWR≈1.
    """
    L = 300e-9                 # H/m
    Z0_target = 50.0           # ohm
    C = L / (Z0_target**2)     # -> 120e-12 F/m

    inp = LineInputs(
        R=0.0, L=L, G=0.0, C=C,
        f=1e9, l=0.2,
        ZL=50.0 + 0j
    )
    d = basic_params(inp)

    assert abs(d.Z0.real - Z0_target) < 1e-6, f"Expected Z0≈50Ω, got {d.Z0}"
    assert abs(d.Z0.imag) < 1e-9, f"Expected lossless Z0 to be ~real, got {d.Z0}"
    assert abs(d.Gamma_L) < 1e-8, f"Not matched: Γ={d.Gamma_L}"
    assert d.VSWR < 1.00001, f"VSWR not ~1: VSWR={d.VSWR}"
    assert d.alpha == 0.0

def test_half_lambda_periodicity():
    """
    For any given line, Z_in(l + λ/2) ≈ Z_in(l) (impedance repeats every half-wavelength).
    """
    inp = LineInputs(
        R=0.0, L=300e-9, G=0.0, C=80e-12,
        f=1e9, l=0.1,
        ZL=100.0 + 0j
    )
    d1 = basic_params(inp)
    inp2 = LineInputs(inp.R, inp.L, inp.G, inp.C, inp.f, inp.l + 0.5 * d1.lamb, inp.ZL)
    d2 = basic_params(inp2)

    assert approx(np.real(d1.Zin), np.real(d2.Zin), 1e-3), \
        f"Zin periodicity failed: {d1.Zin} vs {d2.Zin}"
    assert approx(np.imag(d1.Zin), np.imag(d2.Zin), 1e-3)

def test_lossy_line_derived_quantities():
    d = basic_params(LineInputs(R=0.5, L=250e-9, G=1e-5, C=100e-12, f=1e9, l=1.0, ZL=75+0j))
    assert d.alpha > 0 and d.beta > 0
    assert approx(d.vp, d.omega/d.beta, 1e-12)
    assert approx(d.tau, 1.0/d.vp, 1e-12)
    assert approx(d.RL_dB, -20*np.log10(abs(d.Gamma_L)), 1e-12)

def test_gamma_impedance_round_trip():
    for Z in (25+50j, 100, 10-80j, 0.5+0.1j, 1e4+3e3j):
        assert abs(impedance_of_gamma(gamma_of_impedance(Z, 50.0), 50.0) - Z) < 1e-9*(1 + abs(Z))

def test_matched_load_gives_zero_gamma_and_unit_vswr():
    assert gamma_of_impedance(50.0, 50.0) == 0
    assert vswr_from_gamma(0) == 1.0
    assert return_loss_dB(0) == np.inf

def test_vswr_infinite_on_unit_circle():
    assert vswr_from_gamma(gamma_of_impedance(0, 50.0)) == np.inf   # short
    assert vswr_from_gamma(1j) == np.inf
    assert vswr_from_gamma(-1) == np.inf
    assert mismatch_loss_dB(1) == np.inf
    assert impedance_of_gamma(1, 50.0) == complex(np.inf)
    assert gamma_of_impedance(complex(np.inf), 50.0) == 1

def test_loss_metrics():
    G = 1/3
    assert approx(vswr_from_gamma(G), 2.0, 1e-12)
    assert approx(return_loss_dB(G), 9.5424, 1e-4)
    assert approx(mismatch_loss_dB(G), -10*np.log10(8/9), 1e-12)

def test_zero_reference_impedance_rejected():
    with pytest.raises(InvalidParameterError):
        gamma_of_impedance(50, 0)

def test_lossless_transform_quarter_and_half_wave():
    assert approx(Zin_lossless(100.0, 50.0, np.pi/2), 25.0, 1e-9)
    Z = Zin_lossless(30-40j, 50.0, np.pi)
    assert abs(Z - (30-40j)) < 1e-9
    # open and short terminations
    assert abs(Zin_lossless(0j, 50.0, np.pi/4) - 50j) < 1e-9
    assert abs(Zin_lossless(complex(np.inf), 50.0, np.pi/4) + 50j) < 1e-9

def test_lossy_transform_reduces_to_lossless():
    beta = 2*np.pi/0.3
    for d in (0.01, 0.07, 0.2):
        Zl = Zin_at_distance(25+50j, 50.0, 1j*beta, d)
        Zs = Zin_lossless(25+50j, 50.0, beta*d)
        assert abs(Zl - Zs) < 1e-9*(1 + abs(Zs))

def test_abcd_matches_tanh_transform():
    gamma = 0.3 + 20j
    Z0 = 48 - 1.5j
    M = ABCD.line(gamma, Z0, 0.37)
    assert abs(M.input_impedance(20+15j) - Zin_at_distance(20+15j, Z0, gamma, 0.37)) < 1e-9

def test_cascade_of_lossless_sections():
    # two λ/8 sections make one λ/4 inverter
    net = cascade([ABCD.lossless_line(50.0, np.pi/4), ABCD.lossless_line(50.0, np.pi/4)])
    assert abs(net.input_impedance(100.0) - 25.0) < 1e-9
    assert cascade([]) == ABCD(1.0, 0.0, 0.0, 1.0)
    # open-circuited series element, then a short λ/4 line presenting an open
    assert np.isinf(abs(ABCD.series(10j).input_impedance(complex(np.inf))))
    assert abs(ABCD.lossless_line(50.0, np.pi/2).input_impedance(complex(np.inf))) < 1e-9
    assert abs(cascade([ABCD.series(5.0), ABCD.shunt(0.02)]).input_impedance(50.0) - 30.0) < 1e-12

def test_wrap_half_wavelength():
    assert wrap_half_wavelength(-0.1, 1.0) == pytest.approx(0.4)
    assert wrap_half_wavelength(0.75, 1.0) == pytest.approx(0.25)
    assert wrap_half_wavelength(-1e-20, 1.0) == 0.0
    assert 0.0 <= wrap_half_wavelength(-0.5, 1.0) < 0.5

# ----------------------------
# Line parameter model
# ----------------------------

def test_lossless_z0_equals_sqrt_l_over_c():
    p = LineParameters(R=0.0, L=250e-9, G=0.0, C=100e-12)
    assert approx(p.z0_lossless(), 50.0, 1e-10)
    z0 = p.characteristic_impedance(1e9)
    assert approx(z0.real, 50.0, 1e-6) and abs(z0.imag) < 1e-6
    gamma = p.propagation_constant(1e9)
    assert abs(gamma.real) < 1e-10 and gamma.imag > 0
    assert approx(p.phase_velocity(1e9), p.phase_velocity_lossless(), 1e-9)
    assert p.attenuation_dB_per_m(1e9) == pytest.approx(0.0, abs=1e-9)

def test_lossy_line_parameters():
    p = LineParameters(R=0.5, L=250e-9, G=1e-5, C=100e-12)
    z0 = p.characteristic_impedance(1e9)
    gamma = p.propagation_constant(1e9)
    assert z0.real > 0
    assert gamma.real > 0 and gamma.imag > 0
    assert p.attenuation_dB_per_m(1e9) > 0
    assert approx(p.wavelength(1e9), 2*np.pi/gamma.imag, 1e-12)

def test_series_loss_gives_negative_z0_reactance():
    p = LineParameters(R=0.5, L=250e-9, G=0.0, C=100e-12)
    assert p.characteristic_impedance(1e9).imag < 0

def test_two_wire_in_air():
    line = TwoWireLine(wire_radius=1e-3, separation=10e-3)
    p = line.parameters(1e9)
    assert abs(p.z0_lossless() - 275.0) < 0.02*275.0
    assert approx(p.phase_velocity_lossless(), C0, 1e-6)
    assert p.R == 0.0 and p.G == 0.0

def test_two_wire_dielectric_scales_z0():
    air = TwoWireLine(1e-3, 10e-3, epsilon_r=1.0).parameters(1e9).z0_lossless()
    diel = TwoWireLine(1e-3, 10e-3, epsilon_r=4.0).parameters(1e9).z0_lossless()
    assert approx(air/diel, 2.0, 1e-9)

def test_two_wire_skin_effect_resistance():
    p = TwoWireLine(1e-3, 10e-3, sigma_conductor=5.8e7).parameters(1e8)
    assert p.R > 0
    p2 = TwoWireLine(1e-3, 10e-3, sigma_conductor=5.8e7).parameters(4e8)
    assert approx(p2.R/p.R, 2.0, 1e-9)   # R ∝ √f

def test_coax_50_and_75_ohm():
    ratio = np.exp(50/60)
    assert abs(CoaxialLine(1e-3, ratio*1e-3).parameters(1e9).z0_lossless() - 50) < 0.5
    ratio = np.exp(75/40)
    p = CoaxialLine(0.5e-3, ratio*0.5e-3, epsilon_r=2.25).parameters(1e9)
    assert abs(p.z0_lossless() - 75) < 0.75
    assert approx(p.phase_velocity_lossless(), C0/1.5, 1e-6)

def test_coax_losses():
    p = CoaxialLine(1e-3, 3e-3, 2.25, sigma_conductor=5.8e7, sigma_dielectric=1e-6).parameters(1e9)
    assert p.R > 0 and p.G > 0
    assert approx(p.G/p.C, 1e-6/(2.25*8.8541878128e-12), 1e-6)

def test_microstrip_hammerstad():
    ms = MicrostripLine(3.0e-3, 1.6e-3, 4.4)
    assert 1.0 < ms.effective_epsilon_r() < 4.4
    assert abs(ms.characteristic_impedance() - 50.0) < 0.15*50
    assert MicrostripLine(5e-3, 1e-3, 4.4).characteristic_impedance() < \
        MicrostripLine(0.5e-3, 1e-3, 4.4).characteristic_impedance()
    assert ms.phase_velocity() < C0
    assert approx(MicrostripLine(1e-3, 1e-3, 1.0).effective_epsilon_r(), 1.0, 1e-12)
    p = ms.parameters()
    assert approx(p.z0_lossless(), ms.characteristic_impedance(), 1e-9)

def test_microstrip_width_synthesis():
    for z0 in (25.0, 50.0, 100.0):
        ms = MicrostripLine.for_impedance(z0, 1.6e-3, 4.4)
        assert approx(ms.characteristic_impedance(), z0, 1e-6)
        assert ms.height == 1.6e-3

def test_invalid_geometry_rejected():
    with pytest.raises(InvalidParameterError):
        CoaxialLine(3e-3, 1e-3)
    with pytest.raises(InvalidParameterError):
        CoaxialLine(0.0, 1e-3)
    with pytest.raises(InvalidParameterError):
        TwoWireLine(1e-3, 1.5e-3)
    with pytest.raises(InvalidParameterError):
        TwoWireLine(1e-3, -1.0)
    with pytest.raises(InvalidParameterError):
        MicrostripLine(-1e-3, 1e-3, 4.4)
    with pytest.raises(InvalidParameterError):
        LineParameters(R=0.0, L=0.0, G=0.0, C=1e-12)
    with pytest.raises(InvalidParameterError):
        CoaxialLine(1e-3, 3e-3).parameters(0.0)
    with pytest.raises(InvalidParameterError):
        LineInputs(0.0, 1e-7, 0.0, 1e-10, -1e9, 0.1, 50)
    with pytest.raises(InvalidParameterError):
        MicrostripLine.for_impedance(1e4, 1e-3, 4.4)

if __name__ == '__main__':
    test_matched()
    test_half_lambda_periodicity()
    print("OK")
