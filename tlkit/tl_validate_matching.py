# tlkit/tl_validate_matching.py
import numpy as np
import pytest
from .tl_core import C0
from .tl_matching import (
    quarter_wave_transform, quarter_wave_gamma, binomial_transform, l_network,
    l_network_input_impedance, component_from_reactance, component_from_susceptance,
    LNetworkTopology, Inductor, Capacitor
)
from .tl_errors import InvalidParameterError
from .tl_validate import approx

F0 = 1e9

# ----------------------------
# Quarter-wave transformer
# ----------------------------

def test_qwt_geometric_mean_and_length():
    q = quarter_wave_transform(50.0, 100.0, F0)
    assert approx(q.Zt, np.sqrt(5000.0), 1e-12)
    assert approx(q.l_qw, C0/(4*F0), 1e-12)
    q = quarter_wave_transform(50.0, 100.0, F0, vp=0.66*C0)
    assert approx(q.l_qw, 0.66*C0/(4*F0), 1e-12)

def test_qwt_perfect_match_at_design_frequency():
    q = quarter_wave_transform(50.0, 200.0, F0)
    assert abs(q.gamma_at(F0)) < 1e-10
    assert approx(q.vswr_at(F0), 1.0, 1e-9)

def test_qwt_mismatch_off_design_frequency():
    q = quarter_wave_transform(50.0, 200.0, F0)
    for f in (0.5*F0, 0.8*F0, 1.1*F0, 1.7*F0):
        assert abs(q.gamma_at(f)) > 0.01
    # same as evaluating the section directly
    assert q.gamma_at(0.8*F0) == quarter_wave_gamma(q.Zt, 50.0, 200.0, F0, 0.8*F0)

def test_qwt_bandwidth():
    q = quarter_wave_transform(50.0, 10.0, F0, max_vswr=1.5)
    assert approx(q.bandwidth, 0.2871, 1e-3)
    q = quarter_wave_transform(50.0, 200.0, F0, max_vswr=2.0)
    assert 0.0 < q.bandwidth <= 2.0
    # the closed form uses the small-Γ approximation, so the exact |Γ| at the
    # band edge sits slightly below Γm
    f_edge = F0*(1 - q.bandwidth/2)
    assert 0.3 < abs(q.gamma_at(f_edge)) < 1/3

def test_qwt_bandwidth_saturates_for_nearly_matched_load():
    assert quarter_wave_transform(50.0, 55.0, F0, max_vswr=2.0).bandwidth == 2.0
    assert quarter_wave_transform(50.0, 50.0, F0).bandwidth == 2.0
    assert quarter_wave_transform(50.0, 200.0, F0, max_vswr=np.inf).bandwidth == 2.0

def test_qwt_invalid_inputs():
    with pytest.raises(InvalidParameterError):
        quarter_wave_transform(0.0, 100.0, F0)
    with pytest.raises(InvalidParameterError):
        quarter_wave_transform(50.0, 100.0, -F0)
    with pytest.raises(InvalidParameterError):
        quarter_wave_transform(50.0, -100.0, F0)
    with pytest.raises(InvalidParameterError):
        quarter_wave_transform(50.0, 100.0, F0, max_vswr=0.9)

# ----------------------------
# Binomial multi-section
# ----------------------------

def test_binomial_single_section_equals_qwt():
    multi = binomial_transform(50.0, 100.0, F0, 1)
    single = quarter_wave_transform(50.0, 100.0, F0)
    assert multi.n_sections == 1
    assert approx(multi.Z_sections[0], single.Zt, 1e-12)
    assert multi.l_section == single.l_qw
    assert abs(multi.gamma_at(0.8*F0) - single.gamma_at(0.8*F0)) < 1e-9

def test_binomial_two_sections_are_monotonic():
    z1, z2 = binomial_transform(50.0, 200.0, F0, 2).Z_sections
    assert 50.0 < z1 < np.sqrt(50.0*200.0) < z2 < 200.0
    assert approx(z1, 50*4**0.25, 1e-12)
    assert approx(z2, 50*4**0.75, 1e-12)
    down = binomial_transform(100.0, 25.0, F0, 3).Z_sections
    assert 100.0 > down[0] > down[1] > down[2] > 25.0

def test_binomial_sections_are_symmetric():
    Z = binomial_transform(50.0, 300.0, F0, 4).Z_sections
    for k in range(4):
        assert approx(Z[k]*Z[3 - k], 50.0*300.0, 1e-9)

def test_binomial_matched_at_f0_and_flatter_than_single():
    for N in (2, 3, 5):
        assert abs(binomial_transform(50.0, 200.0, F0, N).gamma_at(F0)) < 1e-9
    single = binomial_transform(50.0, 200.0, F0, 1)
    triple = binomial_transform(50.0, 200.0, F0, 3)
    assert abs(triple.gamma_at(0.85*F0)) < abs(single.gamma_at(0.85*F0))
    assert abs(triple.gamma_at(F0)) <= 1e-9 < abs(triple.gamma_at(0.7*F0))

def test_binomial_invalid_section_count():
    with pytest.raises(InvalidParameterError):
        binomial_transform(50.0, 200.0, F0, 0)
    with pytest.raises(InvalidParameterError):
        binomial_transform(50.0, 200.0, F0, 2.5)
    with pytest.raises(InvalidParameterError):
        binomial_transform(50.0, 200.0, F0, np.nan)
    with pytest.raises(InvalidParameterError):
        binomial_transform(50.0, 200.0, F0, np.inf)

# ----------------------------
# L-network
# ----------------------------

def _assert_matches(Z0, ZL, matches):
    for m in matches:
        Zin = l_network_input_impedance(m, ZL)
        assert abs(Zin - Z0) < 1e-9*Z0, f"{m} gives Zin={Zin}"

def test_l_network_matched_load_needs_nothing():
    assert l_network(50.0, 50+0j, F0) == ()
    assert l_network(50.0, 50+30j, F0) == ()

def test_l_network_high_resistance_load():
    matches = l_network(50.0, 100+0j, F0)
    assert len(matches) == 2
    assert all(m.topology is LNetworkTopology.SHUNT_SERIES for m in matches)
    assert sorted(m.b_shunt for m in matches) == pytest.approx([-0.01, 0.01])
    assert sorted(m.x_series for m in matches) == pytest.approx([-50.0, 50.0])
    _assert_matches(50.0, 100+0j, matches)

def test_l_network_low_resistance_complex_load():
    ZL = 25+50j
    matches = l_network(50.0, ZL, F0)
    assert len(matches) == 2
    assert all(m.topology is LNetworkTopology.SERIES_SHUNT for m in matches)
    _assert_matches(50.0, ZL, matches)

def test_l_network_reactive_high_load():
    for ZL in (200-80j, 150+300j, 60-10j):
        matches = l_network(75.0, ZL, 2.4e9)
        assert len(matches) == 2
        _assert_matches(75.0, ZL, matches)

def test_l_network_component_values():
    w = 2*np.pi*F0
    for m in l_network(50.0, 100+0j, F0):
        if m.x_series > 0:
            assert m.series_component == Inductor(henries=m.x_series/w)
        else:
            assert m.series_component == Capacitor(farads=-1/(w*m.x_series))
        if m.b_shunt > 0:
            assert m.shunt_component == Capacitor(farads=m.b_shunt/w)
        else:
            assert m.shunt_component == Inductor(henries=-1/(w*m.b_shunt))
        for comp in (m.series_component, m.shunt_component):
            value = comp.henries if isinstance(comp, Inductor) else comp.farads
            assert value > 0

def test_component_from_sign():
    w = 2*np.pi*1e6
    assert isinstance(component_from_reactance(10.0, w), Inductor)
    assert isinstance(component_from_reactance(-10.0, w), Capacitor)
    assert isinstance(component_from_susceptance(0.01, w), Capacitor)
    assert isinstance(component_from_susceptance(-0.01, w), Inductor)
    assert approx(component_from_reactance(-10.0, w).farads, 1/(w*10.0), 1e-12)

def test_l_network_drops_non_real_branches():
    # no resistive part to transform: every branch divides by zero
    assert l_network(50.0, 0+30j, F0) == ()
    assert l_network(50.0, -10+0j, F0) == ()

def test_l_network_invalid_inputs():
    with pytest.raises(InvalidParameterError):
        l_network(-50.0, 100+0j, F0)
    with pytest.raises(InvalidParameterError):
        l_network(50.0, 100+0j, 0.0)
