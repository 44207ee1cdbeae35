# tlkit/tl_validate_stubs.py
import numpy as np
import pytest
from .tl_core import C0
from .tl_stubs import (
    StubType, single_stub, verify_single_stub, best_single_stub, stub_impedance,
    stub_input_impedance
)
from .tl_errors import InvalidParameterError
from .tl_validate import approx

F = 1e9
LAMB = C0/F

def test_two_solutions_inside_half_wavelength():
    for stub_type in (StubType.SHORT, StubType.OPEN):
        sols = single_stub(50.0, 25+50j, F, stub_type=stub_type)
        assert len(sols) == 2
        for r in sols:
            assert 0.0 <= r.d < LAMB/2
            assert 0.0 <= r.l_stub < LAMB/2
            assert r.stub_type is stub_type

def test_complex_load_is_matched():
    ZL = 25+50j
    sols = single_stub(50.0, ZL, F)
    assert all(verify_single_stub(50.0, ZL, r, F) < 1e-6 for r in sols)
    best = best_single_stub(50.0, ZL, F)
    assert verify_single_stub(50.0, ZL, best, F) < 0.05
    assert best in sols

def test_known_short_stub_positions():
    sols = single_stub(50.0, 25+50j, F, stub_type=StubType.SHORT)
    d = sorted(r.d_wavelengths for r in sols)
    assert approx(d[0], 0.2933, 1e-3)
    assert approx(d[1], 0.4369, 1e-3)

def test_resistive_load_both_stub_types():
    for stub_type in (StubType.SHORT, StubType.OPEN):
        for r in single_stub(50.0, 100+0j, F, stub_type=stub_type):
            assert verify_single_stub(50.0, 100+0j, r, F) < 1e-6
            assert abs(stub_input_impedance(50.0, 100+0j, r, F) - 50.0) < 1e-4

def test_slow_line_scales_lengths():
    vp = 0.66*C0
    ZL = 10-30j
    for r in single_stub(75.0, ZL, F, vp=vp):
        assert verify_single_stub(75.0, ZL, r, F, vp) < 1e-6
        assert approx(r.d, r.d_wavelengths*vp/F, 1e-12)
        assert approx(r.l_stub, r.l_wavelengths*vp/F, 1e-12)

def test_matched_load_needs_no_correction():
    for stub_type in (StubType.SHORT, StubType.OPEN):
        for r in single_stub(50.0, 50+0j, F, stub_type=stub_type):
            assert verify_single_stub(50.0, 50+0j, r, F) < 1e-9
    # a short stub presents zero susceptance at λ/4
    r = single_stub(50.0, 50+0j, F, stub_type=StubType.SHORT)[0]
    assert approx(r.l_wavelengths, 0.25, 1e-12)

def test_stub_impedance_at_eighth_wave():
    beta = 2*np.pi/LAMB
    assert abs(stub_impedance(50.0, beta, LAMB/8, StubType.SHORT) - 50j) < 1e-9
    assert abs(stub_impedance(50.0, beta, LAMB/8, StubType.OPEN) + 50j) < 1e-9
    assert stub_impedance(50.0, beta, 0.0, StubType.SHORT) == 0
    assert np.isinf(abs(stub_impedance(50.0, beta, 0.0, StubType.OPEN)))

def test_invalid_inputs():
    with pytest.raises(InvalidParameterError):
        single_stub(50.0, 25+50j, 0.0)
    with pytest.raises(InvalidParameterError):
        single_stub(0.0, 25+50j, F)
    with pytest.raises(InvalidParameterError):
        single_stub(50.0, 25+50j, F, vp=-1.0)
