# tlkit/tl_validate_standing.py
import numpy as np
import pytest
from .tl_core import LineInputs, basic_params
from .tl_standing import StandingWaveParams, waves_along_line
from .tl_errors import InvalidParameterError
from .tl_validate import approx

def _sw(ZL, Z0=50.0, length=1.0):
    return StandingWaveParams.from_phase_velocity(Z0, ZL, 1e9, length, vp=3e8)

def test_matched_line_is_flat():
    sw = _sw(50.0)
    d, V = sw.sample_voltage(101)
    assert np.allclose(V, 1.0)
    _, I = sw.sample_current(101)
    assert np.allclose(I, 1.0)
    assert sw.vswr() == 1.0

def test_vswr_and_extremes():
    sw = _sw(100.0)
    assert approx(sw.vswr(), 2.0, 1e-12)
    assert approx(sw.v_max, 4/3, 1e-12) and approx(sw.v_min, 2/3, 1e-12)
    _, V = sw.sample_voltage(2001)
    assert approx(V.max()/V.min(), 2.0, 1e-4)

def test_half_wavelength_periodicity():
    sw = _sw(30-40j)
    d = np.linspace(0, 0.3, 37)
    assert np.allclose(sw.voltage_magnitude(d), sw.voltage_magnitude(d + sw.wavelength/2))
    assert np.allclose(sw.current_magnitude(d), sw.current_magnitude(d + sw.wavelength/2))

def test_extremes_sit_at_predicted_positions():
    for ZL in (30-40j, 80+20j, 10+75j):
        sw = _sw(ZL)
        d_min, d_max = sw.first_voltage_minimum(), sw.first_voltage_maximum()
        assert 0.0 <= d_min < sw.wavelength/2 and 0.0 <= d_max < sw.wavelength/2
        assert approx(float(sw.voltage_magnitude(d_min)), sw.v_min, 1e-9)
        assert approx(float(sw.voltage_magnitude(d_max)), sw.v_max, 1e-9)
        # current is the complement of voltage
        assert approx(float(sw.current_magnitude(d_min)), sw.v_max, 1e-9)
        sep = abs(d_max - d_min)
        assert approx(min(sep, sw.wavelength/2 - sep), sw.wavelength/4, 1e-9)

def test_resistive_loads_put_extremes_at_the_load():
    high = _sw(100.0)
    assert high.first_voltage_maximum() == 0.0
    assert approx(high.first_voltage_minimum(), high.wavelength/4, 1e-12)
    low = _sw(25.0)
    assert approx(low.first_voltage_minimum(), 0.0, 1e-12)
    assert approx(low.first_voltage_maximum(), low.wavelength/4, 1e-12)

def test_impedance_along_line():
    sw = _sw(100.0)
    assert abs(sw.impedance_at(0.0) - 100.0) < 1e-9
    assert abs(sw.impedance_at(sw.wavelength/4) - 25.0) < 1e-9
    d, R, X = sw.sample_impedance(21)
    assert len(d) == len(R) == len(X) == 21
    assert np.all(R > 0)
    assert approx(R[0], 100.0, 1e-9) and abs(X[0]) < 1e-9

def test_sampling_grid():
    sw = _sw(75.0, length=0.8)
    d = sw.distances(5)
    assert d[0] == 0.0 and d[-1] == 0.8
    with pytest.raises(InvalidParameterError):
        sw.distances(1)
    with pytest.raises(InvalidParameterError):
        _sw(75.0, length=0.0)

def test_waves_along_line_recover_load_and_input():
    inp = LineInputs(R=0.0, L=250e-9, G=0.0, C=100e-12, f=1e9, l=0.3, ZL=30+40j)
    z, V, I, d = waves_along_line(inp, npts=50)
    assert z[0] == 0.0 and z[-1] == 0.3
    assert abs(V[-1]/I[-1] - inp.ZL) < 1e-6*abs(inp.ZL)
    assert abs(V[0]/I[0] - d.Zin) < 1e-6*abs(d.Zin)

def test_waves_along_lossy_line():
    inp = LineInputs(R=2.0, L=250e-9, G=1e-4, C=100e-12, f=1e9, l=2.0, ZL=100+0j)
    z, V, I, d = waves_along_line(inp)
    assert abs(V[0]/I[0] - basic_params(inp).Zin) < 1e-6*abs(d.Zin)
    assert abs(V[-1]/I[-1] - inp.ZL) < 1e-6*abs(inp.ZL)
