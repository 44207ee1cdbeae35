# tlkit/tl_validate_transient.py
import numpy as np
import pytest
from .tl_core import C0
from .tl_transient import TransientParams, StepSource, PulseSource
from .tl_errors import InvalidParameterError
from .tl_validate import approx

VP = 2e8
TD = 1.0/VP     # 1 m line

def _params(Rs=50.0, RL=100.0, source=None, Z0=50.0):
    return TransientParams(Z0=Z0, Rs=Rs, RL=RL, length=1.0, vp=VP,
                           source=source or StepSource(10.0))

def test_matched_source_initial_and_steady_state():
    p = _params()
    res = p.solve(6)
    assert res.gamma_source == 0.0
    assert approx(res.gamma_load, 1/3, 1e-12)
    assert res.v_initial == 5.0
    assert approx(res.steady_state_voltage, 20/3, 1e-12)
    assert res.transit_time == TD

def test_one_metre_line_at_light_speed():
    p = TransientParams(Z0=50.0, Rs=50.0, RL=100.0, length=1.0, vp=C0, source=StepSource(10.0))
    res = p.solve(10)
    assert approx(res.gamma_load, 1/3, 1e-12)
    assert res.v_initial == 5.0
    assert approx(res.steady_state_voltage, 6.667, 1e-4)
    td = p.transit_time
    t, v = p.sample_load_voltage(4*td, 400)
    assert np.allclose(v[t > 2*td], res.steady_state_voltage)
    assert approx(res.node_voltages()[-1], res.steady_state_voltage, 1e-12)

def test_matched_source_settles_after_one_transit():
    p = _params()
    # grid chosen to avoid the exact arrival instants
    t, v = p.sample_load_voltage(10*TD, 1000)
    assert np.all(v[t < TD] == 0.0)
    assert np.allclose(v[t > TD], 20/3)

def test_bounce_events():
    res = _params(Rs=25.0, RL=200.0, source=StepSource(9.0)).solve(4)
    assert [b.bounce for b in res.bounces] == [0, 1, 2, 3, 4]
    assert [b.at_load for b in res.bounces] == [False, True, False, True, False]
    assert [b.time for b in res.bounces] == pytest.approx([0, TD, 2*TD, 3*TD, 4*TD])
    assert [b.voltage for b in res.bounces] == pytest.approx([6.0, 3.6, -1.2, -0.72, 0.24])
    assert res.node_voltages() == pytest.approx([6.0, 9.6, 8.4, 7.68, 7.92])

def test_series_limit_equals_divider():
    for Rs, RL in ((25.0, 200.0), (10.0, 20.0), (0.0, 75.0), (100.0, 0.0), (60.0, np.inf)):
        p = _params(Rs=Rs, RL=RL)
        assert approx(p.bounce_series_limit(), p.steady_state_voltage(), 1e-12)

def test_load_voltage_converges_to_divider():
    p = _params(Rs=25.0, RL=200.0, source=StepSource(9.0))
    t, v = p.sample_load_voltage(20*TD, 2000)
    assert approx(v[-1], 8.0, 1e-5)
    # first arrival: V1·(1+Γ_L)
    assert approx(v[np.searchsorted(t, 1.5*TD)], 9.6, 1e-12)

def test_open_load_doubles_incident_wave():
    p = _params(RL=np.inf)
    assert p.gamma_load == 1.0
    assert p.steady_state_voltage() == 10.0
    t, v = p.sample_load_voltage(5*TD, 500)
    assert np.allclose(v[t > TD], 10.0)

def test_pulse_is_zero_before_arrival_and_after_passing():
    p = _params(RL=50.0, source=PulseSource(10.0, 0.5*TD))
    t, v = p.sample_load_voltage(4*TD, 1000)
    assert np.all(v[t < TD] == 0.0)
    assert np.allclose(v[(t > TD) & (t < 1.5*TD)], 5.0)
    assert np.allclose(v[t > 1.5*TD], 0.0)

def test_voltage_at_load_matches_load_samples():
    p = _params(Rs=25.0, RL=200.0, source=StepSource(9.0))
    t, v = p.sample_load_voltage(10*TD, 1000)
    assert np.allclose(p.voltage_at(1.0, t, 50), v)

def test_load_point_counts_reflection_with_its_incident_wave():
    p = _params(Rs=25.0, RL=200.0, source=StepSource(9.0))
    # an even bounce budget must not drop the reflection leaving the load
    for max_bounces in (0, 1):
        assert approx(p.voltage_at(1.0, 1.5*TD, max_bounces), 9.6, 1e-12)
    assert approx(p.voltage_at(1.0, 3.5*TD, 2), p.voltage_at(1.0, 3.5*TD, 3), 1e-12)

def test_pulse_keeps_step_divider_as_steady_state():
    p = _params(RL=100.0, source=PulseSource(10.0, 0.5*TD))
    assert approx(p.solve(4).steady_state_voltage, 20/3, 1e-12)
    t, v = p.sample_load_voltage(8*TD, 400)
    assert np.allclose(v[t > 2*TD], 0.0)

def test_mid_line_voltage_and_current():
    p = _params()
    assert p.voltage_at(0.5, 0.2*TD, 10) == 0.0
    assert isinstance(p.voltage_at(0.5, 0.2*TD, 10), float)
    assert approx(p.voltage_at(0.5, TD, 10), 5.0, 1e-12)
    assert approx(p.voltage_at(0.5, 2*TD, 10), 20/3, 1e-12)
    assert approx(p.current_at(0.5, TD, 10), 0.1, 1e-12)
    # steady state current through the divider
    assert approx(p.current_at(0.5, 2*TD, 10), 10/150, 1e-12)

def test_source_end_voltage():
    p = _params()
    assert p.voltage_at(0.0, 0.0, 10) == 5.0
    assert approx(p.voltage_at(0.0, 1.5*TD, 10), 5.0, 1e-12)
    assert approx(p.voltage_at(0.0, 2.5*TD, 10), 20/3, 1e-12)
    t, v = p.sample_source_voltage(6*TD, 300)
    assert np.allclose(v[t < 2*TD], 5.0)
    assert np.allclose(v[t > 2*TD], 20/3)

def test_invalid_parameters():
    with pytest.raises(InvalidParameterError):
        _params().solve(np.nan)
    with pytest.raises(InvalidParameterError):
        _params().voltage_at(0.5, TD, np.inf)
    with pytest.raises(InvalidParameterError):
        _params(Z0=0.0)
    with pytest.raises(InvalidParameterError):
        _params(Rs=np.inf)
    with pytest.raises(InvalidParameterError):
        _params(Rs=0.0, RL=0.0)
    with pytest.raises(InvalidParameterError):
        _params(RL=-1.0)
    with pytest.raises(InvalidParameterError):
        PulseSource(1.0, 0.0)
    p = _params()
    with pytest.raises(InvalidParameterError):
        p.voltage_at(1.5, TD, 10)
    with pytest.raises(InvalidParameterError):
        p.sample_load_voltage(0.0, 10)
    with pytest.raises(InvalidParameterError):
        p.solve(-1)
