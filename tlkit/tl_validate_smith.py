# tlkit/tl_validate_smith.py
import numpy as np
import pytest
from .tl_smith import (
    SmithPoint, constant_r_circle, constant_x_circle, swr_circle, swr_circle_from_gamma,
    swr_circle_points, trace_toward_generator, q_circle_points
)
from .tl_errors import InvalidParameterError
from .tl_validate import approx

def test_matched_point():
    sp = SmithPoint.from_impedance(1.0)
    assert sp.gamma == 0
    assert sp.vswr() == 1.0
    assert sp.return_loss_dB() == np.inf
    assert sp.mismatch_loss_dB() == 0.0

def test_short_and_open_points():
    short = SmithPoint.from_impedance(0)
    assert short.gamma == -1
    assert np.isinf(abs(short.y_normalized))
    assert short.vswr() == np.inf
    opened = SmithPoint.from_gamma(1)
    assert np.isinf(abs(opened.z_normalized))
    assert opened.y_normalized == 0
    assert SmithPoint.from_impedance(complex(np.inf)).gamma == 1
    far = SmithPoint.from_impedance(1e15)
    assert approx(far.gamma.real, 1.0, 1e-6)

def test_point_is_self_consistent():
    for z in (0.5+1j, 2-0.3j, 0.1+0.1j, 4+4j):
        sp = SmithPoint.from_impedance(z)
        assert abs(sp.y_normalized*sp.z_normalized - 1) < 1e-12
        back = SmithPoint.from_gamma(sp.gamma)
        assert abs(back.z_normalized - z) < 1e-10
        assert abs(back.y_normalized - sp.y_normalized) < 1e-10

def test_admittance_and_denormalization():
    sp = SmithPoint.from_impedance_and_z0(25+50j, 50.0)
    assert abs(sp.z_normalized - (0.5+1j)) < 1e-12
    assert abs(sp.impedance(50.0) - (25+50j)) < 1e-9
    assert abs(sp.admittance(50.0) - 1/(25+50j)) < 1e-12
    assert (sp.r, sp.x) == (0.5, 1.0)
    assert approx(sp.g, 0.4, 1e-12) and approx(sp.b, -0.8, 1e-12)
    y = SmithPoint.from_admittance(sp.y_normalized)
    assert abs(y.gamma - sp.gamma) < 1e-12

def test_gamma_angle_and_losses():
    sp = SmithPoint.from_impedance(2.0)
    assert approx(sp.gamma_magnitude, 1/3, 1e-12)
    assert sp.gamma_angle_deg == 0.0
    assert approx(sp.vswr(), 2.0, 1e-12)
    assert approx(sp.return_loss_dB(), 9.5424, 1e-4)
    assert approx(sp.mismatch_loss_dB(), 0.5115, 1e-3)
    sp = SmithPoint.from_impedance(1j)
    assert approx(sp.gamma_angle_rad, np.pi/2, 1e-12)

def test_half_wave_move_returns_same_point():
    for z in (0.5+1j, 0.1+0.2j, 2-0.3j, 4+4j, 0.3-0.7j, 1.0):
        sp = SmithPoint.from_impedance(z)
        assert sp.move_toward_generator(np.pi) == sp
        assert sp.move_toward_load(np.pi) == sp

def test_minus_one_impedance_is_a_pole():
    sp = SmithPoint.from_impedance(-1)
    assert np.isinf(abs(sp.gamma))
    assert sp.vswr() == np.inf
    assert sp.y_normalized == -1

def test_generator_then_load_is_identity():
    sp = SmithPoint.from_impedance(0.3-0.7j)
    for bl in (0.1, 0.9, 2.3, 7.0):
        back = sp.move_toward_generator(bl).move_toward_load(bl)
        assert abs(back.gamma - sp.gamma) < 1e-12
        assert abs(back.z_normalized - sp.z_normalized) < 1e-10

def test_rotation_preserves_gamma_magnitude():
    sp = SmithPoint.from_impedance(3+2j)
    for bl in np.linspace(0, 5, 23):
        assert abs(sp.move_toward_generator(bl).gamma_magnitude - sp.gamma_magnitude) < 1e-14

def test_quarter_wave_move_inverts_impedance():
    moved = SmithPoint.from_impedance(2.0).move_toward_generator(np.pi/2)
    assert abs(moved.z_normalized - 0.5) < 1e-12

def test_generator_direction_is_clockwise():
    sp = SmithPoint.from_impedance(1j)   # Γ = j
    moved = sp.move_toward_generator(np.pi/8)
    assert approx(moved.gamma_angle_rad, np.pi/4, 1e-12)

def test_constant_r_circle():
    c = constant_r_circle(1.0)
    assert (c.center_x, c.center_y, c.radius) == (0.5, 0.0, 0.5)
    # every z = 1 + jx lands on the circle
    for x in (-3, -0.2, 0.0, 5.0):
        g = SmithPoint.from_impedance(1 + 1j*x).gamma
        assert approx(abs(g - c.center_x), c.radius, 1e-12)
    assert constant_r_circle(0.0).radius == 1.0
    inf_circle = constant_r_circle(np.inf)
    assert inf_circle.radius == 0.0 and inf_circle.center_x == 1.0
    with pytest.raises(InvalidParameterError):
        constant_r_circle(-0.5)

def test_constant_x_circle():
    c = constant_x_circle(1.0)
    assert (c.center_x, c.center_y, c.radius) == (1.0, 1.0, 1.0)
    c = constant_x_circle(-2.0)
    assert (c.center_y, c.radius) == (-0.5, 0.5)
    g = SmithPoint.from_impedance(0.7 - 2j).gamma
    assert approx(abs(g - (c.center_x + 1j*c.center_y)), c.radius, 1e-12)
    axis = constant_x_circle(0.0)
    assert axis.is_real_axis
    assert axis.center_y == np.inf
    assert not c.is_real_axis

def test_swr_circles():
    c = swr_circle(3.0)
    assert approx(c.radius, 0.5, 1e-12)
    assert swr_circle(np.inf).radius == 1.0
    with pytest.raises(InvalidParameterError):
        swr_circle(0.5)
    c = swr_circle_from_gamma(0.2-0.4j)
    assert approx(c.radius, abs(0.2-0.4j), 1e-12)
    assert approx(c.vswr, (1 + c.radius)/(1 - c.radius), 1e-12)
    pts = swr_circle_points(0.4, 64)
    assert pts.shape == (64, 2)
    assert np.allclose(np.hypot(pts[:, 0], pts[:, 1]), 0.4)

def test_trace_toward_generator():
    load = SmithPoint.from_impedance(0.5+1j)
    trace = trace_toward_generator(load, 50, np.pi/2)
    assert len(trace) == 50
    assert trace[0].gamma == load.gamma
    assert np.allclose([p.gamma_magnitude for p in trace], load.gamma_magnitude)
    assert abs(trace[-1].gamma - load.move_toward_generator(np.pi/2).gamma) < 1e-12
    with pytest.raises(InvalidParameterError):
        trace_toward_generator(load, 1, 1.0)

def test_q_circle_points():
    pts = q_circle_points(2.0, 40)
    assert pts.shape == (80, 2)
    g = pts[:, 0] + 1j*pts[:, 1]
    assert np.all(np.abs(g) <= 1 + 1e-12)
    z = (1 + g[1:39])/(1 - g[1:39])
    assert np.allclose(np.abs(z.imag)/z.real, 2.0)
    assert np.all(pts[:40, 1] >= 0) and np.all(pts[40:, 1] <= 0)
