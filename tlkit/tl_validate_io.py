# tlkit/tl_validate_io.py
import matplotlib
matplotlib.use('Agg')
import numpy as np
from .tl_core import C0, LineInputs
from .tl_matching import quarter_wave_transform, binomial_transform
from .tl_standing import StandingWaveParams
from .tl_smith import SmithPoint, trace_toward_generator
from .tl_transient import TransientParams, StepSource
from .tl_dataset import (
    frequency_sweep, standing_wave_table, bounce_table, load_voltage_table, stub_table
)
from .tl_waveforms import (
    plot_envelopes, plot_vswr_vs_freq, plot_smith, plot_bounce_diagram, plot_load_voltage
)
from .tl_cli import main
from .tl_logging import LOG_CONTROLLER

def _transient():
    return TransientParams(Z0=50.0, Rs=25.0, RL=200.0, length=1.0, vp=2e8, source=StepSource(9.0))

# ----------------------------
# Tables
# ----------------------------

def test_frequency_sweep_table():
    q = quarter_wave_transform(50.0, 200.0, 1e9)
    df = frequency_sweep(q, np.linspace(0.5e9, 1.5e9, 11))
    assert list(df.columns) == ['f', 'f_norm', 'gamma_mag', 'vswr', 'return_loss_dB']
    assert len(df) == 11
    assert df['f_norm'].iloc[5] == 1.0
    assert df['gamma_mag'].iloc[5] < 1e-10
    assert df['vswr'].iloc[0] > df['vswr'].iloc[5]
    multi = frequency_sweep(binomial_transform(50.0, 200.0, 1e9, 3), np.linspace(0.5e9, 1.5e9, 11))
    assert (multi['gamma_mag'] <= df['gamma_mag'] + 1e-12).iloc[3:8].all()

def test_standing_wave_table():
    sw = StandingWaveParams.from_phase_velocity(50.0, 100.0, 1e9, 0.6, vp=3e8)
    df = standing_wave_table(sw, 121)
    assert len(df) == 121
    assert df['d'].iloc[-1] == 0.6
    assert np.allclose(df['d_wavelengths'], df['d']/0.3)
    assert np.isclose(df['V'].max()/df['V'].min(), 2.0, rtol=1e-3)
    assert np.isclose(df['R'].iloc[0], 100.0)

def test_bounce_table():
    res = _transient().solve(5)
    df = bounce_table(res)
    assert list(df.columns) == ['bounce', 'time', 'location', 'wave_voltage', 'node_voltage']
    assert len(df) == 6
    assert list(df['location'][:3]) == ['source', 'load', 'source']
    assert np.isclose(df['node_voltage'].iloc[1], 9.6)

def test_load_voltage_table():
    p = _transient()
    df = load_voltage_table(p, 10*p.transit_time, 100)
    assert list(df.columns) == ['t', 't_norm', 'v_source', 'v_load']
    assert np.isclose(df['t_norm'].iloc[-1], 10.0)
    assert df['v_load'].iloc[0] == 0.0
    assert np.isclose(df['v_source'].iloc[0], 6.0)

def test_stub_table():
    df = stub_table(50.0, 25+50j, 1e9, C0)
    assert len(df) == 4
    assert set(df['stub_type']) == {'short', 'open'}
    assert (df['gamma_mag'] < 1e-6).all()
    assert ((df['d_wavelengths'] >= 0) & (df['d_wavelengths'] < 0.5)).all()

# ----------------------------
# Figures
# ----------------------------

def test_plots_are_written(tmp_path):
    inp = LineInputs(0.05, 300e-9, 1e-8, 80e-12, 1e9, 0.25, 30+40j)
    assert plot_envelopes(inp, tmp_path/'env.png') == tmp_path/'env.png'

    freqs = np.linspace(0.5e9, 1.5e9, 21)
    sweeps = {'λ/4': frequency_sweep(quarter_wave_transform(50.0, 100.0, 1e9), freqs)}
    plot_vswr_vs_freq(sweeps, tmp_path/'vswr.png')

    load = SmithPoint.from_impedance_and_z0(25+50j, 50.0)
    trace = trace_toward_generator(load, 40, np.pi/2)
    plot_smith([load, trace[-1]], tmp_path/'smith.png', labels=['load', 'input'], trace=trace)

    p = _transient()
    res = p.solve(6)
    plot_bounce_diagram(res, tmp_path/'bounce.png')
    plot_load_voltage(load_voltage_table(p, 6*p.transit_time, 200), tmp_path/'vload.png',
                      res.steady_state_voltage)

    for name in ('env.png', 'vswr.png', 'smith.png', 'bounce.png', 'vload.png'):
        assert (tmp_path/name).stat().st_size > 0

# ----------------------------
# Command line
# ----------------------------

def test_cli_writes_plots(tmp_path):
    out = tmp_path/'plots'
    for command in ('line', 'match', 'transient', 'smith'):
        main(['--plots_dir', str(out), command])
    for name in ('envelopes.png', 'vswr_vs_f.png', 'bounce.png', 'load_voltage.png', 'smith.png'):
        assert (out/name).exists()

def test_cli_transient_without_bounces(tmp_path):
    out = tmp_path/'plots'
    main(['--plots_dir', str(out), 'transient', '--bounces', '0'])
    assert (out/'bounce.png').exists()
    assert (out/'load_voltage.png').exists()

def test_cli_without_plots_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    main(['stub', '--type', 'open'])
    main(['transient', '--pulse', '2e-9', '--RL', '1e12'])
    assert list(tmp_path.iterdir()) == []

def test_cli_output_goes_to_log_file(tmp_path):
    logfile = LOG_CONTROLLER.set_write_file(tmp_path)
    try:
        main(['--loglevel', 'WARNING', 'stub', '--ZLre', '100', '--ZLim', '0'])
        main(['smith', '--ZLre', '50', '--ZLim', '0'])
    finally:
        LOG_CONTROLLER.close_files()
        LOG_CONTROLLER.set_std_loglevel('INFO')
    text = logfile.read_text(encoding='utf-8')
    assert 'solution 1' in text and 'solution 2' in text
    assert 'VSWR=1.000' in text
