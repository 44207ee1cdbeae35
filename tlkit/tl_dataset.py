# tlkit/tl_dataset.py
import numpy as np
import pandas as pd
from .tl_core import vswr_from_gamma, return_loss_dB
from .tl_stubs import single_stub, verify_single_stub, StubType
from .tl_settings import DEFAULT_SETTINGS

def frequency_sweep(design, f_array_hz):
    """
    Tabulate the input match of a transformer design (anything with a
    ``gamma_at(f)`` method) over frequency.

    Columns: f, f_norm (f/f0), gamma_mag, vswr, return_loss_dB.
    """
    f = np.asarray(f_array_hz, dtype=float)
    gammas = np.array([design.gamma_at(fi) for fi in f])
    return pd.DataFrame({
        'f': f,
        'f_norm': f/design.f0,
        'gamma_mag': np.abs(gammas),
        'vswr': [vswr_from_gamma(g) for g in gammas],
        'return_loss_dB': [return_loss_dB(g) for g in gammas],
    })

def standing_wave_table(sw, npts=None):
    """|V|, |I| and Z(d) sampled from the load (d=0) to the end of the line."""
    npts = npts or DEFAULT_SETTINGS.sweep_points
    d, V = sw.sample_voltage(npts)
    _, I = sw.sample_current(npts)
    _, R, X = sw.sample_impedance(npts)
    return pd.DataFrame({'d': d, 'd_wavelengths': d/sw.wavelength,
                         'V': V, 'I': I, 'R': R, 'X': X})

def bounce_table(result):
    rows = [{'bounce': b.bounce, 'time': b.time, 'location': 'load' if b.at_load else 'source',
             'wave_voltage': b.voltage} for b in result.bounces]
    df = pd.DataFrame(rows, columns=['bounce', 'time', 'location', 'wave_voltage'])
    df['node_voltage'] = result.node_voltages()
    return df

def load_voltage_table(params, t_end, npts=None):
    npts = npts or DEFAULT_SETTINGS.time_points
    t, v_load = params.sample_load_voltage(t_end, npts)
    _, v_src = params.sample_source_voltage(t_end, npts)
    return pd.DataFrame({'t': t, 't_norm': t/params.transit_time,
                         'v_source': v_src, 'v_load': v_load})

def stub_table(Z0, ZL, f, vp):
    """Both single-stub solutions for open and short stubs with their residual |Γ|."""
    rows = []
    for stub_type in (StubType.SHORT, StubType.OPEN):
        for k, r in enumerate(single_stub(Z0, ZL, f, vp, stub_type), start=1):
            rows.append({'stub_type': stub_type.value, 'solution': k,
                         'd': r.d, 'd_wavelengths': r.d_wavelengths,
                         'l_stub': r.l_stub, 'l_wavelengths': r.l_wavelengths,
                         'gamma_mag': verify_single_stub(Z0, ZL, r, f, vp)})
    return pd.DataFrame(rows)
