# tlkit/tl_waveforms.py
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Circle
from .tl_standing import waves_along_line
from .tl_smith import constant_r_circle, constant_x_circle
from .tl_settings import DEFAULT_SETTINGS

def _save(fig, savepath):
    fig.tight_layout()
    fig.savefig(savepath, dpi=DEFAULT_SETTINGS.figure_dpi)
    plt.close(fig)
    return savepath

def plot_envelopes(inp, savepath):
    """|V(z)| and |I(z)| (each scaled to its peak) with z in wavelengths, load at the right."""
    z, V, I, d = waves_along_line(inp, npts=600)
    zl = z/d.lamb
    fig, ax = plt.subplots(figsize=(7,5))
    ax.plot(zl, np.abs(V)/np.max(np.abs(V)), label='|V(z)|')
    ax.plot(zl, np.abs(I)/np.max(np.abs(I)), label='|I(z)|')
    ax.axvline(zl[-1], color='k', linewidth=0.8)
    ax.set_xlabel('z / λ')
    ax.set_ylabel('Magnitude (normalized)')
    ax.set_title(f'Standing-wave envelopes | VSWR={d.VSWR:.2f}, Zin={d.Zin:.1f} Ω')
    ax.legend()
    ax.grid(True, linestyle="--", alpha=0.6)
    return _save(fig, savepath)

def plot_vswr_vs_freq(sweeps, savepath):
    """sweeps: {label: DataFrame from tl_dataset.frequency_sweep}."""
    fig, ax = plt.subplots(figsize=(7,5))
    for label, df in sweeps.items():
        ax.plot(df['f']*1e-9, df['vswr'], linewidth=2, label=label)
    ax.set_xlabel('Frequency (GHz)')
    ax.set_ylabel('VSWR')
    ax.set_title('VSWR vs Frequency')
    ax.legend()
    ax.grid(True, linestyle="--", alpha=0.6)
    return _save(fig, savepath)

def draw_smith_grid(ax, r_list=(0, 0.2, 0.5, 1, 2, 5), x_list=(0.2, 0.5, 1, 2, 5)):
    boundary = Circle((0, 0), 1.0, fill=False, linewidth=1)
    ax.add_patch(boundary)
    for r in r_list:
        c = constant_r_circle(r)
        ax.add_patch(Circle((c.center_x, c.center_y), c.radius, fill=False, linewidth=0.3))
    for x in x_list:
        for c in (constant_x_circle(x), constant_x_circle(-x)):
            arc = Circle((c.center_x, c.center_y), c.radius, fill=False, linewidth=0.3)
            ax.add_patch(arc)
            arc.set_clip_path(boundary)
    ax.axhline(0, linewidth=0.5)  # x = 0 is the real axis
    ax.set_aspect("equal", "box")
    ax.set_xlim(-1.05, 1.05)
    ax.set_ylim(-1.05, 1.05)
    ax.set_xlabel("Re{Γ}")
    ax.set_ylabel("Im{Γ}")

def plot_smith(points, savepath, labels=None, trace=None):
    """Mark SmithPoints (and an optional trace of SmithPoints) on a Smith chart."""
    fig, ax = plt.subplots(figsize=(6,6))
    draw_smith_grid(ax)
    if trace:
        g = np.array([p.gamma for p in trace])
        ax.plot(g.real, g.imag, linewidth=1.5)
    labels = labels or [''] * len(points)
    for p, lab in zip(points, labels):
        ax.plot([p.gamma.real], [p.gamma.imag], marker="o")
        ax.text(p.gamma.real + 0.02, p.gamma.imag + 0.02, lab)
    ax.set_title("Smith Chart (Γ-plane)")
    return _save(fig, savepath)

def plot_bounce_diagram(result, savepath):
    """Lattice diagram: position (0 = source, 1 = load) vs time in units of T_d."""
    fig, ax = plt.subplots(figsize=(5,7))
    for b in result.bounces:
        start = 1.0 if b.at_load else 0.0
        ax.plot([start, 1.0 - start], [b.bounce, b.bounce + 1], color='C0')
        ax.text(0.5, b.bounce + 0.5, f'{b.voltage:.3g} V', ha='center', va='bottom')
    ax.set_xlim(-0.1, 1.1)
    ax.invert_yaxis()
    ax.set_xticks([0, 1], [f'source (Γ={result.gamma_source:.3g})', f'load (Γ={result.gamma_load:.3g})'])
    ax.set_ylabel('t / T_d')
    ax.set_title('Bounce diagram')
    return _save(fig, savepath)

def plot_load_voltage(table, savepath, steady_state=None):
    """table: DataFrame from tl_dataset.load_voltage_table."""
    fig, ax = plt.subplots(figsize=(7,5))
    ax.step(table['t_norm'], table['v_load'], where='post', label='V load')
    ax.step(table['t_norm'], table['v_source'], where='post', label='V source')
    if steady_state is not None:
        ax.axhline(steady_state, linestyle=':', label='steady state')
    ax.set_xlabel('t / T_d')
    ax.set_ylabel('Voltage (V)')
    ax.legend()
    ax.grid(True, linestyle="--", alpha=0.6)
    return _save(fig, savepath)
