# tlkit/tl_cli.py
import argparse, os, numpy as np
from loguru import logger
from .tl_core import C0, LineInputs, basic_params
from .tl_smith import SmithPoint, trace_toward_generator
from .tl_matching import quarter_wave_transform, binomial_transform, l_network
from .tl_stubs import StubType, single_stub, verify_single_stub
from .tl_transient import TransientParams, StepSource, PulseSource
from .tl_dataset import frequency_sweep, bounce_table, load_voltage_table
from .tl_waveforms import (
    plot_envelopes, plot_vswr_vs_freq, plot_smith, plot_bounce_diagram, plot_load_voltage
)
from .tl_logging import LOG_CONTROLLER
from .tl_settings import DEFAULT_SETTINGS

def _plots_dir(args):
    if args.plots_dir:
        os.makedirs(args.plots_dir, exist_ok=True)
    return args.plots_dir

def cmd_line(args):
    inp = LineInputs(args.R,args.L,args.G,args.C,args.f,args.l, complex(args.ZLre,args.ZLim))
    d = basic_params(inp)
    logger.info(f'Z0={d.Z0:.3f}, gamma={d.gamma:.3e}, VSWR={d.VSWR:.3f}, Zin={d.Zin:.3f}')
    if _plots_dir(args):
        plot_envelopes(inp, f'{args.plots_dir}/envelopes.png')

def cmd_match(args):
    q = quarter_wave_transform(args.Z0, args.RL, args.f, args.vp, args.max_vswr)
    logger.info(f'λ/4: Zt={q.Zt:.3f} ohm, length={q.l_qw:.4g} m, bandwidth={q.bandwidth:.3f}')
    b = binomial_transform(args.Z0, args.RL, args.f, args.sections, args.vp)
    logger.info(f'binomial N={b.n_sections}: ' + ', '.join(f'{z:.3f}' for z in b.Z_sections))
    matches = l_network(args.Z0, complex(args.RL, args.XL), args.f)
    if not matches:
        logger.info('L-network: no network required')
    for m in matches:
        logger.info(f'L-network {m.topology.value}: series {m.series_component}, shunt {m.shunt_component}')
    if _plots_dir(args):
        freqs = np.linspace(args.f*0.2, args.f*1.8, DEFAULT_SETTINGS.sweep_points)
        plot_vswr_vs_freq({'λ/4': frequency_sweep(q, freqs),
                           f'binomial N={b.n_sections}': frequency_sweep(b, freqs)},
                          f'{args.plots_dir}/vswr_vs_f.png')

def cmd_stub(args):
    ZL = complex(args.ZLre, args.ZLim)
    stub_type = StubType(args.type)
    for k, r in enumerate(single_stub(args.Z0, ZL, args.f, args.vp, stub_type), start=1):
        residual = verify_single_stub(args.Z0, ZL, r, args.f, args.vp)
        logger.info(f'solution {k}: d={r.d_wavelengths:.4f}λ, l={r.l_wavelengths:.4f}λ ({stub_type.value}), |Γ|={residual:.2e}')
        if residual > DEFAULT_SETTINGS.stub_tolerance:
            logger.warning(f'solution {k} leaves |Γ|={residual:.3f} above {DEFAULT_SETTINGS.stub_tolerance}')

def cmd_transient(args):
    source = StepSource(args.Vs) if args.pulse is None else PulseSource(args.Vs, args.pulse)
    p = TransientParams(args.Z0, args.Rs, args.RL, args.length, args.vp, source)
    res = p.solve(args.bounces)
    logger.info(f'Γs={res.gamma_source:.4f}, ΓL={res.gamma_load:.4f}, Td={res.transit_time:.4g} s, '
                f'V1={res.v_initial:.4f} V, Vss={res.steady_state_voltage:.4f} V')
    logger.info('\n' + bounce_table(res).to_string(index=False))
    if _plots_dir(args):
        plot_bounce_diagram(res, f'{args.plots_dir}/bounce.png')
        # at least one transit so the time axis is not empty
        table = load_voltage_table(p, max(args.bounces, 1)*res.transit_time)
        plot_load_voltage(table, f'{args.plots_dir}/load_voltage.png', res.steady_state_voltage)

def cmd_smith(args):
    sp = SmithPoint.from_impedance_and_z0(complex(args.ZLre, args.ZLim), args.Z0)
    logger.info(f'z={sp.z_normalized:.4f}, Γ={sp.gamma_magnitude:.4f}∠{sp.gamma_angle_deg:.2f}°, '
                f'y={sp.y_normalized:.4f}, VSWR={sp.vswr():.3f}, RL={sp.return_loss_dB():.2f} dB')
    if _plots_dir(args):
        trace = trace_toward_generator(sp, 181, 2*np.pi*args.wavelengths)
        plot_smith([sp, trace[-1]], f'{args.plots_dir}/smith.png', labels=['load', 'input'], trace=trace)

def build_parser():
    ap = argparse.ArgumentParser(prog='tlkit')
    ap.add_argument('--loglevel', default=None, choices=['DEBUG','INFO','WARNING','ERROR'])
    ap.add_argument('--plots_dir', default=None)
    sub = ap.add_subparsers(dest='command', required=True)

    p = sub.add_parser('line', help='RLGC line terminated by ZL')
    p.add_argument('--R', type=float, default=0.05)
    p.add_argument('--L', type=float, default=300e-9)
    p.add_argument('--G', type=float, default=1e-8)
    p.add_argument('--C', type=float, default=80e-12)
    p.add_argument('--f', type=float, default=1e9)
    p.add_argument('--l', type=float, default=0.25)
    p.add_argument('--ZLre', type=float, default=50.0)
    p.add_argument('--ZLim', type=float, default=0.0)
    p.set_defaults(func=cmd_line)

    p = sub.add_parser('match', help='λ/4, binomial and L-network designs')
    p.add_argument('--Z0', type=float, default=50.0)
    p.add_argument('--RL', type=float, default=100.0)
    p.add_argument('--XL', type=float, default=0.0)
    p.add_argument('--f', type=float, default=1e9)
    p.add_argument('--vp', type=float, default=C0)
    p.add_argument('--sections', type=int, default=3)
    p.add_argument('--max_vswr', type=float, default=DEFAULT_SETTINGS.max_vswr)
    p.set_defaults(func=cmd_match)

    p = sub.add_parser('stub', help='single-stub tuner')
    p.add_argument('--Z0', type=float, default=50.0)
    p.add_argument('--ZLre', type=float, default=25.0)
    p.add_argument('--ZLim', type=float, default=50.0)
    p.add_argument('--f', type=float, default=1e9)
    p.add_argument('--vp', type=float, default=C0)
    p.add_argument('--type', choices=['short', 'open'], default='short')
    p.set_defaults(func=cmd_stub)

    p = sub.add_parser('transient', help='bounce diagram')
    p.add_argument('--Z0', type=float, default=50.0)
    p.add_argument('--Rs', type=float, default=50.0)
    p.add_argument('--RL', type=float, default=100.0)
    p.add_argument('--length', type=float, default=1.0)
    p.add_argument('--vp', type=float, default=C0)
    p.add_argument('--Vs', type=float, default=10.0)
    p.add_argument('--pulse', type=float, default=None, help='pulse duration (s); step if omitted')
    p.add_argument('--bounces', type=int, default=DEFAULT_SETTINGS.num_bounces)
    p.set_defaults(func=cmd_transient)

    p = sub.add_parser('smith', help='Smith chart point of a load')
    p.add_argument('--Z0', type=float, default=50.0)
    p.add_argument('--ZLre', type=float, default=25.0)
    p.add_argument('--ZLim', type=float, default=50.0)
    p.add_argument('--wavelengths', type=float, default=0.25, help='line length to trace (λ)')
    p.set_defaults(func=cmd_smith)
    return ap

def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.loglevel:
        LOG_CONTROLLER.set_std_loglevel(args.loglevel)
    args.func(args)

if __name__ == '__main__':
    main()
