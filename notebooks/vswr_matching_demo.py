from tlkit.tl_core import LineInputs, basic_params
from tlkit.tl_matching import quarter_wave_transform, l_network
from tlkit.tl_stubs import best_single_stub, verify_single_stub, StubType

inp = LineInputs(0.0, 250e-9, 0.0, 100e-12, 1e9, 0.25, 25+50j)
d = basic_params(inp)

# VSWR before matching
print("VSWR before:", d.VSWR)

# VSWR after matching using single stub shunt
Z0, vp = d.Z0.real, d.vp
res = best_single_stub(Z0, inp.ZL, inp.f, vp, StubType.SHORT)
gamma = verify_single_stub(Z0, inp.ZL, res, inp.f, vp)
print("|Γ| after (stub):", gamma, "d:", res.d_wavelengths, "λ  l_stub:", res.l_wavelengths, "λ")

# quarter-wave transformer for the real part of the load
q = quarter_wave_transform(Z0, inp.ZL.real, inp.f, vp)
print("VSWR after (λ/4) at f0:", q.vswr_at(inp.f))

# lumped L-network
for m in l_network(Z0, inp.ZL, inp.f):
    print("L-network:", m.topology.value, m.series_component, m.shunt_component)
