from .tl_logging import LOG_CONTROLLER
from .tl_errors import InvalidParameterError
from .tl_core import (
    LineInputs, LineDerived,
    gamma_Z0, basic_params, Zin_at_distance, Zin_lossless,
    gamma_of_impedance, impedance_of_gamma, vswr_from_gamma,
    return_loss_dB, mismatch_loss_dB
)
from .tl_lines import (
    LineParameters, TwoWireLine, CoaxialLine, MicrostripLine
)
from .tl_smith import (
    SmithPoint, constant_r_circle, constant_x_circle, swr_circle,
    swr_circle_from_gamma, trace_toward_generator
)
from .tl_matching import (
    QWTResult, MultiSectionResult, LNetworkMatch, LNetworkTopology, Inductor, Capacitor,
    quarter_wave_transform, binomial_transform, l_network
)
from .tl_stubs import (
    StubType, StubResult, single_stub, verify_single_stub, best_single_stub
)
from .tl_standing import (
    StandingWaveParams, waves_along_line
)
from .tl_transient import (
    StepSource, PulseSource, TransientParams, TransientResult, BounceEvent
)
