# tlkit/tl_transient.py
"""
Bounce-diagram transient response of a lossless line between a resistive
source and a resistive load.

The source launches ``k·vs(t)`` with ``k = Z0/(Z0 + Rs)``. Every arrival at
the load multiplies the travelling wave by Γ_L and every arrival back at the
source by Γ_S, so the voltage anywhere on the line is a sum of delayed
copies of the launched wave.
"""
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from typing import Union
from loguru import logger
from .tl_errors import InvalidParameterError, require_positive, require_non_negative, require_count

# ----------------------------
# Source waveforms
# ----------------------------

@dataclass(frozen=True)
class StepSource:
    voltage: float

    def evaluate(self, t):
        """V0 for t >= 0, else 0 (scalar or array)."""
        return np.where(np.asarray(t) >= 0, self.voltage, 0.0)

@dataclass(frozen=True)
class PulseSource:
    voltage: float
    duration: float

    def __post_init__(self):
        require_positive('duration', self.duration)

    def evaluate(self, t):
        """V0 for 0 <= t < duration, else 0 (scalar or array)."""
        t = np.asarray(t)
        return np.where((t >= 0) & (t < self.duration), self.voltage, 0.0)

SourceWaveform = Union[StepSource, PulseSource]

# ----------------------------
# Results
# ----------------------------

@dataclass(frozen=True)
class BounceEvent:
    bounce: int      # 0 = launch at the source
    time: float      # s
    voltage: float   # amplitude of the wave leaving this event
    at_load: bool

@dataclass(frozen=True)
class TransientResult:
    gamma_source: float
    gamma_load: float
    transit_time: float
    v_initial: float
    bounces: tuple
    steady_state_voltage: float    # step-source divider value, not the settled pulse response

    def node_voltages(self) -> np.ndarray:
        """Voltage at the end where each event lands, just after it (step source)."""
        return np.cumsum([b.voltage for b in self.bounces])

# ----------------------------
# Line + terminations
# ----------------------------

def _reflection(R: float, Z0: float) -> float:
    if np.isinf(R):
        return 1.0
    return (R - Z0)/(R + Z0)

@dataclass(frozen=True)
class TransientParams:
    Z0: float
    Rs: float
    RL: float        # np.inf for an open-circuited load
    length: float    # m
    vp: float        # m/s
    source: SourceWaveform

    def __post_init__(self):
        require_positive('Z0', self.Z0)
        require_non_negative('Rs', self.Rs)
        if np.isinf(self.Rs):
            raise InvalidParameterError('Rs', 'source resistance must be finite')
        require_non_negative('RL', self.RL)
        if self.Rs == 0 and self.RL == 0:
            raise InvalidParameterError('RL', 'source and load resistance cannot both be zero')
        require_positive('length', self.length)
        require_positive('vp', self.vp)

    @property
    def transit_time(self) -> float:
        return self.length/self.vp

    @property
    def gamma_source(self) -> float:
        return _reflection(self.Rs, self.Z0)

    @property
    def gamma_load(self) -> float:
        return _reflection(self.RL, self.Z0)

    @property
    def launch_ratio(self) -> float:
        return self.Z0/(self.Z0 + self.Rs)

    def steady_state_voltage(self) -> float:
        """Resistive divider Vs·RL/(Rs + RL) for a step source; a pulse settles to 0 V instead."""
        V = self.source.voltage
        if np.isinf(self.RL):
            return V
        return V*self.RL/(self.Rs + self.RL)

    def bounce_series_limit(self) -> float:
        """Σ_n V1·(1+Γ_L)·(Γ_L·Γ_S)^n = V1·(1+Γ_L)/(1 - Γ_L·Γ_S)."""
        v1 = self.source.voltage*self.launch_ratio
        return v1*(1 + self.gamma_load)/(1 - self.gamma_load*self.gamma_source)

    def solve(self, num_bounces: int) -> TransientResult:
        """Bounce events 0..num_bounces; odd events land on the load, even ones on the source."""
        n = require_count('num_bounces', num_bounces, 0)
        td = self.transit_time
        gs, gl = self.gamma_source, self.gamma_load
        v_initial = self.source.voltage*self.launch_ratio

        bounces = [BounceEvent(bounce=0, time=0.0, voltage=v_initial, at_load=False)]
        v = v_initial
        for i in range(1, n + 1):
            at_load = i % 2 == 1
            v *= gl if at_load else gs
            bounces.append(BounceEvent(bounce=i, time=i*td, voltage=v, at_load=at_load))

        return TransientResult(
            gamma_source=gs, gamma_load=gl, transit_time=td, v_initial=v_initial,
            bounces=tuple(bounces), steady_state_voltage=self.steady_state_voltage()
        )

    def _waves_at(self, x: float, t, max_bounces: int):
        """Yield (forward?, amplitude factor, delayed source voltage) for waves reaching x by t."""
        require_count('max_bounces', max_bounces, 0)
        if not 0 <= x <= self.length:
            raise InvalidParameterError('x', f"must lie on the line [0, {self.length}], got {x!r}")
        t = np.asarray(t, dtype=float)
        t_max = float(np.max(t))
        td = self.transit_time
        gs, gl = self.gamma_source, self.gamma_load
        k = self.launch_ratio
        to_x = x/self.vp
        back_to_x = (2*self.length - x)/self.vp
        count = max_bounces + 1
        if x == self.length and count % 2:
            # at the load the reflection leaves together with its incident wave
            count += 1
        for m in range(count):
            n, backward = divmod(m, 2)
            delay = (back_to_x if backward else to_x) + 2*n*td
            if delay > t_max:
                logger.debug(f"transient sum at x={x}: stopped after {m} waves (horizon {t_max:.4g} s)")
                break
            amp = (gl*gs)**n*(gl if backward else 1.0)
            yield not backward, amp, k*self.source.evaluate(t - delay)

    def voltage_at(self, x: float, t, max_bounces: int):
        """V(x, t) with x measured from the source; zero before the first arrival."""
        total = np.zeros(np.shape(t))
        for _, amp, vs in self._waves_at(x, t, max_bounces):
            total = total + amp*vs
        return float(total) if np.ndim(t) == 0 else total

    def current_at(self, x: float, t, max_bounces: int):
        """I(x, t) = (V+ - V-)/Z0."""
        total = np.zeros(np.shape(t))
        for forward, amp, vs in self._waves_at(x, t, max_bounces):
            total = total + (amp*vs if forward else -amp*vs)
        total = total/self.Z0
        return float(total) if np.ndim(t) == 0 else total

    def _time_axis(self, t_end: float, npts: int) -> np.ndarray:
        require_positive('t_end', t_end)
        n = require_count('npts', npts, 2)
        return np.linspace(0.0, t_end, n)

    def sample_load_voltage(self, t_end: float, npts: int):
        """
        Load voltage on [0, t_end]: arrival n at (2n+1)·T_d adds
        V_fwd·(1+Γ_L) with V_fwd = k·vs·(Γ_L·Γ_S)^n. Summation stops at the
        first arrival past t_end.
        """
        times = self._time_axis(t_end, npts)
        td = self.transit_time
        gs, gl = self.gamma_source, self.gamma_load
        k = self.launch_ratio
        volts = np.zeros_like(times)
        n = 0
        arrival = td
        while arrival <= t_end:
            v_fwd = k*self.source.evaluate(times - arrival)*(gl*gs)**n
            volts += v_fwd*(1 + gl)
            n += 1
            arrival = (2*n + 1)*td
        return times, volts

    def sample_source_voltage(self, t_end: float, npts: int):
        """Voltage at the source end of the line on [0, t_end]."""
        times = self._time_axis(t_end, npts)
        # every wave reaching x=0 has arrived by 2·T_d per round trip
        max_bounces = 2*int(np.ceil(t_end/(2*self.transit_time))) + 1
        return times, self.voltage_at(0.0, times, max_bounces)
