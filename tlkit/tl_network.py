# tlkit/tl_network.py
from __future__ import annotations
import numpy as np
from dataclasses import dataclass
from functools import reduce
from typing import Iterable

@dataclass(frozen=True)
class ABCD:
    """Transmission matrix [[A, B], [C, D]] of a two-port (V1, I1) <- (V2, I2)."""
    A: complex
    B: complex
    C: complex
    D: complex

    def __matmul__(self, other: "ABCD") -> "ABCD":
        # self is nearer the source
        return ABCD(
            A=self.A*other.A + self.B*other.C,
            B=self.A*other.B + self.B*other.D,
            C=self.C*other.A + self.D*other.C,
            D=self.C*other.B + self.D*other.D,
        )

    @classmethod
    def series(cls, Z: complex) -> "ABCD":
        return cls(1.0, Z, 0.0, 1.0)

    @classmethod
    def shunt(cls, Y: complex) -> "ABCD":
        return cls(1.0, 0.0, Y, 1.0)

    @classmethod
    def line(cls, gamma: complex, Z0: complex, length: float) -> "ABCD":
        """Line section with propagation constant γ (lossy or lossless)."""
        ch, sh = np.cosh(gamma*length), np.sinh(gamma*length)
        return cls(ch, Z0*sh, sh/Z0, ch)

    @classmethod
    def lossless_line(cls, Z0: float, theta: float) -> "ABCD":
        """Lossless section of electrical length θ = βl."""
        c, s = np.cos(theta), np.sin(theta)
        return cls(c, 1j*Z0*s, 1j*s/Z0, c)

    def input_impedance(self, ZL: complex) -> complex:
        """Impedance at port 1 with port 2 terminated by ZL (open load: A/C)."""
        ZL = complex(ZL)
        if np.isinf(ZL.real) or np.isinf(ZL.imag):
            num, den = self.A, self.C
        else:
            num, den = self.A*ZL + self.B, self.C*ZL + self.D
        if den == 0:
            return complex(np.inf)
        return complex(num/den)

IDENTITY = ABCD(1.0, 0.0, 0.0, 1.0)

def cascade(stages: Iterable[ABCD]) -> ABCD:
    """Product of two-ports listed from the source side to the load side."""
    return reduce(ABCD.__matmul__, stages, IDENTITY)
