"""Thermodynamic state functions for the compressible Euler equations."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence, Tuple

State = Tuple[float, float, float, float]


class FlowFunction(IntEnum):
    """Derived quantities that can be computed from a conserved state."""

    DENSITY = 0
    X_MOMENTUM = 1
    Y_MOMENTUM = 2
    ENERGY = 3
    MACH = 4
    STATIC_PRESSURE = 5
    DYNAMIC_PRESSURE = 6
    PRESSURE_COEFFICIENT = 7
    SOUND_SPEED = 8
    VELOCITY = 9
    X_VELOCITY = 10
    Y_VELOCITY = 11
    ENTHALPY = 12
    ENTROPY = 13
    SHOCK_FUNCTION = 100
    EPSILON_DISSIPATION = 101
    EPSILON_DISSIPATION_C0 = 102
    X_GRADIENT_DENSITY = 200
    X_GRADIENT_X_MOMENTUM = 201
    X_GRADIENT_Y_MOMENTUM = 202
    X_GRADIENT_ENERGY = 203
    Y_GRADIENT_DENSITY = 300
    Y_GRADIENT_X_MOMENTUM = 301
    Y_GRADIENT_Y_MOMENTUM = 302
    Y_GRADIENT_ENERGY = 303

    def __str__(self) -> str:
        return _LABELS[self]


_LABELS = {
    FlowFunction.DENSITY: "Density",
    FlowFunction.X_MOMENTUM: "XMomentum",
    FlowFunction.Y_MOMENTUM: "YMomentum",
    FlowFunction.ENERGY: "Energy",
    FlowFunction.MACH: "Mach",
    FlowFunction.STATIC_PRESSURE: "Static Pressure",
    FlowFunction.DYNAMIC_PRESSURE: "Dynamic Pressure",
    FlowFunction.PRESSURE_COEFFICIENT: "Pressure Coefficient",
    FlowFunction.SOUND_SPEED: "Sound Speed",
    FlowFunction.VELOCITY: "Velocity",
    FlowFunction.X_VELOCITY: "XVelocity",
    FlowFunction.Y_VELOCITY: "YVelocity",
    FlowFunction.ENTHALPY: "Enthalpy",
    FlowFunction.ENTROPY: "Entropy",
    FlowFunction.SHOCK_FUNCTION: "ShockFunction",
    FlowFunction.EPSILON_DISSIPATION: "Artificial Dissipation Epsilon",
    FlowFunction.EPSILON_DISSIPATION_C0: "Artificial Dissipation Epsilon C0",
    FlowFunction.X_GRADIENT_DENSITY: "X Direction Gradient of Density",
    FlowFunction.X_GRADIENT_X_MOMENTUM: "X Direction Gradient of X Momentum",
    FlowFunction.X_GRADIENT_Y_MOMENTUM: "X Direction Gradient of Y Momentum",
    FlowFunction.X_GRADIENT_ENERGY: "X Direction Gradient of Energy",
    FlowFunction.Y_GRADIENT_DENSITY: "Y Direction Gradient of Density",
    FlowFunction.Y_GRADIENT_X_MOMENTUM: "Y Direction Gradient of X Momentum",
    FlowFunction.Y_GRADIENT_Y_MOMENTUM: "Y Direction Gradient of Y Momentum",
    FlowFunction.Y_GRADIENT_ENERGY: "Y Direction Gradient of Energy",
}

_PRESSURE_DERIVED = frozenset(
    {
        FlowFunction.VELOCITY,
        FlowFunction.DYNAMIC_PRESSURE,
        FlowFunction.STATIC_PRESSURE,
        FlowFunction.PRESSURE_COEFFICIENT,
        FlowFunction.SOUND_SPEED,
        FlowFunction.ENTHALPY,
        FlowFunction.ENTROPY,
        FlowFunction.MACH,
    }
)


@dataclass
class FreeStream:
    """A reference flow state together with its derived pressure and sound speed."""

    gamma: float
    qinf: State
    alpha: float = 0.0
    minf: float = 0.0
    pinf: float = field(init=False, default=0.0)
    qqinf: float = field(init=False, default=0.0)
    cinf: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.qinf = tuple(float(v) for v in self.qinf)
        if len(self.qinf) != 4:
            raise ValueError(f"free stream state needs 4 components, got {len(self.qinf)}")
        self.pinf = self.flow_function_state(self.qinf, FlowFunction.STATIC_PRESSURE)
        self.qqinf = self.flow_function_state(self.qinf, FlowFunction.DYNAMIC_PRESSURE)
        self.cinf = self.flow_function_state(self.qinf, FlowFunction.SOUND_SPEED)

    def flow_function(self, rho, rho_u, rho_v, energy, function) -> float:
        """Evaluate a derived quantity from the conserved variables."""
        function = FlowFunction(function)
        if function is FlowFunction.DENSITY:
            return rho
        if function is FlowFunction.X_MOMENTUM:
            return rho_u
        if function is FlowFunction.Y_MOMENTUM:
            return rho_v
        if function is FlowFunction.ENERGY:
            return energy
        if function is FlowFunction.X_VELOCITY:
            return rho_u / rho
        if function is FlowFunction.Y_VELOCITY:
            return rho_v / rho
        if function not in _PRESSURE_DERIVED:
            return 0.0

        gamma = self.gamma
        oorho = 1.0 / rho
        u, v = rho_u * oorho, rho_v * oorho
        u2 = u * u + v * v
        q = 0.5 * rho * u2
        p = (gamma - 1.0) * (energy - q)
        if function is FlowFunction.VELOCITY:
            return math.sqrt(u2)
        if function is FlowFunction.DYNAMIC_PRESSURE:
            return q
        if function is FlowFunction.STATIC_PRESSURE:
            return p
        if function is FlowFunction.PRESSURE_COEFFICIENT:
            return (p - self.pinf) / self.qqinf
        if function is FlowFunction.SOUND_SPEED:
            return math.sqrt(abs(gamma * p * oorho))
        if function is FlowFunction.ENTHALPY:
            return (energy + p) / rho
        if function is FlowFunction.ENTROPY:
            return math.log(p) - gamma * math.log(rho)
        # Mach number
        return math.sqrt(u2) / math.sqrt(abs(gamma * p * oorho))

    def flow_function_state(self, q: Sequence[float], function) -> float:
        """Evaluate a derived quantity from a four component state."""
        rho, rho_u, rho_v, energy = q
        return self.flow_function(rho, rho_u, rho_v, energy, function)

    def describe(self) -> str:
        q0, q1, q2, q3 = self.qinf
        return (
            f"Minf[{self.minf:5.2f}] Gamma[{self.gamma:5.2f}] Alpha[{self.alpha:5.2f}] "
            f"Q[{q0:8.5f},{q1:8.5f},{q2:8.5f},{q3:8.5f}]\n"
        )


def new_free_stream(minf: float, gamma: float, alpha: float) -> FreeStream:
    """Build a unit density free stream at Mach ``minf`` and angle ``alpha`` in degrees."""
    ooggm1 = 1.0 / (gamma * (gamma - 1.0))
    angle = alpha * math.pi / 180.0
    uinf = minf * math.cos(angle)
    vinf = minf * math.sin(angle)
    qinf = (1.0, uinf, vinf, ooggm1 + 0.5 * minf * minf)
    return FreeStream(gamma=gamma, qinf=qinf, alpha=alpha, minf=minf)


def free_stream_from_state(gamma: float, qinf: Sequence[float]) -> FreeStream:
    """Build a free stream directly from a conserved state."""
    return FreeStream(gamma=gamma, qinf=tuple(qinf))