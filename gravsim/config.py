"""
Simulation configuration: pydantic models plus the parser for the plain-text
``key = value`` configuration format.

A configuration file looks like::

    # seconds
    timeStep = 3600
    simulationLength = 3.15e7

    name = Earth
    mass = 5.972e24
    position = (1.496e11, 0, 0)
    velocity = (0, 2.978e4, 0)

Whitespace is ignored everywhere on a line. A body is complete once its
name, mass, position and velocity have all been given.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

DEFAULT_TIME_STEP = 1.0  # s
DEFAULT_SIMULATION_LENGTH = 10.0  # s

_BODY_FIELDS = frozenset({"name", "mass", "position", "velocity"})
_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class ConfigError(ValueError):
    """Raised for any malformed configuration input. Always fatal."""

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.text = text
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class BodyConfig(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    mass: float
    position: List[float] = Field(min_length=3, max_length=3)
    velocity: List[float] = Field(min_length=3, max_length=3)


class SimulationConfig(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    time_step: float = Field(default=DEFAULT_TIME_STEP, gt=0)
    simulation_length: float = DEFAULT_SIMULATION_LENGTH
    bodies: List[BodyConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def _require_positive_total_mass(self) -> "SimulationConfig":
        # The barycenter is undefined otherwise.
        if self.bodies and sum(body.mass for body in self.bodies) <= 0:
            raise ValueError("total mass of the configured bodies must be positive")
        return self


def read_number(text: str) -> float:
    """
    Parse a decimal or scientific literal. Anything else, including values
    that overflow a double, is a ConfigError.
    """
    if not _NUMBER.fullmatch(text):
        raise ConfigError(f"value {text!r} follows an invalid format", text=text)
    value = float(text)
    if math.isinf(value):
        raise ConfigError(f"value {text!r} is outside the range of a double", text=text)
    return value


def read_vector(text: str) -> List[float]:
    """Parse ``(e1,e2,e3)``; the brackets are optional."""
    inner = text
    if inner.startswith("("):
        inner = inner[1:]
    if inner.endswith(")"):
        inner = inner[:-1]
    if inner.count(",") != 2:
        raise ConfigError(
            f"{text!r} does not contain exactly two commas to be read as a 3D vector",
            text=text,
        )
    return [read_number(part) for part in inner.split(",")]


def parse_config(lines: Iterable[str]) -> SimulationConfig:
    time_step = DEFAULT_TIME_STEP
    simulation_length = DEFAULT_SIMULATION_LENGTH
    bodies: List[BodyConfig] = []
    pending: Dict[str, Any] = {}

    for line_number, raw in enumerate(lines, start=1):
        line = "".join(raw.split())
        if not line or line.startswith("#"):
            continue
        key, separator, value = line.partition("=")
        try:
            if not separator:
                raise ConfigError(f"{line!r} is not a 'key = value' assignment", text=line)
            if key == "timeStep":
                time_step = read_number(value)
            elif key == "simulationLength":
                simulation_length = read_number(value)
            elif key == "name":
                pending["name"] = value
            elif key == "mass":
                pending["mass"] = read_number(value)
            elif key in ("position", "velocity"):
                pending[key] = read_vector(value)
            else:
                raise ConfigError(f"{key!r} does not match an expected value", text=key)

            if _BODY_FIELDS <= pending.keys():
                bodies.append(BodyConfig(**pending))
                pending = {}
        except ConfigError as exc:
            if exc.line_number is None:
                exc.line_number = line_number
            raise
        except ValidationError as exc:
            raise ConfigError(str(exc), text=line, line_number=line_number) from exc

    if pending:
        missing = ", ".join(sorted(_BODY_FIELDS - pending.keys()))
        logger.warning("Ignoring incomplete body at end of config (missing %s).", missing)

    try:
        return SimulationConfig(
            time_step=time_step,
            simulation_length=simulation_length,
            bodies=bodies,
        )
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def load_config(path: Union[str, Path]) -> SimulationConfig:
    """
    Read a configuration file. A missing file yields the default
    configuration, which has no bodies.
    """
    path = Path(path)
    try:
        handle = path.open("r", encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Config file %s not found; using default settings.", path)
        return SimulationConfig()
    with handle:
        try:
            config = parse_config(handle)
        except UnicodeDecodeError as exc:
            raise ConfigError(
                f"{path} is not valid UTF-8 text ({exc.reason} at byte {exc.start})",
                text=str(path),
            ) from exc
    logger.info(
        "Simulation time step: %g s, total simulated length: %g s",
        config.time_step,
        config.simulation_length,
    )
    return config
