"""
Utilities for constructing a System from a SimulationConfig, running it, and
streaming the trajectory to a delimited file or collecting it as samples.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, TextIO, Union

from .config import SimulationConfig, load_config
from .defaults import with_default_bodies
from .output import TrajectoryWriter
from .system import EULER_CROMER, System

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    system: System
    steps: int
    elapsed: float


class ProgressReporter:
    """
    Logs how far along a run is, one message per percentage marker crossed.
    At most one marker is reported per step, and 100% only on ``finish``.
    """

    def __init__(self, total_length: float) -> None:
        self.total_length = total_length
        self.percent = 0

    def update(self, elapsed: float) -> None:
        if self.percent < 99 and elapsed > self.percent * self.total_length / 100:
            self.percent += 1
            logger.info("%d%% complete.", self.percent)

    def finish(self) -> None:
        self.percent = 100
        logger.info("100% complete.")


def build_system(config: SimulationConfig, name: str = "Simulated system") -> System:
    if config.bodies:
        logger.info("Bodies being simulated: %d", len(config.bodies))
    else:
        logger.info("No bodies configured; adding default solar system.")
        config = with_default_bodies(config)
    return System(name=name, initial_bodies=config.bodies)


def simulate(
    config: SimulationConfig,
    stream: TextIO,
    method: str = EULER_CROMER,
    precision: int = 6,
    include_initial: bool = False,
    progress: bool = True,
) -> SimulationResult:
    """
    Run ``config`` to completion, writing a header then one record per step
    to ``stream``. With ``include_initial`` the barycentric starting state is
    written as the first record.
    """
    system = build_system(config)
    writer = TrajectoryWriter(stream, precision=precision)
    writer.write_header(system.names())
    if include_initial:
        writer.write_positions(system.barycentric_positions())

    reporter = ProgressReporter(config.simulation_length) if progress else None
    logger.info("Beginning simulation.")
    steps = 0
    elapsed = 0.0
    for elapsed in system.run(config.simulation_length, config.time_step, method):
        writer.write_positions(body.position for body in system.bodies)
        steps += 1
        if reporter is not None:
            reporter.update(elapsed)
    if reporter is not None:
        reporter.finish()
    return SimulationResult(system=system, steps=steps, elapsed=elapsed)


def run_file(
    config_path: Union[str, Path],
    output_path: Union[str, Path],
    **options: Any,
) -> SimulationResult:
    config = load_config(config_path)
    output_path = Path(output_path)
    with output_path.open("w", newline="", encoding="utf-8") as stream:
        result = simulate(config, stream, **options)
    logger.info("Data written to %s", output_path)
    return result


def samples_for_config(
    config: SimulationConfig,
    method: str = EULER_CROMER,
    include_initial: bool = False,
) -> Dict[str, Any]:
    """
    Run ``config`` in memory and return the body names, the output header,
    the position samples and some run metadata.
    """
    system = build_system(config, name="Requested system")
    names = system.names()
    header = [f"{name}{axis}" for name in names for axis in "XYZ"]
    initial_energy = system.total_energy()

    samples = system.sample_positions(
        config.simulation_length,
        config.time_step,
        method=method,
        include_initial=include_initial,
    )
    steps = len(samples) - (1 if include_initial else 0)

    return {
        "bodies": names,
        "header": header,
        "samples": samples,
        "meta": {
            "steps": steps,
            "timeStep": config.time_step,
            "method": method,
            "energy": {"initial": initial_energy, "final": system.total_energy()},
        },
    }
