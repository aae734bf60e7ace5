"""
Main class for handling an N-body system.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union

from .body import G, PhysicsBody
from .config import BodyConfig
from .vector import Vector3

EULER = "euler"
EULER_CROMER = "euler_cromer"
METHODS = (EULER_CROMER, EULER)


class System:
    """
    Container that owns the ensemble of bodies and advances it in time.

    Every step recenters the ensemble on its barycenter, computes all
    accelerations from that snapshot of positions, then moves the bodies.
    """

    def __init__(
        self,
        name: str = "Unnamed system",
        initial_bodies: Optional[Sequence[Union[dict, BodyConfig]]] = None,
    ):
        self.name = name
        self.bodies: List[PhysicsBody] = []
        if initial_bodies:
            self.add_bodies(initial_bodies)

    def __len__(self) -> int:
        return len(self.bodies)

    def add_body(
        self,
        name: str,
        mass: float,
        position: Iterable[float],
        velocity: Iterable[float],
    ) -> PhysicsBody:
        body = PhysicsBody(name, mass, position, velocity)
        self.bodies.append(body)
        return body

    def add_bodies(self, configs: Sequence[Union[dict, BodyConfig]]) -> List[PhysicsBody]:
        created = []
        for cfg in configs:
            if isinstance(cfg, BodyConfig):
                cfg = cfg.model_dump()
            created.append(
                self.add_body(
                    name=cfg["name"],
                    mass=cfg["mass"],
                    position=cfg["position"],
                    velocity=cfg["velocity"],
                )
            )
        return created

    def get_body(self, name: str) -> Optional[PhysicsBody]:
        return next((b for b in self.bodies if b.name == name), None)

    def names(self) -> List[str]:
        return [body.name for body in self.bodies]

    def total_mass(self) -> float:
        return sum(body.mass for body in self.bodies)

    def centre_of_mass_moment(self) -> Vector3:
        """Sum of mass * position over the ensemble."""
        moment = Vector3()
        for body in self.bodies:
            moment += body.position * body.mass
        return moment

    def centre_of_mass(self) -> Vector3:
        if not self.bodies:
            raise ValueError("Cannot locate the centre of mass of an empty system.")
        total_mass = self.total_mass()
        if total_mass == 0:
            raise ValueError("Cannot locate the centre of mass of a massless system.")
        return Vector3([c / total_mass for c in self.centre_of_mass_moment()])

    def recenter(self) -> Vector3:
        """Move the origin to the barycenter and return the offset that was removed."""
        centre = self.centre_of_mass()
        for body in self.bodies:
            body.position -= centre
        return centre

    def positions(self) -> List[Vector3]:
        return [body.position.copy() for body in self.bodies]

    def barycentric_positions(self) -> List[Vector3]:
        """Positions relative to the barycenter, leaving the bodies untouched."""
        centre = self.centre_of_mass()
        return [body.position - centre for body in self.bodies]

    def step(self, dt: float, method: str = EULER_CROMER) -> None:
        """
        Recenter, then advance every body by dt seconds.
        """
        if dt <= 0:
            raise ValueError("dt must be positive")
        if method not in METHODS:
            raise ValueError(f"Unknown integration method {method!r}; expected one of {METHODS}")
        if not self.bodies:
            return
        self.recenter()

        # All accelerations come from the same positions; nothing moves yet.
        for body in self.bodies:
            body.update_acceleration_euler(self.bodies)

        for body in self.bodies:
            if method == EULER_CROMER:
                body.update_velocity_euler(dt)
                body.update_position_euler(dt)
            else:
                body.update_position_euler(dt)
                body.update_velocity_euler(dt)

    def run(
        self, total_length: float, dt: float, method: str = EULER_CROMER
    ) -> Iterator[float]:
        """
        Step until the elapsed simulated time reaches ``total_length``,
        yielding the elapsed time after each step. The final step may
        overshoot the total by up to ``dt``.
        """
        if dt <= 0:
            raise ValueError("dt must be positive")
        elapsed = 0.0
        while elapsed < total_length:
            self.step(dt, method)
            elapsed += dt
            yield elapsed

    def sample_positions(
        self,
        total_length: float,
        dt: float,
        method: str = EULER_CROMER,
        include_initial: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Run the system and return one sample per step, each holding the time
        and every body's position in ensemble order.
        """
        if not self.bodies:
            return []

        def capture_sample(t: float, positions: List[Vector3]) -> Dict[str, Any]:
            return {"t": t, "positions": [p.tolist() for p in positions]}

        samples: List[Dict[str, Any]] = []
        if include_initial:
            samples.append(capture_sample(0.0, self.barycentric_positions()))
        for elapsed in self.run(total_length, dt, method):
            samples.append(capture_sample(elapsed, self.positions()))
        return samples

    # Diagnostics

    def total_momentum(self) -> Vector3:
        momentum = Vector3()
        for body in self.bodies:
            momentum += body.momentum()
        return momentum

    def kinetic_energy(self) -> float:
        return sum(body.kinetic_energy() for body in self.bodies)

    def potential_energy(self) -> float:
        """Pairwise -G m_i m_j / r_ij, each pair counted once. Collocated pairs are skipped."""
        energy = 0.0
        for idx, body in enumerate(self.bodies):
            for other in self.bodies[idx + 1:]:
                distance = body.distance_to(other)
                if distance == 0:
                    continue
                energy -= G * body.mass * other.mass / distance
        return energy

    def total_energy(self) -> float:
        return self.kinetic_energy() + self.potential_energy()
