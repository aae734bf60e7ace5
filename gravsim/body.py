"""
Mutable representation of a body that belongs to a System.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Sequence

from .vector import Vector3

G = 6.67408e-11  # m^3 kg^-1 s^-2

logger = logging.getLogger(__name__)


def _vector3(values: Iterable[float]) -> Vector3:
    components = list(values)
    if len(components) != 3:
        raise ValueError("position, velocity and acceleration must be 3-element vectors")
    return Vector3(components)


class PhysicsBody:
    """
    A point mass in SI units: mass in kg, position in m, velocity in m/s.

    The acceleration is transient and is recomputed from the rest of the
    ensemble on every step.
    """

    def __init__(
        self,
        name: str = "Unnamed Planet",
        mass: float = 0.0,
        position: Iterable[float] = (0.0, 0.0, 0.0),
        velocity: Iterable[float] = (0.0, 0.0, 0.0),
        acceleration: Optional[Iterable[float]] = None,
    ) -> None:
        self.name = name
        self.mass = float(mass)
        self.position = _vector3(position)
        self.velocity = _vector3(velocity)
        self.acceleration = (
            _vector3(acceleration) if acceleration is not None else Vector3()
        )

    def calc_acceleration(self, other: PhysicsBody) -> Vector3:
        """
        Acceleration imposed on this body by ``other``:
        -(G M / r^2) times the unit vector pointing from ``other`` to this body.
        """
        offset = self.position - other.position
        distance = offset.magnitude()
        if distance == 0:
            logger.warning(
                "%s and %s are collocated; skipping their interaction.",
                self.name,
                other.name,
            )
            return Vector3()
        acceleration = offset.get_unit_vector()
        acceleration.scale_vector(-(G * other.mass) / distance**2)
        return acceleration

    def update_acceleration_euler(self, bodies: Sequence[PhysicsBody]) -> None:
        """Sum the pull of every other body in ``bodies`` into ``acceleration``."""
        total = Vector3()
        for other in bodies:
            if other is self:
                continue
            total += self.calc_acceleration(other)
        self.acceleration = total

    def update_position_euler(self, dt: float) -> None:
        self.position += self.velocity * dt

    def update_velocity_euler(self, dt: float) -> None:
        self.velocity += self.acceleration * dt

    def update_euler(self, bodies: Sequence[PhysicsBody], dt: float) -> None:
        """Explicit Euler: the position advances with the pre-update velocity."""
        self.update_acceleration_euler(bodies)
        self.update_position_euler(dt)
        self.update_velocity_euler(dt)

    def update_euler_cromer(self, bodies: Sequence[PhysicsBody], dt: float) -> None:
        """Semi-implicit Euler: the position advances with the new velocity."""
        self.update_acceleration_euler(bodies)
        self.update_velocity_euler(dt)
        self.update_position_euler(dt)

    def momentum(self) -> Vector3:
        return self.velocity * self.mass

    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * self.velocity.length_squared()

    def distance_to(self, other: PhysicsBody) -> float:
        """Return Euclidean distance to another body."""
        return (self.position - other.position).magnitude()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "mass": self.mass,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
        }

    def __repr__(self) -> str:
        return f"PhysicsBody(name={self.name!r}, mass={self.mass!r})"


Planet = PhysicsBody
