import math

import pytest

from gravsim.body import G
from gravsim.config import BodyConfig
from gravsim.system import EULER, System
from gravsim.vector import Vector3

SUN_MASS = 1.989e30
EARTH_MASS = 5.972e24
AU = 1.496e11


def _sun_earth() -> System:
    speed = math.sqrt(G * SUN_MASS / AU)
    return System(
        initial_bodies=[
            {
                "name": "Sun",
                "mass": SUN_MASS,
                "position": [0.0, 0.0, 0.0],
                "velocity": [0.0, -speed * EARTH_MASS / SUN_MASS, 0.0],
            },
            {
                "name": "Earth",
                "mass": EARTH_MASS,
                "position": [AU, 0.0, 0.0],
                "velocity": [0.0, speed, 0.0],
            },
        ]
    )


def _exact_barycentric_pair() -> System:
    # Powers of two keep mass * position exact, so the barycenter is exactly
    # the origin and recentering leaves every coordinate untouched.
    unit_mass = 2.0**80
    distance = 2.0**30
    return System(
        initial_bodies=[
            {
                "name": "Primary",
                "mass": 3 * unit_mass,
                "position": [-distance, 0.0, 0.0],
                "velocity": [0.0, -64.0, 0.0],
            },
            {
                "name": "Secondary",
                "mass": unit_mass,
                "position": [3 * distance, 0.0, 0.0],
                "velocity": [0.0, 192.0, 0.0],
            },
        ]
    )


def test_add_bodies_accepts_models_and_dicts():
    system = System(
        initial_bodies=[
            BodyConfig(name="A", mass=1.0, position=[1, 0, 0], velocity=[0, 0, 0]),
            {"name": "B", "mass": 2.0, "position": [0, 1, 0], "velocity": [0, 0, 0]},
        ]
    )
    assert system.names() == ["A", "B"]
    assert system.get_body("B").mass == 2.0
    assert system.get_body("C") is None
    assert system.total_mass() == 3.0


def test_centre_of_mass():
    system = System(
        initial_bodies=[
            {"name": "A", "mass": 1.0, "position": [0, 0, 0], "velocity": [0, 0, 0]},
            {"name": "B", "mass": 3.0, "position": [4, 8, -4], "velocity": [0, 0, 0]},
        ]
    )
    assert system.centre_of_mass() == Vector3([3, 6, -3])


def test_centre_of_mass_of_empty_or_massless_system():
    with pytest.raises(ValueError):
        System().centre_of_mass()
    massless = System(
        initial_bodies=[{"name": "A", "mass": 0.0, "position": [1, 0, 0], "velocity": [0, 0, 0]}]
    )
    with pytest.raises(ValueError):
        massless.centre_of_mass()


def test_recenter_moves_barycenter_to_origin():
    system = _sun_earth()
    for body in system.bodies:
        body.position += Vector3([3e9, -7e10, 1e8])
    system.recenter()
    moment = system.centre_of_mass_moment()
    scale = system.total_mass() * AU
    assert all(abs(c) / scale < 1e-12 for c in moment)


def test_barycentric_positions_do_not_mutate():
    system = _sun_earth()
    before = system.positions()
    relative = system.barycentric_positions()
    assert system.positions() == before
    assert relative[1].x < AU


def test_step_uses_a_consistent_snapshot():
    # Mirror-image bodies stay exact mirror images only if no body moves
    # before every acceleration has been computed.
    system = System(
        initial_bodies=[
            {"name": "A", "mass": 1e24, "position": [1e9, 0, 0], "velocity": [0, 50.0, 0]},
            {"name": "B", "mass": 1e24, "position": [-1e9, 0, 0], "velocity": [0, -50.0, 0]},
        ]
    )
    for _ in range(5):
        system.step(600.0)
        a, b = system.bodies
        assert a.position == -b.position
        assert a.velocity == -b.velocity


def test_step_matches_manual_euler_cromer():
    system = _exact_barycentric_pair()
    sun, earth = system.bodies
    dt = 3600.0
    expected_acc = earth.calc_acceleration(sun)
    expected_velocity = earth.velocity + expected_acc * dt
    expected_position = earth.position + expected_velocity * dt
    system.step(dt)
    assert earth.acceleration == expected_acc
    assert earth.velocity == expected_velocity
    assert earth.position == expected_position


def test_explicit_euler_method():
    system = _exact_barycentric_pair()
    earth = system.bodies[1]
    dt = 3600.0
    expected_position = earth.position + earth.velocity * dt
    system.step(dt, method=EULER)
    assert earth.position == expected_position


def test_step_rejects_bad_arguments():
    system = _sun_earth()
    with pytest.raises(ValueError):
        system.step(0.0)
    with pytest.raises(ValueError):
        system.step(1.0, method="rk4")


def test_run_step_count_and_overshoot():
    assert list(_sun_earth().run(10.0, 1.0)) == [float(t) for t in range(1, 11)]
    elapsed = list(_sun_earth().run(10.0, 3.0))
    assert elapsed == [3.0, 6.0, 9.0, 12.0]
    assert list(_sun_earth().run(0.0, 1.0)) == []


def test_sample_positions():
    samples = _sun_earth().sample_positions(7200.0, 3600.0, include_initial=True)
    assert [s["t"] for s in samples] == [0.0, 3600.0, 7200.0]
    assert len(samples[0]["positions"]) == 2
    assert System().sample_positions(10.0, 1.0) == []


def test_energy_and_momentum_drift_stays_bounded():
    system = _sun_earth()
    dt = 600.0
    initial_energy = system.total_energy()
    momentum_scale = EARTH_MASS * math.sqrt(G * SUN_MASS / AU)
    assert initial_energy < 0

    for _ in system.run(2000 * dt, dt):
        pass

    drift = abs(system.total_energy() - initial_energy) / abs(initial_energy)
    assert drift < 1e-3
    assert system.total_momentum().magnitude() / momentum_scale < 1e-9
    # Still bound: Earth has not drifted far from 1 AU.
    assert system.bodies[0].distance_to(system.bodies[1]) == pytest.approx(AU, rel=1e-2)
