import math
import time

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, ValidationError
from typing import List, Literal, Optional

from gravsim.config import BodyConfig, SimulationConfig
from gravsim.defaults import DEFAULT_BODIES
from gravsim.simulation import samples_for_config

MAX_API_STEPS = 100_000

app = FastAPI(title="gravsim")


class Body(BaseModel):
    name: str
    mass: float
    position: List[float] = Field(min_length=3, max_length=3)
    velocity: List[float] = Field(min_length=3, max_length=3)


class SimulateRequest(BaseModel):
    timeStep: float = 1.0
    simulationLength: float = 10.0
    bodies: Optional[List[Body]] = None
    method: Literal["euler_cromer", "euler"] = "euler_cromer"
    includeInitial: Optional[bool] = False


class TrajectorySample(BaseModel):
    t: float
    positions: List[List[float]]


class SimulateResponse(BaseModel):
    bodies: List[str]
    header: List[str]
    samples: List[TrajectorySample]
    meta: dict


@app.post("/api/simulate", response_model=SimulateResponse)
def simulate(req: SimulateRequest):
    """
    Integrate the requested bodies (or the default solar system when none
    are given) and return every sampled position.
    """
    try:
        config = SimulationConfig(
            time_step=req.timeStep,
            simulation_length=req.simulationLength,
            bodies=[BodyConfig(**body.model_dump()) for body in req.bodies or []],
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    steps = max(0, math.ceil(config.simulation_length / config.time_step))
    if steps > MAX_API_STEPS:
        raise HTTPException(
            status_code=400,
            detail=f"Run needs {steps} steps; at most {MAX_API_STEPS} are allowed.",
        )

    start = time.perf_counter()
    result = samples_for_config(
        config, method=req.method, include_initial=bool(req.includeInitial)
    )
    result["meta"]["elapsedMs"] = (time.perf_counter() - start) * 1000.0
    return result


@app.get("/api/defaults", response_model=List[Body])
def defaults():
    return DEFAULT_BODIES
