import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from polyroots import ConvergenceError, RootOptions
from app.solver import divide_strs, find_roots, solve_quadratic_strs

logger = logging.getLogger(__name__)

app = FastAPI(title="polyroots API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RootsRequest(BaseModel):
    coefficients: list[str]
    options: Optional[RootOptions] = None


class QuadraticRequest(BaseModel):
    a: str
    b: str
    c: str


class DivideRequest(BaseModel):
    dividend: list[str]
    divisor: list[str]


class StepInfo(BaseModel):
    step_number: int
    description: str
    expression: str
    explanation: str


class RootsResponse(BaseModel):
    polynomial: str
    degree: int
    roots: list[str]
    steps: list[StepInfo]
    summary: dict


class QuadraticResponse(BaseModel):
    polynomial: str
    roots: list[str]


class DivideResponse(BaseModel):
    quotient: list[str]
    remainder: list[str]
    quotient_polynomial: str
    remainder_polynomial: str


def _run(func, *args):
    try:
        return func(*args)
    except ConvergenceError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (ValueError, ZeroDivisionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected solver failure")
        raise HTTPException(status_code=500, detail=f"Solver error: {str(e)}")


@app.post("/api/roots", response_model=RootsResponse)
def solve_roots(req: RootsRequest):
    if not req.coefficients:
        raise HTTPException(status_code=400, detail="Enter at least one coefficient.")
    return _run(find_roots, req.coefficients, req.options)


@app.post("/api/quadratic", response_model=QuadraticResponse)
def solve_quadratic(req: QuadraticRequest):
    return _run(solve_quadratic_strs, req.a, req.b, req.c)


@app.post("/api/divide", response_model=DivideResponse)
def divide_polynomials(req: DivideRequest):
    return _run(divide_strs, req.dividend, req.divisor)
