# server.py
"""
Expression Evaluation API with FastAPI

Exposes the calculator pipeline over HTTP. Every request carries its own angle
mode, so concurrent requests never see each other's settings. Parse failures
are part of a normal response (status "error"), not HTTP errors; only
malformed requests are rejected with 422.

Run with:
    uvicorn exprcalc.server:app
"""

import logging
import math
import os
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Annotated, List, Literal, Optional

from fastapi import Depends, FastAPI, Query
from pydantic import BaseModel, Field

from . import registry
from .config import Settings, load_settings
from .pipeline import Empty, Failure, evaluate, format_result
from .registry import AngleMode

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ----- Pydantic Models -----

class EvaluateRequest(BaseModel):
    """Model for an evaluation request."""
    expression: str
    angle_mode: Optional[AngleMode] = Field(None, description="Defaults to the configured angle mode")


class EvaluateResponse(BaseModel):
    """Model for the outcome of one evaluation.

    ``value`` is null for inf and nan, which JSON cannot represent; ``display``
    always carries the text form.
    """
    status: Literal["ok", "empty", "error"]
    value: Optional[float] = None
    display: Optional[str] = None
    message: Optional[str] = None
    position: Optional[int] = None


class NamesResponse(BaseModel):
    """Model for the identifiers known to the parser."""
    functions: List[str]
    constants: List[str]


# ----- Dependency Injection -----

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Dependency for the calculator settings.
    Read once from the file named by EXPRCALC_CONFIG (or the default path).
    For testing, this can be overridden.
    """
    return load_settings(os.getenv("EXPRCALC_CONFIG"))


# ----- Service Layer -----

def run_evaluation(expression: str, angle_mode: Optional[AngleMode], settings: Settings) -> EvaluateResponse:
    """Evaluate one expression and shape the result for the API."""
    mode = angle_mode if angle_mode is not None else settings.angle_mode
    result = evaluate(
        expression,
        mode,
        max_length=settings.max_input_length,
        strict=settings.strict,
    )
    if isinstance(result, Failure):
        logger.info(f"Rejected expression {expression!r}: {result.message}")
        return EvaluateResponse(
            status="error",
            message=result.message,
            position=result.error.position,
        )
    if isinstance(result, Empty):
        return EvaluateResponse(status="empty")
    value = result.value
    return EvaluateResponse(
        status="ok",
        value=value if math.isfinite(value) else None,
        display=format_result(value, settings.precision),
    )


# ----- Application Lifecycle -----

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    settings = get_settings()
    logger.info(f"Expression Evaluation API starting up (angle mode: {settings.angle_mode.value})")

    yield

    logger.info("Expression Evaluation API shutting down")


app = FastAPI(
    title="Expression Evaluation API",
    description="API for evaluating arithmetic expressions",
    version="1.0.0",
    lifespan=lifespan,
)

# ----- API Routes -----

@app.post(
    "/evaluate",
    response_model=EvaluateResponse,
    summary="Evaluate an expression",
    description="Evaluate an arithmetic expression and return its value or a positioned error",
)
async def evaluate_post(
    request: EvaluateRequest,
    settings: Settings = Depends(get_settings),
):
    logger.info(f"Processing POST evaluate request: {request.expression!r}")
    return run_evaluation(request.expression, request.angle_mode, settings)


@app.get(
    "/evaluate",
    response_model=EvaluateResponse,
    summary="Evaluate an expression (GET)",
    description="Evaluate an arithmetic expression passed as a query parameter",
)
async def evaluate_get(
    expression: Annotated[str, Query(description="Expression to evaluate")],
    angle_mode: Annotated[Optional[AngleMode], Query(description="degrees or radians")] = None,
    settings: Settings = Depends(get_settings),
):
    logger.info(f"Processing GET evaluate request: {expression!r}")
    return run_evaluation(expression, angle_mode, settings)


@app.get(
    "/functions",
    response_model=NamesResponse,
    summary="List functions and constants",
)
async def list_names():
    return NamesResponse(
        functions=sorted(registry.FUNCTIONS),
        constants=sorted(registry.CONSTANTS),
    )


# ----- Main Entry Point -----

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("exprcalc.server:app", host="0.0.0.0", port=8000)
