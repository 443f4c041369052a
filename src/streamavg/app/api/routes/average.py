# src/streamavg/app/api/routes/average.py
"""
HTTP adapter around the averaging filter.

The filter itself is the stdin/stdout `avg` command; this route only feeds a
posted batch through the same StreamDriver and returns what `avg` would print.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, model_validator

from streamavg.app.core.config import ConfigError, make_config
from streamavg.app.services.driver import StreamDriver, format_result
from streamavg.app.services.samples import parse_text

router = APIRouter(prefix="/v1", tags=["average"])

# ---------- Models ----------

class AverageRequest(BaseModel):
    values: Optional[List[float]] = Field(None, description="Samples to average.")
    text: Optional[str] = Field(
        None,
        description="Whitespace-separated samples; parsing stops at the first non-numeric token.",
    )
    mode: str = Field("CMA", description="CMA (cumulative) or SMA (mean of window means).")
    window_size: int = Field(10, description="Samples per window (SMA only, must be >= 1 there).")
    show_intermediates: bool = Field(False, description="Return every intermediate result, not just the final one.")

    @model_validator(mode="after")
    def _one_source(self) -> "AverageRequest":
        if (self.values is None) == (self.text is None):
            raise ValueError("Provide exactly one of 'values' or 'text'")
        return self

class AverageResult(BaseModel):
    mode: str
    window_size: int
    show_intermediates: bool
    samples: int
    results: List[float]
    lines: List[str]

# ---------- Endpoints ----------

@router.post("/average", response_model=AverageResult)
async def average(req: AverageRequest) -> Dict[str, Any]:
    """
    Run one averaging pass over the posted batch.
    `lines` is exactly what `avg` prints for the same input and options.
    """
    try:
        config = make_config(
            mode=req.mode,
            window_size=req.window_size,
            show_intermediates=req.show_intermediates,
        )
        driver = StreamDriver(config)
        samples = parse_text(req.text) if req.text is not None else iter(req.values or [])
        results = list(driver.run(samples))
    except ConfigError as ex:
        raise HTTPException(status_code=400, detail=str(ex))

    return {
        "mode": config.mode.value,
        "window_size": config.window_size,
        "show_intermediates": config.show_intermediates,
        "samples": driver.samples_read,
        "results": results,
        "lines": [format_result(v) for v in results],
    }
