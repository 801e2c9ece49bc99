"""
Resolution report - PURE DATA MODEL

Records which strategy produced the tracer on the last resolve() call.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


Strategy = Literal["cache", "override", "discovery", "heuristic", "none"]


class ResolutionReport(BaseModel):
    """Outcome of one resolve() call."""

    strategy: Strategy = Field(..., description="Step that produced the tracer, or 'none'")
    identifier: Optional[str] = Field(
        None,
        description="Override identifier, entry point name or fixed identifier used",
    )
    tracer_type: Optional[str] = Field(None, description="Qualified class name of the tracer")
    failures: List[str] = Field(
        default_factory=list,
        description="One message per abandoned candidate, in order",
    )

    model_config = ConfigDict(frozen=True)

    @property
    def resolved(self) -> bool:
        return self.strategy != "none"
