"""Pipeline configuration — per-surface contract for the filter pipeline."""

from typing import Literal

from pydantic import BaseModel, Field


class PipelineConfig(BaseModel):
    """How one presentation surface runs the pipeline.

    A standalone listing passes every station through when no spatial input
    is given; a locator page that must not show anything before it knows
    where the user is sets ``require_location=True``.
    """

    require_location: bool = Field(
        default=False,
        description="Return no stations when there is neither an active drawn path "
                    "nor an origin with a radius.",
    )
    max_results: int | None = Field(
        default=None,
        ge=1,
        description="Truncate the final list to this many stations. None = no cap.",
    )
    buffer_mode: Literal["endpoint", "segment"] = Field(
        default="endpoint",
        description="Drawn-path distance model: 'endpoint' measures to the nearer "
                    "segment endpoint, 'segment' measures to the closest point on "
                    "the segment.",
    )
