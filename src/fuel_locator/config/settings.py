"""Process-level settings assembled from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from fuel_locator.config.geocoding import LOCATIONIQ_BASE_URL, GeocodingConfig
from fuel_locator.config.pipeline import PipelineConfig

_TRUE_STRINGS = ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Everything the HTTP surface needs to start."""

    dataset_path: str | None = Field(default=None, description="Station dataset (.json or .csv)")
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build ``Settings`` from ``environ`` (defaults to ``os.environ``).

    Recognised variables:
      FUEL_LOCATOR_DATASET, LOCATIONIQ_API_KEY, LOCATIONIQ_URL,
      FUEL_LOCATOR_REQUIRE_LOCATION, FUEL_LOCATOR_MAX_RESULTS
    """
    env = os.environ if environ is None else environ

    max_results = env.get("FUEL_LOCATOR_MAX_RESULTS", "").strip()
    return Settings(
        dataset_path=env.get("FUEL_LOCATOR_DATASET") or None,
        geocoding=GeocodingConfig(
            api_key=env.get("LOCATIONIQ_API_KEY", ""),
            base_url=env.get("LOCATIONIQ_URL") or LOCATIONIQ_BASE_URL,
        ),
        pipeline=PipelineConfig(
            require_location=env.get("FUEL_LOCATOR_REQUIRE_LOCATION", "").strip().lower() in _TRUE_STRINGS,
            max_results=int(max_results) if max_results else None,
        ),
    )
