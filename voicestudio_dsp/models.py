"""Pydantic request/response models for the HTTP layer.

The core returns dataclasses; these models document the JSON shapes and
validate the enhancement settings a client sends alongside an upload.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EnhancementSettings(BaseModel):
    """Partial enhancement config; omitted knobs keep the preset value."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    noise_reduction: Optional[float] = Field(default=None, ge=0, le=100, alias="noiseReduction")
    de_esser: Optional[float] = Field(default=None, ge=0, le=100, alias="deEsser")
    breath_removal: Optional[float] = Field(default=None, ge=0, le=100, alias="breathRemoval")
    click_removal: Optional[float] = Field(default=None, ge=0, le=100, alias="clickRemoval")
    compression: Optional[float] = Field(default=None, ge=0, le=100)
    clarity: Optional[float] = Field(default=None, ge=0, le=100)
    brightness: Optional[float] = Field(default=None, ge=-50, le=50)
    warmth: Optional[float] = Field(default=None, ge=-50, le=50)
    normalize: Optional[bool] = None

    def overrides(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PresetResponse(BaseModel):
    key: str
    name: str
    category: str
    description: str
    settings: Dict[str, Any]


class PresetListResponse(BaseModel):
    presets: List[PresetResponse]


class EnhanceResponse(BaseModel):
    status: str
    output_file: str
    input_format: str
    preset: Optional[str] = None
    config: Dict[str, Any]
    report: Dict[str, Any]


class CompareResponse(BaseModel):
    quality_improvement: float
    duration_diff: float
    recommendations: List[str]
    before: Dict[str, Any]
    after: Dict[str, Any]
