"""Request models for the command API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConvertRequest(BaseModel):
    """Body of POST /api/convert."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input: str = Field(..., min_length=1, description="Video file to convert")
    target_size_mb: float = Field(
        ..., gt=0, description="Target size in megabytes"
    )

    @field_validator("input")
    @classmethod
    def validate_input(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("input must not be blank")
        return v


class RevealRequest(BaseModel):
    """Body of POST /api/reveal."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(..., min_length=1, description="File or directory to reveal")
