"""Pydantic request/response schemas for the serving API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class PredictRequest(BaseModel):
    """Request schema for prediction (1 to N texts)."""

    texts: list[str] = Field(
        ...,
        min_length=1,
        max_length=100,
        description='List of texts to classify (1 to 100 texts).',
        examples=[['Win a free cruise, click now', 'Lunch at noon tomorrow?']],
    )

    @field_validator('texts')
    @classmethod
    def texts_not_empty(cls, v: list[str]) -> list[str]:
        for i, text in enumerate(v):
            if not text.strip():
                raise ValueError(f'Text at index {i} cannot be empty or whitespace only')
        return v


class ClassProbability(BaseModel):
    """Probability of a single class."""

    class_name: str = Field(..., description='Name of the class.')
    probability: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description='One-vs-rest probability of the class (not normalized across classes).',
    )


class PredictResponse(BaseModel):
    """Ranked classes for one text."""

    results: list[ClassProbability] = Field(
        default_factory=list,
        description='Classes above the minimum probability, highest first.',
    )
    model_version: str = Field(..., description='Version of the model used for prediction.')


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str = Field(default='ok', description='Service health status.')


class ReadyResponse(BaseModel):
    """Response schema for readiness check endpoint."""

    status: str = Field(..., description='Readiness status.')
    model_loaded: bool = Field(..., description='Whether model is loaded.')


class ModelInfoResponse(BaseModel):
    """Response schema for model information endpoint."""

    model_name: str = Field(..., description='Name of the model.')
    version: str = Field(..., description='Model version.')
    classes: list[str] = Field(..., description='Class names known to the model.')
    feature_dimension: int | None = Field(None, description='Length of the feature vector.')
    algorithm: dict[str, float | int] = Field(
        default_factory=dict, description='Training hyperparameters.'
    )


class ErrorResponse(BaseModel):
    """Response schema for error responses."""

    detail: str = Field(..., description='Error message.')
