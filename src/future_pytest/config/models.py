"""Pydantic models for future matcher configuration."""

from pydantic import BaseModel, Field, field_validator


class FutureMatcherConfig(BaseModel):
    """Root configuration model for future matchers."""

    default_timeout: float = Field(
        5.0, description="Default wait for blocking matchers in seconds"
    )
    log_level: str = Field("INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_evaluations: bool = Field(True, description="Whether to log matcher evaluations")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("default_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v
