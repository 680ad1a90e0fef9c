"""
Base Pydantic Schemas
========================

Provides base classes and common functionality for all schemas using Pydantic V2.
"""

from pydantic import BaseModel, ConfigDict, model_validator
from datetime import datetime
from typing import Optional, Any


class BaseSchema(BaseModel):
    """Base schema untuk response dari ORM object."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, extra='ignore')


class InputSchema(BaseModel):
    """Base schema untuk request body; string di-strip sebelum validasi."""

    model_config = ConfigDict(extra='ignore')

    @model_validator(mode='before')
    @classmethod
    def strip_whitespace(cls, data: Any) -> Any:
        """Strip whitespace dari string fields sebelum validasi."""
        if isinstance(data, dict):
            return {
                key: value.strip() if isinstance(value, str) else value
                for key, value in data.items()
            }
        return data
