"""Pydantic model for patient documents stored in Firestore.

Validated right before insert, the way a document schema would be.
A failure here is a store-level error, not a client error.
"""
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class Patient(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1)
    age: Union[int, float]
    # Reference to a user document id; existence is not checked
    userId: str = Field(..., min_length=1)
