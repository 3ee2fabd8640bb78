"""Pydantic model for heart-rate readings."""
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class HeartRateRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    patientId: str = Field(..., min_length=1, description="Patient document id")
    heartRate: Union[int, float] = Field(..., description="Beats per minute")
