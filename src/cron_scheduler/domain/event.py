from typing import Literal

from pydantic import BaseModel, Field


class ScheduledEvent(BaseModel):
    """
    Delivered to an executor each time an in-process job fires.
    """
    type: Literal["scheduled"] = "scheduled"
    name: str = Field(..., description="Name of the job that fired")
    cron: str = Field(..., description="Cron expression of the job")
    scheduled_time: int = Field(..., description="Occurrence time in epoch milliseconds")
