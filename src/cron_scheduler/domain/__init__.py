from .job import ScheduledJob, is_valid_job_name
from .event import ScheduledEvent

__all__ = ["ScheduledJob", "ScheduledEvent", "is_valid_job_name"]
