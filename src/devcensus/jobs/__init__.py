from .accrual import AccrualReport, months_elapsed, run_experience_accrual
from .scheduler import start_scheduler, stop_scheduler

__all__ = [
    "AccrualReport",
    "months_elapsed",
    "run_experience_accrual",
    "start_scheduler",
    "stop_scheduler",
]
