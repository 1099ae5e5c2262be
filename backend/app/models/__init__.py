from app.models.user import User
from app.models.athlete_profile import AthleteProfile
from app.models.daily_log import DailyLogEntry
from app.models.ops_snapshot import OpsSnapshot

__all__ = [
    "User",
    "AthleteProfile",
    "DailyLogEntry",
    "OpsSnapshot",
]
