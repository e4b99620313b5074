from classboard.models.activity_log import ActivityLog  # noqa: F401
from classboard.models.registry import RegistrySnapshot  # noqa: F401
from classboard.models.timetable import ScheduleSnapshot  # noqa: F401
