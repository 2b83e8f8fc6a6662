from .result import Result
from .checkin_repository import CheckinRepository
from .task_repository import TaskRepository
