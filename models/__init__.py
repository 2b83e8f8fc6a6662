from .task import Task
from .checkin import Checkin
