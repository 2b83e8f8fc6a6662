from .view_models import (
    Link, Redirect, FieldDescriptor, FormViewModel, ConfirmViewModel,
    TaskRow, TaskListViewModel,
)
from .task_list import TaskListView
from .task_form import TaskForm
from .checkin_form import CheckinForm
from .task_delete import TaskDeleteForm
