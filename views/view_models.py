# views/view_models.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

import routes


@dataclass(frozen=True)
class Link:
    title: str
    route: str
    task_id: Optional[int] = None
    style: str = "secondary"

    @property
    def url(self) -> str:
        return routes.url_for(self.route, self.task_id)


@dataclass(frozen=True)
class Redirect:
    route: str = routes.LIST
    task_id: Optional[int] = None

    @property
    def url(self) -> str:
        return routes.url_for(self.route, self.task_id)


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    label: str
    type: str                      # textfield | textarea | date | checkbox
    required: bool = False
    default: Any = None
    description: str = ""
    max_length: Optional[int] = None
    rows: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class FormViewModel:
    form_id: str
    title: str
    fields: List[FieldDescriptor]
    submit_label: str
    links: List[Link] = field(default_factory=list)
    task_id: Optional[int] = None

    @property
    def errors(self) -> Dict[str, str]:
        return {f.name: f.error for f in self.fields if f.error}

    def get_field(self, name: str) -> FieldDescriptor:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def with_input(self, values: Dict[str, Any], errors: Dict[str, str]) -> "FormViewModel":
        """Same form, refilled with what the user typed plus inline errors."""
        fields = [
            replace(f, default=values.get(f.name, f.default), error=errors.get(f.name))
            for f in self.fields
        ]
        return replace(self, fields=fields)


@dataclass(frozen=True)
class ConfirmViewModel:
    form_id: str
    question: str
    description: str
    confirm_label: str
    cancel: Link
    task_id: int
    task_title: str = ""
    check_in_count: int = 0


@dataclass(frozen=True)
class TaskRow:
    task_id: int
    title: str
    timeframe: str
    progress: str
    operations: List[Link] = field(default_factory=list)


@dataclass(frozen=True)
class TaskListViewModel:
    title: str
    add_link: Link
    header: List[str]
    rows: List[TaskRow]
    empty_text: str
