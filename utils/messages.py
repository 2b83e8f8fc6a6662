# utils/messages.py
from dataclasses import dataclass, field
from typing import List

STATUS = "status"
ERROR = "error"


@dataclass(frozen=True)
class Message:
    level: str
    text: str


@dataclass
class Messenger:
    """Flash messages queued during a request and shown on the next page."""
    messages: List[Message] = field(default_factory=list)

    def add_status(self, text: str) -> None:
        self.messages.append(Message(STATUS, text))

    def add_error(self, text: str) -> None:
        self.messages.append(Message(ERROR, text))

    def drain(self) -> List[Message]:
        out, self.messages = self.messages, []
        return out

    def texts(self, level: str = None) -> List[str]:
        return [m.text for m in self.messages if level is None or m.level == level]
