"""Chat message data model."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from src.models.enums import MessageSender


@dataclass
class ChatMessage:
    """One turn of a bill conversation."""

    sender: MessageSender
    text: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not isinstance(self.sender, MessageSender):
            self.sender = MessageSender(self.sender)
