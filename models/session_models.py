"""Session domain models for the browser-facing flows."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Set

from models.chat_models import ConversationMessage
from models.prediction_record import PredictionRecord

FLOW_IMAGE = "image"
FLOW_TABULAR = "tabular"
FLOW_CHAT = "chat"


@dataclass
class SessionState:
	"""In-memory state owned by one browser session.

	`predictions` is kept most recent first; `messages` in arrival order.
	`pending` holds the flows that currently have an upstream request in flight.
	"""

	session_id: str
	predictions: List[PredictionRecord] = field(default_factory=list)
	messages: List[ConversationMessage] = field(default_factory=list)
	pending: Set[str] = field(default_factory=set)
	created_at: float = field(default_factory=lambda: time.time())
