"""Conversation domain models for the neurology assistant."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union
from uuid import uuid4

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

STATUS_OK = "ok"
STATUS_FALLBACK = "fallback"
STATUS_ERROR = "error"


@dataclass
class ChatAnswer:
	"""Structured answer object rendered for every assistant reply."""

	title: str
	introduction: str
	key_points: List[str] = field(default_factory=list)
	activities: List[str] = field(default_factory=list)
	resources: List[str] = field(default_factory=list)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"title": self.title,
			"introduction": self.introduction,
			"keyPoints": list(self.key_points),
			"activities": list(self.activities),
			"resources": list(self.resources),
		}

	def to_markdown(self) -> str:
		"""Render the answer as bold-labelled Markdown sections, skipping empty ones."""
		lines = []
		if self.introduction:
			lines.append(f"**Introduction:** {self.introduction}")
		if self.key_points:
			lines.append(f"**Key Points:** {', '.join(self.key_points)}")
		if self.activities:
			lines.append(f"**Activities:** {', '.join(self.activities)}")
		if self.resources:
			lines.append(f"**Resources:** {', '.join(self.resources)}")
		return "\n\n".join(lines).strip()


@dataclass
class ConversationMessage:
	"""One entry of a session's conversation log."""

	role: str
	content: Union[str, ChatAnswer]
	status: str = STATUS_OK
	id: str = field(default_factory=lambda: uuid4().hex)
	created_at: float = field(default_factory=lambda: time.time())

	def to_dict(self) -> Dict[str, Any]:
		payload: Dict[str, Any] = {
			"id": self.id,
			"role": self.role,
			"status": self.status,
			"created_at": self.created_at,
		}
		if isinstance(self.content, ChatAnswer):
			payload["content"] = self.content.to_dict()
			payload["markdown"] = self.content.to_markdown()
		else:
			payload["content"] = self.content
		return payload
