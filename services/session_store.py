"""Simple in-memory store for browser sessions."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, List
from uuid import uuid4

from models.chat_models import ConversationMessage
from models.prediction_record import PredictionRecord
from models.session_models import SessionState


class RequestInProgressError(RuntimeError):
	"""Raised when a flow already has an upstream request outstanding."""


class SessionStore:
	"""Manage sessions, their prediction history, and their conversation log."""

	def __init__(self) -> None:
		self._sessions: Dict[str, SessionState] = {}

	def create(self) -> SessionState:
		"""Create a new, empty session."""
		session_id = uuid4().hex
		state = SessionState(session_id=session_id)
		self._sessions[session_id] = state
		return state

	def get(self, session_id: str) -> SessionState:
		"""Return a session or raise KeyError if missing."""
		state = self._sessions.get(session_id)
		if state is None:
			raise KeyError(f"Session {session_id} not found")
		return state

	def discard(self, session_id: str) -> None:
		"""Drop a session and everything it holds."""
		self.get(session_id)
		del self._sessions[session_id]

	def add_prediction(self, session_id: str, record: PredictionRecord) -> SessionState:
		"""Prepend a prediction so the history stays most recent first."""
		state = self.get(session_id)
		state.predictions.insert(0, record)
		return state

	def get_prediction(self, session_id: str, record_id: str) -> PredictionRecord:
		"""Return one history entry or raise KeyError."""
		for record in self.get(session_id).predictions:
			if record.id == record_id:
				return record
		raise KeyError(f"Prediction {record_id} not found")

	def add_message(self, session_id: str, message: ConversationMessage) -> SessionState:
		"""Append a message to the session conversation."""
		state = self.get(session_id)
		state.messages.append(message)
		return state

	def messages(self, session_id: str) -> List[ConversationMessage]:
		return list(self.get(session_id).messages)

	@contextmanager
	def in_flight(self, session_id: str, flow: str) -> Iterator[SessionState]:
		"""Mark `flow` busy for the duration of the block.

		Raises RequestInProgressError if the flow is already busy. The session
		may be discarded while the block runs; the mark is then dropped with it.
		"""
		state = self.get(session_id)
		if flow in state.pending:
			raise RequestInProgressError("A request is already in progress.")
		state.pending.add(flow)
		try:
			yield state
		finally:
			state.pending.discard(flow)
