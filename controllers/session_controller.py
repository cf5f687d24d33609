"""Session lifecycle helpers for the browser flows."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import HTTPException, Request

from services.session_store import SessionStore


async def start_session(request: Request) -> Dict[str, Any]:
	"""Create a new session and return its id."""
	store: SessionStore = request.app.state.session_store
	state = store.create()
	return {"session_id": state.session_id}


async def end_session(request: Request, session_id: str) -> Dict[str, Any]:
	"""Discard a session together with its history and conversation."""
	store: SessionStore = request.app.state.session_store
	try:
		store.discard(session_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return {"session_id": session_id, "discarded": True}


async def list_messages(request: Request, session_id: str) -> List[Dict[str, Any]]:
	"""Return the conversation log in arrival order."""
	store: SessionStore = request.app.state.session_store
	try:
		messages = store.messages(session_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return [message.to_dict() for message in messages]
