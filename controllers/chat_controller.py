import logging
from typing import Any, Dict

from fastapi import HTTPException, Request

from models.chat_models import (
    ROLE_ASSISTANT,
    ROLE_USER,
    STATUS_ERROR,
    STATUS_FALLBACK,
    STATUS_OK,
    ChatAnswer,
    ConversationMessage,
)
from models.session_models import FLOW_CHAT
from services.openai.assistant import NeurologyAssistant
from services.session_store import RequestInProgressError, SessionStore

LOGGER = logging.getLogger(__name__)

ERROR_ANSWER_INTRODUCTION = "Sorry, there was an error. Please try again."


async def ask_assistant(request: Request, session_id: str, text: str) -> Dict[str, Any]:
    """Append a question to the conversation and answer it.

    The user message is logged first. Assistant failures do not fail the
    request: an error-status assistant message is appended instead.

    Args:
        request: FastAPI Request (used to access shared clients/state).
        session_id: Session owning the conversation log.
        text: The user's question.

    Returns:
        A dict with the appended `question` and `answer` messages.

    Raises:
        HTTPException: 400 for an empty question, 404 for an unknown session,
            409 while another question is pending.
    """
    store: SessionStore = request.app.state.session_store
    question = (text or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="Question text is required.")

    config = request.app.state.config
    assistant = NeurologyAssistant(request.app.state.openai_client, config.openai_model)

    try:
        with store.in_flight(session_id, FLOW_CHAT):
            user_message = ConversationMessage(role=ROLE_USER, content=question)
            store.add_message(session_id, user_message)
            try:
                reply = await assistant.ask(question)
            except Exception:  # pylint: disable=broad-exception-caught
                LOGGER.exception("Error calling the assistant")
                answer_message = ConversationMessage(
                    role=ROLE_ASSISTANT,
                    content=ChatAnswer(title="Error", introduction=ERROR_ANSWER_INTRODUCTION),
                    status=STATUS_ERROR,
                )
            else:
                answer_message = ConversationMessage(
                    role=ROLE_ASSISTANT,
                    content=reply.answer,
                    status=STATUS_FALLBACK if reply.fallback else STATUS_OK,
                )
            store.add_message(session_id, answer_message)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except RequestInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    return {"question": user_message.to_dict(), "answer": answer_message.to_dict()}
