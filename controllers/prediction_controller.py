from fastapi import Request, UploadFile, HTTPException
from fastapi.responses import Response
from typing import Dict, Any, List
import logging
import time
from datetime import datetime
from uuid import uuid4

from models.prediction_record import PredictionRecord
from models.session_models import FLOW_IMAGE, FLOW_TABULAR
from models.tabular_input import TabularInput
from services.classifiers.errors import ClassifierError
from services.classifiers.image_classifier import ImageClassifier
from services.classifiers.outcomes import IMAGE_RECOMMENDATIONS, format_confidence
from services.classifiers.tabular_classifier import TabularClassifier
from services.session_store import RequestInProgressError, SessionStore
from services.thumbnail_generator import ThumbnailGenerator
from utils.media_validation import read_image_bytes

LOGGER = logging.getLogger(__name__)


def _session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def _require_session(store: SessionStore, session_id: str) -> None:
    try:
        store.get(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


async def upload_image(request: Request, session_id: str, file: UploadFile) -> Dict[str, Any]:
    """Classify an uploaded brain scan and prepend it to the session history.

    Args:
        request: FastAPI Request object (used to access app.state for shared clients).
        session_id: Session owning the prediction history.
        file: Uploaded scan; its content type must be an image type.

    Returns:
        A dict containing: prediction, confidence, confidence_display,
        recommendations, record (the new history entry) and history_size.

    Raises:
        HTTPException: 404 for an unknown session, 409 while another upload is
            pending, 400/415 for a bad upload, 502 for classifier failures.
    """
    store = _session_store(request)
    _require_session(store, session_id)

    image_bytes, content_type = await read_image_bytes(file)
    filename = file.filename or "uploaded_image"

    config = request.app.state.config
    classifier = ImageClassifier(
        request.app.state.http_client, config.image_classifier_url, timeout=config.classifier_timeout
    )

    try:
        with store.in_flight(session_id, FLOW_IMAGE):
            prediction = await classifier.classify(image_bytes, filename=filename, content_type=content_type)
    except RequestInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ClassifierError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc

    try:
        thumbnail = ThumbnailGenerator().create_thumbnail(image_bytes)
    except ValueError as exc:
        LOGGER.warning("No thumbnail for %s: %s", filename, exc)
        thumbnail = None

    created_at = time.time()
    record = PredictionRecord(
        id=uuid4().hex,
        created_at=created_at,
        display_date=datetime.fromtimestamp(created_at).strftime("%Y-%m-%d %H:%M:%S"),
        label=prediction.label,
        confidence=prediction.probability,
        image_filename=filename,
        content_type=content_type,
        thumbnail=thumbnail,
    )

    try:
        state = store.add_prediction(session_id, record)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return {
        "prediction": prediction.label,
        "label_index": prediction.label_index,
        "confidence": prediction.probability,
        "confidence_display": format_confidence(prediction.probability),
        "recommendations": list(IMAGE_RECOMMENDATIONS),
        "record": record.to_dict(),
        "history_size": len(state.predictions),
    }


async def list_predictions(request: Request, session_id: str) -> List[Dict[str, Any]]:
    """Return the session's prediction history, most recent first."""
    store = _session_store(request)
    _require_session(store, session_id)
    return [
        {**record.to_dict(), "confidence_display": format_confidence(record.confidence)}
        for record in store.get(session_id).predictions
    ]


async def get_thumbnail(request: Request, session_id: str, record_id: str) -> Response:
    """Return the PNG thumbnail stored with a history entry.

    Raises:
        HTTPException(404) if the session, the entry or its thumbnail is missing.
    """
    store = _session_store(request)
    try:
        record = store.get_prediction(session_id, record_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    if not record.thumbnail:
        raise HTTPException(status_code=404, detail="Thumbnail not available for this prediction")

    return Response(content=record.thumbnail, media_type="image/png")


async def predict_tabular(request: Request, session_id: str, payload: TabularInput) -> Dict[str, Any]:
    """Forward a demographic/genetic record and return the outcome block for its code."""
    store = _session_store(request)
    _require_session(store, session_id)

    config = request.app.state.config
    classifier = TabularClassifier(
        request.app.state.http_client,
        config.tabular_classifier_url,
        dispatch_delay=config.tabular_dispatch_delay,
        timeout=config.classifier_timeout,
    )

    try:
        with store.in_flight(session_id, FLOW_TABULAR):
            outcome = await classifier.classify(payload)
    except RequestInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ClassifierError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message) from exc

    return {"prediction": outcome.code, "result": outcome.to_dict()}
