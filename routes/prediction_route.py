"""FastAPI routes for the image and tabular predictors."""

from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from controllers.prediction_controller import get_thumbnail, list_predictions, predict_tabular, upload_image
from models.tabular_input import TabularInput, describe_fields

router = APIRouter(tags=["predictions"])


@router.post("/sessions/{session_id}/predictions/image", summary="Classify an uploaded brain scan")
async def upload_image_route(request: Request, session_id: str, file: UploadFile = File(...)):
    """Forward the scan to the image classifier and record the result in the session history."""
    try:
        return await upload_image(request, session_id, file)
    except HTTPException:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise HTTPException(status_code=500, detail="Failed to process image.") from exc


@router.get("/sessions/{session_id}/predictions")
async def list_predictions_route(request: Request, session_id: str):
    """Return the session's scan history, most recent first."""
    try:
        return await list_predictions(request, session_id)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.get("/sessions/{session_id}/predictions/{record_id}/thumbnail")
async def get_thumbnail_route(request: Request, session_id: str, record_id: str):
    """Return the PNG thumbnail bytes for a history entry."""
    try:
        return await get_thumbnail(request, session_id, record_id)
    except HTTPException:
        raise
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/sessions/{session_id}/predictions/tabular", summary="Classify a demographic/genetic record")
async def predict_tabular_route(request: Request, session_id: str, payload: TabularInput):
    """Forward the record to the tabular classifier and return the matching explanation block."""
    try:
        return await predict_tabular(request, session_id, payload)
    except HTTPException:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise HTTPException(status_code=500, detail="Failed to process record.") from exc


@router.get("/tabular/fields")
async def tabular_fields_route():
    """Describe the tabular form fields: label, type, options, default and tooltip."""
    return {"fields": describe_fields()}
