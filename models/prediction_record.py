from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class PredictionRecord:
    """In-memory entry of a session's image prediction history.

    Attributes:
        id: Opaque identifier of the entry.
        created_at: Unix timestamp (seconds) when the prediction was received.
        display_date: Human-readable local time of the prediction.
        label: One of the four fixed diagnostic categories.
        confidence: Classifier probability in [0, 1].
        image_filename: Filename of the uploaded scan.
        content_type: MIME type reported for the upload.
        thumbnail: PNG thumbnail bytes of the upload, None when it could not be rendered.
    """

    id: str
    created_at: float
    display_date: str
    label: str
    confidence: float
    image_filename: str
    content_type: Optional[str] = None
    thumbnail: Optional[bytes] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "created_at": self.created_at,
            "date": self.display_date,
            "prediction": self.label,
            "confidence": self.confidence,
            "image_filename": self.image_filename,
            "has_thumbnail": self.thumbnail is not None,
        }
