"""Static vocabularies for the two hosted classifiers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

# Index order is defined by the image classifier's label encoding.
IMAGE_LABELS: List[str] = [
    "mildly demented",
    "moderately demented",
    "non demented",
    "very mildly demented",
]

IMAGE_RECOMMENDATIONS: List[str] = [
    "Consult with a neurologist for detailed evaluation",
    "Schedule regular follow-up scans",
    "Consider cognitive enhancement exercises",
]


def label_for_index(index: int) -> str:
    """Return the category for a label index, raising IndexError outside [0, 3]."""
    if index < 0 or index >= len(IMAGE_LABELS):
        raise IndexError(f"label index {index} outside 0..{len(IMAGE_LABELS) - 1}")
    return IMAGE_LABELS[index]


def format_confidence(probability: float) -> str:
    """Format a probability in [0, 1] as a percentage with one decimal."""
    return f"{probability * 100:.1f}%"


@dataclass(frozen=True)
class PredictionOutcome:
    """Display treatment for one tabular prediction code."""

    code: str
    title: str
    description: str
    icon: str
    tone: str
    recognized: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


TABULAR_OUTCOMES: Dict[str, PredictionOutcome] = {
    "AD": PredictionOutcome(
        code="AD",
        title="Alzheimer's Disease (AD)",
        description=(
            "This result indicates a high probability of Alzheimer's Disease, characterized by "
            "significant memory, thinking, and behavior problems that interfere with daily life."
        ),
        icon="alert-circle",
        tone="red",
    ),
    "MCI": PredictionOutcome(
        code="MCI",
        title="Mild Cognitive Impairment (MCI)",
        description=(
            "This result indicates Mild Cognitive Impairment, a stage between normal aging and "
            "dementia. Individuals may experience minor, but noticeable, memory or thinking issues."
        ),
        icon="alert-triangle",
        tone="yellow",
    ),
    "CN": PredictionOutcome(
        code="CN",
        title="Cognitive Normal (CN)",
        description=(
            "This result suggests the individual is Cognitively Normal, with no signs of memory or "
            "cognitive impairment beyond typical age-related changes."
        ),
        icon="check-circle",
        tone="green",
    ),
}


def outcome_for_code(code: str) -> PredictionOutcome:
    """Look up the display block for a prediction code; unknown codes get a generic block."""
    outcome = TABULAR_OUTCOMES.get(code)
    if outcome is not None:
        return outcome
    return PredictionOutcome(
        code=code,
        title=f"Unknown Result: {code}",
        description="The model returned a result that is not recognized by the system.",
        icon="alert-circle",
        tone="gray",
        recognized=False,
    )
