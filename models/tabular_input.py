"""Request model for the demographic/genetic classifier."""

from __future__ import annotations

import typing
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field

Gender = Literal["Male", "Female"]
Ethnicity = Literal["Not Hisp/Latino", "Hisp/Latino", "Unknown"]
Race = Literal["White", "Black", "Asian"]
ApoeAllele = Literal["2", "3", "4"]


class TabularInput(BaseModel):
    """Fixed-shape record posted to the tabular classifier.

    Field names match the classifier's wire format, so the model is dumped as-is.
    """

    model_config = ConfigDict(extra="forbid")

    RID: int = Field(
        5,
        title="RID (int)",
        description="Research ID: A unique, anonymous number assigned to each participant in the study.",
    )
    Visit: int = Field(
        1,
        title="Visit (int)",
        description=(
            "Visit Code: A number representing the specific study visit "
            "(e.g., 1 for baseline, 2 for 6-month follow-up)."
        ),
    )
    AGE: float = Field(
        73.7,
        ge=0,
        title="AGE (float)",
        description="Age: The participant's age in years at the time of the study visit.",
    )
    PTGENDER: Gender = Field(
        "Male",
        title="Gender",
        description="Participant Gender: The participant's reported gender (Male or Female).",
    )
    PTEDUCAT: int = Field(
        16,
        ge=0,
        title="Education (int)",
        description="Education (Years): The total number of years the participant spent in formal education.",
    )
    PTETHCAT: Ethnicity = Field(
        "Not Hisp/Latino",
        title="Ethnicity",
        description="Ethnicity: The participant's ethnicity, categorized as Hispanic/Latino or Not Hispanic/Latino.",
    )
    PTRACCAT: Race = Field(
        "White",
        title="Race",
        description="Race: The participant's race category (e.g., White, Black, Asian).",
    )
    APOE4: int = Field(
        0,
        ge=0,
        le=2,
        title="APOE4 (int)",
        description=(
            "APOE4 Allele Count: The number of 'e4' variants (0, 1, or 2) for the APOE gene. "
            "This is a significant genetic risk factor for Alzheimer's Disease."
        ),
    )
    MMSE: int = Field(
        29,
        ge=0,
        le=30,
        title="MMSE (int)",
        description=(
            "Mini-Mental State Exam: A 30-point test to measure cognitive impairment. "
            "A lower score indicates more severe impairment."
        ),
    )
    imputed_genotype: bool = Field(
        True,
        title="Imputed Genotype",
        description=(
            "Imputed Genotype: A boolean (True/False) indicating if the genetic data was "
            "statistically inferred (True) or directly sequenced (False)."
        ),
    )
    APOE1: ApoeAllele = Field(
        "3",
        title="APOE1",
        description=(
            "APOE Allele 1: The first of two alleles for the Apolipoprotein E (APOE) gene, "
            "inherited from one parent."
        ),
    )
    APOE2: ApoeAllele = Field(
        "3",
        title="APOE2",
        description=(
            "APOE Allele 2: The second of two alleles for the Apolipoprotein E (APOE) gene, "
            "inherited from the other parent."
        ),
    )


def _input_kind(annotation: Any) -> str:
    if typing.get_origin(annotation) is Literal:
        return "select"
    if annotation is bool:
        return "bool"
    if annotation is int:
        return "int"
    return "float"


def describe_fields() -> List[Dict[str, Any]]:
    """Return form metadata (label, kind, options, default, tooltip) for every input field."""
    fields: List[Dict[str, Any]] = []
    for name, info in TabularInput.model_fields.items():
        kind = _input_kind(info.annotation)
        entry: Dict[str, Any] = {
            "name": name,
            "label": info.title or name,
            "type": kind,
            "default": info.default,
            "description": info.description,
        }
        if kind == "select":
            entry["options"] = list(typing.get_args(info.annotation))
        elif kind == "bool":
            entry["options"] = [True, False]
        fields.append(entry)
    return fields
