"""
Unit Tests for the tabular classifier adapter and its outcome table.
"""
import json

import httpx
import pytest
from pydantic import ValidationError

from models.tabular_input import TabularInput, describe_fields
from services.classifiers.errors import InvalidPredictionError, NoResponseError, UpstreamReportedError
from services.classifiers.outcomes import outcome_for_code
from services.classifiers.tabular_classifier import TabularClassifier

TABULAR_URL = "http://tabular-classifier.test/predict"


class TestOutcomeTable:
    """Tests for the static code lookup."""

    @pytest.mark.parametrize(
        "code, title, tone",
        [
            ("AD", "Alzheimer's Disease (AD)", "red"),
            ("MCI", "Mild Cognitive Impairment (MCI)", "yellow"),
            ("CN", "Cognitive Normal (CN)", "green"),
        ],
    )
    def test_known_codes(self, code, title, tone):
        outcome = outcome_for_code(code)
        assert outcome.title == title
        assert outcome.tone == tone
        assert outcome.recognized
        assert outcome.description

    def test_mci_description(self):
        assert outcome_for_code("MCI").description.startswith(
            "This result indicates Mild Cognitive Impairment, a stage between normal aging and dementia."
        )

    @pytest.mark.parametrize("code", ["EMCI", "ad", ""])
    def test_unknown_code_gets_generic_block(self, code):
        outcome = outcome_for_code(code)
        assert outcome.title == f"Unknown Result: {code}"
        assert outcome.description == "The model returned a result that is not recognized by the system."
        assert outcome.tone == "gray"
        assert not outcome.recognized


class TestTabularInput:
    """Tests for the request model."""

    def test_defaults_match_form(self):
        record = TabularInput()
        assert record.model_dump() == {
            "RID": 5,
            "Visit": 1,
            "AGE": 73.7,
            "PTGENDER": "Male",
            "PTEDUCAT": 16,
            "PTETHCAT": "Not Hisp/Latino",
            "PTRACCAT": "White",
            "APOE4": 0,
            "MMSE": 29,
            "imputed_genotype": True,
            "APOE1": "3",
            "APOE2": "3",
        }

    @pytest.mark.parametrize(
        "override",
        [{"PTGENDER": "Other"}, {"APOE4": 3}, {"MMSE": 31}, {"APOE1": "5"}, {"unexpected": 1}],
    )
    def test_rejects_invalid_values(self, override):
        with pytest.raises(ValidationError):
            TabularInput(**override)

    def test_field_metadata(self):
        fields = {field["name"]: field for field in describe_fields()}
        assert len(fields) == 12
        assert fields["PTETHCAT"]["options"] == ["Not Hisp/Latino", "Hisp/Latino", "Unknown"]
        assert fields["imputed_genotype"]["type"] == "bool"
        assert fields["AGE"]["type"] == "float"
        assert fields["RID"]["type"] == "int"
        assert fields["APOE4"]["description"].startswith("APOE4 Allele Count")


@pytest.mark.asyncio
class TestTabularClassifier:
    """Tests for the JSON request and response handling."""

    async def test_posts_record_and_maps_code(self, make_http_client):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"prediction": "MCI"})

        async with make_http_client(handler) as client:
            outcome = await TabularClassifier(client, TABULAR_URL, dispatch_delay=0).classify(
                TabularInput(AGE=80.2, MMSE=24)
            )

        assert outcome.code == "MCI"
        assert outcome.tone == "yellow"
        assert seen["body"]["AGE"] == 80.2
        assert seen["body"]["MMSE"] == 24
        assert seen["body"]["imputed_genotype"] is True

    async def test_unknown_code_does_not_raise(self, make_http_client, json_reply):
        async with make_http_client(json_reply({"prediction": "EMCI"})) as client:
            outcome = await TabularClassifier(client, TABULAR_URL, dispatch_delay=0).classify(TabularInput())
        assert outcome.title == "Unknown Result: EMCI"

    async def test_error_field_is_reported(self, make_http_client, json_reply):
        async with make_http_client(json_reply({"error": "Model not loaded"})) as client:
            with pytest.raises(UpstreamReportedError) as exc_info:
                await TabularClassifier(client, TABULAR_URL, dispatch_delay=0).classify(TabularInput())
        assert exc_info.value.message == "Model not loaded"

    async def test_status_without_error_field(self, make_http_client, json_reply):
        async with make_http_client(json_reply({}, status_code=503)) as client:
            with pytest.raises(UpstreamReportedError) as exc_info:
                await TabularClassifier(client, TABULAR_URL, dispatch_delay=0).classify(TabularInput())
        assert exc_info.value.message == "HTTP error! Status: 503"

    async def test_missing_prediction_is_invalid(self, make_http_client, json_reply):
        async with make_http_client(json_reply({"result": "AD"})) as client:
            with pytest.raises(InvalidPredictionError):
                await TabularClassifier(client, TABULAR_URL, dispatch_delay=0).classify(TabularInput())

    async def test_timeout_is_no_response(self, make_http_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_http_client(handler) as client:
            with pytest.raises(NoResponseError):
                await TabularClassifier(client, TABULAR_URL, dispatch_delay=0).classify(TabularInput())
