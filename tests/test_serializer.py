import json

import pytest
from pydantic import ValidationError

from generative_ai_client import (
    BlobPart,
    Content,
    CountTokensRequest,
    FunctionCallingConfig,
    FunctionCallingMode,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    HarmBlockThreshold,
    HarmCategory,
    SafetySetting,
    SerializationException,
    TextPart,
    ToolConfig,
)
from generative_ai_client.schema import Blob, FinishReason, FunctionCallPart, HarmProbability
from generative_ai_client.serialization import decode, decode_payload, encode, to_wire_dict


def _request(**kwargs) -> GenerateContentRequest:
    return GenerateContentRequest(contents=[Content.build("Hi")], **kwargs)


def test_encode_omits_unset_fields():
    encoded = json.loads(encode(_request()))

    assert encoded == {"contents": [{"role": "user", "parts": [{"text": "Hi"}]}]}


def test_encode_uses_snake_case_keys():
    request = _request(
        generation_config=GenerationConfig(temperature=0.2, max_output_tokens=64, stop_sequences=["END"]),
        safety_settings=[
            SafetySetting(
                category=HarmCategory.HARM_CATEGORY_HARASSMENT, threshold=HarmBlockThreshold.BLOCK_ONLY_HIGH
            )
        ],
        system_instruction=Content.build("Be brief.", role=None),
    )

    wire = to_wire_dict(request)

    assert wire["generation_config"] == {"temperature": 0.2, "max_output_tokens": 64, "stop_sequences": ["END"]}
    assert wire["safety_settings"] == [{"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_ONLY_HIGH"}]
    assert wire["system_instruction"] == {"parts": [{"text": "Be brief."}]}


def test_encode_tool_config():
    request = _request(tool_config=ToolConfig(function_calling_config=FunctionCallingConfig(mode=FunctionCallingMode.AUTO)))

    wire = to_wire_dict(request)

    assert wire["tool_config"]["function_calling_config"]["mode"] == "AUTO"
    assert "allowed_function_names" not in wire["tool_config"]["function_calling_config"]


def test_encode_inline_data_as_base64():
    content = Content.build("Describe this", BlobPart.from_bytes("image/png", b"\x89PNG"))

    wire = to_wire_dict(content)

    assert wire["parts"][1] == {"inline_data": {"mime_type": "image/png", "data": "iVBORw=="}}


def test_decode_camel_case_response():
    payload = {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [{"text": "Hi!"}, {"functionCall": {"name": "lookup", "args": {"q": "x"}}}],
                },
                "finishReason": "STOP",
                "safetyRatings": [{"category": "HARM_CATEGORY_HATE_SPEECH", "probability": "LOW"}],
            }
        ],
        "usageMetadata": {"promptTokenCount": 3, "candidatesTokenCount": 2, "totalTokenCount": 5},
    }

    response = decode(json.dumps(payload), GenerateContentResponse)

    candidate = response.candidates[0]
    assert candidate.finish_reason is FinishReason.STOP
    assert candidate.safety_ratings[0].probability is HarmProbability.LOW
    assert isinstance(candidate.content.parts[1], FunctionCallPart)
    assert response.text == "Hi!"
    assert response.function_calls[0].args == {"q": "x"}
    assert response.usage_metadata.total_token_count == 5


def test_decode_accepts_snake_case_keys():
    response = decode('{"usage_metadata": {"total_token_count": 9}}', GenerateContentResponse)

    assert response.usage_metadata.total_token_count == 9


def test_decode_inline_data():
    content = decode('{"parts": [{"inlineData": {"mimeType": "image/png", "data": "iVBORw=="}}]}', Content)

    part = content.parts[0]
    assert isinstance(part, BlobPart)
    assert part.inline_data.raw_bytes() == b"\x89PNG"


def test_decode_ignores_unknown_fields():
    payload = {
        "candidates": [{"content": {"parts": [{"text": "ok", "thought": False}]}, "avgLogprobs": -0.1}],
        "modelVersion": "gemini-pro-002",
    }

    response = decode(json.dumps(payload), GenerateContentResponse)

    assert response.text == "ok"


def test_decode_maps_unknown_enum_values_to_unknown():
    payload = {
        "candidates": [
            {
                "content": {"parts": [{"text": "ok"}]},
                "finishReason": "SOMETHING_NEW",
                "safetyRatings": [{"category": "HARM_CATEGORY_FUTURE", "probability": "VERY_HIGH"}],
            }
        ]
    }

    response = decode(json.dumps(payload), GenerateContentResponse)

    candidate = response.candidates[0]
    assert candidate.finish_reason is FinishReason.UNKNOWN
    assert candidate.safety_ratings[0].category is HarmCategory.UNKNOWN
    assert candidate.safety_ratings[0].probability is HarmProbability.UNKNOWN


@pytest.mark.parametrize(
    "part",
    [
        {},
        {"text": "a", "functionCall": {"name": "f"}},
        {"text": "a", "inline_data": {"mime_type": "text/plain", "data": ""}},
    ],
)
def test_decode_rejects_part_without_exactly_one_variant(part):
    with pytest.raises(SerializationException):
        decode(json.dumps({"parts": [part]}), Content)


def test_decode_rejects_wrong_types():
    with pytest.raises(SerializationException):
        decode('{"usageMetadata": {"totalTokenCount": "many"}}', GenerateContentResponse)


@pytest.mark.parametrize("text", ["", "{", "<html></html>", '{"a": 1'])
def test_decode_payload_rejects_malformed_json(text):
    with pytest.raises(SerializationException):
        decode_payload(text)


def test_models_are_immutable():
    part = TextPart(text="a")

    with pytest.raises(ValidationError):
        part.text = "b"


def test_generation_config_bounds():
    with pytest.raises(ValidationError):
        GenerationConfig(top_p=1.5)
    with pytest.raises(ValidationError):
        GenerationConfig(candidate_count=0)


def test_without_model_clears_model():
    request = _request(model="models/gemini-pro")

    assert "model" not in to_wire_dict(request.without_model())
    assert request.model == "models/gemini-pro"


def test_count_tokens_request_shapes():
    request = _request(model="models/gemini-pro")

    embedded = CountTokensRequest.for_api_version(request, "v1beta")
    legacy = CountTokensRequest.for_api_version(request, "v1")

    assert embedded.is_embedded
    assert "model" not in to_wire_dict(embedded.without_model())["generate_content_request"]
    assert not legacy.is_embedded
    assert to_wire_dict(legacy.without_model()) == {"contents": [{"role": "user", "parts": [{"text": "Hi"}]}]}


def test_count_tokens_request_requires_one_shape():
    request = _request()

    with pytest.raises(ValidationError):
        CountTokensRequest()
    with pytest.raises(ValidationError):
        CountTokensRequest(generate_content_request=request, contents=request.contents)


def test_invalid_base64_blob_raises_serialization_exception():
    blob = Blob(mime_type="image/png", data="not base64!")

    with pytest.raises(SerializationException, match="not valid base64"):
        blob.raw_bytes()
