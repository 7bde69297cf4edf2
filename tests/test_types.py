"""
요청/응답 모델 직렬화/역직렬화 테스트
python -m pytest tests/test_types.py -v
"""

import base64

import pytest
from pydantic import ValidationError

from gemini_genai.types import (
    Content,
    FileData,
    GenerateContentConfig,
    GenerateContentResponse,
    InlineData,
    Part,
)


class TestPart:
    def test_from_text(self):
        part = Part.from_text("안녕")
        assert part.text == "안녕"
        assert part.to_api_dict() == {"text": "안녕"}

    def test_from_uri(self):
        part = Part.from_uri("gs://bucket/cat.png", "image/png")
        assert part.to_api_dict() == {
            "fileData": {"fileUri": "gs://bucket/cat.png", "mimeType": "image/png"},
        }

    def test_from_bytes_encodes_base64(self):
        part = Part.from_bytes(b"\x89PNG", "image/png")
        assert part.inline_data.mime_type == "image/png"
        assert base64.b64decode(part.inline_data.data) == b"\x89PNG"
        assert set(part.to_api_dict()) == {"inlineData"}

    def test_unset_variants_are_omitted(self):
        """null 자리표시자 없이 채워진 필드만 직렬화되는지 검증"""
        d = Part(text="a").to_api_dict()
        assert "inlineData" not in d
        assert "fileData" not in d

    def test_two_variants_rejected(self):
        with pytest.raises(ValidationError):
            Part(
                text="a",
                file_data=FileData(file_uri="gs://x", mime_type="image/png"),
            )

    def test_parse_camel_case(self):
        part = Part.model_validate(
            {"inlineData": {"mimeType": "image/jpeg", "data": "AAAA"}}
        )
        assert part.inline_data == InlineData(mime_type="image/jpeg", data="AAAA")

    def test_unsupported_part_is_empty(self):
        """functionCall 같은 미지원 part는 빈 Part로 파싱"""
        part = Part.model_validate({"functionCall": {"name": "f", "args": {}}})
        assert part.text is None
        assert part.inline_data is None
        assert part.file_data is None


class TestContent:
    def test_from_text(self):
        content = Content.from_text("질문")
        assert content.role == "user"
        assert len(content.parts) == 1
        assert content.to_api_dict() == {"role": "user", "parts": [{"text": "질문"}]}

    def test_parts_default_empty(self):
        content = Content(role="model")
        assert content.parts == []
        assert content.to_api_dict() == {"role": "model", "parts": []}

    def test_frozen(self):
        content = Content.from_text("a")
        with pytest.raises(ValidationError):
            content.role = "model"


class TestGenerateContentConfig:
    def test_empty_config(self):
        assert GenerateContentConfig().generation_config() == {}

    def test_wire_names(self):
        config = GenerateContentConfig(
            temperature=0.7,
            max_output_tokens=100,
            top_p=0.9,
            top_k=40,
            candidate_count=1,
            response_mime_type="application/json",
        )
        assert config.generation_config() == {
            "temperature": 0.7,
            "maxOutputTokens": 100,
            "topP": 0.9,
            "topK": 40,
            "candidateCount": 1,
            "responseMimeType": "application/json",
        }

    def test_system_instruction_excluded(self):
        config = GenerateContentConfig(system_instruction="간결하게", temperature=0.1)
        assert config.generation_config() == {"temperature": 0.1}

    def test_temperature_not_validated(self):
        """범위 검증은 서버 몫"""
        assert GenerateContentConfig(temperature=5.0).temperature == 5.0


class TestGenerateContentResponse:
    SAMPLE_API_RESPONSE = {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [{"text": "A"}, {"text": "B"}],
                },
                "finishReason": "STOP",
                "safetyRatings": [
                    {"category": "HARM_CATEGORY_HARASSMENT", "probability": "NEGLIGIBLE"},
                ],
            }
        ],
        "usageMetadata": {
            "promptTokenCount": 4,
            "candidatesTokenCount": 2,
            "totalTokenCount": 6,
        },
        "modelVersion": "gemini-2.0-flash-001",
    }

    def test_text_concatenates_parts(self):
        resp = GenerateContentResponse.from_api_response(self.SAMPLE_API_RESPONSE)
        assert resp.text == "AB"

    def test_fields_parsed(self):
        resp = GenerateContentResponse.from_api_response(self.SAMPLE_API_RESPONSE)
        candidate = resp.candidates[0]
        assert candidate.finish_reason == "STOP"
        assert candidate.safety_ratings[0].category == "HARM_CATEGORY_HARASSMENT"
        assert candidate.safety_ratings[0].probability == "NEGLIGIBLE"
        assert resp.usage_metadata.total_token_count == 6
        assert resp.model_version == "gemini-2.0-flash-001"

    def test_no_candidates(self):
        resp = GenerateContentResponse.from_api_response({"candidates": []})
        assert resp.text is None

    def test_missing_candidates_key(self):
        resp = GenerateContentResponse.from_api_response({})
        assert resp.candidates == []
        assert resp.text is None

    def test_candidate_without_content(self):
        resp = GenerateContentResponse.from_api_response(
            {"candidates": [{"finishReason": "SAFETY"}]}
        )
        assert resp.text is None

    def test_non_text_parts_skipped(self):
        resp = GenerateContentResponse.from_api_response(
            {
                "candidates": [
                    {
                        "content": {
                            "parts": [
                                {"text": "보세요: "},
                                {"fileData": {"fileUri": "gs://x", "mimeType": "image/png"}},
                                {"text": "끝"},
                            ]
                        }
                    }
                ]
            }
        )
        assert resp.text == "보세요: 끝"

    def test_prompt_feedback(self):
        resp = GenerateContentResponse.from_api_response(
            {
                "promptFeedback": {
                    "blockReason": "SAFETY",
                    "safetyRatings": [
                        {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "probability": "HIGH"},
                    ],
                }
            }
        )
        assert resp.prompt_feedback.block_reason == "SAFETY"
        assert resp.prompt_feedback.safety_ratings[0].probability == "HIGH"
        assert resp.text is None
