"""Tests for Gemini code generation, with the SDK client mocked."""
import json
from unittest.mock import Mock, patch

import pytest

from roboarm_sim.codegen.gemini_codegen import (
    DEFAULT_MODEL,
    GeminiCodeGenerator,
    GeneratedCode,
    api_key_from_env,
    build_prompt,
    parse_generated_code,
)
from roboarm_sim.robots.planar_arm import ArmConfig
from roboarm_sim.utils.exceptions import CodeGenerationError

VALID_RESPONSE = json.dumps({
    "python": "import cv2",
    "arduino": "#include <Servo.h>",
    "explanation": "## Overview",
})


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("GEMINI_API_KEY", "API_KEY", "GEMINI_MODEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_genai():
    """Mock the google-genai module used by the generator."""
    with patch("roboarm_sim.codegen.gemini_codegen.genai") as mock_genai:
        client = Mock()
        mock_genai.Client.return_value = client
        client.models.generate_content.return_value = Mock(text=VALID_RESPONSE)
        yield mock_genai


class TestParseGeneratedCode:

    def test_valid_response(self):
        result = parse_generated_code(VALID_RESPONSE)
        assert result == GeneratedCode("import cv2", "#include <Servo.h>", "## Overview")

    @pytest.mark.parametrize("text", [None, "", "   ", "not json", "[1, 2]"])
    def test_malformed_response(self, text):
        with pytest.raises(CodeGenerationError):
            parse_generated_code(text)

    def test_partial_response_rejected(self):
        partial = json.dumps({"python": "x = 1", "arduino": "", "explanation": "text"})
        with pytest.raises(CodeGenerationError, match="arduino"):
            parse_generated_code(partial)

    def test_missing_field_rejected(self):
        with pytest.raises(CodeGenerationError, match="explanation"):
            parse_generated_code(json.dumps({"python": "a", "arduino": "b"}))


class TestPrompt:

    def test_prompt_carries_arm_geometry_and_notes(self):
        prompt = build_prompt(ArmConfig(segment1_length=180.0, segment2_length=95.5), "Use an ESP32")
        assert "L1 (Shoulder)=180mm" in prompt
        assert "L2 (Forearm)=95.5mm" in prompt
        assert "Use an ESP32" in prompt
        assert "115200" in prompt

    def test_empty_notes(self):
        assert "User Specific Requirements: None" in build_prompt(ArmConfig(), "  ")


class TestGeminiCodeGenerator:

    def test_api_key_from_env_fallback(self, monkeypatch):
        assert api_key_from_env() is None
        monkeypatch.setenv("API_KEY", "fallback")
        assert api_key_from_env() == "fallback"
        monkeypatch.setenv("GEMINI_API_KEY", "primary")
        assert api_key_from_env() == "primary"

    def test_model_from_env(self, monkeypatch):
        assert GeminiCodeGenerator(api_key="k").model == DEFAULT_MODEL
        monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")
        assert GeminiCodeGenerator(api_key="k").model == "gemini-2.5-flash"

    def test_not_configured_without_key(self, mock_genai):
        generator = GeminiCodeGenerator()
        assert generator.is_configured() is False
        with pytest.raises(CodeGenerationError):
            generator.generate(ArmConfig())
        mock_genai.Client.assert_not_called()

    def test_generate_success(self, mock_genai):
        generator = GeminiCodeGenerator(api_key="test_api_key")
        result = generator.generate(ArmConfig(), notes="Add a watchdog")
        assert result.python == "import cv2"
        mock_genai.Client.assert_called_once_with(api_key="test_api_key")
        call = mock_genai.Client.return_value.models.generate_content.call_args
        assert call.kwargs["model"] == DEFAULT_MODEL
        assert "Add a watchdog" in call.kwargs["contents"]

    def test_client_created_once(self, mock_genai):
        generator = GeminiCodeGenerator(api_key="test_api_key")
        generator.generate(ArmConfig())
        generator.generate(ArmConfig())
        mock_genai.Client.assert_called_once()

    def test_transport_error_wrapped(self, mock_genai):
        mock_genai.Client.return_value.models.generate_content.side_effect = ConnectionError("down")
        with pytest.raises(CodeGenerationError, match="Failed to generate code"):
            GeminiCodeGenerator(api_key="test_api_key").generate(ArmConfig())

    def test_partial_response_raises(self, mock_genai):
        mock_genai.Client.return_value.models.generate_content.return_value = Mock(
            text=json.dumps({"python": "x", "arduino": "y"})
        )
        with pytest.raises(CodeGenerationError):
            GeminiCodeGenerator(api_key="test_api_key").generate(ArmConfig())

    def test_generation_config_requests_json(self):
        config = GeminiCodeGenerator(api_key="k")._generation_config()
        assert config.response_mime_type == "application/json"
        assert config.temperature == pytest.approx(0.4)
