"""Gemini-backed generator for host and firmware code targeting the arm.

The request carries the current ``ArmConfig`` plus free-text operator
notes.  The response must be a JSON object with three non-empty string
fields (``python``, ``arduino``, ``explanation``).  Anything else, including
transport errors, surfaces as a single ``CodeGenerationError``; partial
results are never returned.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from roboarm_sim.robots.planar_arm import ArmConfig
from roboarm_sim.utils.exceptions import CodeGenerationError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-pro"
RESPONSE_FIELDS = ("python", "arduino", "explanation")


@dataclass(frozen=True)
class GeneratedCode:
    """Three opaque text blobs returned by the generator."""

    python: str
    arduino: str
    explanation: str


def api_key_from_env() -> Optional[str]:
    """Return the Gemini API key from ``GEMINI_API_KEY`` or ``API_KEY``."""
    return os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")


def build_prompt(config: ArmConfig, notes: str) -> str:
    """Build the code-generation prompt for *config* and operator *notes*."""
    return f"""
You are a Senior Robotics Engineer. I need full code for a 2-link robotic arm system using Computer Vision.

System Specs:
- Arm Dimensions (2-DOF Planar):
  L1 (Shoulder)={config.segment1_length:g}mm, L2 (Forearm)={config.segment2_length:g}mm.
  Base rotation offset={config.base_rotation:g} degrees.
- Hardware: Arduino/ESP32, 4 Servos (Base, Shoulder, Elbow, Gripper).
- Host: Python script using MediaPipe for Hand Tracking.
- Communication: Serial (USB) at 115200 baud.

User Specific Requirements: {notes.strip() or "None"}

Return a JSON object with exactly these string fields:
- "python": Full Python script using cv2, mediapipe, serial. Uses 2-link analytical IK.
- "arduino": Full C++ Arduino sketch with the Servo library and parsing logic.
- "explanation": A brief Markdown summary of the architecture and safety failsafes.

The Python code must include:
1. MediaPipe Hands initialization.
2. Mapping of hand landmarks to XYZ coordinates.
3. Gesture recognition: Pinch closes the gripper, Open Palm opens it, Fist stops/locks motion.
4. Serial transmission formatted as "BASE,SHOULDER,ELBOW,GRIPPER\\n".
5. Analytical inverse kinematics for 2 segments (law of cosines).

The Arduino code must include:
1. Servo object initialization for 4 servos.
2. Parsing of comma-separated angles.
3. Interpolation/smoothing for fluid motion.
""".strip()


def parse_generated_code(text: Optional[str]) -> GeneratedCode:
    """Validate a raw JSON response and convert it to ``GeneratedCode``.

    Args:
        text: Raw response text.

    Returns:
        The parsed ``GeneratedCode``.

    Raises:
        CodeGenerationError: If the text is empty, not JSON, or missing
            any of the three non-empty string fields.
    """
    if not text or not text.strip():
        raise CodeGenerationError("Empty response from Gemini")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CodeGenerationError(f"Response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise CodeGenerationError("Response JSON is not an object")

    missing = [
        name
        for name in RESPONSE_FIELDS
        if not isinstance(payload.get(name), str) or not payload[name].strip()
    ]
    if missing:
        raise CodeGenerationError(f"Response missing fields: {', '.join(missing)}")
    return GeneratedCode(**{name: payload[name] for name in RESPONSE_FIELDS})


class GeminiCodeGenerator:
    """Requests Python and Arduino code for the current arm from Gemini.

    The client is created lazily on the first request so that constructing
    the generator never touches the network.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 temperature: float = 0.4, max_tokens: int = 8192):
        """Initialize the generator.

        Args:
            api_key: Google AI API key; read from the environment when None.
            model: Gemini model name; ``GEMINI_MODEL`` or ``DEFAULT_MODEL`` when None.
            temperature: Sampling temperature.
            max_tokens: Maximum response tokens.
        """
        self.api_key = api_key if api_key is not None else api_key_from_env()
        self.model = model or os.environ.get("GEMINI_MODEL", DEFAULT_MODEL)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = None

    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def _get_client(self):
        if self._client is None:
            if not self.is_configured():
                raise CodeGenerationError(
                    "Gemini API key is not set (use GEMINI_API_KEY or API_KEY)"
                )
            self._client = genai.Client(api_key=self.api_key)
            logger.info(f"Gemini client initialized with model: {self.model}")
        return self._client

    def _generation_config(self) -> types.GenerateContentConfig:
        schema: Dict[str, Any] = {
            "type": "OBJECT",
            "properties": {name: {"type": "STRING"} for name in RESPONSE_FIELDS},
            "required": list(RESPONSE_FIELDS),
        }
        return types.GenerateContentConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            response_mime_type="application/json",
            response_schema=schema,
        )

    def generate(self, config: ArmConfig, notes: str = "") -> GeneratedCode:
        """Generate host and firmware code for *config*.

        Args:
            config: Arm geometry to target.
            notes: Free-text operator requirements.

        Returns:
            The validated ``GeneratedCode``.

        Raises:
            CodeGenerationError: On any failure, including a partial response.
        """
        client = self._get_client()
        prompt = build_prompt(config, notes)
        logger.info(f"Sending code-generation request to Gemini ({self.model})")
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self._generation_config(),
            )
        except Exception as exc:
            logger.error(f"Gemini generation error: {exc}", exc_info=True)
            raise CodeGenerationError("Failed to generate code.") from exc

        text = response.text if response is not None else None
        return parse_generated_code(text)
