"""
Code generation for real hardware via the Gemini API.

Turns the current arm configuration and operator notes into a Python host
script, an Arduino sketch, and a short explanation.
"""

from roboarm_sim.codegen.gemini_codegen import (
    GeminiCodeGenerator,
    GeneratedCode,
    parse_generated_code,
)

__all__ = ["GeminiCodeGenerator", "GeneratedCode", "parse_generated_code"]
