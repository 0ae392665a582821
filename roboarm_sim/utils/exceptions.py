"""Custom exceptions for the roboarm_sim package."""


class RoboArmError(Exception):
    """Base error for the roboarm_sim package."""


class ConfigError(RoboArmError):
    """Invalid arm or simulation configuration."""


class CodeGenerationError(RoboArmError):
    """The external code-generation request failed or returned a bad payload."""
