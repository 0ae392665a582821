"""Pytest configuration and shared fixtures for the roboarm_sim test suite."""
import logging
from typing import Dict, Tuple

import pytest

from roboarm_sim.control.shared_state import SessionState
from roboarm_sim.envs.arm_playground import ArmPlaygroundEnv
from roboarm_sim.robots.planar_arm import ArmConfig
from roboarm_sim.utils.constants import (
    INDEX_MCP,
    INDEX_TIP,
    MIDDLE_TIP,
    NUM_HAND_LANDMARKS,
    PINKY_TIP,
    RING_TIP,
    THUMB_TIP,
    WRIST,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)


def build_hand(overrides: Dict[int, Tuple[float, float]]) -> Tuple[Tuple[float, float], ...]:
    """Build 21 landmarks: an open hand with the given points replaced."""
    points = {i: (0.5, 0.6) for i in range(NUM_HAND_LANDMARKS)}
    points.update({
        WRIST: (0.5, 0.9),
        THUMB_TIP: (0.3, 0.5),
        INDEX_MCP: (0.2, 0.4),
        INDEX_TIP: (0.5, 0.3),
        MIDDLE_TIP: (0.55, 0.3),
        RING_TIP: (0.6, 0.3),
        PINKY_TIP: (0.65, 0.35),
    })
    points.update(overrides)
    return tuple(points[i] for i in range(NUM_HAND_LANDMARKS))


@pytest.fixture
def open_hand():
    """Landmarks of a relaxed open palm."""
    return build_hand({})


@pytest.fixture
def pinch_hand():
    """Open hand with thumb and index tips touching."""
    return build_hand({THUMB_TIP: (0.5, 0.33)})


@pytest.fixture
def fist_hand():
    """All four fingertips curled onto the wrist."""
    return build_hand({
        INDEX_TIP: (0.5, 0.8),
        MIDDLE_TIP: (0.52, 0.8),
        RING_TIP: (0.55, 0.82),
        PINKY_TIP: (0.58, 0.85),
    })


@pytest.fixture
def arm_config():
    """Default arm geometry (150 / 120 mm)."""
    return ArmConfig()


@pytest.fixture
def session_state():
    """Fresh shared session cells."""
    return SessionState()


@pytest.fixture
def playground_env():
    """A reset playground environment."""
    env = ArmPlaygroundEnv()
    env.reset()
    return env
