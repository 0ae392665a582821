"""Tests for last-value-wins session cells."""
import threading

import pytest

from roboarm_sim.control.shared_state import LatestValue, NormalizedInputSample
from roboarm_sim.perception.gestures import HandGesture
from roboarm_sim.robots.planar_arm import ArmConfig
from roboarm_sim.utils.exceptions import ConfigError


class TestLatestValue:

    def test_last_write_wins(self):
        cell = LatestValue(0)
        cell.set(1)
        cell.set(2)
        assert cell.get() == 2
        assert cell.version == 2

    def test_set_if_changed(self):
        cell = LatestValue(HandGesture.OPEN_PALM)
        assert not cell.set_if_changed(HandGesture.OPEN_PALM)
        assert cell.set_if_changed(HandGesture.PINCH)
        assert cell.get() is HandGesture.PINCH
        assert cell.version == 1

    def test_concurrent_writers(self):
        cell = LatestValue(0)

        def writer(offset):
            for i in range(1000):
                cell.set(offset + i)

        threads = [threading.Thread(target=writer, args=(n * 10000,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert cell.version == 4000
        assert cell.get() % 10000 == 999


class TestSessionState:

    def test_defaults(self, session_state):
        assert session_state.sample.get() == NormalizedInputSample(0.5, 0.5)
        assert session_state.gesture.get() is HandGesture.OPEN_PALM
        assert session_state.config.get() == ArmConfig()
        assert session_state.vision_ready.get() is False
        assert session_state.snapshot.get() is None

    def test_publish_sample_clamps(self, session_state):
        session_state.publish_sample(1.4, -0.2)
        assert session_state.sample.get() == NormalizedInputSample(1.0, 0.0)

    def test_update_config(self, session_state):
        new_config = session_state.update_config(segment2_length=90.0)
        assert session_state.config.get() is new_config
        assert new_config.segment1_length == 150.0

    def test_invalid_update_keeps_previous_config(self, session_state):
        before = session_state.config.get()
        with pytest.raises(ConfigError):
            session_state.update_config(segment1_length=0.0)
        assert session_state.config.get() is before
