"""
Serial line sink for streaming joint commands to real hardware.

Each control tick produces one ASCII line ``"<base>,<shoulder>,<elbow>,<gripper>\\n"``
written to a serial port at 115200 baud.  There is no acknowledgement or
flow control: a failed write is logged and dropped, and the session keeps
running.

Classes:
    SerialCommandSink: Best-effort line writer over pyserial.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import serial

from roboarm_sim.robots.planar_arm import JointAngles
from roboarm_sim.utils.constants import SERIAL_BAUD_RATE

logger = logging.getLogger(__name__)


class SerialCommandSink:
    """Writes one command line per control tick to a serial port.

    Usable as a context manager; the port is closed on exit.

    Attributes:
        port: Device path, e.g. ``/dev/ttyUSB0`` or ``COM3``.
        baud_rate: Line speed in baud.
        write_timeout: Seconds before a blocked write is abandoned.
    """

    def __init__(
        self, port: str, baud_rate: int = SERIAL_BAUD_RATE, write_timeout: float = 0.05
    ) -> None:
        self.port = port
        self.baud_rate = baud_rate
        self.write_timeout = write_timeout
        self._serial: Optional[Any] = None
        self.failed_writes = 0

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def connect(self) -> bool:
        """Open the serial port.

        Returns:
            *True* on success, *False* if the port could not be opened.
        """
        if self.connected:
            return True
        try:
            self._serial = serial.Serial(
                self.port, self.baud_rate, write_timeout=self.write_timeout
            )
        except (serial.SerialException, OSError, ValueError) as exc:
            logger.error(f"Serial connection to {self.port} failed: {exc}")
            self._serial = None
            return False
        logger.info(f"Serial link open on {self.port} @ {self.baud_rate} baud")
        return True

    def send_line(self, line: str) -> bool:
        """Write one newline-terminated line, logging any failure.

        Args:
            line: The text to send; a trailing newline is added if missing.

        Returns:
            *True* if the write went through.
        """
        if not self.connected:
            return False
        if not line.endswith("\n"):
            line += "\n"
        try:
            self._serial.write(line.encode("ascii"))
        except (serial.SerialException, OSError) as exc:
            self.failed_writes += 1
            logger.warning(f"Serial write error on {self.port}: {exc}")
            return False
        return True

    def send_angles(self, angles: JointAngles) -> bool:
        """Send the hardware command line for *angles*."""
        return self.send_line(angles.to_command())

    def close(self) -> None:
        """Close the port if it is open."""
        if self._serial is None:
            return
        try:
            self._serial.close()
        except (serial.SerialException, OSError) as exc:
            logger.warning(f"Error closing serial port {self.port}: {exc}")
        finally:
            self._serial = None
            logger.info(f"Serial link on {self.port} closed")

    def __enter__(self) -> "SerialCommandSink":
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
