#!/usr/bin/env python3
"""
Main entry point for the RoboArm hand-tracking simulator.

Runs the arm playground driven by camera hand tracking (falling back to
the mouse when no camera is available), a mouse-only session, or a
one-shot Gemini request that writes host and firmware code for the
configured arm.

Usage examples::

    # Hand tracking with the default webcam
    python run_sim.py --mode sim

    # Stream joint commands to an Arduino as well
    python run_sim.py --mode sim --serial-port /dev/ttyUSB0

    # Mouse only, with a longer forearm
    python run_sim.py --mode manual --segment2 160

    # Generate Python + Arduino code for the current arm
    GEMINI_API_KEY=... python run_sim.py --mode codegen --notes "Use an ESP32"
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from roboarm_sim.codegen.gemini_codegen import GeminiCodeGenerator
from roboarm_sim.envs.configs import PlaygroundSimConfig
from roboarm_sim.robots.planar_arm import ArmConfig
from roboarm_sim.session import ArmSession
from roboarm_sim.utils.exceptions import CodeGenerationError, ConfigError

logger = logging.getLogger("run_sim")

# ======================================================================
# Configuration builders
# ======================================================================


def _build_arm_config(args: argparse.Namespace) -> ArmConfig:
    """Return the arm configuration from CLI flags.

    Raises:
        ConfigError: If a segment length is not positive.
    """
    return ArmConfig(
        segment1_length=args.segment1,
        segment2_length=args.segment2,
        base_rotation=args.base_rotation,
    )


def _build_sim_config(args: argparse.Namespace) -> PlaygroundSimConfig:
    return PlaygroundSimConfig(fps=args.fps, seed=args.seed)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# ======================================================================
# Mode runners
# ======================================================================


def _run_session(args: argparse.Namespace, camera_index) -> None:
    """Run an interactive session until the window closes.

    Args:
        args: Parsed CLI arguments.
        camera_index: Camera device, or None for mouse input only.
    """
    session = ArmSession(
        arm_config=_build_arm_config(args),
        camera_index=camera_index,
        serial_port=args.serial_port,
        sim_cfg=_build_sim_config(args),
    )
    print("Controls: pinch (or hold the left mouse button) to grip, fist to lock.")
    print("Arrow keys resize the arm segments, Esc or Q quits.")
    frames = session.run()
    print(f"Session ended after {frames} frames")


def _run_sim(args: argparse.Namespace) -> None:
    """Hand tracking session; falls back to the mouse if the camera fails."""
    _run_session(args, camera_index=args.camera)


def _run_manual(args: argparse.Namespace) -> None:
    """Mouse-only session, no camera opened."""
    _run_session(args, camera_index=None)


def _run_codegen(args: argparse.Namespace) -> None:
    """Request generated code for the configured arm and write it to disk.

    Args:
        args: Parsed CLI arguments with ``notes`` and ``output_dir``.

    Raises:
        CodeGenerationError: If the request fails or the response is partial.
    """
    config = _build_arm_config(args)
    generator = GeminiCodeGenerator()
    result = generator.generate(config, notes=args.notes)

    os.makedirs(args.output_dir, exist_ok=True)
    outputs = {
        "arm_controller.py": result.python,
        "arm_firmware.ino": result.arduino,
        "EXPLANATION.md": result.explanation,
    }
    for filename, content in outputs.items():
        path = os.path.join(args.output_dir, filename)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        print(f"Wrote {path}")


# ======================================================================
# CLI
# ======================================================================


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="RoboArm hand-tracking simulator")
    parser.add_argument("--mode", choices=["sim", "manual", "codegen"], default="sim")
    parser.add_argument("--camera", type=int, default=0, help="camera device index")
    parser.add_argument("--serial-port", default=None, help="e.g. /dev/ttyUSB0 or COM3")
    parser.add_argument("--segment1", type=float, default=150.0, help="shoulder link (mm)")
    parser.add_argument("--segment2", type=float, default=120.0, help="forearm link (mm)")
    parser.add_argument("--base-rotation", type=float, default=0.0, help="degrees")
    parser.add_argument("--fps", type=int, default=30)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--notes", default="", help="extra requirements for codegen")
    parser.add_argument("--output-dir", default="./generated_code")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args()


# ======================================================================
# Dispatch
# ======================================================================


# Mapping from mode name to runner function
_MODE_DISPATCH = {
    "sim": _run_sim,
    "manual": _run_manual,
    "codegen": _run_codegen,
}


def main() -> int:
    args = _parse_args()
    _configure_logging(args.verbose)
    print(f"Mode: {args.mode} | Arm: {args.segment1:g}/{args.segment2:g} mm")
    print("-" * 60)

    runner = _MODE_DISPATCH[args.mode]
    try:
        runner(args)
    except ConfigError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 2
    except CodeGenerationError as exc:
        logger.error(f"Code generation failed: {exc}")
        return 1
    return 0


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
