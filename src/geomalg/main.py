#!/usr/bin/env python3
"""
===============================================================================
GEOMALG - COMMAND LINE ENTRY POINT
===============================================================================
Small front end over the rotation algebra for quick conversions and for the
matrix/quaternion round-trip audit.

USAGE:
    geomalg from-axis-angle 0 0 1 90         # quaternion + matrix
    geomalg from-ypr 30 45 60                # quaternion from yaw/pitch/roll
    geomalg interpolate --from 0 0 0 1 --to 0 0 1 0 --steps 5
    geomalg audit --axis all                 # round-trip sweep, CSV report
    geomalg --config geomalg.yaml audit      # settings from YAML

Angles are read in the configured ``angle_units`` (degrees by default).

OUTPUTS:
    <output_dir>/roundtrip_report.csv   - per-angle audit table
===============================================================================
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np
import yaml

from .analysis.roundtrip import AXES, run_audit, summarize, sweep_angles, write_report
from .config import LOG_LEVELS, GeomalgConfig, load_config
from .core.constants import DEG2RAD, RAD2DEG
from .core.matrix import Matrix4x4
from .core.quaternion import Quaternion
from .core.vector import Vector3

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def _to_radians(value: float, cfg: GeomalgConfig) -> float:
    return value * DEG2RAD if cfg.angle_units == "degrees" else value


def _from_radians(value: float, cfg: GeomalgConfig) -> float:
    return value * RAD2DEG if cfg.angle_units == "degrees" else value


def _format_quaternion(q: Quaternion) -> str:
    return f"x={q.x: .9f}  y={q.y: .9f}  z={q.z: .9f}  w={q.w: .9f}"


def _format_matrix(m: Matrix4x4) -> str:
    return "\n".join("  [" + " ".join(f"{e: .6f}" for e in row) + " ]"
                     for row in m.to_numpy())


# =============================================================================
# SUBCOMMANDS
# =============================================================================

def cmd_from_axis_angle(args: argparse.Namespace, cfg: GeomalgConfig) -> int:
    axis = Vector3(args.axis_x, args.axis_y, args.axis_z)
    length = axis.length()
    if length == 0.0:
        raise ValueError("rotation axis must be non-zero")
    if abs(length - 1.0) > cfg.tolerance:
        logger.info("Normalizing rotation axis of length %.6f", length)
        axis = axis.normalize()

    angle = _to_radians(args.angle, cfg)
    q = Quaternion.from_axis_angle(axis, angle)

    print(f"Quaternion: {_format_quaternion(q)}")
    print("Rotation matrix (row-vector convention):")
    print(_format_matrix(Matrix4x4.from_quaternion(q)))
    return 0


def cmd_from_ypr(args: argparse.Namespace, cfg: GeomalgConfig) -> int:
    q = Quaternion.from_yaw_pitch_roll(_to_radians(args.yaw, cfg),
                                       _to_radians(args.pitch, cfg),
                                       _to_radians(args.roll, cfg))
    yaw, pitch, roll = q.to_yaw_pitch_roll()

    print(f"Quaternion: {_format_quaternion(q)}")
    print(f"Recovered ({cfg.angle_units}): yaw={_from_radians(yaw, cfg):.6f}  "
          f"pitch={_from_radians(pitch, cfg):.6f}  roll={_from_radians(roll, cfg):.6f}")
    return 0


def cmd_interpolate(args: argparse.Namespace, cfg: GeomalgConfig) -> int:
    if args.steps < 2:
        raise ValueError(f"--steps must be at least 2, got {args.steps}")

    a = Quaternion(*args.start)
    b = Quaternion(*args.end)
    logger.debug("Interpolating %r -> %r with %s", a, b, args.method)

    print(f"{'t':>8}  quaternion")
    for t in np.linspace(0.0, 1.0, args.steps):
        if args.method == "slerp":
            q = Quaternion.slerp(a, b, float(t), epsilon=cfg.slerp_epsilon)
        else:
            q = Quaternion.lerp(a, b, float(t))
        print(f"{t:8.4f}  {_format_quaternion(q)}")
    return 0


def cmd_audit(args: argparse.Namespace, cfg: GeomalgConfig) -> int:
    axes = AXES if args.axis == "all" else (args.axis,)
    angles = sweep_angles(cfg.sweep_start, cfg.sweep_stop, cfg.sweep_step)
    angles_rad = np.array([_to_radians(a, cfg) for a in angles])

    logger.info("Auditing %d angles on axes %s", len(angles_rad), ", ".join(axes))
    report = run_audit(axes, angles_rad, cfg.tolerance)

    output = Path(args.output) if args.output else Path(cfg.output_dir) / "roundtrip_report.csv"
    write_report(report, output)

    summary = summarize(report)
    failures = int((~report["passed"]).sum())

    print("=" * 70)
    print("  ROTATION ROUND-TRIP AUDIT")
    print("=" * 70)
    print(summary.to_string(index=False))
    print("=" * 70)
    print(f"  Samples: {len(report)}   Failures: {failures}   Report: {output}")
    print("=" * 70)

    return 1 if failures else 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, GeomalgConfig], int]] = {
    "from-axis-angle": cmd_from_axis_angle,
    "from-ypr": cmd_from_ypr,
    "interpolate": cmd_interpolate,
    "audit": cmd_audit,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geomalg",
        description="Quaternion / rotation matrix conversions and audits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  geomalg from-axis-angle 0 0 1 90
  geomalg from-ypr 30 45 60
  geomalg interpolate --from 0 0 0 1 --to 0 0 1 0 --steps 5 --method slerp
  geomalg audit --axis xyz --output report.csv
        """
    )
    parser.add_argument('--config', type=str, default=None,
                        help='Path to YAML configuration')
    parser.add_argument('--log-level', type=str, default=None, choices=LOG_LEVELS,
                        help='Logging level (overrides the configuration)')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('from-axis-angle', help='Quaternion and matrix from axis and angle')
    p.add_argument('axis_x', type=float)
    p.add_argument('axis_y', type=float)
    p.add_argument('axis_z', type=float)
    p.add_argument('angle', type=float, help='Rotation angle in the configured units')

    p = sub.add_parser('from-ypr', help='Quaternion from yaw, pitch and roll')
    p.add_argument('yaw', type=float, help='Rotation about Y')
    p.add_argument('pitch', type=float, help='Rotation about X')
    p.add_argument('roll', type=float, help='Rotation about Z')

    p = sub.add_parser('interpolate', help='Interpolate between two quaternions')
    p.add_argument('--from', dest='start', type=float, nargs=4, required=True,
                   metavar=('X', 'Y', 'Z', 'W'))
    p.add_argument('--to', dest='end', type=float, nargs=4, required=True,
                   metavar=('X', 'Y', 'Z', 'W'))
    p.add_argument('--steps', type=int, default=5,
                   help='Number of samples including both ends (default: 5)')
    p.add_argument('--method', choices=('slerp', 'lerp'), default='slerp')

    p = sub.add_parser('audit', help='Matrix/quaternion round-trip sweep')
    p.add_argument('--axis', choices=AXES + ('all',), default='all')
    p.add_argument('--output', type=str, default=None,
                   help='CSV report path (default: <output_dir>/roundtrip_report.csv)')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse ``argv`` and run the selected subcommand.

    Returns the process exit status. Invalid input exits with status 2
    through ``parser.error``.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configured before the config file is read; its log_level applies after.
    logging.basicConfig(level=getattr(logging, (args.log_level or "info").upper()),
                        format=LOG_FORMAT)

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        parser.error(str(exc))

    if args.log_level is None:
        logging.getLogger().setLevel(getattr(logging, cfg.log_level.upper()))

    try:
        return COMMANDS[args.command](args, cfg)
    except ValueError as exc:
        parser.error(str(exc))


def cli() -> None:
    sys.exit(main())


if __name__ == '__main__':
    cli()
