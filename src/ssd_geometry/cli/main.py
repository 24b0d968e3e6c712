"""CLI entry point: ssd-geometry radius|normal|intersect|mesh subcommands."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn, Sequence, TextIO

from ssd_geometry.config import get_default_n_arc, get_length_unit
from ssd_geometry.csg.cone_mantle import ConeMantle
from ssd_geometry.csg.errors import InvalidArgumentError, InvalidGeometryError
from ssd_geometry.csg.intersection import intersection, intersection_raw
from ssd_geometry.csg.line import Line
from ssd_geometry.csg.mesh import Mesh, mesh
from ssd_geometry.csg.transform import rotation_about_axis
from ssd_geometry.csg.vec_math import is_nan_point

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or SSD_GEOMETRY_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('SSD_GEOMETRY_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )
    # matplotlib font discovery is noisy at DEBUG
    logging.getLogger('matplotlib').setLevel(logging.WARNING)


def _format_point(p: Sequence[float]) -> str:
    return ' '.join(f'{c:.10g}' for c in p)


def _mantle_from_args(args: argparse.Namespace) -> ConeMantle:
    """Build a ConeMantle from the shared mantle options.

    Raises:
        InvalidGeometryError: Inconsistent or invalid options.
    """
    radius = args.radius
    if len(radius) == 1:
        r: float | tuple[float, float] = radius[0]
    elif len(radius) == 2:
        r = (radius[0], radius[1])
    else:
        raise InvalidGeometryError('--radius takes one value (R) or two values (RBOT RTOP)')
    if args.rotation is not None and args.axis is not None:
        raise InvalidGeometryError('use either --rotation or --axis/--angle, not both')
    if args.rotation is not None:
        rotation = [args.rotation[0:3], args.rotation[3:6], args.rotation[6:9]]
    elif args.axis is not None:
        rotation = rotation_about_axis(args.axis, args.angle)
    else:
        rotation = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
    return ConeMantle(
        r=r,
        phi=tuple(args.phi) if args.phi is not None else None,
        hZ=args.hz,
        origin=tuple(args.origin),
        rotation=rotation,
        normal_direction=args.normal_direction,
    )


def _radius_cmd(args: argparse.Namespace, cm: ConeMantle, out: TextIO) -> int:
    out.write(f'{cm.radius_at_z(args.z):.10g}\n')
    return 0


def _normal_cmd(args: argparse.Namespace, cm: ConeMantle, out: TextIO) -> int:
    n = cm.unit_normal(args.point) if args.unit else cm.normal(args.point)
    out.write(_format_point(n) + '\n')
    return 0


def _intersect_cmd(args: argparse.Namespace, cm: ConeMantle, out: TextIO) -> int:
    line = Line(tuple(args.line_origin), tuple(args.line_direction))
    solver = intersection_raw if args.raw else intersection
    p1, p2 = solver(cm, line)
    if is_nan_point(p1) and is_nan_point(p2):
        logger.info('Line does not intersect the mantle')
    for p in (p1, p2):
        flag = 'inside' if cm.contains_height(p) else 'outside'
        out.write(f'{_format_point(p)} {flag}\n')
    return 0


def _write_mesh(m: Mesh, out: TextIO) -> None:
    out.write(f'# vertices {m.n_vertices}\n')
    for p in m.points():
        out.write(_format_point(p) + '\n')
    out.write(f'# connections {len(m.connections)}\n')
    for c in m.connections:
        out.write(' '.join(str(i) for i in c) + '\n')


def _mesh_cmd(args: argparse.Namespace, cm: ConeMantle, out: TextIO) -> int:
    n_arc = args.n_arc if args.n_arc is not None else get_default_n_arc()
    length_unit = args.length_unit if args.length_unit is not None else get_length_unit()
    m = mesh(cm, n_arc, args.n_vert_lines)
    if args.output:
        from ssd_geometry.rendering.matplotlib_mesh import draw_mesh_mpl

        draw_mesh_mpl(m, length_unit=length_unit, output_path=args.output)
        logger.info('Wrote %s', args.output)
        return 0
    _write_mesh(m.scaled(length_unit), out)
    return 0


def _mantle_parent() -> argparse.ArgumentParser:
    """Options shared by every subcommand: mantle geometry and placement."""
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument(
        '--radius',
        type=float,
        nargs='+',
        default=[1.0],
        metavar='R',
        help='Radius (m), or bottom and top radius for a frustum',
    )
    p.add_argument(
        '--phi', type=float, nargs=2, default=None, metavar=('MIN', 'MAX'),
        help='Angular range (rad) of a partial mantle',
    )
    p.add_argument('--hz', type=float, default=1.0, help='Half height (m)')
    p.add_argument(
        '--origin', type=float, nargs=3, default=[0.0, 0.0, 0.0], metavar=('X', 'Y', 'Z')
    )
    p.add_argument(
        '--rotation', type=float, nargs=9, default=None, help='Rotation matrix, row-major'
    )
    p.add_argument(
        '--axis', type=float, nargs=3, default=None, metavar=('X', 'Y', 'Z'),
        help='Rotation axis (use with --angle)',
    )
    p.add_argument('--angle', type=float, default=0.0, help='Rotation angle (rad) about --axis')
    p.add_argument(
        '--normal-direction', type=str, default='outwards', choices=['inwards', 'outwards']
    )
    p.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ssd-geometry CLI (radius | normal | intersect | mesh).

    Returns:
        Exit code 0 on success, 1 on invalid geometry or arguments.
    """
    parent = _mantle_parent()
    parser = argparse.ArgumentParser(
        prog='ssd-geometry',
        description='Cone mantle radius, normals, line intersections and meshes.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    radius_parser = subparsers.add_parser('radius', parents=[parent], help='Radius at height z')
    radius_parser.add_argument('--z', type=float, default=0.0, help='Local height (m)')
    radius_parser.set_defaults(func=_radius_cmd)

    normal_parser = subparsers.add_parser('normal', parents=[parent], help='Normal at a point')
    normal_parser.add_argument(
        '--point', type=float, nargs=3, required=True, metavar=('X', 'Y', 'Z')
    )
    normal_parser.add_argument('--unit', action='store_true', help='Normalize the result')
    normal_parser.set_defaults(func=_normal_cmd)

    inter_parser = subparsers.add_parser(
        'intersect', parents=[parent], help='Intersect a line with the mantle'
    )
    inter_parser.add_argument(
        '--line-origin', type=float, nargs=3, required=True, metavar=('X', 'Y', 'Z')
    )
    inter_parser.add_argument(
        '--line-direction', type=float, nargs=3, required=True, metavar=('DX', 'DY', 'DZ')
    )
    inter_parser.add_argument(
        '--raw', action='store_true', help='Use |discriminant| (never report a miss)'
    )
    inter_parser.set_defaults(func=_intersect_cmd)

    mesh_parser = subparsers.add_parser('mesh', parents=[parent], help='Mesh the mantle')
    mesh_parser.add_argument(
        '--n-arc', type=int, default=None, help='Angular segments; env: SSD_GEOMETRY_N_ARC'
    )
    mesh_parser.add_argument(
        '--n-vert-lines', type=int, default=None, help='Wireframe with this many vertical lines'
    )
    mesh_parser.add_argument(
        '--length-unit',
        type=float,
        default=None,
        help='Coordinate scale factor; env: SSD_GEOMETRY_LENGTH_UNIT',
    )
    mesh_parser.add_argument(
        '-o', '--output', type=str, default=None, help='Save a matplotlib rendering here'
    )
    mesh_parser.set_defaults(func=_mesh_cmd)

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        cm = _mantle_from_args(args)
        return int(args.func(args, cm, sys.stdout))
    except (InvalidGeometryError, InvalidArgumentError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
