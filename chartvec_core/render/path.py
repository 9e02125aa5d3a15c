from __future__ import annotations

from typing import Callable, Sequence

from chartvec_ui.scene import (
    PATH_COMMAND_ARITY,
    Circle,
    Ellipse,
    Line,
    Path,
    PathCommand,
    Point,
    Polygon,
    Rect,
    ShapeElement,
)

from ..errors import PathCommandError, UnsupportedElementError
from .svg import to_svg_number


class PathMaker:
    """Accumulates path commands in scene (y-up) coordinates."""

    def __init__(self) -> None:
        self._commands: list[PathCommand] = []

    @property
    def commands(self) -> tuple[PathCommand, ...]:
        return tuple(self._commands)

    def move_to(self, x: float, y: float) -> None:
        self._commands.append(PathCommand("M", (x, y)))

    def line_to(self, x: float, y: float) -> None:
        self._commands.append(PathCommand("L", (x, y)))

    def cubic_bezier_to(self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float) -> None:
        self._commands.append(PathCommand("C", (c1x, c1y, c2x, c2y, x, y)))

    def quadratic_bezier_to(self, cx: float, cy: float, x: float, y: float) -> None:
        self._commands.append(PathCommand("Q", (cx, cy, x, y)))

    def arc_to(
        self,
        rx: float,
        ry: float,
        rotation: float,
        large_arc: int,
        sweep: int,
        x: float,
        y: float,
    ) -> None:
        self._commands.append(PathCommand("A", (rx, ry, rotation, large_arc, sweep, x, y)))

    def close_path(self) -> None:
        self._commands.append(PathCommand("Z"))


def rect_commands(rect: Rect) -> tuple[PathCommand, ...]:
    maker = PathMaker()
    maker.move_to(rect.x1, rect.y1)
    maker.line_to(rect.x1, rect.y2)
    maker.line_to(rect.x2, rect.y2)
    maker.line_to(rect.x2, rect.y1)
    maker.close_path()
    return maker.commands


def circle_commands(circle: Circle) -> tuple[PathCommand, ...]:
    # Two half-circle arcs; a single arc cannot close on its start point.
    maker = PathMaker()
    maker.move_to(circle.cx - circle.r, circle.cy)
    maker.arc_to(circle.r, circle.r, 0, 1, 0, circle.cx + circle.r, circle.cy)
    maker.arc_to(circle.r, circle.r, 0, 1, 0, circle.cx - circle.r, circle.cy)
    maker.close_path()
    return maker.commands


def ellipse_commands(ellipse: Ellipse) -> tuple[PathCommand, ...]:
    cy = (ellipse.y1 + ellipse.y2) / 2
    rx = abs(ellipse.x1 - ellipse.x2) / 2
    ry = abs(ellipse.y1 - ellipse.y2) / 2
    maker = PathMaker()
    maker.move_to(ellipse.x1, cy)
    maker.arc_to(rx, ry, 0, 1, 0, ellipse.x2, cy)
    maker.arc_to(rx, ry, 0, 1, 0, ellipse.x1, cy)
    maker.close_path()
    return maker.commands


def line_commands(line: Line) -> tuple[PathCommand, ...]:
    maker = PathMaker()
    maker.move_to(line.x1, line.y1)
    maker.line_to(line.x2, line.y2)
    return maker.commands


def polygon_commands(polygon: Polygon) -> tuple[PathCommand, ...]:
    maker = PathMaker()
    first = polygon.points[0] if polygon.points else Point(0.0, 0.0)
    maker.move_to(first.x, first.y)
    for point in polygon.points[1:]:
        maker.line_to(point.x, point.y)
    maker.close_path()
    return maker.commands


def element_path_commands(element: ShapeElement) -> tuple[PathCommand, ...]:
    if isinstance(element, Rect):
        return rect_commands(element)
    if isinstance(element, Circle):
        return circle_commands(element)
    if isinstance(element, Ellipse):
        return ellipse_commands(element)
    if isinstance(element, Line):
        return line_commands(element)
    if isinstance(element, Polygon):
        return polygon_commands(element)
    if isinstance(element, Path):
        return element.cmds
    raise UnsupportedElementError(f"no path lowering for element: {type(element).__name__}")


def _xy(args: Sequence[float], i: int) -> str:
    return f"{to_svg_number(args[i])},{to_svg_number(-args[i + 1])}"


# Y arguments are negated here and nowhere else.
_PATH_TOKENS: dict[str, Callable[[Sequence[float]], str]] = {
    "M": lambda a: f"M {_xy(a, 0)}",
    "L": lambda a: f"L {_xy(a, 0)}",
    "C": lambda a: f"C {_xy(a, 0)},{_xy(a, 2)},{_xy(a, 4)}",
    "Q": lambda a: f"Q {_xy(a, 0)},{_xy(a, 2)}",
    "A": lambda a: "A " + ",".join(to_svg_number(v) for v in a[:5]) + f",{_xy(a, 5)}",
    "Z": lambda a: "Z",
}


def render_svg_path(commands: Sequence[PathCommand]) -> str:
    tokens: list[str] = []
    for command in commands:
        formatter = _PATH_TOKENS.get(command.cmd)
        if formatter is None:
            raise PathCommandError(f"unknown path command: {command.cmd}")
        if len(command.args) != PATH_COMMAND_ARITY[command.cmd]:
            raise PathCommandError(
                f"path command `{command.cmd}` takes {PATH_COMMAND_ARITY[command.cmd]} args, got {len(command.args)}"
            )
        tokens.append(formatter(command.args))
    return " ".join(tokens)
