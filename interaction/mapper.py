"""좌표 변환 모듈 — 화면(표시) 좌표를 캔버스 내부 좌표로 바꾼다.

캔버스가 CSS 등으로 내부 해상도(900x1200)와 다른 크기로 표시될 때의 배율을 보정한다.
"""

from dataclasses import dataclass

from renderer.canvas import WIDTH, HEIGHT
from renderer.geometry import Point


@dataclass(frozen=True)
class Bounds:
    """화면 위에 표시된 캔버스 요소의 경계 (getBoundingClientRect 값)."""
    left: float
    top: float
    width: float
    height: float


def to_canvas_space(
    pointer_x: float,
    pointer_y: float,
    bounds: Bounds | None,
    canvas_width: int = WIDTH,
    canvas_height: int = HEIGHT,
) -> Point:
    """포인터 위치를 캔버스 좌표로 변환한다. 표면이 없으면 (0, 0)."""
    if bounds is None or bounds.width == 0 or bounds.height == 0:
        return Point(0.0, 0.0)
    scale_x = canvas_width / bounds.width
    scale_y = canvas_height / bounds.height
    return Point((pointer_x - bounds.left) * scale_x, (pointer_y - bounds.top) * scale_y)
