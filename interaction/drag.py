"""드래그 제어 모듈 — 포인터 이벤트로 인물 레이어 오프셋을 옮긴다.

마우스와 터치를 하나의 포인터 위치로 통일한다. 동시에 하나의 드래그만 지원한다.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from interaction.mapper import Bounds, to_canvas_space
from renderer.canvas import WIDTH, HEIGHT
from renderer.geometry import Point

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class PointerEvent:
    """마우스 또는 첫 번째 터치 지점의 화면 좌표."""
    x: float
    y: float
    is_touch: bool = False

    @classmethod
    def from_mouse(cls, client_x: float, client_y: float) -> "PointerEvent":
        return cls(client_x, client_y, is_touch=False)

    @classmethod
    def from_touches(cls, touches: Sequence[tuple[float, float]]) -> "PointerEvent | None":
        """첫 번째 터치만 사용한다. 터치가 없으면 None."""
        if not touches:
            return None
        x, y = touches[0]
        return cls(x, y, is_touch=True)


@dataclass
class DragSession:
    """진행 중인 드래그 상태."""
    active: bool = False
    anchor_point: Point = Point(0.0, 0.0)
    anchor_offset: Point = Point(0.0, 0.0)


class DragController:
    """Idle/Dragging 상태 머신.

    Args:
        hit_test: 캔버스 좌표가 인물 레이어 안인지 판정하는 함수
        bounds: 표시 중인 캔버스 요소의 화면 경계 (마운트 전이면 None)
    """

    def __init__(
        self,
        hit_test: Callable[[Point], bool],
        bounds: Bounds | None = None,
        canvas_size: tuple[int, int] = (WIDTH, HEIGHT),
    ):
        self._hit_test = hit_test
        self.bounds = bounds
        self._canvas_size = canvas_size
        self._session = DragSession()
        self.hovering = False

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._session.active else DragState.IDLE

    @property
    def session(self) -> DragSession:
        return self._session

    def to_canvas(self, event: PointerEvent) -> Point:
        return to_canvas_space(event.x, event.y, self.bounds, *self._canvas_size)

    def pointer_down(self, event: PointerEvent | None, offset: tuple[float, float]) -> bool:
        """레이어 위에서 눌렸으면 드래그를 시작하고 True를 반환한다."""
        if event is None or self._session.active:
            return False
        point = self.to_canvas(event)
        if not self._hit_test(point):
            return False
        self._session = DragSession(active=True, anchor_point=point, anchor_offset=Point(*offset))
        logger.debug("드래그 시작: %s (offset=%s)", point, offset)
        return True

    def pointer_move(self, event: PointerEvent | None) -> tuple[float, float] | None:
        """드래그 중이면 새 오프셋을 반환한다. 대기 중이면 hover 상태만 갱신한다."""
        if event is None:
            return None
        point = self.to_canvas(event)
        if not self._session.active:
            # 터치에는 hover가 없다
            if not event.is_touch:
                self.hovering = self._hit_test(point)
            return None
        delta = point - self._session.anchor_point
        moved = self._session.anchor_offset + delta
        return moved.x, moved.y

    def pointer_up(self) -> None:
        if self._session.active:
            logger.debug("드래그 종료")
        self._session = DragSession()

    def pointer_leave(self) -> None:
        self.pointer_up()
