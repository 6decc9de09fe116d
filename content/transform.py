"""레이어 변환 모델 — 중심 기준 오프셋·배율·회전각."""

import math
from dataclasses import dataclass, replace

# 배율 허용 범위 (UI 슬라이더와 동일)
MIN_SCALE = 0.1
MAX_SCALE = 3.0


@dataclass(frozen=True)
class Transform:
    """레이어 변환 값."""
    x: float = 0.0          # 자연 중심으로부터의 가로 오프셋
    y: float = 0.0          # 세로 오프셋
    scale: float = 1.0      # 균일 배율
    rotation: float = 0.0   # 회전각 (도)

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @property
    def offset(self) -> tuple[float, float]:
        return self.x, self.y

    def with_offset(self, x: float, y: float) -> "Transform":
        """오프셋만 바꾼 새 변환을 반환한다."""
        return replace(self, x=x, y=y)

    def replace(self, **fields) -> "Transform":
        return replace(self, **fields)

    def sanitized(self, min_scale: float = MIN_SCALE, max_scale: float = MAX_SCALE) -> "Transform":
        """렌더링·히트 테스트용으로 정규화한 변환을 반환한다.

        유한하지 않은 값은 항등값으로 바꾸고, 배율은 허용 범위로 자르며,
        회전각은 (-180, 180] 범위로 접는다.
        """
        x = self.x if math.isfinite(self.x) else 0.0
        y = self.y if math.isfinite(self.y) else 0.0
        scale = self.scale if math.isfinite(self.scale) else 1.0
        scale = min(max(scale, min_scale), max_scale)
        rotation = _normalize_degrees(self.rotation) if math.isfinite(self.rotation) else 0.0
        return Transform(x=x, y=y, scale=scale, rotation=rotation)


def _normalize_degrees(angle: float) -> float:
    """각도를 (-180, 180] 범위로 접는다."""
    angle = math.fmod(angle, 360.0)
    if angle > 180.0:
        angle -= 360.0
    elif angle <= -180.0:
        angle += 360.0
    return angle
