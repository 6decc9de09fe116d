"""2D 아핀 좌표계 모듈.

캔버스 좌표는 y축이 아래로 향한다. 회전 방향은 양의 각도가 시계 방향이다.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __iter__(self):
        return iter((self.x, self.y))

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Affine:
    """아핀 행렬 [[a, c, e], [b, d, f], [0, 0, 1]].

    ``then_*`` 메서드는 현재 좌표계 안에서 변환을 덧붙인다.
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "Affine":
        return cls()

    def __matmul__(self, other: "Affine") -> "Affine":
        return Affine(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def then_translate(self, tx: float, ty: float) -> "Affine":
        return self @ Affine(e=tx, f=ty)

    def then_rotate(self, degrees: float) -> "Affine":
        rad = math.radians(degrees)
        cos, sin = math.cos(rad), math.sin(rad)
        return self @ Affine(a=cos, b=sin, c=-sin, d=cos)

    def then_scale(self, sx: float, sy: float | None = None) -> "Affine":
        return self @ Affine(a=sx, d=sx if sy is None else sy)

    def apply(self, x: float, y: float) -> Point:
        return Point(self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

    def inverse(self) -> "Affine":
        det = self.a * self.d - self.b * self.c
        if det == 0:
            raise ValueError("역행렬이 없는 변환")
        a = self.d / det
        b = -self.b / det
        c = -self.c / det
        d = self.a / det
        return Affine(a=a, b=b, c=c, d=d, e=-(a * self.e + c * self.f), f=-(b * self.e + d * self.f))

    def pil_data(self) -> tuple[float, float, float, float, float, float]:
        """Image.transform(AFFINE)용 계수 (출력 → 입력 좌표 역변환)."""
        inv = self.inverse()
        return inv.a, inv.c, inv.e, inv.b, inv.d, inv.f

    def rect(self, x: float, y: float, w: float, h: float) -> list[tuple[float, float]]:
        """로컬 사각형의 네 꼭짓점을 캔버스 좌표 다각형으로 반환한다."""
        corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
        return [tuple(self.apply(px, py)) for px, py in corners]
