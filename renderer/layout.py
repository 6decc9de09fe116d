"""콜라주 레이아웃 모듈 — 고정 캔버스 위 각 요소의 기하 정보를 계산한다."""

from PIL import Image

from content.transform import Transform
from renderer.canvas import WIDTH, HEIGHT
from renderer.geometry import Affine

# 인물 레이어 여백 (사방)
PRIMARY_MARGIN = 80

# 대각선 띠: (-100, 850)으로 이동 후 -10° 회전한 좌표계 안의 사각형
BAND_ORIGIN = (-100, 850)
BAND_ANGLE = -10.0
BAND_RECT = (0, -200, 1400, 300)  # x, y, w, h
# 띠 좌표계 안에서 패턴 이미지의 기준점
PATTERN_ORIGIN = (700, -50)

# 텍스트 기준선 (가로는 캔버스 중앙)
FURIGANA_Y = 80
NAME_Y = 180


def contain_scale(img_w: int, img_h: int, box_w: float, box_h: float) -> float:
    """종횡비를 유지하며 상자 안에 모두 들어가는 배율."""
    return min(box_w / img_w, box_h / img_h)


def cover_scale(img_w: int, img_h: int, box_w: float, box_h: float) -> float:
    """종횡비를 유지하며 상자를 빈틈없이 덮는 배율."""
    return max(box_w / img_w, box_h / img_h)


def primary_base_scale(
    img_w: int, img_h: int,
    canvas_w: int = WIDTH, canvas_h: int = HEIGHT, margin: float = PRIMARY_MARGIN,
) -> float:
    """인물 이미지를 여백 안에 맞추는 기본 배율."""
    return contain_scale(img_w, img_h, canvas_w - margin * 2, canvas_h - margin * 2)


def band_frame() -> Affine:
    """대각선 띠의 로컬 좌표계."""
    return Affine.identity().then_translate(*BAND_ORIGIN).then_rotate(BAND_ANGLE)


def band_polygon() -> list[tuple[float, float]]:
    """띠 사각형을 캔버스 좌표 다각형으로 반환한다."""
    return band_frame().rect(*BAND_RECT)


def _centered_image(frame: Affine, img_w: int, img_h: int, scale: float) -> Affine:
    """frame 원점에 이미지를 scale 크기로 중앙 배치하는 이미지→캔버스 행렬."""
    return frame.then_translate(-img_w * scale / 2, -img_h * scale / 2).then_scale(scale)


def secondary_matrix(img: Image.Image, transform: Transform) -> Affine:
    """패턴 이미지 픽셀 → 캔버스 좌표 행렬."""
    _, _, band_w, band_h = BAND_RECT
    base = cover_scale(img.width, img.height, band_w, band_h)
    frame = (
        band_frame()
        .then_translate(*PATTERN_ORIGIN)
        .then_translate(transform.x, transform.y)
        .then_rotate(transform.rotation)
        .then_scale(transform.scale)
    )
    return _centered_image(frame, img.width, img.height, base)


def primary_matrix(img: Image.Image, transform: Transform) -> Affine:
    """인물 이미지 픽셀 → 캔버스 좌표 행렬."""
    base = primary_base_scale(img.width, img.height)
    frame = (
        Affine.identity()
        .then_translate(WIDTH / 2 + transform.x, HEIGHT / 2 + transform.y)
        .then_rotate(transform.rotation)
        .then_scale(transform.scale)
    )
    return _centered_image(frame, img.width, img.height, base)
