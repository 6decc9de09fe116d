"""시각 효과 모듈 — 아핀 배치, 회색조·불투명도·곱하기 합성, 드롭 섀도우."""

from enum import Enum

from PIL import Image, ImageChops, ImageDraw, ImageFilter

from renderer.canvas import WIDTH, HEIGHT
from renderer.geometry import Affine


class VisualEffect(Enum):
    """패턴 레이어에 적용하는 효과. 선언 순서대로 적용한다."""
    GRAYSCALE = "grayscale"
    OPACITY = "opacity"
    MULTIPLY = "multiply"


# 패턴 레이어 효과 체인 (순서 고정)
PATTERN_EFFECTS = (VisualEffect.GRAYSCALE, VisualEffect.OPACITY, VisualEffect.MULTIPLY)
PATTERN_OPACITY = 0.5

# 인물 드롭 섀도우: rgba(0,0,0,0.2), blur 20, offset (5, 10)
SHADOW_OFFSET = (5, 10)
SHADOW_BLUR = 20
SHADOW_COLOR = (0, 0, 0, 51)


def place(img: Image.Image, matrix: Affine, size: tuple[int, int] = (WIDTH, HEIGHT)) -> Image.Image:
    """이미지 픽셀 → 캔버스 행렬로 이미지를 캔버스 크기 투명 레이어에 그린다."""
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img.transform(
        size,
        Image.Transform.AFFINE,
        data=matrix.pil_data(),
        resample=Image.Resampling.BILINEAR,
        fillcolor=(0, 0, 0, 0),
    )


def polygon_mask(polygon: list[tuple[float, float]], size: tuple[int, int] = (WIDTH, HEIGHT)) -> Image.Image:
    """다각형 내부가 255인 L 마스크 (클립 영역)."""
    mask = Image.new("L", size, 0)
    ImageDraw.Draw(mask).polygon(polygon, fill=255)
    return mask


def grayscale(layer: Image.Image) -> Image.Image:
    """알파는 유지하고 색만 회색조로 바꾼다."""
    gray = layer.convert("L").convert("RGB")
    gray.putalpha(layer.getchannel("A"))
    return gray


def with_opacity(layer: Image.Image, opacity: float) -> Image.Image:
    """알파 채널에 opacity를 곱한다."""
    alpha = layer.getchannel("A").point(lambda a: round(a * opacity))
    result = layer.copy()
    result.putalpha(alpha)
    return result


def multiply_onto(base: Image.Image, layer: Image.Image) -> Image.Image:
    """layer를 base 위에 곱하기 모드로 합성한다.

    결과 = base * (1 - a) + (base * layer) * a, a는 layer 알파.
    """
    multiplied = ImageChops.multiply(base.convert("RGB"), layer.convert("RGB")).convert("RGBA")
    multiplied.putalpha(base.getchannel("A"))
    return Image.composite(multiplied, base, layer.getchannel("A"))


def apply_effects(base: Image.Image, layer: Image.Image, effects=PATTERN_EFFECTS,
                  opacity: float = PATTERN_OPACITY) -> Image.Image:
    """effects를 순서대로 적용해 layer를 base에 합성한 결과를 반환한다.

    MULTIPLY가 없으면 일반 알파 합성(source-over)으로 섞는다.
    """
    for effect in effects:
        if effect is VisualEffect.GRAYSCALE:
            layer = grayscale(layer)
        elif effect is VisualEffect.OPACITY:
            layer = with_opacity(layer, opacity)
        elif effect is VisualEffect.MULTIPLY:
            return multiply_onto(base, layer)
    return Image.alpha_composite(base, layer)


def drop_shadow(img: Image.Image, matrix: Affine, offset=SHADOW_OFFSET,
                blur: float = SHADOW_BLUR, color=SHADOW_COLOR) -> Image.Image:
    """캔버스 크기의 그림자 레이어를 만든다.

    오프셋은 캔버스 좌표 기준이며 레이어 회전·배율과 무관하다.
    blur는 캔버스 shadowBlur 값이고 가우시안 반경은 그 절반이다.
    """
    shifted = Affine.identity().then_translate(*offset) @ matrix
    alpha = place(img, shifted).getchannel("A")
    if blur > 0:
        alpha = alpha.filter(ImageFilter.GaussianBlur(radius=blur / 2))
    r, g, b, a = color
    alpha = alpha.point(lambda v: round(v * a / 255))
    shadow = Image.new("RGBA", alpha.size, (r, g, b, 0))
    shadow.putalpha(alpha)
    return shadow
