"""레이어 합성 모듈 — 배경 + 띠 + 패턴 + 인물 + 텍스트.

매 호출마다 빈 캔버스에서 처음부터 다시 그린다. 입력 설정과 이미지는 변경하지 않는다.
"""

import logging

from PIL import Image

from content.collage import CollageConfiguration
from content.images import DecodedImage
from content.transform import MIN_SCALE, MAX_SCALE
from renderer import effects, layout
from renderer.canvas import Canvas, WIDTH, parse_color
from renderer.text import get_font, render_outlined_text

logger = logging.getLogger(__name__)

# 텍스트 스타일: (글꼴 스타일, 크기, 외곽선 lineWidth, 채움색, 기준선 y)
FURIGANA_STYLE = ("bold", 40, 6, "#555555", layout.FURIGANA_Y)
NAME_STYLE = ("extrabold", 120, 15, "#333333", layout.NAME_Y)
STROKE_COLOR = "#ffffff"


class CollageCompositor:
    """설정과 두 이미지를 받아 900x1200 콜라주 프레임을 생성한다."""

    def __init__(self, font_dir=None, min_scale: float = MIN_SCALE, max_scale: float = MAX_SCALE):
        self._canvas = Canvas()
        self._font_dir = font_dir
        self._min_scale = min_scale
        self._max_scale = max_scale

    def render(
        self,
        config: CollageConfiguration,
        primary: DecodedImage | None = None,
        secondary: DecodedImage | None = None,
    ) -> Image.Image:
        """콜라주를 합성하여 RGBA 이미지를 반환한다.

        Args:
            config: 색·텍스트·레이어 변환 스냅샷
            primary: 인물 이미지 (None이면 인물 레이어 생략)
            secondary: 패턴 이미지 (None이면 패턴 레이어 생략)

        Returns:
            900x1200 RGBA 이미지
        """
        logger.debug("렌더링: primary=%s, secondary=%s", primary, secondary)

        # 배경 1
        self._canvas.clear(config.bg_color1)

        # 배경 2 (대각선 띠)
        band_mask = effects.polygon_mask(layout.band_polygon())
        self._canvas.blend(Image.new("RGBA", self._canvas.size, parse_color(config.bg_color2)), band_mask)

        # 패턴 (띠 영역으로 클립)
        if secondary is not None:
            self._draw_pattern(secondary, config, band_mask)

        # 인물
        if primary is not None:
            self._draw_character(primary, config)

        # 텍스트
        self._draw_label(config.furigana, FURIGANA_STYLE)
        self._draw_label(config.name, NAME_STYLE)

        return self._canvas.snapshot()

    def _sanitize(self, transform):
        return transform.sanitized(self._min_scale, self._max_scale)

    def _draw_pattern(self, secondary: DecodedImage, config: CollageConfiguration, clip: Image.Image) -> None:
        transform = self._sanitize(config.secondary_transform)
        matrix = layout.secondary_matrix(secondary.image, transform)
        placed = effects.place(secondary.image, matrix)
        merged = effects.apply_effects(self._canvas.image, placed)
        # 띠 밖은 원래 픽셀 유지
        self._canvas.blend(merged, clip)

    def _draw_character(self, primary: DecodedImage, config: CollageConfiguration) -> None:
        transform = self._sanitize(config.primary_transform)
        matrix = layout.primary_matrix(primary.image, transform)
        self._canvas.paste(effects.drop_shadow(primary.image, matrix))
        self._canvas.paste(effects.place(primary.image, matrix))

    def _draw_label(self, text: str, style: tuple) -> None:
        if not text:
            return
        font_style, size, line_width, fill, y = style
        font = get_font(size, font_style, self._font_dir)
        img, (dx, dy) = render_outlined_text(
            text, font, fill=fill, stroke_fill=STROKE_COLOR, line_width=line_width,
        )
        self._canvas.paste(img, (WIDTH // 2 + dx, y + dy))


def render_to_raster(
    config: CollageConfiguration,
    primary: DecodedImage | None = None,
    secondary: DecodedImage | None = None,
) -> Image.Image:
    """기본 합성기로 한 프레임을 렌더링한다."""
    return CollageCompositor().render(config, primary, secondary)
