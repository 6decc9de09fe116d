"""텍스트 렌더링 모듈 — M PLUS Rounded 1c로 흰 외곽선이 있는 라벨을 그린다.

캔버스 strokeText → fillText 순서와 같이 외곽선을 먼저 그리고 그 위에 글자를 채운다.
"""

import logging
import math
import os
import sys
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

# 번들 폰트 경로
_FONT_DIR = Path(__file__).parent.parent / "assets" / "fonts"
_FONTS = {
    "bold": "MPLUSRounded1c-Bold.ttf",
    "extrabold": "MPLUSRounded1c-ExtraBold.ttf",
}


def _find_fallback(bold: bool = True) -> str:
    """OS에 맞는 CJK 폴백 폰트 경로를 반환한다."""
    if sys.platform == "win32":
        candidates = ["C:/Windows/Fonts/meiryob.ttc" if bold else "C:/Windows/Fonts/meiryo.ttc",
                      "C:/Windows/Fonts/YuGothB.ttc"]
    elif sys.platform == "darwin":
        candidates = ["/System/Library/Fonts/ヒラギノ丸ゴ ProN W4.ttc",
                      "/System/Library/Fonts/Hiragino Sans GB.ttc"]
    else:
        candidates = [
            "/usr/share/fonts/truetype/noto/NotoSansCJK-Bold.ttc" if bold else "/usr/share/fonts/truetype/noto/NotoSansCJK-Regular.ttc",
            "/usr/share/fonts/opentype/noto/NotoSansCJK-Bold.ttc" if bold else "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf" if bold else "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        ]
    for path in candidates:
        if os.path.exists(path):
            return path
    return ""


_FALLBACK_FONT = _find_fallback()

# 폰트 캐시
_font_cache: dict[tuple[str, int], ImageFont.FreeTypeFont] = {}


def get_font(size: int, style: str = "bold", font_dir: Path | None = None) -> ImageFont.FreeTypeFont:
    """폰트를 로드한다 (캐싱). 번들 → OS 폴백 → Pillow 기본 폰트 순."""
    bundled = (font_dir or _FONT_DIR) / _FONTS.get(style, _FONTS["bold"])
    path = str(bundled) if bundled.exists() else _FALLBACK_FONT

    key = (path, size)
    if key not in _font_cache:
        if path and os.path.exists(path):
            _font_cache[key] = ImageFont.truetype(path, size)
        else:
            logger.warning("폰트 없음, 기본 폰트 사용 (size=%d)", size)
            _font_cache[key] = ImageFont.load_default(size)
    return _font_cache[key]


def stroke_width_for(line_width: float) -> int:
    """캔버스 lineWidth(선 중심 기준 전체 폭)를 Pillow stroke_width로 바꾼다."""
    return math.ceil(line_width / 2)


def render_outlined_text(
    text: str,
    font: ImageFont.FreeTypeFont,
    fill: tuple | str = (51, 51, 51, 255),
    stroke_fill: tuple | str = (255, 255, 255, 255),
    line_width: float = 6,
) -> tuple[Image.Image, tuple[int, int]]:
    """텍스트를 투명 배경의 RGBA 이미지로 렌더링한다.

    Returns:
        (이미지, (dx, dy)). dx, dy는 기준점(가로·세로 중앙)에서 이미지 좌상단까지의 오프셋
    """
    stroke = stroke_width_for(line_width)
    left, top, right, bottom = font.getbbox(text, stroke_width=stroke, anchor="mm")
    w = max(1, right - left)
    h = max(1, bottom - top)

    img = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.text(
        (-left, -top), text, font=font, fill=fill, anchor="mm",
        stroke_width=stroke, stroke_fill=stroke_fill,
    )
    return img, (left, top)
