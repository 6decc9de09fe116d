"""900x1200 Pillow 캔버스 관리 모듈."""

from PIL import Image, ImageColor

# 캔버스 논리 해상도 (고정)
WIDTH = 900
HEIGHT = 1200


def parse_color(value: str | tuple) -> tuple[int, int, int, int]:
    """"#rrggbb" 같은 색 문자열을 RGBA 튜플로 변환한다."""
    if isinstance(value, tuple):
        return tuple(value) + (255,) * (4 - len(value))
    return ImageColor.getcolor(value, "RGBA")


class Canvas:
    """900x1200 RGBA 캔버스."""

    def __init__(self):
        self._image = Image.new("RGBA", (WIDTH, HEIGHT), (0, 0, 0, 0))

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def clear(self, color: str | tuple = (255, 255, 255, 255)) -> None:
        """캔버스를 지정 색상으로 초기화한다."""
        self._image = Image.new("RGBA", (WIDTH, HEIGHT), parse_color(color))

    def paste(self, layer: Image.Image, position: tuple = (0, 0)) -> None:
        """레이어를 캔버스 위에 합성한다 (알파 블렌딩)."""
        if layer.mode != "RGBA":
            layer = layer.convert("RGBA")
        self._image = Image.alpha_composite(self._image, _place(layer, position))

    def blend(self, layer: Image.Image, mask: Image.Image) -> None:
        """mask(L)를 불투명도로 삼아 layer를 캔버스에 섞는다."""
        self._image = Image.composite(layer.convert("RGBA"), self._image, mask)

    def snapshot(self) -> Image.Image:
        """현재 캔버스의 복사본을 반환한다."""
        return self._image.copy()


def _place(layer: Image.Image, position: tuple) -> Image.Image:
    """레이어를 캔버스 크기에 맞춰 지정 위치에 배치한다."""
    if layer.size == (WIDTH, HEIGHT) and position == (0, 0):
        return layer
    result = Image.new("RGBA", (WIDTH, HEIGHT), (0, 0, 0, 0))
    result.paste(layer, position)
    return result
