"""콜라주 세션 — 설정 스냅샷·이미지 슬롯·드래그를 묶고 변경 시 다시 그린다.

설정은 세션만 변경한다. 변경마다 새 스냅샷과 버전 번호가 생기고,
구독자에게 알린 뒤 동기적으로 전체 프레임을 다시 렌더링한다.
"""

import logging
from pathlib import Path
from typing import Callable

from PIL import Image

from content.collage import CollageConfiguration, Layer
from content.images import DecodedImage, ImageResource, ImageSlot
from content.transform import MIN_SCALE, MAX_SCALE, Transform
from errors import DecodeFailure, SurfaceUnavailable
from interaction.drag import DragController, PointerEvent
from interaction.hit_test import is_inside_primary_layer
from interaction.mapper import Bounds
from renderer.export import export_as_file
from renderer.geometry import Point
from renderer.layers import CollageCompositor

logger = logging.getLogger(__name__)

FrameListener = Callable[[Image.Image, int], None]


class CollageSession:
    """대화형 콜라주 편집 세션."""

    def __init__(
        self,
        config: CollageConfiguration | None = None,
        compositor: CollageCompositor | None = None,
        min_scale: float = MIN_SCALE,
        max_scale: float = MAX_SCALE,
        filename_prefix: str = "collage",
        on_decode_error: Callable[[DecodeFailure], None] | None = None,
    ):
        self._config = config or CollageConfiguration()
        self._version = 0
        self._compositor = compositor or CollageCompositor(min_scale=min_scale, max_scale=max_scale)
        self._min_scale = min_scale
        self._max_scale = max_scale
        self._filename_prefix = filename_prefix
        self._listeners: list[FrameListener] = []
        self._frame: Image.Image | None = None

        self._primary = ImageSlot("primary", on_change=self.redraw, on_error=on_decode_error)
        self._secondary = ImageSlot("secondary", on_change=self.redraw, on_error=on_decode_error)
        self._drag = DragController(self._hit_primary)

    @classmethod
    def from_config(cls, settings: dict) -> "CollageSession":
        """load_config() 결과로 세션을 만든다."""
        font_dir = Path(settings["fonts"]["directory"])
        if not font_dir.is_absolute():
            font_dir = Path(__file__).parent / font_dir
        min_scale = settings["transform"]["min_scale"]
        max_scale = settings["transform"]["max_scale"]
        return cls(
            config=CollageConfiguration.from_settings(settings["collage"]),
            compositor=CollageCompositor(font_dir=font_dir, min_scale=min_scale, max_scale=max_scale),
            min_scale=min_scale,
            max_scale=max_scale,
            filename_prefix=settings["export"]["filename_prefix"],
        )

    # --- 상태 ---

    @property
    def config(self) -> CollageConfiguration:
        return self._config

    @property
    def version(self) -> int:
        return self._version

    @property
    def primary_image(self) -> DecodedImage | None:
        return self._primary.current

    @property
    def secondary_image(self) -> DecodedImage | None:
        return self._secondary.current

    @property
    def drag(self) -> DragController:
        return self._drag

    @property
    def mounted(self) -> bool:
        return self._drag.bounds is not None

    @property
    def frame(self) -> Image.Image:
        """마지막으로 그린 프레임. 아직 없으면 SurfaceUnavailable."""
        if self._frame is None:
            raise SurfaceUnavailable("렌더링된 프레임이 없습니다")
        return self._frame

    def subscribe(self, listener: FrameListener) -> None:
        """새 프레임이 그려질 때마다 listener(frame, version)를 호출한다."""
        self._listeners.append(listener)

    # --- 표면 ---

    def mount(self, bounds: Bounds) -> None:
        """표시 표면을 연결하고 첫 프레임을 그린다."""
        self._drag.bounds = bounds
        self.redraw()

    def resize(self, bounds: Bounds) -> None:
        """표시 크기만 바뀐다. 캔버스 해상도는 고정이므로 다시 그리지 않는다."""
        self._drag.bounds = bounds

    def unmount(self) -> None:
        self._drag.pointer_leave()
        self._drag.bounds = None

    # --- 설정 변경 ---

    def _commit(self, config: CollageConfiguration) -> None:
        self._config = config
        self._version += 1
        self.redraw()

    def set_text(self, name: str | None = None, furigana: str | None = None) -> None:
        changes = {}
        if name is not None:
            changes["name"] = name
        if furigana is not None:
            changes["furigana"] = furigana
        self._commit(self._config.updated(**changes))

    def set_colors(self, bg_color1: str | None = None, bg_color2: str | None = None) -> None:
        changes = {}
        if bg_color1 is not None:
            changes["bg_color1"] = bg_color1
        if bg_color2 is not None:
            changes["bg_color2"] = bg_color2
        self._commit(self._config.updated(**changes))

    def set_transform(self, layer: Layer, **fields) -> None:
        """레이어 변환의 일부 필드(x, y, scale, rotation)를 바꾼다."""
        transform = self._config.transform_of(layer).replace(**fields)
        self._commit(self._config.with_transform(layer, transform))

    def reset_transform(self, layer: Layer) -> None:
        self._commit(self._config.with_transform(layer, Transform.identity()))

    # --- 이미지 ---

    def _slot(self, layer: Layer) -> ImageSlot:
        return self._primary if layer is Layer.PRIMARY else self._secondary

    async def load_image(self, layer: Layer, resource: ImageResource) -> DecodedImage | None:
        """새 이미지를 선택한다. 해당 레이어의 변환은 초기화된다."""
        slot = self._slot(layer)
        if layer is Layer.PRIMARY:
            self._drag.pointer_up()
        # 디코딩이 끝날 때까지 레이어 없음
        slot.detach()
        self._commit(self._config.with_transform(layer, Transform.identity()))
        return await slot.load(resource)

    def clear_image(self, layer: Layer) -> None:
        if layer is Layer.PRIMARY:
            self._drag.pointer_up()
        self._slot(layer).clear()

    # --- 포인터 ---

    def _hit_primary(self, point: Point) -> bool:
        img = self._primary.current
        if img is None:
            return False
        transform = self._config.primary_transform.sanitized(self._min_scale, self._max_scale)
        return is_inside_primary_layer(point, transform, img.width, img.height)

    def pointer_down(self, event: PointerEvent | None) -> bool:
        if not self.mounted:
            return False
        return self._drag.pointer_down(event, self._config.primary_transform.offset)

    def pointer_move(self, event: PointerEvent | None) -> None:
        if not self.mounted:
            return
        moved = self._drag.pointer_move(event)
        if moved is not None:
            self.set_transform(Layer.PRIMARY, x=moved[0], y=moved[1])

    def pointer_up(self) -> None:
        self._drag.pointer_up()

    def pointer_leave(self) -> None:
        self._drag.pointer_leave()

    # --- 렌더링 ---

    def redraw(self) -> Image.Image | None:
        """현재 설정으로 전체 프레임을 다시 그린다.

        표면이 없으면 건너뛰고, 렌더링이 실패하면 이전 프레임을 유지한다.
        """
        if not self.mounted:
            logger.debug("표면 없음, 렌더링 생략 (v%d)", self._version)
            return None
        try:
            frame = self._compositor.render(self._config, self._primary.current, self._secondary.current)
        except ValueError as e:
            logger.error("렌더링 실패, 이전 프레임 유지 (v%d): %s", self._version, e)
            return None

        self._frame = frame
        for listener in self._listeners:
            listener(frame, self._version)
        return frame

    def export(self) -> tuple[str, bytes]:
        """(파일 이름, PNG 바이트). 아직 그린 프레임이 없으면 SurfaceUnavailable."""
        return export_as_file(self.frame, self._config.name, self._filename_prefix)
