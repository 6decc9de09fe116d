"""이미지 디코딩 모듈 — 사용자 이미지 로드와 레이어별 슬롯 관리.

슬롯마다 세대 번호를 두어, 리소스가 교체되거나 해제된 뒤 늦게 도착한
디코딩 결과는 버린다.
"""

import asyncio
import logging
from io import BytesIO
from pathlib import Path
from typing import Callable

from PIL import Image, ImageOps, UnidentifiedImageError

from errors import DecodeFailure

logger = logging.getLogger(__name__)

# bytes(업로드 데이터) 또는 파일 경로
ImageResource = bytes | str | Path


class DecodedImage:
    """완전히 디코딩된 RGBA 비트맵."""

    def __init__(self, image: Image.Image, source: str = "<memory>"):
        self._image = image
        self._source = source

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def source(self) -> str:
        return self._source

    def release(self) -> None:
        """비트맵 메모리를 해제한다."""
        self._image.close()

    def __repr__(self) -> str:
        return f"DecodedImage({self._source!r}, {self.width}x{self.height})"


def _describe(resource: ImageResource) -> str:
    if isinstance(resource, (bytes, bytearray)):
        return f"<{len(resource)} bytes>"
    return str(resource)


def decode_image(resource: ImageResource) -> DecodedImage:
    """리소스를 RGBA 비트맵으로 디코딩한다.

    EXIF 방향 정보를 반영하고, 실패하면 DecodeFailure를 던진다.
    """
    source = _describe(resource)
    fp = BytesIO(resource) if isinstance(resource, (bytes, bytearray)) else resource
    try:
        with Image.open(fp) as raw:
            raw.load()
            img = ImageOps.exif_transpose(raw)
            img = img.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeFailure(source, str(e)) from e

    if img.width == 0 or img.height == 0:
        raise DecodeFailure(source, "빈 이미지")
    return DecodedImage(img, source)


class ImageSlot:
    """레이어 하나의 이미지 리소스와 디코딩 결과를 관리한다."""

    def __init__(
        self,
        label: str,
        on_change: Callable[[], None] | None = None,
        on_error: Callable[[DecodeFailure], None] | None = None,
    ):
        self._label = label
        self._on_change = on_change
        self._on_error = on_error
        self._generation = 0
        self._current: DecodedImage | None = None

    @property
    def label(self) -> str:
        return self._label

    @property
    def current(self) -> DecodedImage | None:
        return self._current

    @property
    def generation(self) -> int:
        return self._generation

    async def load(self, resource: ImageResource) -> DecodedImage | None:
        """리소스를 비동기로 디코딩하여 슬롯에 넣는다.

        더 새로운 load()/clear()가 먼저 일어났다면 결과를 버리고 None을 반환한다.
        """
        self._generation += 1
        generation = self._generation
        # 이전 비트맵은 새 선택과 함께 무효
        if self._current is not None:
            self._replace(None)
        try:
            decoded = await asyncio.to_thread(decode_image, resource)
        except DecodeFailure as e:
            if generation != self._generation:
                logger.debug("[%s] 오래된 디코딩 실패 무시: %s", self._label, e)
                return None
            logger.warning("[%s] %s", self._label, e)
            self._replace(None)
            if self._on_error is not None:
                self._on_error(e)
            return None

        if generation != self._generation:
            logger.debug("[%s] 오래된 디코딩 결과 폐기: %s", self._label, decoded)
            decoded.release()
            return None

        logger.info("[%s] 이미지 로드: %s", self._label, decoded)
        self._replace(decoded)
        return decoded

    def clear(self) -> None:
        """슬롯을 비운다. 진행 중인 디코딩 결과도 무효가 된다."""
        self._generation += 1
        self._replace(None)

    def detach(self) -> None:
        """알림 없이 현재 비트맵을 해제한다. 호출자가 직접 다시 그린다."""
        previous = self._current
        self._current = None
        if previous is not None:
            previous.release()

    def _replace(self, decoded: DecodedImage | None) -> None:
        previous = self._current
        self._current = decoded
        if previous is not None and previous is not decoded:
            previous.release()
        if self._on_change is not None:
            self._on_change()
