"""내보내기 모듈 — 완성된 프레임을 PNG 바이트로 인코딩한다."""

import logging
import re
from io import BytesIO

from PIL import Image

logger = logging.getLogger(__name__)

# 파일 이름에 쓸 수 없는 문자
_UNSAFE = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def export_filename(name: str, prefix: str = "collage") -> str:
    """다운로드 파일 이름 "collage-<이름>.png"를 만든다."""
    fragment = _UNSAFE.sub("_", name.strip())
    if not fragment:
        return f"{prefix}.png"
    return f"{prefix}-{fragment}.png"


def encode_png(raster: Image.Image) -> bytes:
    """무손실 PNG로 인코딩한다."""
    buf = BytesIO()
    raster.save(buf, format="PNG")
    return buf.getvalue()


def export_as_file(raster: Image.Image, name: str, prefix: str = "collage") -> tuple[str, bytes]:
    """(파일 이름, PNG 바이트)를 반환한다. 실제 저장은 호출 측이 맡는다."""
    filename = export_filename(name, prefix)
    data = encode_png(raster)
    logger.info("내보내기: %s (%d bytes)", filename, len(data))
    return filename, data
