"""콜라주 설정 스냅샷 모듈."""

from dataclasses import dataclass, field, replace
from enum import Enum

from content.transform import Transform

DEFAULT_NAME = "なまえ"
DEFAULT_FURIGANA = "フリガナ"
DEFAULT_BG_COLOR1 = "#ffffff"
DEFAULT_BG_COLOR2 = "#fecdd3"  # 파스텔 핑크


class Layer(str, Enum):
    """변환 가능한 두 이미지 레이어."""
    PRIMARY = "primary"        # 인물 사진
    SECONDARY = "secondary"    # 띠 안의 패턴 이미지


@dataclass(frozen=True)
class CollageConfiguration:
    """콜라주 한 장을 그리는 데 필요한 설정 값.

    불변 스냅샷이다. 값을 바꿀 때는 ``updated()``로 새 스냅샷을 만든다.
    이미지 리소스 자체는 세션의 이미지 슬롯이 소유한다.
    """
    name: str = DEFAULT_NAME
    furigana: str = DEFAULT_FURIGANA
    bg_color1: str = DEFAULT_BG_COLOR1
    bg_color2: str = DEFAULT_BG_COLOR2
    primary_transform: Transform = field(default_factory=Transform.identity)
    secondary_transform: Transform = field(default_factory=Transform.identity)

    @classmethod
    def from_settings(cls, settings: dict) -> "CollageConfiguration":
        """``config.load_config()["collage"]`` 값으로 초기 스냅샷을 만든다."""
        return cls(
            name=settings.get("name", DEFAULT_NAME),
            furigana=settings.get("furigana", DEFAULT_FURIGANA),
            bg_color1=settings.get("bg_color1", DEFAULT_BG_COLOR1),
            bg_color2=settings.get("bg_color2", DEFAULT_BG_COLOR2),
        )

    def updated(self, **changes) -> "CollageConfiguration":
        return replace(self, **changes)

    def transform_of(self, layer: Layer) -> Transform:
        if layer is Layer.PRIMARY:
            return self.primary_transform
        return self.secondary_transform

    def with_transform(self, layer: Layer, transform: Transform) -> "CollageConfiguration":
        """지정 레이어의 변환만 바꾼 새 스냅샷을 반환한다."""
        if layer is Layer.PRIMARY:
            return replace(self, primary_transform=transform)
        return replace(self, secondary_transform=transform)
