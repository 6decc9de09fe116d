"""콜라주 오류 분류."""


class CollageError(Exception):
    """콜라주 처리 중 발생하는 모든 오류의 기반 클래스."""


class DecodeFailure(CollageError):
    """이미지 리소스를 디코딩하지 못했다. 해당 레이어는 없는 것으로 취급한다."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"이미지 디코딩 실패: {source} ({reason})")
        self.source = source
        self.reason = reason


class SurfaceUnavailable(CollageError):
    """렌더링 표면이 아직 마운트되지 않았다."""
