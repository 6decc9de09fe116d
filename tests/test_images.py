"""
Tests for image decoding and per-layer image slots.

Covers stale decode completions, release of superseded bitmaps and
decode failure reporting.
"""
import asyncio
from io import BytesIO

import pytest
from PIL import Image

from content.images import DecodedImage, ImageSlot, decode_image
from errors import DecodeFailure

from conftest import encode


class TestDecodeImage:

    def test_decodes_bytes_to_rgba(self, portrait_png):
        decoded = decode_image(portrait_png)
        assert (decoded.width, decoded.height) == (200, 300)
        assert decoded.image.mode == "RGBA"

    def test_decodes_path(self, tmp_path, portrait_png):
        path = tmp_path / "face.png"
        path.write_bytes(portrait_png)
        assert decode_image(path).width == 200
        assert decode_image(str(path)).source == str(path)

    def test_jpeg(self):
        decoded = decode_image(encode(Image.new("RGB", (40, 30), (0, 128, 0)), "JPEG"))
        assert decoded.image.size == (40, 30)

    def test_exif_orientation_applied(self):
        img = Image.new("RGB", (40, 20), (0, 0, 0))
        exif = Image.Exif()
        exif[0x0112] = 6  # rotate 90° CW on display
        buf = BytesIO()
        img.save(buf, format="JPEG", exif=exif)
        decoded = decode_image(buf.getvalue())
        assert decoded.image.size == (20, 40)

    def test_corrupt_data(self):
        with pytest.raises(DecodeFailure) as info:
            decode_image(b"definitely not an image")
        assert "bytes" in info.value.source

    def test_missing_file(self, tmp_path):
        with pytest.raises(DecodeFailure):
            decode_image(tmp_path / "nope.png")


class TestImageSlot:

    def test_load_sets_current_and_notifies(self, portrait_png):
        changes = []
        slot = ImageSlot("primary", on_change=lambda: changes.append(1))
        decoded = asyncio.run(slot.load(portrait_png))
        assert slot.current is decoded
        assert changes == [1]

    def test_stale_completion_discarded(self, portrait_png, wide_png):
        slot = ImageSlot("primary")

        async def scenario():
            first = asyncio.create_task(slot.load(portrait_png))
            second = asyncio.create_task(slot.load(wide_png))
            return await asyncio.gather(first, second)

        first, second = asyncio.run(scenario())
        assert first is None
        assert second is slot.current
        assert slot.current.width == 400

    def test_clear_during_decode(self, portrait_png):
        slot = ImageSlot("primary")

        async def scenario():
            task = asyncio.create_task(slot.load(portrait_png))
            await asyncio.sleep(0)
            slot.clear()
            return await task

        assert asyncio.run(scenario()) is None
        assert slot.current is None

    def test_superseded_bitmap_released(self, monkeypatch, portrait_png, wide_png):
        released = []
        original = DecodedImage.release

        def spy(self):
            released.append(self)
            original(self)

        monkeypatch.setattr(DecodedImage, "release", spy)
        slot = ImageSlot("primary")
        first = asyncio.run(slot.load(portrait_png))
        asyncio.run(slot.load(wide_png))
        assert released == [first]

        second = slot.current
        slot.clear()
        assert released == [first, second]

    def test_previous_bitmap_dropped_while_decoding(self, portrait_png, wide_png):
        changes = []
        slot = ImageSlot("primary", on_change=lambda: changes.append(slot.current))
        first = asyncio.run(slot.load(portrait_png))

        async def scenario():
            task = asyncio.create_task(slot.load(wide_png))
            await asyncio.sleep(0)
            pending = slot.current
            await task
            return pending

        assert asyncio.run(scenario()) is None
        assert changes == [first, None, slot.current]
        assert slot.current.width == 400

    def test_detach_releases_without_notifying(self, portrait_png):
        changes = []
        slot = ImageSlot("primary", on_change=lambda: changes.append(1))
        asyncio.run(slot.load(portrait_png))
        slot.detach()
        assert slot.current is None
        assert changes == [1]

    def test_failure_reported_and_layer_absent(self, portrait_png):
        errors = []
        slot = ImageSlot("secondary", on_error=errors.append)
        asyncio.run(slot.load(portrait_png))
        assert asyncio.run(slot.load(b"garbage")) is None
        assert slot.current is None
        assert len(errors) == 1
        assert isinstance(errors[0], DecodeFailure)

    def test_generation_increments(self, portrait_png):
        slot = ImageSlot("primary")
        asyncio.run(slot.load(portrait_png))
        slot.clear()
        assert slot.generation == 2
