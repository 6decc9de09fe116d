"""
Tests for PNG export helpers and the settings loader.
"""
import json
import logging
from io import BytesIO

from PIL import Image

from config import configure_logging, load_config
from renderer.export import encode_png, export_as_file, export_filename


class TestExport:

    def test_filename(self):
        assert export_filename("たろう") == "collage-たろう.png"

    def test_filename_unsafe_characters(self):
        assert export_filename("a/b:c") == "collage-a_b_c.png"

    def test_filename_empty_name(self):
        assert export_filename("   ") == "collage.png"

    def test_filename_prefix(self):
        assert export_filename("x", prefix="oshi") == "oshi-x.png"

    def test_png_is_lossless(self):
        img = Image.new("RGBA", (4, 4), (1, 2, 3, 4))
        decoded = Image.open(BytesIO(encode_png(img)))
        assert decoded.format == "PNG"
        assert decoded.convert("RGBA").tobytes() == img.tobytes()

    def test_export_as_file(self):
        name, data = export_as_file(Image.new("RGB", (2, 2)), "hana")
        assert name == "collage-hana.png"
        assert data[:4] == b"\x89PNG"


class TestConfig:

    def test_defaults_when_missing(self, tmp_path):
        config = load_config(tmp_path / "config.json")
        assert config["collage"]["bg_color2"] == "#fecdd3"
        assert config["transform"] == {"min_scale": 0.1, "max_scale": 3.0}

    def test_deep_merge(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"collage": {"name": "はな"}, "export": {"filename_prefix": "oshi"}}),
                        encoding="utf-8")
        config = load_config(path)
        assert config["collage"]["name"] == "はな"
        assert config["collage"]["furigana"] == "フリガナ"
        assert config["export"]["filename_prefix"] == "oshi"

    def test_configure_logging(self, tmp_path):
        configure_logging(load_config(tmp_path / "none.json"))
        assert logging.getLogger().level in (logging.INFO, logging.WARNING)
