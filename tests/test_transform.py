"""
Tests for the Transform model and configuration snapshots.
"""
import math

from content.collage import CollageConfiguration, Layer
from content.transform import Transform


class TestTransform:

    def test_identity(self):
        t = Transform.identity()
        assert (t.x, t.y, t.scale, t.rotation) == (0.0, 0.0, 1.0, 0.0)

    def test_with_offset_keeps_scale_and_rotation(self):
        t = Transform(scale=2.0, rotation=30).with_offset(5, -7)
        assert t.offset == (5, -7)
        assert t.scale == 2.0
        assert t.rotation == 30

    def test_sanitized_clamps_scale(self):
        assert Transform(scale=0.0).sanitized().scale == 0.1
        assert Transform(scale=-4).sanitized().scale == 0.1
        assert Transform(scale=10).sanitized().scale == 3.0
        assert Transform(scale=1.5).sanitized().scale == 1.5

    def test_sanitized_custom_limits(self):
        assert Transform(scale=10).sanitized(0.5, 5.0).scale == 5.0

    def test_sanitized_non_finite(self):
        t = Transform(x=math.nan, y=math.inf, scale=math.nan, rotation=-math.inf).sanitized()
        assert t == Transform.identity()

    def test_sanitized_wraps_rotation(self):
        assert Transform(rotation=370).sanitized().rotation == 10
        assert Transform(rotation=-190).sanitized().rotation == 170
        assert Transform(rotation=180).sanitized().rotation == 180
        assert Transform(rotation=-180).sanitized().rotation == 180

    def test_frozen(self):
        t = Transform()
        try:
            t.x = 3
        except AttributeError:
            pass
        else:
            raise AssertionError("Transform must be immutable")


class TestCollageConfiguration:

    def test_defaults(self):
        c = CollageConfiguration()
        assert c.name == "なまえ"
        assert c.furigana == "フリガナ"
        assert c.bg_color1 == "#ffffff"
        assert c.bg_color2 == "#fecdd3"
        assert c.primary_transform == Transform.identity()
        assert c.secondary_transform == Transform.identity()

    def test_updated_returns_new_snapshot(self):
        c = CollageConfiguration()
        d = c.updated(name="たろう")
        assert d.name == "たろう"
        assert c.name == "なまえ"

    def test_with_transform_targets_one_layer(self):
        c = CollageConfiguration().with_transform(Layer.SECONDARY, Transform(x=3))
        assert c.transform_of(Layer.SECONDARY).x == 3
        assert c.transform_of(Layer.PRIMARY) == Transform.identity()

    def test_from_settings(self):
        c = CollageConfiguration.from_settings({"name": "A", "bg_color2": "#000000"})
        assert c.name == "A"
        assert c.bg_color2 == "#000000"
        assert c.furigana == "フリガナ"
