import pytest

from imagechain import Color, ColorStop, InvalidParameterError


class TestColor:
    def test_channels_are_clamped_on_construction(self):
        color = Color(300, -20, 128, 999)
        assert color.rgba == (255, 0, 128, 255)

    def test_alpha_defaults_to_opaque(self):
        assert Color(1, 2, 3).alpha == 255

    def test_packed_value_puts_alpha_in_the_top_byte(self):
        assert Color(0x12, 0x34, 0x56, 0x78).packed == 0x78123456

    def test_from_packed_restores_all_channels(self):
        color = Color(10, 20, 30, 40)
        assert Color.from_packed(color.packed) == color

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("#ff8000", Color(255, 128, 0)),
            ("00ff0080", Color(0, 255, 0, 128)),
        ],
    )
    def test_from_hex(self, text, expected):
        assert Color.from_hex(text) == expected

    @pytest.mark.parametrize("text", ["#fff", "#gg0000", "12345z"])
    def test_from_hex_rejects_malformed(self, text):
        with pytest.raises(InvalidParameterError):
            Color.from_hex(text)


class TestColorStop:
    @pytest.mark.parametrize("position, expected", [(-0.5, 0.0), (0.25, 0.25), (1.7, 1.0)])
    def test_position_is_clamped(self, position, expected):
        assert ColorStop(Color(0, 0, 0), position).position == expected

    def test_of_builds_color_from_channels(self):
        stop = ColorStop.of(1, 2, 3, 0.5, alpha=4)
        assert stop.color == Color(1, 2, 3, 4)
        assert stop.position == 0.5
