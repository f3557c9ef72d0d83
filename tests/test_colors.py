from coursegrid.colors import HIGH_CONTRAST_COLORS, color_for, djb2_hash


def test_palette_has_twenty_colors():
    assert len(HIGH_CONTRAST_COLORS) == 20
    assert HIGH_CONTRAST_COLORS[0] == "#FF6B6B"
    assert HIGH_CONTRAST_COLORS[-1] == "#F8B88B"


def test_hash_of_known_inputs():
    assert djb2_hash("") == 5381
    assert djb2_hash("a") == 5381 * 33 + ord("a")


def test_known_colors():
    assert color_for("") == "#4ECDC4"
    assert color_for("a") == "#87CEEB"


def test_same_name_same_color():
    assert color_for("Algebra") == color_for("Algebra")
    assert color_for("Algebra") in HIGH_CONTRAST_COLORS


def test_hash_wraps_and_stays_positive():
    value = djb2_hash("Linear Algebra and Analytic Geometry " * 20)
    assert 0 <= value <= 0x7FFFFFFF


def test_hash_uses_utf8_bytes():
    # "é" is two bytes in UTF-8
    expected = ((5381 * 33 + 0xC3) * 33 + 0xA9) & 0x7FFFFFFF
    assert djb2_hash("é") == expected
