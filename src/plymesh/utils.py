import string

_HEX_DIGITS = frozenset(string.hexdigits)


def hex_to_rgba(hex_color: str) -> tuple[float, float, float, float]:
    """
    Convert a CSS-style hex color to RGBA channels in [0, 1].

    Accepts ``rgb``, ``rrggbb`` and ``rrggbbaa`` with or without a leading
    ``#``. Alpha defaults to 1.0.
    """
    digits = hex_color.strip().lstrip('#')
    if len(digits) == 3:
        digits = ''.join(char * 2 for char in digits)

    if len(digits) not in (6, 8) or not set(digits) <= _HEX_DIGITS:
        raise ValueError(f"Invalid hex color: '{hex_color}'")

    r = int(digits[0:2], 16) / 255
    g = int(digits[2:4], 16) / 255
    b = int(digits[4:6], 16) / 255
    a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return r, g, b, a
