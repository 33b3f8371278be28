from __future__ import annotations

import math
import re
from typing import Any

"""Cell normalization helpers (zip, phone, product line, quantity).

All functions are pure and stateless. Cell values arrive as str / int / float
(or None for an empty cell) exactly as the workbook reader produced them.
"""

__all__ = [
    "cell_text",
    "format_zip",
    "format_phone",
    "calculate_product",
    "parse_quantity",
]

# 数字は ASCII の 0-9 のみ (全角数字は数字として扱わない)
_NON_DIGIT = re.compile(r"[^0-9]")
_JP_COUNTRY_CODE = re.compile(r"\(\+81\)")
_PACK_SIZE = re.compile(r"(.*)\*([0-9]+)")
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def cell_text(value: Any) -> str:
    """Render a raw cell as text.

    None / NaN -> "", integral floats lose the ".0" (Excel stores 1234567 as
    1234567.0 when a column mixes blanks and numbers).
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def format_zip(raw: Any) -> str:
    """Format a 7-digit postal code as DDD-DDDD, otherwise return it untouched.

    >>> format_zip("1234567")
    '123-4567'
    >>> format_zip("〒123-4567")
    '123-4567'
    >>> format_zip("12345")
    '12345'
    """
    text = cell_text(raw)
    digits = _NON_DIGIT.sub("", text)
    if len(digits) == 7:
        return f"{digits[:3]}-{digits[3:]}"
    # 形式不明: 原文のまま
    return text


def format_phone(raw: Any) -> str:
    """Drop the literal "(+81)" marker, then every non-digit.

    >>> format_phone("(+81)901234567")
    '901234567'
    >>> format_phone("090-1234-5678")
    '09012345678'
    """
    text = _JP_COUNTRY_CODE.sub("", cell_text(raw))
    return _NON_DIGIT.sub("", text)


def calculate_product(name: str, quantity: int) -> str:
    """Build the product line for one order row.

    A name ending in ``*<n>`` carries a pack size; the quantity multiplies it.

    >>> calculate_product("Widget*6", 1)
    'Widget*6'
    >>> calculate_product("Widget*6", 2)
    'Widget*12'
    >>> calculate_product("Widget", 3)
    'Widget*3'
    >>> calculate_product("", 2)
    'Unknown*2'
    """
    if not name:
        return f"Unknown*{quantity}"
    match = _PACK_SIZE.fullmatch(name)
    if match is None:
        return f"{name}*{quantity}"
    if quantity == 1:
        return name
    base, pack_size = match.group(1), int(match.group(2))
    return f"{base}*{pack_size * quantity}"


def parse_quantity(raw: Any) -> int:
    """Parse the leading integer of a quantity cell; anything else is 0.

    >>> parse_quantity("3個")
    3
    >>> parse_quantity(2.0)
    2
    >>> parse_quantity("abc")
    0
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if math.isnan(raw) or math.isinf(raw):
            return 0
        return int(raw)  # 小数点以下は切り捨て
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return 0
    return int(match.group(1))
