from __future__ import annotations

from .formatter import (
    format_price_list_json,
    format_round_price_json,
    print_price_list_table,
    print_round_price_table,
)

__all__ = [
    "format_price_list_json",
    "format_round_price_json",
    "print_price_list_table",
    "print_round_price_table",
]
