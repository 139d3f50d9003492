from .text import strip_one_trailing_newline, utf16_len

__all__ = [
    "strip_one_trailing_newline",
    "utf16_len",
]
