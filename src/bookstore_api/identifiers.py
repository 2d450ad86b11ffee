import time


def current_millis() -> int:
    return time.time_ns() // 1_000_000


def generate_internal_code(author: str, title: str, now_ms: int) -> str:
    """
    Builds the short internal code stored alongside a book.

    Two uppercased characters of the author, two of the title, then the last
    four digits of the millisecond clock (no zero padding).
    """
    return f"{author.strip()[:2].upper()}{title.strip()[:2].upper()}{now_ms % 10000}"


def generate_isbn(now_ms: int) -> str:
    return f"ISBN-{now_ms}"
