LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """LIKE pattern matching `text` anywhere, with % and _ in it taken literally."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
