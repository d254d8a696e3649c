def format_score(num: int) -> str:
    """
    Abbreviate a buzz total for display.

    Examples:
        999 -> "999"
        12_345 -> "12.345k"
        1_500_000 -> "1.500M"
    """
    if num >= 1_000_000_000:
        return f"{num / 1_000_000_000:.3f}B"
    if num >= 1_000_000:
        return f"{num / 1_000_000:.3f}M"
    if num >= 1_000:
        return f"{num / 1_000:.3f}k"
    return str(num)
