"""Number formatting helpers for prompts and rendered character cards."""


def format_isk_short(value: float, signed: bool = False) -> str:
    """Format ISK values into b/m/k strings without scientific notation."""

    magnitude = abs(value)
    if magnitude >= 1_000_000_000:
        body = f"{magnitude / 1_000_000_000:.2f}b"
    elif magnitude >= 1_000_000:
        body = f"{magnitude / 1_000_000:.2f}m"
    elif magnitude >= 1_000:
        body = f"{magnitude / 1_000:.2f}k"
    else:
        body = f"{magnitude:.0f}"

    if signed:
        prefix = "+" if value >= 0 else "-"
    else:
        prefix = "-" if value < 0 else ""
    return f"{prefix}{body}"


def format_stat(value: float | int | None) -> str:
    """Render a stat value, "N/A" when absent; whole floats lose the ".0"."""
    if value is None:
        return "N/A"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
