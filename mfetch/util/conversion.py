def pad_float(number: float = 0.0, round_int: bool = False) -> str:
    """
    Pad a float to two decimal places.
    """
    if isinstance(number, int) and round_int:
        return str(int(number))
    else:
        return f"{number:.2f}"


def float_to_pct(number: float = 0) -> str:
    """
    Convert a floating point number to its percent equivalent.
    """
    return f"{number:.2f}%"


def kb_to_gb(number: float) -> float:
    """
    Convert kilobytes (as reported by /proc/meminfo) to gigabytes, rounded
    half-to-even to two decimal places.
    """
    return round(number / 1024 / 1024, 2)


def clamp(number: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, number))
