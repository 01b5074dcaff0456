def format_amount(value: float) -> str:
    """Thousands separators and at most three decimals, trailing zeros dropped."""
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_ringgit(value: float) -> str:
    return f"RM {format_amount(value)}"


def or_placeholder(value: str, placeholder: str) -> str:
    return value if value else placeholder
