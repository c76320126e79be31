def format_currency(amount: float, symbol: str = "₹") -> str:
    """Format a float as currency string, e.g. '₹1,234.56'."""
    return f"{symbol}{amount:,.2f}"
