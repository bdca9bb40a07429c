"""Display formatting for costs and inventory levels."""


def format_cost(cost: float) -> str:
    if cost >= 1000:
        return f"€{cost / 1000:.1f}k"
    if cost >= 100:
        return f"€{cost:.0f}"
    return f"€{cost:.2f}"


def format_inventory(inventory: float) -> str:
    if inventory >= 1000:
        return f"{inventory / 1000:.1f}k"
    return f"{inventory:.0f}"
