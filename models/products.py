"""
Static product registry used by the scenario generator and the cost model.
"""

from .inventory import ProductProfile

PRODUCTS: tuple[ProductProfile, ...] = (
    ProductProfile(
        product_id="protein-bar",
        name="Drink",
        icon="\U0001f964",
        cogs_per_unit=1.50,
        revenue_per_unit=3.00,
        annual_holding_rate=0.16,  # Higher due to expiry risk
        ordering_cost=25,
        demand_scale=40,
        base_order_quantity=500,
        base_initial_inventory=1120,
        max_inventory=3000,
        sku_variants=("Cola", "Lemonade", "Orange Juice", "Iced Tea"),
    ),
    ProductProfile(
        product_id="medicine",
        name="Medicine",
        icon="\U0001f48a",
        cogs_per_unit=45.00,
        revenue_per_unit=75.00,
        annual_holding_rate=0.12,  # Temperature-controlled storage
        ordering_cost=50,
        demand_scale=4,
        base_order_quantity=50,
        base_initial_inventory=112,
        max_inventory=400,
        sku_variants=("Regular", "Children's", "Night Time", "Extra Strength"),
    ),
    ProductProfile(
        product_id="sofa",
        name="Sofa",
        icon="\U0001f6cb️",
        cogs_per_unit=120.00,
        revenue_per_unit=200.00,
        annual_holding_rate=0.08,
        ordering_cost=100,
        demand_scale=1,
        base_order_quantity=10,
        base_initial_inventory=28,
        max_inventory=100,
        sku_variants=("Grey 2-seater", "Blue 3-seater", "Green Corner", "Beige 3-seater"),
    ),
)

PRODUCT_REGISTRY: dict[str, ProductProfile] = {p.product_id: p for p in PRODUCTS}


def get_product_by_id(product_id: str) -> ProductProfile | None:
    return PRODUCT_REGISTRY.get(product_id)
