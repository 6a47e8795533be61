"""Static commodity reference catalog."""

from __future__ import annotations

from commodity_tracker.core.models import CommodityCategory, CommodityId, TrackedItem

# Display labels for catalog categories
COMMODITY_CATEGORIES: dict[CommodityCategory, str] = {
    CommodityCategory.METALS: "Industrial Metals",
    CommodityCategory.ENERGY: "Energy",
    CommodityCategory.AGRICULTURE: "Agriculture",
    CommodityCategory.PRECIOUS_METALS: "Precious Metals",
    CommodityCategory.PLASTICS: "Plastics & Polymers",
}


def _item(
    id: str,
    name: str,
    category: CommodityCategory,
    base_price: float,
    unit: str,
    base_change: float,
    description: str,
    exchange: str,
) -> TrackedItem:
    return TrackedItem(
        id=id,
        name=name,
        category=category,
        base_price=base_price,
        unit=unit,
        base_change=base_change,
        description=description,
        exchange=exchange,
    )


COMMODITY_DATABASE: tuple[TrackedItem, ...] = (
    # Industrial metals
    _item("steel", "Steel", CommodityCategory.METALS, 2949.00, "CNY/ton", 0.31,
          "Hot-rolled steel coil", "Shanghai Futures Exchange"),
    _item("copper", "Copper", CommodityCategory.METALS, 4.8129, "USD/lb", -1.82,
          "High-grade copper cathode", "London Metal Exchange"),
    _item("aluminum", "Aluminum", CommodityCategory.METALS, 2453.40, "USD/ton", -1.04,
          "Primary aluminum ingot", "London Metal Exchange"),
    _item("pvc", "PVC", CommodityCategory.PLASTICS, 4687.00, "CNY/ton", 0.13,
          "Polyvinyl chloride resin", "Dalian Commodity Exchange"),
    _item("nickel", "Nickel", CommodityCategory.METALS, 16850.00, "USD/ton", 2.15,
          "Primary nickel", "London Metal Exchange"),
    _item("zinc", "Zinc", CommodityCategory.METALS, 2890.50, "USD/ton", -0.85,
          "Special high-grade zinc", "London Metal Exchange"),
    _item("lead", "Lead", CommodityCategory.METALS, 2156.00, "USD/ton", 1.25,
          "Refined lead", "London Metal Exchange"),
    _item("tin", "Tin", CommodityCategory.METALS, 29450.00, "USD/ton", -1.45,
          "High-grade tin", "London Metal Exchange"),
    # Energy
    _item("crude_oil", "Crude Oil", CommodityCategory.ENERGY, 78.45, "USD/barrel", 2.34,
          "WTI Crude Oil", "NYMEX"),
    _item("natural_gas", "Natural Gas", CommodityCategory.ENERGY, 2.85, "USD/MMBtu", -3.21,
          "Henry Hub Natural Gas", "NYMEX"),
    _item("heating_oil", "Heating Oil", CommodityCategory.ENERGY, 2.45, "USD/gallon", 1.87,
          "No. 2 Heating Oil", "NYMEX"),
    # Agriculture
    _item("wheat", "Wheat", CommodityCategory.AGRICULTURE, 6.25, "USD/bushel", -0.95,
          "Hard Red Winter Wheat", "CBOT"),
    _item("corn", "Corn", CommodityCategory.AGRICULTURE, 4.85, "USD/bushel", 1.45,
          "No. 2 Yellow Corn", "CBOT"),
    _item("soybeans", "Soybeans", CommodityCategory.AGRICULTURE, 12.75, "USD/bushel", -2.15,
          "No. 1 Yellow Soybeans", "CBOT"),
    # Precious metals
    _item("gold", "Gold", CommodityCategory.PRECIOUS_METALS, 2045.50, "USD/oz", 0.75,
          "100 oz Gold Bar", "COMEX"),
    _item("silver", "Silver", CommodityCategory.PRECIOUS_METALS, 24.85, "USD/oz", -1.25,
          "5000 oz Silver Bar", "COMEX"),
    _item("platinum", "Platinum", CommodityCategory.PRECIOUS_METALS, 1025.00, "USD/oz", 2.85,
          "50 oz Platinum Bar", "NYMEX"),
)

_BY_ID: dict[CommodityId, TrackedItem] = {c.id: c for c in COMMODITY_DATABASE}


def get_commodity(commodity_id: CommodityId) -> TrackedItem | None:
    """Return the catalog entry for an id, or None if unknown."""
    return _BY_ID.get(commodity_id)


def commodities_by_category(category: CommodityCategory | str) -> list[TrackedItem]:
    return [c for c in COMMODITY_DATABASE if c.category == category]


def search_commodities(query: str) -> list[TrackedItem]:
    """Case-insensitive substring match on name, description, or category."""
    needle = query.lower()
    return [
        c
        for c in COMMODITY_DATABASE
        if needle in c.name.lower()
        or needle in c.description.lower()
        or needle in c.category.value.lower()
    ]
