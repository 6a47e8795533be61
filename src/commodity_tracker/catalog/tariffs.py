"""Static tariff schedule keyed by HS code."""

from __future__ import annotations

from datetime import date

from commodity_tracker.core.models import HSCode, TariffRate, TariffRecord

_EFFECTIVE = date(2024, 1, 1)

COUNTRY_NAMES: dict[str, str] = {
    "US": "United States",
    "CA": "Canada",
    "MX": "Mexico",
    "EU": "European Union",
    "CN": "China",
}


def _rates(us: float, ca: float, eu: float, cn: float) -> dict[str, TariffRate]:
    return {
        code: TariffRate(rate=rate, effective_date=_EFFECTIVE)
        for code, rate in (("US", us), ("CA", ca), ("EU", eu), ("CN", cn))
    }


_RECORDS: tuple[TariffRecord, ...] = (
    TariffRecord(
        hs_code="7326.90.8688",
        description="Other articles of iron or steel, forged",
        category="Iron & Steel Products",
        current_rates=_rates(us=25.0, ca=0.0, eu=6.5, cn=15.0),
        notes="Subject to Section 232 steel tariffs",
    ),
    TariffRecord(
        hs_code="8481.80.10.50",
        description="Taps, cocks, valves and similar appliances, of brass",
        category="Valves & Fittings",
        current_rates=_rates(us=0.0, ca=0.0, eu=2.7, cn=12.0),
        notes="Brass valves and fittings",
    ),
    TariffRecord(
        hs_code="8481.80.00",
        description="Other appliances for pipes, boiler shells, tanks, vats",
        category="Pipe Fittings",
        current_rates=_rates(us=0.0, ca=0.0, eu=1.7, cn=10.0),
        notes="General pipe fittings and appliances",
    ),
    TariffRecord(
        hs_code="7419.80.5010",
        description="Other articles of copper, cast, molded, stamped or forged",
        category="Copper Products",
        current_rates=_rates(us=0.0, ca=0.0, eu=4.0, cn=8.0),
        notes="Copper fittings and components",
    ),
    TariffRecord(
        hs_code="7419.99.50.10",
        description="Other articles of copper, other",
        category="Copper Products",
        current_rates=_rates(us=0.0, ca=0.0, eu=4.0, cn=8.0),
        notes="Miscellaneous copper articles",
    ),
    TariffRecord(
        hs_code="3926.90.99.90",
        description="Other articles of plastics and articles of other materials",
        category="Plastic Products",
        current_rates=_rates(us=5.3, ca=0.0, eu=6.5, cn=15.0),
        notes="Plastic fittings and components",
    ),
    TariffRecord(
        hs_code="3917.23.00",
        description="Tubes, pipes and hoses, rigid, of polymers of vinyl chloride",
        category="PVC Pipes",
        current_rates=_rates(us=5.3, ca=0.0, eu=6.5, cn=10.0),
        notes="PVC pipes and tubing",
    ),
)

TARIFF_DATABASE: dict[HSCode, TariffRecord] = {r.hs_code: r for r in _RECORDS}


def get_tariff(hs_code: HSCode) -> TariffRecord | None:
    return TARIFF_DATABASE.get(hs_code)


def tariffs_by_category(category: str) -> list[TariffRecord]:
    return [t for t in TARIFF_DATABASE.values() if t.category == category]


def search_tariffs(query: str) -> list[TariffRecord]:
    """Match HS code substring, or case-insensitive description/category substring."""
    needle = query.lower()
    return [
        t
        for t in TARIFF_DATABASE.values()
        if query in t.hs_code
        or needle in t.description.lower()
        or needle in t.category.lower()
    ]


def tariff_categories() -> list[str]:
    """Sorted unique tariff categories."""
    return sorted({t.category for t in TARIFF_DATABASE.values()})


def tariffs_by_country_rate(country: str, min_rate: float = 0.0) -> list[TariffRecord]:
    """Records where the jurisdiction has a rate at or above ``min_rate``."""
    results: list[TariffRecord] = []
    for t in TARIFF_DATABASE.values():
        entry = t.rate_for(country)
        if entry is not None and entry.rate >= min_rate:
            results.append(t)
    return results


def format_tariff_rate(rate: float) -> str:
    return f"{rate:.1f}%"


def country_name(code: str) -> str:
    """Full jurisdiction name, falling back to the code itself."""
    return COUNTRY_NAMES.get(code, code)
