"""
NOI Calculations

Net operating income records, annualisation, and the per-unit NOI identity:

    monthly property NOI = $/acre/mo * acres + $/sf/mo * building sf

The user enters the monthly total and locks one of the two per-unit rates;
the other rate is solved from the identity.
"""

from dataclasses import dataclass
from typing import Dict

from app.calculations.formatting import format_number, parse_formatted_number

MONTHS_PER_YEAR = 12

LOCKED_RATES = ("acre", "sqft")


@dataclass
class PropertyData:
    """Property inputs used by the calculator."""

    seller_asking_price: float = 0.0
    property_size: float = 0.0  # acres
    building_size: float = 0.0  # sq ft

    @classmethod
    def from_strings(
        cls,
        seller_asking_price: str = "",
        property_size: str = "",
        building_size: str = "",
    ) -> "PropertyData":
        return cls(
            seller_asking_price=parse_formatted_number(seller_asking_price),
            property_size=parse_formatted_number(property_size),
            building_size=parse_formatted_number(building_size),
        )


@dataclass
class NOIData:
    """Monthly NOI in total and per unit of land and building."""

    monthly_property_noi: float = 0.0
    monthly_acre_noi: float = 0.0
    monthly_sqft_noi: float = 0.0

    @classmethod
    def from_strings(
        cls,
        monthly_property_noi: str = "",
        monthly_acre_noi: str = "",
        monthly_sqft_noi: str = "",
    ) -> "NOIData":
        return cls(
            monthly_property_noi=parse_formatted_number(monthly_property_noi),
            monthly_acre_noi=parse_formatted_number(monthly_acre_noi),
            monthly_sqft_noi=parse_formatted_number(monthly_sqft_noi),
        )

    @property
    def annual_noi(self) -> float:
        return annual_noi(self.monthly_property_noi)


def annual_noi(monthly_noi: float) -> float:
    """Annualise a monthly NOI."""
    return monthly_noi * MONTHS_PER_YEAR


def sizes_ready(acres: float, sqft: float) -> bool:
    """Per-unit rates can only be solved once both sizes are positive."""
    return acres > 0 and sqft > 0


def _clamp(value: float) -> float:
    return max(0.0, value)


def reconcile_noi(
    monthly_total: float,
    locked: str,
    locked_value: float,
    acres: float,
    sqft: float,
) -> NOIData:
    """
    Solve the unlocked per-unit rate so the NOI identity holds.

    Negative inputs and a negative solved rate are clamped to 0. When either
    size is missing the unlocked rate is left at 0.

    Args:
        monthly_total: Monthly property NOI
        locked: Which rate the user entered, "acre" or "sqft"
        locked_value: The entered rate ($/acre/mo or $/sf/mo)
        acres: Property size in acres
        sqft: Building size in square feet

    Returns:
        NOIData with all three values

    Raises:
        ValueError: If `locked` is not "acre" or "sqft"
    """
    if locked not in LOCKED_RATES:
        raise ValueError(f"locked must be one of {LOCKED_RATES}, got {locked!r}")

    total = _clamp(monthly_total)
    value = _clamp(locked_value)

    if not sizes_ready(acres, sqft):
        if locked == "acre":
            return NOIData(total, value, 0.0)
        return NOIData(total, 0.0, value)

    if locked == "acre":
        sqft_rate = _clamp((total - value * acres) / sqft)
        return NOIData(total, value, sqft_rate)

    acre_rate = _clamp((total - value * sqft) / acres)
    return NOIData(total, acre_rate, value)


def monthly_noi_from_rates(
    acre_rate: float, sqft_rate: float, acres: float, sqft: float
) -> float:
    return acre_rate * acres + sqft_rate * sqft


def format_noi_data(noi: NOIData) -> Dict[str, str]:
    """Display strings for the NOI form fields."""
    return {
        "monthly_property_noi": format_number(noi.monthly_property_noi, 2),
        "monthly_acre_noi": format_number(noi.monthly_acre_noi, 2),
        "monthly_sqft_noi": format_number(noi.monthly_sqft_noi, 4),
    }
