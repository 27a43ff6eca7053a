"""
Unit conversion across common measurement categories.

Every unit is defined relative to its category's base unit by a multiplier
(base units per unit). Temperature units additionally carry an offset and are
converted through Celsius.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from webtools.errors import UnknownUnitError


class Unit(BaseModel):
    """A unit of measurement."""

    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str
    multiplier: float = Field(..., gt=0)
    offset: float = 0.0


class UnitCategory(BaseModel):
    """A family of interconvertible units."""

    model_config = ConfigDict(frozen=True)

    name: str
    base_unit: str
    units: List[Unit]

    def find(self, unit: str) -> Unit:
        """Find a unit by symbol (exact) or name (case-insensitive)."""
        for candidate in self.units:
            if candidate.symbol == unit:
                return candidate
        wanted = unit.strip().lower()
        for candidate in self.units:
            if candidate.name.lower() == wanted or candidate.symbol.lower() == wanted:
                return candidate
        raise UnknownUnitError(f"Unknown {self.name.lower()} unit: {unit}")


def _units(*rows) -> List[Unit]:
    return [Unit(name=row[0], symbol=row[1], multiplier=row[2], offset=row[3] if len(row) > 3 else 0.0) for row in rows]


UNIT_CATEGORIES: Dict[str, UnitCategory] = {
    "length": UnitCategory(
        name="Length",
        base_unit="meter",
        units=_units(
            ("Millimeter", "mm", 0.001),
            ("Centimeter", "cm", 0.01),
            ("Meter", "m", 1),
            ("Kilometer", "km", 1000),
            ("Inch", "in", 0.0254),
            ("Foot", "ft", 0.3048),
            ("Yard", "yd", 0.9144),
            ("Mile", "mi", 1609.344),
            ("Nautical Mile", "nmi", 1852),
        ),
    ),
    "weight": UnitCategory(
        name="Weight",
        base_unit="gram",
        units=_units(
            ("Milligram", "mg", 0.001),
            ("Gram", "g", 1),
            ("Kilogram", "kg", 1000),
            ("Ounce", "oz", 28.3495),
            ("Pound", "lb", 453.592),
            ("Stone", "st", 6350.29),
            ("Ton (Metric)", "t", 1000000),
            ("Ton (US)", "ton", 907185),
        ),
    ),
    "temperature": UnitCategory(
        name="Temperature",
        base_unit="celsius",
        units=_units(
            ("Celsius", "°C", 1, 0),
            ("Fahrenheit", "°F", 1.8, 32),
            ("Kelvin", "K", 1, 273.15),
            ("Rankine", "°R", 1.8, 491.67),
        ),
    ),
    "area": UnitCategory(
        name="Area",
        base_unit="square meter",
        units=_units(
            ("Square Millimeter", "mm²", 0.000001),
            ("Square Centimeter", "cm²", 0.0001),
            ("Square Meter", "m²", 1),
            ("Square Kilometer", "km²", 1000000),
            ("Square Inch", "in²", 0.00064516),
            ("Square Foot", "ft²", 0.092903),
            ("Square Yard", "yd²", 0.836127),
            ("Acre", "ac", 4046.86),
            ("Hectare", "ha", 10000),
        ),
    ),
    "volume": UnitCategory(
        name="Volume",
        base_unit="liter",
        units=_units(
            ("Milliliter", "ml", 0.001),
            ("Liter", "l", 1),
            ("Cubic Meter", "m³", 1000),
            ("Fluid Ounce (US)", "fl oz", 0.0295735),
            ("Cup (US)", "cup", 0.236588),
            ("Pint (US)", "pt", 0.473176),
            ("Quart (US)", "qt", 0.946353),
            ("Gallon (US)", "gal", 3.78541),
            ("Gallon (Imperial)", "gal (UK)", 4.54609),
        ),
    ),
    "speed": UnitCategory(
        name="Speed",
        base_unit="meter per second",
        units=_units(
            ("Meter per Second", "m/s", 1),
            ("Kilometer per Hour", "km/h", 0.277778),
            ("Mile per Hour", "mph", 0.44704),
            ("Foot per Second", "ft/s", 0.3048),
            ("Knot", "kn", 0.514444),
            ("Mach", "Ma", 343),
        ),
    ),
    "time": UnitCategory(
        name="Time",
        base_unit="second",
        units=_units(
            ("Nanosecond", "ns", 0.000000001),
            ("Microsecond", "μs", 0.000001),
            ("Millisecond", "ms", 0.001),
            ("Second", "s", 1),
            ("Minute", "min", 60),
            ("Hour", "h", 3600),
            ("Day", "d", 86400),
            ("Week", "wk", 604800),
            ("Month", "mo", 2629746),
            ("Year", "yr", 31556952),
        ),
    ),
    "energy": UnitCategory(
        name="Energy",
        base_unit="joule",
        units=_units(
            ("Joule", "J", 1),
            ("Kilojoule", "kJ", 1000),
            ("Calorie", "cal", 4.184),
            ("Kilocalorie", "kcal", 4184),
            ("Watt Hour", "Wh", 3600),
            ("Kilowatt Hour", "kWh", 3600000),
            ("BTU", "BTU", 1055.06),
            ("Foot-pound", "ft⋅lb", 1.35582),
        ),
    ),
}


class ConversionRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    value: float
    category: str
    from_unit: str
    to_unit: Optional[str] = None


class ConversionResult(BaseModel):
    value: float
    category: str
    from_unit: str
    to_unit: str
    result: float


def get_category(category: str) -> UnitCategory:
    try:
        return UNIT_CATEGORIES[category.lower()]
    except KeyError:
        raise UnknownUnitError(f"Unknown unit category: {category}") from None


def convert(value: float, category: str, from_unit: str, to_unit: str) -> float:
    """
    Convert a value between two units of the same category.

    Raises:
        UnknownUnitError: If the category or either unit is unknown
    """
    unit_category = get_category(category)
    source = unit_category.find(from_unit)
    target = unit_category.find(to_unit)

    if category.lower() == "temperature":
        celsius = (value - source.offset) / source.multiplier
        return celsius * target.multiplier + target.offset

    return value * source.multiplier / target.multiplier


def convert_all(value: float, category: str, from_unit: str) -> Dict[str, float]:
    """Convert a value into every unit of its category, keyed by symbol."""
    unit_category = get_category(category)
    return {
        unit.symbol: convert(value, category, from_unit, unit.symbol)
        for unit in unit_category.units
    }


def run_conversion(request: ConversionRequest) -> ConversionResult:
    """Convert a request; a missing target unit means the category base unit."""
    unit_category = get_category(request.category)
    to_unit = request.to_unit or unit_category.find(unit_category.base_unit).symbol
    return ConversionResult(
        value=request.value,
        category=request.category.lower(),
        from_unit=request.from_unit,
        to_unit=to_unit,
        result=convert(request.value, request.category, request.from_unit, to_unit),
    )
