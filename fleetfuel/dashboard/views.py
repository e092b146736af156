"""Read-only view data for the terminal dashboard.

Nothing here mutates a truck; every value is derived from the snapshot passed in.
"""

from typing import Dict, List, Optional

import pandas as pd

from fleetfuel.config.constants import CHART_COLOR_LOW_FUEL, CHART_COLOR_NORMAL
from fleetfuel.fleet.metrics import (
    estimated_range_miles,
    fleet_average_mpg,
    is_low_fuel,
    remaining_gallons,
)
from fleetfuel.fleet.truck import Truck

LOADING_MESSAGE = "Loading fleet data..."


def chart_color(truck: Truck) -> str:
    return CHART_COLOR_LOW_FUEL if is_low_fuel(truck) else CHART_COLOR_NORMAL


def truck_card(truck: Truck, fleet_mpg: float = 0.0) -> Dict[str, object]:
    """Headline numbers for the selected truck.

    ``fleet_mpg`` is the fleet average; when given, the card carries the
    truck's mpg delta against it.
    """
    gallons = remaining_gallons(truck)
    return {
        "truck_id": truck.truck_id,
        "name": truck.name,
        "driver": truck.driver,
        "location": truck.location,
        "status": truck.status,
        "fuel_pct": truck.fuel_level,
        "fuel_label": f"{gallons:.1f} / {truck.capacity:g} gal",
        "mpg": round(truck.current_mpg, 1),
        "mpg_vs_fleet": round(truck.current_mpg - fleet_mpg, 1) if fleet_mpg else 0.0,
        "range_miles": estimated_range_miles(truck),
        "low_fuel": is_low_fuel(truck),
        "chart_color": chart_color(truck),
        "last_updated": truck.last_updated,
    }


def history_frame(truck: Truck) -> pd.DataFrame:
    """Fuel chart series: one row per hourly point, oldest first."""
    return pd.DataFrame(
        {
            "time": [p.time for p in truck.history],
            "level": truck.history.levels(),
            "consumption_rate": truck.history.consumption_rates(),
        }
    )


def fleet_table(trucks: List[Truck], selected_id: str = "") -> pd.DataFrame:
    """Truck picker rows, in fleet order, with the selected row marked."""
    columns = ["selected", "truck_id", "name", "status", "fuel_pct", "range_miles", "low_fuel"]
    rows = [
        {
            "selected": "*" if t.truck_id == selected_id else "",
            "truck_id": t.truck_id,
            "name": t.name,
            "status": t.status,
            "fuel_pct": t.fuel_level,
            "range_miles": estimated_range_miles(t),
            "low_fuel": is_low_fuel(t),
        }
        for t in trucks
    ]
    return pd.DataFrame(rows, columns=columns)


def render_dashboard(trucks: List[Truck], current: Optional[Truck], selected_id: str = "") -> str:
    """Plain-text dashboard for one frame."""
    if current is None or not trucks:
        return LOADING_MESSAGE

    card = truck_card(current, fleet_average_mpg(trucks))
    header = (
        f"{card['name']} ({card['truck_id']}) | {card['status']} | "
        f"Driver: {card['driver']} | {card['location']}"
    )
    metrics = (
        f"Fuel {card['fuel_pct']:.1f}% ({card['fuel_label']})"
        f"{'  LOW FUEL' if card['low_fuel'] else ''} | "
        f"{card['mpg']:.1f} mpg ({card['mpg_vs_fleet']:+.1f} vs fleet avg) | "
        f"Range {card['range_miles']} mi"
    )
    chart = history_frame(current).to_string(index=False)
    picker = fleet_table(trucks, selected_id or current.truck_id).to_string(index=False)
    return "\n".join([header, metrics, "", chart, "", picker])
