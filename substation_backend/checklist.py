# substation_backend/checklist.py
from typing import List

from substation_backend.models import Alert, ChecklistItem, MaintenanceChecklistItem

PHASES = ("preparation", "maintenance", "verification")


def generate_inspection_checklist(alert: Alert) -> List[ChecklistItem]:
    """
    Equipment inspection checklist for an alert: station checks, one item per
    tool, one per High priority part, then the generic closing items.
    """
    station = alert.station_info
    weather = alert.weather

    items = [
        ChecklistItem(id="station", label=f"Verify Substation #{station.number} location and access"),
        ChecklistItem(id="voltage", label=f"Check {station.voltage} voltage levels"),
        ChecklistItem(id="safety", label="Perform safety protocols and wear appropriate PPE"),
    ]
    items += [
        ChecklistItem(id=f"tool-{index}", label=f"Verify {tool} is available and functional")
        for index, tool in enumerate(alert.tools)
    ]
    items += [
        ChecklistItem(id=f"part-{index}", label=f"Confirm {part.name} availability ({part.stock})")
        for index, part in enumerate(alert.high_priority_parts)
    ]
    items += [
        ChecklistItem(
            id="weather",
            label=f"Confirm weather conditions: {weather.condition}, {weather.temperature}",
        ),
        ChecklistItem(id="documentation", label="Prepare maintenance documentation and permits"),
        ChecklistItem(id="communication", label="Establish communication with control center"),
    ]
    return items


def generate_maintenance_checklist(alert: Alert) -> List[MaintenanceChecklistItem]:
    """Twelve phased items, four each for preparation, maintenance and verification."""
    weather = alert.weather
    voltage = alert.station_info.voltage

    rows = [
        # Pre-departure preparation
        ("weather-check", f"Confirm weather conditions: {weather.condition}, {weather.temperature}", "preparation"),
        ("documentation", "Prepare maintenance documentation and permits", "preparation"),
        ("safety-protocols", "Perform safety protocols and wear appropriate PPE", "preparation"),
        ("tools-verification", "Verify tools are available and functional", "preparation"),
        # On site
        ("component-inspection", "Inspect all components status and connections", "maintenance"),
        ("damaged-parts-replacement", "Replace damaged and aging components", "maintenance"),
        ("electrical-connections", "Check and tighten all electrical connections", "maintenance"),
        ("insulation-test", "Perform insulation resistance testing", "maintenance"),
        # Sign-off
        ("voltage-verification", f"Verify {voltage} voltage levels are normal", "verification"),
        ("load-test", "Perform load testing to confirm equipment normal operation", "verification"),
        ("protection-systems", "Verify protection systems function normally", "verification"),
        ("final-inspection", "Final inspection to confirm all indicators within normal range", "verification"),
    ]
    return [MaintenanceChecklistItem(id=item_id, label=label, phase=phase) for item_id, label, phase in rows]


def items_by_phase(items: List[MaintenanceChecklistItem]) -> dict:
    return {phase: [item for item in items if item.phase == phase] for phase in PHASES}


def checked_count(items: List[ChecklistItem]) -> int:
    return sum(1 for item in items if item.checked)


def progress_percent(items: List[ChecklistItem]) -> int:
    if not items:
        return 0
    # Halves round up, matching the dashboard progress bar
    return int(checked_count(items) * 100 / len(items) + 0.5)
