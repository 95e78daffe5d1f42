# substation_backend/report.py
from datetime import datetime
from typing import List, NamedTuple, Optional, Tuple, Union

from substation_backend.models import Alert

DEFAULT_RESULT = "Maintenance completed successfully. Equipment restored to normal operation."
DEFAULT_NOTES = "No additional remarks."

# A section entry is either a labelled value or a free line of text
Entry = Union[Tuple[str, str], str]


class ReportSection(NamedTuple):
    title: str
    entries: List[Entry]


def format_clock(value: Optional[datetime]) -> str:
    return value.strftime("%H:%M:%S") if value else "N/A"


def format_date(value: datetime) -> str:
    return value.strftime("%d/%m/%Y")


def format_timestamp(value: datetime) -> str:
    return value.strftime("%d/%m/%Y, %H:%M:%S")


def build_report_sections(
    alert: Alert,
    *,
    start_time: Optional[datetime],
    end_time: Optional[datetime],
    duration: str,
    result: str,
    notes: str,
    technician: str,
    report_date: datetime,
) -> List[ReportSection]:
    """Ordered report sections shared by the text report and the PDF export"""
    station = alert.station_info
    weather = alert.weather

    return [
        ReportSection("Basic Maintenance Information", [
            ("Substation Number", station.number),
            ("Maintenance Date", format_date(report_date)),
            ("Technician", technician),
            ("Start Time", format_clock(start_time)),
            ("End Time", format_clock(end_time)),
            ("Duration", duration),
        ]),
        ReportSection("Fault Description", [alert.message]),
        ReportSection("Equipment Information", [
            ("Voltage Level", station.voltage),
            ("Load Capacity", station.capacity),
            ("Commission Date", station.commission_date),
            ("Equipment Location", station.location),
        ]),
        ReportSection(
            "Maintenance Process",
            [f"{index}. {step}" for index, step in enumerate(alert.maintenance_steps, start=1)],
        ),
        ReportSection("Parts Used", [alert.used_parts]),
        ReportSection("Maintenance Results", [result.strip() or DEFAULT_RESULT]),
        ReportSection("Additional Notes", [notes.strip() or DEFAULT_NOTES]),
        ReportSection("Weather Conditions", [
            ("Temperature", weather.temperature),
            ("Wind", weather.wind),
            ("Weather", weather.condition),
            ("Visibility", weather.visibility),
        ]),
    ]


def compose_report(sections: List[ReportSection], generated_at: datetime) -> str:
    """Render the sections as the Markdown maintenance report"""
    lines = ["# Electrical Substation Maintenance Report", ""]
    for section in sections:
        lines.append(f"## {section.title}")
        for entry in section.entries:
            if isinstance(entry, tuple):
                label, value = entry
                lines.append(f"- **{label}**: {value}")
            else:
                lines.append(entry)
        lines.append("")

    lines.append("---")
    lines.append(f"*Report generated: {format_timestamp(generated_at)}*")
    return "\n".join(lines)
