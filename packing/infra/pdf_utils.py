import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from packing.logic.reporting.progress import trip_statistics
from packing.logic.sections.section_builder import section_items


def _leaf_rows(section, prefix=""):
    """Yields (heading, items) for every leaf of a possibly nested section."""
    heading = f"{prefix} / {section.key}" if prefix else (section.key or "All items")
    if section.is_nested:
        for sub in section.entries:
            yield from _leaf_rows(sub, heading)
    else:
        yield heading, section_items(section)


def generate_pdf_for_trip(trip, sections):
    """Generate a printable checklist: one table per section with a box to tick per item."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    stats = trip_statistics(trip)
    elements = [
        Paragraph(f"Packing list – {escape(trip.name)}", styles["Title"]),
        Paragraph(f"{stats.packed_count} of {stats.total_count} packed", styles["Normal"]),
        Spacer(1, 12),
    ]

    for section in sections:
        for heading, items in _leaf_rows(section):
            elements.append(Paragraph(escape(heading), styles["Heading2"]))
            data = [["", "Item", "Container", "Group", "Optional"]]
            for item in items:
                data.append([
                    "[x]" if item.is_packed else "[ ]",
                    item.name,
                    item.container or "-",
                    item.group or "-",
                    "yes" if item.is_optional else "",
                ])
            table = Table(data, repeatRows=1, colWidths=[30, 200, 140, 100, 60])
            table.setStyle(TableStyle([
                ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#1E88E5")),
                ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
                ("ALIGN", (0,0), (0,-1), "CENTER"),
                ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
                ("FONTSIZE", (0,0), (-1,0), 11),
                ("BOTTOMPADDING", (0,0), (-1,0), 8),
                ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
            ]))
            elements.append(table)
            elements.append(Spacer(1, 10))

    if not sections:
        elements.append(Paragraph("No items.", styles["Normal"]))
    doc.build(elements)
    return buf.getvalue()
