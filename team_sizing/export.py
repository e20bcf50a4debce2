"""Export a sizing round as JSON, Excel or a PDF report."""

import html
import io
import json
import logging
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Image as RLImage
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .config import confidence_label

log = logging.getLogger(__name__)

JSON_MIME = "application/json"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIME = "application/pdf"


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix, e.g. 2024-05-01T09:30:00.000Z."""
    return _now(now).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def slugify(topic: str) -> str:
    slug = re.sub(r"\s+", "-", topic.strip().lower())
    return re.sub(r"[^\w-]", "", slug)


def export_filename(topic: str, now: Optional[datetime] = None, ext: str = "json") -> str:
    return f"sizing-{slugify(topic)}-{_now(now).strftime('%Y-%m-%d')}.{ext}"


def build_export_document(session, now: Optional[datetime] = None) -> Dict:
    return {
        "topic": session.topic,
        "teamMembers": [e.to_dict() for e in session.estimates],
        "statistics": session.statistics(),
        "scale": session.scale.name,
        "timestamp": iso_timestamp(now),
    }


def export_json(session, now: Optional[datetime] = None) -> bytes:
    doc = build_export_document(session, now)
    return json.dumps(doc, indent=2, ensure_ascii=False).encode("utf-8")


def log_export(session, fmt: str) -> None:
    """Record a download the user actually clicked."""
    log.info("Exported %s estimates for '%s' as %s", session.member_count, session.topic, fmt)


# ---- Tabular exports ----
def estimates_frame(session) -> pd.DataFrame:
    rows: List[Dict] = []
    for e in session.estimates:
        rows.append({
            "Name": e.name,
            "Size": e.size,
            "Value": e.size_value,
            "Confidence": confidence_label(e.confidence),
            "Comment": e.comment,
        })
    return pd.DataFrame(rows, columns=["Name", "Size", "Value", "Confidence", "Comment"])


def summary_frame(session, now: Optional[datetime] = None) -> pd.DataFrame:
    stats = session.statistics()
    return pd.DataFrame({
        "Metric": ["Topic", "Scale", "Members", "Average", "Median", "Mode", "Exported"],
        "Value": [
            session.topic, session.scale.title, session.member_count,
            stats["average"], stats["median"], stats["mode"], iso_timestamp(now),
        ],
    })


def to_excel_bytes(session, now: Optional[datetime] = None) -> bytes:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        estimates_frame(session).to_excel(writer, index=False, sheet_name="Estimates")
        summary_frame(session, now).to_excel(writer, index=False, sheet_name="Summary")
    return output.getvalue()


def to_pdf_bytes(session, chart_png: Optional[bytes] = None, now: Optional[datetime] = None) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=24, leftMargin=24, topMargin=24, bottomMargin=24)
    styles = getSampleStyleSheet()
    stats = session.statistics()
    story = []

    story.append(Paragraph("<b>Team Workload Sizing</b>", styles["Title"]))
    story.append(Spacer(1, 8))
    story.append(Paragraph(f"Topic: {html.escape(session.topic) or '-'}", styles["Heading2"]))
    story.append(Paragraph(_now(now).strftime("%Y-%m-%d %H:%M UTC"), styles["Normal"]))
    story.append(Spacer(1, 12))

    for ln in [
        f"Scale: {session.scale.title}",
        f"Members: {session.member_count}",
        f"Average: {stats['average']}",
        f"Median: {stats['median']}",
        f"Mode: {stats['mode']}",
    ]:
        story.append(Paragraph(ln, styles["Normal"]))
    story.append(Spacer(1, 12))

    if chart_png:
        story.append(RLImage(io.BytesIO(chart_png), width=420, height=280))
        story.append(Spacer(1, 12))

    df = estimates_frame(session)
    if not df.empty:
        data = [df.columns.tolist()] + df.astype(str).values.tolist()
        table = Table(data, repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#c7d2fe")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
            ("GRID", (0, 0), (-1, -1), 0.3, colors.grey),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ALIGN", (0, 0), (-1, 0), "CENTER"),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.whitesmoke, colors.HexColor("#eef2ff")]),
        ]))
        story.append(table)

    doc.build(story)
    buf.seek(0)
    return buf.getvalue()
