from __future__ import annotations

"""
stormrank report generator
--------------------------
This module renders the two ranked views as bar charts and writes a DOCX
report around them.

Design goals:
- Keep stormrank usable even if report dependencies are missing (lazy imports).
- Charts consume only the tidy rows: categories are laid out by
  `display_rank` (smallest total at the bottom, largest at the top).
- Monetary values are rescaled *here* for display (view.display_scale);
  the pipeline keeps base US$.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import io
import os
import tempfile

from .models import TidyRow
from .engine import StormRank, View, HEALTH_VIEW, ECONOMIC_VIEW
from .classify import is_canonical


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "Storm Impact Report"
    subtitle: str = "Most harmful weather event types (NOAA Storm Data)"
    dataset_name: str = "NOAA Storm Data export"

    # How many categories to show in each chart / table
    top_n: int = 10

    # Optional: list of CLI commands used to create the outputs
    command_log: Optional[List[str]] = None

    views: Tuple[View, ...] = field(default=(HEALTH_VIEW, ECONOMIC_VIEW))


def _require_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib.\n"
            "Install it with: python -m pip install matplotlib"
        ) from e
    return plt


def _chart_layout(tidy_rows: Sequence[TidyRow]) -> Tuple[List[str], Dict[str, Dict[str, float]]]:
    """Categories ordered by display_rank, and metric -> category -> value."""
    ranks: Dict[str, int] = {}
    values: Dict[str, Dict[str, float]] = {}
    for t in tidy_rows:
        ranks[t.category] = t.display_rank
        values.setdefault(t.metric, {})[t.category] = t.value
    categories = sorted(ranks, key=lambda c: ranks[c])
    return categories, values


def render_view_chart(tidy_rows: Sequence[TidyRow], view: View, path: str) -> str:
    """Render one view as a horizontal stacked bar chart (PNG)."""
    plt = _require_matplotlib()
    import numpy as np

    if not tidy_rows:
        raise ValueError(f"No rows to plot for view '{view.name}'.")

    categories, values = _chart_layout(tidy_rows)
    y = np.arange(len(categories))
    left = np.zeros(len(categories))

    plt.figure(figsize=(8, max(3, 0.45 * len(categories) + 1)))
    for i, metric in enumerate(view.metric_names):
        widths = np.array([values.get(metric, {}).get(c, 0.0) for c in categories]) / view.display_scale
        plt.barh(y, widths, left=left, label=metric.capitalize(), color=f"C{i}")
        left = left + widths
    plt.yticks(y, categories)
    plt.xlabel(view.unit_label)
    plt.title(view.title)
    plt.legend(loc="lower right")
    plt.tight_layout()

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    plt.savefig(path, dpi=200)
    plt.close()
    return path


def _fmt(value: float, view: View) -> str:
    if view.display_scale != 1.0:
        return f"{value / view.display_scale:,.3f}"
    return f"{int(round(value)):,}"


def generate_docx_report(
    engine: StormRank,
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
) -> str:
    """
    Generate a DOCX report with one chart and one table per view.

    The records held by `engine` are only read; nothing is written back.
    """
    config = config or ReportConfig()

    # Lazy imports: only required when "report" is used.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e
    _require_matplotlib()

    if not engine.records:
        raise ValueError("No records to report on (dataset is empty).")

    # -----------------------------
    # 1) Run views + render charts
    # -----------------------------
    # PNGs are read back into memory so the temp dir can go right away
    sections = []
    with tempfile.TemporaryDirectory(prefix="stormrank_report_") as tmpdir:
        for view in config.views:
            ranked = engine.ranked(view, config.top_n)
            tidy = engine.tidy(view, config.top_n)
            chart = None
            if tidy:
                path = render_view_chart(tidy, view, os.path.join(tmpdir, f"{view.name}.png"))
                with open(path, "rb") as f:
                    chart = io.BytesIO(f.read())
            sections.append((view, ranked, chart))

    counts = engine.category_counts()
    canonical = sum(1 for c in counts if is_canonical(c))

    # -----------------------------
    # 2) Build DOCX report
    # -----------------------------
    doc = Document()

    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Dataset", config.dataset_name)
    if engine.dataset_path:
        _kv("Data file", os.path.basename(engine.dataset_path))
    _kv("Total records", f"{len(engine.records):,}")
    _kv("Distinct event labels", f"{engine.distinct_labels():,}")
    _kv("Categories after classification", f"{len(counts):,} ({canonical} canonical, {len(counts) - canonical} unmatched labels)")

    if config.command_log:
        doc.add_paragraph("")
        doc.add_heading("Command log (reproducibility)", level=1)
        for line in config.command_log:
            doc.add_paragraph(line, style="List Bullet")

    for view, ranked, chart in sections:
        doc.add_paragraph("")
        doc.add_heading(view.title, level=1)
        doc.add_paragraph(
            f"Top {len(ranked)} categories ranked by {view.primary}, "
            f"ties broken by {view.secondary}."
        )
        if chart is not None:
            doc.add_picture(chart, width=Inches(6.5))
        unit = f" ({view.unit_label})" if view.display_scale != 1.0 else ""
        t = doc.add_table(rows=1, cols=2 + len(view.metrics))
        h = t.rows[0].cells
        h[0].text = "Rank"
        h[1].text = "Category"
        for i, name in enumerate(view.metric_names):
            h[2 + i].text = name.capitalize() + unit
        for pos, row in enumerate(ranked, start=1):
            r = t.add_row().cells
            r[0].text = str(pos)
            r[1].text = row.category
            for i, name in enumerate(view.metric_names):
                r[2 + i].text = _fmt(row.value(name), view)

    # Largest categories by number of records
    doc.add_paragraph("")
    doc.add_heading("Records per category", level=1)
    t2 = doc.add_table(rows=1, cols=2)
    t2.rows[0].cells[0].text = "Category"
    t2.rows[0].cells[1].text = "Records"
    for cat, n in counts.most_common(config.top_n):
        row = t2.add_row().cells
        row[0].text = cat
        row[1].text = f"{n:,}"

    # -----------------------------
    # Reproducibility footer
    # -----------------------------
    doc.add_paragraph("")
    doc.add_heading("Reproducibility footer", level=1)
    from . import __version__ as stormrank_version
    from datetime import datetime as _dt
    doc.add_paragraph(f"stormrank version: {stormrank_version}")
    doc.add_paragraph(f"Report generated at: {_dt.now().isoformat(timespec='seconds')}")
    doc.add_paragraph(
        "Event labels are mapped to categories by ordered keyword rules; "
        "labels matching no rule are kept as their own category."
    )

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
