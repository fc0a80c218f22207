"""
Single source of truth for report colors, fonts, fills, borders, alignments.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------
STORM_NAVY = "1F3A5F"
STORM_BLUE = "2E6DA4"
SKY = "E3EEF9"
SLATE = "5B6770"
ALTERNATE_ROW = "F4F6F8"
WHITE = "FFFFFF"
BLACK = "000000"
ALERT_RED = "C62828"
LIGHT_RED = "FDECEA"
AMBER = "F9A825"
LIGHT_AMBER = "FFF8E1"
TOTAL_ROW_BG = "DCE6F1"

# Bar fill per ranking sheet
CHART_COLORS = {
    "injuries": "F9A825",
    "fatalities": "C62828",
    "damage": "2E6DA4",
}

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name="Calibri", size=22, bold=True, color=STORM_NAVY)
SUBTITLE_FONT = Font(name="Calibri", size=11, italic=True, color=SLATE)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
DATA_FONT = Font(name="Calibri", size=10, color=BLACK)
TOTAL_FONT = Font(name="Calibri", size=10, bold=True, color=BLACK)
SECTION_FONT = Font(name="Calibri", size=14, bold=True, color=STORM_NAVY)
KPI_VALUE_FONT = Font(name="Calibri", size=24, bold=True, color=STORM_NAVY)
KPI_LABEL_FONT = Font(name="Calibri", size=10, color=SLATE)
INSIGHT_TITLE_FONT = Font(name="Calibri", size=11, bold=True, color=STORM_NAVY)
INSIGHT_BODY_FONT = Font(name="Calibri", size=10, italic=True)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=STORM_NAVY, end_color=STORM_NAVY, fill_type="solid")
ALTERNATE_FILL = PatternFill(start_color=ALTERNATE_ROW, end_color=ALTERNATE_ROW, fill_type="solid")
TOTAL_FILL = PatternFill(start_color=TOTAL_ROW_BG, end_color=TOTAL_ROW_BG, fill_type="solid")
SKY_FILL = PatternFill(start_color=SKY, end_color=SKY, fill_type="solid")
ALERT_FILL = PatternFill(start_color=LIGHT_RED, end_color=LIGHT_RED, fill_type="solid")
AMBER_FILL = PatternFill(start_color=LIGHT_AMBER, end_color=LIGHT_AMBER, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
THIN_BORDER = Border(
    left=Side(style="thin", color="C8CED3"),
    right=Side(style="thin", color="C8CED3"),
    top=Side(style="thin", color="C8CED3"),
    bottom=Side(style="thin", color="C8CED3"),
)
HEADER_BORDER = Border(
    left=Side(style="thin", color=STORM_NAVY),
    right=Side(style="thin", color=STORM_NAVY),
    top=Side(style="thin", color=STORM_NAVY),
    bottom=Side(style="medium", color=STORM_NAVY),
)
TOTAL_BORDER = Border(
    left=Side(style="thin", color="8A96A3"),
    right=Side(style="thin", color="8A96A3"),
    top=Side(style="medium", color="8A96A3"),
    bottom=Side(style="medium", color="8A96A3"),
)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")
WRAP = Alignment(horizontal="left", vertical="top", wrap_text=True)

# ---------------------------------------------------------------------------
# Highlight name → fill mapping
# ---------------------------------------------------------------------------
HIGHLIGHT_FILLS = {
    "sky": SKY_FILL,
    "alert": ALERT_FILL,
    "amber": AMBER_FILL,
}

SEVERITY_FILLS = {
    "red": ALERT_FILL,
    "yellow": AMBER_FILL,
    "info": SKY_FILL,
}
