# reportes/styles.py
from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle


def pdf_palette():
    return {
        "PRIMARY": colors.HexColor("#0B2E4A"),
        "BORDER": colors.HexColor("#D7DCE3"),
        "SOFT": colors.HexColor("#F5F7FA"),

        # Niveles de viabilidad
        "OK": colors.HexColor("#1B7F3A"),      # excellent
        "GOOD": colors.HexColor("#1565C0"),    # good
        "WARN": colors.HexColor("#F9A825"),    # fair
        "BAD": colors.HexColor("#C62828"),     # poor
    }


_REQUIRED = ("H1b", "H2b", "Small")


def pdf_styles():
    styles = getSampleStyleSheet()

    body = styles["BodyText"]
    body.fontName = "Helvetica"
    body.fontSize = 10
    body.leading = 12

    if "H1b" not in styles.byName:
        styles.add(
            ParagraphStyle(
                name="H1b",
                parent=styles["Heading1"],
                fontName="Helvetica-Bold",
                fontSize=16,
                leading=19,
                spaceAfter=6,
                textColor=colors.HexColor("#0B2E4A"),
            )
        )

    if "H2b" not in styles.byName:
        styles.add(
            ParagraphStyle(
                name="H2b",
                parent=styles["Heading2"],
                fontName="Helvetica-Bold",
                fontSize=11,
                leading=13,
                spaceBefore=6,
                spaceAfter=4,
                alignment=TA_LEFT,
                textColor=colors.black,
            )
        )

    if "Small" not in styles.byName:
        styles.add(ParagraphStyle(name="Small", parent=body, fontSize=8, leading=10, textColor=colors.grey))

    _assert_required(styles)
    return styles


def _assert_required(styles):
    missing = [k for k in _REQUIRED if k not in styles.byName]
    if missing:
        raise KeyError(f"PDF styles missing: {missing}. Define them in reportes/styles.py")
