"""
Constants and configuration values for the UI.
"""
from dataclasses import dataclass

from scribe_table import config

APP_NAME = "ScribeTable"

# Upload widget accepts file extensions, the core validates media types
UPLOAD_EXTENSIONS = ["png", "jpg", "jpeg", "webp"]

# Download file names
CSV_FILENAME = config.EXPORT_CONFIG["csv_filename"]
SPREADSHEET_FILENAME = config.EXPORT_CONFIG["spreadsheet_filename"]
CSV_MIME = "text/csv"
SPREADSHEET_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Material Icons
ICON_UPLOAD = ":material/upload_file:"
ICON_TABLE_CHART = ":material/table_chart:"
ICON_DESCRIPTION = ":material/description:"
ICON_REFRESH = ":material/refresh:"
ICON_EDIT = ":material/edit:"
ICON_HOURGLASS = ":material/hourglass_top:"
ICON_CHECK_CIRCLE = ":material/check_circle:"
ICON_ERROR = ":material/error:"
ICON_INFO = ":material/info:"
ICON_LIGHTBULB = ":material/lightbulb:"


@dataclass(frozen=True)
class StatusBadgeStyle:
    icon: str
    text_color: str
    background: str


STATUS_BADGE_STYLES = {
    "success": StatusBadgeStyle(icon=ICON_CHECK_CIRCLE, text_color="#136534", background="rgba(19, 101, 52, 0.12)"),
    "danger": StatusBadgeStyle(icon=ICON_ERROR, text_color="#8A1D1D", background="rgba(215, 0, 0, 0.12)"),
    "processing": StatusBadgeStyle(icon=ICON_HOURGLASS, text_color="#125F82", background="rgba(30, 144, 255, 0.12)"),
    "info": StatusBadgeStyle(icon=ICON_INFO, text_color="#1E3A5F", background="rgba(30, 90, 255, 0.12)"),
}
