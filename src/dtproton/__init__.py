"""dtproton — Clear reference-material cells from ion-chromatography sheets."""

import re

__version__ = "0.1.0"

MARKER_TEXT: str = "离子色谱"
MARKER_POSITION: tuple[int, int] = (2, 0)  # (row, col), 0-based: A3
SCAN_START_ROW: int = 5  # 0-based: spreadsheet row 6
CLEAR_PATTERN: re.Pattern[str] = re.compile(r"\((RM|C)\)")

OUTPUT_PREFIX = "processed_"
DEFAULT_OUTPUT_NAME = "output.xlsx"
