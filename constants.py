from collections import namedtuple

# --- Sampling ---
MAX_POINTS = 60
REFRESH_MS = 1000
REFRESH_GUI_MS = 100
NET_FULL_SCALE_BYTES = 10 * 1024 * 1024   # 10 MiB per tick draws as 100%

# --- Chart geometry ---
MARGIN_LEFT = 50
MARGIN_RIGHT = 20
MARGIN_TOP = 30
MARGIN_BOTTOM = 30
GRID_LINES = 11
LABEL_GAP = 8
TITLE_GAP = 10
LINE_WIDTH = 2.5
FILL_ALPHA = 0.15
CHART_MIN_HEIGHT = 220

# --- Font styling ---
FONT_TAB = ("Segoe UI", 11)
FONT_READOUT = ("Consolas", 18, "bold")
FONT_CHART_TITLE = ("Segoe UI", 13, "bold")
FONT_AXIS = ("Segoe UI", 9)
READOUT_PADDING = (16, 12)

# --- Window ---
APP_TITLE = "System Monitor"
WINDOW_SIZE = (960, 720)
WINDOW_MIN_SIZE = (580, 450)

# --- Palettes ---
Palette = namedtuple("Palette", [
    "name",
    "bootstrap_theme",   # ttkbootstrap theme used for the window chrome
    "background_top",
    "background_bottom",
    "grid",
    "text",
    "title",
    "line",
    "label_bg",          # None keeps the ttkbootstrap default
    "label_fg",
    "chrome_bg",         # menu bar and window background
    "chrome_fg",
])

DARK_PALETTE = Palette(
    name="dark",
    bootstrap_theme="darkly",
    background_top="#16162a",
    background_bottom="#0c0c1c",
    grid="#323246",
    text="#d2d2e6",
    title="#c8b4ff",
    line="#aa5aff",
    label_bg="#232337",
    label_fg="#b4b4c8",
    chrome_bg="#12121e",
    chrome_fg="#dcdce6",
)

LIGHT_PALETTE = Palette(
    name="light",
    bootstrap_theme="flatly",
    background_top="#ffffff",
    background_bottom="#ffffff",
    grid="#c8c8c8",
    text="#000000",
    title="#5014c8",
    line="#6432c8",
    label_bg=None,
    label_fg="#000000",
    chrome_bg="#ffffff",
    chrome_fg="#000000",
)


def palette_for(dark):
    return DARK_PALETTE if dark else LIGHT_PALETTE


# --- Configuration ---
CONFIG_ENV_VAR = "SYSMON_CONFIG"
CONFIG_FILE = ".sysmon_config.json"

DEFAULT_CONFIG = {
    "dark_mode": True,
    "monitor_index": 0,
    "window_width": WINDOW_SIZE[0],
    "window_height": WINDOW_SIZE[1],
    "log_level": "INFO",
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
