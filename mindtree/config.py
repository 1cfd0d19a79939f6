# --------- Layout ---------
LAYOUT_MARGIN = 24
COLUMN_MARGIN_FACTOR = 1.2

# --------- Node defaults ---------
NODE_W = 160
NODE_H = 40
NODE_MARGIN = 6
NODE_PADDING = 12
ICON_SIZE = 24
TEXT_COLOR = "black"
BACKGROUND_COLOR = "white"
HIGHLIGHT_COLOR = "#d6eafc"
SEL_OUTLINE = "#cc2e2e"
NODE_OUTLINE = "#d4d4d8"

# --------- Edges ---------
EDGE_COLOR = "gray"
EDGE_SELECTION_COLOR = "#be2525"

# --------- Viewport ---------
SCALE_MIN = 0.0
SCALE_MAX = 10.0
SCALE_FACTOR = 0.1
VIEW_PADDING = 4.0
WHEEL_INVERTED = True

# --------- Animation (seconds) ---------
ENTRY_DURATION = 1.0
FADE_DURATION = 1.0
FIT_DURATION = 1.0
PAN_DURATION = 0.8
FRAME_MS = 16

# --------- Front-end ---------
BG = "#fbfbfd"
FONT = ("Segoe UI", 12)
TITLE_FONT = ("Segoe UI", 10, "bold")
BUTTON_SIZE = 18
HOVER_REACH = 60
PAN_STEP = 60
DEFAULT_STATUS = (
    "A=Add child, I=Insert above, Del=Remove, Shift+Del=Remove subtree, "
    "Space=Collapse, F=Fit, 0=Reset zoom. Arrows move the selection."
)

PALETTE_COLORS = [
    "#B9C2FF",
    "#FFB3BE",
    "#FFF49A",
    "#C6FFB0",
    "#B7F0FF",
    "#DDB096",
    "#B5A0DD",
    "#9DDDD0",
    "#DDA0B7",
    "#B1DD53",
]
