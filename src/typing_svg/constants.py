"""Global constants for the application."""

# Typing speeds in characters per second
DEFAULT_PRINT_RATE = 10.0  # Characters typed per second
DEFAULT_ERASE_RATE = 10.0  # Characters erased per second
MIN_RATE = 1.0  # Rates below this are clamped at the parameter boundary

# Pauses in milliseconds
DEFAULT_PAUSE_MS = 800  # Pause between printed blocks and before erasing

# Canvas geometry in pixels
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 100
DEFAULT_PADDING_X = 16
DEFAULT_PADDING_Y = 20

# Typography
DEFAULT_FONT_SIZE = 48
DEFAULT_FONT_WEIGHT = 800
DEFAULT_FONT_FAMILY = "Roboto"
DEFAULT_LINE_HEIGHT = 1.35  # Multiplier applied to the font size between stacked lines
DEFAULT_LETTER_SPACING = 0.0
DEFAULT_COLOR = "#6F08FF"
DEFAULT_BACKGROUND = "#FFFFFF"
DEFAULT_PLACEHOLDER_LINE = "Your text here"

# Fallback glyph metrics when no font file is available
FALLBACK_CHAR_WIDTH_COEFFICIENT = 0.5  # Average advance as a fraction of the font size
FALLBACK_EMOJI_WIDTH_MULTIPLIER = 1.4  # Emoji are wider than the average glyph
FALLBACK_ASCENT_COEFFICIENT = 0.8  # Ascent as a fraction of the font size

# Timeline shaping
STACKED_NO_ERASE_CUT = 0.99  # Key time where stacked lines vanish without an erase window
CURSOR_HIDE_DURATION_MS = 1  # Length of the opacity drop that hides a finished cursor
ANIMATION_ID_PREFIX = "d"  # Prefix of the per-line animate ids used in begin expressions

# Environment variables read through python-dotenv
FONT_PATH_ENV = "TYPING_SVG_FONT_PATH"
LOG_LEVEL_ENV = "TYPING_SVG_LOG_LEVEL"
