"""
Configuration settings for Arcade Variations.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Window settings
FPS = 60
ARCADE_VERSION = "1.0.0"
GAME_TITLE = f"Arcade Variations (v{ARCADE_VERSION})"
MENU_SIZE = (480, 640)

# Per-game canvas sizes (width, height)
CANVAS_SIZES = {
    "snake": (480, 480),
    "breakout": (480, 640),
    "flappy": (400, 600),
}

GAME_IDS = ("snake", "breakout", "flappy")

# Simulation timing
FRAME_STEP_MS = 1000.0 / 60.0
MAX_STEPS_PER_ADVANCE = 8
AUTO_START = _env_bool("ARCADE_AUTO_START", False)

# Colors (UI chrome only; gameplay colors come from the variation theme)
COLOR_MENU_BG = "#14141c"
COLOR_MENU_TEXT = "#f0f0f0"
COLOR_MENU_ACCENT = "#ffd700"
COLOR_ERROR = "#dc143c"
COLOR_OVERLAY = "#000000b3"
COLOR_LOADING_BG = "#1e2a38"

# Difficulty sampling ranges
SPEED_MULTIPLIER_RANGE = (0.7, 1.5)
COMPLEXITY_BONUS_RANGE = (0.0, 0.5)
MODIFIER_COUNT_RANGE = (1, 4)

# Snake settings
SNAKE_BASE_INTERVAL_MS = 150
SNAKE_INTERVAL_BOUNDS_MS = (50, 300)
SNAKE_START_LENGTH = 3
SNAKE_FAST_START_LENGTH = 5
SNAKE_GHOST_FRAMES = 15

# Breakout settings
BREAKOUT_BASE_PADDLE_WIDTH = 100
BREAKOUT_PADDLE_HEIGHT = 12
BREAKOUT_PADDLE_OFFSET = 30
BREAKOUT_PADDLE_STEP = 12
BREAKOUT_BALL_RADIUS = 8
BREAKOUT_BALL_SPEED = 6
BREAKOUT_LIVES = 3
BREAKOUT_BRICK_HEIGHT = 20
BREAKOUT_BRICK_TOP = 60
BREAKOUT_BRICK_POINTS = 10
BREAKOUT_POWER_UP_CHANCE = 0.1
BREAKOUT_POWER_UP_FALL_SPEED = 2

# Flappy settings
FLAPPY_BIRD_X = 100
FLAPPY_BIRD_RADIUS = 12
FLAPPY_PIPE_WIDTH = 60
FLAPPY_PIPE_MARGIN = 50
FLAPPY_GHOST_FRAMES = 90
FLAPPY_POWER_UP_CHANCE = 0.2
FLAPPY_POWER_UP_STEPS = 300

# Shared scoring
MAX_COMBO = 5

# Variation settings
# deterministic: seed is the game id; fresh: new seed per request
VARIATION_POLICIES = {
    "snake": "deterministic",
    "breakout": "deterministic",
    "flappy": "fresh",
}
VARIATION_SOURCE = os.getenv("VARIATION_SOURCE", "http")  # http, local
VARIATION_API_URL = os.getenv("VARIATION_API_URL", "http://127.0.0.1:3001")
VARIATION_FETCH_TIMEOUT = float(os.getenv("VARIATION_FETCH_TIMEOUT", "3.0"))  # seconds

# Variation server
VARIATION_SERVER_HOST = os.getenv("VARIATION_SERVER_HOST", "127.0.0.1")
VARIATION_SERVER_PORT = int(os.getenv("VARIATION_SERVER_PORT", "3001"))

# Debug logging
DEBUG = _env_bool("ARCADE_DEBUG", False)
