# --- Display ---
WIDTH = 800
HEIGHT = 400
FPS = 60
TICKS_PER_SECOND = 60       # reference rate for per-tick constants and HUD seconds

# --- World ---
GROUND_Y = HEIGHT           # ground line (y grows downward)
START_SPEED = 2.8           # px per tick
MAX_SPEED = 8.5             # speed stays constant once reached
SPEED_STEP = 0.013          # added per cleared obstacle
BACKGROUND_DIVISOR = 6      # ground strip scrolls at speed / 6

# --- Physics (per tick) ---
GRAVITY = 0.6
JUMP_FORCE = -10.0
MAX_JUMP_TIME = 15          # ticks of half gravity while jump is held
COYOTE_TIME_LIMIT = 10      # grace ticks after leaving the ground

# --- Player ---
PLAYER_X = 50
PLAYER_W = 40
PLAYER_H = 80               # standing
PLAYER_DUCK_H = 40          # ducking

# --- Obstacles ---
OBSTACLE_W = 30
GROUND_OBS_MIN_H = 30
GROUND_OBS_RANGE_H = 40     # height in [30, 70)
OVERHEAD_OBS_MIN_H = 22
OVERHEAD_OBS_RANGE_H = 28   # height in [22, 50)
OVERHEAD_CLEARANCE = 60     # gap between ground and overhead bottom

# --- Gap scaling ---
BASE_MIN_GAP = 220          # at START_SPEED
BASE_MAX_GAP = 340
GAP_SCALING = 2.6
MIN_GAP_SLOPE = 60
MAX_GAP_SLOPE = 110
MIN_GAP_CAP = 430
MAX_GAP_CAP = 650

# --- Power-ups ---
POWERUP_SIZE = 25
POWERUP_CHANCE = 0.0025     # per tick
MAX_POWERUPS = 2
POWERUP_SPAWN_OFFSET = 120  # x = WIDTH + offset + U[0, jitter)
POWERUP_SPAWN_JITTER = 100
POWERUP_LOW_BAND = 60
POWERUP_HIGH_BAND = 80
INVINCIBLE_TICKS = 180
SCORE_BOOST = 10

SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_BG = (34, 34, 34)
COLOR_GROUND = (68, 68, 68)
COLOR_FG = (255, 255, 255)
COLOR_PLAYER = (40, 90, 230)
COLOR_INVINCIBLE = (255, 215, 0)
COLOR_OBSTACLE = (220, 40, 40)
COLOR_SHADOW = (0, 0, 0, 50)
COLOR_SCORE_BOOST = (0, 255, 0)
COLOR_DANGER = (255, 86, 110)
