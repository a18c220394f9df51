# --- Display ---
WIDTH = 800                 # viewport width (px)
HEIGHT = 400                # viewport height; also the floor line for fall-out checks
FPS = 60

# --- World / Physics ---
WORLD_WIDTH = 800
GRAVITY = 0.5               # px/tick^2, applied to player and hazards
FALL_MARGIN = 100           # player.y beyond HEIGHT + this -> lost a life

# --- Player ---
PLAYER_START_X = 50
PLAYER_START_Y = 300
PLAYER_W = 30
PLAYER_H = 30
PLAYER_SPEED = 5.0
PLAYER_JUMP = 12.0
RESPAWN_INVULN_TICKS = 120

# --- Power-ups ---
POWERUP_TICKS = 300
SPEED_BOOST = 1.5
JUMP_BOOST = 1.3
PICKUP_W = 20
PICKUP_H = 20
PICKUP_SCORE = 50

# --- Markers (flags) ---
MARKER_W = 20
MARKER_H = 30
MARKER_SCORE = 100          # multiplied by the marker value
MARKERS_NEEDED = 3

# --- Hazards ---
HAZARD_W = 25
HAZARD_H = 25
HAZARD_BASE_SPEED = 1.0
HAZARD_LEVEL_RAMP = 0.3     # +30% speed per level after the first
HAZARD_JUMP_PERIOD = 120    # ticks between hops (strictly greater than)
HAZARD_JUMP_IMPULSE = -8.0
STOMP_EPSILON = 5
STOMP_BOUNCE = -10.0
STOMP_SCORE = 200

# --- Moving platforms ---
MOVING_PLATFORM_SPEED = 1.0

# --- Transient effects ---
EFFECT_LIFE = 60
PARTICLE_GRAVITY = 0.2
PARTICLE_SPREAD = 8.0
POPUP_VY = -2.0

# --- Camera ---
CAMERA_SMOOTHING = 0.1

# --- Run / progression ---
MAX_LEVEL = 5
LOADING_TICKS = 120
SEED_DEFAULT = 12345
DIFFICULTIES = ("easy", "normal", "hard")
DIFFICULTY_SPEED = {"easy": 0.8, "normal": 1.0, "hard": 1.3}
DIFFICULTY_LIVES = {"easy": 5, "normal": 3, "hard": 2}

# --- Game modes ---
MENU = "menu"
SETTINGS = "settings"
INSTRUCTIONS = "instructions"
LOADING = "loading"
PLAYING = "playing"
PAUSED = "paused"
LEVEL_COMPLETE = "levelComplete"
GAME_OVER = "gameOver"
VICTORY = "victory"

# --- Colors (RGB) ---
COLOR_BG = (135, 206, 235)
COLOR_FG = (255, 255, 255)
COLOR_ACCENT = (255, 215, 0)
COLOR_GROUND = (74, 74, 74)
COLOR_PLAT = (106, 106, 106)
COLOR_MOVING = (138, 138, 138)
COLOR_DANGER = (255, 68, 68)
COLOR_FLAG = (255, 255, 0)
COLOR_PICKUP = (0, 255, 0)
COLOR_MENU_BG = (102, 126, 234)
PLAYER_COLORS = (
    (255, 107, 107),
    (78, 205, 196),
    (69, 183, 209),
    (150, 206, 180),
    (254, 202, 87),
    (255, 159, 243),
)
