# settings.py

# Window / display
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
FPS = 60
TITLE = "Dungeon Mastery"

# Fonts (point sizes); damage numbers are drawn 1.5x the HUD size
HUD_FONT_SIZE = 22
DAMAGE_FONT_SCALE = 1.5

# Colors
COLOR_BG = (15, 15, 20)
COLOR_PLAYER = (220, 210, 90)
COLOR_ENEMY = (200, 80, 80)
COLOR_TEXT = (230, 230, 230)
COLOR_HP_BAR = (81, 207, 102)
COLOR_HP_BAR_BG = (60, 20, 20)

COLOR_DAMAGE = (255, 107, 107)
COLOR_HEAL = (81, 207, 102)

# Attack line color per skill element (anything else uses the default)
ELEMENT_LINE_COLORS = {
    "fire": (255, 69, 0),
    "ice": (0, 255, 255),
}
DEFAULT_LINE_COLOR = (255, 255, 0)

# Arena (battle field) defaults, in pixels
ARENA_WIDTH = 800
ARENA_HEIGHT = 600

# Gameplay cadences (in simulation ticks)
ACHIEVEMENT_CHECK_INTERVAL = 60
SKILL_INPUT_DEBOUNCE = 10
AUTOSAVE_SECONDS = 30

# Combat / spawning
CONTACT_MARGIN = 10
WAVE_BASE_SIZE = 3
SPAWN_CIRCLE_RADIUS = 200

# Visual effect lifetimes
POPUP_LIFE = 60
POPUP_RISE_PER_TICK = 2
ATTACK_LINE_LIFE = 10

# Input
GAMEPAD_DEAD_ZONE = 0.2
SKILL_SLOT_COUNT = 5
MAX_EQUIPPED_SKILLS = 3

# Battle log
BATTLE_LOG_MAX = 50

# Persistence
SAVE_KEY = "save"
SAVE_VERSION = "1.1"
HIDDEN_PLACEHOLDER = "???"
