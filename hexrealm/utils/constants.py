"""Engine-wide constants and game configuration defaults."""

# 32-bit arithmetic
UINT32_MASK = 0xFFFFFFFF
UINT32_RANGE = 0x100000000

# FNV-1a (32-bit)
FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193

# Mulberry32
MULBERRY_INCREMENT = 0x6D2B79F5

# Stability floor for civilizations and settlements
STABILITY_MIN = 0
DEFAULT_CIV_STABILITY = 70  # Used when a civ has no settlement anchors

# Game initialization
STARTING_UNITS_PER_CIV = 2
INITIAL_TURN = 1

# GameConfig defaults
DEFAULT_TURN_DEADLINE_DAYS = 7
DEFAULT_DIFFICULTY_MODIFIER = 1.0

# Player id prefix for orders synthesized by the AI governor
AI_PLAYER_PREFIX = "ai_"
