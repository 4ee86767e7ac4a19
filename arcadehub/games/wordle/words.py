"""
Word List Service - the closed Wordle vocabulary.

Every word is five upper-case letters. The same list is used to pick the
secret word and to validate guesses.
"""

from __future__ import annotations

from ...engine_core.rng import Rng

WORD_LENGTH = 5

WORDS: tuple[str, ...] = (
    "ABOUT", "ABOVE", "ACTOR", "ADAPT", "AFTER", "AGAIN", "AGENT", "ALARM",
    "ALBUM", "ALERT", "ALIKE", "ALIVE", "ALLOW", "ALONE", "ALONG", "ANGER",
    "ANGLE", "APPLE", "APPLY", "ARENA", "ARGUE", "ARISE", "ARMOR", "ARROW",
    "AWARD", "BADGE", "BAKER", "BASIC", "BEACH", "BEGAN", "BEING", "BENCH",
    "BIRTH", "BLACK", "BLADE", "BLAME", "BLAST", "BLEND", "BLOCK", "BLOOD",
    "BOARD", "BONUS", "BOOST", "BRAIN", "BRAVE", "BREAD", "BREAK", "BRICK",
    "BRIEF", "BRING", "BROWN", "BUILD", "CABIN", "CABLE", "CANDY", "CARRY",
    "CATCH", "CHAIN", "CHAIR", "CHARM", "CHART", "CHASE", "CHEAP", "CHECK",
    "CHESS", "CHEST", "CHIEF", "CHILD", "CLAIM", "CLASS", "CLEAN", "CLEAR",
    "CLIMB", "CLOCK", "CLOSE", "CLOUD", "COACH", "COAST", "COUNT", "COURT",
    "COVER", "CRAFT", "CRANE", "CRASH", "CREAM", "CROWN", "CYCLE", "DANCE",
    "DEPTH", "DREAM", "DRESS", "DRINK", "DRIVE", "EAGLE", "EARLY", "EARTH",
    "EIGHT", "ELBOW", "ELITE", "EMPTY", "ENEMY", "ENJOY", "ENTER", "EQUAL",
    "ERASE", "ERROR", "EVENT", "EVERY", "EXACT", "EXIST", "EXTRA", "FAITH",
    "FALSE", "FEAST", "FIELD", "FIGHT", "FINAL", "FLAME", "FLASH", "FLEET",
    "FLOOR", "FLUTE", "FOCUS", "FORCE", "FRAME", "FRESH", "FRONT", "FRUIT",
    "GHOST", "GIANT", "GLASS", "GLOBE", "GLORY", "GRACE", "GRADE", "GRAIN",
    "GRAND", "GRAPE", "GRASS", "GREAT", "GREEN", "GROUP", "GUARD", "GUESS",
    "GUIDE", "HAPPY", "HEART", "HEAVY", "HOUSE", "HUMAN", "IDEAL", "IMAGE",
    "INDEX", "INNER", "INPUT", "ISSUE", "JOINT", "JUDGE", "KNIFE", "LASER",
    "LAUGH", "LAYER", "LEARN", "LEMON", "LEVEL", "LIGHT", "LIMIT", "LUCKY",
    "LUNAR", "MAGIC", "MAJOR", "MAPLE", "MATCH", "MEDAL", "METAL", "MIGHT",
    "MODEL", "MONEY", "MONTH", "MOUSE", "MOUTH", "MUSIC", "NERDY", "NIGHT",
    "NOBLE", "NOISE", "NORTH", "NOVEL", "OCEAN", "OFFER", "ORDER", "OTHER",
    "PAINT", "PANEL", "PAPER", "PARTY", "PEACE", "PHASE", "PHONE", "PIANO",
    "PIECE", "PILOT", "PIXEL", "PLACE", "PLAIN", "PLANE", "PLANT", "PLATE",
    "POINT", "POWER", "PRESS", "PRICE", "PRIDE", "PRIME", "PRIZE", "PROOF",
    "PROUD", "QUEEN", "QUEST", "QUICK", "QUIET", "RADIO", "RAISE", "RALLY",
    "RANGE", "RAPID", "REACH", "READY", "RIVER", "ROBOT", "ROUND", "ROUTE",
    "ROYAL", "SCALE", "SCENE", "SCORE", "SENSE", "SHAPE", "SHARE", "SHARP",
    "SHEEP", "SHELF", "SHELL", "SHIFT", "SHINE", "SHORT", "SIGHT", "SKILL",
    "SLEEP", "SMART", "SMILE", "SMOKE", "SOLID", "SOUND", "SPACE", "SPARE",
    "SPEAK", "SPEED", "SPEND", "SPENT", "SPOON", "SPORT", "STAFF", "STAGE",
    "STAND", "START", "STEAM", "STEEL", "STONE", "STORE", "STORM", "STORY",
    "SUGAR", "SWEET", "TABLE", "TASTE", "TEACH", "THEME", "THREE", "TIGER",
    "TITLE", "TOAST", "TOKEN", "TOTAL", "TOUCH", "TOWER", "TRACK", "TRADE",
    "TRAIN", "TREAT", "TREND", "TRIAL", "TRUST", "TRUTH", "UNCLE", "UNION",
    "UNITY", "UPPER", "URBAN", "USUAL", "VALUE", "VIDEO", "VISIT", "VITAL",
    "VOICE", "WASTE", "WATCH", "WATER", "WHEEL", "WHITE", "WHOLE", "WOMAN",
    "WORLD", "WORRY", "WORTH", "WRITE", "YOUNG", "YOUTH", "ZEBRA",
)

VOCABULARY = frozenset(WORDS)


def random_word(rng: Rng) -> tuple[str, Rng]:
    return rng.choice(WORDS)


def is_valid_word(word: str) -> bool:
    return word.upper() in VOCABULARY
