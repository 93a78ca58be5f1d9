"""
Built-in seed data: the starter catalog, accepted synonyms for the daily
challenge and display meanings for radicals. CATALOG_FILE may replace any
of the three tables (see wision.characters.catalog.load_catalog_data).
"""

DEFAULT_CHARACTERS = [
    {
        "character": "森",
        "pronunciation": "sēn",
        "meaning": "forest",
        "radicals": ["木", "木", "木"],
        "story": "Three trees growing together create a dense forest",
        "difficulty": 1,
        "category": "nature",
    },
    {
        "character": "炎",
        "pronunciation": "yán",
        "meaning": "flame",
        "radicals": ["火", "火"],
        "story": "Double fire creates intense flames that reach for the sky",
        "difficulty": 1,
        "category": "nature",
    },
    {
        "character": "明",
        "pronunciation": "míng",
        "meaning": "bright",
        "radicals": ["日", "月"],
        "story": "Sun and moon together bring complete illumination",
        "difficulty": 2,
        "category": "celestial",
    },
    {
        "character": "休",
        "pronunciation": "xiū",
        "meaning": "rest",
        "radicals": ["人", "木"],
        "story": "A person leaning against a tree, taking a peaceful rest",
        "difficulty": 2,
        "category": "human",
    },
    {
        "character": "桌",
        "pronunciation": "zhuō",
        "meaning": "table",
        "radicals": ["木", "卓"],
        "story": "Outstanding wood crafted into a fine table",
        "difficulty": 2,
        "category": "objects",
    },
    {
        "character": "淋",
        "pronunciation": "lín",
        "meaning": "pour",
        "radicals": ["氵", "木"],
        "story": "Water flowing down like rain through trees",
        "difficulty": 2,
        "category": "nature",
    },
    {
        "character": "想",
        "pronunciation": "xiǎng",
        "meaning": "think",
        "radicals": ["心", "目"],
        "story": "The heart and eyes working together in contemplation",
        "difficulty": 3,
        "category": "abstract",
    },
    {
        "character": "看",
        "pronunciation": "kàn",
        "meaning": "look",
        "radicals": ["手", "目"],
        "story": "Using hand to shield eyes while looking into the distance",
        "difficulty": 2,
        "category": "actions",
    },
    {
        "character": "听",
        "pronunciation": "tīng",
        "meaning": "listen",
        "radicals": ["口", "耳"],
        "story": "Opening mouth slightly to hear more clearly",
        "difficulty": 2,
        "category": "actions",
    },
    {
        "character": "跑",
        "pronunciation": "pǎo",
        "meaning": "run",
        "radicals": ["足", "火"],
        "story": "Feet moving with the speed and energy of fire",
        "difficulty": 2,
        "category": "actions",
    },
]

# canonical meaning -> extra accepted answers
DEFAULT_SYNONYMS = {
    "table": ["desk"],
    "forest": ["woods"],
    "bright": ["brilliant", "luminous"],
    "rest": ["relax"],
    "think": ["contemplate"],
    "look": ["see", "watch"],
    "listen": ["hear"],
    "run": ["jog"],
}

DEFAULT_RADICAL_MEANINGS = {
    "木": "wood",
    "火": "fire",
    "日": "sun",
    "月": "moon",
    "人": "person",
    "心": "heart",
    "手": "hand",
    "口": "mouth",
    "目": "eye",
    "耳": "ear",
    "足": "foot",
    "氵": "water",
    "卓": "outstanding",
}
