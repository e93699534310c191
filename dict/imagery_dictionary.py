"""
Natural Imagery Dictionary
Static, versioned, lexical-only.
"""

# Guidelines:
# - Terms are literal character strings, matched as raw substrings
# - Multi-character terms are supported (e.g. "瀑布", "北极星")
# - A term belongs to exactly one (main category, subcategory) path;
#   the first path listing it wins
# - Never edit a released version in place; bump the version instead

# VERSION HISTORY:
# v1.0.0: Initial taxonomy (天文 / 地理 / 动物 / 植物 / 气候)
# v1.0.1: Flat lexicon de-duplicated; 气候 keeps its full group
IMAGERY_DICTIONARY_VERSION = "1.0.1"

# --------------------------------------------------
# Two-level taxonomy: main category -> subcategory -> terms
# --------------------------------------------------
IMAGERY_CATEGORIES = {
    "天文": {
        "日月星辰": ("日", "月", "星", "辰", "北极星", "启明", "北斗", "星宿"),
        "天气现象": ("云", "霞", "虹", "霓", "风", "霜", "露", "雾", "霾"),
        "宇宙元素": ("穹", "霄汉", "天河", "太虚", "清辉", "星汉", "银汉", "银河"),
    },
    "地理": {
        "自然地貌": (
            "山", "川", "峰", "岭", "江", "河", "湖", "海", "溪", "潭", "泉", "瀑布",
            "原野", "沙", "漠", "荒丘", "岛", "屿", "洞", "穴", "岩", "水",
        ),
    },
    "动物": {
        "飞禽": (
            "鸟", "鹰", "鹤", "雁", "雀", "燕", "鹊", "鸦", "鹭", "鸠", "黄鹂", "子规",
            "鸥", "凤", "凰", "精卫",
        ),
        "走兽": (
            "虎", "豹", "狼", "熊", "鹿", "马", "牛", "羊", "犬", "狐", "猿", "兔",
            "麒麟", "貔貅",
        ),
        "水族": ("鱼", "龙", "蛟", "鼋", "鼍", "蚌", "鳖", "虾", "蟹", "鲲", "鹏"),
        "昆虫": ("蝉", "螽斯", "蟋蟀", "蝴", "蝶", "蜂", "萤", "蜘蛛", "蜻蜓", "蚕"),
    },
    "植物": {
        "树木": (
            "松", "柏", "槐", "柳", "竹", "梧", "桐", "桑", "桃", "李", "梅", "枫",
            "桂", "楠", "银杏",
        ),
        "花草": (
            "兰", "菊", "荷", "芍药", "牡丹", "芙蓉", "棠", "杜鹃", "芦苇", "蒲", "萱",
            "苹", "蓼", "萍", "苔", "菌", "灵芝",
        ),
        "农作物": ("稻", "麦", "黍", "稷", "菽", "麻", "瓜", "瓠", "藤", "蔓", "葛"),
    },
    "气候": {
        # 风 霜 露 雾 霾 虹 霓 resolve to 天文/天气现象 (first path wins)
        "气象变化": ("风", "雨", "雪", "霜", "露", "雾", "霾", "雷", "虹", "霓", "雹", "冰"),
    },
}

# Fallback path for terms outside the taxonomy
UNCATEGORIZED_MAIN = "其他"
UNCATEGORIZED_SUB = "未分类"

# --------------------------------------------------
# Flat lexicon in taxonomy order
# --------------------------------------------------
# This order is the tie-break order for every count-sorted result.
NATURAL_IMAGERY = tuple(dict.fromkeys(
    term
    for subcategories in IMAGERY_CATEGORIES.values()
    for terms in subcategories.values()
    for term in terms
))
