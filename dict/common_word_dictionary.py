# ============================================================
# COMMON WORD FILTER
# ============================================================
#
# Characters that count as meaningful companions of an imagery
# term when tallying sentence-level word relationships.
#
# Any character NOT listed here is ignored by the per-poem
# relationship pass (particles, pronouns, function words).
#
# The corpus-wide association pass does NOT use this filter.
#
# Entries are single characters; duplicates in the groups
# below are harmless (the table is a frozenset).
# ============================================================

COMMON_WORD_DICTIONARY_VERSION = "1.0.0"

# Motion and state verbs
_ACTIONS = (
    "落 飘 流 思 望 愿 斜 凋 吹 垂 逝 枯 残 碎 坠 摇 散 拂 凝 卷 舞 浮 沉 涌 曳 "
    "映 绽 栖 鸣 隐 泛 敛 旱 离 归 叹 奚 惜 别 醉 戏 啼 飞 征 莫 难 兴 啸 危 乱"
)

# Feelings
_EMOTIONS = (
    "爱 恨 怨 愁 喜 怕 惧 苦 怒 慕 痴 憾 怜 妒 怅 惶 怯 哀 惑 倦 羡 愧 嗔 念 忧 "
    "寂 恼 惘 泪 凄 凉 骄 娇 俏 孤 病 坏 悠 闲 害"
)

# Life and time
_TIME = "生 死 昔 往 独"

# Light, texture and atmosphere
_QUALITIES = (
    "霁 晦 灼 烁 黯 皎 朦 湮 溯 升 徙 寒 空 清 深 浅 香 幽 "
    "潜 唳 啭 喑 萎 蔓 明 翩 蛰"
)

# Objects of scholarly and martial life
_OBJECTS = "酒 茶 曲 舟 诗 书 仙 玉 剑 刀 钟 盔 甲 笛 萧 笙 镜"

# Places and built landscape
_PLACES = "壑 涧 汀 渚 岫 峦 驿 隘 津 陌 墟 砌 槛 扉 村 郭"

# Colours, directions, seasons and dimensions
_ATTRIBUTES = (
    "红 黄 绿 橙 青 蓝 紫 白 素 黑 苍 斑 皑 绛 翠 皴 皤 黧 缁 茜 玄 灰 "
    "东 西 南 北 中 春 夏 秋 冬 大 小 薄 厚 高 低"
)

COMMON_WORDS = frozenset(
    " ".join((_ACTIONS, _EMOTIONS, _TIME, _QUALITIES, _OBJECTS, _PLACES, _ATTRIBUTES)).split()
)
