"""
Test data generators for string benchmarks.

Creates text samples for performance testing:
- Pure ASCII, where byte offsets equal codepoint indices
- CJK and kana, three bytes per codepoint
- Emoji, four bytes per codepoint
- Mixed scripts with words separated by spaces
"""

import random
import string

_ALPHABETS = {
    "ascii": string.ascii_letters + string.digits,
    "cjk": "你好世界中文字符测试数据こんにちは",
    "emoji": "😀😁😂🤣😃😄😅😆😉😊",
}
_WORD_LENGTHS = (3, 12)
_SEED = 20240601


def generate_test_data(data_type: str, words: int = 500) -> str:
    """Generates space-separated text drawn from the given script."""
    if data_type == "mixed":
        alphabet = "".join(_ALPHABETS.values())
    elif data_type in _ALPHABETS:
        alphabet = _ALPHABETS[data_type]
    else:
        raise ValueError(f"Unknown data type: {data_type}")

    rng = random.Random(_SEED)
    return " ".join(
        "".join(rng.choices(alphabet, k=rng.randint(*_WORD_LENGTHS)))
        for _ in range(words)
    )


DATA_TYPES = ["ascii", "cjk", "emoji", "mixed"]
