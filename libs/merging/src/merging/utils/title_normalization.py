"""Title normalization for candidate lookup and title comparison.

Providers spell the same title with different widths, cases, punctuation,
decorations and invisible characters. ``normalize_title`` folds all of these
away so that such titles end up with the same key.
"""

import unicodedata

import jaconv

__all__ = ["normalize_title"]

# Punctuation and decorative symbols, in ASCII and full-width variants
_SYMBOLS = (
    "!¡！‼⁈?¿？#＃%％*＊+＋,，、.．｡・。･·‧､/／∕⁄\\=＝@＠|｜$＄￥¥¢"
    "□▲△▼▽◆◇○◎●◯★☆☠♀♂♡♥♪♭♯⚡✞✩✶✽✿❄❤⤴←↑→⇔℃※®√…ªⁿ␣∞∅∀ː±°•†"
)
_QUOTES = "\"'^`’‘“”„″〝〟´ʼ‚"
_COLONS = ":：;；"
_DASHES = "-_—―–＿‐‑‒−─－ｰ"
_TILDES = "~∽～〜"
_BRACKETS = "<>＜＞()（）[]［］{}｛｝｢｣「」〈〉《》『』【】〔〕≪≫«»≦≧≠∬"

_REMOVED_CHARACTERS = frozenset(_SYMBOLS + _QUOTES + _COLONS + _DASHES + _TILDES + _BRACKETS)

# Unicode categories without meaning for a title: separators, control and
# format characters (zero-width spaces, BOM, soft hyphen) and combining marks
_REMOVED_CATEGORIES = frozenset({"Zs", "Zl", "Zp", "Cc", "Cf", "Mn", "Me"})

_SUBSTITUTIONS: dict[str, str] = {
    "＆": "&",
    "☓": "x",
    "×": "x",
    "ß": "ss",
    "ⅰ": "i",
    "ⅱ": "ii",
    "ⅲ": "iii",
    "ⅳ": "iv",
    "ⅴ": "v",
    "ⅵ": "vi",
    "ⅶ": "vii",
    "ⅷ": "viii",
    "ⅸ": "ix",
    "ⅹ": "x",
    "ⅺ": "xi",
    "ⅻ": "xii",
    "½": "12",
    "⅙": "16",
    "⅛": "18",
    "¹": "1",
    "²": "2",
    "³": "3",
    "№": "no",
    "①": "1",
    "②": "2",
    "③": "3",
    "④": "4",
    "⑤": "5",
    "⑥": "6",
    "⑦": "7",
    "⑧": "8",
    "⑨": "9",
}

_TRANSLATION = str.maketrans(
    {**_SUBSTITUTIONS, **{char: None for char in _REMOVED_CHARACTERS}}
)


def _is_removed(char: str) -> bool:
    return char.isspace() or unicodedata.category(char) in _REMOVED_CATEGORIES


def normalize_title(title: str) -> str:
    """Fold a title or synonym into a key suitable for equality comparison.

    Full-width ASCII is folded to half-width and the result is lower-cased.
    Look-alike characters are substituted by their ASCII equivalent, while
    punctuation, decorations, whitespace and invisible characters are removed
    entirely. The function is total and idempotent.

    Args:
        title: Any title or synonym

    Returns:
        Normalized key. Titles consisting of nothing but symbols keep their
        visible symbols, so the key is only empty for blank input

    Example:
        >>> normalize_title("Ｃｏｗｂｏｙ Ｂｅｂｏｐ！")
        'cowboybebop'
        >>> normalize_title("Fate/stay night [Unlimited Blade Works]")
        'fatestaynightunlimitedbladeworks'
    """
    if not title:
        return ""

    folded = jaconv.z2h(title, kana=False, ascii=True, digit=True).lower()
    normalized = "".join(
        char for char in folded.translate(_TRANSLATION) if not _is_removed(char)
    )
    if normalized:
        return normalized

    return "".join(char for char in folded if not _is_removed(char))
