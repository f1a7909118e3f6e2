import re

# Bengali block. The script has no case folding, so its characters are kept
# verbatim in slugs and percent-encoded at link time.
BENGALI_RANGE = "ঀ-৿"

_BENGALI_TO_LATIN: dict[str, str] = {
    # Vowels
    "অ": "o", "আ": "a", "ই": "i", "ঈ": "i", "উ": "u", "ঊ": "u",
    "ঋ": "ri", "এ": "e", "ঐ": "oi", "ও": "o", "ঔ": "ou",
    # Consonants
    "ক": "k", "খ": "kh", "গ": "g", "ঘ": "gh", "ঙ": "ng",
    "চ": "ch", "ছ": "chh", "জ": "j", "ঝ": "jh", "ঞ": "n",
    "ট": "t", "ঠ": "th", "ড": "d", "ঢ": "dh", "ণ": "n",
    "ত": "t", "থ": "th", "দ": "d", "ধ": "dh", "ন": "n",
    "প": "p", "ফ": "ph", "ব": "b", "ভ": "bh", "ম": "m",
    "য": "j", "র": "r", "ল": "l", "শ": "sh", "ষ": "sh",
    "স": "s", "হ": "h", "ড়": "r", "ঢ়": "rh", "য়": "y",
    "ৎ": "t", "ং": "ng", "ঃ": "h", "ঁ": "n",
    # Vowel signs
    "া": "a", "ি": "i", "ী": "i", "ু": "u", "ূ": "u",
    "ৃ": "ri", "ে": "e", "ৈ": "oi", "ো": "o", "ৌ": "ou",
    "্": "",  # hasanta suppresses the inherent vowel
    # Digits
    "০": "0", "১": "1", "২": "2", "৩": "3", "৪": "4",
    "৫": "5", "৬": "6", "৭": "7", "৮": "8", "৯": "9",
}

_CONSONANTS = frozenset("কখগঘঙচছজঝঞটঠডঢণতথদধনপফবভমযরলশষসহড়ঢ়য়")
_SIGNS = frozenset("ািীুূৃেৈোৌ্")

_MULTI_HYPHEN = re.compile(r"-{2,}")
_SLUG_PATTERN = re.compile(rf"^[a-z0-9{BENGALI_RANGE}]+(?:-[a-z0-9{BENGALI_RANGE}]+)*$")


def _collapse(token: str) -> str:
    return _MULTI_HYPHEN.sub("-", token).strip("-")


def transliterate_bengali(text: str) -> str:
    """
    Romanise Bengali text into a Latin slug token ("Banglish").

    Consonants not followed by a vowel sign or hasanta carry an inherent "o".
    Latin letters and digits pass through lowercased; everything else is dropped.
    """
    out: list[str] = []
    for i, ch in enumerate(text):
        nxt = text[i + 1] if i + 1 < len(text) else ""
        if ch in _BENGALI_TO_LATIN:
            latin = _BENGALI_TO_LATIN[ch]
            if ch in _CONSONANTS and nxt not in _SIGNS and latin:
                out.append(latin + "o")
            else:
                out.append(latin)
        elif ch.isascii() and ch.isalnum():
            out.append(ch.lower())
        elif ch.isspace() or ch == "-":
            if out and out[-1] != "-":
                out.append("-")
    return _collapse("".join(out).lower())


def normalize(title: str, *, transliterate: bool = False) -> str:
    """
    Turn a title into a URL-safe slug token.

    Lowercases, maps whitespace to hyphens and drops characters outside
    [a-z0-9-] except Bengali text, which is kept as-is. With transliterate=True
    Bengali is romanised instead. May return "" for titles with nothing usable.
    """
    if not title:
        return ""
    if transliterate:
        return transliterate_bengali(title)

    token = title.strip().lower()
    token = re.sub(r"[\s_]+", "-", token)
    token = re.sub(rf"[^a-z0-9{BENGALI_RANGE}-]", "", token)
    return _collapse(token)


def is_valid_slug(slug: str) -> bool:
    return bool(_SLUG_PATTERN.match(slug))


def with_suffix(base: str, n: int) -> str:
    return base if n <= 1 else f"{base}-{n}"
