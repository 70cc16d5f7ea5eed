import re

_INVISIBLE_CHARS = r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]"
_CODE_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*$")


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def clean_letter_text(text: str) -> str:
    """Clean LLM output artifacts from generated letter text.

    Handles: unicode artifacts, code fences wrapped around the letter,
    Windows line endings, and trailing whitespace. Bold markers and bullet
    markers are left alone for the segmenter.
    """
    if not text:
        return ""

    # 1. Remove unicode artifacts (BOM, zero-width spaces, soft hyphens)
    text = text.lstrip("\ufeff")
    text = re.sub(_INVISIBLE_CHARS, "", text)

    # 2. Line endings
    text = normalize_newlines(text)

    # 3. Drop ``` fence lines, trailing whitespace per line
    lines = [line.rstrip() for line in text.split("\n") if not _CODE_FENCE.match(line)]

    return "\n".join(lines).strip()
