from __future__ import annotations

import re

# `content` must follow `name`/`property` within the same tag; values must be double-quoted.
# The key is the last `name`/`property` before `content`.
_KEY_ATTR = r'(?<![\w-])(?:name|property)\s*=\s*'
_META_PAIR_RE = re.compile(
    _KEY_ATTR + r'"([^"]*)"(?:(?!' + _KEY_ATTR + r')[^>])*?(?<![\w-])content\s*=\s*"([^"]*)"',
    re.IGNORECASE,
)
_KEY_SEPARATOR_RE = re.compile(r"[:_]")


def _is_meta_tag(tag: str) -> bool:
    return "<meta" in tag.lower()


def tokenize_meta_tags(head_text: str) -> list[str]:
    """
    Pull every `<meta ...>` tag out of the head text, in document order.

    A plain two-state scan: outside a tag everything is dropped until `<`, inside a tag
    everything is kept up to the first `>`. Nested `<` does not restart the tag.
    """
    tags: list[str] = []
    buf: list[str] = []
    in_tag = False

    for ch in head_text:
        if not in_tag:
            if ch == "<":
                in_tag = True
                buf = [ch]
            continue
        buf.append(ch)
        if ch == ">":
            tag = "".join(buf)
            if _is_meta_tag(tag):
                tags.append(tag)
            in_tag = False
            buf = []

    return tags


def extract_meta_pairs(meta_tags_text: str) -> list[tuple[str, str]]:
    return [(m.group(1), m.group(2)) for m in _META_PAIR_RE.finditer(meta_tags_text)]


def normalize_key(raw_key: str) -> str:
    """
    `og:title` -> `ogTitle`, `twitter_site` -> `twitterSite`, `DC_Title` -> `dcTitle`.

    Keys without a separator are returned as-is.
    """
    parts = _KEY_SEPARATOR_RE.split(raw_key)
    if len(parts) == 1:
        return raw_key
    head, *rest = parts
    return head.lower() + "".join(p[:1].upper() + p[1:].lower() for p in rest)


def parse_head_meta(head_text: str) -> dict[str, str]:
    meta: dict[str, str] = {}
    for raw_key, value in extract_meta_pairs("".join(tokenize_meta_tags(head_text))):
        meta[normalize_key(raw_key)] = value
    return meta
