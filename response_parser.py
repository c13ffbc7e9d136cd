"""Parsing of the ``translate_a/single`` text response.

The endpoint answers with nested arrays of quoted fragments that are not
always valid JSON (empty slots appear as ``,,``). Instead of decoding the
document the translation is rebuilt from its quoted fragments in a few small
stages, each usable on its own:

1. :func:`locate_phrase_section` finds the ``,,"<source code>"`` marker that
   separates the translated phrases from trailing metadata.
2. :func:`strip_array_punctuation` removes the array brackets.
3. :func:`split_fragments` splits the remaining text on double quotes.
4. :func:`collect_translated_phrases` walks translated/original pairs.
5. :func:`fix_punctuation` removes the spaces the endpoint leaves before
   sentence punctuation.

Responses without the marker are single-token translations and only the first
quoted string is used.
"""

from __future__ import annotations

import re
import urllib.parse
from typing import List, Optional, Sequence


SPEECH_ENDPOINT = "https://translate.googleapis.com/translate_tts"

PHRASE_SEPARATOR = "  "

_SPACE_BEFORE_PUNCTUATION = re.compile(r"[ ]+([?!,.;])")


def phrase_marker(source_code: str) -> str:
    return f',,"{source_code}"'


def locate_phrase_section(body: str, source_code: str) -> Optional[str]:
    """Return the part of ``body`` that holds the translated phrases.

    ``None`` means the marker is absent and the body has the single-token
    shape. When the marker opens the body the phrases follow it instead of
    preceding it.
    """

    marker = phrase_marker(source_code)
    index = body.find(marker)
    if index == -1:
        return None
    if index == 0:
        return body[len(marker):]
    return body[:index]


def extract_first_quoted(body: str) -> str:
    """Return the text between the first two double quotes, or ``""``."""

    start = body.find('"')
    if start == -1:
        return ""
    end = body.find('"', start + 1)
    if end == -1:
        return ""
    return body[start + 1:end]


def strip_array_punctuation(section: str) -> str:
    text = section.replace("],[", ",")
    text = text.replace("]", "").replace("[", "")
    text = text.replace('","', '"')
    return text.strip(",")


def split_fragments(text: str) -> List[str]:
    return [fragment for fragment in text.split('"') if fragment]


def collect_translated_phrases(fragments: Sequence[str]) -> List[str]:
    """Pick the translated phrase out of each translated/original pair.

    A fragment starting with ``,,`` stands for an empty translated phrase. The
    walk then advances by one instead of two so the following pairs stay
    aligned.
    """

    phrases: List[str] = []
    index = 0
    while index < len(fragments):
        fragment = fragments[index]
        if fragment.startswith(",,"):
            index += 1
            continue
        phrases.append(fragment)
        index += 2
    return phrases


def fix_punctuation(text: str) -> str:
    """Trim ``text`` and drop spaces in front of ``? ! , . ;``."""

    return _SPACE_BEFORE_PUNCTUATION.sub(r"\1", text.strip())


def parse_translation(body: str, source_code: str) -> str:
    """Rebuild the translated text from a raw response ``body``.

    Returns an empty string when the response holds nothing translatable.
    """

    section = locate_phrase_section(body, source_code)
    if section is None:
        translation = extract_first_quoted(body)
    else:
        fragments = split_fragments(strip_array_punctuation(section))
        translation = "".join(
            phrase + PHRASE_SEPARATOR for phrase in collect_translated_phrases(fragments)
        )
    return fix_punctuation(translation)


def build_speech_url(translated_text: str, target_code: str) -> str:
    params = {
        "ie": "UTF-8",
        "q": translated_text,
        "tl": target_code,
        "total": 1,
        "idx": 0,
        "textlen": len(translated_text),
        "client": "gtx",
    }
    return f"{SPEECH_ENDPOINT}?{urllib.parse.urlencode(params)}"
