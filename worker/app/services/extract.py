# worker/app/services/extract.py
from __future__ import annotations

import re
from typing import Callable, List, Optional

Matcher = Callable[[str], Optional[str]]

_QUOTED = re.compile(r'"(.*?)"')
# `$` also accepts a single trailing newline after the caption.
_ADDED_IMAGE = re.compile(r"Added image '.*?'\n (.*?)$")


def _regex_matcher(pattern: re.Pattern) -> Matcher:
    def match(output: str) -> Optional[str]:
        m = pattern.search(output)
        return m.group(1) if m else None

    return match


match_quoted = _regex_matcher(_QUOTED)
match_added_image = _regex_matcher(_ADDED_IMAGE)

# Priority order: the first matcher that captures wins, even an empty capture.
MATCHERS: List[Matcher] = [match_quoted, match_added_image]


def parse_output(output: str, matchers: Optional[List[Matcher]] = None) -> str:
    """
    Pull the caption out of raw model output.

    Tries each matcher in order; if none captures, returns the trimmed output.
    Never raises; may return "".
    """
    for matcher in matchers if matchers is not None else MATCHERS:
        caption = matcher(output)
        if caption is not None:
            return caption
    return output.strip()
