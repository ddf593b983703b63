"""Split answer text into paragraphs and inline equipment images."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Literal

IMAGE_PATH_PATTERN = re.compile(r"(/PPE Images/.*?\.png)")


@dataclass(frozen=True)
class Segment:
    kind: Literal["paragraph", "image"]
    value: str


def render_message_text(text: str) -> List[Segment]:
    segments: List[Segment] = []
    for part in IMAGE_PATH_PATTERN.split(text):
        if IMAGE_PATH_PATTERN.fullmatch(part):
            segments.append(Segment(kind="image", value=part))
        elif part.strip():
            segments.append(Segment(kind="paragraph", value=part.strip()))
    return segments
