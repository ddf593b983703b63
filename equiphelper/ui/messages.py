from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

GREETING_TEXT = (
    "👨‍🚒 Hey there! I'm equipHelper, your expert assistant for all things firefighting equipment! 🧰 "
    "Need help with maintaining your gear, or have questions about equipment care and inspection? "
    "Let’s make sure you're well-prepared for every emergency with properly maintained gear! 🚒💡"
)
FALLBACK_TEXT = "Sorry, something went wrong."


class Message(BaseModel):
    text: str
    type: Literal["user", "ai"]


def greeting() -> Message:
    return Message(text=GREETING_TEXT, type="ai")
