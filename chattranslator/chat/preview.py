from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Tuple

from chattranslator.chat.colors import (
    DEFAULT_INPUT_COLOR,
    INCORRECT_COLOR,
    UNTYPED_COLOR,
    wrap_with_color_tag,
)

# Trailing characters that must all be wrong before the preview gives up.
MISMATCH_RUN = 5


class PreviewState(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


class CharMark(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNTYPED = "untyped"


class InputWriter(Protocol):
    def set_input_text(self, rendered: str) -> None:
        ...

    def clear_typed_text(self) -> None:
        """Empty the host's raw typed buffer (not the rendered line)."""
        ...

    def is_normal_input_mode(self) -> bool:
        ...


@dataclass
class PreviewSession:
    target: str
    player_name: str
    typed_so_far: str = ""


def diff_marks(target: str, user_input: str) -> List[Tuple[str, CharMark]]:
    """
    Per-position marks over the target length: typed positions carry the
    user's character, the rest carry the target character.
    """
    out: List[Tuple[str, CharMark]] = []
    for i, correct in enumerate(target):
        if i < len(user_input):
            typed = user_input[i]
            mark = CharMark.CORRECT if typed.lower() == correct.lower() else CharMark.INCORRECT
            out.append((typed, mark))
        else:
            out.append((correct, CharMark.UNTYPED))
    return out


def should_cancel(target: str, previous: str, user_input: str) -> bool:
    # line sent or cleared
    if previous and not user_input:
        return True
    # typed past the end of the translation
    if len(user_input) > len(target):
        return True
    if len(user_input) >= MISMATCH_RUN and len(target) >= MISMATCH_RUN:
        n = len(user_input)
        for i in range(1, MISMATCH_RUN + 1):
            if user_input[n - i].lower() == target[n - i].lower():
                return False
        return True
    return False


class PreviewMatcher:
    """
    Ghost-text preview of a translation inside the player's chat input.

    The host widget only supports whole-string replacement, so every keystroke
    re-renders the full colored line.
    """

    def __init__(
        self,
        writer: InputWriter,
        *,
        highlight_enabled: bool = True,
        correct_color: str = DEFAULT_INPUT_COLOR,
        logger=None,
    ) -> None:
        self.writer = writer
        self.highlight_enabled = highlight_enabled
        self.correct_color = correct_color
        self.logger = logger
        self._session: Optional[PreviewSession] = None

    @property
    def state(self) -> PreviewState:
        return PreviewState.ACTIVE if self._session is not None else PreviewState.INACTIVE

    @property
    def session(self) -> Optional[PreviewSession]:
        return self._session

    def start(self, target: str, player_name: str) -> bool:
        if not target:
            return False
        if not self.writer.is_normal_input_mode():
            # typing into a dialog or a private message prompt
            self._debug("preview_refused_input_mode")
            return False
        # the untranslated text is still in the host buffer; keystrokes must start from ""
        self.writer.clear_typed_text()
        self._session = PreviewSession(target=target, player_name=player_name)
        self.writer.set_input_text(self.render(""))
        self._debug("preview_started", chars=len(target))
        return True

    def update(self, user_input: str) -> PreviewState:
        session = self._session
        if session is None:
            return PreviewState.INACTIVE
        user_input = user_input or ""
        if should_cancel(session.target, session.typed_so_far, user_input):
            self._cancel(user_input)
            return PreviewState.INACTIVE
        session.typed_so_far = user_input
        self.writer.set_input_text(self.render(user_input))
        return PreviewState.ACTIVE

    def stop(self) -> None:
        if self._session is None:
            return
        self._cancel(self._session.typed_so_far)

    def render(self, user_input: str) -> str:
        session = self._session
        if session is None:
            raise RuntimeError("no active preview")
        colors = {
            CharMark.CORRECT: self.correct_color if self.highlight_enabled else DEFAULT_INPUT_COLOR,
            CharMark.INCORRECT: INCORRECT_COLOR,
            CharMark.UNTYPED: UNTYPED_COLOR,
        }
        body = "".join(
            wrap_with_color_tag(ch, colors[mark]) for ch, mark in diff_marks(session.target, user_input)
        )
        return _input_line(session.player_name, body)

    def _cancel(self, raw_input: str) -> None:
        session = self._session
        self._session = None
        if session is None:
            return
        self.writer.set_input_text(
            _input_line(session.player_name, wrap_with_color_tag(raw_input, DEFAULT_INPUT_COLOR))
        )
        self._debug("preview_stopped")

    def _debug(self, event: str, **fields) -> None:
        if self.logger is not None:
            self.logger.debug(event, extra=fields)


def _input_line(player_name: str, body: str) -> str:
    return f"{player_name}: {body}{wrap_with_color_tag('*', DEFAULT_INPUT_COLOR)}"
