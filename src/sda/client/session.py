"""Client session — the request lifecycle state machine.

Transitions::

    Idle / Success / Error --submit--> Loading
    Loading --response ok--> Success(text)
    Loading --failure-----> Error(message)

Overlapping submits are not serialized. By default whichever response
resolves last wins, even if it belongs to an older submit. With
``discard_stale=True`` responses from anything but the latest submit are
dropped instead.
"""

from __future__ import annotations

import asyncio
import html
from collections import deque
import logging
from typing import Callable, Literal

from pydantic import BaseModel, ConfigDict

from sda.client.highlight import highlight_auto
from sda.client.transport import Transport
from sda.errors import AssistantError
from sda.prompts import parse_analysis_type
from sda.schemas.analysis import DEFAULT_LANGUAGE, AnalysisRequest, AnalysisType

logger = logging.getLogger(__name__)

ERROR_MARKER = "🚨"

# Transitions kept in ``history``; older ones are dropped.
HISTORY_LIMIT = 100


class IdleState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["idle"] = "idle"


class LoadingState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["loading"] = "loading"
    seq: int


class SuccessState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    text: str


class ErrorState(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["error"] = "error"
    message: str


SessionState = IdleState | LoadingState | SuccessState | ErrorState


class AnalysisSession:
    """One client's transient, unpersisted UI state.

    ``code`` and ``language`` are plain attributes updated by input events.
    ``state`` only changes through ``submit`` and the resolution of the
    request it starts; the most recent changes are kept in ``history``
    for inspection.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        language: str = DEFAULT_LANGUAGE,
        discard_stale: bool = False,
        highlighter: Callable[[str], str] = highlight_auto,
    ) -> None:
        self.transport = transport
        self.code = ""
        self.language = language
        self.discard_stale = discard_stale
        self._highlighter = highlighter
        self._seq = 0
        self.state: SessionState = IdleState()
        self.history: deque[SessionState] = deque([self.state], maxlen=HISTORY_LIMIT)

    # ------------------------------------------------------------------
    # Derived view
    # ------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return isinstance(self.state, LoadingState)

    @property
    def result_text(self) -> str:
        """Raw result: the completion text, the error message, or ''."""
        if isinstance(self.state, SuccessState):
            return self.state.text
        if isinstance(self.state, ErrorState):
            return self.state.message
        return ""

    def render_html(self) -> str:
        """Markup for the result area.

        Only successful results go through the highlighter; the stored text
        is left untouched.
        """
        if isinstance(self.state, SuccessState):
            return self._highlighter(self.state.text)
        if isinstance(self.state, ErrorState):
            return html.escape(self.state.message)
        return ""

    def copy_result(self, write: Callable[[str], object]) -> bool:
        """Hand the current result to a clipboard writer, if there is one."""
        text = self.result_text
        if not text:
            return False
        write(text)
        return True

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def submit(self, analysis_type: AnalysisType | str) -> asyncio.Task[None]:
        """Capture code/language, enter Loading, and start the request.

        Must be called from a running event loop. Returns the task that
        resolves the request; it never raises.
        """
        request = AnalysisRequest(
            code=self.code,
            analysis_type=parse_analysis_type(analysis_type),
            language=self.language,
        )
        self._seq += 1
        seq = self._seq
        self._transition(LoadingState(seq=seq))
        logger.debug("Submitted #%d: %s", seq, request.analysis_type.value)
        return asyncio.get_running_loop().create_task(self._run(seq, request))

    async def _run(self, seq: int, request: AnalysisRequest) -> None:
        try:
            text = await self.transport.send(request)
        except AssistantError as exc:
            self._resolve(seq, ErrorState(message=f"{ERROR_MARKER} Error: {exc}"))
        except Exception:
            logger.exception("Analyze request #%d failed unexpectedly", seq)
            self._resolve(seq, ErrorState(message=f"{ERROR_MARKER} Error: Unexpected client error"))
        else:
            self._resolve(seq, SuccessState(text=text))

    def _resolve(self, seq: int, state: SessionState) -> None:
        if self.discard_stale and seq != self._seq:
            logger.debug("Dropping stale response #%d (latest is #%d)", seq, self._seq)
            return
        self._transition(state)

    def _transition(self, state: SessionState) -> None:
        self.state = state
        self.history.append(state)
