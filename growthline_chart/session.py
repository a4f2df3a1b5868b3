from __future__ import annotations

import logging
from pathlib import Path
import time
from typing import Callable

from .config import ChartConfig
from .controller import InteractionController, TransitionResult
from .events import ChartEvent
from .renderer import ChartCanvas, ChartRenderer
from .repository import load_repository

LOGGER = logging.getLogger(__name__)


class ChartSession:
    """One chart on one surface: events in, redraws out.

    Pointer hovers arrive far faster than a redraw is useful, so hovers closer
    together than ``hover_interval_ns`` are parked and only the latest parked
    hover is applied on ``flush()`` or the next admitted hover.
    """

    def __init__(
        self,
        controller: InteractionController,
        renderer: ChartRenderer,
        *,
        hover_interval_ns: int | None = None,
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        self.controller = controller
        self.renderer = renderer
        self._hover_interval_ns = (
            controller.config.hover_interval_ns if hover_interval_ns is None else int(hover_interval_ns)
        )
        self._clock = clock
        self._last_hover_ns: int | None = None
        self._pending_hover: ChartEvent | None = None
        self._hint: str | None = None
        self.redraw_count = 0

    @classmethod
    def open(cls, csv_path: Path | str, config: ChartConfig, canvas: ChartCanvas) -> "ChartSession":
        repository = load_repository(csv_path, config)
        controller = InteractionController(repository, config)
        renderer = ChartRenderer(canvas, repository.countries(), config.theme)
        session = cls(controller, renderer)
        session.render()
        return session

    @property
    def hint(self) -> str | None:
        """Message for the last rejected window request, cleared by the next accepted one."""
        return self._hint

    @property
    def has_pending_hover(self) -> bool:
        return self._pending_hover is not None

    def render(self) -> None:
        self.renderer.render(self.controller.get_geometry(), self.controller.highlight())
        self.redraw_count += 1

    def dispatch(self, event: ChartEvent) -> TransitionResult:
        if event.kind == "hover":
            return self._dispatch_hover(event)

        result = self.controller.dispatch(event)
        if result.error is not None:
            self._hint = str(result.error)
            return result
        self._hint = None
        if result.changed:
            self.render()
        return result

    def flush(self) -> None:
        if self._pending_hover is None:
            return
        event = self._pending_hover
        self._pending_hover = None
        self._apply_hover(event, self._clock())

    def _dispatch_hover(self, event: ChartEvent) -> TransitionResult:
        state = self.controller.get_view_state()
        now = self._clock()
        if self._last_hover_ns is not None and now - self._last_hover_ns < self._hover_interval_ns:
            self._pending_hover = event
            return TransitionResult(previous=state, state=state)
        self._pending_hover = None
        self._apply_hover(event, now)
        return TransitionResult(previous=state, state=state)

    def _apply_hover(self, event: ChartEvent, now: int) -> None:
        before = self.controller.highlight()
        self.controller.dispatch(event)
        self._last_hover_ns = now
        after = self.controller.highlight()
        if after != before:
            self.renderer.update_highlight(self.controller.get_geometry(), after)
            LOGGER.debug("hover -> %s", after.hovered)
