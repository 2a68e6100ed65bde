"""
Render session with stale-result discarding.

Each render request gets a generation token. A request that is superseded
while debouncing is skipped; a result that finishes after a newer request
was issued is discarded. Only the latest request's result is ever applied.
"""

import asyncio
import os
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv

from scribe.contexts.editing.resume_document import ResumeDocument
from scribe.contexts.rendering.compiler import Compiler
from scribe.contexts.rendering.logger import log_stale_result
from scribe.contexts.rendering.pipeline import RenderResult, render_resume
from scribe.contexts.rendering.render_cache import RenderCache
from scribe.contexts.templating.dialects import get_renderer
from scribe.contexts.templating.renderer_base import MarkupRenderer

load_dotenv()
RENDER_DEBOUNCE_S = float(os.getenv("RENDER_DEBOUNCE_S", "0.8"))


class RenderSession:
    """
    Live-preview render loop for one editor.

    Attributes:
        latest_result: Most recently applied RenderResult
        last_pdf: PDF bytes of the most recent successful render

    Example:
        session = RenderSession(compiler=get_compiler())
        result = await session.request(data)
        if result is None:
            ...  # superseded by a newer edit
    """

    def __init__(
        self,
        renderer: Optional[MarkupRenderer] = None,
        compiler: Optional[Compiler] = None,
        cache: Optional[RenderCache] = None,
        debounce_s: Optional[float] = None,
        reject_unsafe: bool = True,
    ):
        self.renderer = renderer or get_renderer()
        self.compiler = compiler
        self.cache = cache if cache is not None else RenderCache()
        self.debounce_s = RENDER_DEBOUNCE_S if debounce_s is None else debounce_s
        self.reject_unsafe = reject_unsafe

        self._generation = 0
        self.latest_result: Optional[RenderResult] = None
        self.last_pdf: Optional[bytes] = None

    @property
    def generation(self) -> int:
        """Token of the most recently issued request."""
        return self._generation

    def next_token(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def apply(self, token: int, result: RenderResult) -> Optional[RenderResult]:
        """
        Apply a finished result if its token is still the latest.

        Returns:
            The result when applied, None when stale
        """
        if not self.is_current(token):
            log_stale_result(token, self._generation)
            return None

        self.latest_result = result
        if result.success and result.pdf_bytes:
            self.last_pdf = result.pdf_bytes
        return result

    async def request(self, data: Union[Dict[str, Any], ResumeDocument]) -> Optional[RenderResult]:
        """
        Render after the debounce delay unless a newer request arrives first.

        Returns:
            RenderResult when this request is still the latest, else None
        """
        token = self.next_token()

        if self.debounce_s > 0:
            await asyncio.sleep(self.debounce_s)
            if not self.is_current(token):
                log_stale_result(token, self._generation)
                return None

        # Compilation blocks on network or subprocess I/O
        result = await asyncio.to_thread(
            render_resume,
            data,
            self.renderer,
            self.compiler,
            self.cache,
            self.reject_unsafe,
        )
        return self.apply(token, result)
