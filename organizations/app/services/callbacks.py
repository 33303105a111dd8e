"""
Callback Dispatcher

Process-wide registry of event handlers. Handlers run synchronously, in
registration order, after the triggering change has been committed.

Failure policy:
- A handler raising CallbackAbort stops the dispatch and propagates
- With strict=True any handler error stops the dispatch and propagates
- Otherwise the error is logged and the next handler runs
"""

import inspect
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

from organizations.domain.callback_context import CallbackContext
from organizations.domain.entities import CallbackEvent

logger = logging.getLogger(__name__)

Handler = Callable[[CallbackContext], Any]


class CallbackAbort(Exception):
    """Raised by a handler to abort dispatch and surface the failure"""


class CallbackDispatcher:
    def __init__(self):
        self._handlers: Dict[CallbackEvent, List[Handler]] = defaultdict(list)

    def register(self, event: str, handler: Handler) -> Handler:
        if not callable(handler):
            raise TypeError("Callback handler must be callable")
        self._handlers[CallbackEvent(event)].append(handler)
        return handler

    def on(self, event: str) -> Callable[[Handler], Handler]:
        """Decorator form of register()"""

        def decorator(handler: Handler) -> Handler:
            return self.register(event, handler)

        return decorator

    def unregister(self, event: str, handler: Handler) -> None:
        handlers = self._handlers.get(CallbackEvent(event), [])
        if handler in handlers:
            handlers.remove(handler)

    def clear(self) -> None:
        self._handlers.clear()

    def handlers_for(self, event: str) -> List[Handler]:
        return list(self._handlers.get(CallbackEvent(event), []))

    async def dispatch(
        self, event: str, context: CallbackContext, strict: bool = False
    ) -> None:
        for handler in self.handlers_for(event):
            try:
                result = handler(context)
                if inspect.isawaitable(result):
                    await result
            except CallbackAbort:
                raise
            except Exception:
                if strict:
                    raise
                logger.exception(f"Callback error for {CallbackEvent(event).value}")


callback_dispatcher = CallbackDispatcher()
