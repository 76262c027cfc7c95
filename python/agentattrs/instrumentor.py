"""
OpenTelemetry bridge
====================

Hands destination-filtered attribute views to OpenTelemetry. Each
destination maps onto a span signal:

  - ``TXN_TRACE`` attributes become span attributes.
  - ``TXN_EVENT`` attributes are attached to span events.
  - ``ERROR`` attributes are attached to recorded exceptions.

Usage:
    from agentattrs import AttributeInstrumentor, AttributeSettings, Destination

    instrumentor = AttributeInstrumentor(settings=AttributeSettings(exclude=["request.headers.*"]))

    with instrumentor.span("checkout") as (span, store):
        store.agent_add_string(Destination.ALL, "request.uri", "/cart")
        store.user_add(Destination.ALL, "cart.size", 3)

Transport of the resulting spans is left to whatever exporter the
application configured on its TracerProvider.
"""

import contextlib
import logging
from typing import Any, Iterator, Optional, Union

from opentelemetry import trace
from opentelemetry.trace import Span, StatusCode

from agentattrs.config import AttributeConfig
from agentattrs.destinations import Destination
from agentattrs.settings import AttributeSettings
from agentattrs.store import AttributeStore

logger = logging.getLogger(__name__)


class AttributeInstrumentor:
    """
    Owns the shared AttributeConfig and bridges stores onto OTel spans.

    One instrumentor is created per process; each unit of work gets its own
    store from :meth:`create_store`.
    """

    def __init__(
        self,
        config: Optional[AttributeConfig] = None,
        *,
        settings: Optional[AttributeSettings] = None,
        tracer_name: str = "agentattrs",
        tracer_provider: Optional[trace.TracerProvider] = None,
    ):
        """
        Initialize the instrumentor.

        Args:
            config: Attribute configuration shared by all stores. Built from
                    ``settings`` when omitted.
            settings: Attribute settings; defaults to ``AttributeSettings()``,
                      which reads the environment.
            tracer_name: OTel tracer name used by :meth:`span`.
            tracer_provider: TracerProvider to take the tracer from. The
                             global provider is used when omitted.
        """
        if config is None:
            config = (settings or AttributeSettings()).build_config()
        self.config = config
        self.tracer_name = tracer_name
        self._tracer = trace.get_tracer(tracer_name, "1.0.0", tracer_provider=tracer_provider)

    def create_store(self) -> AttributeStore:
        return AttributeStore(self.config)

    @staticmethod
    def get_span_attributes(
        store: AttributeStore,
        destinations: Union[Destination, int] = Destination.TXN_TRACE,
    ) -> dict[str, Any]:
        """
        Merge the user and agent views for ``destinations``.

        Agent attributes win on key collisions. Null values are dropped
        since OTel attributes cannot hold them.
        """
        merged = store.user_to_obj(destinations)
        merged.update(store.agent_to_obj(destinations))
        return {key: value for key, value in merged.items() if value is not None}

    def apply_to_span(
        self,
        store: AttributeStore,
        span: Optional[Span] = None,
        destinations: Union[Destination, int] = Destination.TXN_TRACE,
    ) -> dict[str, Any]:
        """Set the attributes for ``destinations`` on ``span`` (or the current span)."""
        if span is None:
            span = trace.get_current_span()
        attrs = self.get_span_attributes(store, destinations)
        if attrs:
            span.set_attributes(attrs)
        return attrs

    def add_span_event(
        self,
        store: AttributeStore,
        name: str,
        span: Optional[Span] = None,
        destinations: Union[Destination, int] = Destination.TXN_EVENT,
    ) -> dict[str, Any]:
        """Emit a span event named ``name`` carrying the attributes for ``destinations``."""
        if span is None:
            span = trace.get_current_span()
        attrs = self.get_span_attributes(store, destinations)
        span.add_event(name, attributes=attrs)
        return attrs

    def record_error(
        self,
        store: AttributeStore,
        exception: BaseException,
        span: Optional[Span] = None,
    ) -> dict[str, Any]:
        """Record ``exception`` on the span with the ``ERROR`` attributes."""
        if span is None:
            span = trace.get_current_span()
        attrs = self.get_span_attributes(store, Destination.ERROR)
        span.record_exception(exception, attributes=attrs)
        span.set_status(StatusCode.ERROR, f"{type(exception).__name__}: {exception}")
        return attrs

    @contextlib.contextmanager
    def span(self, name: str, **kwargs: Any) -> Iterator[tuple[Span, AttributeStore]]:
        """
        Start a span with a fresh store.

        On exit the ``TXN_TRACE`` attributes are set on the span and a
        ``"transaction"`` span event carries the ``TXN_EVENT`` attributes.
        An exception escaping the block is recorded with the ``ERROR``
        attributes and re-raised.
        """
        store = self.create_store()
        with self._tracer.start_as_current_span(
            name, record_exception=False, set_status_on_exception=False, **kwargs
        ) as span:
            try:
                yield span, store
            except Exception as e:
                self._finish(store, span, e)
                raise
            self._finish(store, span, None)

    def _finish(
        self,
        store: AttributeStore,
        span: Span,
        exception: Optional[BaseException],
    ) -> None:
        try:
            self.apply_to_span(store, span)
            self.add_span_event(store, "transaction", span)
            if exception is not None:
                self.record_error(store, exception, span)
        except Exception as e:
            logger.error(f"Failed to attach attributes to span: {e}")


__all__ = ["AttributeInstrumentor"]
