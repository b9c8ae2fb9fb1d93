"""
Crawl events: the progress side-channel of the orchestrator.

The orchestrator emits a CrawlEvent at each step and hands it to a sink
(any callable). Sinks observe; they never influence control flow, so the
crawl algorithm can be tested by collecting events instead of capturing
log output.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .enums import CrawlEventType


@dataclass(frozen=True)
class CrawlEvent:
    """One progress step of a crawl."""
    type: CrawlEventType
    page_number: Optional[int] = None
    url: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)


EventSink = Callable[[CrawlEvent], None]


class EventCollector:
    """
    Sink that keeps every event in order (used by tests and the export script).

    Usage:
        collector = EventCollector()
        await orchestrator.crawl(query, sink=collector)
        collector.of_type(CrawlEventType.PAGE_FETCH_FAILED)
    """

    def __init__(self) -> None:
        self.events: list[CrawlEvent] = []

    def __call__(self, event: CrawlEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: CrawlEventType) -> list[CrawlEvent]:
        return [event for event in self.events if event.type == event_type]

    @property
    def types(self) -> list[CrawlEventType]:
        return [event.type for event in self.events]


def fan_out(*sinks: Optional[EventSink]) -> EventSink:
    """Combine several sinks into one, skipping None entries."""
    active = [sink for sink in sinks if sink is not None]

    def _emit(event: CrawlEvent) -> None:
        for sink in active:
            sink(event)

    return _emit
