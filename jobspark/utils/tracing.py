import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

trace_context: ContextVar[Optional['TraceSpan']] = ContextVar(
    'trace_context', default=None
)

logger = logging.getLogger(__name__)


@dataclass
class TraceSpan:
    '''A timed unit of work inside an achievements pass.'''

    name: str
    start_time: float = field(default_factory=time.perf_counter)
    end_time: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    parent: Optional['TraceSpan'] = None
    children: list['TraceSpan'] = field(default_factory=list)
    failed: bool = False

    @property
    def duration(self) -> Optional[float]:
        '''Duration in seconds, None while the span is open.'''
        return self.end_time - self.start_time if self.end_time else None

    @property
    def root(self) -> 'TraceSpan':
        span = self
        while span.parent is not None:
            span = span.parent
        return span

    def finish(self) -> None:
        self.end_time = time.perf_counter()

        duration_ms = (self.duration or 0) * 1000
        metadata_str = ', '.join(f'{k}={v}' for k, v in self.metadata.items())
        status = ' FAILED' if self.failed else ''

        # Nested spans are noisy; only the outermost one is logged at INFO
        if self.parent:
            logger.debug(
                f'{self.name}: {duration_ms:.2f}ms{status} '
                f'(parent: {self.parent.name}) [{metadata_str}]'
            )
        else:
            logger.info(f'{self.name}: {duration_ms:.2f}ms{status} [{metadata_str}]')


@contextmanager
def trace_span(
    name: str, metadata: Optional[Dict[str, Any]] = None
) -> Iterator[TraceSpan]:
    '''Open a span, nest it under the current one and log it on exit.

    Example:
        with trace_span('achievements.check', {'user_id': user_id}):
            engine.check_and_award(user_id)
    '''
    parent = trace_context.get()
    span = TraceSpan(name=name, metadata=dict(metadata or {}), parent=parent)
    if parent:
        parent.children.append(span)

    token = trace_context.set(span)
    try:
        yield span
    except BaseException:
        span.failed = True
        raise
    finally:
        span.finish()
        trace_context.reset(token)


def get_current_span() -> Optional[TraceSpan]:
    return trace_context.get()


def add_span_metadata(key: str, value: Any) -> None:
    '''Attach metadata to the current span, if any.'''
    current = trace_context.get()
    if current:
        current.metadata[key] = value
