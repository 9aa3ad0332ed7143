# optstream/core/stream.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Iterator, Optional

from optstream.errors import OptstreamError
from optstream.utils import setup_logger

logger = setup_logger(__name__)


class StreamStatus(Enum):
    EMIT = "emit"
    PENDING = "pending"
    ENDED = "ended"
    FAILED = "failed"


@dataclass(frozen=True)
class StreamResult:
    status: StreamStatus
    value: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def emit(cls, value: Any) -> "StreamResult":
        return cls(StreamStatus.EMIT, value=value)

    @classmethod
    def pending(cls) -> "StreamResult":
        return cls(StreamStatus.PENDING)

    @classmethod
    def ended(cls) -> "StreamResult":
        return cls(StreamStatus.ENDED)

    @classmethod
    def failed(cls, error: BaseException) -> "StreamResult":
        return cls(StreamStatus.FAILED, error=error)

    @property
    def is_emit(self) -> bool:
        return self.status is StreamStatus.EMIT


class PriceDrivenStream:
    """
    Base for the pull-based streams.

    Each poll pulls exactly one item from the upstream source and hands it
    to handle(). handle() returns the value to emit, or None when more
    input is needed. The source may be a plain iterable (poll) or an async
    iterable (apoll). An exception raised by the source, or a data-contract
    error raised by handle(), is reported once as FAILED and finishes the
    stream; every later poll reports ENDED.
    """

    def __init__(self, source=None):
        self.source = source
        self._iterator: Optional[Iterator] = None
        self._async_iterator: Optional[AsyncIterator] = None
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def handle(self, item) -> Any:
        raise NotImplementedError

    def _require_source(self):
        if self.source is None:
            raise RuntimeError(f"{type(self).__name__} has no source to poll")

    def _end(self) -> StreamResult:
        self._finished = True
        logger.info(f"{type(self).__name__} source exhausted")
        return StreamResult.ended()

    def _fail(self, error: BaseException, origin: str) -> StreamResult:
        self._finished = True
        logger.warning(f"{type(self).__name__} stopped on {origin} error: {error}")
        return StreamResult.failed(error)

    def _dispatch(self, item) -> StreamResult:
        try:
            value = self.handle(item)
        except OptstreamError as e:
            return self._fail(e, "input")
        if value is None:
            return StreamResult.pending()
        return StreamResult.emit(value)

    def poll(self) -> StreamResult:
        """Pulls one item from a synchronous source."""
        if self._finished:
            return StreamResult.ended()
        self._require_source()
        if self._iterator is None:
            self._iterator = iter(self.source)
        try:
            item = next(self._iterator)
        except StopIteration:
            return self._end()
        except Exception as e:
            return self._fail(e, "upstream")
        return self._dispatch(item)

    async def apoll(self) -> StreamResult:
        """Pulls one item from an asynchronous source."""
        if self._finished:
            return StreamResult.ended()
        self._require_source()
        if self._async_iterator is None:
            self._async_iterator = self.source.__aiter__()
        try:
            item = await self._async_iterator.__anext__()
        except StopAsyncIteration:
            return self._end()
        except Exception as e:
            return self._fail(e, "upstream")
        return self._dispatch(item)

    def __iter__(self):
        while True:
            result = self.poll()
            if result.status is StreamStatus.EMIT:
                yield result.value
            elif result.status is StreamStatus.FAILED:
                raise result.error
            elif result.status is StreamStatus.ENDED:
                return

    async def __aiter__(self):
        while True:
            result = await self.apoll()
            if result.status is StreamStatus.EMIT:
                yield result.value
            elif result.status is StreamStatus.FAILED:
                raise result.error
            elif result.status is StreamStatus.ENDED:
                return
