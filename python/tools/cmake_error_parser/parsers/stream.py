"""
Incremental parser for CMake console output.

The parser receives the output of a running CMake process in fragments of any
size, splits it into messages at start-of-message markers, classifies each
message and reports it to a diagnostic emitter as soon as its end is known.
"""

import codecs
from types import TracebackType
from typing import Any, Optional, Type, Union

from loguru import logger

from ..core.data_structures import DiagnosticMessage
from ..core.enums import ParserState
from ..emitters.base import DiagnosticEmitter, TextSink
from .location import extract_location
from .patterns import ADJACENT_START_PATTERN, MESSAGE_START_PATTERN, classify


class CMakeErrorParser:
    """
    Push-based parser turning CMake console output into diagnostics.

    An instance parses exactly one stream: call :meth:`feed` for every chunk of
    output in the order it was produced and :meth:`finish` once at the end.
    Instances are not thread-safe.
    """

    def __init__(
        self,
        emitter: DiagnosticEmitter,
        root: Any = None,
        sink: Optional[TextSink] = None,
        encoding: str = "utf-8",
    ) -> None:
        """
        Initialize the parser.

        Args:
            emitter: Collaborator that records each diagnostic
            root: Source root of the project being built, passed through to
                the emitter
            sink: Optional stream receiving every fragment verbatim, before
                any decoding
            encoding: Encoding used to decode fragments fed as bytes
        """
        self.emitter = emitter
        self.root = root
        self.sink = sink
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""
        self._state = ParserState.SEEKING_FIRST_MESSAGE

    @property
    def state(self) -> ParserState:
        return self._state

    @property
    def pending(self) -> str:
        """Output received but not yet consumed into a message."""
        return self._buffer

    def feed(self, fragment: Union[str, bytes]) -> None:
        """Append a fragment of output and emit every message it completes."""
        if self._state is ParserState.FINISHED:
            logger.warning("Ignoring output fed to a finished CMake error parser")
            return

        if self.sink is not None:
            self.sink.write(fragment)

        if isinstance(fragment, (bytes, bytearray)):
            text = self._decoder.decode(bytes(fragment))
        else:
            # text ends any character left incomplete by earlier bytes
            text = self._decoder.decode(b"", final=True) + fragment
            self._decoder.reset()

        self._buffer += text
        self._process_buffer(at_eof=False)

    def write(self, fragment: Union[str, bytes]) -> int:
        """File-like alias of :meth:`feed`."""
        self.feed(fragment)
        return len(fragment)

    def flush(self) -> None:
        if self.sink is not None and hasattr(self.sink, "flush"):
            self.sink.flush()

    def finish(self) -> None:
        """Signal end of output and emit the trailing message, if any."""
        if self._state is ParserState.FINISHED:
            return

        self._buffer += self._decoder.decode(b"", final=True)

        self.flush()
        self._process_buffer(at_eof=True)
        self._state = ParserState.FINISHED
        self._buffer = ""

    def __enter__(self) -> "CMakeErrorParser":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.finish()

    def _process_buffer(self, at_eof: bool) -> None:
        while True:
            match = MESSAGE_START_PATTERN.search(self._buffer)
            if match is None:
                return

            if self._state is ParserState.SEEKING_FIRST_MESSAGE:
                self._state = ParserState.IN_STREAM
                if match.start():
                    logger.trace(f"Discarding {match.start()} chars before first message")
                    self._buffer = self._buffer[match.start():]
                continue

            # the buffer starts with the marker of the current message
            classification = match.group()
            following = ADJACENT_START_PATTERN.match(
                self._buffer, match.end()
            ) or MESSAGE_START_PATTERN.search(self._buffer, match.end())
            if following is not None:
                end = following.start()
            elif at_eof:
                end = len(self._buffer)
            else:
                return

            self._process_message(
                classification,
                self._buffer[match.end():end],
                self._buffer[:end],
            )
            self._buffer = self._buffer[end:]

    def _process_message(self, classification: str, body: str, full_message: str) -> None:
        marker = classify(classification)
        if marker is None:
            logger.trace(f"Dropping message without classification: {classification!r}")
            return

        location = extract_location(body)
        message = DiagnosticMessage(
            classification=classification,
            severity=marker.severity,
            kind=marker.kind,
            full_text=full_message.strip(),
            body=body,
            file=location.file,
            line=location.line,
        )
        logger.debug(f"Parsed CMake message: {message.to_dict()}")

        try:
            self.emitter.create_diagnostic(
                self.root,
                message.file,
                message.severity,
                message.kind,
                message.full_text,
                message.line,
            )
        except Exception as e:
            logger.opt(exception=e).warning(
                f"CMake output error parsing failed for {message.classification!r} "
                f"message at {message.file or '<project>'}"
            )
