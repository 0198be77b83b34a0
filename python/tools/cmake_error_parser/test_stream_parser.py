import io
import random
from unittest.mock import MagicMock

import pytest
from loguru import logger

from .core.enums import MessageKind, MessageSeverity, ParserState
from .emitters.store import DiagnosticStore
from .parsers.stream import CMakeErrorParser


CONFIGURE_OUTPUT = (
    "-- The C compiler identification is GNU 12.2.0\n"
    "-- Detecting C compiler ABI info\n"
    "CMake Warning (dev) in CMakeLists.txt:\n"
    "  No project() command is present.\n"
    "This warning is for project developers.  Use -Wno-dev to suppress it.\n"
    "\n"
    "CMake Deprecation Warning at CMakeLists.txt:1 (cmake_minimum_required):\n"
    "  Compatibility with CMake < 3.5 will be removed from a future version of\n"
    "  CMake.\n"
    "\n"
    "\n"
    "CMake Error at src/CMakeLists.txt:7 (add_executable):\n"
    "  Cannot find source file:\n"
    "\n"
    "    main.cpp\n"
    "\n"
    "\n"
    'CMake Error: The source directory "/tmp/missing" does not exist.\n'
    "CMake Warning:\n"
    "  Manually-specified variables were not used by the project:\n"
    "\n"
    "    FOO\n"
    "\n"
    "\n"
    "-- Configuring incomplete, errors occurred!\n"
)

SCENARIO_A = (
    "CMake Error at CMakeLists.txt:12 (message):\n"
    "  bad thing\n"
    "-- Configuring done"
)

BACK_TO_BACK = "CMake WarningCMake Error at CMakeLists.txt:3 (project):\n  oops\n"


# --- Fixtures ---


@pytest.fixture
def store():
    """Fixture for an empty diagnostic store."""
    return DiagnosticStore()


@pytest.fixture
def parser(store):
    """Fixture for a parser recording into the store fixture."""
    return CMakeErrorParser(store, root="project")


@pytest.fixture
def log_messages():
    """Collect loguru messages of level WARNING and above."""
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)


def summarize(store):
    return [
        (d.severity, d.kind, d.file, d.line, d.message) for d in store.diagnostics()
    ]


def parse_chunks(chunks):
    store = DiagnosticStore()
    parser = CMakeErrorParser(store, root="project")
    for chunk in chunks:
        parser.feed(chunk)
    parser.finish()
    return summarize(store)


# --- Scenarios ---


def test_error_with_location(parser, store):
    """A located error is reported with file and line."""
    parser.feed(SCENARIO_A)
    parser.finish()

    diagnostics = store.diagnostics()
    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.severity is MessageSeverity.ERROR
    assert diagnostic.kind is MessageKind.ERROR
    assert diagnostic.file == "CMakeLists.txt"
    assert diagnostic.line == 12
    assert "bad thing" in diagnostic.message
    assert diagnostic.message.startswith("CMake Error at CMakeLists.txt:12")
    assert "Configuring done" not in diagnostic.message


def test_marker_split_across_fragments(parser, store):
    """A marker split in the middle gives the same result as whole input."""
    parser.feed("CMake Err")
    parser.feed(SCENARIO_A[len("CMake Err"):])
    parser.finish()

    assert summarize(store) == parse_chunks([SCENARIO_A])


def test_finish_terminates_trailing_message(parser, store):
    """End of stream terminates the last message."""
    parser.feed("CMake Warning at cmake/deps.cmake:40 (message):\n  zlib not found\n")
    assert store.diagnostics() == []

    parser.finish()

    diagnostics = store.diagnostics()
    assert len(diagnostics) == 1
    assert diagnostics[0].severity is MessageSeverity.WARNING
    assert diagnostics[0].file == "cmake/deps.cmake"
    assert diagnostics[0].line == 40


def test_message_without_location(parser, store):
    """A message matching no location pattern is still reported."""
    parser.feed("CMake Error (dev)\n  something odd happened\n")
    parser.finish()

    diagnostics = store.diagnostics()
    assert len(diagnostics) == 1
    assert diagnostics[0].severity is MessageSeverity.ERROR
    assert diagnostics[0].kind is MessageKind.AUTHOR_ERROR
    assert diagnostics[0].file is None
    assert diagnostics[0].line is None


def test_marker_alone_on_its_line(parser, store):
    """A marker followed by a marker on the next line yields a bodiless message."""
    parser.feed("CMake Warning\nCMake Error at CMakeLists.txt:3 (project):\n  oops\n")
    parser.finish()

    first, second = store.diagnostics()
    assert first.message == "CMake Warning"
    assert first.kind is MessageKind.WARNING
    assert first.file is None and first.line is None
    assert second.kind is MessageKind.ERROR
    assert second.file == "CMakeLists.txt"
    assert second.line == 3


def test_back_to_back_markers(parser, store):
    """A marker directly followed by another one yields an empty body."""
    parser.feed(BACK_TO_BACK)
    parser.finish()

    first, second = store.diagnostics()
    assert first.message == "CMake Warning"
    assert first.severity is MessageSeverity.WARNING
    assert first.file is None and first.line is None
    assert second.severity is MessageSeverity.ERROR
    assert second.kind is MessageKind.ERROR
    assert second.file == "CMakeLists.txt"
    assert second.line == 3
    assert second.message.startswith("CMake Error at")


def test_adjacent_markers_chain(parser, store):
    parser.feed("CMake Error (dev)CMake Deprecation WarningCMake Warning at a.cmake:1 (m):\n")
    parser.finish()

    assert [(d.kind, d.message) for d in store.diagnostics()] == [
        (MessageKind.AUTHOR_ERROR, "CMake Error (dev)"),
        (MessageKind.DEPRECATION_WARNING, "CMake Deprecation Warning"),
        (MessageKind.WARNING, "CMake Warning at a.cmake:1 (m):"),
    ]


def test_status_text_after_marker_does_not_split(parser, store):
    parser.feed("CMake Error--x at a.cmake:2 (m):\n  y\n")
    parser.finish()

    (diagnostic,) = store.diagnostics()
    assert diagnostic.message.startswith("CMake Error--x")


# --- Segmentation ---


def test_full_configure_output(parser, store):
    """All preambles of a realistic configure run are classified."""
    parser.feed(CONFIGURE_OUTPUT)
    parser.finish()

    assert [(d.kind, d.file, d.line) for d in store.diagnostics()] == [
        (MessageKind.AUTHOR_WARNING, "CMakeLists.txt", None),
        (MessageKind.DEPRECATION_WARNING, "CMakeLists.txt", 1),
        (MessageKind.ERROR, "src/CMakeLists.txt", 7),
        (MessageKind.ERROR, None, None),
        (MessageKind.WARNING, None, None),
    ]
    messages = [d.message for d in store.diagnostics()]
    assert messages[2] == (
        "CMake Error at src/CMakeLists.txt:7 (add_executable):\n"
        "  Cannot find source file:"
    )
    assert all("Configuring incomplete" not in m for m in messages)


def test_noise_before_first_marker_is_discarded(parser, store):
    """Text before the first marker never becomes part of a message."""
    parser.feed("banner text CMake Error at nowhere.txt:1\n")
    parser.feed("more noise\nCMake Warning at a.cmake:2 (message):\n  hi\n")
    parser.finish()

    diagnostics = store.diagnostics()
    assert len(diagnostics) == 1
    assert diagnostics[0].file == "a.cmake"
    assert "banner" not in diagnostics[0].message
    assert "noise" not in diagnostics[0].message


def test_noise_is_dropped_once_first_marker_arrives(parser):
    parser.feed("noise\nmore noise\n")
    assert parser.state is ParserState.SEEKING_FIRST_MESSAGE
    assert parser.pending == "noise\nmore noise\n"

    parser.feed("-- status\n")
    assert parser.state is ParserState.IN_STREAM
    assert parser.pending == "-- status\n"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "plain output without diagnostics\n",
        "-- Configuring done\n-- Generating done\n-- Build files written\n",
        "  CMake Error indented is not a marker\n\n\nxCMake Warning\n",
        "CMake Debug Log at CMakeLists.txt:3 (message):\n  trace\n\n",
    ],
)
def test_no_recognized_marker_emits_nothing(parser, store, text):
    parser.feed(text * 50)
    parser.finish()

    assert store.diagnostics() == []


def test_messages_are_emitted_before_finish(parser, store):
    """A message is reported as soon as the next marker arrives."""
    parser.feed("CMake Error at a.txt:1 (m):\n  x\n")
    assert store.diagnostics() == []

    parser.feed("CMake Warning")
    assert len(store.diagnostics()) == 1
    assert parser.pending == "CMake Warning"


def test_longest_marker_is_used_for_classification(parser, store):
    parser.feed("CMake Error (de")
    parser.feed("v) at CMakeLists.txt:9 (if):\n  bad\n")
    parser.finish()

    (diagnostic,) = store.diagnostics()
    assert diagnostic.kind is MessageKind.AUTHOR_ERROR
    assert diagnostic.line == 9


def test_internal_error_and_deprecation_error(parser, store):
    parser.feed(
        "CMake Internal Error (please report a bug) at x.cmake:4 (foo):\n  boom\n"
        "CMake Deprecation Error at y.cmake:5 (bar):\n  old\n"
    )
    parser.finish()

    assert [(d.kind, d.severity) for d in store.diagnostics()] == [
        (MessageKind.INTERNAL_ERROR, MessageSeverity.ERROR),
        (MessageKind.DEPRECATION_ERROR, MessageSeverity.ERROR),
    ]


def test_windows_line_endings(parser, store):
    parser.feed(
        "CMake Warning at CMakeLists.txt:2 (message):\r\n  careful\r\n\r\n"
        "-- done\r\n"
    )
    parser.finish()

    (diagnostic,) = store.diagnostics()
    assert diagnostic.file == "CMakeLists.txt"
    assert diagnostic.line == 2
    assert diagnostic.message.endswith("careful")


# --- Chunk-boundary independence ---


@pytest.mark.parametrize("text", [SCENARIO_A, BACK_TO_BACK, CONFIGURE_OUTPUT])
def test_every_split_point_gives_same_result(text):
    expected = parse_chunks([text])
    for split in range(len(text) + 1):
        assert parse_chunks([text[:split], text[split:]]) == expected, split


@pytest.mark.parametrize("text", [SCENARIO_A, BACK_TO_BACK, CONFIGURE_OUTPUT])
def test_single_character_feeding(text):
    assert parse_chunks(list(text)) == parse_chunks([text])


@pytest.mark.parametrize("seed", range(5))
def test_random_chunking(seed):
    rng = random.Random(seed)
    text = CONFIGURE_OUTPUT
    chunks = []
    position = 0
    while position < len(text):
        size = rng.randint(1, 40)
        chunks.append(text[position:position + size])
        position += size

    assert parse_chunks(chunks) == parse_chunks([text])


def test_bytes_split_inside_multibyte_character(store):
    data = "CMake Error at süd/CMakeLists.txt:3 (m):\n  x\n".encode("utf-8")
    parser = CMakeErrorParser(store)
    for i in range(len(data)):
        parser.feed(data[i:i + 1])
    parser.finish()

    (diagnostic,) = store.diagnostics()
    assert diagnostic.file == "süd/CMakeLists.txt"


def test_text_after_incomplete_bytes(store):
    parser = CMakeErrorParser(store)
    parser.feed("CMake Error at a".encode("utf-8") + b"\xc3")
    parser.feed("b.cmake:3 (m):\n  x\n")
    parser.finish()

    (diagnostic,) = store.diagnostics()
    assert diagnostic.file == "a\ufffdb.cmake"
    assert diagnostic.line == 3


# --- Lifecycle ---


def test_finish_makes_parser_inert(parser, store, log_messages):
    parser.feed(SCENARIO_A)
    parser.finish()
    assert parser.state is ParserState.FINISHED
    assert parser.pending == ""

    parser.feed("CMake Error at other.txt:1 (m):\n  late\n")
    parser.finish()

    assert len(store.diagnostics()) == 1
    assert any("finished" in m for m in log_messages)


def test_context_manager_finishes(store):
    with CMakeErrorParser(store) as parser:
        parser.write("CMake Warning at a.txt:5 (m):\n  w\n")

    assert parser.state is ParserState.FINISHED
    assert len(store.diagnostics()) == 1


def test_root_is_passed_to_emitter(store):
    parser = CMakeErrorParser(store, root="mylib")
    parser.feed(SCENARIO_A)
    parser.finish()

    assert store.diagnostics("mylib")[0].target == "mylib"
    assert store.diagnostics("project") == []


# --- Collaborators ---


def test_emitter_failure_does_not_abort_stream(log_messages):
    emitter = MagicMock()
    emitter.create_diagnostic.side_effect = [RuntimeError("rejected"), None]
    parser = CMakeErrorParser(emitter, root="project")

    parser.feed("CMake Error at a.txt:1 (m):\n  one\nCMake Warning at b.txt:2 (m):\n  two\n")
    parser.finish()

    assert emitter.create_diagnostic.call_count == 2
    args = emitter.create_diagnostic.call_args.args
    assert args[0] == "project"
    assert args[1] == "b.txt"
    assert args[2] is MessageSeverity.WARNING
    assert args[3] is MessageKind.WARNING
    assert args[5] == 2
    assert any("CMake output error parsing failed" in m for m in log_messages)


def test_sink_receives_text_verbatim(store):
    sink = io.StringIO()
    parser = CMakeErrorParser(store, sink=sink)
    parser.feed("noise\n")
    parser.feed(SCENARIO_A)
    parser.finish()

    assert sink.getvalue() == "noise\n" + SCENARIO_A
    assert len(store.diagnostics()) == 1


def test_sink_receives_bytes_before_decoding(store):
    sink = MagicMock()
    parser = CMakeErrorParser(store, sink=sink)
    fragments = [b"-- caf\xe9\n", b"CMake Warning at s\xc3", b"\xbcd.cmake:1 (m):\n"]
    for fragment in fragments:
        parser.feed(fragment)
    parser.finish()

    assert [c.args[0] for c in sink.write.call_args_list] == fragments
    sink.flush.assert_called_once()
    assert store.diagnostics()[0].file == "süd.cmake"


def test_sink_failure_propagates(store):
    sink = MagicMock()
    sink.write.side_effect = OSError("broken pipe")
    parser = CMakeErrorParser(store, sink=sink)

    with pytest.raises(OSError):
        parser.feed(SCENARIO_A)


def test_parsed_messages_are_logged_with_their_fields(parser):
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        parser.feed(BACK_TO_BACK)
        parser.finish()
    finally:
        logger.remove(handler_id)

    parsed = [m for m in messages if m.startswith("Parsed CMake message")]
    assert len(parsed) == 2
    assert "'classification': 'CMake Warning'" in parsed[0]
    assert "'body': ''" in parsed[0]
    assert "'file': 'CMakeLists.txt'" in parsed[1]
