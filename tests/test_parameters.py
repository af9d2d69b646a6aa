from .base import Base
from orderedprops import exceptions_warnings, Parameters
from orderedprops import streams
import pytest
import io
import os

duplicate_key_warning = lambda: pytest.warns(exceptions_warnings.DuplicateKeyWarning)
malformed_escape_error = lambda: pytest.raises(exceptions_warnings.MalformedEscapeError)
missing_separator_error = lambda: pytest.raises(
    exceptions_warnings.MissingSeparatorError
)


class TestParameters:

    # ----------
    # set parameters to test
    # ----------

    # -----
    # key-value separators and whitespace
    # -----
    test_parameters = []
    separators = [
        {"content": "key=value", "expected": [("key", "value")]},
        {"content": "key = value", "expected": [("key", "value")]},
        {"content": "key:value", "expected": [("key", "value")]},
        {"content": "key value", "expected": [("key", "value")]},
        {"content": "key\t\f =  value  ", "expected": [("key", "value  ")]},
        {"content": "   \tkey=value", "expected": [("key", "value")]},
        {"content": "key==value", "expected": [("key", "=value")]},
        {"content": "key = = value", "expected": [("key", "= value")]},
        {"content": "key", "expected": [("key", "")]},
        {"content": "key=", "expected": [("key", "")]},
        {"content": "=value", "expected": [("", "value")]},
    ]
    test_parameters.extend(separators)

    # -----
    # comments, blank lines and line ends
    # -----
    test_parameters.extend(
        [
            {"content": "# a comment\nkey=value\n", "expected": [("key", "value")]},
            {"content": "! a comment\nkey=value", "expected": [("key", "value")]},
            {"content": "   # indented\nkey=value", "expected": [("key", "value")]},
            {
                "content": "# comment ending in backslash \\\nkey=value",
                "expected": [("key", "value")],
            },
            {
                "content": "a=1\r\nb=2\rc=3\n",
                "expected": [("a", "1"), ("b", "2"), ("c", "3")],
            },
            {
                "content": "a=1\n\n   \t\nb=2",
                "expected": [("a", "1"), ("b", "2")],
            },
            {
                "content": "b=2\na=1\nc=3",
                "expected": [("b", "2"), ("a", "1"), ("c", "3")],
            },
        ]
    )

    # -----
    # continuation lines
    # -----
    test_parameters.extend(
        [
            {"content": "key=a\\\n    b", "expected": [("key", "ab")]},
            {"content": "key=a\\\r\n\tb\\\n c", "expected": [("key", "abc")]},
            {"content": "key=a\\\\", "expected": [("key", "a\\")]},
            {"content": "key=a\\\\\\\n b", "expected": [("key", "a\\b")]},
            {
                "content": "key=a\\\n# not a comment",
                "expected": [("key", "a# not a comment")],
            },
            {
                "content": "key=a\\\n\nb=2",
                "expected": [("key", "a"), ("b", "2")],
            },
            {"content": "key=a\\", "expected": [("key", "a")]},
            {"content": "multi\\\n  line\\\n  key=v", "expected": [("multilinekey", "v")]},
            # lone backslashes continue into nothing and add no entry
            {"content": "\\\n\nfoo=bar", "expected": [("foo", "bar")]},
            {"content": "foo=bar\n\\", "expected": [("foo", "bar")]},
            {"content": "foo=bar\n  \\\n\t\\\n\n", "expected": [("foo", "bar")]},
            {"content": "\\\nfoo=bar", "expected": [("foo", "bar")]},
        ]
    )

    # -----
    # escapes
    # -----
    test_parameters.extend(
        [
            {
                "content": "key\\ with\\ spaces=v",
                "expected": [("key with spaces", "v")],
            },
            {"content": "k\\=e\\:y=v", "expected": [("k=e:y", "v")]},
            {"content": "\\#key=v", "expected": [("#key", "v")]},
            {"content": "key=\\u0041\\u00e9\\u00E9", "expected": [("key", "Aéé")]},
            {"content": "key=\\t\\n\\r\\f", "expected": [("key", "\t\n\r\f")]},
            {"content": "key=\\q\\\"", "expected": [("key", 'q"')]},
            {"content": "key=\\uD83D\\uDE00", "expected": [("key", "\U0001f600")]},
            {"content": "key=\\ leading", "expected": [("key", " leading")]},
        ]
    )

    # -----
    # encodings
    # -----
    test_parameters.extend(
        [
            {"content": "key=é", "expected": [("key", "é")], "binary": True},
            {"content": "key=é", "expected": [("key", "é")], "binary": False},
            {
                "content": "key=\\u2603",
                "expected": [("key", "\u2603")],
                "binary": True,
            },
        ]
    )

    # -----
    # duplicates and errors
    # -----
    test_parameters.extend(
        [
            {
                "content": "a=1\nb=2\na=3",
                "expected": [("a", "3"), ("b", "2")],
                "read_context": duplicate_key_warning,
            },
            {
                "content": "a=1\nb=2\na=3",
                "expected": [("a", "3"), ("b", "2")],
                "read_parameters": Parameters(
                    line_separator="\n", warn_duplicate_keys=False
                ),
            },
            {
                "content": "a=1\nb=\\u12G4\nc=3",
                "expected": [("a", "1")],
                "read_context": malformed_escape_error,
            },
            {
                "content": "a=1\nb=\\u12",
                "expected": [("a", "1")],
                "read_context": malformed_escape_error,
            },
            {
                "content": "key",
                "expected": [],
                "read_parameters": Parameters(require_separator=True),
                "read_context": missing_separator_error,
            },
            {
                "content": "a=1\nb\nc=3",
                "expected": [("a", "1")],
                "read_parameters": Parameters(require_separator=True),
                "read_context": missing_separator_error,
            },
            {
                "content": "a=1\nb 2\nc:3",
                "expected": [("a", "1"), ("b", "2"), ("c", "3")],
                "read_parameters": Parameters(require_separator=True),
            },
        ]
    )

    # ----------
    # Actual test
    # ----------

    @pytest.mark.parametrize(
        *Base.create_parametrization(
            Base.test_load_and_access, parameters=test_parameters
        )
    )
    def test_load_and_access(
        self,
        content,
        expected,
        binary,
        read_context,
        read_parameters,
        further,
    ):
        Base().test_load_and_access(
            content,
            expected,
            binary,
            read_context,
            read_parameters,
            further,
        )

    # ----------
    # Parameters themselves
    # ----------

    def test_defaults(self):
        parameters = Parameters()
        assert parameters.encoding == "iso-8859-1"
        assert parameters.line_separator == os.linesep
        assert parameters.xml_encoding == "UTF-8"
        assert parameters.detect_encoding is False
        assert parameters.require_separator is False
        assert parameters.warn_duplicate_keys is True

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"line_separator": ";"},
            {"line_separator": "\n\n"},
            {"encoding": "no-such-encoding"},
            {"xml_encoding": "no-such-encoding"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            Parameters(**kwargs)

    @pytest.mark.parametrize(
        "escape_unicode,binary,result",
        [
            (None, True, True),
            (None, False, False),
            (True, False, True),
            (False, True, False),
        ],
    )
    def test_escape_unicode_for(self, escape_unicode, binary, result):
        assert Parameters(escape_unicode=escape_unicode).escape_unicode_for(binary) is result

    def test_update(self):
        parameters = Parameters()
        parameters.update(line_separator="\r\n", require_separator=True)
        assert parameters.line_separator == "\r\n"
        assert parameters.require_separator is True
        with pytest.raises(AttributeError):
            parameters.update(comment_prefix="#")
        with pytest.raises(ValueError):
            parameters.update(line_separator="x")

    def test_copy_is_independent(self):
        parameters = Parameters(line_separator="\n")
        copied = parameters.copy()
        copied.line_separator = "\r\n"
        assert parameters.line_separator == "\n"

    # ----------
    # encoding detection
    # ----------

    def test_detect_encoding(self):
        content = (
            "# Grüße aus Köln, schöne Äpfel und Öfen\n"
            "greeting=Grüße aus Köln\n"
            "description=Die Straße führt über die Brücke zum Schloss.\n"
        )
        base = Base(Parameters(line_separator="\n", detect_encoding=True))
        props = base.initialize()
        props.load(io.BytesIO(content.encode("utf-8")))
        assert props.get_property("greeting") == "Grüße aus Köln"

    def test_detect_encoding_fallback(self, monkeypatch):
        class NoMatch:
            def best(self):
                return None

        monkeypatch.setattr(streams, "read_from_bytes", lambda data: NoMatch())
        base = Base(Parameters(detect_encoding=True))
        props = base.initialize()
        with pytest.warns(exceptions_warnings.EncodingDetectionWarning):
            props.load(Base.stream("key=é", binary=True))
        assert props.get_property("key") == "é"

    def test_undecodable_input(self):
        props = Base(Parameters(encoding="utf-8")).initialize()
        with pytest.raises(exceptions_warnings.PropertiesFormatError):
            props.load(io.BytesIO(b"key=\xff\xfe"))
