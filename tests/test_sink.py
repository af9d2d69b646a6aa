from orderedprops import DateSuppressingWriter
import pytest
import io


class FlushCounter(io.StringIO):
    flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


class TestDateSuppressingWriter:

    @pytest.mark.parametrize(
        "chunks,expected",
        [
            # caller comment, date, entries
            (["#", "hdr", "\n", "#date", "\n", "x=1", "\n"], "#hdr\nx=1\n"),
            # only the date comment
            (["#date", "\n", "x=1", "\n", "y=2", "\n"], "x=1\ny=2\n"),
            # several comment lines, the last one is dropped
            (
                ["#", "one", "\n", "#", "two", "\n", "#three", "\n", "#date", "\n", "a=b", "\n"],
                "#one\n#two\n#three\na=b\n",
            ),
            # "!" comments count as comments
            (["#", "one", "\n", "!two", "\n", "#date", "\n"], "#one\n!two\n"),
            # comments without entries, the last one is never written
            (["#", "hdr", "\n", "#date", "\n"], "#hdr\n"),
            # no comments at all
            (["a=1", "\n", "b=2", "\n"], "a=1\nb=2\n"),
            # complete comment line in a single chunk
            (["#one\n", "#date\n", "a=1\n"], "#one\na=1\n"),
            # empty comment line
            (["#", "\n", "#date", "\n"], "#\n"),
        ],
    )
    def test_filter(self, chunks, expected):
        destination = io.StringIO()
        writer = DateSuppressingWriter(destination, "\n")
        for chunk in chunks:
            assert writer.write(chunk) == len(chunk)
        assert destination.getvalue() == expected

    def test_crlf(self):
        destination = io.StringIO()
        writer = DateSuppressingWriter(destination, "\r\n")
        for chunk in ["#", "hdr", "\r\n", "#date", "\r\n", "x=1", "\r\n"]:
            writer.write(chunk)
        assert destination.getvalue() == "#hdr\r\nx=1\r\n"

    def test_separator_must_match(self):
        # a comment only ends with the configured separator
        destination = io.StringIO()
        writer = DateSuppressingWriter(destination, "\r\n")
        for chunk in ["#", "hdr", "\n", "#date", "\n", "x=1", "\n"]:
            writer.write(chunk)
        assert destination.getvalue() == ""

    def test_content_discards_held_comment(self):
        destination = io.StringIO()
        writer = DateSuppressingWriter(destination, "\n")
        writer.write("#date")
        writer.write("\n")
        assert writer.held == "#date\n"
        writer.write("x=1")
        assert writer.held is None
        writer.write("#late")
        writer.write("\n")
        assert destination.getvalue() == "x=1"
        assert writer.held == "#late\n"

    def test_flush_keeps_held_comment(self):
        destination = FlushCounter()
        writer = DateSuppressingWriter(destination, "\n")
        writer.write("#date")
        writer.write("\n")
        writer.flush()
        assert destination.flushes == 1
        assert destination.getvalue() == ""
