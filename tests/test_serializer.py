import pytest
import yaml

from tap_stats.core.models import Cell, ExportFormat
from tap_stats.export.serializer import column_widths, plain_cell_text, serialize_table


HEADERS = ["Name", "Count"]
ROWS = [("alice", 3), ("bob", 15)]


def _lines(data: bytes) -> list[str]:
    return data.decode("utf-8").splitlines()


def test_plain_end_to_end_layout():
    out = serialize_table(HEADERS, ROWS, "Demo", "cap.pcap", ExportFormat.PLAIN)
    header = "Name" + "  " + "Count"
    assert _lines(out) == [
        "=" * len(header),
        "Demo - cap.pcap:",
        header,
        "-" * len(header),
        "alice" + "  " + "    3",
        "bob  " + "  " + "   15",
        "-" * len(header),
    ]
    assert out.endswith(b"\n")


def test_numeric_columns_keep_header_width():
    rows = [("udp", 120), ("tcp", 123456789), ("a-longer-name", 300)]
    cells = [[Cell.from_value(v) for v in row] for row in rows]
    assert column_widths(["Protocol", "Packets"], cells) == [len("a-longer-name"), len("Packets")]

    lines = _lines(serialize_table(["Protocol", "Packets"], rows[:2] + [rows[0]], "T", "f", "plain"))
    assert lines[4] == "udp     " + "  " + "    120"
    # Longer numbers overflow their column instead of being truncated.
    assert lines[5] == "tcp     " + "  " + "123456789"


def test_plain_float_uses_six_decimals_and_right_aligns():
    assert plain_cell_text(Cell.floating(1.5), 10) == "  1.500000"
    assert plain_cell_text(Cell.string("ab"), 4) == "ab  "
    assert plain_cell_text(Cell.unsigned(7), 3) == "  7"


def test_plain_footer_emitted_once_at_end_without_rows():
    out = _lines(serialize_table(HEADERS, [], "Demo", "cap.pcap"))
    assert out == ["===========", "Demo - cap.pcap:", "Name  Count", "-----------", "-----------"]


def test_csv_quotes_strings_only():
    out = _lines(serialize_table(HEADERS, ROWS + [("carol", 2.5)], "Demo", "cap.pcap", ExportFormat.CSV))
    assert out == ['"Name","Count"', '"alice",3', '"bob",15', '"carol",2.5']
    values = [field.strip('"') for field in out[1].split(",")]
    assert values == ["alice", "3"]


def test_csv_does_not_escape_embedded_quotes():
    out = _lines(serialize_table(["A"], [['say "hi", bob']], "t", "s", ExportFormat.CSV))
    assert out[1] == '"say "hi", bob"'


def test_xml_escapes_title_headers_and_cells():
    out = serialize_table(["A&B", "<n>"], [("x&y", "<z>"), (1, 2)], "T's \"q\"", "s", ExportFormat.XML)
    text = out.decode("utf-8")
    lines = text.splitlines()
    assert lines[0] == '<?xml version="1.0" encoding="UTF-8"?>'
    assert lines[1] == "<table>"
    assert lines[2] == "<title>T&#x27;s &quot;q&quot;</title>"
    assert "  <entry>A&amp;B</entry>" in lines
    assert "  <entry>&lt;n&gt;</entry>" in lines
    assert "  <entry>x&amp;y</entry>" in lines
    assert "  <entry>&lt;z&gt;</entry>" in lines
    assert lines[-2:] == ["</tbody>", "</table>"]
    assert text.count("<row>") == 3


def test_yaml_layout_and_parse():
    out = serialize_table(HEADERS, ROWS, "Demo", "cap.pcap", ExportFormat.YAML)
    lines = _lines(out)
    assert lines[:4] == ["---", 'Description: "Demo"', 'File: "cap.pcap"', "Items:"]
    assert lines[4:] == ['- Name: "alice"', "  Count: 3", '- Name: "bob"', "  Count: 15"]
    assert sum(1 for line in lines if line.startswith("Description:")) == 1
    doc = yaml.safe_load(out)
    assert doc == {
        "Description": "Demo",
        "File": "cap.pcap",
        "Items": [{"Name": "alice", "Count": 3}, {"Name": "bob", "Count": 15}],
    }


@pytest.mark.parametrize("fmt", list(ExportFormat))
def test_zero_cell_rows_are_skipped(fmt):
    with_empty = serialize_table(HEADERS, [[], ROWS[0], [], ROWS[1], []], "Demo", "cap.pcap", fmt)
    without = serialize_table(HEADERS, ROWS, "Demo", "cap.pcap", fmt)
    assert with_empty == without


def test_short_and_long_rows_are_positional():
    rows = [["only"], ["a", 1, "extra-column"]]
    plain = _lines(serialize_table(HEADERS, rows, "t", "s"))
    assert plain[4] == "only"
    assert plain[5] == "a   " + "  " + "    1" + "  " + "extra-column"

    yaml_lines = _lines(serialize_table(HEADERS, rows, "t", "s", ExportFormat.YAML))
    assert yaml_lines[4:] == ['- Name: "only"', '- Name: "a"', "  Count: 1", '  : "extra-column"']


def test_rows_accept_generators_and_cells():
    rows = ([Cell.string(name), Cell.unsigned(count)] for name, count in ROWS)
    out = serialize_table(HEADERS, rows, "Demo", "cap.pcap", ExportFormat.CSV)
    assert out.decode().splitlines()[1:] == ['"alice",3', '"bob",15']


def test_custom_separator_and_precision():
    out = _lines(serialize_table(["V"], [[Cell.floating(2)]], "t", "s", separator="|", precision=2))
    assert out[4] == "2.00"
