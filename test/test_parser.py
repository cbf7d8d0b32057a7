import pytest

from towerbalance.exceptions import DuplicateNodeError, ParseError
from towerbalance.node import Node
from towerbalance.parser import parse_line, parse_lines, parse_tower, split_arrow


def test_parse_line_with_children():
    node = parse_line("fwft (72) -> ktlj, cntj, xhth")

    assert node.name == "fwft"
    assert node.weight == 72
    assert node.children == ("ktlj", "cntj", "xhth")


def test_parse_line_without_children():
    assert parse_line("pbga (66)") == Node(name="pbga", weight=66, children=())
    assert parse_line("pbga (66)").is_leaf


def test_parse_line_tolerates_surrounding_whitespace():
    node = parse_line("  padx (45) ->  pbga,havc , qoyq  \n")

    assert node.name == "padx"
    assert node.children == ("pbga", "havc", "qoyq")


def test_split_arrow():
    assert split_arrow("a (1)") == ("a (1)", None)
    assert split_arrow("a (1) -> b, c") == ("a (1)", "b, c")


def test_to_line_matches_input_syntax():
    line = "fwft (72) -> ktlj, cntj, xhth"
    assert parse_line(line).to_line() == line
    assert parse_line("pbga (66)").to_line() == "pbga (66)"


@pytest.mark.parametrize(
    "line, reason",
    [
        ("pbga", "missing weight"),
        ("pbga ()", "missing weight"),
        ("pbga (abc)", "is not an integer"),
        ("pbga (-4)", "is negative"),
        ("pbga 66", "weight must be written"),
        ("pbga (66", "weight must be written"),
        ("(66)", "missing node name"),
        ("pbga (66) ->", "not followed by any child"),
        ("pbga (66) -> a, , b", "empty child name"),
        ("pbga (66) -> a b", "contains a space"),
        ("pbga (66) -> a, b, a", "listed twice"),
    ],
)
def test_parse_line_rejects_malformed_input(line, reason):
    with pytest.raises(ParseError) as excinfo:
        parse_line(line, line_number=3)

    assert reason in excinfo.value.reason
    assert excinfo.value.line == line
    assert excinfo.value.line_number == 3
    assert excinfo.value.stage == "parsing"
    assert "line 3" in str(excinfo.value)


def test_parse_lines_skips_blank_lines_and_counts_them():
    lines = ["a (1) -> b", "", "b (2)", "   ", "c (x)"]

    with pytest.raises(ParseError) as excinfo:
        parse_lines(lines)

    assert excinfo.value.line_number == 5


def test_parse_tower_keeps_input_order(example_text):
    registry = parse_tower(example_text)

    assert len(registry) == 13
    assert list(registry)[:3] == ["pbga", "xhth", "ebii"]
    assert registry.lookup("tknk").children == ("ugml", "padx", "fwft")


def test_parse_tower_accepts_lines(example_text):
    from_lines = parse_tower(example_text.splitlines())

    assert dict(from_lines) == dict(parse_tower(example_text))


def test_parse_tower_rejects_duplicate_names():
    with pytest.raises(DuplicateNodeError) as excinfo:
        parse_tower("a (1)\nb (2)\na (3)\n")

    assert excinfo.value.name == "a"
    assert excinfo.value.stage == "validation"
