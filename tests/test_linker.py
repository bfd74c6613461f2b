import pytest

from oslabs.linker import Linker, link, main
from oslabs.tokenizer import ParseError, ParseErrorCode

SAMPLE = """1 xy 2
2 z xy
5 R 1004 I 5678 E 2000 R 8002 E 7001
0
1 z
6 R 8001 E 1000 E 1000 E 3000 R 1002 A 1010
0
1 z
2 R 5001 E 4000
1 z 2
2 xy z
3 A 8000 E 1001 E 2000
"""

SAMPLE_OUTPUT = """Symbol Table
xy=2
z=15

Memory Map
000: 1004
001: 5678
002: 2015 
003: 8002
004: 7002 
005: 8006
006: 1015 
007: 1015 
008: 3015 
009: 1007
010: 1010
011: 5012
012: 4015 
013: 8000
014: 1015 
015: 2002 

"""


def memory_lines(text):
    return [line for line in link(text).splitlines() if line[:3].isdigit()]


def test_worked_example():
    assert link(SAMPLE) == SAMPLE_OUTPUT


def test_module_bases_are_cumulative():
    linker = Linker(SAMPLE)
    linker.pass_one()
    bases = [m.base for m in linker.modules]
    counts = [m.code_count for m in linker.modules]
    assert bases[0] == 0
    assert all(bases[i + 1] == bases[i] + counts[i] for i in range(len(bases) - 1))


def test_memory_map_counter_is_sequential():
    lines = memory_lines(SAMPLE)
    assert [int(line[:3]) for line in lines] == list(range(len(lines)))


def test_empty_input():
    assert link("").splitlines() == ["Symbol Table", "", "Memory Map", ""]


def test_multiple_definition():
    out = link("1 X 0\n0\n1 A 1000\n1 X 0\n0\n1 A 2000\n")
    assert "Warning: Module 1: X redefinition ignored" in out
    assert "X=0 Error: This variable is multiple times defined; first value used" in out
    assert "Warning: Module 0: X was defined but never used" in out


def test_definition_beyond_module_assumes_zero():
    linker = Linker("0\n0\n1 A 1000\n1 X 5\n0\n2 A 1000 A 2000\n")
    lines = linker.pass_one()
    assert any(line.endswith("assume zero relative") for line in lines)
    assert linker.symbols["X"].location == linker.modules[1].base


def test_undefined_symbol():
    assert memory_lines("0\n1 Y\n1 E 3000\n") == [
        "000: 3000 Error: Y is not defined; zero used"
    ]


def test_illegal_opcode():
    assert memory_lines("0\n0\n1 A 12345\n") == [
        "000: 9999 Error: Illegal opcode; treated as 9999"
    ]


def test_illegal_immediate():
    (line,) = memory_lines("0\n0\n1 I 2950\n")
    assert line.endswith("Error: Illegal immediate operand; treated as 999")


def test_absolute_address_too_large():
    assert memory_lines("0\n0\n1 A 3600\n") == [
        "000: 3000 Error: Absolute address exceeds machine size; zero used"
    ]


def test_relative_address_out_of_module():
    lines = memory_lines("0\n0\n2 R 4005 R 1001\n")
    assert lines == [
        "000: 4000 Error: Relative address exceeds module size; relative zero used",
        "001: 1001",
    ]


def test_module_operand():
    lines = memory_lines("0\n0\n1 A 1000\n0\n0\n2 M 3000 M 5009\n")
    assert lines[1] == "001: 3000"
    assert lines[2].endswith("Error: Illegal module operand ; treated as module=0")


def test_external_operand_beyond_uselist():
    out = link("0\n1 Z\n1 E 1005\n")
    assert "000: 1000  Error: External operand exceeds length of uselist; treated as relative=0" in out
    assert "Warning: Module 0: uselist[0]=Z was not used" in out


def test_used_symbol_marked_in_use():
    linker = Linker("1 S 0\n1 S\n1 E 1000\n")
    linker.pass_one()
    linker.pass_two()
    assert linker.symbols["S"].in_use is True
    assert not any("never used" in line for line in linker.lines)


@pytest.mark.parametrize(
    "text, code",
    [
        ("17\n", ParseErrorCode.TOO_MANY_DEF_IN_MODULE),
        ("0 17\n", ParseErrorCode.TOO_MANY_USE_IN_MODULE),
        ("0 0 513\n", ParseErrorCode.TOO_MANY_INSTR),
        ("1\n", ParseErrorCode.SYM_EXPECTED),
        ("0 0 1 Q 1000\n", ParseErrorCode.MARIE_EXPECTED),
        ("0 x\n", ParseErrorCode.NUM_EXPECTED),
    ],
)
def test_parse_errors(text, code):
    with pytest.raises(ParseError) as info:
        link(text)
    assert info.value.code is code


def test_too_many_definitions_location():
    with pytest.raises(ParseError) as info:
        link("17\n")
    assert (info.value.line, info.value.offset) == (1, 1)


def test_pass_two_requires_pass_one():
    with pytest.raises(RuntimeError):
        Linker(SAMPLE).pass_two()


def test_main_prints_report(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_text(SAMPLE)
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == SAMPLE_OUTPUT


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "absent.txt"
    assert main([str(missing)]) == 1
    assert capsys.readouterr().out.strip() == f"Error opening file: {missing}"


def test_main_usage(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out.startswith("Usage:")


def test_main_parse_error(tmp_path, capsys):
    path = tmp_path / "bad.txt"
    path.write_text("17\n")
    assert main([str(path)]) == 1
    assert "TOO_MANY_DEF_IN_MODULE" in capsys.readouterr().out