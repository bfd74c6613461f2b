"""Two-pass linker for a simple object-module format."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

from oslabs.tokenizer import ParseError, ParseErrorCode, Tokenizer

MAX_DEFINITIONS = 16
MAX_USES = 16
MACHINE_SIZE = 512


@dataclass
class ModuleInfo:
    """Placement and counts of one object module."""

    base: int = 0
    def_count: int = 0
    use_count: int = 0
    code_count: int = 0


@dataclass
class Symbol:
    """A defined symbol; ``module`` is the 1-based defining module."""

    name: str
    location: int
    module: int
    multiply_defined: bool = False
    in_use: bool = False


def _read_count(tokenizer: Tokenizer) -> int:
    value = tokenizer.read_int()
    return -1 if value is None else value


def _split(instruction: int) -> tuple[int, int]:
    opcode, operand = divmod(abs(instruction), 1000)
    if instruction < 0:
        return -opcode, -operand
    return opcode, operand


def _addr(value: int) -> str:
    return f"{value:04d}" if value >= 0 else f"-{-value:04d}"


class Linker:
    """Resolves symbols and relocates addresses of an object-module text.

    Output lines accumulate in ``lines``; each pass also returns the lines
    it produced.
    """

    def __init__(self, text):
        self.text = text
        self.modules: list[ModuleInfo] = []
        self.symbols: dict[str, Symbol] = {}
        self.lines: list[str] = []
        self._first_pass_done = False

    def _emit(self, line: str) -> None:
        self.lines.append(line)

    def _define(self, name: str, location: int, module: int) -> None:
        symbol = self.symbols.get(name)
        if symbol is None:
            self.symbols[name] = Symbol(name, location, module)
        else:
            symbol.multiply_defined = True
            self._emit(f"Warning: Module {module - 1}: {name} redefinition ignored")

    def pass_one(self):
        """Check syntax, place modules and build the symbol table."""
        start = len(self.lines)
        tokenizer = Tokenizer(self.text)
        total_length = 0
        module_num = 0
        base = 0
        while not tokenizer.at_end:
            module = ModuleInfo()
            definitions: list[tuple[str, int]] = []

            def_count = _read_count(tokenizer)
            if 0 <= def_count <= MAX_DEFINITIONS:
                module.def_count = def_count
                for _ in range(def_count):
                    name = tokenizer.read_symbol()
                    definitions.append((name, _read_count(tokenizer)))
            elif def_count > MAX_DEFINITIONS:
                raise ParseError(
                    ParseErrorCode.TOO_MANY_DEF_IN_MODULE,
                    tokenizer.line_number,
                    tokenizer.offset,
                )

            use_count = _read_count(tokenizer)
            if 0 <= use_count <= MAX_USES:
                module.use_count = use_count
                for _ in range(use_count):
                    tokenizer.read_symbol()
            elif use_count > MAX_USES:
                raise ParseError(
                    ParseErrorCode.TOO_MANY_USE_IN_MODULE,
                    tokenizer.line_number,
                    tokenizer.offset,
                )

            code_count = _read_count(tokenizer)
            total_length += code_count
            if code_count >= 0 and total_length <= MACHINE_SIZE:
                module.code_count = code_count
                module.base = base
                for _ in range(code_count):
                    tokenizer.read_addressing()
                    tokenizer.read_int()
                base += code_count
                self.modules.append(module)
            elif total_length > MACHINE_SIZE:
                raise ParseError(
                    ParseErrorCode.TOO_MANY_INSTR,
                    tokenizer.line_number,
                    tokenizer.offset,
                )

            for name, value in definitions:
                if name not in self.symbols and value >= code_count:
                    self._emit(
                        f"Warning: Module {module_num}: {name}={value} "
                        f"valid=[0..{code_count - 1}] assume zero relative"
                    )
                    value = 0
                self._define(name, value + base - code_count, module_num + 1)
            module_num += 1

        self._emit("Symbol Table")
        for name, symbol in self.symbols.items():
            if symbol.multiply_defined:
                self._emit(
                    f"{name}={symbol.location} Error: This variable is "
                    "multiple times defined; first value used"
                )
            else:
                self._emit(f"{name}={symbol.location}")
        self._first_pass_done = True
        return self.lines[start:]

    def _external(self, opcode, operand, base, uses, used) -> str:
        if operand < 0 or operand >= len(uses):
            value = opcode * 1000 + base
            return (
                f"{_addr(value)}  Error: External operand exceeds length "
                "of uselist; treated as relative=0"
            )
        name = uses[operand]
        used.add(name)
        symbol = self.symbols.get(name)
        if symbol is None:
            return f"{_addr(opcode * 1000)} Error: {name} is not defined; zero used"
        symbol.in_use = True
        return f"{_addr(opcode * 1000 + symbol.location)} "

    def _relocate(self, mode, instruction, module, uses, used) -> str:
        opcode, operand = _split(instruction)
        if opcode > 9:
            return f"{_addr(9999)} Error: Illegal opcode; treated as 9999"
        if mode == "E":
            return self._external(opcode, operand, module.base, uses, used)
        if mode == "I":
            if operand >= 900:
                return (
                    f"{_addr(opcode * 1000 + 999)} Error: Illegal immediate "
                    "operand; treated as 999"
                )
            return _addr(instruction)
        if mode == "A":
            if operand >= MACHINE_SIZE:
                return (
                    f"{_addr(opcode * 1000)} Error: Absolute address exceeds "
                    "machine size; zero used"
                )
            return _addr(instruction)
        if mode == "R":
            if operand >= module.code_count:
                return (
                    f"{_addr(opcode * 1000 + module.base)} Error: Relative "
                    "address exceeds module size; relative zero used"
                )
            return _addr(opcode * 1000 + module.base + operand)
        if 0 <= operand < len(self.modules):
            return _addr(opcode * 1000 + self.modules[operand].base)
        return (
            f"{_addr(opcode * 1000 + self.modules[0].base)} Error: Illegal "
            "module operand ; treated as module=0"
        )

    def pass_two(self):
        """Produce the memory map and usage warnings; needs pass_one first."""
        if not self._first_pass_done:
            raise RuntimeError("pass_one must run before pass_two")
        start = len(self.lines)
        tokenizer = Tokenizer(self.text)
        counter = 0
        module_index = 0
        self._emit("Memory Map")
        while not tokenizer.at_end:
            uses: list[str] = []
            used: set[str] = set()

            for _ in range(max(_read_count(tokenizer), 0)):
                tokenizer.read_symbol()
                tokenizer.read_int()
            for _ in range(max(_read_count(tokenizer), 0)):
                uses.append(tokenizer.read_symbol())

            code_count = _read_count(tokenizer)
            if code_count < 0:
                continue
            module = self.modules[module_index]
            for _ in range(code_count):
                mode = tokenizer.read_addressing()
                instruction = _read_count(tokenizer)
                text = self._relocate(mode, instruction, module, uses, used)
                self._emit(f"{counter:03d}: {text}")
                counter += 1
            for position, name in enumerate(uses):
                if name not in used:
                    self._emit(
                        f"Warning: Module {module_index}: "
                        f"uselist[{position}]={name} was not used"
                    )
            module_index += 1

        self._emit("")
        for name, symbol in self.symbols.items():
            if not symbol.in_use:
                self._emit(
                    f"Warning: Module {symbol.module - 1}: {name} "
                    "was defined but never used"
                )
        return self.lines[start:]


def _run(linker: Linker) -> None:
    linker.pass_one()
    linker.lines.append("")
    linker.pass_two()


def link(text):
    """Link the object-module text and return the full report."""
    linker = Linker(text)
    _run(linker)
    return "\n".join(linker.lines) + "\n"


def main(argv=None):
    """Link the file named on the command line and print the report."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: linker <filename>")
        return 1
    path = args[0]
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        print(f"Error opening file: {path}")
        return 1
    linker = Linker(text)
    try:
        _run(linker)
    except ParseError as error:
        for line in linker.lines:
            print(line)
        print(error)
        return 1
    print("\n".join(linker.lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())