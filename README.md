# oslabs

This package contains two classic operating-systems exercises:

- a **two-pass linker** for a toy machine with 512 words of memory, and
- a **discrete-event CPU scheduling simulator**. It supports FCFS, LCFS,
  SRTF, round robin, priority and preemptive priority scheduling.

## Installation

```
pip install .
```

The package needs Python 3.10 or later. It has no third-party
dependencies.

## The linker

```
oslabs-linker input-file
```

The input is a sequence of modules. Each module has three parts:

1. A definition list. This is a count followed by `symbol address` pairs.
   There can be at most 16 pairs.
2. A use list. This is a count followed by symbols. There can be at most
   16 symbols.
3. A program text. This is a count followed by `mode instruction` pairs.
   The mode is one of `M`, `A`, `R`, `I` or `E`.

Symbols start with a letter. They can contain only letters and digits, and
they are at most 16 characters long. All the programs together can hold at
most 512 instructions.

Pass one checks the syntax and places each module. It warns about any
definition that lies outside its module, and about any symbol defined more
than once. Then it prints the `Symbol Table`.

Pass two prints the `Memory Map`, with one `NNN: AAAA` line per
instruction. Errors are noted on the same line as the instruction. They
cover the following cases:

- an external operand beyond the use list
- an undefined symbol
- an absolute address of 512 or more
- a relative address beyond the module
- an immediate operand of 900 or more
- an illegal module operand
- an opcode above 9

After the memory map, the linker warns about each use-list entry that was
not used, and about each symbol that was defined but never used.

A syntax error stops the run. The command prints the output produced so
far, followed by `Parse Error line L offset O: CODE`, and then exits with
status 1. The error codes are `NUM_EXPECTED`, `SYM_EXPECTED`,
`MARIE_EXPECTED`, `SYM_TOO_LONG`, `TOO_MANY_DEF_IN_MODULE`,
`TOO_MANY_USE_IN_MODULE` and `TOO_MANY_INSTR`.

From Python:

```python
from oslabs.linker import Linker, link
from oslabs.tokenizer import ParseError

with open("input-1") as f:
    text = f.read()

try:
    print(link(text), end="")
except ParseError as error:
    print(error)

linker = Linker(text)
linker.pass_one()          # returns the lines of pass one
linker.pass_two()          # returns the lines of pass two; needs pass_one first
```

`Linker` keeps all of its output in `linker.lines`. It also keeps the
placed modules in `linker.modules` and the symbol table in
`linker.symbols`. The tokenizer in `oslabs.tokenizer` can be used on its
own. It has `Tokenizer.read_int()`, `read_symbol()` and
`read_addressing()`. These raise `ParseError`, and each error carries its
`code`, `line` and `offset`.

## The scheduler simulator

```
oslabs-sched [-v] [-t] [-e] [-p] -s<schedspec> inputfile randfile
```

Each non-blank line of the input file describes one process with four
numbers: arrival time, total CPU time, CPU burst and I/O burst.

The random file starts with a count line, which is ignored. The numbers
after it are handed out in order and start over after the last one. Each
draw in the range 1..n is `value % n + 1`. The simulator uses these draws
for three things:

- each process's static priority, drawn when its line is read
- each CPU burst
- each I/O burst

The scheduler spec must be attached to `-s`, as in `-sR2` or `-sE4:5`:

| spec         | scheduler                                     |
|--------------|-----------------------------------------------|
| `F`          | first come, first served                      |
| `L`          | last come, first served                       |
| `S`          | shortest remaining time first                 |
| `R<q>`       | round robin with quantum `q`                  |
| `P<q>[:<m>]` | priority with quantum `q` and `m` levels (4)  |
| `E<q>[:<m>]` | preemptive priority, same parameters          |

`-v` prints each state transition. It also prints the ready queue each
time the scheduler picks a process. These lines are printed before the
report. `-t`, `-e` and `-p` are accepted but change nothing in the output.

The report starts with the scheduler's name, such as `FCFS`, `RR 2` or
`PREPRIO 4`. Then there is one line per process, in pid order:

```
pid: arrival total cpu-burst io-burst prio | finish turnaround io-time cpu-wait
```

The last line is the `SUM:` line. It holds the following values:

- the finishing time
- CPU utilisation
- I/O utilisation, counting time during which any process did I/O
- average turnaround time
- average CPU waiting time
- throughput per 100 time units

From Python:

```python
from oslabs.events import Event, EventQueue, State
from oslabs.randomizer import load_randomizer
from oslabs.sched_cli import load_processes, make_scheduler
from oslabs.simulator import Simulator

randomizer = load_randomizer("rfile")
scheduler, max_priority = make_scheduler("R2")
events = EventQueue()
for process in load_processes("input0", randomizer, max_priority):
    events.add(Event(process, process.arrival_time, State.CREATED, State.READY))

simulator = Simulator(scheduler, events, randomizer, verbose=True)
print(simulator.run())        # the report
print("\n".join(simulator.trace))
```

The schedulers in `oslabs.schedulers` can be built directly:

- `FCFSScheduler()`
- `LCFSScheduler()`
- `SRTFScheduler()`
- `RoundRobinScheduler(quantum)`
- `PriorityScheduler(quantum, preemptive, max_priority)`

`Scheduler.summary()` returns the statistics as a `Summary`.
`Scheduler.report()` returns the same statistics as text.

## Running the tests

```
pip install .[test]
pytest
```