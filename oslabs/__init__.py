"""A two-pass linker for a toy machine and a discrete-event CPU scheduling simulator."""

__version__ = "0.1.0"