"""
Type definitions used across layers
"""

from enum import StrEnum


class Symbol(StrEnum):
    X = "X"
    O = "O"  # noqa: E741


class Status(StrEnum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


class PlayerType(StrEnum):
    HUMAN = "human"
    CPU = "cpu"


class GameMode(StrEnum):
    HUMAN_HUMAN = "human-human"
    HUMAN_CPU = "human-cpu"
    CPU_CPU = "cpu-cpu"


class PlayerFilter(StrEnum):
    ALL = "all"
    HUMAN = "human"
    CPU = "cpu"


# Name of the CPU opponent in human-cpu games. cpu-cpu games number their CPUs: "CPU 1", "CPU 2", ...
CPU_LABEL = "CPU"
