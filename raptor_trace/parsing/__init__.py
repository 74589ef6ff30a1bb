"""Trace parsing - line classification and the round state machine."""

from .state_machine import RoundStateMachine
from .tokenizer import DataLine, HeaderLine, TraceLine, classify_line, parse_int, tokenize

__all__ = [
    "RoundStateMachine",
    "HeaderLine",
    "DataLine",
    "TraceLine",
    "classify_line",
    "parse_int",
    "tokenize",
]
