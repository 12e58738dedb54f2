"""Game engine: token ledger and command dispatch."""

from geocoin.engine.commands import Collect, Command, Deposit, Locate, Move, Reset, StateDelta, Step
from geocoin.engine.ledger import TokenLedger, build_ledger

__all__ = [
    "Collect",
    "Command",
    "Deposit",
    "Locate",
    "Move",
    "Reset",
    "StateDelta",
    "Step",
    "TokenLedger",
    "build_ledger",
]
