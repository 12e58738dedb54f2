"""FastAPI dependency injection — provides the TokenLedger singleton."""

from __future__ import annotations

from geocoin.engine.ledger import TokenLedger

_ledger: TokenLedger | None = None


def set_ledger(ledger: TokenLedger | None) -> None:
    global _ledger
    _ledger = ledger


def get_ledger() -> TokenLedger:
    if _ledger is None:
        raise RuntimeError("TokenLedger not initialized — server not started correctly.")
    return _ledger
