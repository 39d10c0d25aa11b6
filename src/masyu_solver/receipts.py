#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Masyu Solver - Solve Receipts
==============================

Every solve run produces a receipt:
- what was asked (depth) and what came back (outcome, validity)
- how much work it took (elapsed, passes, trials, forced)
- a hash of the final board, so reruns can be compared for determinism
- a one-line plain-English summary

Receipts can be appended to a dated JSONL log.
"""

import hashlib
import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from .types import Grid

# =============================================================================
# Receipt Dataclass
# =============================================================================

@dataclass
class SolveReceipt:
    """Record of one `MasyuBoard.solve` call."""
    depth: str                     # SolveDepth name
    outcome: str                   # Outcome value
    validity: str                  # Validity value of the final board
    elapsed: float                 # seconds
    passes: int                    # search scans (0 without search)
    trials: int                    # trial assumptions made
    forced: int                    # edges forced absent by search
    board_sha: str                 # SHA-256 of the final feature array
    summary: str

    def to_record(self) -> Dict:
        return asdict(self)

# =============================================================================
# Hashing & Summary
# =============================================================================

def board_sha(g: Grid) -> str:
    """
    SHA-256 of the feature array, for comparing boards across runs.

    Args:
        g: Doubled-resolution feature array

    Returns:
        Hex string of SHA-256 hash
    """
    payload = {"shape": list(g.shape), "data": g.tolist()}
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()


def summarize(depth: str, outcome: str, validity: str, forced: int) -> str:
    if outcome == 'contradiction':
        return f"[{depth}] Board has no solution consistent with its circles."
    if validity == 'COMPLETE':
        return f"[{depth}] Solved: single closed loop through every circle."
    if forced:
        return f"[{depth}] Partial: {forced} edge{'s' if forced > 1 else ''} forced absent by search."
    return f"[{depth}] Partial: board {validity.lower()}, nothing further deduced."

# =============================================================================
# JSONL Logging
# =============================================================================

def log_receipt(record: Dict, out_dir: Optional[str] = None) -> Path:
    """
    Append a receipt record to `receipts.jsonl`.

    Args:
        record: Dictionary with receipt data
        out_dir: Output directory (default: runs/YYYY-MM-DD)

    Returns:
        Path of the JSONL file written
    """
    if out_dir is None:
        date_str = datetime.now().strftime("%Y-%m-%d")
        out_dir = f"runs/{date_str}"

    Path(out_dir).mkdir(parents=True, exist_ok=True)
    receipt_path = Path(out_dir) / "receipts.jsonl"

    with open(receipt_path, "a") as f:
        f.write(json.dumps(record, sort_keys=True) + "\n")
    return receipt_path
