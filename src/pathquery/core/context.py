from __future__ import annotations
from typing import Any, Dict, Optional


class EvaluationContext:
    """
    Per-call evaluation state: the document root plus bookkeeping counters.
    The root never changes while one top-level evaluation runs.
    """
    __slots__ = ("root", "absent", "visits")

    def __init__(self, root: Any, *, trace: bool = False) -> None:
        self.root = root
        self.absent = 0
        self.visits: Optional[Dict[int, int]] = {} if trace else None

    def visit(self, token: Any) -> None:
        if self.visits is not None:
            key = id(token)
            self.visits[key] = self.visits.get(key, 0) + 1
