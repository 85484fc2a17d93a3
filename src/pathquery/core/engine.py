from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union as TUnion
import logging

from .compare import compare
from .context import EvaluationContext
from .path import compile_path
from .tokens import (
    OPEN_END, Access, CompiledPath, CurrentItem, FilterAccess, PathToken,
    RecursiveDescent, Root, Slice, Union, Wildcard,
)
from .types import MISSING, child, children

UnionMode = str  # "flat" | "nested"
PathLike = TUnion[str, CompiledPath, Sequence[PathToken]]

_UNSET = object()
_SINGLE_STEP = (Root, CurrentItem, Access)


@dataclass
class EngineConfig:
    union_mode: UnionMode = "flat"
    missing_value: Any = None
    trace_enabled: bool = False

    logger: Optional[logging.Logger] = None
    metrics_increment: Optional[Callable[[str, int], None]] = None


def as_compiled(path: PathLike) -> CompiledPath:
    if isinstance(path, CompiledPath):
        return path
    if isinstance(path, str):
        return compile_path(path)
    return CompiledPath.of(path)


def _expands(token: PathToken, rest: Sequence[PathToken]) -> bool:
    """True when ``token`` followed by ``rest`` can yield other than exactly one entry."""
    return any(not isinstance(t, _SINGLE_STEP) for t in (token, *rest))


def collapse(matches: List[Any]) -> Any:
    """Reduce a subpath result to one value, a list of values, or MISSING."""
    present = [m for m in matches if m is not MISSING]
    if not present:
        return MISSING
    if len(present) == 1:
        return present[0]
    return present


class Evaluator:
    """
    Recursive interpreter walking a JSON-like tree guided by a compiled path.

    Evaluation is read-only and never raises for a well-formed path: failed
    navigation contributes an absence entry instead.

    With ``union_mode="nested"`` every union alternative fills one slot. The
    slot is the bare value when the alternative and the rest of the path only
    step through keys and indices; otherwise it is the list of that
    alternative's matches, even when the list holds a single value.
    """
    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self._config: EngineConfig = config or EngineConfig()
        if self._config.union_mode not in {"flat", "nested"}:
            raise ValueError("EngineConfig.union_mode must be one of {'flat','nested'}.")

    @property
    def config(self) -> EngineConfig:
        return self._config

    def evaluate(self, document: Any, path: PathLike, *, item: Any = _UNSET) -> List[Any]:
        compiled = as_compiled(path)
        if self._config.trace_enabled:
            report = self._trace(document, compiled, item)
            if self._config.logger:
                self._config.logger.info("Evaluation trace: %s", report)
            return report["results"]

        ctx = EvaluationContext(document)
        results = self._evaluate(ctx, compiled, document if item is _UNSET else item)
        self._report(compiled, results, ctx)
        return results

    def trace(self, document: Any, path: PathLike, *, item: Any = _UNSET) -> Dict[str, Any]:
        return self._trace(document, as_compiled(path), item)

    def _trace(self, document: Any, compiled: CompiledPath, item: Any) -> Dict[str, Any]:
        ctx = EvaluationContext(document, trace=True)
        results = self._evaluate(ctx, compiled, document if item is _UNSET else item)
        self._report(compiled, results, ctx)
        steps = [{"token": str(t), "visits": ctx.visits.get(id(t), 0)} for t in compiled]
        return {"path": str(compiled), "results": results, "absent": ctx.absent, "steps": steps}

    def _evaluate(self, ctx: EvaluationContext, compiled: CompiledPath, current: Any) -> List[Any]:
        out: List[Any] = []
        self._run(ctx, current, compiled.tokens, 0, out)
        return [self._finish(v) for v in out]

    def _finish(self, value: Any) -> Any:
        if value is MISSING:
            return self._config.missing_value
        return value

    def _report(self, compiled: CompiledPath, results: List[Any], ctx: EvaluationContext) -> None:
        if self._config.metrics_increment:
            self._config.metrics_increment("evaluator.evaluations", 1)
            self._config.metrics_increment("evaluator.results", len(results))
            if ctx.absent:
                self._config.metrics_increment("evaluator.absent", ctx.absent)

        if self._config.logger:
            self._config.logger.debug(
                "Evaluated %s: %d result(s), %d absent", compiled, len(results), ctx.absent
            )

    def _absent(self, ctx: EvaluationContext, out: List[Any]) -> None:
        ctx.absent += 1
        out.append(MISSING)

    def _run(self, ctx: EvaluationContext, current: Any, tokens: Sequence[PathToken], pos: int, out: List[Any]) -> None:
        if pos == len(tokens):
            out.append(current)
            return
        self._step(ctx, current, tokens[pos], tokens, pos + 1, out)

    def _step(
        self,
        ctx: EvaluationContext,
        current: Any,
        token: PathToken,
        tokens: Sequence[PathToken],
        nxt: int,
        out: List[Any],
    ) -> None:
        """Apply ``token`` to ``current``, then continue with ``tokens[nxt:]``."""
        ctx.visit(token)

        if isinstance(token, Root):
            self._run(ctx, ctx.root, tokens, nxt, out)

        elif isinstance(token, CurrentItem):
            self._run(ctx, current, tokens, nxt, out)

        elif isinstance(token, FilterAccess):
            if not isinstance(current, (dict, list, tuple)):
                self._absent(ctx, out)
                return
            for element in children(current):
                matches: List[Any] = []
                self._run(ctx, element, token.subpath.tokens, 0, matches)
                value = collapse(matches)
                if value is MISSING or not compare(token.op, value, token.literal):
                    continue
                self._run(ctx, element, tokens, nxt, out)

        elif isinstance(token, Access):
            found = child(current, token.key)
            if found is MISSING:
                self._absent(ctx, out)
            else:
                self._run(ctx, found, tokens, nxt, out)

        elif isinstance(token, RecursiveDescent):
            self._descend(ctx, current, token.key, tokens, nxt, out)

        elif isinstance(token, Slice):
            if not isinstance(current, (list, tuple)):
                self._absent(ctx, out)
                return
            last = len(current) if token.last is OPEN_END else token.last
            if token.first == last:
                self._absent(ctx, out)
                return
            for element in current[token.first:last:token.step]:
                self._run(ctx, element, tokens, nxt, out)

        elif isinstance(token, Wildcard):
            if not isinstance(current, (dict, list, tuple)):
                self._absent(ctx, out)
                return
            for element in children(current):
                self._run(ctx, element, tokens, nxt, out)

        elif isinstance(token, Union):
            for alternative in token.alternatives:
                if self._config.union_mode == "flat":
                    self._step(ctx, current, alternative, tokens, nxt, out)
                    continue
                slot: List[Any] = []
                self._step(ctx, current, alternative, tokens, nxt, slot)
                if _expands(alternative, tokens[nxt:]):
                    out.append([self._finish(v) for v in slot])
                else:
                    out.append(slot[0])

        else:
            raise TypeError(f"Unsupported path token: {token!r}")

    def _descend(
        self,
        ctx: EvaluationContext,
        current: Any,
        key: str,
        tokens: Sequence[PathToken],
        nxt: int,
        out: List[Any],
    ) -> None:
        # Pre-order walk on an explicit stack: a node's own match precedes
        # matches found below it, siblings stay in enumeration order.
        stack = [current]
        while stack:
            node = stack.pop()
            if isinstance(node, dict):
                if key in node:
                    self._run(ctx, node[key], tokens, nxt, out)
                stack.extend(reversed(list(node.values())))
            elif isinstance(node, (list, tuple)):
                stack.extend(reversed(node))
