from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd
from pydantic import ValidationError

from ..exceptions import PathSyntaxError, SelectionError
from .engine import Evaluator
from .models import SelectionSpec
from .path import compile_path
from .tokens import CompiledPath


class DataFrameBackend:
    """Builds one table from selected rows, keeping the selector's column order."""

    def to_dataframe(self, rows: List[Dict[str, Any]], columns: List[str]) -> Any:
        raise NotImplementedError

    def concat(self, frames: List[Any], columns: List[str]) -> Any:
        raise NotImplementedError


class PandasBackend(DataFrameBackend):
    def to_dataframe(self, rows: List[Dict[str, Any]], columns: List[str]) -> pd.DataFrame:
        return pd.DataFrame(rows, columns=columns)

    def concat(self, frames: List[pd.DataFrame], columns: List[str]) -> pd.DataFrame:
        non_empty = [f for f in frames if len(f)]
        if not non_empty:
            return pd.DataFrame(columns=columns)
        return pd.concat(non_empty, ignore_index=True)


def to_cell(results: List[Any]) -> Any:
    if not results:
        return None
    if len(results) == 1:
        return results[0]
    return list(results)


class FrameSelector:
    """
    Turn query results over JSON-like documents into a table.

    Each column is a path. With ``explode`` set, one row is emitted per match
    of the explode path; column paths then see that match as ``@`` (or as the
    implicit start of a bare path) while ``$`` stays the whole document.
    """
    def __init__(
        self,
        spec: Union[SelectionSpec, Dict[str, Any]],
        *,
        evaluator: Optional[Evaluator] = None,
        backend: Optional[DataFrameBackend] = None,
    ) -> None:
        self.spec: SelectionSpec = self._validate_spec(spec)
        self._evaluator: Evaluator = evaluator or Evaluator()
        self._backend: DataFrameBackend = backend or PandasBackend()

        self._columns: Dict[str, CompiledPath] = {
            name: self._compile(path, f"column '{name}'") for name, path in self.spec.columns.items()
        }
        self._explode: Optional[CompiledPath] = None
        if self.spec.explode is not None:
            self._explode = self._compile(self.spec.explode.path, "explode.path")

    @property
    def columns(self) -> List[str]:
        return list(self._columns)

    @staticmethod
    def _validate_spec(spec: Union[SelectionSpec, Dict[str, Any]]) -> SelectionSpec:
        if isinstance(spec, SelectionSpec):
            return spec
        if not isinstance(spec, dict):
            raise SelectionError("Selection spec must be an object (dict).")
        try:
            return SelectionSpec(**spec)
        except ValidationError as e:
            raise SelectionError(f"Invalid selection spec: {e}") from e

    @staticmethod
    def _compile(path: str, where: str) -> CompiledPath:
        try:
            return compile_path(path)
        except PathSyntaxError as e:
            raise SelectionError(f"Invalid path for {where}: {e}") from e

    def rows(self, document: Any) -> List[Dict[str, Any]]:
        if self._explode is None:
            return [self._row(document, document)]

        items = [m for m in self._evaluator.evaluate(document, self._explode) if m is not None]
        if items:
            return [self._row(document, item) for item in items]

        if self.spec.explode.emit_root_when_empty:
            return [self._row(document, document)]
        return []

    def _row(self, document: Any, item: Any) -> Dict[str, Any]:
        return {
            name: to_cell([v for v in self._evaluator.evaluate(document, path, item=item) if v is not None])
            for name, path in self._columns.items()
        }

    def to_dataframe_single(self, document: Any):
        return self._backend.to_dataframe(self.rows(document), self.columns)

    def to_dataframe_batch(self, documents: Iterable[Any]):
        frames = [self._backend.to_dataframe(self.rows(doc), self.columns) for doc in documents]
        return self._backend.concat(frames, self.columns)

    def to_dataframe(self, data: Union[Dict[str, Any], List[Any]]):
        if isinstance(data, dict):
            return self.to_dataframe_single(data)

        if isinstance(data, list):
            return self.to_dataframe_batch(data)

        raise TypeError("data must be Dict or List of documents.")
