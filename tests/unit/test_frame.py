import pytest

from pathquery import FrameSelector, SelectionError, SelectionSpec

ORDER = {
    "order": "A1",
    "customer": {"name": "Ada"},
    "items": [
        {"sku": "x", "qty": 2, "tags": ["new", "sale"]},
        {"sku": "y", "qty": 0, "tags": []},
    ],
}


def test_one_row_per_document() -> None:
    sel = FrameSelector({"columns": {"order": "$.order", "who": "$.customer.name", "skus": "$.items[*].sku"}})
    df = sel.to_dataframe_single(ORDER)
    assert list(df.columns) == ["order", "who", "skus"]
    assert len(df) == 1
    assert df.loc[0, "order"] == "A1"
    assert df.loc[0, "who"] == "Ada"
    assert df.loc[0, "skus"] == ["x", "y"]


def test_explode_emits_a_row_per_match() -> None:
    sel = FrameSelector({
        "columns": {"order": "$.order", "sku": "@.sku", "qty": "qty", "first_tag": "@.tags[0]"},
        "explode": {"path": "$.items[*]"},
    })
    rows = sel.rows(ORDER)
    assert rows == [
        {"order": "A1", "sku": "x", "qty": 2, "first_tag": "new"},
        {"order": "A1", "sku": "y", "qty": 0, "first_tag": None},
    ]


def test_batch_concatenates_documents() -> None:
    sel = FrameSelector({"columns": {"order": "$.order", "sku": "@.sku"}, "explode": {"path": "$.items[*]"}})
    other = {"order": "B2", "items": [{"sku": "z"}]}
    df = sel.to_dataframe([ORDER, other])
    assert df["order"].tolist() == ["A1", "A1", "B2"]
    assert df["sku"].tolist() == ["x", "y", "z"]


def test_explode_without_matches() -> None:
    empty = {"order": "C3", "items": []}
    spec = {"columns": {"order": "$.order", "sku": "@.sku"}, "explode": {"path": "$.items[*]"}}

    df = FrameSelector(spec).to_dataframe_single(empty)
    assert df["order"].tolist() == ["C3"]
    assert df["sku"].isna().all()

    spec["explode"]["emit_root_when_empty"] = False
    df = FrameSelector(spec).to_dataframe_single(empty)
    assert len(df) == 0
    assert list(df.columns) == ["order", "sku"]

    df = FrameSelector(spec).to_dataframe_batch([empty])
    assert len(df) == 0


def test_accepts_a_spec_model() -> None:
    sel = FrameSelector(SelectionSpec(columns={"n": "$.order"}))
    assert sel.columns == ["n"]
    assert sel.rows(ORDER) == [{"n": "A1"}]


@pytest.mark.parametrize(
    "spec",
    [
        {"columns": {}},
        {"columns": {"a": "$.["}},
        {"columns": {"a": "$.a"}, "explode": {"path": "  "}},
        {"columns": {"a": "$.a"}, "explode": {"path": "$[?(@.x ~ 1)]"}},
        {"columns": "nope"},
        ["not", "a", "dict"],
    ],
)
def test_invalid_specs(spec) -> None:
    with pytest.raises(SelectionError):
        FrameSelector(spec)


def test_to_dataframe_rejects_other_inputs() -> None:
    with pytest.raises(TypeError):
        FrameSelector({"columns": {"a": "$.a"}}).to_dataframe("text")


def test_pandas_backend_keeps_columns_for_empty_batches() -> None:
    from pathquery.core import PandasBackend

    df = PandasBackend().concat([], ["a", "b"])
    assert list(df.columns) == ["a", "b"]
    assert len(df) == 0
