import pytest

from pathquery import PathBuilder, compile, evaluate


def test_builder_matches_compiled_text() -> None:
    built = PathBuilder().root().key("items").where("@.qty", ">", 0).key("sku").build()
    assert built == compile("$.items[?(@.qty > 0)].sku")

    assert PathBuilder().root().slice(1).build() == compile("$[1:]")
    assert PathBuilder().root().slice(0, 4, 2).build() == compile("$[0:4:2]")
    assert PathBuilder().root().union("a", "b").build() == compile("$['a','b']")
    assert PathBuilder().root().descend("k").index(-1).build() == compile("$..k[-1]")
    assert PathBuilder().current().wildcard().build() == compile("@[*]")


def test_builder_accepts_nested_builders_for_filters() -> None:
    sub = PathBuilder().current().key("v")
    path = PathBuilder().root().where(sub, "==", "x").build()
    assert evaluate([{"v": "x"}, {"v": "y"}], path) == [{"v": "x"}]


def test_built_path_renders_as_text() -> None:
    path = PathBuilder().root().key("a b").union(0, 2).build()
    assert str(path) == "$['a b'][0,2]"


def test_builder_validates_arguments() -> None:
    with pytest.raises(ValueError):
        PathBuilder().index(True)
    with pytest.raises(ValueError):
        PathBuilder().key(3)
    with pytest.raises(ValueError):
        PathBuilder().descend("")
    with pytest.raises(ValueError):
        PathBuilder().union()
    with pytest.raises(ValueError):
        PathBuilder().slice(0, 3, 0)
    with pytest.raises(ValueError):
        PathBuilder().where("@.v", "=~", 1)
    with pytest.raises(ValueError):
        PathBuilder().where(42, "==", 1)


@pytest.mark.parametrize(
    "builder",
    [
        PathBuilder().root().key("a b").union(0, "x").slice(-2),
        PathBuilder().root().descend("odd key").wildcard(),
        PathBuilder().current().where("@.s", "==", "it's").index(3),
        PathBuilder().root().where("$.limit", "<=", 0.5).slice(0, 6, 2),
        PathBuilder().root().where(PathBuilder().current().key("ok"), "!=", None).descend("k"),
        PathBuilder().key("n").where("@.flag", "==", False),
    ],
)
def test_built_paths_recompile_from_their_text(builder: PathBuilder) -> None:
    path = builder.build()
    assert compile(str(path)) == path


def test_builder_rejects_paths_without_text_form() -> None:
    with pytest.raises(ValueError):
        PathBuilder().where(PathBuilder(), "==", 1)
    with pytest.raises(ValueError):
        PathBuilder().where("@.v", ">", float("nan"))
