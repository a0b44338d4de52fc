from grafter.merge.engine import (
    MergedTreeBuilder,
    MergeSession,
    NewNodeInserter,
    TripleBuilder,
)
from grafter.needle import L
from grafter.test_utils import LabelMatcher, n


def _merge(baseline, modified, patched):
    session = MergeSession()
    matcher = LabelMatcher()
    TripleBuilder(matcher).build(baseline, modified, patched, session)
    merged = MergedTreeBuilder().merge(baseline, session)
    merged = NewNodeInserter(matcher).insert_new(modified, patched, merged, session)
    return merged, session


def test_only_top_most_unmatched_nodes_are_collected():
    source = n("Block", "root", n("S", "a"), n("S", "new", n("E", "inner")))
    merged = n("Block", "root", n("S", "a"))

    found = NewNodeInserter(LabelMatcher()).collect_top_most_unmatched(source, merged)

    assert found == [source.children[1]]


def test_addition_on_one_side_is_inserted_under_its_anchor():
    baseline = n("Block", "root", n("S", "a"))
    modified = n("Block", "root", n("S", "a"))
    patched = n("Block", "root", n("S", "a"), n("S", "new", n("E", "inner")))

    merged, session = _merge(baseline, modified, patched)

    assert [x.label for x in merged.pre_order()] == ["root", "a", "new", "inner"]
    assert session.inserted_count == 1
    new_node = merged.children[1]
    assert new_node is not patched.children[1]
    assert new_node.parent is merged


def test_identical_additions_are_inserted_once():
    baseline = n("Block", "root", n("S", "a"))
    modified = n("Block", "root", n("S", "a"), n("S", "new"))
    patched = n("Block", "root", n("S", "a"), n("S", "new"))

    merged, session = _merge(baseline, modified, patched)

    assert [c.label for c in merged.children] == ["a", "new"]
    assert session.inserted_count == 1
    assert session.deduplicated_count == 1


def test_different_additions_are_both_kept_modified_first():
    baseline = n("Block", "root", n("S", "a"))
    modified = n("Block", "root", n("S", "a"), n("S", "from_mod"))
    patched = n("Block", "root", n("S", "a"), n("S", "from_pat"))

    merged, session = _merge(baseline, modified, patched)

    assert [c.label for c in merged.children] == ["a", "from_mod", "from_pat"]
    assert session.inserted_count == 2


def test_nested_anchor_is_found_in_the_rebuilt_tree():
    baseline = n("Block", "root", n("Def", "f", n("S", "a")))
    modified = n("Block", "root", n("Def", "f", n("S", "a"), n("S", "b")))
    patched = n("Block", "root", n("Def", "f", n("S", "a")), n("Def", "g"))

    merged, session = _merge(baseline, modified, patched)

    assert merged.to_tree_string(indent=" ") == (
        "Block: root\n Def: f\n  S: a\n  S: b\n Def: g"
    )
    assert session.baseline_to_merged[baseline] is merged
    assert session.baseline_to_merged[baseline.children[0]] is merged.children[0]


def test_node_without_baseline_ancestor_is_reported_not_attached(spy_bus):
    baseline = n("Block", "root", n("S", "a"))
    modified = n("Block", "other", n("S", "a"))
    patched = n("Block", "root", n("S", "a"))

    merged, session = _merge(baseline, modified, patched)

    assert [x.label for x in merged.pre_order()] == ["root", "a"]
    assert len(session.unanchored) == 1
    assert session.unanchored[0].node is modified
    assert session.unanchored[0].origin == "modified"
    spy_bus.assert_id_called(L.merge.insert.unanchored, level="warning")
