from grafter.spec import Correspondence
from grafter.test_utils import n


def test_mapping_is_injective_both_ways():
    a, b, c = n("A"), n("B"), n("C")
    mapping = Correspondence()

    assert mapping.add(a, b) is True
    assert mapping.add(a, c) is False
    assert mapping.add(c, b) is False

    assert mapping.get_dst(a) is b
    assert mapping.get_src(b) is a
    assert mapping.get_dst(c) is None
    assert len(mapping) == 1


def test_add_subtrees_maps_in_pre_order():
    src = n("Call", None, n("Name", "f", role="func"), n("Arg", "1", role="args"))
    dst = n("Call", None, n("Name", "f", role="func"), n("Arg", "1", role="args"))
    mapping = Correspondence()

    mapping.add_subtrees(src, dst)

    assert dict(mapping) == dict(zip(src.pre_order(), dst.pre_order()))
    assert mapping.has_src(src.children[1])
    assert mapping.has_dst(dst.children[0])
