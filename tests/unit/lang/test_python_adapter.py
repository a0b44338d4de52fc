from textwrap import dedent

import pytest

from grafter.lang.python import (
    PythonCodeGenerator,
    PythonTreeParser,
    TreeStringGenerator,
)
from grafter.needle import L
from grafter.spec import RenderError
from grafter.test_utils import n


@pytest.fixture
def parser():
    return PythonTreeParser()


@pytest.fixture
def generator():
    return PythonCodeGenerator()


@pytest.mark.parametrize(
    "source",
    [
        "x = 1\n",
        "x = 1",
        "# header comment\n\nimport os\nfrom typing import List as L\n",
        dedent("""
            class Greeter(object):
                \"\"\"Says hello.\"\"\"

                def greet(self, name: str = "world") -> str:
                    # a comment
                    return f"hello {name}!"  # trailing
        """),
        dedent("""
            async def main(*args, **kwargs):
                async with lock:
                    for i, item in enumerate(items):
                        if i % 2 == 0 and item:
                            yield [x ** 2 for x in item if x]
                        elif not item:
                            continue
                        else:
                            raise ValueError(i)
        """),
        "value = {'a': (1, 2.5), 'b': None}  ;  other = lambda y: y\n",
    ],
)
def test_round_trip_reproduces_source(parser, generator, source):
    tree = parser.parse(source)
    assert tree is not None
    assert generator.generate(tree) == source


def test_conversion_shape(parser):
    tree = parser.parse("x = 1\n")

    assert tree.type == "Module"
    assert tree.role is None
    names = [node for node in tree.pre_order() if node.type == "Name"]
    assert [(node.label, node.role) for node in names] == [("x", "target")]
    integer = next(node for node in tree.pre_order() if node.type == "Integer")
    assert integer.label == "1"
    assert integer.role == "value"


def test_equal_sources_give_isomorphic_trees(parser):
    assert parser.parse("a = b\n").is_isomorphic_to(parser.parse("a = b\n"))
    assert not parser.parse("a = b\n").is_isomorphic_to(parser.parse("a = c\n"))


def test_blank_source_yields_no_tree(parser, spy_bus):
    assert parser.parse("   \n") is None
    spy_bus.assert_id_called(L.parser.empty_source, level="warning")


def test_syntax_error_yields_no_tree(parser, spy_bus):
    assert parser.parse("def broken(:\n") is None
    spy_bus.assert_id_called(L.parser.syntax_error, level="error")


def test_parse_file(parser, tmp_path, spy_bus):
    path = tmp_path / "mod.py"
    path.write_text("x = 1\n", encoding="utf-8")

    assert parser.parse_file(path) is not None
    assert parser.parse_file(tmp_path / "missing.py") is None
    spy_bus.assert_id_called(L.parser.missing_file, level="warning")


def test_generator_requires_module_root(generator):
    with pytest.raises(RenderError):
        generator.generate(n("Name", "x"))


def test_generator_rejects_unknown_node_types(generator):
    with pytest.raises(RenderError):
        generator.build(n("NotALibcstNode"))


def test_generator_rejects_two_nodes_for_one_field(generator):
    node = n(
        "Return",
        None,
        n("Name", "a", role="value"),
        n("Name", "b", role="value"),
    )
    with pytest.raises(RenderError):
        generator.build(node)


def test_generator_rejects_children_without_role(generator):
    with pytest.raises(RenderError):
        generator.build(n("Return", None, n("Name", "a")))


def test_tree_string_generator(parser):
    output = TreeStringGenerator().generate(parser.parse("x = 1\n"))

    lines = output.splitlines()
    assert lines[0] == "Module"
    assert "Name: x [target]" in output
    assert output.endswith("\n")
