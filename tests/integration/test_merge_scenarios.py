from textwrap import dedent

import pytest

from grafter.test_utils import create_test_runner


@pytest.fixture
def runner(tmp_path):
    return create_test_runner(tmp_path)


def _merge(runner, baseline, modified, patched):
    return runner.merge_sources(dedent(baseline), dedent(modified), dedent(patched))


def test_unchanged_versions_merge_to_baseline(runner):
    source = """\
        import os


        def main(argv):
            for arg in argv:
                print(os.path.basename(arg))
    """
    result = _merge(runner, source, source, source)

    assert result.text == dedent(source)
    assert result.is_clean


def test_local_rename_survives_unchanged_patch(runner):
    baseline = """\
        def add(a, b):
            return a + b
    """
    modified = """\
        def add(a, b):
            return x + b
    """
    result = _merge(runner, baseline, modified, baseline)

    assert result.text == dedent(modified)


def test_patch_is_applied_next_to_local_edit(runner):
    baseline = """\
        def f():
            return 1
    """
    modified = """\
        def f():
            return 10
    """
    patched = """\
        def f():
            return 1


        def g():
            return 2
    """
    result = _merge(runner, baseline, modified, patched)

    assert result.text == dedent("""\
        def f():
            return 10


        def g():
            return 2
    """)
    assert result.session.inserted_count == 1


def test_conflicting_edits_keep_baseline(runner):
    result = _merge(runner, "x = 1\n", "x = 2\n", "x = 3\n")

    assert result.text == "x = 1\n"
    assert len(result.divergences) == 1
    assert result.divergences[0].baseline.label == "1"


def test_same_addition_on_both_sides_appears_once(runner):
    baseline = """\
        def f():
            a = 1
    """
    both = """\
        def f():
            a = 1
            b = 2
    """
    result = _merge(runner, baseline, both, both)

    assert result.text == dedent(both)
    assert result.text.count("b = 2") == 1
    assert result.session.deduplicated_count == 1


def test_function_removed_on_both_sides_is_gone(runner):
    baseline = """\
        def keep():
            return compute(1, 2)


        def drop():
            value = compute(3, 4)
            return value
    """
    modified = """\
        def keep():
            return compute(1, 5)
    """
    patched = """\
        def keep():
            return compute(1, 2)
    """
    result = _merge(runner, baseline, modified, patched)

    assert result.text == dedent(modified)
    assert "drop" not in result.text


def test_added_argument_keeps_argument_order(runner):
    baseline = """\
        x = call(a, b)
        y = 5
    """
    modified = """\
        x = call(a, b, c)
        y = 5
    """
    patched = """\
        x = call(a, b)
        y = 6
    """
    result = _merge(runner, baseline, modified, patched)

    assert result.text == dedent("""\
        x = call(a, b, c)
        y = 6
    """)
    assert result.is_clean


def test_changed_operator_is_taken_from_one_side(runner):
    result = _merge(runner, "z = a + b\n", "z = a - b\n", "z = a + b\n")

    assert result.text == "z = a - b\n"


def test_condition_replaced_by_compound_expression(runner):
    baseline = """\
        if a:
            pass
    """
    modified = """\
        if a and b:
            pass
    """
    result = _merge(runner, baseline, modified, baseline)

    assert result.text == dedent(modified)


def test_statement_added_in_one_function_while_other_changes(runner):
    baseline = """\
        def f():
            a = 1


        def g():
            return 1
    """
    modified = """\
        def f():
            a = 1
            b = 2


        def g():
            return 1
    """
    patched = """\
        def f():
            a = 1


        def g():
            return 2
    """
    result = _merge(runner, baseline, modified, patched)

    assert result.text == dedent("""\
        def f():
            a = 1
            b = 2


        def g():
            return 2
    """)
    assert result.session.inserted_count == 1
