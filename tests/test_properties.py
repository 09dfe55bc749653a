"""
Property tests over generated expressions.
"""

import sys
import os

from hypothesis import example, given
from hypothesis import strategies as st

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from descent.lexer import TokenType, tokenize
from descent.parser import StepKind, parse
from descent.layout import LayoutConfig, compute_tree_layout


atoms = st.one_of(
    st.integers(min_value=0, max_value=999).map(str),
    st.sampled_from(["x", "y", "rate", "_t", "3.5"]),
)

expressions = st.recursive(
    atoms,
    lambda inner: st.one_of(
        st.tuples(inner, st.sampled_from("+-*/"), inner).map(lambda t: f"{t[0]} {t[1]} {t[2]}"),
        inner.map(lambda e: f"({e})"),
    ),
    max_leaves=25,
)


@given(st.text(alphabet="0123456789.+-*/() abc_$#", max_size=40))
@example("1.2.3")
@example("")
def test_tokenize_offsets(text):
    result = tokenize(text)

    if not result.ok:
        assert result.tokens == []
        assert text[result.error_pos] in ".$#"
        return

    starts = [t.start for t in result.tokens]
    assert starts == sorted(starts)
    assert [t.type for t in result.tokens].count(TokenType.EOF) == 1
    assert result.tokens[-1].start == result.tokens[-1].end == len(text)
    for token in result.tokens[:-1]:
        assert text[token.start:token.end] == token.value
    assert "".join(t.value for t in result.tokens[:-1]) == "".join(text.split())


@given(expressions)
def test_valid_expressions_parse(text):
    result = parse(tokenize(text).tokens)

    assert result.ok, result.error
    assert result.steps[-1].kind == StepKind.SUCCESS
    assert [s.sequence_index for s in result.steps] == list(range(len(result.steps)))
    assert [node.id for node in result.tree] == list(range(len(result.tree)))

    again = parse(tokenize(text).tokens)
    assert again.tree.shape() == result.tree.shape()


@given(expressions)
def test_layout_invariants(text):
    tree = parse(tokenize(text).tokens).tree
    config = LayoutConfig()
    layout = compute_tree_layout(tree, config)
    by_id = {n.id: n for n in layout.nodes}

    assert len(layout.nodes) == len(tree)
    assert by_id[tree.root.id].depth == 0

    for node in tree:
        if node.children:
            first, last = by_id[node.children[0]], by_id[node.children[-1]]
            assert by_id[node.id].x == (first.x + last.x) / 2
            for child_id in node.children:
                assert by_id[child_id].depth == by_id[node.id].depth + 1

    leaf_x = [n.x for n in layout.nodes if n.is_leaf]
    assert all(a < b for a, b in zip(leaf_x, leaf_x[1:]))

    assert layout.width >= max(n.x for n in layout.nodes) + config.width_margin
    assert layout.height >= max(n.y for n in layout.nodes) + config.node_height / 2
