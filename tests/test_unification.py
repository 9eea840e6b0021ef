"""
Tests for ChainLog unification
"""
import logging

import pytest
from chainlog import var, const, pred, unify, unifies, resolve, apply_substitution, occurs_check


X, Y, Z = var("X"), var("Y"), var("Z")


class TestResolve:
    """Test variable resolution"""

    def test_unbound_variable(self):
        """An unbound variable resolves to itself"""
        assert resolve(X, {}) == X

    def test_non_variable(self):
        """Non-variables are returned unchanged"""
        term = pred("p", X)
        assert resolve(term, {X: const("a")}) is term

    def test_chain(self):
        """Chains of variable bindings are followed to the end"""
        subst = {X: Y, Y: Z, Z: const("a")}
        assert resolve(X, subst) == const("a")

    def test_chain_to_unbound(self):
        """A chain may end at an unbound variable"""
        assert resolve(X, {X: Y}) == Y

    def test_long_chain(self):
        """Long acyclic chains terminate"""
        variables = [var(f"V{i}") for i in range(200)]
        subst = {a: b for a, b in zip(variables, variables[1:])}
        subst[variables[-1]] = const("end")
        assert resolve(variables[0], subst) == const("end")


class TestApplySubstitution:
    """Test substitution application"""

    def test_replaces_nested_variables(self):
        term = pred("likes", X, pred("food", Y))
        subst = {X: const("john"), Y: Z, Z: const("pizza")}
        assert apply_substitution(term, subst) == pred("likes", "john", pred("food", "pizza"))

    def test_unbound_passes_through(self):
        assert apply_substitution(pred("p", X, Y), {X: const("a")}) == pred("p", "a", Y)

    def test_binding_to_compound_with_variables(self):
        """Bindings to compound terms are resolved recursively"""
        subst = {X: pred("f", Y), Y: const("b")}
        assert apply_substitution(pred("p", X), subst) == pred("p", pred("f", "b"))

    def test_idempotent(self):
        """Applying a substitution twice changes nothing further"""
        subst = {X: pred("f", Y), Y: Z}
        term = pred("p", X, Y, Z, const("c"))
        once = apply_substitution(term, subst)
        assert apply_substitution(once, subst) == once


class TestOccursCheck:
    """Test the occurs check"""

    def test_same_variable(self):
        assert occurs_check(X, X, {})

    def test_nested(self):
        assert occurs_check(X, pred("f", pred("g", X)), {})

    def test_through_binding(self):
        """Bindings of variables inside the term are followed"""
        assert occurs_check(X, pred("f", Y), {Y: pred("g", X)})

    def test_absent(self):
        assert not occurs_check(X, pred("f", Y, const("a")), {})
        assert not occurs_check(X, const("X"), {})


class TestUnify:
    """Test unification"""

    def test_identical_constants(self):
        subst = {}
        assert unify(const("a"), const("a"), subst)
        assert subst == {}

    def test_different_constants(self):
        assert not unify(const("a"), const("b"), {})

    def test_variable_binds(self):
        subst = {}
        assert unify(X, const("a"), subst)
        assert subst == {X: const("a")}

    def test_variable_on_right(self):
        subst = {}
        assert unify(const("a"), X, subst)
        assert subst == {X: const("a")}

    def test_variable_to_variable(self):
        subst = {}
        assert unify(X, Y, subst)
        assert subst.get(X) == Y or subst.get(Y) == X

    def test_constant_vs_predicate(self):
        assert not unify(const("p"), pred("p"), {})
        assert not unify(pred("p", "a"), const("a"), {})

    def test_functor_and_arity_mismatch(self):
        assert not unify(pred("p", "a"), pred("q", "a"), {})
        assert not unify(pred("p", "a"), pred("p", "a", "b"), {})

    def test_consistency_across_arguments(self):
        """Later arguments see bindings made by earlier ones"""
        assert unify(pred("p", X, X), pred("p", "a", "a"), {})
        assert not unify(pred("p", X, X), pred("p", "a", "b"), {})

    def test_bound_variable_unifies_through_binding(self):
        subst = {X: const("a")}
        assert unify(X, const("a"), subst)
        assert not unify(X, const("b"), dict(subst))

    def test_existing_binding_is_never_overwritten(self):
        subst = {X: const("a")}
        unify(X, const("b"), subst)
        assert subst[X] == const("a")

    def test_term_is_bound_variable(self):
        """Unifying v with a bound variable uses that variable's binding"""
        subst = {Y: const("a")}
        assert unify(X, Y, subst)
        assert resolve(X, subst) == const("a")

    def test_nested(self):
        subst = {}
        assert unify(pred("likes", X, pred("food", Y)),
                     pred("likes", "john", pred("food", "pizza")), subst)
        assert subst[X] == const("john")
        assert subst[Y] == const("pizza")

    def test_occurs_check_rejects(self, caplog):
        """A variable never unifies with a compound term containing it"""
        subst = {}
        with caplog.at_level(logging.DEBUG, logger="chainlog.unification"):
            assert not unify(X, pred("f", X), subst)
        assert subst == {}
        assert "Occurs check failed" in caplog.text

    @pytest.mark.parametrize("functor", ["f", "g", "successor"])
    def test_occurs_check_any_functor(self, functor):
        assert not unify(X, pred(functor, X), {})
        assert not unify(pred(functor, X), X, {})

    def test_indirect_occurs(self):
        """X = f(Y), then Y = g(X) would be cyclic"""
        assert not unify(pred("p", X, Y), pred("p", pred("f", Y), pred("g", X)), {})


# Pairs used to check soundness and symmetry
UNIFY_CASES = [
    (pred("p", X, "b"), pred("p", "a", Y)),
    (pred("p", X, X), pred("p", Y, "c")),
    (pred("f", X, pred("g", Y)), pred("f", pred("g", Z), X)),
    (pred("p", X, Y, Z), pred("p", Y, Z, "k")),
    (pred("p", X), pred("p", pred("f", X))),
    (pred("p", "a", X), pred("p", "b", X)),
    (pred("q", X, X), pred("q", pred("f", Y), pred("f", "c"))),
    (X, Y),
    (X, pred("p", X)),
]


class TestUnificationProperties:
    """Soundness and symmetry of unification"""

    @pytest.mark.parametrize("x,y", UNIFY_CASES)
    def test_soundness(self, x, y):
        """A successful unification makes both sides identical"""
        subst = {}
        if unify(x, y, subst):
            assert apply_substitution(x, subst) == apply_substitution(y, subst)

    @pytest.mark.parametrize("x,y", UNIFY_CASES)
    def test_symmetry(self, x, y):
        """unify(x, y) succeeds iff unify(y, x) does"""
        forward, backward = {}, {}
        ok_forward = unify(x, y, forward)
        ok_backward = unify(y, x, backward)
        assert ok_forward == ok_backward
        if ok_forward:
            assert apply_substitution(x, forward) == apply_substitution(y, forward)
            assert apply_substitution(x, backward) == apply_substitution(y, backward)

    @pytest.mark.parametrize("x,y", UNIFY_CASES)
    def test_resolution_idempotent(self, x, y):
        subst = {}
        unify(x, y, subst)
        once = apply_substitution(x, subst)
        assert apply_substitution(once, subst) == once


class TestUnifies:
    """Test the non-mutating wrapper"""

    def test_returns_extended_copy(self):
        start = {X: const("a")}
        result = unifies(pred("p", X, Y), pred("p", "a", "b"), start)
        assert result == {X: const("a"), Y: const("b")}
        assert start == {X: const("a")}

    def test_failure_leaves_argument_untouched(self):
        start = {X: const("a")}
        assert unifies(pred("p", Y, X), pred("p", "c", "b"), start) is None
        assert start == {X: const("a")}
