"""
Unit tests for ChainLog utility functions
"""
from chainlog import var, const, pred
from chainlog.utils import get_all_variables, is_ground


class TestIsGround:
    """Test is_ground function"""

    def test_constant(self):
        assert is_ground(const("a"))

    def test_variable(self):
        assert not is_ground(var("X"))

    def test_deeply_nested_variable(self):
        """A variable at any depth makes the term non-ground"""
        term = pred("a", pred("b", pred("c", pred("d", var("X")))))
        assert not is_ground(term)


class TestGetAllVariables:
    """Test get_all_variables function"""

    def test_collects_across_terms(self):
        terms = [pred("p", var("X")), pred("q", var("Y"), var("X"))]
        assert get_all_variables(terms) == {var("X"), var("Y")}

    def test_empty(self):
        assert get_all_variables([]) == set()
        assert get_all_variables([pred("p", "a")]) == set()
