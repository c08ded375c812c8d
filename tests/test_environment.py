import pytest

from quill.errors import QuillControlFlowError, QuillInternalError, QuillNestingError, QuillRedeclarationError
from quill.evaluation.evaluator import execute
from quill.reader.parser import parse
from quill.types.environment import Environment
from quill.types.nil import Nil


@pytest.fixture
def env():
    e = Environment(max_depth=8)
    e.begin()
    return e


def test_declare_and_lookup(env):
    env.declare("x", 1.0)
    var = env.lookup("x")
    assert var.name == "x"
    assert var.value == 1.0
    assert env.lookup("y") is None


def test_lookup_returns_writable_slot(env):
    env.declare("x", 1.0)
    env.lookup("x").value = 5.0
    assert env.lookup("x").value == 5.0


def test_inner_scope_shadows_outer(env):
    env.declare("x", "outer")
    env.begin()
    env.declare("x", "inner")
    env.lookup("x").value = "changed"
    assert env.lookup("x").value == "changed"
    env.end(execute)
    assert env.lookup("x").value == "outer"


def test_outer_names_visible_from_inner_scope(env):
    env.declare("x", 1.0)
    env.begin()
    assert env.lookup("x").value == 1.0


def test_redeclaration_in_same_scope_is_rejected(env):
    env.declare("x", 1.0)
    with pytest.raises(QuillRedeclarationError):
        env.declare("x", 2.0)


def test_redeclaration_after_scope_ended_is_accepted(env):
    env.begin()
    env.declare("x", 1.0)
    env.end(execute)
    env.begin()
    env.declare("x", 2.0)
    assert env.lookup("x").value == 2.0


def test_depth_limit_is_enforced():
    env = Environment(max_depth=3)
    for _ in range(3):
        env.begin()
    with pytest.raises(QuillNestingError):
        env.begin()
    assert env.depth == 3


def test_frames_are_pooled_and_reset(env):
    env.begin()
    env.declare("a", 1.0)
    env.end(execute)
    env.begin()
    assert env.pooled == 2
    assert env.lookup("a") is None
    assert env.scope.vars == []


def test_defers_run_in_reverse_order_once(env, capsys):
    for stmt in parse('defer println("A") defer println("B") defer println("C")'):
        env.defer(stmt)
    assert capsys.readouterr().out == ""
    env.end(execute)
    assert capsys.readouterr().out == "C\nB\nA\n"
    assert env.depth == 0


def test_defers_see_the_scope_being_left(env, capsys):
    env.begin()
    env.declare("x", 7.0)
    (stmt,) = parse("defer println(x)")
    env.defer(stmt)
    env.end(execute)
    assert capsys.readouterr().out == "7\n"


def test_return_from_deferred_statement_is_rejected(env):
    env.enter_boundary()
    (stmt,) = parse("defer return 1")
    env.defer(stmt)
    with pytest.raises(QuillControlFlowError):
        env.end(execute)


def test_no_active_scope():
    env = Environment(max_depth=2)
    with pytest.raises(QuillInternalError):
        env.declare("x", Nil)


def test_max_depth_from_environment_variable(monkeypatch):
    monkeypatch.setenv("QUILL_MAX_NEST", "5")
    assert Environment().max_depth == 5
    monkeypatch.setenv("QUILL_MAX_NEST", "zero")
    with pytest.raises(ValueError):
        Environment()


def test_str_and_repr(env):
    env.declare("x", 1.0)
    env.begin()
    env.declare("y", "s")
    assert str(env) == "{y: 's'} -> ..."
    assert repr(env) == "<Environment depth=2: {y: 's'} -> {x: 1.0}>"
