import logging
import sys

import pytest

from quill.errors import (
    QuillArityError,
    QuillControlFlowError,
    QuillNestingError,
    QuillRedeclarationError,
    QuillSyntaxError,
    QuillTypeError,
    QuillUndefinedError,
    QuillUnknownFunctionError,
)
from quill.interpreter import (
    BASE_FRAMES,
    FRAMES_PER_SCOPE,
    RECURSION_CEILING,
    Interpreter,
    recursion_budget,
)
from quill.reader.nodes import Location


def fails(program, **kwargs):
    return Interpreter(**kwargs).eval(program)


# -----------------------------------------------------
# let
# -----------------------------------------------------

def test_let_chain(run):
    assert run("let a = 1, b = a + 1, c println(a, b, c)") == "1 2 (nil)\n"


def test_let_initializer_does_not_see_its_own_name(run):
    with pytest.raises(QuillUndefinedError):
        fails("let x = x")
    program = """
    let x = 1
    if true {
        let x = x + 1
        println(x)
    }
    println(x)
    """
    assert run(program) == "2\n1\n"


def test_let_redeclaration_in_same_scope():
    with pytest.raises(QuillRedeclarationError, match="Variable 'x' redeclared"):
        fails("let x = 1 let x = 2")
    with pytest.raises(QuillRedeclarationError):
        fails("let y = 1, y = 2")


def test_variable_keeps_its_type(run):
    assert run('let s = "a" s = "b" println(s)') == "b\n"
    with pytest.raises(QuillTypeError):
        fails('let s = "a" s = nil')


# -----------------------------------------------------
# if
# -----------------------------------------------------

def test_if_else_chain(run):
    program = """
    let grade = fun(n) {
        if n > 90 { return "A" }
        else if n > 80 { return "B" }
        else { return "C" }
    }
    println(grade(95), grade(85), grade(10))
    """
    assert run(program) == "A B C\n"


def test_if_without_matching_branch_does_nothing(run):
    assert run('if false { println("no") } else if false { println("no") } println("ok")') == "ok\n"


@pytest.mark.parametrize("cond", ["1", "nil", '"true"', "fun() {}"])
def test_if_condition_must_be_bool(cond):
    with pytest.raises(QuillTypeError, match="if statement condition"):
        fails(f"if {cond} {{ }}")


def test_if_body_scope_ends_with_the_statement():
    with pytest.raises(QuillUndefinedError):
        fails("if true { let inner = 1 } println(inner)")


# -----------------------------------------------------
# while
# -----------------------------------------------------

def test_while_loop(run):
    assert run("let i = 0 while i < 3 { print(i) i ++ 1 } println()") == "012\n"


def test_while_shares_one_scope_across_iterations():
    with pytest.raises(QuillRedeclarationError):
        fails("let i = 0 while i < 2 { let t = i i ++ 1 }")


def test_while_defers_run_when_the_loop_ends(run):
    program = """
    let i = 0
    while i < 3 {
        defer println("d", i)
        i ++ 1
    }
    println("after")
    """
    assert run(program) == "d 3\nd 3\nd 3\nafter\n"


def test_while_condition_must_be_bool():
    with pytest.raises(QuillTypeError, match="while statement condition"):
        fails("while 1 { }")


# -----------------------------------------------------
# for
# -----------------------------------------------------

def test_for_defers_run_after_step(run):
    program = """
    for (let i = 0; i < 2; i ++ 1) {
        defer println("end", i)
        println("body", i)
    }
    """
    assert run(program) == "body 0\nend 1\nbody 1\nend 2\n"


def test_for_body_gets_a_fresh_scope_per_iteration(run):
    program = """
    for (let i = 0; i < 3; i ++ 1) {
        let sq = i * i
        print(sq, "")
    }
    println()
    """
    assert run(program) == "0 1 4 \n"


def test_for_init_is_scoped_to_the_loop():
    with pytest.raises(QuillUndefinedError):
        fails("for (let i = 0; i < 1; i ++ 1) { } println(i)")


def test_for_with_empty_init_and_step(run):
    assert run("let i = 0 for (; i < 3; ) { i ++ 1 } println(i)") == "3\n"


def test_return_from_for_ends_both_scopes(run):
    program = """
    let find = fun(limit) {
        for (let i = 0; i < 10; i ++ 1) {
            defer println("leaving", i)
            if i == limit { return i * 10 }
        }
        return -1
    }
    println(find(2))
    """
    assert run(program) == "leaving 1\nleaving 2\nleaving 2\n20\n"


def test_return_from_for_step_is_rejected():
    with pytest.raises(QuillControlFlowError, match="Unexpected return in for loop"):
        fails("let f = fun() { for (let i = 0; i < 1; return 1) { } } f()")


def test_for_condition_must_be_bool():
    with pytest.raises(QuillTypeError, match="for statement condition"):
        fails('for (let i = 0; "yes"; i ++ 1) { }')


# -----------------------------------------------------
# do / return
# -----------------------------------------------------

def test_do_block_value(run):
    assert run("let v = do { let t = 4 return t * 2 } println(v)") == "8\n"
    assert run("println(do { 1 })") == "(nil)\n"


def test_return_travels_out_of_nested_statements(run):
    program = """
    let v = do {
        let i = 0
        while true {
            if i == 3 { return i }
            i ++ 1
        }
    }
    println(v)
    """
    assert run(program) == "3\n"


def test_bare_return_yields_nil(run):
    assert run("let f = fun() { return } println(f())") == "(nil)\n"


@pytest.mark.parametrize("program", ["return 1", "if true { return 1 }", "while true { return }"])
def test_return_outside_function_or_do(program):
    with pytest.raises(QuillControlFlowError, match="Unexpected return"):
        fails(program)


# -----------------------------------------------------
# defer
# -----------------------------------------------------

def test_defers_run_in_reverse_order(run):
    program = 'do { defer println("A") defer println("B") defer println("C") println("body") }'
    assert run(program) == "body\nC\nB\nA\n"


def test_defer_block_form(run):
    assert run('do { defer { println("x") println("y") } }') == "x\ny\n"


def test_defers_run_on_return_after_value_is_computed(run):
    program = """
    let f = fun() {
        let x = 1
        defer x = 2
        defer println("cleanup")
        return x
    }
    println(f())
    """
    assert run(program) == "cleanup\n1\n"


def test_top_level_defers_run_at_program_end(run):
    assert run('defer println("last") println("first")') == "first\nlast\n"


def test_return_inside_deferred_statement():
    with pytest.raises(QuillControlFlowError):
        fails("let f = fun() { defer return 1 } f()")


# -----------------------------------------------------
# Functions
# -----------------------------------------------------

def test_recursion(run):
    program = """
    let fact = fun(n) {
        if n <= 1 { return 1 }
        return n * fact(n - 1)
    }
    println(fact(10))
    """
    assert run(program) == "3628800\n"


def test_free_names_resolve_at_call_time(run):
    program = """
    let show = fun() { println(name) }
    let name = "one"
    show()
    do {
        let name = "two"
        show()
    }
    """
    assert run(program) == "one\ntwo\n"


def test_arguments_are_evaluated_in_the_callers_scope(run):
    assert run("let a = 5 let f = fun(a) { return a * 2 } println(f(a + 1))") == "12\n"


def test_function_without_return_yields_nil(run):
    assert run("let f = fun(x) { x ++ 1 } println(f(1))") == "(nil)\n"


def test_functions_are_values(run):
    program = """
    let twice = fun(x) { return x * 2 }
    let alias = twice
    println(alias(4), twice)
    """
    assert run(program) == "8 <function>\n"


def test_builtins_take_precedence_over_variables(run):
    assert run('let println = fun(x) { } println("still builtin")') == "still builtin\n"


def test_arity_mismatch():
    with pytest.raises(QuillArityError, match="Expected 1 argument, got 2"):
        fails("let f = fun(a) { } f(1, 2)")


def test_duplicate_parameter_names():
    with pytest.raises(QuillRedeclarationError):
        fails("let f = fun(a, a) { } f(1, 2)")


@pytest.mark.parametrize("program", ["nothing()", "let x = 1 x()"])
def test_unknown_function(program):
    with pytest.raises(QuillUnknownFunctionError):
        fails(program)


# -----------------------------------------------------
# Nesting and the interpreter facade
# -----------------------------------------------------

def test_nesting_limit():
    with pytest.raises(QuillNestingError, match="Maximum nesting depth of 3 exceeded"):
        fails("if true { if true { if true { } } }", max_depth=3)
    fails("if true { if true { } }", max_depth=3)


def test_unbounded_recursion_hits_the_nesting_limit():
    with pytest.raises(QuillNestingError):
        fails("let f = fun(n) { return f(n + 1) } f(0)")


def test_nesting_limit_from_environment(monkeypatch):
    monkeypatch.setenv("QUILL_MAX_NEST", "2")
    with pytest.raises(QuillNestingError):
        fails("if true { if true { } }")


def test_eval_leaves_no_scope_open():
    env = Interpreter().eval("let x = 1 if true { let y = 2 }")
    assert env.depth == 0
    assert env.boundaries == 0
    assert env.pooled == 2


def test_every_run_starts_fresh():
    interpreter = Interpreter()
    interpreter.eval("let x = 1")
    interpreter.eval("let x = 2")


def test_debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="quill")
    Interpreter().eval("let x = 1")
    messages = [record.getMessage() for record in caplog.records]
    assert any(m.startswith("running program: 1 statements") for m in messages)
    assert "frame pool grown to 1" in messages


def test_else_if_nests_a_scope_per_test():
    fails("if false { } else if true { }", max_depth=3)
    with pytest.raises(QuillNestingError):
        fails("if false { } else if false { } else if true { }", max_depth=3)


def test_else_body_runs_in_the_innermost_scope(run):
    program = """
    if false { } else if false { } else {
        defer println("else done")
        println("else")
    }
    """
    assert run(program) == "else\nelse done\n"


def test_return_in_deferred_statement_points_at_the_return():
    with pytest.raises(QuillControlFlowError, match="deferred statement") as exc:
        fails("let f = fun() { if true { defer return 1 } } f()")
    assert exc.value.where == Location("<input>", 1, 33)


# -----------------------------------------------------
# Python stack limits
# -----------------------------------------------------

def _sum_of_ones(n):
    return " + ".join(["1"] * n)


def test_long_expression(run):
    assert run(f"println({_sum_of_ones(600)})") == "600\n"


def test_deep_recursion_with_a_raised_nesting_limit(run):
    program = "let f = fun(n) { if n == 0 { return 0 } return f(n - 1) } println(f(400))"
    assert run(program, max_depth=100_000) == "0\n"


def test_exhausted_python_stack_is_a_nesting_error():
    with pytest.raises(QuillNestingError, match="nested too deeply") as exc:
        fails(f"let x = 1\nprintln({_sum_of_ones(20_000)})")
    assert exc.value.where == Location("<input>", 2, 1)


def test_exhausted_python_stack_in_the_parser_is_a_syntax_error():
    with pytest.raises(QuillSyntaxError, match="nested too deeply"):
        fails("(" * 5000 + "1" + ")" * 5000)


def test_recursion_limit_is_restored():
    before = sys.getrecursionlimit()
    Interpreter().eval("println(1)")
    with pytest.raises(QuillNestingError):
        fails(f"println({_sum_of_ones(20_000)})")
    assert sys.getrecursionlimit() == before


def test_recursion_budget():
    assert recursion_budget(64) == BASE_FRAMES + FRAMES_PER_SCOPE * 64
    assert recursion_budget(100_000) == RECURSION_CEILING
