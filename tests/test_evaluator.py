import sys
import pytest
from tests.utils import parse_text, run_text
from environment import Environment
from evaluator import Evaluator, evaluate, is_truthy
from objects import Integer, Boolean, Function, ReturnValue, NULL, TRUE, FALSE
from errors import (
    EvalError,
    EvalNameError,
    EvalTypeError,
    EvalZeroDivisionError,
    IntegerOverflowError,
)


def inspect_text(src, **kwargs):
    return run_text(src, **kwargs).inspect()


@pytest.mark.parametrize(
    "src, expected",
    [
        ("5", "5"),
        ("10", "10"),
        ("true", "true"),
        ("false", "false"),
        ("!true", "false"),
        ("!false", "true"),
        ("!!true", "true"),
        ("-10", "-10"),
        ("--5", "5"),
    ],
)
def test_eval_literals_and_prefix(src, expected):
    assert inspect_text(src) == expected


@pytest.mark.parametrize(
    "src, expected",
    [
        ("5 + 5 + 5 + 5 - 10", "10"),
        ("2 * 2 * 2 * 2 * 2", "32"),
        ("-50 + 100 + -50", "0"),
        ("5 * 2 + 10", "20"),
        ("5 + 2 * 10", "25"),
        ("20 + 2 * -10", "0"),
        ("50 / 2 * 2 + 10", "60"),
        ("2 * (5 + 10)", "30"),
        ("3 * 3 * 3 + 10", "37"),
        ("3 * (3 * 3) + 10", "37"),
        ("(5 + 10 * 2 + 15 / 3) * 2 + -10", "50"),
        ("1 < 2", "true"),
        ("1 > 2", "false"),
        ("1 < 1", "false"),
        ("1 > 1", "false"),
        ("1 == 1", "true"),
        ("1 != 1", "false"),
        ("1 == 2", "false"),
        ("1 != 2", "true"),
        ("true == true", "true"),
        ("false == false", "true"),
        ("true == false", "false"),
        ("true != false", "true"),
        ("false != true", "true"),
        ("(1 < 2) == true", "true"),
        ("(1 < 2) == false", "false"),
        ("(1 > 2) == true", "false"),
        ("(1 > 2) == false", "true"),
    ],
)
def test_eval_infix_operators(src, expected):
    assert inspect_text(src) == expected


@pytest.mark.parametrize(
    "src, expected",
    [
        ("7 / 2", 3),
        ("-7 / 2", -3),
        ("7 / -2", -3),
        ("-7 / -2", 3),
        ("1 / 3", 0),
    ],
)
def test_division_truncates_toward_zero(src, expected):
    assert run_text(src) == Integer(expected)


@pytest.mark.parametrize(
    "src",
    [
        "-true",
        "!5",
        "!0",
        "true + false",
        "true * true",
        "1 == true",
        "1 != false",
        "true < false",
        "1 + true",
        "let f = fn() { 1 }; f + 1",
        "let f = fn() { 1 }; f == f",
        "-fn() { 1 }",
    ],
)
def test_mismatched_operand_types_evaluate_to_null(src):
    assert run_text(src) is NULL


@pytest.mark.parametrize(
    "src, expected",
    [
        ("if (true) { 10 }", "10"),
        ("if (false) { 10 }", "null"),
        ("if (1) { 10 }", "10"),
        ("if (1 < 2) { 10 }", "10"),
        ("if (1 > 2) { 10 }", "null"),
        ("if (1 > 2) { 10 } else { 20 }", "20"),
        ("if (1 < 2) { 10 } else { 20 }", "10"),
        ("if (if (false) { 1 }) { 10 } else { 20 }", "20"),
        ("if (true) { }", "null"),
    ],
)
def test_eval_if_expressions(src, expected):
    assert inspect_text(src) == expected


def test_zero_is_truthy():
    assert run_text("if (0) { 1 } else { 2 };") == Integer(1)
    assert is_truthy(Integer(0))
    assert not is_truthy(NULL)
    assert not is_truthy(FALSE)
    assert is_truthy(TRUE)


@pytest.mark.parametrize(
    "src",
    [
        "return 10",
        "return 10; 9",
        "return 2 * 5; 8;",
        "9; return 2 * 5; 7;",
        "if (10 > 1) { if (10 > 1) { return 10; } return 1; }",
        "if (10 > 1) { if (10 > 1) { return 10; } return 1; }; 3",
    ],
)
def test_return_short_circuits(src):
    result = run_text(src)
    assert result == Integer(10)
    assert not isinstance(result, ReturnValue)


@pytest.mark.parametrize(
    "src, expected",
    [
        ("let a = 5; a;", 5),
        ("let a = 5 * 5; a;", 25),
        ("let a = 5; let b = a; b;", 5),
        ("let a = 5; let b = a; let c = a + b + 5; c;", 15),
        ("let a = 1; let a = a + 1; a", 2),
    ],
)
def test_eval_let_statements(src, expected):
    assert run_text(src) == Integer(expected)


def test_let_statement_value_is_null_and_binds_in_current_env():
    env = Environment()
    result = run_text("let answer = 42;", env=env)
    assert result is NULL
    assert env.get("answer") == Integer(42)


def test_empty_program_evaluates_to_null():
    assert run_text("") is NULL


def test_blocks_share_the_enclosing_scope():
    env = Environment()
    assert run_text("if (true) { let z = 3; }; z", env=env) == Integer(3)
    assert env.contains_local("z")


def test_function_literal_value_and_display():
    result = run_text("fn(x) { x + 2; };")
    assert isinstance(result, Function)
    assert result.parameters == ["x"]
    assert result.inspect() == "fn(x) { (x + 2); }"


def test_function_captures_the_defining_environment():
    env = Environment()
    fn = run_text("let f = fn() { 1 }; f", env=env)
    assert fn.env is env


@pytest.mark.parametrize(
    "src, expected",
    [
        ("let identity = fn(x) { x; }; identity(5);", 5),
        ("let identity = fn(x) { return x; }; identity(10);", 10),
        ("let double = fn(x) { x * 2; }; double(10);", 20),
        ("let add = fn(x, y) { x + y; }; add(5, 10);", 15),
        ("let add = fn(x, y) { x + y; }; add(5 + 5, add(10, 10));", 30),
        (
            """
            let add = fn(a, b) { a + b; };
            let applyFunc = fn(a, b, func) { func(a, b) };
            applyFunc(10, 2, add);
            """,
            12,
        ),
        ("fn(x) { x; }(5)", 5),
        ("let f = fn() { 7 }; f()", 7),
    ],
)
def test_function_application(src, expected):
    assert run_text(src) == Integer(expected)


def test_closure_keeps_defining_frame_alive():
    src = "let adder = fn(x) { fn(y) { x + y } }; let addTwo = adder(2); addTwo(3);"
    assert run_text(src) == Integer(5)


def test_closures_over_separate_calls_are_independent():
    src = """
    let adder = fn(x) { fn(y) { x + y } };
    let addTwo = adder(2);
    let addTen = adder(10);
    addTwo(1) + addTen(1)
    """
    assert run_text(src) == Integer(14)


def test_scoping_is_lexical_not_dynamic():
    src = """
    let make = fn() { let y = 10; fn() { y } };
    let get = make();
    let shadow = fn(y) { get() };
    shadow(99)
    """
    assert run_text(src) == Integer(10)


def test_environment_is_captured_by_reference():
    src = "let x = 1; let f = fn() { x }; let x = 2; f()"
    assert run_text(src) == Integer(2)


def test_parameters_and_inner_lets_shadow_without_touching_outer():
    env = Environment()
    src = "let x = 1; let f = fn(x) { let x = x + 10; x }; f(5)"
    assert run_text(src, env=env) == Integer(15)
    assert env.get("x") == Integer(1)


def test_recursive_function():
    src = """
    let fact = fn(n) { if (n < 2) { return 1; } n * fact(n - 1) };
    fact(5)
    """
    assert run_text(src) == Integer(120)


def test_return_inside_function_only_leaves_that_function():
    src = """
    let inner = fn() { return 1; 2 };
    let outer = fn() { let v = inner(); v + 10 };
    outer()
    """
    assert run_text(src) == Integer(11)


def test_return_reached_inside_an_expression_leaves_the_function():
    src = "let f = fn() { let x = if (true) { return 7; }; 99 }; f()"
    assert run_text(src) == Integer(7)


def test_arity_mismatch_zips_to_shorter_list_by_default():
    assert run_text("fn(a) { a }(1, 2)") == Integer(1)
    assert run_text("let f = fn(a, b) { a }; f(1)") == Integer(1)
    with pytest.raises(EvalNameError):
        run_text("let f = fn(a, b) { b }; f(1)")


def test_strict_arity_rejects_mismatched_calls():
    with pytest.raises(EvalTypeError):
        run_text("fn(a) { a }(1, 2)", strict_arity=True)
    with pytest.raises(EvalTypeError):
        run_text("let f = fn(a, b) { a }; f(1)", strict_arity=True)
    assert run_text("fn(a, b) { a + b }(1, 2)", strict_arity=True) == Integer(3)


def test_unbound_identifier_raises_name_error():
    with pytest.raises(EvalNameError) as excinfo:
        run_text("foo;")
    assert excinfo.value.name == "foo"
    assert "foo" in str(excinfo.value)
    assert isinstance(excinfo.value, NameError)
    assert isinstance(excinfo.value, EvalError)


def test_first_error_aborts_the_program():
    env = Environment()
    with pytest.raises(EvalNameError):
        run_text("let a = 1; missing; let b = 2;", env=env)
    assert env.contains_local("a")
    assert not env.contains_local("b")


@pytest.mark.parametrize("src", ["5(1)", "let x = true; x()", "if (false) { 1 }()"])
def test_calling_a_non_function_raises_type_error(src):
    with pytest.raises(EvalTypeError) as excinfo:
        run_text(src)
    assert isinstance(excinfo.value, TypeError)


def test_division_by_zero_raises():
    with pytest.raises(EvalZeroDivisionError) as excinfo:
        run_text("let z = 0; 10 / z")
    assert isinstance(excinfo.value, ZeroDivisionError)


@pytest.mark.parametrize(
    "src",
    ["2147483647 + 1", "0 - 2147483647 - 2", "65536 * 65536", "-(0 - 2147483647 - 1)"],
)
def test_integer_overflow_raises(src):
    with pytest.raises(IntegerOverflowError):
        run_text(src)


def test_integer_bounds_are_representable():
    assert run_text("2147483647") == Integer(2147483647)
    assert run_text("0 - 2147483647 - 1") == Integer(-2147483648)


def test_runaway_recursion_is_reported_as_eval_error():
    with pytest.raises(EvalError):
        run_text("let f = fn(n) { f(n + 1) }; f(0)")


def test_evaluation_is_deterministic_across_fresh_environments():
    program = parse_text(
        "let adder = fn(x) { fn(y) { x * y } }; let triple = adder(3); triple(7) == 21"
    )
    first = evaluate(program)
    second = evaluate(program, Environment())
    assert first == second == TRUE


def test_evaluator_is_reusable_across_programs():
    evaluator = Evaluator()
    env = Environment()
    evaluator.eval_program(parse_text("let base = 40;"), env)
    assert evaluator.eval_program(parse_text("base + 2"), env) == Integer(42)


def test_boolean_results_are_singletons():
    assert run_text("1 < 2") is TRUE
    assert run_text("!true") is FALSE
    assert run_text("true") == Boolean(True)


def test_deep_recursion_completes():
    src = """
    let count = fn(n) { if (n == 0) { 0 } else { 1 + count(n - 1) } };
    count(500)
    """
    assert run_text(src) == Integer(500)


def test_long_left_nested_chain_evaluates():
    src = " + ".join(["1"] * 3000)
    assert run_text(src) == Integer(3000)


def test_recursion_limit_is_restored_after_evaluation():
    before = sys.getrecursionlimit()
    run_text("let f = fn(n) { if (n == 0) { 0 } else { f(n - 1) } }; f(200)")
    assert sys.getrecursionlimit() == before


def test_int32_min_is_reachable_through_arithmetic():
    assert run_text("-2147483647 - 1") == Integer(-(2**31))
