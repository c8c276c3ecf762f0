import unittest

from lambdalang.lang.error import LexicalError, ParseError
from lambdalang.syntax.ast import Assign, Binary, Bool, Call, If, Lambda, Number, Program, String, Var
from lambdalang.syntax.parser import parse


def expr(source):
    """Parses source, which must hold exactly one top-level expression, and returns that expression."""
    program = parse(source)
    assert len(program.body) == 1, program
    return program.body[0]


class ParserTestCase(unittest.TestCase):

    def test_program(self):
        cases = {
            "": Program(()),
            "1": Program((Number(1.0),)),
            "1; 2": Program((Number(1.0), Number(2.0))),
            "a; b;": Program((Var("a"), Var("b"))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_leaves(self):
        cases = {
            "42": Number(42.0),
            '"hi"': String("hi"),
            "x": Var("x"),
            "true": Bool(True),
            "false": Bool(False),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expr(case), case)

    def test_precedence(self):
        cases = {
            "1 + 2 * 3": Binary("+", Number(1.0), Binary("*", Number(2.0), Number(3.0))),
            "(1 + 2) * 3": Binary("*", Binary("+", Number(1.0), Number(2.0)), Number(3.0)),
            "1 - 2 - 3": Binary("-", Binary("-", Number(1.0), Number(2.0)), Number(3.0)),
            "8 / 4 % 3": Binary("%", Binary("/", Number(8.0), Number(4.0)), Number(3.0)),
            "a || b && c": Binary("||", Var("a"), Binary("&&", Var("b"), Var("c"))),
            "a && b || c": Binary("||", Binary("&&", Var("a"), Var("b")), Var("c")),
            "x < 1 == true": Binary("==", Binary("<", Var("x"), Number(1.0)), Bool(True)),
            "x + 1 >= y * 2": Binary(">=", Binary("+", Var("x"), Number(1.0)), Binary("*", Var("y"), Number(2.0))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expr(case), case)

    def test_assignment(self):
        cases = {
            "a = 1": Assign(Var("a"), Number(1.0)),
            "a = b = 1": Assign(Var("a"), Assign(Var("b"), Number(1.0))),
            "a = 1 + 2": Assign(Var("a"), Binary("+", Number(1.0), Number(2.0))),
            "a = b || c": Assign(Var("a"), Binary("||", Var("b"), Var("c"))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expr(case), case)

    def test_invalid_assignment(self):
        should_raise = ["1 = 2", "a + b = 3", "f(x) = 1", '"s" = 1']
        for case in should_raise:
            self.assertRaises(ParseError, parse, case)

        with self.assertRaises(ParseError) as context:
            parse("1 = 2")
        self.assertTrue(context.exception.description.startswith("Cannot assign to"))

    def test_lambda(self):
        cases = {
            "lambda(x, y) x + y": Lambda(("x", "y"), Binary("+", Var("x"), Var("y"))),
            "λ() 1": Lambda((), Number(1.0)),
            "lambda(x,) x": Lambda(("x",), Var("x")),
            "lambda(x) lambda(y) x": Lambda(("x",), Lambda(("y",), Var("x"))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expr(case), case)

        should_raise = ["lambda(1) x", "lambda(x y) x", "lambda x", 'λ("a") 1', "lambda(x"]
        for case in should_raise:
            self.assertRaises(ParseError, parse, case)

    def test_call(self):
        cases = {
            "f()": Call(Var("f"), ()),
            "f(1, x)": Call(Var("f"), (Number(1.0), Var("x"))),
            "f(1)(2)(3)": Call(Call(Call(Var("f"), (Number(1.0),)), (Number(2.0),)), (Number(3.0),)),
            "f(1) + g(2)": Binary("+", Call(Var("f"), (Number(1.0),)), Call(Var("g"), (Number(2.0),))),
            "(lambda(x) x)(1)": Call(Lambda(("x",), Var("x")), (Number(1.0),)),
            "f(a = 1)": Call(Var("f"), (Assign(Var("a"), Number(1.0)),)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expr(case), case)

    def test_if(self):
        cases = {
            "if a then 1 else 2": If(Var("a"), Number(1.0), Number(2.0)),
            "if a then 1": If(Var("a"), Number(1.0)),
            "if a { 1 } else { 2 }": If(Var("a"), Number(1.0), Number(2.0)),
            "if a < b then { x, y }": If(Binary("<", Var("a"), Var("b")), Program((Var("x"), Var("y")))),
            "if a then if b then 1 else 2": If(Var("a"), If(Var("b"), Number(1.0), Number(2.0))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expr(case), case)

        should_raise = ["if a 1", "if a else 1", "if", "if a then"]
        for case in should_raise:
            self.assertRaises(ParseError, parse, case)

    def test_block(self):
        cases = {
            "{}": Bool(False),
            "{ 1 }": Number(1.0),
            "{ 1, 2 }": Program((Number(1.0), Number(2.0))),
            "{ 1, 2, }": Program((Number(1.0), Number(2.0))),
            "{ a = 1, { b, c } }": Program((Assign(Var("a"), Number(1.0)), Program((Var("b"), Var("c"))))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expr(case), case)

    def test_structural_errors(self):
        cases = {
            "(1": 'Expected punctuation: ")"',
            "{ 1; 2 }": 'Expected punctuation: ","',
            "1 2": 'Expected punctuation: ";"',
            ")": "Unexpected token",
            "then": "Unexpected token",
            "1 +": "Unexpected token",
            "+ 1": "Unexpected token",
        }
        for case, message in cases.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse(case)
            self.assertTrue(context.exception.description.startswith(message), case)

    def test_error_position(self):
        with self.assertRaises(ParseError) as context:
            parse("1 2")
        self.assertEqual('Expected punctuation: ";" (1:3)', str(context.exception))

    def test_errors_point_at_offending_token(self):
        cases = {
            "a + b = 3": "(1:7)",     # the "=" operator
            "lambda(x, 2) x": "(1:11)",  # the number in the parameter list
            "f(1,\n  ;)": "(2:3)",     # the stray ";"
        }
        for case, position in cases.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse(case)
            self.assertTrue(str(context.exception).endswith(position), (case, str(context.exception)))

    def test_lexical_errors_propagate(self):
        self.assertRaises(LexicalError, parse, "1 + @")

    def test_trees_are_immutable(self):
        node = expr("1 + 2")
        with self.assertRaises(AttributeError):
            node.operator = "-"


if __name__ == '__main__':
    unittest.main()
