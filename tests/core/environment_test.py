import unittest

from plox.core.environment import Environment
from plox.core.tokens import Token, TokenType
from plox.lang.error import LoxRuntimeError


def name(lexeme, line=1):
    return Token(TokenType.IDENTIFIER, lexeme, None, line)


class EnvironmentTestCase(unittest.TestCase):

    def test_define(self):
        environment = Environment()
        environment.define("foo", 10.0)
        self.assertEqual(10.0, environment.get(name("foo")))

        # redefinition in the same scope just replaces the value
        environment.define("foo", "bar")
        self.assertEqual("bar", environment.get(name("foo")))

    def test_assign(self):
        environment = Environment()
        environment.define("foo", 10.0)
        self.assertEqual(20.0, environment.assign(name("foo"), 20.0))
        self.assertEqual(20.0, environment.get(name("foo")))

    def test_undefined(self):
        environment = Environment(Environment(Environment()))

        with self.assertRaises(LoxRuntimeError) as context:
            environment.get(name("foo", line=7))
        self.assertEqual("Undefined variable 'foo'.", context.exception.message)
        self.assertEqual(7, context.exception.line)

        with self.assertRaises(LoxRuntimeError) as context:
            environment.assign(name("foo"), 1.0)
        self.assertEqual("Undefined variable 'foo'.", context.exception.message)

        # assign never creates a binding
        self.assertIsNone(environment.resolve(name("foo")))

    def test_chain(self):
        outer = Environment()
        outer.define("a", 1.0)
        outer.define("b", 2.0)
        inner = Environment(outer)
        inner.define("a", 3.0)

        self.assertEqual(3.0, inner.get(name("a")))
        self.assertEqual(2.0, inner.get(name("b")))
        self.assertEqual(1.0, outer.get(name("a")))

        # assignment goes to the innermost binding
        inner.assign(name("b"), 4.0)
        self.assertEqual(4.0, outer.get(name("b")))
        self.assertNotIn("b", inner.values)

        inner.assign(name("a"), 5.0)
        self.assertEqual(5.0, inner.get(name("a")))
        self.assertEqual(1.0, outer.get(name("a")))

    def test_resolve(self):
        outer = Environment()
        outer.define("a", 1.0)
        middle = Environment(outer)
        middle.define("b", 2.0)
        inner = Environment(middle)

        cases = {"a": outer, "b": middle}
        for case, expected in cases.items():
            self.assertIs(expected, inner.resolve(name(case)), case)
        self.assertIsNone(inner.resolve(name("c")))

        inner.define("a", 3.0)
        self.assertIs(inner, inner.resolve(name("a")))

    def test_shared(self):
        parent = Environment()
        parent.define("count", 0.0)
        first, second = Environment(parent), Environment(parent)

        first.assign(name("count"), 1.0)
        self.assertEqual(1.0, second.get(name("count")))

    def test_depth(self):
        cases = {
            0: Environment(),
            1: Environment(Environment()),
            3: Environment(Environment(Environment(Environment()))),
        }
        for depth, environment in cases.items():
            self.assertEqual(depth, environment.depth())


if __name__ == '__main__':
    unittest.main()
