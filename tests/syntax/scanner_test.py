import io
import unittest

from punypy.lang.error import BufferFull, InvalidToken
from punypy.syntax.scanner import Scanner
from punypy.syntax.token import Kind, Token


def tokens(text):
    return list(Scanner(text).tokens())


def name(text):
    return Token(Kind.Name, text)


def integer(value):
    return Token(Kind.Int, value)


EOF = Token(Kind.Eof)


class ScannerTestCase(unittest.TestCase):

    def test_get(self):
        cases = {
            "x = 1+2": [name("x"), Token(Kind.Equals), integer(1), Token(Kind.Plus), integer(2), EOF],
            "def f(a,b):": [Token(Kind.Def), name("f"), Token(Kind.LParen), name("a"), Token(Kind.Comma), name("b"),
                            Token(Kind.RParen), Token(Kind.Colon), EOF],
            "define": [name("define"), EOF],
            "x_1 - 2": [name("x_1"), Token(Kind.Minus), integer(2), EOF],
            "123abc": [integer(123), name("abc"), EOF],
            "   x": [name("x"), EOF],
            "": [EOF],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokens(case), case)

    def test_indent(self):
        cases = {
            "def f(a):\n    a\n\tb\nf(1)\n": [
                Token(Kind.Def), name("f"), Token(Kind.LParen), name("a"), Token(Kind.RParen), Token(Kind.Colon),
                Token(Kind.Indent, "    "), name("a"), Token(Kind.Indent, "\t"), name("b"),
                name("f"), Token(Kind.LParen), integer(1), Token(Kind.RParen), EOF
            ],
            "a\n\n\n    b": [name("a"), Token(Kind.Indent, "    "), name("b"), EOF],
            "a\n    \n\nb\n   \n": [name("a"), name("b"), EOF],
            "a\n\n": [name("a"), EOF],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokens(case), repr(case))

    def test_invalid_token(self):
        should_raise = ["$", "x = 1 ? 2", "é", "x = [1]"]
        for case in should_raise:
            self.assertRaises(InvalidToken, tokens, case)

        with self.assertRaises(InvalidToken) as ctx:
            tokens("x = 1\ny = 2 # comment")
        self.assertEqual("#", ctx.exception.char)
        self.assertEqual(2, ctx.exception.line_num)
        self.assertEqual(6, ctx.exception.column)

    def test_positions(self):
        scanned = tokens("x = 1\n  y")
        positions = [(token.kind, token.line, token.column) for token in scanned]
        self.assertEqual([
            (Kind.Name, 1, 0),
            (Kind.Equals, 1, 2),
            (Kind.Int, 1, 4),
            (Kind.Indent, 2, 0),
            (Kind.Name, 2, 2),
            (Kind.Eof, 2, 3),
        ], positions)

    def test_first_line(self):
        token = Scanner("\nx", line=10).get()
        self.assertEqual(name("x"), token)
        self.assertEqual(11, token.line)

    def test_eof_repeats(self):
        scanner = Scanner("x")
        self.assertEqual(name("x"), scanner.get())
        for __ in range(3):
            self.assertEqual(EOF, scanner.get())

    def test_peek(self):
        scanner = Scanner("a b")
        self.assertEqual(name("a"), scanner.peek())
        self.assertEqual(name("a"), scanner.peek())
        self.assertEqual(name("a"), scanner.get())
        self.assertEqual(name("b"), scanner.get())
        self.assertEqual(EOF, scanner.peek())

    def test_lookahead(self):
        scanner = Scanner("a b")
        self.assertEqual(name("a"), scanner.lookahead())
        self.assertEqual(name("a"), scanner.get())

        scanner = Scanner("a $ b")
        scanner.get()
        self.assertIsNone(scanner.lookahead())
        self.assertIsNone(scanner.lookahead())
        self.assertRaises(InvalidToken, scanner.peek)  # raised once, by the next get or peek
        self.assertEqual(name("b"), scanner.get())

    def test_putback(self):
        scanner = Scanner("a b")
        token = scanner.get()
        scanner.putback(token)
        self.assertEqual(token, scanner.get())

        scanner.peek()
        self.assertRaises(BufferFull, scanner.putback, token)
        self.assertEqual(name("b"), scanner.get())

    def test_ignore(self):
        scanner = Scanner("a b c d")
        scanner.ignore(name("c"))
        self.assertEqual(name("d"), scanner.get())

        scanner = Scanner("a ( 1 )")
        scanner.ignore(Kind.Int)
        self.assertEqual(Token(Kind.RParen), scanner.get())

        scanner = Scanner("a b")
        scanner.peek()
        scanner.ignore(Kind.Name)  # buffered token matches
        self.assertEqual(name("b"), scanner.get())

        scanner = Scanner("a b")
        scanner.ignore(Kind.Int)  # stops at Eof
        self.assertEqual(EOF, scanner.get())

    def test_last(self):
        scanner = Scanner("a b")
        self.assertIsNone(scanner.last)
        scanner.get()
        scanner.peek()
        self.assertEqual(name("a"), scanner.last)

    def test_stream(self):
        self.assertEqual([name("x"), Token(Kind.Equals), integer(1), EOF], list(Scanner(io.StringIO("x=1")).tokens()))

    def test_bool(self):
        scanner = Scanner("x")
        self.assertTrue(scanner)
        list(scanner.tokens())
        self.assertFalse(scanner)


class TokenTestCase(unittest.TestCase):

    def test_equality(self):
        self.assertEqual(Token(Kind.Name, "x", line=1, column=0), Token(Kind.Name, "x", line=5, column=3))
        self.assertNotEqual(name("x"), name("y"))
        self.assertNotEqual(Token(Kind.Int, 1), Token(Kind.Name, "1"))
        self.assertEqual(hash(name("x")), hash(Token(Kind.Name, "x", line=2)))

    def test_str(self):
        cases = {
            integer(5): "{Int, 5}",
            name("x"): "{name, x}",
            Token(Kind.Indent, "    "): "{Indent, 4}",
            Token(Kind.Plus): "{Plus, +}",
            Token(Kind.Def): "{def, }",
            EOF: "{EOF, Eof}",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(case))

    def test_lexeme(self):
        cases = {integer(42): "42", name("abc"): "abc", Token(Kind.Comma): ",", Token(Kind.Def): "def", EOF: ""}
        for case, expected in cases.items():
            self.assertEqual(expected, case.lexeme)


if __name__ == '__main__':
    unittest.main()
