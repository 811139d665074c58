"""Recursive-descent parser for PunyPy. Each call to root() consumes exactly one top-level statement.

Grammar:

```
root         ::= FuncDef | FuncCall | Declaration | Eof
FuncDef      ::= "def" Name "(" Parameters ")" ":" FunctionBody
FuncCall     ::= Name "(" Parameters ")"
Declaration  ::= Name "=" Expression
Parameters   ::= [Expression ("," Expression)*]
FunctionBody ::= (Indent (Expression | FuncCall))+
Expression   ::= (Name | Int) ("+" Expression)?     ; "+" is right-associative
```

The parser never backtracks: one token of lookahead decides every branch. It performs no error recovery on its own
either; after a ParseError the caller may call synchronize() to skip to the start of the next top-level statement.
Lookahead past the end of a statement goes through Scanner.lookahead, so a lexical error on the next line is raised by
the next call to root() rather than by the statement it follows.
"""

from punypy.lang.error import BadToken, InvalidToken
from punypy.syntax.production import (Declaration, Eof, FunctionBody, FunctionCall, FunctionDef, IntLiteral,
                                      Parameters, Plus, Variable)
from punypy.syntax.scanner import Scanner
from punypy.syntax.token import Kind


class Parser:
    """'PunyPy' parser for an extremely simplified python grammar."""

    def __init__(self, source, line=1):
        self.scanner = Scanner(source, line)
        self.line = line  # line where the latest top-level statement started

    def root(self):
        """Parses and returns the next top-level statement, or Eof."""
        token = self.scanner.peek()
        self.line = token.line

        if token.kind is Kind.Def:
            self.scanner.ignore(Kind.Def)
            return self.function_def(token.line)

        elif token.kind is Kind.Name:
            self.scanner.ignore(Kind.Name)
            if self.scanner.peek().kind is Kind.LParen:
                return self.function_call(token)
            return self.declaration(token.payload, token.line)

        elif token.kind is Kind.Eof:
            return Eof()

        raise BadToken(token, "function definition, function call or declaration expected")

    def statements(self):
        """Yields top-level statements until Eof (which is not yielded)."""
        statement = self.root()
        while not isinstance(statement, Eof):
            yield statement
            statement = self.root()

    def function_def(self, line=0):
        name = self.expect(Kind.Name, "function name expected")
        self.expect(Kind.LParen, "'(' expected")
        params = self.parameters()
        self.expect(Kind.RParen, "')' expected")
        self.expect(Kind.Colon, "':' expected")
        return FunctionDef(name.payload, params, self.function_body(), line=line, column=name.column)

    def function_call(self, name):
        """name is the already consumed Name token of the callee."""
        self.expect(Kind.LParen, "'(' expected")
        args = self.parameters()
        self.expect(Kind.RParen, "')' expected")
        return FunctionCall(name.payload, args, line=name.line, column=name.column)

    def declaration(self, name, line=0):
        self.expect(Kind.Equals, "'=' expected")
        return Declaration(name, self.expression(), line=line)

    def function_body(self):
        indent = self.expect(Kind.Indent, "indented function body expected").payload

        statements = []
        while True:
            token = self.scanner.peek()

            if token.kind is Kind.Int:
                statements.append(self.expression())

            elif token.kind is Kind.Name:
                self.scanner.ignore(Kind.Name)
                if self.scanner.peek().kind is Kind.LParen:
                    statements.append(self.function_call(token))
                else:
                    statements.append(self.expression_from(self.leaf(token)))

            else:
                raise BadToken(token, "name or integer expected")

            token = self.scanner.lookahead()
            if token is None or token.kind is not Kind.Indent:
                return FunctionBody(indent, statements)
            self.scanner.ignore(Kind.Indent)

    def parameters(self):
        items = []
        if self.scanner.peek().kind is Kind.RParen:
            return Parameters(items)

        while True:
            items.append(self.expression())

            token = self.scanner.peek()
            if token.kind is Kind.RParen:
                return Parameters(items)
            elif token.kind is not Kind.Comma:
                raise BadToken(token, "',' or ')' expected")
            self.scanner.ignore(Kind.Comma)

    def expression(self):
        return self.expression_from(self.operand())

    def expression_from(self, left):
        """Completes an expression whose first operand, left, has already been consumed. The operands of a '+' chain
        are collected in a loop and folded from the right.
        """
        operands = [left]
        token = self.scanner.lookahead()
        while token is not None and token.kind is Kind.Plus:
            self.expect(Kind.Plus, "'+' expected")
            operands.append(self.operand())
            token = self.scanner.lookahead()
        return Plus.chain(operands)

    def operand(self):
        token = self.scanner.get()
        if token.kind in (Kind.Name, Kind.Int):
            return self.leaf(token)
        raise BadToken(token, "name or integer expected")

    @staticmethod
    def leaf(token):
        """Variable or IntLiteral node for a Name or Int token."""
        if token.kind is Kind.Name:
            return Variable(token.payload, line=token.line, column=token.column)
        return IntLiteral(token.payload, line=token.line, column=token.column)

    def expect(self, kind, expected):
        """Consumes and returns the next token, raising BadToken with the expected message if it isn't of kind."""
        token = self.scanner.get()
        if token.kind is not kind:
            raise BadToken(token, expected)
        return token

    def synchronize(self):
        """Skips the remainder of a statement whose parsing failed: discards tokens up to the first one that starts an
        unindented line after self.line, or up to Eof. Lexical errors met along the way are skipped as well.
        """
        last = self.scanner.last
        if self.scanner.buffer is None and last is not None and self._resumes_at(last):
            self.scanner.putback(last)  # the offending token already starts the next statement

        while True:
            try:
                token = self.scanner.peek()
            except InvalidToken:
                continue

            if token.kind is Kind.Eof or self._resumes_at(token):
                return
            self.scanner.get()

    def _resumes_at(self, token):
        return token.starts_line and token.line > self.line

    def __bool__(self):
        return bool(self.scanner)
