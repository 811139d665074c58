"""Lexical analysis for PunyPy: converts a character stream into Tokens, one at a time.

The scanner is a small state machine driven by the next raw character:

```
( ) + - : , =     ; single character token
<digit>+          ; Int, greedy
<letter> <word>*  ; Def if the text is "def", Name otherwise (<word> is a letter, digit or underscore)
"\n"+ <space>+    ; Indent carrying the whitespace run, if the next non-blank line is indented
"\n"+             ; skipped otherwise
<space>           ; skipped
<end of input>    ; Eof, any number of times
```

Any other character raises InvalidToken. Lines that contain nothing but whitespace count as blank lines.
"""

import io
import string

from punypy.lang.error import BufferFull, InvalidToken
from punypy.syntax.token import KEYWORDS, PUNCTUATION, Kind, Token


NAME_CHARS = string.ascii_letters + string.digits + "_"


class Scanner:
    """Tokenizer with a lookahead/pushback buffer of depth 1.

    Invariants: after peek(), self.buffer holds the token the next get() returns. putback() never overwrites a
    buffered token.
    """

    def __init__(self, source, line=1):
        """source is either program text or a text stream supporting read(1). line is the number of the first line,
        used for token positions.
        """
        if isinstance(source, str):
            source = io.StringIO(source)

        self.source = source
        self.line = line
        self.column = 0

        self.buffer = None     # one token of lookahead
        self.last = None       # last token handed out by get
        self.held = None       # InvalidToken deferred by lookahead
        self.exhausted = False

        self._pending = ""     # one character of pushback on the raw stream
        self._prev = (line, 0)

    def get(self):
        """Consumes and returns the next token."""
        self._raise_held()
        if self.buffer is not None:
            token, self.buffer = self.buffer, None
        else:
            token = self._scan()

        self.last = token
        return token

    def peek(self):
        """Returns the next token without consuming it."""
        self._raise_held()
        if self.buffer is None:
            self.buffer = self._scan()
        return self.buffer

    def lookahead(self):
        """Same as peek, for lookahead past a possibly complete statement: an InvalidToken is held back and raised by
        the next get or peek instead, and None is returned.
        """
        if self.held is not None:
            return None
        try:
            return self.peek()
        except InvalidToken as error:
            self.held = error
            return None

    def putback(self, token):
        """Makes token the next token get() returns. Raises BufferFull if a token is already buffered."""
        if self.buffer is not None:
            raise BufferFull(token)
        self.buffer = token

    def ignore(self, target):
        """Drains tokens up to and including the first one equal to target (a Token) or of kind target (a Kind). The
        buffered token counts. Stops at Eof.
        """
        if isinstance(target, Kind):
            def matches(token):
                return token.kind is target
        else:
            def matches(token):
                return token == target

        token = self.get()
        while not matches(token) and token.kind is not Kind.Eof:
            token = self.get()

    def tokens(self):
        """Yields every remaining token, Eof included."""
        token = self.get()
        while token.kind is not Kind.Eof:
            yield token
            token = self.get()
        yield token

    def _raise_held(self):
        if self.held is not None:
            error, self.held = self.held, None
            raise error

    def _read(self):
        """Returns the next raw character ('' at end of input) and advances the position."""
        if self._pending:
            char, self._pending = self._pending, ""
        else:
            char = self.source.read(1)

        self._prev = (self.line, self.column)
        if not char:
            self.exhausted = True
        elif char == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return char

    def _unread(self, char):
        """Pushes the character returned by the last _read back onto the stream."""
        if char:
            self._pending = char
            self.line, self.column = self._prev

    def _read_while(self, text, predicate):
        """Appends characters to text as long as predicate holds for them."""
        char = self._read()
        while char and predicate(char):
            text += char
            char = self._read()
        self._unread(char)
        return text

    def _scan(self):
        while True:
            line, column = self.line, self.column
            char = self._read()

            if not char:
                return Token(Kind.Eof, line=line, column=column)

            elif char in PUNCTUATION:
                return Token(PUNCTUATION[char], line=line, column=column)

            elif char in string.digits:
                value = int(self._read_while(char, lambda c: c in string.digits))
                return Token(Kind.Int, value, line=line, column=column)

            elif char in string.ascii_letters:
                text = self._read_while(char, lambda c: c in NAME_CHARS)
                if text in KEYWORDS:
                    return Token(KEYWORDS[text], line=line, column=column)
                return Token(Kind.Name, text, line=line, column=column)

            elif char == "\n":
                indent = self._indent()
                if indent is not None:
                    return indent

            elif not char.isspace():
                raise InvalidToken(char, line, column)

    def _indent(self):
        """Called right after a newline. Skips blank lines and returns an Indent token if the next line starts with
        whitespace, None otherwise.
        """
        while True:
            line = self.line
            run = self._read_while("", lambda c: c.isspace() and c != "\n")

            char = self._read()
            if char == "\n":
                continue  # blank line
            self._unread(char)

            if not char or not run:
                return None
            return Token(Kind.Indent, run, line=line, column=0)

    def __bool__(self):
        return not self.exhausted
