# internals/semicolons.py
"""
Postlexer implementing Go's automatic semicolon insertion.

Problem:
--------
Go source rarely spells out semicolons. The grammar still needs them to
separate declarations and const spec lines, so the token stream has to be
rewritten the way the Go lexer does it:

    When the input is broken into tokens, a semicolon is automatically
    inserted into the token stream immediately after a line's final token
    if that token is
      - an identifier
      - an integer, floating-point, imaginary, rune, or string literal
      - one of the keywords break, continue, fallthrough, or return
      - one of the operators and punctuation ++, --, ), ], or }

Solution:
---------
The grammar emits a `_NL` token for every line break (comments are ignored
by the lexer, so a trailing `// comment` does not hide the break). This
postlexer drops every `_NL`, replacing it with a `_SEMI` when the previous
significant token is one of the triggers above. A final `_SEMI` is added at
end of input when the last token would have triggered one.

Examples:
---------
    const (            const ( A = iota ; B ; ) ;
        A = iota   →
        B
    )
"""

from lark import Token


SEMI_TRIGGERS = frozenset({
    "NAME", "INT", "FLOAT", "IMAG", "RUNE", "STRING", "RAW_STRING",
    "BREAK", "CONTINUE", "FALLTHROUGH", "RETURN",
    "INC", "DEC", "RPAR", "RSQB", "RBRACE",
})


class SemicolonInserter:
    """Postlexer that turns significant line breaks into `_SEMI` tokens."""

    NL_type = "_NL"
    SEMI_type = "_SEMI"

    # Keep _NL in the terminal set even though no rule references it.
    always_accept = (NL_type,)

    def process(self, stream):
        last = None
        for token in stream:
            if token.type == self.NL_type:
                if last is not None and last.type in SEMI_TRIGGERS:
                    last = Token.new_borrow_pos(self.SEMI_type, ";", token)
                    yield last
                continue
            last = token
            yield token

        if last is not None and last.type in SEMI_TRIGGERS:
            yield Token.new_borrow_pos(self.SEMI_type, ";", last)
