import pytest

from minicc.lexer import LexError, tokenize
from minicc.tokens import Token, TokenKind

K = TokenKind

PROGRAM = """int main() {
    int i = 0;
    while (i < 3) {
        println_int(i);
        i = i + 1;
    }
    return 0;
}
"""


def test_sample_program_kinds():
    kinds = [t.kind for t in tokenize(PROGRAM)]
    assert kinds == [
        K.INT, K.MAIN, K.LPAREN, K.RPAREN, K.BLOCKL,
        K.INT, K.IDENTIFIER, K.ASSIGN, K.CONST, K.END,
        K.WHILE, K.LPAREN, K.IDENTIFIER, K.LT, K.CONST, K.RPAREN, K.BLOCKL,
        K.IDENTIFIER, K.LPAREN, K.IDENTIFIER, K.RPAREN, K.END,
        K.IDENTIFIER, K.ASSIGN, K.IDENTIFIER, K.PLUS, K.CONST, K.END,
        K.BLOCKR,
        K.RETURN, K.CONST, K.END,
        K.BLOCKR,
    ]


def test_text_is_preserved():
    assert [t.text for t in tokenize("println_int(i);")] == ["println_int", "(", "i", ")", ";"]


def test_two_character_operators_win():
    assert tokenize("a<=b") == [
        Token(K.IDENTIFIER, "a"),
        Token(K.LE, "<="),
        Token(K.IDENTIFIER, "b"),
    ]


@pytest.mark.parametrize(
    "source, kind",
    [("&&", K.LAND), ("||", K.LOR), ("!=", K.NE), ("==", K.EQ), (">=", K.GE),
     ("&", K.AND), ("|", K.OR), ("^", K.XOR), ("!", K.LNOT), ("~", K.BNOT),
     ("%", K.MOD), (",", K.COMMA)],
)
def test_operator_kinds(source, kind):
    assert [t.kind for t in tokenize(source)] == [kind]


@pytest.mark.parametrize(
    "word, kind",
    [("void", K.VOID), ("if", K.IF), ("else", K.ELSE), ("continue", K.CONTINUE),
     ("break", K.BREAK), ("return", K.RETURN)],
)
def test_keywords(word, kind):
    assert tokenize(word) == [Token(kind, word)]


def test_keyword_prefix_is_identifier():
    assert tokenize("integer") == [Token(K.IDENTIFIER, "integer")]


def test_comments_are_skipped():
    assert [t.text for t in tokenize("a // x\n/* y\n z */ b")] == ["a", "b"]


def test_empty_input():
    assert tokenize("  \n\t") == []


def test_unknown_character_raises_with_line():
    with pytest.raises(LexError) as info:
        tokenize("int a;\n@")
    assert info.value.line == 2
    assert info.value.char == "@"