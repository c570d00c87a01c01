import pytest

from exprtree.tokenizer import Token, TokenizerError, TokenType, classify_char, format_tokens, tokenize


@pytest.mark.parametrize(
    "char, expected_type",
    [
        pytest.param("7", TokenType.NUMERIC),
        pytest.param(".", TokenType.NUMERIC),
        pytest.param("x", TokenType.ALPHABETICAL),
        pytest.param("X", TokenType.INVALID),
        pytest.param("%", TokenType.OPERATOR),
        pytest.param("^", TokenType.OPERATOR),
        pytest.param("(", TokenType.LEFT_PAREN),
        pytest.param(")", TokenType.RIGHT_PAREN),
        pytest.param(" ", TokenType.INVALID),
        pytest.param("$", TokenType.INVALID),
    ],
)
def test_classify_char(char: str, expected_type: TokenType) -> None:
    assert classify_char(char) is expected_type


def test_tokenize_operators_carry_precedence() -> None:
    tokens = tokenize("2+3*4^5/6-7%8")
    operators = [(t.lexeme, t.precedence) for t in tokens if t.type is TokenType.OPERATOR]
    assert operators == [("+", 2), ("*", 3), ("^", 4), ("/", 3), ("-", 2), ("%", 1)]
    assert all(t.precedence == 0 for t in tokens if t.type is TokenType.NUMERIC)


@pytest.mark.parametrize(
    "expression, expected",
    [
        pytest.param("12.5", [(TokenType.NUMERIC, "12.5")]),
        pytest.param("1.2.3", [(TokenType.NUMERIC, "1.2.3")]),
        pytest.param("pi", [(TokenType.NUMERIC, "pi")]),
        pytest.param("e", [(TokenType.NUMERIC, "e")]),
        pytest.param("exp", [(TokenType.FUNCTIONAL, "exp")]),
        pytest.param(
            "ln(2.7)",
            [
                (TokenType.FUNCTIONAL, "ln"),
                (TokenType.LEFT_PAREN, "("),
                (TokenType.NUMERIC, "2.7"),
                (TokenType.RIGHT_PAREN, ")"),
            ],
        ),
        pytest.param(
            "2pi",
            [(TokenType.NUMERIC, "2"), (TokenType.NUMERIC, "pi")],
        ),
        pytest.param(
            "-(5*2)",
            [
                (TokenType.OPERATOR, "-"),
                (TokenType.LEFT_PAREN, "("),
                (TokenType.NUMERIC, "5"),
                (TokenType.OPERATOR, "*"),
                (TokenType.NUMERIC, "2"),
                (TokenType.RIGHT_PAREN, ")"),
            ],
        ),
    ],
)
def test_tokenize(expression: str, expected: list[tuple[TokenType, str]]) -> None:
    assert [(t.type, t.lexeme) for t in tokenize(expression)] == expected


def test_tokenize_records_positions() -> None:
    tokens = tokenize("12 + ln(3)")
    assert [(t.lexeme, t.position) for t in tokens] == [
        ("12", 0),
        ("+", 3),
        ("ln", 5),
        ("(", 7),
        ("3", 8),
        (")", 9),
    ]


def test_tokenize_never_marks_unary() -> None:
    assert not any(t.unary for t in tokenize("-3--2"))


@pytest.mark.parametrize(
    "expression, expected_lexemes",
    [
        pytest.param("2 + 3", ["2", "+", "3"]),
        pytest.param("2$3 # 4", ["2", "3", "4"]),
        pytest.param("PI", []),
        pytest.param("Sin(1)", ["in", "(", "1", ")"]),
        pytest.param("", []),
    ],
)
def test_tokenize_skips_invalid_characters(expression: str, expected_lexemes: list[str]) -> None:
    assert [t.lexeme for t in tokenize(expression)] == expected_lexemes


def test_strict_tokenize_rejects_invalid_characters() -> None:
    with pytest.raises(TokenizerError) as exc_info:
        tokenize("2$3", strict=True)
    assert exc_info.value.error_char_idx == 1
    assert str(exc_info.value).splitlines() == ["[Tokenizer error] Unexpected character: '$'", "2$3", " ^"]


def test_strict_tokenize_allows_whitespace() -> None:
    assert [t.lexeme for t in tokenize(" 2 +\t3 ", strict=True)] == ["2", "+", "3"]


def test_strict_tokenize_error_excerpt_is_shortened() -> None:
    expression = "1+" * 20 + "X" + "+1" * 20
    with pytest.raises(TokenizerError) as exc_info:
        tokenize(expression, strict=True)
    excerpt, caret = str(exc_info.value).splitlines()[1:]
    assert excerpt.startswith("...") and excerpt.endswith("...")
    assert excerpt[len(caret) - 1] == "X"


def test_format_tokens() -> None:
    tokens = [Token(TokenType.NUMERIC, "2"), Token(TokenType.OPERATOR, "+", precedence=2), Token(TokenType.NUMERIC, "3")]
    assert format_tokens(tokens) == "2 + 3"
    assert format_tokens([]) == ""
