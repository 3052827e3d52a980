"""Single-pass character lexer.

Dispatches on the character under the cursor to a scanner or classifier
mixin. Every path consumes at least one character, so the main loop
always makes progress.

The lexer never raises on malformed input. Constructs that fail to close
are reported as diagnostics and re-lexed as plain words; characters with
no meaning at all are reported and skipped.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from dataclasses import dataclass

from texmark.errors import Diagnostic, ErrorKind
from texmark.lexer.charsets import DIGITS, is_control, is_whitespace
from texmark.lexer.classifiers import (
    HeadingClassifierMixin,
    HeredocClassifierMixin,
    ListClassifierMixin,
    MacroClassifierMixin,
)
from texmark.lexer.cursor import Cursor
from texmark.lexer.scanners import (
    DelimiterScannerMixin,
    MathScannerMixin,
    WordScannerMixin,
)
from texmark.location import Position
from texmark.tokens import Token, TokenKind
from texmark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LexResult:
    """Tokens and lexer diagnostics for one source text."""

    tokens: tuple[Token, ...]
    diagnostics: tuple[Diagnostic, ...]

    @property
    def has_fatal(self) -> bool:
        return any(d.fatal for d in self.diagnostics)


class Lexer(
    # Word scanning comes first: the other mixins fall back to it
    WordScannerMixin,
    MathScannerMixin,
    DelimiterScannerMixin,
    HeadingClassifierMixin,
    ListClassifierMixin,
    MacroClassifierMixin,
    HeredocClassifierMixin,
):
    """Character-level lexer producing a position-annotated token list.

    Usage:
        >>> lexer = Lexer("**bold** text")
        >>> for token in lexer.tokenize():
        ...     print(token)
        Token(SOF, '', 1:1)
        Token(DOUBLE_STAR, '**', 1:1)
        Token(WORD, 'bold', 1:3)
        Token(DOUBLE_STAR, '**', 1:7)
        Token(WORD, 'text', 1:10)
        Token(EOF, '', 1:14)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_cursor",
        "_tokens",
        "_diagnostics",
        "_done",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Args:
            source: Markup source text
            source_file: Optional source file path for log messages
        """
        self._source = source
        self._source_file = source_file
        self._cursor = Cursor(source)
        self._tokens: list[Token] = []
        self._diagnostics: list[Diagnostic] = []
        self._done = False

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Diagnostics recorded so far, in source order."""
        return list(self._diagnostics)

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source.

        The stream always starts with SOF and ends with EOF. Calling this
        again returns the same tokens without re-lexing.

        Returns:
            List of tokens

        Complexity: O(n) where n = len(source), plus bounded rescans of
        unclosed math and heredoc openers
        """
        if not self._done:
            self._emit(TokenKind.SOF, "", Position.start(), "")
            cursor = self._cursor
            while cursor.has_source_left():
                self._dispatch()
            self._emit(TokenKind.EOF, "", cursor.position, "")
            self._done = True
            logger.debug(
                "Lexed %s: %d tokens, %d diagnostics",
                self._source_file or "<string>",
                len(self._tokens),
                len(self._diagnostics),
            )
        return list(self._tokens)

    def result(self) -> LexResult:
        tokens = self.tokenize()
        return LexResult(tokens=tuple(tokens), diagnostics=tuple(self._diagnostics))

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _dispatch(self) -> None:
        cur = self._cursor
        char = cur.cur_char()

        match char:
            case "$":
                if cur.lookahead() == "$":
                    self._scan_math("$$", "$$", TokenKind.TEX_DISPLAY_MATH)
                else:
                    self._scan_math("$", "$", TokenKind.TEX_INLINE_MATH)
            case "\\":
                nxt = cur.lookahead()
                if nxt == "(":
                    self._scan_math("\\(", "\\)", TokenKind.LATEX_INLINE_MATH)
                elif nxt == "[":
                    self._scan_math("\\[", "\\]", TokenKind.LATEX_DISPLAY_MATH)
                else:
                    # Escapes and macro calls both lex as words
                    self._scan_word()
            case "*":
                self._scan_star()
            case "_":
                self._scan_doubled(TokenKind.DOUBLE_UNDERSCORE)
            case "~":
                self._scan_doubled(TokenKind.DOUBLE_TILDE)
            case "[":
                self._scan_fixed(TokenKind.LEFT_BRACKET, "[")
            case "!" if cur.lookahead() == "[":
                self._scan_fixed(TokenKind.BANG_BRACKET, "![")
            case "]" if cur.lookahead() == "(":
                self._scan_fixed(TokenKind.BRACKET_PAREN, "](")
            case ")":
                self._scan_fixed(TokenKind.RIGHT_PAREN, ")")
            case "#":
                if not self._try_heading():
                    self._scan_word()
            case "-":
                if not self._try_unordered_item():
                    self._scan_word()
            case "%":
                self._skip_comment()
            case "@":
                self._scan_at()
            case "\n" if cur.at_blank_line():
                self._scan_empty_row()
            case _:
                self._dispatch_other(char)

    def _dispatch_other(self, char: str) -> None:
        """Handle line-start constructs, whitespace, bad input and words."""
        cur = self._cursor

        if char in DIGITS and self._try_ordered_item():
            return
        if char == "m" and self._try_macro_def():
            return
        if char == "T" and self._try_heredoc():
            return

        if is_whitespace(char):
            cur.advance()
            return

        if is_control(char):
            self._report(
                ErrorKind.UNRECOGNIZED_CHAR,
                cur.position,
                fatal=True,
                subject=char,
            )
            cur.advance()
            return

        self._scan_word()

    # =========================================================================
    # Output
    # =========================================================================

    def _emit(self, kind: TokenKind, lexeme: str, start: Position, right_pad: str) -> None:
        self._tokens.append(Token(kind=kind, lexeme=lexeme, right_pad=right_pad, position=start))

    def _report(
        self,
        kind: ErrorKind,
        position: Position,
        *,
        fatal: bool,
        subject: str = "",
        expected: str | None = None,
        hint: str | None = None,
    ) -> None:
        diagnostic = Diagnostic(
            kind=kind,
            position=position,
            fatal=fatal,
            subject=subject,
            expected=expected,
            hint=hint,
        )
        self._diagnostics.append(diagnostic)
        logger.debug("%s: %s", position.format(self._source_file), diagnostic.message)
