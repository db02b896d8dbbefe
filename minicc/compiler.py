"""Recursive-descent compiler from a small C subset to 32-bit Intel assembly."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence

from .emitter import LabelGenerator, operator_code
from .lexer import LexError, tokenize
from .symtab import SymbolNotFound, SymbolTable
from .tokens import Token, TokenKind, precedence

_STATEMENT_START = frozenset(
    {
        TokenKind.INT,
        TokenKind.RETURN,
        TokenKind.IDENTIFIER,
        TokenKind.CONTINUE,
        TokenKind.BREAK,
        TokenKind.IF,
        TokenKind.WHILE,
    }
)

# A '-' after one of these is subtraction; anywhere else it is negation.
_OPERAND_END = frozenset({TokenKind.RPAREN, TokenKind.IDENTIFIER, TokenKind.CONST})

_HEADER = (
    ".intel_syntax noprefix",
    ".global main",
    ".extern printf",
    ".align 4",
    ".data",
    "format_str:",
    '.asciz "%d\\n"',
    ".text",
)


class CompileError(Exception):
    """Raised when the token stream is not a valid program."""


class Compiler:
    """Parses a token stream and produces the assembly lines of its functions."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._reset()

    def _reset(self) -> None:
        self._pos = 0
        self._labels = LabelGenerator()
        self._symbols = SymbolTable()
        self._body: list[str] = []
        self._output: list[str] = []
        self._arg_buffers: list[list[str]] = []
        self._loops: list[tuple[str, str]] = []

    def compile(self) -> list[str]:
        """Return the code lines of every function, in source order."""
        self._reset()
        if not self._tokens:
            raise CompileError("empty program")
        try:
            while self._pos < len(self._tokens):
                self._function()
        except SymbolNotFound as exc:
            raise CompileError(f"undeclared name {exc.args[0]!r}") from exc
        return list(self._output)

    # Token access

    def _peek(self) -> TokenKind:
        if self._pos >= len(self._tokens):
            raise CompileError("unexpected end of input")
        return self._tokens[self._pos].kind

    def _next(self) -> Token:
        if self._pos >= len(self._tokens):
            raise CompileError("unexpected end of input")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _expect(self, kind: TokenKind) -> Token:
        token = self._next()
        if token.kind is not kind:
            raise CompileError(f"expected {kind.name}, found {token.text!r}")
        return token

    # Functions

    def _function(self) -> None:
        token = self._next()
        if token.kind is TokenKind.INT:
            self._int_function()
        elif token.kind is TokenKind.VOID:
            self._void_function()
        else:
            raise CompileError(f"expected a function, found {token.text!r}")

    def _int_function(self) -> None:
        token = self._next()
        if token.kind is TokenKind.MAIN:
            self._symbols.enter_function()
            self._expect(TokenKind.LPAREN)
            token = self._next()
            if token.kind is TokenKind.INT:
                self._symbols.register(self._expect(TokenKind.IDENTIFIER).text, "arg")
                self._expect(TokenKind.COMMA)
                self._expect(TokenKind.INT)
                self._symbols.register(self._expect(TokenKind.IDENTIFIER).text, "arg")
                self._expect(TokenKind.RPAREN)
            elif token.kind is not TokenKind.RPAREN:
                raise CompileError(f"unexpected {token.text!r} in parameters of main")
            self._function_body(required=True)
            self._emit_function("main")
        elif token.kind is TokenKind.IDENTIFIER:
            self._expect(TokenKind.LPAREN)
            self._symbols.enter_function()
            self._parameters()
            self._expect(TokenKind.RPAREN)
            self._function_body(required=True)
            self._emit_function(token.text)

    def _void_function(self) -> None:
        name = self._expect(TokenKind.IDENTIFIER).text
        self._expect(TokenKind.LPAREN)
        self._symbols.enter_function()
        self._parameters()
        self._expect(TokenKind.RPAREN)
        self._function_body(required=False)
        self._emit_function(name)

    def _function_body(self, required: bool) -> None:
        self._expect(TokenKind.BLOCKL)
        self._statements(required)
        self._expect(TokenKind.BLOCKR)

    def _parameters(self) -> None:
        kind = self._peek()
        if kind is TokenKind.RPAREN:
            return
        if kind is not TokenKind.INT:
            raise CompileError("malformed parameter list")
        while True:
            self._expect(TokenKind.INT)
            self._symbols.register(self._expect(TokenKind.IDENTIFIER).text, "arg")
            if self._peek() is TokenKind.RPAREN:
                return
            self._expect(TokenKind.COMMA)

    def _emit_function(self, name: str) -> None:
        count = self._symbols.leave_function()
        self._output += [f"{name}:", "push ebp", "mov ebp,esp", f"sub esp,{(count + 1) * 4}"]
        self._output += self._body
        self._output += ["leave", "ret"]
        self._body = []

    # Statements

    def _statements(self, required: bool) -> None:
        if required and self._peek() not in _STATEMENT_START:
            raise CompileError("expected a statement")
        while self._peek() is not TokenKind.BLOCKR:
            self._statement()

    def _statement(self) -> None:
        kind = self._peek()
        if kind is TokenKind.INT:
            self._declaration()
        elif kind is TokenKind.RETURN:
            self._return()
        elif kind is TokenKind.IDENTIFIER:
            self._expression_statement()
        elif kind is TokenKind.CONTINUE:
            self._jump(lambda loop: loop[0])
        elif kind is TokenKind.BREAK:
            self._jump(lambda loop: loop[1])
        elif kind is TokenKind.IF:
            self._if()
        elif kind is TokenKind.WHILE:
            self._while()
        else:
            raise CompileError(f"unexpected {self._tokens[self._pos].text!r}")

    def _declaration(self) -> None:
        self._expect(TokenKind.INT)
        name = self._expect(TokenKind.IDENTIFIER).text
        self._symbols.register(name, "local")
        self._declarator_tail(name)
        self._expect(TokenKind.END)

    def _declarator_tail(self, name: str) -> None:
        kind = self._peek()
        if kind in (TokenKind.END, TokenKind.COMMA):
            self._more_declarators()
        elif kind is TokenKind.ASSIGN:
            self._next()
            self._expression()
            self._body.append("pop eax")
            self._store(name)
            self._more_declarators()

    def _more_declarators(self) -> None:
        if self._peek() is TokenKind.END:
            return
        self._expect(TokenKind.COMMA)
        name = self._expect(TokenKind.IDENTIFIER).text
        self._symbols.register(name, "local")
        if self._peek() not in (TokenKind.ASSIGN, TokenKind.END):
            raise CompileError("malformed declaration")
        self._declarator_tail(name)

    def _store(self, name: str) -> None:
        info = self._symbols.lookup(name)
        self._body.append(f"mov [ebp-{info.slot * 4}],eax")

    def _return(self) -> None:
        self._expect(TokenKind.RETURN)
        self._expression()
        self._expect(TokenKind.END)
        self._body.append("pop eax")

    def _jump(self, target) -> None:
        self._next()
        self._expect(TokenKind.END)
        if self._loops:
            self._body.append(f"jmp {target(self._loops[-1])}")

    def _expression_statement(self) -> None:
        name = self._expect(TokenKind.IDENTIFIER).text
        token = self._next()
        if token.kind is TokenKind.LPAREN:
            count = self._arguments()
            self._expect(TokenKind.RPAREN)
            if name == "println_int":
                self._body += ["push offset format_str", "call printf", "add esp,8"]
            else:
                self._body += [f"call {name}", f"add esp,{count * 4}"]
        elif token.kind is TokenKind.ASSIGN:
            self._expression()
            info = self._symbols.lookup(name)
            self._body += ["pop eax", f"mov [ebp-{info.slot * 4}],eax"]
        else:
            raise CompileError(f"unexpected {token.text!r} after {name!r}")
        self._expect(TokenKind.END)

    def _if(self) -> None:
        self._expect(TokenKind.IF)
        false_label = self._labels.next()
        skip_label = self._labels.next()
        self._expect(TokenKind.LPAREN)
        self._expression()
        self._body += ["pop eax", "cmp eax,0", f"je {false_label}"]
        self._symbols.enter_block()
        self._expect(TokenKind.RPAREN)
        self._function_body(required=False)
        self._body += [f"jmp {skip_label}", f"{false_label}:"]
        self._symbols.leave_block()
        self._else()
        self._body.append(f"{skip_label}:")

    def _else(self) -> None:
        kind = self._peek()
        if kind is TokenKind.ELSE:
            self._next()
            self._expect(TokenKind.BLOCKL)
            self._symbols.enter_block()
            self._statements(required=False)
            self._expect(TokenKind.BLOCKR)
            self._symbols.leave_block()
        elif kind not in _STATEMENT_START and kind is not TokenKind.BLOCKR:
            raise CompileError("unexpected token after if block")

    def _while(self) -> None:
        self._expect(TokenKind.WHILE)
        top = self._labels.next()
        end = self._labels.next()
        self._loops.append((top, end))
        self._expect(TokenKind.LPAREN)
        self._body.append(f"{top}:")
        self._expression()
        self._body += ["pop eax", "cmp eax,0", f"je {end}"]
        self._symbols.enter_block()
        self._expect(TokenKind.RPAREN)
        self._expect(TokenKind.BLOCKL)
        self._statements(required=False)
        self._body.append(f"jmp {top}")
        self._expect(TokenKind.BLOCKR)
        self._body.append(f"{end}:")
        self._loops.pop()
        self._symbols.leave_block()

    # Expressions

    def _arguments(self) -> int:
        """Parse call arguments and move their code to the body, last first."""
        count = 0
        while True:
            self._arg_buffers.append([])
            count += 1
            self._expression()
            if self._peek() is TokenKind.RPAREN:
                break
            self._expect(TokenKind.COMMA)
        for _ in range(count):
            self._body += self._arg_buffers.pop()
        return count

    def _call(self) -> None:
        name = self._expect(TokenKind.IDENTIFIER).text
        self._expect(TokenKind.LPAREN)
        count = self._arguments()
        self._body += [f"call {name}", f"add esp,{count * 4}"]
        self._expect(TokenKind.RPAREN)

    def _load(self, name: str) -> list[str]:
        info = self._symbols.lookup(name)
        if info.kind == "global":
            return [f"mov eax,[{info.name}]", "push eax"]
        if info.kind == "local":
            return [f"mov eax,DWORD PTR[ebp-{info.slot * 4}]", "push eax"]
        if info.kind == "arg":
            return [f"mov eax,DWORD PTR[ebp+{(info.slot + 1) * 4}]", "push eax"]
        return []

    def _expression(self) -> None:
        """Translate an expression that leaves its value on the stack."""
        out = self._arg_buffers[-1] if self._arg_buffers else self._body
        tokens = self._tokens
        pending: list[tuple[TokenKind, int]] = []
        depth = 0

        def reduce(level: int) -> None:
            while pending and pending[-1][1] <= level:
                out.extend(operator_code(pending.pop()[0], self._labels))

        while self._pos < len(tokens):
            kind = tokens[self._pos].kind
            if kind in (TokenKind.END, TokenKind.COMMA) or (
                kind is TokenKind.RPAREN and depth == 0
            ):
                while pending:
                    out.extend(operator_code(pending.pop()[0], self._labels))
                return
            if kind is TokenKind.IDENTIFIER:
                following = self._pos + 1
                if following < len(tokens) and tokens[following].kind is TokenKind.LPAREN:
                    self._call()
                    out.append("push eax")
                else:
                    out.extend(self._load(self._next().text))
                continue
            token = self._next()
            if kind is TokenKind.CONST:
                out.append(f"push {token.text}")
            elif kind is TokenKind.SUB:
                before = self._pos - 2
                if before >= 0 and tokens[before].kind in _OPERAND_END:
                    reduce(precedence(TokenKind.SUB))
                    pending.append((TokenKind.SUB, precedence(TokenKind.SUB)))
                else:
                    pending.append((TokenKind.NEG, precedence(TokenKind.NEG)))
            elif kind is TokenKind.LPAREN:
                depth += 1
                pending.append((TokenKind.LPAREN, precedence(TokenKind.RPAREN)))
            elif kind is TokenKind.RPAREN:
                depth -= 1
                while pending:
                    op, _ = pending.pop()
                    if op is TokenKind.LPAREN:
                        break
                    out.extend(operator_code(op, self._labels))
            elif kind in (TokenKind.LNOT, TokenKind.BNOT):
                pending.append((kind, precedence(kind)))
            else:
                level = precedence(kind)
                if level == 0:
                    raise CompileError(f"unexpected {token.text!r} in expression")
                reduce(level)
                pending.append((kind, level))
        raise CompileError("unterminated expression")


def compile_source(source: str) -> list[str]:
    """Tokenize and compile source text, returning the code lines."""
    return Compiler(tokenize(source)).compile()


def render_program(lines: Iterable[str]) -> str:
    """Wrap code lines in the assembler header that declares main and printf."""
    return "".join(f"{line}\n" for line in (*_HEADER, *lines))


def main(argv: Sequence[str] | None = None) -> int:
    """Compile a source file (or standard input) and print the assembly."""
    parser = argparse.ArgumentParser(
        prog="minicc", description="Compile a small C subset to Intel-syntax assembly."
    )
    parser.add_argument("source", nargs="?", help="source file; standard input if omitted")
    args = parser.parse_args(argv)
    if args.source is None:
        text = sys.stdin.read()
    else:
        try:
            with open(args.source, encoding="utf-8") as handle:
                text = handle.read()
        except OSError:
            print(f"error: cannot open file {args.source}")
            return 1
    try:
        lines = compile_source(text)
    except (CompileError, LexError):
        print("ERR: failed!")
        return 0
    sys.stdout.write(render_program(lines))
    return 0