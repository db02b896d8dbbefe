"""A small compiler from a C subset to 32-bit Intel-syntax x86 assembly."""

__version__ = "0.1.0"
__all__ = ["tokens", "lexer", "symtab", "emitter", "compiler"]