# minicc

minicc compiles a small subset of C into 32-bit x86 assembly in Intel syntax
(`.intel_syntax noprefix`), ready for GNU `as` or `gcc -m32`.

## Supported language

- `int` and `void` functions, including `int main()` and
  `int main(int argc, int argv)`
- `int` parameters and `int` local declarations, with optional initialisers
  and comma-separated lists (`int a = 1, b;`)
- assignment, function calls and `return`
- `if` / `else`, `while`, `break`, `continue`
- integer expressions with `+ - * / %`, `< > <= >=`, `== !=`,
  `& | ^ ~`, `&& || !` and unary minus
- `//` and `/* */` comments
- `println_int(expr)` prints an integer followed by a newline through `printf`

## Command line

```
minicc program.c > program.s
gcc -m32 program.s -o program
```

With no file argument, `minicc` reads the program from standard input.
When the input cannot be tokenized or compiled, it prints `ERR: failed!`;
when the file cannot be opened, it prints an error and exits with status 1.

For example, this program:

```c
int main() {
    int i = 0;
    while (i < 3) {
        println_int(i);
        i = i + 1;
    }
    return 0;
}
```

prints `0`, `1` and `2` once it is assembled and run.

## Library use

```python
from minicc.compiler import CompileError, compile_source, render_program
from minicc.lexer import LexError

try:
    lines = compile_source("int main() { println_int(6 * 7); return 0; }")
except (CompileError, LexError):
    raise SystemExit("cannot compile")
print(render_program(lines), end="")
```

- `minicc.compiler.compile_source(source)` returns the code lines of every
  function, in source order; `render_program(lines)` adds the assembler
  header that declares `main`, `printf` and the format string.
- `minicc.compiler.Compiler(tokens).compile()` does the same from a token list.
- `minicc.lexer.tokenize(text)` returns a list of `minicc.tokens.Token`
  values and raises `LexError` on a character that starts no token.
- `minicc.symtab.SymbolTable` keeps the scoped symbols that place locals
  and arguments on the stack; `lookup` raises `SymbolNotFound` for a name
  not in scope.
- `minicc.emitter.operator_code(op, labels)` gives the stack-machine code for
  one operator, with fresh labels from a `LabelGenerator`.

## What it does not do

minicc only writes assembly text: it does not assemble or link it. There are
no global variables, no types other than `int`, no arrays or pointers, and
no type checking; arithmetic is unsigned (`mul`/`div`).

## Tests

```
pip install -e ".[test]"
pytest
```