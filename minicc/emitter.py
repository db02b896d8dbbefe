"""Assembly fragments for expression operators and fresh label names."""

from __future__ import annotations

from .tokens import TokenKind, arity


class LabelGenerator:
    """Hands out unique label names _T0, _T1, ..."""

    def __init__(self) -> None:
        self._count = 0

    def next(self) -> str:
        """Return a label name not returned before."""
        label = f"_T{self._count}"
        self._count += 1
        return label


_COMPARE_JUMPS = {
    TokenKind.LT: "jl",
    TokenKind.GT: "jg",
    TokenKind.LE: "jle",
    TokenKind.GE: "jge",
    TokenKind.EQ: "je",
    TokenKind.NE: "jne",
}

_SIMPLE = {
    TokenKind.PLUS: ["add eax,ebx", "push eax"],
    TokenKind.SUB: ["sub eax,ebx", "push eax"],
    TokenKind.MULTIPLY: ["xor edx,edx", "mul ebx", "push eax"],
    TokenKind.DIVIDE: ["xor edx,edx", "div ebx", "push eax"],
    TokenKind.MOD: ["xor edx,edx", "div ebx", "push edx"],
    TokenKind.AND: ["and eax,ebx", "push eax"],
    TokenKind.OR: ["or eax,ebx", "push eax"],
    TokenKind.XOR: ["xor eax,ebx", "push eax"],
    TokenKind.BNOT: ["not eax", "push eax"],
    TokenKind.NEG: ["mov ebx,-1", "mul ebx", "push eax"],
}

_LOGICAL = {TokenKind.LAND: "and", TokenKind.LOR: "or"}


def operator_code(op: TokenKind, labels: LabelGenerator) -> list[str]:
    """Lines that pop an operator's operands, apply it and push the result."""
    lines = ["pop eax"] if arity(op) == 1 else ["pop ebx", "pop eax"]
    if op in _SIMPLE:
        lines += _SIMPLE[op]
    elif op in _COMPARE_JUMPS:
        lines += ["mov ecx,1", "cmp eax,ebx"]
        tag = labels.next()
        lines += [f"{_COMPARE_JUMPS[op]} {tag}", "dec ecx", f"{tag}:", "push ecx"]
    elif op in _LOGICAL:
        for register in ("eax", "ebx"):
            lines.append(f"cmp {register},0")
            tag = labels.next()
            lines += [f"je {tag}", f"mov {register},1", f"{tag}:"]
        lines += [f"{_LOGICAL[op]} eax,ebx", "push eax"]
    elif op == TokenKind.LNOT:
        lines.append("mov ebx,1")
        tag = labels.next()
        lines += ["cmp eax,0", f"je {tag}", "mov ebx,0", f"{tag}:", "push ebx"]
    return lines