import pytest

from minicc.emitter import LabelGenerator, operator_code
from minicc.tokens import TokenKind as K


def test_labels_are_sequential_and_unique():
    labels = LabelGenerator()
    names = [labels.next() for _ in range(5)]
    assert names[0] == "_T0"
    assert len(set(names)) == 5
    assert all(name.startswith("_T") for name in names)


def test_plus():
    assert operator_code(K.PLUS, LabelGenerator()) == [
        "pop ebx", "pop eax", "add eax,ebx", "push eax",
    ]


def test_mod_pushes_remainder():
    code = operator_code(K.MOD, LabelGenerator())
    assert code[-3:] == ["xor edx,edx", "div ebx", "push edx"]


def test_less_than_uses_fresh_label():
    labels = LabelGenerator()
    code = operator_code(K.LT, labels)
    assert code == [
        "pop ebx", "pop eax", "mov ecx,1", "cmp eax,ebx",
        "jl _T0", "dec ecx", "_T0:", "push ecx",
    ]
    assert labels.next() == "_T1"


@pytest.mark.parametrize(
    "op, jump",
    [(K.GT, "jg"), (K.LE, "jle"), (K.GE, "jge"), (K.EQ, "je"), (K.NE, "jne")],
)
def test_comparison_jumps(op, jump):
    code = operator_code(op, LabelGenerator())
    assert code[4].split()[0] == jump
    assert code[-1] == "push ecx"


def test_logical_and_uses_two_labels():
    labels = LabelGenerator()
    code = operator_code(K.LAND, labels)
    assert "je _T0" in code and "je _T1" in code
    assert code[-2:] == ["and eax,ebx", "push eax"]
    assert labels.next() == "_T2"


def test_logical_or_ends_with_or():
    assert operator_code(K.LOR, LabelGenerator())[-2:] == ["or eax,ebx", "push eax"]


def test_unary_operators_pop_one_operand():
    assert operator_code(K.NEG, LabelGenerator()) == [
        "pop eax", "mov ebx,-1", "mul ebx", "push eax",
    ]
    assert operator_code(K.BNOT, LabelGenerator()) == ["pop eax", "not eax", "push eax"]


def test_logical_not():
    code = operator_code(K.LNOT, LabelGenerator())
    assert code == [
        "pop eax", "mov ebx,1", "cmp eax,0", "je _T0", "mov ebx,0", "_T0:", "push ebx",
    ]


def test_non_operator_only_pops():
    assert operator_code(K.LPAREN, LabelGenerator()) == ["pop ebx", "pop eax"]