import pytest

from asmwriter import registers
from asmwriter.errors import UnclassifiedRegister
from asmwriter.operands import ArgSize, Memory
from asmwriter.registers import (
    Register,
    RegisterFamily,
    RegisterName,
    RegisterSize,
    a_name,
    al,
    b_name,
    bp_name,
    bpl,
    c_name,
    d_name,
    di,
    di_name,
    eax,
    esp,
    rax,
    rsp,
    rx,
    rx_name,
    rxb,
    rxd,
    rxw,
    si_name,
    sp,
    sp_name,
)

EXPECTED = {
    RegisterName.A: ("al", "ax", "eax", "rax"),
    RegisterName.B: ("bl", "bx", "ebx", "rbx"),
    RegisterName.C: ("cl", "cx", "ecx", "rcx"),
    RegisterName.D: ("dl", "dx", "edx", "rdx"),
    RegisterName.SI: ("sil", "si", "esi", "rsi"),
    RegisterName.DI: ("dil", "di", "edi", "rdi"),
    RegisterName.SP: ("spl", "sp", "esp", "rsp"),
    RegisterName.BP: ("bpl", "bp", "ebp", "rbp"),
    **{
        rx_name(n): (f"r{n}b", f"r{n}w", f"r{n}d", f"r{n}")
        for n in range(8, 16)
    },
}

SIZES = (RegisterSize.BYTE, RegisterSize.WORD, RegisterSize.DOUBLE, RegisterSize.QUAD)


@pytest.mark.parametrize("name", list(RegisterName))
def test_register_rendering(name: RegisterName) -> None:
    for size, text in zip(SIZES, EXPECTED[name]):
        assert str(Register(name, size)) == f"%{text}"


def test_register_examples() -> None:
    assert str(al()) == "%al"
    assert str(rax()) == "%rax"
    assert str(sp()) == "%sp"
    assert str(rsp()) == "%rsp"
    assert str(rxb(12)) == "%r12b"
    assert str(rx(12)) == "%r12"
    assert str(rxw(9)) == "%r9w"
    assert str(rxd(15)) == "%r15d"
    assert str(eax()) == "%eax"
    assert str(esp()) == "%esp"
    assert str(di()) == "%di"
    assert str(bpl()) == "%bpl"


def test_families() -> None:
    assert RegisterName.C.family == RegisterFamily.ACCUMULATOR
    assert RegisterName.BP.family == RegisterFamily.POINTER
    assert RegisterName.R8.family == RegisterFamily.NUMBERED
    assert all(isinstance(n.family, RegisterFamily) for n in RegisterName)


def test_name_constructors() -> None:
    assert RegisterName.B.byte() == Register(RegisterName.B, RegisterSize.BYTE)
    assert RegisterName.B.word() == Register(RegisterName.B, RegisterSize.WORD)
    assert RegisterName.B.double() == Register(RegisterName.B, RegisterSize.DOUBLE)
    assert RegisterName.B.quad() == RegisterName.B.with_size(RegisterSize.QUAD)


@pytest.mark.parametrize("n", [0, 7, 16, -1])
def test_rx_name_out_of_range(n: int) -> None:
    with pytest.raises(ValueError):
        rx_name(n)


def test_sizes() -> None:
    assert [s.in_bytes() for s in SIZES] == [1, 2, 4, 8]
    assert [s.arg_size() for s in SIZES] == [
        ArgSize.BYTE,
        ArgSize.WORD,
        ArgSize.DOUBLE,
        ArgSize.QUAD,
    ]
    for s in SIZES:
        assert s.arg_size().register_size() == s


def test_register_memory() -> None:
    assert rax().memory() == Memory.sib().base(rax())
    assert str(rsp().memory()) == "(%rsp)"


def test_unclassified_register(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delitem(registers._FAMILIES, RegisterName.R8)
    with pytest.raises(UnclassifiedRegister):
        str(rx(8))


def test_name_shortcuts() -> None:
    assert a_name() == RegisterName.A
    assert b_name() == RegisterName.B
    assert c_name() == RegisterName.C
    assert d_name() == RegisterName.D
    assert si_name() == RegisterName.SI
    assert di_name() == RegisterName.DI
    assert sp_name() == RegisterName.SP
    assert bp_name() == RegisterName.BP
    assert str(sp_name().byte()) == "%spl"
