from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from asmwriter.errors import UnclassifiedRegister

if TYPE_CHECKING:
    from asmwriter.operands import ArgSize, Memory


class RegisterFamily(Enum):
    """How a register's name is spelled at different widths.

    ACCUMULATOR: a, b, c, d (al, ax, eax, rax)
    POINTER: si, di, sp, bp (spl, sp, esp, rsp)
    NUMBERED: r8 - r15 (r8b, r8w, r8d, r8)
    """

    ACCUMULATOR = 0
    POINTER = 1
    NUMBERED = 2


class RegisterName(Enum):
    A = "a"
    B = "b"
    C = "c"
    D = "d"
    SI = "si"
    DI = "di"
    SP = "sp"
    BP = "bp"
    R8 = "r8"
    R9 = "r9"
    R10 = "r10"
    R11 = "r11"
    R12 = "r12"
    R13 = "r13"
    R14 = "r14"
    R15 = "r15"

    @property
    def family(self) -> RegisterFamily:
        return _FAMILIES[self]

    def with_size(self, size: RegisterSize) -> Register:
        return Register(self, size)

    def byte(self) -> Register:
        return Register(self, RegisterSize.BYTE)

    def word(self) -> Register:
        return Register(self, RegisterSize.WORD)

    def double(self) -> Register:
        return Register(self, RegisterSize.DOUBLE)

    def quad(self) -> Register:
        return Register(self, RegisterSize.QUAD)


_FAMILIES: dict[RegisterName, RegisterFamily] = {
    **{
        n: RegisterFamily.ACCUMULATOR
        for n in (RegisterName.A, RegisterName.B, RegisterName.C, RegisterName.D)
    },
    **{
        n: RegisterFamily.POINTER
        for n in (RegisterName.SI, RegisterName.DI, RegisterName.SP, RegisterName.BP)
    },
    **{n: RegisterFamily.NUMBERED for n in RegisterName if n.value[0] == "r"},
}


class RegisterSize(Enum):
    BYTE = 8
    WORD = 16
    DOUBLE = 32
    QUAD = 64

    def in_bytes(self) -> int:
        return self.value // 8

    def arg_size(self) -> ArgSize:
        from asmwriter.operands import ArgSize

        match self:
            case RegisterSize.BYTE:
                return ArgSize.BYTE
            case RegisterSize.WORD:
                return ArgSize.WORD
            case RegisterSize.DOUBLE:
                return ArgSize.DOUBLE
            case RegisterSize.QUAD:
                return ArgSize.QUAD


# (prefix, suffix) per width
_AFFIXES: dict[RegisterFamily, dict[RegisterSize, tuple[str, str]]] = {
    RegisterFamily.ACCUMULATOR: {
        RegisterSize.BYTE: ("", "l"),
        RegisterSize.WORD: ("", "x"),
        RegisterSize.DOUBLE: ("e", "x"),
        RegisterSize.QUAD: ("r", "x"),
    },
    RegisterFamily.POINTER: {
        RegisterSize.BYTE: ("", "l"),
        RegisterSize.WORD: ("", ""),
        RegisterSize.DOUBLE: ("e", ""),
        RegisterSize.QUAD: ("r", ""),
    },
    RegisterFamily.NUMBERED: {
        RegisterSize.BYTE: ("", "b"),
        RegisterSize.WORD: ("", "w"),
        RegisterSize.DOUBLE: ("", "d"),
        RegisterSize.QUAD: ("", ""),
    },
}


@dataclass(frozen=True)
class Register:
    """A general purpose register used at a specific width.

    Attributes:
        name (RegisterName):
            which of the sixteen registers
        size (RegisterSize):
            the width it is accessed with
    """

    name: RegisterName
    size: RegisterSize

    def affixes(self) -> tuple[str, str]:
        family = _FAMILIES.get(self.name)
        if family is None:
            raise UnclassifiedRegister(f"{self.name!r} has no naming family")
        return _AFFIXES[family][self.size]

    def memory(self) -> Memory:
        """Returns SIB memory addressed through this register, i.e. `(%reg)`."""
        from asmwriter.operands import Memory

        return Memory.sib().base(self)

    def __str__(self) -> str:
        prefix, suffix = self.affixes()
        return f"%{prefix}{self.name.value}{suffix}"


def a_name() -> RegisterName:
    return RegisterName.A


def b_name() -> RegisterName:
    return RegisterName.B


def c_name() -> RegisterName:
    return RegisterName.C


def d_name() -> RegisterName:
    return RegisterName.D


def si_name() -> RegisterName:
    return RegisterName.SI


def di_name() -> RegisterName:
    return RegisterName.DI


def sp_name() -> RegisterName:
    return RegisterName.SP


def bp_name() -> RegisterName:
    return RegisterName.BP


def rx_name(x: int) -> RegisterName:
    if not 8 <= x <= 15:
        raise ValueError(f"{x} is not the name of a x64 register")
    return RegisterName(f"r{x}")


def rax() -> Register:
    return RegisterName.A.quad()


def eax() -> Register:
    return RegisterName.A.double()


def ax() -> Register:
    return RegisterName.A.word()


def al() -> Register:
    return RegisterName.A.byte()


def rbx() -> Register:
    return RegisterName.B.quad()


def ebx() -> Register:
    return RegisterName.B.double()


def bx() -> Register:
    return RegisterName.B.word()


def bl() -> Register:
    return RegisterName.B.byte()


def rcx() -> Register:
    return RegisterName.C.quad()


def ecx() -> Register:
    return RegisterName.C.double()


def cx() -> Register:
    return RegisterName.C.word()


def cl() -> Register:
    return RegisterName.C.byte()


def rdx() -> Register:
    return RegisterName.D.quad()


def edx() -> Register:
    return RegisterName.D.double()


def dx() -> Register:
    return RegisterName.D.word()


def dl() -> Register:
    return RegisterName.D.byte()


def rsi() -> Register:
    return RegisterName.SI.quad()


def esi() -> Register:
    return RegisterName.SI.double()


def si() -> Register:
    return RegisterName.SI.word()


def sil() -> Register:
    return RegisterName.SI.byte()


def rdi() -> Register:
    return RegisterName.DI.quad()


def edi() -> Register:
    return RegisterName.DI.double()


def di() -> Register:
    return RegisterName.DI.word()


def dil() -> Register:
    return RegisterName.DI.byte()


def rsp() -> Register:
    return RegisterName.SP.quad()


def esp() -> Register:
    return RegisterName.SP.double()


def sp() -> Register:
    return RegisterName.SP.word()


def spl() -> Register:
    return RegisterName.SP.byte()


def rbp() -> Register:
    return RegisterName.BP.quad()


def ebp() -> Register:
    return RegisterName.BP.double()


def bp() -> Register:
    return RegisterName.BP.word()


def bpl() -> Register:
    return RegisterName.BP.byte()


def rx(x: int) -> Register:
    return rx_name(x).quad()


def rxd(x: int) -> Register:
    return rx_name(x).double()


def rxw(x: int) -> Register:
    return rx_name(x).word()


def rxb(x: int) -> Register:
    return rx_name(x).byte()
