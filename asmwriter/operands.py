"""Instruction operands: immediates, labels, memory and the `Arg` union.

Memory operands are immutable. Every builder method returns a new value so a
chain like

    Memory.sib().base(rax()).index(rbx(), Scale.FOUR).offset(8)

can be passed around and reused freely. Contract violations raise the
exceptions in `asmwriter.errors`.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TypeAlias, Union

from asmwriter.errors import (
    ConstantOutOfRange,
    DuplicateDisplacement,
    IncompatibleAccumulation,
    InvalidAddressingOperation,
    SizeMismatch,
    SizeUnknown,
)
from asmwriter.registers import Register, RegisterSize


class ArgSize(Enum):
    """The size class of an operand, spelled as a mnemonic suffix."""

    BYTE = 8
    WORD = 16
    DOUBLE = 32
    QUAD = 64

    def suffix(self) -> str:
        match self:
            case ArgSize.BYTE:
                return "b"
            case ArgSize.WORD:
                return "w"
            case ArgSize.DOUBLE:
                return "l"
            case ArgSize.QUAD:
                return "q"

    def register_size(self) -> RegisterSize:
        return RegisterSize(self.value)


class IntKind(Enum):
    I8 = (8, True)
    U8 = (8, False)
    I32 = (32, True)
    U32 = (32, False)
    I64 = (64, True)
    U64 = (64, False)

    @property
    def bits(self) -> int:
        return self.value[0]

    @property
    def signed(self) -> bool:
        return self.value[1]

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def arg_size(self) -> ArgSize:
        # signed and unsigned share a size class
        match self.bits:
            case 8:
                return ArgSize.BYTE
            case 32:
                return ArgSize.DOUBLE
            case _:
                return ArgSize.QUAD


@dataclass(frozen=True)
class ConstInt:
    """An integer of a fixed width and signedness.

    Used both as an immediate operand (`$42`) and as a memory displacement.
    Two constants can be added only if they are of the same kind.
    """

    kind: IntKind
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"{self.value!r} is not an integer")
        if not self.kind.min_value <= self.value <= self.kind.max_value:
            raise ConstantOutOfRange.for_value(self.value, self.kind)

    @staticmethod
    def i8(value: int) -> ConstInt:
        return ConstInt(IntKind.I8, value)

    @staticmethod
    def u8(value: int) -> ConstInt:
        return ConstInt(IntKind.U8, value)

    @staticmethod
    def i32(value: int) -> ConstInt:
        return ConstInt(IntKind.I32, value)

    @staticmethod
    def u32(value: int) -> ConstInt:
        return ConstInt(IntKind.U32, value)

    @staticmethod
    def i64(value: int) -> ConstInt:
        return ConstInt(IntKind.I64, value)

    @staticmethod
    def u64(value: int) -> ConstInt:
        return ConstInt(IntKind.U64, value)

    def is_zero(self) -> bool:
        return self.value == 0

    def is_negative(self) -> bool:
        return self.value < 0

    def __add__(self, other: object) -> ConstInt:
        if not isinstance(other, ConstInt):
            return NotImplemented
        if self.kind != other.kind:
            raise IncompatibleAccumulation.of_kinds(self.kind, other.kind)
        return ConstInt(self.kind, self.value + other.value)

    def __str__(self) -> str:
        return str(self.value)


def to_const(value: ConstInt | int) -> ConstInt:
    """Plain ints are 32-bit signed, like an untyped integer literal."""
    if isinstance(value, ConstInt):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{value!r} is not an integer constant")
    return ConstInt.i32(value)


@dataclass(frozen=True)
class Label:
    label: str

    def rip(self) -> Memory:
        """Returns `label(%rip)`."""
        return Memory.rip().label(self)

    def __str__(self) -> str:
        return self.label


def to_label(value: Label | str) -> Label:
    if isinstance(value, Label):
        return value
    if not isinstance(value, str):
        raise TypeError(f"{value!r} is not a label")
    return Label(value)


class Scale(Enum):
    ONE = 1
    TWO = 2
    FOUR = 4
    EIGHT = 8

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RipRelative:
    def __str__(self) -> str:
        return "(%rip)"


@dataclass(frozen=True)
class SibMemory:
    """The `(base, index, scale)` part of a memory operand.

    Both halves are optional. Without either nothing is rendered, which
    leaves an absolute displacement.
    """

    base: Register | None = None
    index: tuple[Register, Scale] | None = None

    def __str__(self) -> str:
        if self.base is None and self.index is None:
            return ""
        text = "(" + (str(self.base) if self.base is not None else "")
        if self.index is not None:
            index, scale = self.index
            text += f", {index}"
            if scale != Scale.ONE:
                text += f", {scale}"
        return text + ")"


MemoryKind: TypeAlias = Union[RipRelative, SibMemory]


@dataclass(frozen=True)
class Memory:
    """A memory operand.

    Attributes:
        declared_size (ArgSize | None):
            the operand width, needed when nothing else in the instruction
            implies one
        displacement_label (Label | None):
            symbolic displacement, at most one
        displacement_constant (ConstInt | None):
            constant displacement, accumulated by `offset`
        kind (MemoryKind):
            RIP-relative or base/index addressing
    """

    declared_size: ArgSize | None = None
    displacement_label: Label | None = None
    displacement_constant: ConstInt | None = None
    kind: MemoryKind = SibMemory()

    @staticmethod
    def sib() -> Memory:
        return Memory(kind=SibMemory())

    @staticmethod
    def rip() -> Memory:
        return Memory(kind=RipRelative())

    def _sib(self, operation: str) -> SibMemory:
        match self.kind:
            case SibMemory():
                return self.kind
            case RipRelative():
                raise InvalidAddressingOperation.on_rip(operation)
            case _:
                raise InvalidAddressingOperation(f"unknown memory kind {self.kind!r}")

    def base(self, base: Register) -> Memory:
        return replace(self, kind=replace(self._sib("base"), base=base))

    def index(self, index: Register, scale: Scale = Scale.ONE) -> Memory:
        return replace(self, kind=replace(self._sib("index"), index=(index, scale)))

    def offset(self, disp: ConstInt | int) -> Memory:
        disp = to_const(disp)
        if self.displacement_constant is not None:
            disp = self.displacement_constant + disp
        return replace(self, displacement_constant=disp)

    def label(self, label: Label | str) -> Memory:
        label = to_label(label)
        if self.displacement_label is not None:
            raise DuplicateDisplacement.with_labels(self.displacement_label, label)
        return replace(self, displacement_label=label)

    def size(self, size: ArgSize) -> Memory:
        return replace(self, declared_size=size)

    def __str__(self) -> str:
        text = ""
        if self.displacement_label is not None:
            text += str(self.displacement_label)
        constant = self.displacement_constant
        if constant is not None and not constant.is_zero():
            if self.displacement_label is not None and not constant.is_negative():
                text += "+"
            text += str(constant)
        return text + str(self.kind)


Arg: TypeAlias = Union[Register, Label, ConstInt, Memory]

# anything the emission calls accept as an operand
ArgLike: TypeAlias = Union[Arg, int, str]


def to_arg(value: ArgLike) -> Arg:
    match value:
        case Register() | Label() | ConstInt() | Memory():
            return value
        case bool():
            raise TypeError(f"{value!r} is not an operand")
        case int():
            return to_const(value)
        case str():
            return Label(value)
        case _:
            raise TypeError(f"{value!r} is not an operand")


def arg_size(arg: Arg) -> ArgSize | None:
    match arg:
        case Register():
            return arg.size.arg_size()
        case ConstInt():
            return arg.kind.arg_size()
        case Memory():
            return arg.declared_size
        case Label():
            return None
        case _:
            raise TypeError(f"{arg!r} is not an operand")


def render_arg(arg: Arg) -> str:
    match arg:
        case ConstInt():
            return f"${arg}"
        case Register() | Label() | Memory():
            return str(arg)
        case _:
            raise TypeError(f"{arg!r} is not an operand")


def is_register(arg: Arg) -> bool:
    return isinstance(arg, Register)


def is_memory(arg: Arg) -> bool:
    return isinstance(arg, Memory)


def known_size(arg: Arg) -> ArgSize:
    size = arg_size(arg)
    if size is None:
        raise SizeUnknown.for_operands(render_arg(arg))
    return size


def infer_size(a: Arg, b: Arg) -> ArgSize:
    """Returns the one size suffix shared by both operands.

    Raises:
        SizeUnknown: neither operand has a size
        SizeMismatch: both have one and they differ
    """
    a_size = arg_size(a)
    b_size = arg_size(b)
    if a_size is None and b_size is None:
        raise SizeUnknown.for_operands(render_arg(a), render_arg(b))
    if a_size is None:
        assert b_size is not None
        return b_size
    if b_size is None:
        return a_size
    if a_size != b_size:
        raise SizeMismatch.between(render_arg(a), render_arg(b), a_size, b_size)
    return a_size
