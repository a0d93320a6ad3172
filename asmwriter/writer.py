r"""Writes AT&T syntax x86-64 assembly, one line per call.

Example:

out = io.StringIO()
writer = AsmWriter(out)
writer.build_mov(rbx(), rax())     # \tmovq %rax, %rbx
writer.build_cjmp(Condition.GREATER_THAN, "loop")   # \tjg loop

Two operand builders take the destination first and the source second, and
print them the AT&T way round (`src, dst`).
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from types import TracebackType
from typing import TextIO, TypeVar

from asmwriter.operands import (
    ArgLike,
    Label,
    infer_size,
    is_memory,
    is_register,
    known_size,
    render_arg,
    to_arg,
    to_label,
)

OpT = TypeVar("OpT", bound=Enum)

_ESCAPES = {"\\": "\\\\", "\"": "\\\"", "\n": "\\n", "\t": "\\t"}


class BinaryOp(Enum):
    """Two operand instructions taking one size suffix"""

    ADD = "add"
    SUB = "sub"
    IMUL = "imul"
    AND = "and"
    OR = "or"
    XOR = "xor"
    LEA = "lea"
    CMP = "cmp"
    TEST = "test"
    SHL = "shl"
    SHR = "shr"
    SAR = "sar"

    def mnemonic(self) -> str:
        return self.value


class UnaryOp(Enum):
    """One operand instructions taking one size suffix"""

    INC = "inc"
    DEC = "dec"
    NEG = "neg"
    NOT = "not"
    MUL = "mul"
    IMUL = "imul"
    DIV = "div"
    IDIV = "idiv"

    def mnemonic(self) -> str:
        return self.value


class NonaryOp(Enum):
    RET = "ret"

    def mnemonic(self) -> str:
        return self.value


class Condition(Enum):
    ZERO = "z"
    NOT_ZERO = "nz"
    EQUAL = "e"
    NOT_EQUAL = "ne"
    NEGATIVE = "s"
    NON_NEGATIVE = "ns"
    GREATER_THAN = "g"
    LESS_THAN = "l"
    GREATER_EQUAL = "ge"
    LESS_EQUAL = "le"
    ABOVE = "a"
    BELOW = "b"
    ABOVE_EQUAL = "ae"
    BELOW_EQUAL = "be"

    def suffix(self) -> str:
        return self.value


class AsmWriter:
    """Renders instructions and directives into a text sink.

    Every public method writes exactly one line with a single `write` call.
    Errors raised by the sink propagate to the caller untouched; nothing is
    buffered or retried.
    """

    def __init__(self, out: TextIO) -> None:
        self.out = out
        self._owns_out = False

    @staticmethod
    def create(path: Path | str) -> AsmWriter:
        """Opens `path` for writing and returns a writer that owns the file.

        Use as a context manager so the file is closed afterwards.
        """
        writer = AsmWriter(open(path, "w"))
        writer._owns_out = True
        return writer

    def close(self) -> None:
        if self._owns_out:
            self.out.close()

    def __enter__(self) -> AsmWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _writeln(self, line: str) -> None:
        logging.debug(f"asm: {line!r}")
        self.out.write(line + "\n")

    def write_filename(self, name: str) -> None:
        self._writeln(f'\t.file "{name}"')

    def emit_label(self, label: Label | str) -> None:
        self._writeln(f"{to_label(label)}:")

    def declare_global(self, label: Label | str) -> None:
        self._writeln(f"\t.global {to_label(label)}")

    def begin_text(self) -> None:
        self._writeln("\t.text")

    def empty_line(self) -> None:
        self._writeln("")

    def comment(self, comment: str) -> None:
        self._writeln(f"\t# {comment}")

    def asciz(self, text: str) -> None:
        """Emits `text` as a NUL terminated string constant."""
        escaped = "".join(_ESCAPES.get(ch, ch) for ch in text)
        self._writeln(f'\t.asciz "{escaped}"')

    def build_mov(self, dst: ArgLike, src: ArgLike) -> None:
        dst_arg = to_arg(dst)
        src_arg = to_arg(src)
        suffix = infer_size(dst_arg, src_arg).suffix()
        self._writeln(f"\tmov{suffix} {render_arg(src_arg)}, {render_arg(dst_arg)}")

    def build_cmov(self, c: Condition, dst: ArgLike, src: ArgLike) -> None:
        c = _check_op(c, Condition)
        dst_arg = to_arg(dst)
        src_arg = to_arg(src)
        self._writeln(
            f"\tcmov{c.suffix()} {render_arg(src_arg)}, {render_arg(dst_arg)}"
        )

    def build_push(self, src: ArgLike) -> None:
        src_arg = to_arg(src)
        suffix = known_size(src_arg).suffix()
        self._writeln(f"\tpush{suffix} {render_arg(src_arg)}")

    def build_pop(self, dst: ArgLike) -> None:
        dst_arg = to_arg(dst)
        suffix = known_size(dst_arg).suffix()
        self._writeln(f"\tpop{suffix} {render_arg(dst_arg)}")

    def build_binary_op(self, op: BinaryOp, dst: ArgLike, src: ArgLike) -> None:
        op = _check_op(op, BinaryOp)
        dst_arg = to_arg(dst)
        src_arg = to_arg(src)
        suffix = infer_size(dst_arg, src_arg).suffix()
        self._writeln(
            f"\t{op.mnemonic()}{suffix} {render_arg(src_arg)}, {render_arg(dst_arg)}"
        )

    def build_add(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.ADD, dst, src)

    def build_sub(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.SUB, dst, src)

    def build_imul(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.IMUL, dst, src)

    def build_and(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.AND, dst, src)

    def build_or(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.OR, dst, src)

    def build_xor(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.XOR, dst, src)

    def build_lea(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.LEA, dst, src)

    def build_cmp(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.CMP, dst, src)

    def build_test(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.TEST, dst, src)

    def build_shl(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.SHL, dst, src)

    def build_shr(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.SHR, dst, src)

    def build_sar(self, dst: ArgLike, src: ArgLike) -> None:
        self.build_binary_op(BinaryOp.SAR, dst, src)

    def build_unary_op(self, op: UnaryOp, dst: ArgLike) -> None:
        op = _check_op(op, UnaryOp)
        dst_arg = to_arg(dst)
        suffix = known_size(dst_arg).suffix()
        self._writeln(f"\t{op.mnemonic()}{suffix} {render_arg(dst_arg)}")

    def build_inc(self, dst: ArgLike) -> None:
        self.build_unary_op(UnaryOp.INC, dst)

    def build_dec(self, dst: ArgLike) -> None:
        self.build_unary_op(UnaryOp.DEC, dst)

    def build_neg(self, dst: ArgLike) -> None:
        self.build_unary_op(UnaryOp.NEG, dst)

    def build_not(self, dst: ArgLike) -> None:
        self.build_unary_op(UnaryOp.NOT, dst)

    def build_mul(self, dst: ArgLike) -> None:
        self.build_unary_op(UnaryOp.MUL, dst)

    def build_unary_imul(self, dst: ArgLike) -> None:
        self.build_unary_op(UnaryOp.IMUL, dst)

    def build_div(self, dst: ArgLike) -> None:
        self.build_unary_op(UnaryOp.DIV, dst)

    def build_idiv(self, dst: ArgLike) -> None:
        self.build_unary_op(UnaryOp.IDIV, dst)

    def _build_transfer(self, mnemonic: str, dst: ArgLike) -> None:
        dst_arg = to_arg(dst)
        # indirect through a register or memory
        star = "*" if is_register(dst_arg) or is_memory(dst_arg) else ""
        self._writeln(f"\t{mnemonic} {star}{render_arg(dst_arg)}")

    def build_call(self, dst: ArgLike) -> None:
        self._build_transfer("call", dst)

    def build_jmp(self, dst: ArgLike) -> None:
        self._build_transfer("jmp", dst)

    def build_cjmp(self, c: Condition, dst: ArgLike) -> None:
        c = _check_op(c, Condition)
        dst_arg = to_arg(dst)
        self._writeln(f"\tj{c.suffix()} {render_arg(dst_arg)}")

    def build_nonary_op(self, op: NonaryOp) -> None:
        op = _check_op(op, NonaryOp)
        self._writeln(f"\t{op.mnemonic()}")

    def build_ret(self) -> None:
        self.build_nonary_op(NonaryOp.RET)


def _check_op(op: object, kind: type[OpT]) -> OpT:
    if not isinstance(op, kind):
        raise TypeError(f"{op!r} is not a {kind.__name__}")
    return op
