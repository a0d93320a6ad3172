"""Contract violations raised while building operands or emitting instructions.

All of them indicate a bug in the code generator driving the writer, never a
problem with external input. Letting one propagate aborts generation; the
message names the rule that was broken.
"""
from __future__ import annotations

from typing import Any


class AsmContractError(Exception):
    """Base class of every contract violation"""


class SizeMismatch(AsmContractError):
    @staticmethod
    def between(a: Any, b: Any, a_size: Any, b_size: Any) -> SizeMismatch:
        return SizeMismatch(
            f"operand sizes must agree: {a} is {a_size.name}, {b} is {b_size.name}"
        )


class SizeUnknown(AsmContractError):
    @staticmethod
    def for_operands(*args: Any) -> SizeUnknown:
        operands = ", ".join(str(a) for a in args)
        return SizeUnknown(f"cannot infer an operand size from {operands}")


class InvalidAddressingOperation(AsmContractError):
    @staticmethod
    def on_rip(operation: str) -> InvalidAddressingOperation:
        return InvalidAddressingOperation(
            f"{operation}() is only valid on SIB memory, not RIP-relative memory"
        )


class DuplicateDisplacement(AsmContractError):
    @staticmethod
    def with_labels(existing: Any, new: Any) -> DuplicateDisplacement:
        return DuplicateDisplacement(
            f"memory operand already displaced by {existing}, cannot add {new}"
        )


class IncompatibleAccumulation(AsmContractError):
    @staticmethod
    def of_kinds(a: Any, b: Any) -> IncompatibleAccumulation:
        return IncompatibleAccumulation(
            f"cannot accumulate a {b.name} constant into a {a.name} constant"
        )


class ConstantOutOfRange(AsmContractError):
    @staticmethod
    def for_value(value: int, kind: Any) -> ConstantOutOfRange:
        return ConstantOutOfRange(
            f"{value} does not fit in [{kind.min_value}, {kind.max_value}] ({kind.name})"
        )


class UnclassifiedRegister(AsmContractError):
    """A register name that belongs to no naming family.

    Unreachable with the closed `RegisterName` enum.
    """
