from asmwriter import errors, operands, registers, writer
from asmwriter.errors import (
    AsmContractError,
    ConstantOutOfRange,
    DuplicateDisplacement,
    IncompatibleAccumulation,
    InvalidAddressingOperation,
    SizeMismatch,
    SizeUnknown,
    UnclassifiedRegister,
)
from asmwriter.operands import (
    Arg,
    ArgSize,
    ConstInt,
    IntKind,
    Label,
    Memory,
    Scale,
    arg_size,
    infer_size,
    render_arg,
    to_arg,
)
from asmwriter.registers import Register, RegisterName, RegisterSize
from asmwriter.writer import AsmWriter, BinaryOp, Condition, NonaryOp, UnaryOp

__all__ = [
    "errors",
    "operands",
    "registers",
    "writer",
    "AsmContractError",
    "ConstantOutOfRange",
    "DuplicateDisplacement",
    "IncompatibleAccumulation",
    "InvalidAddressingOperation",
    "SizeMismatch",
    "SizeUnknown",
    "UnclassifiedRegister",
    "Arg",
    "ArgSize",
    "ConstInt",
    "IntKind",
    "Label",
    "Memory",
    "Scale",
    "arg_size",
    "infer_size",
    "render_arg",
    "to_arg",
    "Register",
    "RegisterName",
    "RegisterSize",
    "AsmWriter",
    "BinaryOp",
    "Condition",
    "NonaryOp",
    "UnaryOp",
]
