#!/usr/bin/env python3

"""
In this example asmwriter is used to emit an iterative factorial function
and a main that prints factorial(10) through printf.

    ./factorial.py factorial.s && gcc factorial.s -o factorial && ./factorial
"""

import argparse
import logging
from pathlib import Path

from asmwriter.operands import ConstInt, Label
from asmwriter.registers import eax, edi, esi, rax, rbp, rcx, rdi, rsp
from asmwriter.writer import AsmWriter, Condition


def emit_factorial(w: AsmWriter) -> None:
    w.declare_global("factorial")
    w.emit_label("factorial")
    w.build_mov(rax(), ConstInt.i64(1))
    w.build_mov(rcx(), rdi())
    w.emit_label(".Lloop")
    w.build_cmp(rcx(), ConstInt.i64(1))
    w.build_cjmp(Condition.LESS_EQUAL, ".Ldone")
    w.build_imul(rax(), rcx())
    w.build_dec(rcx())
    w.build_jmp(".Lloop")
    w.emit_label(".Ldone")
    w.build_ret()


def emit_main(w: AsmWriter) -> None:
    w.declare_global("main")
    w.emit_label("main")
    w.build_push(rbp())
    w.build_mov(rbp(), rsp())
    w.build_mov(edi(), 10)
    w.build_call("factorial")
    w.comment("printf(fmt, factorial(10))")
    w.build_lea(rdi(), Label("fmt").rip())
    w.build_mov(esi(), eax())
    w.build_xor(eax(), eax())
    w.build_call("printf")
    w.build_xor(eax(), eax())
    w.build_pop(rbp())
    w.build_ret()
    w.empty_line()
    w.emit_label("fmt")
    w.comment("%d with a trailing newline")
    w.asciz("%d\n")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Emit factorial.s")
    parser.add_argument("output", type=Path)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    with AsmWriter.create(args.output) as w:
        w.write_filename("factorial.c")
        w.begin_text()
        emit_factorial(w)
        w.empty_line()
        emit_main(w)
