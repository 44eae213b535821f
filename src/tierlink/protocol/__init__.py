"""Protocol compilation and command reports."""

from tierlink.protocol.compiler import compile_protocol

__all__ = ["compile_protocol"]
