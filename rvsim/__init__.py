"""A small RV32I instruction-set simulator: decoder, memory, ALU and CPU loop."""

__version__ = "0.1.0"
__all__ = ["isa", "decoder", "memory", "alu", "cpu"]