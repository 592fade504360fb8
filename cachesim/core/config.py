"""Cache geometry.

A cache is described by three integers, as in the classic csim tool:
- s: number of set index bits (S = 2**s sets)
- E: associativity (lines per set)
- b: number of block offset bits (B = 2**b bytes per block)
"""
from dataclasses import dataclass

from cachesim.core.errors import ConfigurationError

ADDRESS_BITS = 64


@dataclass(frozen=True)
class CacheConfig:
    set_bits: int
    associativity: int
    block_bits: int

    def validate(self) -> "CacheConfig":
        for name in ("set_bits", "associativity", "block_bits"):
            value = getattr(self, name)
            # bool is an int subclass but never a meaningful geometry value
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.set_bits < 0:
            raise ConfigurationError(f"set_bits must be >= 0, got {self.set_bits}")
        if self.block_bits < 0:
            raise ConfigurationError(f"block_bits must be >= 0, got {self.block_bits}")
        if self.associativity < 1:
            raise ConfigurationError(f"associativity must be >= 1, got {self.associativity}")
        if self.set_bits + self.block_bits > ADDRESS_BITS:
            raise ConfigurationError(
                f"set_bits + block_bits must not exceed {ADDRESS_BITS}, "
                f"got {self.set_bits} + {self.block_bits}"
            )
        return self

    @property
    def num_sets(self) -> int:
        return 1 << self.set_bits

    @property
    def block_size(self) -> int:
        return 1 << self.block_bits

    @property
    def num_lines(self) -> int:
        return self.num_sets * self.associativity

    @property
    def capacity_bytes(self) -> int:
        return self.num_lines * self.block_size

    def describe(self) -> str:
        return (f"s={self.set_bits} E={self.associativity} b={self.block_bits} "
                f"({self.num_sets} sets, {self.block_size}-byte blocks)")
