"""
radix2fft - In-place Radix-2 Fast Fourier Transform

Iterative Cooley-Tukey decimation-in-time FFT and its inverse, operating in
place on caller-owned real/imaginary channels. The hot loops are compiled
with Numba.

Modules:
    - fft: bit-reversal permutation, butterfly stages, forward/inverse transform
    - sequence: ComplexSequence container for paired channels
    - config: YAML benchmark configuration
    - utils: logging and seeding helpers
"""

from .fft import (
    compute,
    compute_inverse,
    bit_reverse_permutation,
    butterfly_stages,
    bit_reversed_indices,
    is_power_of_two,
    validate_channels,
    PreconditionViolation,
)
from .sequence import ComplexSequence
from .config import BenchmarkConfig, load_config
from .utils import setup_logging, get_logger

__all__ = [
    # Transform
    'compute',
    'compute_inverse',
    'bit_reverse_permutation',
    'butterfly_stages',
    'bit_reversed_indices',
    'is_power_of_two',
    'validate_channels',
    'PreconditionViolation',
    # Data model
    'ComplexSequence',
    # Configuration
    'BenchmarkConfig',
    'load_config',
    # Logging
    'setup_logging',
    'get_logger',
]

__version__ = '1.0.0'
