"""
ComplexSequence: paired real/imaginary channels for the in-place FFT.
"""

from dataclasses import dataclass

import numpy as np

from .fft import PreconditionViolation, compute, compute_inverse


@dataclass
class ComplexSequence:
    """
    N complex samples stored as two float channels, real[i] + 1j*imag[i].

    forward() and inverse() transform the channels in place and return self,
    so the arrays held by the sequence are the ones that change.
    """
    real: np.ndarray
    imag: np.ndarray

    def __post_init__(self):
        self.real = np.asarray(self.real)
        self.imag = np.asarray(self.imag)
        if self.real.shape != self.imag.shape:
            raise PreconditionViolation(
                f"Channel shapes differ: {self.real.shape} vs {self.imag.shape}"
            )

    @classmethod
    def zeros(cls, n: int, dtype=np.float32) -> 'ComplexSequence':
        return cls(np.zeros(n, dtype=dtype), np.zeros(n, dtype=dtype))

    @classmethod
    def from_complex(cls, z, dtype=np.float32) -> 'ComplexSequence':
        """Split a complex array into fresh real/imag channels."""
        z = np.asarray(z)
        return cls(z.real.astype(dtype), z.imag.astype(dtype))

    def __len__(self) -> int:
        return self.real.shape[0]

    def to_complex(self) -> np.ndarray:
        return self.real.astype(np.float64) + 1j * self.imag.astype(np.float64)

    def energy(self) -> float:
        """Sum of |x_i|^2 over all samples."""
        re = self.real.astype(np.float64)
        im = self.imag.astype(np.float64)
        return float(np.sum(re * re + im * im))

    def copy(self) -> 'ComplexSequence':
        return ComplexSequence(self.real.copy(), self.imag.copy())

    def forward(self) -> 'ComplexSequence':
        compute(self.real, self.imag)
        return self

    def inverse(self) -> 'ComplexSequence':
        compute_inverse(self.real, self.imag)
        return self
