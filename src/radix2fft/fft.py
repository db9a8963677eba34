"""
In-place Radix-2 FFT using Numba JIT

This module implements the iterative Cooley-Tukey decimation-in-time FFT on a
pair of real/imaginary channels, mutating the caller's buffers in place.

Stages:
1. Bit-reversal permutation (in place, swap-only)
2. log2(N) butterfly stages with incrementally rotated twiddle factors
3. Inverse via the conjugate trick: conj(FFT(conj(X))) / N

Sign convention: the twiddle factors rotate by +2*pi/le, so the forward
transform is X[k] = sum_n x[n] * exp(+2j*pi*k*n/N), which equals
conj(scipy.fft.fft(conj(x))). The output is unnormalized.
"""

import array
import math
from collections.abc import MutableSequence
from typing import Callable, Tuple, Union

import numpy as np
from numba import jit

from .utils.logging import get_logger

logger = get_logger(__name__)


class PreconditionViolation(ValueError):
    """Raised when the channels cannot be transformed; nothing has been mutated."""


def is_power_of_two(n: int) -> bool:
    """Return True for n = 2^m, m >= 0."""
    return n > 0 and n & (n - 1) == 0


@jit(nopython=True, cache=True)
def _log2(n: int) -> int:
    """Number of bits needed to index n = 2^m samples."""
    n_bits = 0
    while (1 << n_bits) < n:
        n_bits += 1
    return n_bits


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _bit_reverse_permute(real: np.ndarray, imag: np.ndarray) -> None:
    """
    Swap every sample with its bit-reversed counterpart (in place).

    Indices 0 and N-1 are their own reversal, so only 1..N-2 are visited and
    each pair is swapped once, from its lower index.
    """
    N = real.shape[0]
    n_bits = _log2(N)

    for i in range(1, N - 1):
        j = _bit_reverse(i, n_bits)
        if i < j:
            tr = real[j]
            ti = imag[j]
            real[j] = real[i]
            imag[j] = imag[i]
            real[i] = tr
            imag[i] = ti


@jit(nopython=True, cache=True)
def _butterfly_stages(real: np.ndarray, imag: np.ndarray) -> None:
    """
    Iterative radix-2 DIT butterflies over bit-reversed input (Numba JIT).

    The rotation (ur, ui) is advanced by one complex multiply per sub-band
    instead of calling cos/sin each time. Rounding error in the rotation
    therefore accumulates across the le2 sub-bands of a stage.
    """
    N = real.shape[0]
    n_stages = _log2(N)

    for stage in range(1, n_stages + 1):
        le = 1 << stage
        le2 = le >> 1

        ur = 1.0
        ui = 0.0
        sr = math.cos(math.pi / le2)
        si = math.sin(math.pi / le2)

        for j in range(le2):
            for k in range(j, N, le):
                ip = k + le2

                tr = real[ip] * ur - imag[ip] * ui
                ti = real[ip] * ui + imag[ip] * ur

                real[ip] = real[k] - tr
                imag[ip] = imag[k] - ti
                real[k] = real[k] + tr
                imag[k] = imag[k] + ti

            tr = ur
            ur = tr * sr - ui * si
            ui = tr * si + ui * sr


def bit_reversed_indices(n: int) -> np.ndarray:
    """
    Reference table [rev(0), ..., rev(n-1)] for a power-of-two n.

    Examples
    --------
    >>> bit_reversed_indices(8)
    array([0, 4, 2, 6, 1, 5, 3, 7])
    """
    if not is_power_of_two(n):
        raise PreconditionViolation(f"Length must be a power of 2. Given: {n}")

    # Shift the low bit of every index into the table, one bit per pass
    idx = np.arange(n, dtype=np.int64)
    table = np.zeros(n, dtype=np.int64)
    for _ in range(_log2(n)):
        table = (table << 1) | (idx & 1)
        idx >>= 1
    return table


# Sample types the Numba kernels are compiled for
KERNEL_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


def _check_channel(name: str, channel: Union[np.ndarray, MutableSequence]) -> int:
    """
    Check one channel on its own and return its length.

    ndarrays must be 1-D, writeable, native-endian float32 or float64. Other
    channels must be mutable sequences able to hold float values.
    """
    if isinstance(channel, np.ndarray):
        if channel.ndim != 1:
            raise PreconditionViolation(
                f"{name} channel must be one-dimensional, got shape {channel.shape}"
            )
        if not channel.dtype.isnative or channel.dtype not in KERNEL_DTYPES:
            raise PreconditionViolation(
                f"{name} channel must be native float32 or float64, got {channel.dtype.str}"
            )
        if not channel.flags.writeable:
            raise PreconditionViolation(f"{name} channel is read-only")
        return channel.shape[0]

    if isinstance(channel, bytearray):
        raise PreconditionViolation(f"{name} channel is a bytearray and cannot hold floats")
    if isinstance(channel, array.array) and channel.typecode not in ('f', 'd'):
        raise PreconditionViolation(
            f"{name} channel is an array of typecode {channel.typecode!r}, expected 'f' or 'd'"
        )
    if isinstance(channel, MutableSequence):
        return len(channel)

    raise TypeError(
        f"{name} channel must be a numpy array or a mutable sequence, "
        f"got {type(channel).__name__}"
    )


def validate_channels(real, imag) -> int:
    """
    Check that (real, imag) can be transformed in place.

    Parameters
    ----------
    real, imag : np.ndarray or MutableSequence
        Real and imaginary channels.

    Returns
    -------
    int
        The common length N.

    Raises
    ------
    PreconditionViolation
        On length mismatch, non power-of-two length, aliasing channels, an
        ndarray that is not 1-D, writeable, native float32/float64, or a
        sequence that cannot hold floats.
    TypeError
        If a channel is neither an ndarray nor a mutable sequence.
    """
    n_real = _check_channel('real', real)
    n_imag = _check_channel('imag', imag)

    if n_real != n_imag:
        raise PreconditionViolation(
            f"Channel lengths differ: real has {n_real}, imag has {n_imag}"
        )
    if not is_power_of_two(n_real):
        raise PreconditionViolation(f"FFT size must be power of 2. Given: {n_real}")

    if real is imag:
        raise PreconditionViolation("real and imag must be distinct buffers")
    if isinstance(real, np.ndarray) and isinstance(imag, np.ndarray):
        if np.shares_memory(real, imag):
            raise PreconditionViolation("real and imag channels share memory")

    return n_real


def _as_work_array(channel: MutableSequence) -> np.ndarray:
    try:
        data = np.array(channel, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise PreconditionViolation(f"Channel holds non-numeric values: {e}") from e
    if data.ndim != 1:
        raise PreconditionViolation("Sequence channels must hold scalar values")
    return data


def _borrow(real, imag) -> Tuple[np.ndarray, np.ndarray, Callable[[], None]]:
    """
    Validate the channels and return ndarrays to work on.

    When both channels are ndarrays they are used directly. Otherwise both
    are copied, and the returned commit() writes the sequences back first,
    restoring them if one refuses a value, and the ndarrays last. Nothing
    touches the caller's buffers before commit().
    """
    try:
        validate_channels(real, imag)
        channels = (real, imag)
        if all(isinstance(c, np.ndarray) for c in channels):
            return real, imag, lambda: None
        work = [c.copy() if isinstance(c, np.ndarray) else _as_work_array(c) for c in channels]
    except (PreconditionViolation, TypeError) as e:
        logger.debug(f"Rejected transform: {e}")
        raise

    def commit():
        written = []
        try:
            for channel, data in zip(channels, work):
                if isinstance(channel, np.ndarray):
                    continue
                written.append((channel, list(channel)))
                for i, value in enumerate(data.tolist()):
                    channel[i] = value
        except (TypeError, ValueError, OverflowError) as e:
            for channel, original in written:
                for i, value in enumerate(original):
                    channel[i] = value
            logger.debug(f"Rolled back transform: {e}")
            raise PreconditionViolation(f"Channel rejected the transformed values: {e}") from e

        for channel, data in zip(channels, work):
            if isinstance(channel, np.ndarray):
                channel[:] = data

    return work[0], work[1], commit


def bit_reverse_permutation(real, imag) -> None:
    """Reorder both channels into bit-reversed index order, in place."""
    re, im, commit = _borrow(real, imag)
    _bit_reverse_permute(re, im)
    commit()


def butterfly_stages(real, imag) -> None:
    """
    Run the log2(N) butterfly stages on bit-reversed channels, in place.

    Calling this on input that has not been through
    bit_reverse_permutation() gives a scrambled result.
    """
    re, im, commit = _borrow(real, imag)
    _butterfly_stages(re, im)
    commit()


def _forward(re: np.ndarray, im: np.ndarray) -> None:
    logger.debug(f"FFT forward: N={re.shape[0]}, stages={_log2(re.shape[0])}")
    _bit_reverse_permute(re, im)
    _butterfly_stages(re, im)


def compute(real, imag) -> None:
    """
    Compute the forward FFT of real + 1j*imag, in place.

    Parameters
    ----------
    real : np.ndarray or MutableSequence
        Real channel; overwritten with the real part of the spectrum.
    imag : np.ndarray or MutableSequence
        Imaginary channel; overwritten with the imaginary part.

    Notes
    -----
    The length must be a power of 2. Coefficients are returned in natural
    order with DC at index 0 and are not normalized.

    Examples
    --------
    >>> real = np.array([1, 0, 0, 0], dtype=np.float32)
    >>> imag = np.zeros(4, dtype=np.float32)
    >>> compute(real, imag)
    >>> real
    array([1., 1., 1., 1.], dtype=float32)
    """
    re, im, commit = _borrow(real, imag)
    _forward(re, im)
    commit()


def compute_inverse(real, imag) -> None:
    """
    Compute the inverse FFT, in place.

    IFFT(X) = conj(FFT(conj(X))) / N
    """
    re, im, commit = _borrow(real, imag)
    N = re.shape[0]

    np.negative(im, out=im)
    _forward(re, im)

    fraction = 1.0 / N
    re *= fraction
    im *= -fraction
    commit()
