"""
Physics models for FSO link budget estimation.

This module implements the closed-form pieces of the estimator:
- Complementary error function approximation
- Simplified square-law geometric loss
- Q-factor to bit error rate conversion for On-Off Keying (OOK)
- Throughput derating as a function of BER
"""

import numpy as np
from typing import Union

ArrayLike = Union[float, np.ndarray]

# Chebyshev-fitted coefficients, innermost term last
_ERFC_COEFFICIENTS = (
    -1.26551223,
    1.00002368,
    0.37409196,
    0.09678418,
    -0.18628806,
    0.27886807,
    -1.13520398,
    1.48851587,
    -0.82215223,
    0.17087277,
)


def _as_output(value: np.ndarray) -> ArrayLike:
    """Return a Python float for 0-d results, the array otherwise."""
    if np.ndim(value) == 0:
        return float(value)
    return value


def erfc(x: ArrayLike) -> ArrayLike:
    """
    Complementary error function approximation.

    Rational approximation with substitution t = 1/(1 + 0.5|x|), accurate to
    about 1.2e-7 absolute error for every finite x. Works element-wise on
    numpy arrays.

    Args:
        x: Finite real value or array

    Returns:
        Approximation of erfc(x)
    """
    x = np.asarray(x, dtype=np.float64)
    t = 1.0 / (1.0 + 0.5 * np.abs(x))

    # Horner evaluation of the polynomial in t
    poly = _ERFC_COEFFICIENTS[-1]
    for coefficient in reversed(_ERFC_COEFFICIENTS[1:-1]):
        poly = coefficient + t * poly
    ans = t * np.exp(-x * x + _ERFC_COEFFICIENTS[0] + t * poly)

    return _as_output(np.where(x >= 0, ans, 2.0 - ans))


def geometric_loss_db(distance_km: ArrayLike) -> ArrayLike:
    """
    Simplified square-law geometric loss.

    Equal to 10*log10(max(1, 2*d^2)), evaluated in log form so the loss is
    never negative, is 0 at zero distance and stays finite for any finite
    distance.

    Args:
        distance_km: Link distance in km

    Returns:
        Geometric loss in dB
    """
    distance_km = np.asarray(distance_km, dtype=np.float64)
    with np.errstate(divide='ignore'):
        loss = 10 * np.log10(2.0) + 20 * np.log10(distance_km)
    return _as_output(np.maximum(0.0, loss))


def db_to_linear(value_db: ArrayLike) -> ArrayLike:
    """Convert a ratio in dB to linear scale."""
    return _as_output(np.power(10.0, np.asarray(value_db, dtype=np.float64) / 10))


def q_factor_from_snr(snr_db: ArrayLike) -> ArrayLike:
    """
    Compute Q-factor from SNR using the OOK approximation Q = sqrt(SNR).

    Args:
        snr_db: Signal-to-noise ratio in dB

    Returns:
        Q-factor (dimensionless)
    """
    return _as_output(np.sqrt(db_to_linear(snr_db)))


def bit_error_rate_from_q(q_factor: ArrayLike, ber_floor: float = 1e-25) -> ArrayLike:
    """
    Compute bit error rate for OOK from the Q-factor.

    BER = 0.5 * erfc(Q / sqrt(2)), floored so it never reaches zero.

    Args:
        q_factor: Q-factor
        ber_floor: Smallest reportable BER

    Returns:
        Bit error rate
    """
    ber = 0.5 * np.asarray(erfc(np.asarray(q_factor, dtype=np.float64) / np.sqrt(2)))
    return _as_output(np.maximum(ber_floor, ber))


def throughput_multiplier(
    bit_error_rate: ArrayLike,
    fec_limit_log_ber: float = -3.0,
    error_free_log_ber: float = -12.0,
    ber_floor: float = 1e-25
) -> ArrayLike:
    """
    Fraction of peak throughput sustainable at a given BER.

    Linear ramp in log10(BER): 1.0 at or below the error-free limit, 0.0 at or
    above the FEC limit.

    Args:
        bit_error_rate: Bit error rate
        fec_limit_log_ber: log10 BER at which capacity drops to zero
        error_free_log_ber: log10 BER below which capacity is full
        ber_floor: Floor applied before taking the logarithm

    Returns:
        Multiplier in [0, 1]
    """
    log_ber = np.log10(np.maximum(ber_floor, np.asarray(bit_error_rate, dtype=np.float64)))
    ramp = np.maximum(0.0, (log_ber - fec_limit_log_ber) / (error_free_log_ber - fec_limit_log_ber))
    return _as_output(np.where(log_ber > error_free_log_ber, ramp, 1.0))
