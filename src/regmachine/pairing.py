"""Pairing functions over the natural numbers.

Two bijections built from the 2-adic valuation and parity of an integer:

    pair1(x, y) = 2**x * (2*y + 1)      N x N -> N \\ {0}
    pair2(x, y) = pair1(x, y) - 1       N x N -> N

``pair1`` never produces zero, which leaves zero free as a sentinel for the
list and program encodings built on top of it. ``pair2`` covers every
natural, including zero.

All arithmetic is exact Python int arithmetic. Results grow exponentially in
``x``, so nothing here may be narrowed to a fixed-width type.
"""

from typing import Tuple


def _check_natural(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def pair1(x: int, y: int) -> int:
    """Encode (x, y) as 2**x * (2y + 1).

    Args:
        x: Becomes the number of trailing zero bits of the result
        y: Becomes the odd cofactor as 2y + 1

    Returns:
        A positive integer

    Raises:
        TypeError: If either argument is not an int
        ValueError: If either argument is negative
    """
    _check_natural("x", x)
    _check_natural("y", y)
    return (2 * y + 1) << x


def pair2(x: int, y: int) -> int:
    """Encode (x, y) as pair1(x, y) - 1, so that (0, 0) maps to zero."""
    return pair1(x, y) - 1


def unpair1(n: int) -> Tuple[int, int]:
    """Invert pair1.

    Strips the factors of two from ``n`` (counting them as x) and reads y
    from the remaining odd value.

    Args:
        n: A positive integer

    Returns:
        (x, y) such that pair1(x, y) == n

    Raises:
        TypeError: If n is not an int
        ValueError: If n is not positive
    """
    _check_natural("n", n)
    if n == 0:
        raise ValueError("unpair1 is undefined for 0")
    # Number of trailing zero bits, i.e. the 2-adic valuation of n.
    x = (n & -n).bit_length() - 1
    odd = n >> x
    return x, (odd - 1) // 2


def unpair2(n: int) -> Tuple[int, int]:
    """Invert pair2."""
    _check_natural("n", n)
    return unpair1(n + 1)
