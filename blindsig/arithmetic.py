from blindsig.custom_exceptions import NoInverseExists


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """ Compute base^exponent mod modulus by repeated squaring.
        Args:
            base -- int -- any integer, reduced mod modulus first
            exponent -- int -- non-negative
            modulus -- int -- positive

        return an integer in [0, modulus)
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative, found %d" % exponent)
    if modulus <= 0:
        raise ValueError("Modulus must be positive, found %d" % modulus)
    if modulus == 1:
        return 0
    result = 1
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result


def gcd(a, b):
    while b != 0:
        a, b = b, a % b
    return abs(a)


def extended_euclid_gcd(a, b):
    """
    Returns a list `result` of size 3 where:
    Referring to the equation ax + by = gcd(a, b)
        result[0] is gcd(a, b)
        result[1] is x
        result[2] is y
    """
    s = 0; old_s = 1
    t = 1; old_t = 0
    r = b; old_r = a

    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s
        old_t, t = t, old_t - quotient * t
    return [old_r, old_s, old_t]


def modulo_multiplicative_inverse(A, M):
    """
    Returns multiplicative modulo inverse of A under M, in [1, M).
    Raises NoInverseExists when A and M are not co-prime.
    """
    g, x, _ = extended_euclid_gcd(A % M, M)
    if g != 1:
        raise NoInverseExists("%d has no inverse modulo %d" % (A, M))
    return x % M
