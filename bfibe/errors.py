"""Exceptions raised by the IBE engine"""


class IbeError(Exception):
    pass


class ComponentConstructionError(IbeError):
    """A client, key generator or pairing could not be built from the
    given parameters (unknown hash function, unsuitable curve)"""


class SetupError(IbeError):
    """System setup ran out of attempts while generating primes or points"""


class NoInverseError(ArithmeticError):
    """The element has no multiplicative inverse"""
