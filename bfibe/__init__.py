"""Boneh-Franklin identity based encryption (RFC 5091) over Type-1 curves

>>> import bfibe
>>> result = bfibe.setup(bfibe.security_level.LOWEST)
>>> client = bfibe.obtain_client(result.public_parameters)
>>> pkg = bfibe.obtain_private_key_generator(result.public_parameters, result.master_secret)
>>> ct = client.encrypt("hello", "alice@example.com")
>>> client.decrypt(pkg.extract("alice@example.com"), ct)
'hello'
"""

from bfibe.bonehfranklin import (boneh_franklin_client,
                                 boneh_franklin_component_factory,
                                 boneh_franklin_initializer,
                                 boneh_franklin_private_key_generator,
                                 identity_based_encryption, obtain_client,
                                 obtain_private_key_generator, setup,
                                 setup_boneh_franklin)
from bfibe.domain import (ciphertext_tuple, ibe_setup, private_key,
                          public_parameters, security_level)
from bfibe.errors import (ComponentConstructionError, IbeError,
                          NoInverseError, SetupError)

__all__ = [
    'boneh_franklin_client',
    'boneh_franklin_component_factory',
    'boneh_franklin_initializer',
    'boneh_franklin_private_key_generator',
    'ciphertext_tuple',
    'ComponentConstructionError',
    'ibe_setup',
    'IbeError',
    'identity_based_encryption',
    'NoInverseError',
    'obtain_client',
    'obtain_private_key_generator',
    'private_key',
    'public_parameters',
    'security_level',
    'setup',
    'setup_boneh_franklin',
    'SetupError',
]
