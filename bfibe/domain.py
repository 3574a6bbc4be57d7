"""Records exchanged between setup, key extraction, encryption and decryption"""

import enum
from collections import namedtuple

class security_level(enum.Enum):
    """ (subgroup bits, field bits, hash function) """
    LOWEST = (160, 512, "SHA-1")
    LOW = (224, 1024, "SHA-224")
    MEDIUM = (256, 1536, "SHA-256")
    HIGH = (384, 3840, "SHA-384")
    HIGHEST = (512, 7680, "SHA-512")

    def __init__(self, q_length, p_length, hash_function):
        self.q_length = q_length
        self.p_length = p_length
        self.hash_function = hash_function

# curve: type_one_curve, q: subgroup order, point_p: generator of order q,
# point_p_public: [s]point_p, hash_function: digest name
public_parameters = namedtuple('public_parameters',
                               ['curve', 'q', 'point_p', 'point_p_public', 'hash_function'])

# S_id = [s]Q_id
private_key = namedtuple('private_key', ['point'])

ciphertext_tuple = namedtuple('ciphertext_tuple', ['u', 'v', 'w'])

ibe_setup = namedtuple('ibe_setup', ['public_parameters', 'master_secret'])
