from .bitcoin import Bitcoin
from .keys import InvalidKeyEncoding, PublicKey
from .script import INT64_MIN, INT64_MAX, IntegerOutOfRange
from .util import *

class UnsupportedValueType(ScriptError):
    def __init__(self, value, position=None):
        ScriptError.__init__(self, 'cannot push a value of type {}'.format(type(value).__name__), position=position)
        self.value = value

INTEGER  = 'integer'
BYTES    = 'bytes'
PUBKEY   = 'pubkey'

def value_kind(value, position=None):
    '''Classify a dynamic value as one of INTEGER, BYTES or PUBKEY.

    bools are rejected even though they are ints.

    :raises UnsupportedValueType: for any other type
    :raises IntegerOutOfRange: for ints that don't fit in 64 bits
    :raises InvalidKeyEncoding: for public keys that are neither 33 nor 65 bytes
    '''
    if isinstance(value, bool):
        raise UnsupportedValueType(value, position=position)
    if isinstance(value, int):
        if not (INT64_MIN <= value <= INT64_MAX):
            raise IntegerOutOfRange(value, position=position)
        return INTEGER
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BYTES
    if isinstance(value, PublicKey):
        if len(value.pubkey) not in Bitcoin.PUBLIC_KEY_SIZES:
            raise InvalidKeyEncoding(len(value.pubkey), position=position)
        return PUBKEY
    raise UnsupportedValueType(value, position=position)

def push_value(script, value, minimal_ints=True, position=None):
    '''Append *value* to *script* using the push form for its kind.'''
    kind = value_kind(value, position=position)
    if kind == INTEGER:
        if minimal_ints:
            script.push_int(value)
        else:
            script.push_scriptint(value)
    elif kind == BYTES:
        script.push_bytes(bytes(value))
    elif kind == PUBKEY:
        script.push_key(value)
