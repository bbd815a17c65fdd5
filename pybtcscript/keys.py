from .bitcoin import Bitcoin
from .util import *

class InvalidKeyEncoding(ScriptError):
    def __init__(self, length, message=None, position=None):
        if message is None:
            message = 'invalid public key encoding ({} bytes, expected one of {})'.format(length, ', '.join(str(s) for s in Bitcoin.PUBLIC_KEY_SIZES))
        ScriptError.__init__(self, message, position=position)
        self.length = length

class PublicKey:
    '''A SEC encoded public key, either compressed (33 bytes) or uncompressed (65 bytes).
    Only the encoding is checked; the point itself is never validated.'''

    def __init__(self, pubkey):
        pubkey = bytes(pubkey)
        if len(pubkey) not in Bitcoin.PUBLIC_KEY_SIZES:
            raise InvalidKeyEncoding(len(pubkey))
        if pubkey[0] not in ((0x02, 0x03) if len(pubkey) == 33 else (0x04,)):
            raise InvalidKeyEncoding(len(pubkey), message='invalid public key prefix 0x{:02x}'.format(pubkey[0]))
        self.pubkey = pubkey

    def __hash__(self):
        return int.from_bytes(self.pubkey, 'big')

    def __eq__(self, other):
        return self is other or (isinstance(other, PublicKey) and self.pubkey == other.pubkey)

    def __repr__(self):
        return 'PublicKey({})'.format(self.as_hex())

    def is_compressed(self):
        return len(self.pubkey) == 33

    def as_hex(self):
        return bytes_to_hexstring(self.pubkey, reverse=False)

    def serialize(self):
        return self.pubkey

    @staticmethod
    def from_hex(s):
        pubkey = hexstring_to_bytes(s, reverse=False)
        return PublicKey(pubkey)
