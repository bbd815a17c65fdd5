import struct

from .opcodes import *
from .util import *

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

class PayloadTooLarge(ScriptError):
    def __init__(self, length, position=None):
        ScriptError.__init__(self, 'push of {} bytes does not fit in OP_PUSHDATA4'.format(length), position=position)
        self.length = length

class IntegerOutOfRange(ScriptError):
    def __init__(self, value, position=None):
        ScriptError.__init__(self, 'integer {} is outside the signed 64-bit range'.format(value), position=position)
        self.value = value

def encode_scriptnum(n):
    '''Minimal little-endian sign-magnitude encoding of *n*, as used by numbers on the
    script stack. Zero is the empty array.'''
    if not (INT64_MIN <= n <= INT64_MAX):
        raise IntegerOutOfRange(n)

    if n == 0:
        return b''

    negative = n < 0
    magnitude = -n if negative else n

    r = bytearray()
    while magnitude != 0:
        r.append(magnitude & 0xff)
        magnitude >>= 8

    # The top bit of the last byte is the sign, so make room for it if the magnitude uses it
    if r[-1] & 0x80:
        r.append(0x80 if negative else 0x00)
    elif negative:
        r[-1] |= 0x80

    return bytes(r)

def encode_pushdata(data):
    '''Prefix *data* with the shortest push instruction able to hold it.'''
    length = len(data)
    if length < OP_PUSHDATA1:
        prefix = bytes([length])
    elif length <= 0xff:
        prefix = struct.pack("<BB", OP_PUSHDATA1, length)
    elif length <= 0xffff:
        prefix = struct.pack("<BH", OP_PUSHDATA2, length)
    elif length <= 0xffffffff:
        prefix = struct.pack("<BL", OP_PUSHDATA4, length)
    else:
        raise PayloadTooLarge(length)
    return prefix + bytes(data)

def encode_int(n):
    '''-1 and 1..16 use their push-number opcode, 0 is OP_0, everything else is pushed
    as a minimal script number.'''
    if not (INT64_MIN <= n <= INT64_MAX):
        raise IntegerOutOfRange(n)

    op = small_int_opcode(n)
    if op is not None:
        return bytes([op])
    if n == 0:
        return bytes([OP_0])
    return encode_pushdata(encode_scriptnum(n))

class Script:
    def __init__(self, program=b''):
        self.program = bytearray(program)

    def push_op(self, op):
        self.program += bytes([op])

    def push_int(self, v):
        self.program += encode_int(v)

    def push_scriptint(self, v):
        '''push *v* as a script number even when a push-number opcode exists for it'''
        self.program += encode_pushdata(encode_scriptnum(v))

    def push_bytes(self, data):
        assert isinstance(data, (bytes, bytearray, memoryview))
        self.program += encode_pushdata(data)

    def push_key(self, public_key):
        self.push_bytes(public_key.serialize())

    def serialize(self):
        return bytes(self.program)

    def serialize_size(self):
        return len(self.program)

    def as_hex(self):
        return bytes_to_hexstring(self.program, reverse=False)
