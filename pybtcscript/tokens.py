from .pushable import UnsupportedValueType

class Token:
    '''One element of a script source. Tokens compare by kind and value, never by position.

    :param value: the token's payload (opcode name, integer, bytes, ...)
    :param position: where the token starts in the source
    :type position: tuple (line, column) or None
    '''
    __slots__ = ('value', 'position')

    def __init__(self, value, position=None):
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'position', position)

    def __setattr__(self, name, value):
        raise AttributeError('tokens are immutable')

    def __eq__(self, other):
        return self is other or (self.__class__ is other.__class__ and self.value == other.value)

    def __hash__(self):
        return hash((self.__class__.__name__, repr(self.value)))

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.value)

class Opcode(Token):
    '''a symbolic opcode name such as OP_CHECKSIG'''
    __slots__ = ()

class IntegerLiteral(Token):
    __slots__ = ()

    def __init__(self, value, position=None):
        if not isinstance(value, int) or isinstance(value, bool):
            raise UnsupportedValueType(value, position=position)
        Token.__init__(self, value, position=position)

class HexLiteral(Token):
    __slots__ = ()

    def __init__(self, value, position=None):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise UnsupportedValueType(value, position=position)
        Token.__init__(self, bytes(value), position=position)

class DynamicValue(Token):
    '''A value computed outside the script source. The kind of the value is only
    checked when the script is assembled.'''
    __slots__ = ()

class BranchMarker(Token):
    __slots__ = ()

    IF    = 'IF'
    NOTIF = 'NOTIF'
    ELSE  = 'ELSE'
    ENDIF = 'ENDIF'

    KINDS = (IF, NOTIF, ELSE, ENDIF)

    def __init__(self, value, position=None):
        if value not in BranchMarker.KINDS:
            raise UnsupportedValueType(value, position=position)
        Token.__init__(self, value, position=position)

    @property
    def opcode_name(self):
        return 'OP_' + self.value
