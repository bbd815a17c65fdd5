from .bitcoin import Bitcoin
from .opcodes import *
from .pushable import INTEGER, UnsupportedValueType, push_value, value_kind
from .script import Script
from .tokens import *
from .util import *

class UnbalancedBranch(ScriptError):
    pass

class Assembler:
    '''Turns a sequence of tokens into the serialized script.  An Assembler holds only its
    configuration, so a single instance can assemble any number of scripts, from any thread.

    :param logging_level: the print logging level
    :type logging_level: DEBUG, INFO, WARNING, ERROR, or CRITICAL
    :param minimal_ints: push -1 and 1..16 with their push-number opcodes, and 0 with OP_0.
        When False every integer is pushed as a script number.
    :type minimal_ints: boolean
    :param coin: the coin definition, used for the consensus limits that are warned about
    :type coin: coin class
    '''

    def __init__(self, logging_level=WARNING, minimal_ints=True, coin=Bitcoin):
        self.logging_level = logging_level
        self.minimal_ints = minimal_ints
        self.coin = coin

    def validate(self, tokens):
        '''Check that every token can be assembled without emitting anything.  Literal
        payloads and dynamic values are checked here; opcodes and branches are checked during assembly.'''
        for token in tokens:
            if not isinstance(token, Token):
                raise UnsupportedValueType(token)
            if isinstance(token, IntegerLiteral):
                if value_kind(token.value, position=token.position) != INTEGER:
                    raise UnsupportedValueType(token.value, position=token.position)
            elif isinstance(token, HexLiteral):
                if not isinstance(token.value, bytes):
                    raise UnsupportedValueType(token.value, position=token.position)
            elif isinstance(token, DynamicValue):
                value_kind(token.value, position=token.position)

    def assemble(self, tokens):
        '''
        :param tokens: the script, in order
        :type tokens: iterable of :py:class:`pybtcscript.tokens.Token`
        :returns: the serialized script
        :rtype: bytes
        '''
        tokens = list(tokens)
        self.validate(tokens)

        if self.logging_level <= DEBUG:
            print('[ASSEMBLER] assembling {} tokens'.format(len(tokens)))

        script = Script()
        open_branches = []
        op_count = 0

        for token in tokens:
            try:
                if isinstance(token, (Opcode, BranchMarker)):
                    name = token.opcode_name if isinstance(token, BranchMarker) else token.value
                    op = lookup(name, position=token.position)
                    self.__track_branch(op, token, open_branches)
                    script.push_op(op)
                    if op > OP_16:
                        op_count += 1
                elif isinstance(token, IntegerLiteral):
                    if self.minimal_ints:
                        script.push_int(token.value)
                    else:
                        script.push_scriptint(token.value)
                elif isinstance(token, HexLiteral):
                    self.__check_element_size(len(token.value), token.position)
                    script.push_bytes(token.value)
                elif isinstance(token, DynamicValue):
                    if isinstance(token.value, (bytes, bytearray, memoryview)):
                        self.__check_element_size(len(token.value), token.position)
                    push_value(script, token.value, minimal_ints=self.minimal_ints, position=token.position)
                else:
                    raise UnsupportedValueType(token, position=token.position)
            except ScriptError as e:
                if e.position is None:
                    e.position = token.position
                raise

        if len(open_branches) != 0:
            raise UnbalancedBranch('OP_IF without matching OP_ENDIF', position=open_branches[-1])

        program = script.serialize()

        if self.logging_level <= WARNING:
            if len(program) > self.coin.MAX_SCRIPT_SIZE:
                print('[ASSEMBLER] script is {} bytes, over the {} byte limit'.format(len(program), self.coin.MAX_SCRIPT_SIZE))
            if op_count > self.coin.MAX_OPS_PER_SCRIPT:
                print('[ASSEMBLER] script has {} opcodes, over the {} opcode limit'.format(op_count, self.coin.MAX_OPS_PER_SCRIPT))

        if self.logging_level <= DEBUG:
            print('[ASSEMBLER] assembled {} bytes'.format(len(program)))

        return program

    def __track_branch(self, op, token, open_branches):
        if op in BRANCH_OPENING_OPCODES:
            open_branches.append(token.position)
        elif op == OP_ELSE:
            if len(open_branches) == 0:
                raise UnbalancedBranch('OP_ELSE without matching OP_IF', position=token.position)
        elif op == OP_ENDIF:
            if len(open_branches) == 0:
                raise UnbalancedBranch('OP_ENDIF without matching OP_IF', position=token.position)
            open_branches.pop()

    def __check_element_size(self, size, position):
        if size > self.coin.MAX_SCRIPT_ELEMENT_SIZE and self.logging_level <= WARNING:
            where = '' if position is None else ' at line {}, column {}'.format(position[0], position[1])
            print('[ASSEMBLER] push of {} bytes{} is over the {} byte element limit'.format(size, where, self.coin.MAX_SCRIPT_ELEMENT_SIZE))
