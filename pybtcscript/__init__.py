from . import assembler
from . import keys
from . import opcodes
from . import parser
from . import pushable
from . import script
from . import tokens

from .assembler import Assembler, UnbalancedBranch
from .bitcoin import Bitcoin
from .keys import InvalidKeyEncoding, PublicKey
from .opcodes import UnknownOpcode
from .parser import ScriptSyntaxError, parse
from .pushable import UnsupportedValueType
from .script import IntegerOutOfRange, PayloadTooLarge, Script
from .tokens import BranchMarker, DynamicValue, HexLiteral, IntegerLiteral, Opcode

from .util import *

VERSION = 'pybtcscript 0.1.0'
VERSION_NUMBER = 0x00000100

def bitcoin_script(source, **values):
    '''Parse and assemble *source* in one step.

    >>> bitcoin_script('OP_DUP OP_HASH160 <h> OP_EQUALVERIFY OP_CHECKSIG', h=bytes(20)).hex()
    '76a914000000000000000000000000000000000000000088ac'

    :param source: the script source, see :py:class:`pybtcscript.parser.Parser`
    :param values: the values escapes in *source* refer to
    :returns: the serialized script
    :rtype: bytes
    '''
    return Assembler().assemble(parse(source, values=values))
