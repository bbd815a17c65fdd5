import re
import string

from .script import INT64_MIN, INT64_MAX
from .tokens import *
from .util import *

class ScriptSyntaxError(ScriptError):
    pass

IDENTIFIER_START = string.ascii_letters + '_'
WORD = re.compile(r'[A-Za-z0-9_]+')
INTEGER_EXPRESSION = re.compile(r'^-?\s*[0-9]+(\s*[+-]\s*[0-9]+)*$')
INTEGER_TERM = re.compile(r'([+-]?)\s*([0-9]+)')

class Parser:
    '''Reads script source text into tokens.

    Opcodes are identifiers (``OP_CHECKSIG``), numbers are decimal (``1234``, ``-1``), data is
    written in hex (``0xabcd``) and ``<name>`` inserts the value called *name* from *values*.
    An escape may also hold a sum of integers, e.g. ``<1 + 1>``.

    :param source: the script source
    :type source: string
    :param values: values that escapes refer to, by name
    :type values: dict
    :param logging_level: the print logging level
    :type logging_level: DEBUG, INFO, WARNING, ERROR, or CRITICAL
    '''

    def __init__(self, source, values=None, logging_level=WARNING):
        self.source = source
        self.values = values if values is not None else {}
        self.logging_level = logging_level
        self.offset = 0
        self.line = 1
        self.column = 1

    def parse(self):
        tokens = []

        while True:
            self.__skip_whitespace()
            if self.offset >= len(self.source):
                break

            position = (self.line, self.column)
            c = self.source[self.offset]

            if c in IDENTIFIER_START:
                tokens.append(Opcode(self.__read_word(), position=position))
            elif c in string.digits:
                tokens.append(self.__parse_data(position))
            elif c == '-':
                tokens.append(self.__parse_negative_int(position))
            elif c == '<':
                tokens.append(self.__parse_escape(position))
            else:
                raise ScriptSyntaxError('unexpected token', position=position)

        if self.logging_level <= DEBUG:
            print('[PARSER] read {} tokens'.format(len(tokens)))

        return tokens

    def __advance(self, count):
        for c in self.source[self.offset:self.offset+count]:
            if c == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.offset += count

    def __skip_whitespace(self):
        while self.offset < len(self.source) and self.source[self.offset].isspace():
            self.__advance(1)

    def __read_word(self):
        m = WORD.match(self.source, self.offset)
        word = m.group(0)
        self.__advance(len(word))
        return word

    def __parse_data(self, position):
        word = self.__read_word()
        if word.startswith('0x'):
            return HexLiteral(self.__decode_hex(word[2:], position), position=position)
        return IntegerLiteral(self.__decode_int(word, position), position=position)

    def __decode_hex(self, digits, position):
        if len(digits) == 0:
            raise ScriptSyntaxError('invalid hex literal (no digits)', position=position)
        if len(digits) % 2 != 0:
            raise ScriptSyntaxError('invalid hex literal (Odd number of digits)', position=position)
        for i, c in enumerate(digits):
            if c not in string.hexdigits:
                raise ScriptSyntaxError("invalid hex literal (Invalid character '{}' at position {})".format(c, i), position=position)
        return hexstring_to_bytes(digits, reverse=False)

    def __decode_int(self, word, position, negative=False):
        if any(c not in string.digits for c in word):
            raise ScriptSyntaxError('invalid number literal (invalid digit found in string)', position=position)
        n = -int(word) if negative else int(word)
        if not (INT64_MIN <= n <= INT64_MAX):
            raise ScriptSyntaxError('invalid number literal (number too large to fit in target type)', position=position)
        return n

    def __parse_negative_int(self, position):
        self.__advance(1)
        self.__skip_whitespace()
        if self.offset >= len(self.source) or self.source[self.offset] not in string.digits:
            raise ScriptSyntaxError('expected negative sign to be followed by number literal', position=position)
        word = self.__read_word()
        return IntegerLiteral(self.__decode_int(word, position, negative=True), position=position)

    def __parse_escape(self, position):
        end = self.source.find('>', self.offset)
        if end < 0:
            raise ScriptSyntaxError('unterminated escape', position=position)

        expression = self.source[self.offset+1:end].strip()
        self.__advance(end + 1 - self.offset)

        if len(expression) == 0:
            raise ScriptSyntaxError('empty escape', position=position)

        if expression in self.values:
            return DynamicValue(self.__resolve(self.values[expression]), position=position)

        if INTEGER_EXPRESSION.match(expression):
            n = sum(int(sign + digits) for sign, digits in INTEGER_TERM.findall(expression))
            return DynamicValue(n, position=position)

        if expression[0] in IDENTIFIER_START and WORD.fullmatch(expression):
            raise ScriptSyntaxError('unknown value "{}"'.format(expression), position=position)

        raise ScriptSyntaxError('unsupported escape "{}"'.format(expression), position=position)

    @staticmethod
    def __resolve(value):
        '''lists of byte values are pushed as data'''
        if isinstance(value, (list, tuple)) and all(isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 0xff for v in value):
            return bytes(value)
        return value

def parse(source, values=None, logging_level=WARNING):
    return Parser(source, values=values, logging_level=logging_level).parse()
