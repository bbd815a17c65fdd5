DEBUG = 0
INFO = 1
WARNING = 2
ERROR = 3
CRITICAL = 4

class ScriptError(Exception):
    '''Base class for every error raised while parsing or assembling a script.

    :param position: where the offending token starts in the source, if known
    :type position: tuple (line, column) or None
    '''
    def __init__(self, message, position=None):
        Exception.__init__(self, message)
        self.message = message
        self.position = position

    def __str__(self):
        if self.position is None:
            return self.message
        return '{} at line {}, column {}'.format(self.message, self.position[0], self.position[1])


def bytes_to_hexstring(data, reverse=True):
    if reverse:
        return ''.join(reversed(['{:02x}'.format(v) for v in data]))
    else:
        return ''.join(['{:02x}'.format(v) for v in data])

def hexstring_to_bytes(s, reverse=True):
    if len(s) % 2 != 0:
        raise ValueError("Odd number of digits")
    if reverse:
        return bytes(reversed([int(s[x:x+2], 16) for x in range(0, len(s), 2)]))
    else:
        return bytes([int(s[x:x+2], 16) for x in range(0, len(s), 2)])

