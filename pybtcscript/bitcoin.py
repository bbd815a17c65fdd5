import hashlib

class Bitcoin:
    NAME                    = 'Bitcoin'

    # Consensus limits. The assembler only warns about these, it never enforces them.
    MAX_SCRIPT_SIZE         = 10000
    MAX_SCRIPT_ELEMENT_SIZE = 520
    MAX_OPS_PER_SCRIPT      = 201

    # Accepted public key encodings (compressed, uncompressed)
    PUBLIC_KEY_SIZES        = (33, 65)

    @staticmethod
    def sha256(data):
        '''single SHA-256, as committed to by a P2WSH witness program'''
        hasher = hashlib.sha256()
        hasher.update(data)
        return hasher.digest()
