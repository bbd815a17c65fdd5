import contextlib
import io
import time
import unittest

from pybtcscript import *

COMPRESSED = '0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798'

class TestAssemble(unittest.TestCase):
    def setUp(self):
        self.assembler = Assembler()

    def test_empty(self):
        self.assertEqual(self.assembler.assemble([]), b'')

    def test_opcodes(self):
        self.assertEqual(self.assembler.assemble([Opcode('OP_CHECKSIG'), Opcode('OP_VERIFY')]), bytes([0xac, 0x69]))

    def test_small_integer(self):
        self.assertEqual(self.assembler.assemble([IntegerLiteral(2)]), bytes([0x52]))

    def test_integer(self):
        self.assertEqual(self.assembler.assemble([IntegerLiteral(255)]), bytes([0x02, 0xff, 0x00]))

    def test_negative_integer(self):
        self.assertEqual(self.assembler.assemble([IntegerLiteral(-456)]), bytes([0x02, 0xc8, 0x81]))

    def test_hex(self):
        data = bytes(range(15))
        self.assertEqual(self.assembler.assemble([HexLiteral(data)]), bytes([0x0f]) + data)

    def test_dynamic_values(self):
        pubkey = PublicKey.from_hex(COMPRESSED)
        tokens = [DynamicValue(7), DynamicValue(b'\xaa\xbb'), DynamicValue(pubkey), Opcode('OP_CHECKSIG')]
        self.assertEqual(self.assembler.assemble(tokens), bytes([0x57, 0x02, 0xaa, 0xbb, 0x21]) + pubkey.serialize() + bytes([0xac]))

    def test_p2pkh(self):
        tokens = [Opcode('OP_DUP'), Opcode('OP_HASH160'), HexLiteral(b'\x11' * 20), Opcode('OP_EQUALVERIFY'), Opcode('OP_CHECKSIG')]
        self.assertEqual(self.assembler.assemble(tokens).hex(), '76a914' + '11' * 20 + '88ac')

    def test_generator_input(self):
        tokens = (IntegerLiteral(n) for n in (1, 2, 3))
        self.assertEqual(self.assembler.assemble(tokens), bytes([0x51, 0x52, 0x53]))

    def test_deterministic(self):
        tokens = [IntegerLiteral(1000), Opcode('OP_IF'), HexLiteral(b'\x01'), Opcode('OP_ENDIF')]
        self.assertEqual(self.assembler.assemble(tokens), self.assembler.assemble(tokens))

    def test_not_minimal_ints(self):
        assembler = Assembler(minimal_ints=False)
        tokens = [IntegerLiteral(2), IntegerLiteral(-1), IntegerLiteral(0), DynamicValue(16)]
        self.assertEqual(assembler.assemble(tokens), bytes([0x01, 0x02, 0x01, 0x81, 0x00, 0x01, 0x10]))

class TestErrors(unittest.TestCase):
    def setUp(self):
        self.assembler = Assembler()

    def test_unknown_opcode(self):
        with self.assertRaises(UnknownOpcode) as cm:
            self.assembler.assemble([Opcode('OP_CHECKSIG'), Opcode('OP_NOPE', position=(1, 13))])
        self.assertEqual(cm.exception.name, 'OP_NOPE')
        self.assertEqual(cm.exception.position, (1, 13))

    def test_unsupported_value_caught_before_assembly(self):
        # the unknown opcode comes first, but values are checked before anything is assembled
        tokens = [Opcode('OP_NOPE'), DynamicValue(3.5, position=(2, 1))]
        with self.assertRaises(UnsupportedValueType) as cm:
            self.assembler.assemble(tokens)
        self.assertEqual(cm.exception.position, (2, 1))

    def test_bool_value(self):
        self.assertRaises(UnsupportedValueType, self.assembler.assemble, [DynamicValue(True)])

    def test_not_a_token(self):
        self.assertRaises(UnsupportedValueType, self.assembler.assemble, [Opcode('OP_DUP'), 'OP_DUP'])

    def test_invalid_key(self):
        pubkey = PublicKey.from_hex(COMPRESSED)
        pubkey.pubkey = pubkey.pubkey + b'\x00'
        with self.assertRaises(InvalidKeyEncoding) as cm:
            self.assembler.assemble([DynamicValue(pubkey, position=(4, 2))])
        self.assertEqual(cm.exception.length, 34)
        self.assertEqual(cm.exception.position, (4, 2))

    def test_hex_literal_payload_checked_before_assembly(self):
        token = HexLiteral(b'', position=(3, 1))
        object.__setattr__(token, 'value', 15)
        with self.assertRaises(UnsupportedValueType) as cm:
            self.assembler.assemble([Opcode('OP_NOPE'), token])
        self.assertEqual(cm.exception.position, (3, 1))

    def test_integer_literal_payload_checked_before_assembly(self):
        token = IntegerLiteral(0)
        object.__setattr__(token, 'value', b'\x01')
        self.assertRaises(UnsupportedValueType, self.assembler.assemble, [Opcode('OP_NOPE'), token])
        self.assertRaises(IntegerOutOfRange, self.assembler.assemble, [Opcode('OP_NOPE'), IntegerLiteral(1 << 64)])

    def test_integer_out_of_range(self):
        with self.assertRaises(IntegerOutOfRange) as cm:
            self.assembler.assemble([IntegerLiteral(1 << 64, position=(1, 1))])
        self.assertEqual(cm.exception.position, (1, 1))

class TestBranches(unittest.TestCase):
    def setUp(self):
        self.assembler = Assembler()

    def test_if_endif(self):
        self.assertEqual(self.assembler.assemble([Opcode('OP_IF'), Opcode('OP_ENDIF')]), bytes([0x63, 0x68]))

    def test_if_else_endif(self):
        tokens = [Opcode('OP_NOTIF'), IntegerLiteral(1), Opcode('OP_ELSE'), IntegerLiteral(2), Opcode('OP_ENDIF')]
        self.assertEqual(self.assembler.assemble(tokens), bytes([0x64, 0x51, 0x67, 0x52, 0x68]))

    def test_nested(self):
        tokens = [Opcode('OP_IF'), Opcode('OP_IF'), Opcode('OP_ELSE'), Opcode('OP_ENDIF'), Opcode('OP_ELSE'), Opcode('OP_ENDIF')]
        self.assertEqual(self.assembler.assemble(tokens), bytes([0x63, 0x63, 0x67, 0x68, 0x67, 0x68]))

    def test_multiple_else(self):
        tokens = [Opcode('OP_IF'), Opcode('OP_ELSE'), Opcode('OP_ELSE'), Opcode('OP_ENDIF')]
        self.assertEqual(self.assembler.assemble(tokens), bytes([0x63, 0x67, 0x67, 0x68]))

    def test_branch_markers(self):
        tokens = [BranchMarker(BranchMarker.IF), BranchMarker(BranchMarker.ELSE), BranchMarker(BranchMarker.ENDIF)]
        self.assertEqual(self.assembler.assemble(tokens), bytes([0x63, 0x67, 0x68]))

    def test_unterminated_if(self):
        with self.assertRaises(UnbalancedBranch) as cm:
            self.assembler.assemble([Opcode('OP_IF', position=(1, 1))])
        self.assertEqual(cm.exception.position, (1, 1))

    def test_if_else_without_endif(self):
        self.assertRaises(UnbalancedBranch, self.assembler.assemble, [Opcode('OP_IF'), Opcode('OP_ELSE')])

    def test_bare_endif(self):
        self.assertRaises(UnbalancedBranch, self.assembler.assemble, [Opcode('OP_ENDIF')])

    def test_bare_else(self):
        self.assertRaises(UnbalancedBranch, self.assembler.assemble, [BranchMarker(BranchMarker.ELSE)])

    def test_extra_endif(self):
        tokens = [Opcode('OP_IF'), Opcode('OP_ENDIF'), Opcode('OP_ENDIF', position=(1, 20))]
        with self.assertRaises(UnbalancedBranch) as cm:
            self.assembler.assemble(tokens)
        self.assertEqual(cm.exception.position, (1, 20))

    def test_independent_invocations(self):
        self.assertRaises(UnbalancedBranch, self.assembler.assemble, [Opcode('OP_IF')])
        self.assertEqual(self.assembler.assemble([Opcode('OP_NOP')]), bytes([0x61]))
        self.assertRaises(UnbalancedBranch, self.assembler.assemble, [Opcode('OP_ENDIF')])

class TestLogging(unittest.TestCase):
    def assemble(self, tokens, **kwargs):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            Assembler(**kwargs).assemble(tokens)
        return out.getvalue()

    def test_quiet_by_default(self):
        self.assertEqual(self.assemble([Opcode('OP_DUP')]), '')

    def test_debug(self):
        output = self.assemble([Opcode('OP_DUP')], logging_level=DEBUG)
        self.assertIn('[ASSEMBLER] assembling 1 tokens', output)
        self.assertIn('[ASSEMBLER] assembled 1 bytes', output)

    def test_large_element_warning(self):
        output = self.assemble([HexLiteral(bytes(521), position=(1, 1))])
        self.assertIn('[ASSEMBLER] push of 521 bytes at line 1, column 1 is over the 520 byte element limit', output)

    def test_large_element_silenced(self):
        self.assertEqual(self.assemble([DynamicValue(bytes(521))], logging_level=ERROR), '')

    def test_too_many_opcodes_warning(self):
        output = self.assemble([Opcode('OP_NOP')] * 202)
        self.assertIn('over the 201 opcode limit', output)

    def test_push_numbers_are_not_counted(self):
        self.assertEqual(self.assemble([IntegerLiteral(1)] * 202), '')

    def test_script_size_warning(self):
        output = self.assemble([HexLiteral(bytes(10000))], logging_level=WARNING)
        self.assertIn('over the 10000 byte limit', output)

class TestAssemblyTime(unittest.TestCase):
    def best_time(self, tokens):
        assembler = Assembler(logging_level=ERROR)
        best = None
        for _ in range(3):
            start = time.perf_counter()
            assembler.assemble(tokens)
            elapsed = time.perf_counter() - start
            best = elapsed if best is None else min(best, elapsed)
        return best

    def test_linear_in_tokens_and_payload(self):
        small = [HexLiteral(bytes(200)), Opcode('OP_DROP'), IntegerLiteral(1000)] * 2000
        large = small * 8
        small_time = self.best_time(small)
        large_time = self.best_time(large)
        self.assertLess(large_time, 16 * max(small_time, 0.001))

    def test_multi_megabyte_script(self):
        tokens = [HexLiteral(bytes(1000))] * 5000
        start = time.perf_counter()
        program = Assembler(logging_level=ERROR).assemble(tokens)
        self.assertLess(time.perf_counter() - start, 5.0)
        self.assertEqual(len(program), 5000 * 1003)
