import pybtcscript

def main():
    keys = [
        pybtcscript.PublicKey.from_hex('0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798'),
        pybtcscript.PublicKey.from_hex('02c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5'),
        pybtcscript.PublicKey.from_hex('02f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9'),
    ]

    # 2-of-3 multisig, spendable by the first key alone after block 800000
    program = pybtcscript.bitcoin_script('''
        OP_IF
            <2> <k1> <k2> <k3> <3> OP_CHECKMULTISIG
        OP_ELSE
            <locktime> OP_CHECKLOCKTIMEVERIFY OP_DROP
            <k1> OP_CHECKSIG
        OP_ENDIF
    ''', k1=keys[0], k2=keys[1], k3=keys[2], locktime=800000)

    print('redeem script:  {}'.format(pybtcscript.bytes_to_hexstring(program, reverse=False)))
    print('witness script: {}'.format(pybtcscript.bytes_to_hexstring(pybtcscript.Bitcoin.sha256(program), reverse=False)))

if __name__ == "__main__":
    main()
