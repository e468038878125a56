#!/usr/bin/python
from pyvsa import vsa
from pyvsa.dictionary import default_dictionary
import binascii
import sys

dictionary = default_dictionary()

if len(sys.argv) > 1:
    policy = sys.argv[1]
else:
    policy = "Encryption-Required"

attributes = [
    dictionary.create("MS-MPPE-Encryption-Policy", policy),
    dictionary.create("MS-MPPE-Encryption-Type", "RC4-128bit-Allowed"),
]

for attr in attributes:
    print("%s: %s" % (dictionary[(attr.vendor_id, attr.type_code)].name,
                      binascii.hexlify(attr.encode(), " ").decode()))

try:
    packed = vsa.pack(attributes)
except vsa.EncodeError as error:
    print("Can not encode attribute: %s" % error)
    sys.exit(1)

print("Vendor-Specific: " + binascii.hexlify(packed, " ").decode())
