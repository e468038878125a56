#!/usr/bin/python
from pyvsa import tools
from pyvsa import vsa
from pyvsa.vsa import Format
import binascii

USR = 429
CONNECT_TERM_REASON = 0x9050

# USR sub-attributes have a 4 octet type and no length field, so every
# one of them needs its own Vendor-Specific attribute.
reason = tools.integer_attribute(USR, CONNECT_TERM_REASON, 1, Format.TYPE4LEN0)
print("USR-Connect-Term-Reason: " + binascii.hexlify(reason, " ").decode())

attr = vsa.VendorSpecificAttribute(USR, CONNECT_TERM_REASON,
                                   tools.encode_integer(1), Format.TYPE4LEN0)
print("Vendor-Specific: " + binascii.hexlify(attr.pack(), " ").decode())

try:
    vsa.pack([attr, attr])
except ValueError as error:
    print("Refused to pack: %s" % error)
