#!/usr/bin/python
from pyvsa.dictionary import default_dictionary
import binascii
import logging

logging.basicConfig(level=logging.DEBUG)

dictionary = default_dictionary()

release = dictionary.create("WiMAX-Release", "1.0")
print("WiMAX-Release: " + binascii.hexlify(release.encode(), " ").decode())

capability = dictionary.create("WiMAX-Capability", b"\x01\x051.0")
print("WiMAX-Capability: " + binascii.hexlify(capability.pack(), " ").decode())
