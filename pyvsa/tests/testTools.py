import ipaddress
import struct
import unittest

from netaddr import AddrFormatError
from netaddr import IPAddress

from pyvsa import tools
from pyvsa.vsa import Format
from pyvsa.vsa import InvalidAddressFamilyError
from pyvsa.vsa import NullValueError
from pyvsa.vsa import TypeCodeError
from pyvsa.vsa import ValueTooLargeError


class EncodingTests(unittest.TestCase):

    def testStringEncoding(self):
        self.assertEqual(tools.encode_string('1234567890'), b'1234567890')
        self.assertEqual(tools.encode_string(b'1234567890'), b'1234567890')

    def testUnicodeStringEncoding(self):
        self.assertEqual(tools.encode_string('grüße'),
                         b'gr\xc3\xbc\xc3\x9fe')

    def testStringLengthIsNotLimited(self):
        self.assertEqual(len(tools.encode_string('x' * 300)), 300)

    def testInvalidStringEncodingRaisesTypeError(self):
        self.assertRaises(TypeError, tools.encode_string, 1)

    def testNullStringRaisesNullValueError(self):
        self.assertRaises(NullValueError, tools.encode_string, None)

    def testOctetsEncoding(self):
        self.assertEqual(tools.encode_octets(b'\x00\x01\xff'), b'\x00\x01\xff')
        self.assertEqual(tools.encode_octets(bytearray(b'\x01')), b'\x01')
        self.assertEqual(tools.encode_octets('0x01020304'),
                         b'\x01\x02\x03\x04')

    def testInvalidOctetsEncoding(self):
        self.assertRaises(TypeError, tools.encode_octets, 'plain text')
        self.assertRaises(TypeError, tools.encode_octets, 42)
        self.assertRaises(ValueError, tools.encode_octets, '0xZZ')

    def testNullOctetsRaisesNullValueError(self):
        self.assertRaises(NullValueError, tools.encode_octets, None)

    def testAddressEncoding(self):
        self.assertRaises(AddrFormatError, tools.encode_address, 'TEST123')
        self.assertEqual(tools.encode_address('192.168.0.255'),
                         b'\xc0\xa8\x00\xff')

    def testAddressObjects(self):
        self.assertEqual(tools.encode_address(IPAddress('10.0.0.1')),
                         b'\x0a\x00\x00\x01')
        self.assertEqual(
            tools.encode_address(ipaddress.IPv4Address('10.0.0.1')),
            b'\x0a\x00\x00\x01')

    def testInvalidAddressEncodingRaisesTypeError(self):
        self.assertRaises(TypeError, tools.encode_address, 1)

    def testIpv6AddressRejectedAsIpv4(self):
        self.assertRaises(InvalidAddressFamilyError,
                          tools.encode_address, '2001:db8::1')
        self.assertRaises(InvalidAddressFamilyError,
                          tools.encode_address,
                          ipaddress.IPv6Address('2001:db8::1'))

    def testNullAddressRaisesNullValueError(self):
        self.assertRaises(NullValueError, tools.encode_address, None)

    def testIpv6AddressEncoding(self):
        self.assertEqual(tools.encode_ipv6_address('2001:db8::1'),
                         b'\x20\x01\x0d\xb8' + b'\x00' * 11 + b'\x01')
        self.assertRaises(InvalidAddressFamilyError,
                          tools.encode_ipv6_address, '10.0.0.1')
        self.assertRaises(NullValueError, tools.encode_ipv6_address, None)

    def testIntegerEncoding(self):
        self.assertEqual(tools.encode_integer(0x01020304),
                         b'\x01\x02\x03\x04')

    def testUnsignedIntegerEncoding(self):
        self.assertEqual(tools.encode_integer(0xFFFFFFFF),
                         b'\xff\xff\xff\xff')

    def testSignedIntegerEncoding(self):
        self.assertEqual(tools.encode_integer(-1), b'\xff\xff\xff\xff')
        self.assertEqual(tools.encode_integer(-2147483648),
                         b'\x80\x00\x00\x00')

    def testIntegerRoundTrip(self):
        for num in (0, 1, -1, 2147483647, -2147483648):
            self.assertEqual(
                struct.unpack('!i', tools.encode_integer(num))[0], num)

    def testIntegerOutOfRange(self):
        self.assertRaises(ValueError, tools.encode_integer, 0x100000000)
        self.assertRaises(ValueError, tools.encode_integer, -2147483649)

    def testInvalidIntegerEncodingRaisesTypeError(self):
        self.assertRaises(TypeError, tools.encode_integer, 'ONE')

    def testNullInteger(self):
        self.assertRaises(NullValueError, tools.encode_integer, None)

    def testShortAndByteEncoding(self):
        self.assertEqual(tools.encode_short(0x0102), b'\x01\x02')
        self.assertEqual(tools.encode_byte(7), b'\x07')
        self.assertRaises(ValueError, tools.encode_byte, 256)
        self.assertRaises(ValueError, tools.encode_short, -1)

    def testDateEncoding(self):
        self.assertEqual(tools.encode_date(0x01020304), b'\x01\x02\x03\x04')

    def testInvalidDataEncodingRaisesTypeError(self):
        self.assertRaises(TypeError, tools.encode_date, '1')

    def testTlvEncoding(self):
        self.assertEqual(tools.encode_tlv(b'\x01\x03x'), b'\x01\x03x')
        self.assertEqual(tools.encode_tlv({1: b'ab', 2: [b'c', b'd']}),
                         b'\x01\x04ab\x02\x03c\x02\x03d')

    def testTlvErrors(self):
        self.assertRaises(NullValueError, tools.encode_tlv, None)
        self.assertRaises(TypeError, tools.encode_tlv, 42)
        self.assertRaises(ValueTooLargeError, tools.encode_tlv,
                          {1: b'x' * 254})
        self.assertRaises(TypeCodeError, tools.encode_tlv, {256: b'x'})

    def testUnknownTypeEncoding(self):
        self.assertRaises(ValueError, tools.encode_value, 'unknown', None)

    def testEncodeFunction(self):
        self.assertEqual(tools.encode_value('string', 'string'), b'string')
        self.assertEqual(tools.encode_value('octets', b'string'), b'string')
        self.assertEqual(tools.encode_value('ipaddr', '192.168.0.255'),
                         b'\xc0\xa8\x00\xff')
        self.assertEqual(tools.encode_value('integer', 0x01020304),
                         b'\x01\x02\x03\x04')
        self.assertEqual(tools.encode_value('signed', -2),
                         b'\xff\xff\xff\xfe')
        self.assertEqual(tools.encode_value('date', 0x01020304),
                         b'\x01\x02\x03\x04')


class AttributeHelperTests(unittest.TestCase):

    def testIntegerAttribute(self):
        self.assertEqual(tools.integer_attribute(311, 7, 2),
                         b'\x07\x06\x00\x00\x00\x02')

    def testIntegerAttributeType4Len0(self):
        self.assertEqual(
            tools.integer_attribute(429, 0x9050, 1, Format.TYPE4LEN0),
            b'\x00\x00\x90\x50\x00\x00\x00\x01')

    def testNegativeIntegerAttribute(self):
        encoded = tools.integer_attribute(9, 1, -1)
        self.assertEqual(struct.unpack('!i', encoded[-4:])[0], -1)

    def testStringAttribute(self):
        self.assertEqual(tools.string_attribute(9, 1, 'shell:priv-lvl=15'),
                         b'\x01\x13shell:priv-lvl=15')
        self.assertRaises(NullValueError, tools.string_attribute, 9, 1, None)
        self.assertRaises(ValueTooLargeError, tools.string_attribute,
                          9, 1, 'x' * 254)

    def testLongStringAttributeType4Len0(self):
        encoded = tools.string_attribute(429, 0x9051, 'x' * 300,
                                         Format.TYPE4LEN0)
        self.assertEqual(len(encoded), 304)

    def testOctetsAttribute(self):
        self.assertEqual(tools.octets_attribute(311, 16, b'\x01\x02'),
                         b'\x10\x04\x01\x02')
        self.assertRaises(NullValueError, tools.octets_attribute,
                          311, 16, None)

    def testAddressAttribute(self):
        self.assertEqual(tools.address_attribute(311, 28, '10.0.0.53'),
                         b'\x1c\x06\x0a\x00\x00\x35')
        self.assertRaises(InvalidAddressFamilyError, tools.address_attribute,
                          311, 28, '::1')
        self.assertRaises(NullValueError, tools.address_attribute,
                          311, 28, None)

    def testIpv6AddressAttribute(self):
        encoded = tools.ipv6_address_attribute(10415, 16, '2001:db8::1')
        self.assertEqual(encoded[:2], b'\x10\x12')
        self.assertEqual(len(encoded), 18)

    def testTlvAttribute(self):
        self.assertEqual(
            tools.tlv_attribute(24757, 1, {1: b'1.0'},
                                Format.TYPE1LEN1_CONTINUATION),
            b'\x01\x08\x00\x01\x051.0')
