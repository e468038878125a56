# tools.py
#
# Value encoders for vendor sub-attributes
import binascii
import ipaddress
import struct

from netaddr import IPAddress

from pyvsa import vsa
from pyvsa.vsa import Format
from pyvsa.vsa import InvalidAddressFamilyError
from pyvsa.vsa import NullValueError
from pyvsa.vsa import TypeCodeError
from pyvsa.vsa import ValueTooLargeError


def _require(value, what):
    if value is None:
        raise NullValueError('Can not encode None as %s' % what)


def encode_string(value):
    _require(value, 'string')
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise TypeError('Can not encode non-string as string')
    return value.encode('utf-8')


def encode_octets(value):
    _require(value, 'octets')
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str) and value.startswith('0x'):
        try:
            return binascii.unhexlify(value[2:])
        except (binascii.Error, ValueError) as exc:
            raise ValueError('Invalid hex string for octets') from exc
    raise TypeError('Can not encode %s as octets' % type(value).__name__)


def _ip_address(addr, what):
    _require(addr, what)
    if isinstance(addr, IPAddress):
        return addr
    if isinstance(addr, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return IPAddress(str(addr))
    if not isinstance(addr, str):
        raise TypeError('Address has to be a string')
    return IPAddress(addr)


def encode_address(addr):
    ip = _ip_address(addr, 'IPv4 address')
    if ip.version != 4:
        raise InvalidAddressFamilyError(
            'Expected an IPv4 address, got IPv%d address %s' % (ip.version, ip))
    return ip.packed


def encode_ipv6_address(addr):
    ip = _ip_address(addr, 'IPv6 address')
    if ip.version != 6:
        raise InvalidAddressFamilyError(
            'Expected an IPv6 address, got IPv%d address %s' % (ip.version, ip))
    return ip.packed


def _encode_number(num, fmt, low, high, what):
    _require(num, what)
    try:
        num = int(num)
    except (TypeError, ValueError) as exc:
        raise TypeError('Can not encode non-integer as %s' % what) from exc
    if not low <= num <= high:
        raise ValueError('%d out of range for %s' % (num, what))
    if num < 0:
        fmt = fmt.lower()
    return struct.pack(fmt, num)


def encode_integer(num):
    """Encode a 32 bit integer.

    Both signed and unsigned values are accepted, negative numbers are
    sent in two's complement.
    """
    return _encode_number(num, '!I', -0x80000000, 0xFFFFFFFF, 'integer')


def encode_short(num):
    return _encode_number(num, '!H', 0, 0xFFFF, 'short')


def encode_byte(num):
    return _encode_number(num, '!B', 0, 0xFF, 'byte')


def encode_date(num):
    _require(num, 'date')
    if not isinstance(num, int):
        raise TypeError('Can not encode non-integer as date')
    return _encode_number(num, '!I', 0, 0xFFFFFFFF, 'date')


def encode_tlv(tlv):
    """Encode a compound value.

    :param tlv: pre-assembled octets, or a mapping of sub-attribute type
                to octets (or a list of octets for repeated types)
    :type tlv:  bytes or dict
    :return:    encoded sub-attributes
    :rtype:     bytes
    """
    _require(tlv, 'tlv')
    if isinstance(tlv, (bytes, bytearray, memoryview)):
        return bytes(tlv)
    if not hasattr(tlv, 'items'):
        raise TypeError('Can not encode %s as tlv' % type(tlv).__name__)

    encoding = b''
    for key, values in tlv.items():
        if not isinstance(key, int) or not 0 <= key <= 255:
            raise TypeCodeError('TLV sub-attribute type %r out of range'
                                % (key,))
        if not isinstance(values, (list, tuple)):
            values = [values]
        for value in values:
            value = encode_octets(value)
            if len(value) + 2 > 255:
                raise ValueTooLargeError('TLV sub-attribute %d too long' % key)
            encoding += struct.pack('!BB', key, len(value) + 2) + value
    return encoding


ENCODERS = {
    'string': encode_string,
    'octets': encode_octets,
    'integer': encode_integer,
    'signed': encode_integer,
    'short': encode_short,
    'byte': encode_byte,
    'date': encode_date,
    'ipaddr': encode_address,
    'ipv6addr': encode_ipv6_address,
    'tlv': encode_tlv,
}


def encode_value(datatype, value):
    try:
        encoder = ENCODERS[datatype]
    except KeyError:
        raise ValueError('Unknown attribute type %s' % datatype)
    return encoder(value)


def integer_attribute(vendor_id, type_code, value, fmt=Format.STANDARD):
    return vsa.encode(vendor_id, type_code, encode_integer(value), fmt)


def string_attribute(vendor_id, type_code, value, fmt=Format.STANDARD):
    return vsa.encode(vendor_id, type_code, encode_string(value), fmt)


def octets_attribute(vendor_id, type_code, value, fmt=Format.STANDARD):
    return vsa.encode(vendor_id, type_code, encode_octets(value), fmt)


def address_attribute(vendor_id, type_code, value, fmt=Format.STANDARD):
    return vsa.encode(vendor_id, type_code, encode_address(value), fmt)


def ipv6_address_attribute(vendor_id, type_code, value, fmt=Format.STANDARD):
    return vsa.encode(vendor_id, type_code, encode_ipv6_address(value), fmt)


def tlv_attribute(vendor_id, type_code, value, fmt=Format.STANDARD):
    return vsa.encode(vendor_id, type_code, encode_tlv(value), fmt)
