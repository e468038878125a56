# vsa.py
#
# Vendor-Specific Attributes as defined in RFC 2865 section 5.26

"""
A Vendor-Specific Attribute (attribute 26) carries a 4 octet vendor id
followed by one or more vendor sub-attributes. RFC 2865 recommends a
sub-attribute layout of one octet type, one octet length and the value,
but vendors are free to pick their own. The layouts in use are described
by :obj:`Format`, named after the FreeRADIUS ``format=`` vendor option.

Encoding happens in two steps. :func:`encode` turns a single
sub-attribute into bytes, :func:`pack` wraps one or more encoded
sub-attributes of the same vendor into a complete attribute 26::

  from pyvsa import vsa

  sub = vsa.encode(311, 7, b'\\x00\\x00\\x00\\x02')
  attr = vsa.VendorSpecificAttribute(311, 7, b'\\x00\\x00\\x00\\x02').pack()
"""
from collections import namedtuple
import enum
import logging
import struct

__docformat__ = 'epytext en'

logger = logging.getLogger('pyvsa')

# RADIUS attribute type of the Vendor-Specific container
VENDOR_SPECIFIC = 26

# Largest value a RADIUS attribute length octet can hold
MAX_ATTRIBUTE_LENGTH = 255

# [26][length][vendor-id]
HEADER_LENGTH = 6

_UINT = {1: '!B', 2: '!H', 4: '!L'}


class EncodeError(Exception):
    """Base class for all Vendor-Specific Attribute encoding errors."""


class NullValueError(EncodeError, TypeError):
    """A required value was None."""


class InvalidAddressFamilyError(EncodeError, ValueError):
    """An address was not of the family the attribute expects."""


class ValueTooLargeError(EncodeError, ValueError):
    """A value does not fit the length field that has to describe it."""


class TypeCodeError(EncodeError, ValueError):
    """A vendor type code does not fit the type field of its format."""


class Format(enum.Enum):
    """Wire layout of a vendor sub-attribute.

    The value of each member is a ``(type octets, length octets,
    continuation)`` tuple.
    """
    STANDARD = (1, 1, False)
    TYPE1LEN1 = (1, 1, False)
    TYPE1LEN0 = (1, 0, False)
    TYPE2LEN1 = (2, 1, False)
    TYPE2LEN0 = (2, 0, False)
    TYPE2LEN2 = (2, 2, False)
    TYPE4LEN0 = (4, 0, False)
    TYPE4LEN1 = (4, 1, False)
    TYPE4LEN2 = (4, 2, False)
    TYPE1LEN1_CONTINUATION = (1, 1, True)

    @property
    def type_size(self):
        return self.value[0]

    @property
    def length_size(self):
        return self.value[1]

    @property
    def continuation(self):
        return self.value[2]

    @property
    def header_size(self):
        """Number of octets in front of the value."""
        return self.type_size + self.length_size + int(self.continuation)

    @property
    def max_type(self):
        return (1 << (8 * self.type_size)) - 1

    @property
    def max_length(self):
        """Largest total sub-attribute length, or None without a length field."""
        if not self.length_size:
            return None
        return (1 << (8 * self.length_size)) - 1

    @classmethod
    def parse(cls, spec):
        """Look up a format by its dictionary notation.

        :param spec: ``t,l`` or ``t,l,c`` as used in ``VENDOR ... format=``
        :type spec:  string
        :return:     matching format
        :rtype:      Format
        """
        parts = [p.strip() for p in spec.split(',')]
        continuation = False
        if len(parts) == 3 and parts[2] == 'c':
            continuation = True
            parts = parts[:2]
        if len(parts) != 2:
            raise ValueError('Invalid vendor format %r' % spec)
        try:
            key = (int(parts[0]), int(parts[1]), continuation)
        except ValueError:
            raise ValueError('Invalid vendor format %r' % spec)
        try:
            return cls(key)
        except ValueError:
            raise ValueError('Unsupported vendor format %r' % spec)

    def __str__(self):
        spec = '%d,%d' % (self.type_size, self.length_size)
        if self.continuation:
            spec += ',c'
        return spec


_Fields = namedtuple('VendorSpecificAttribute',
                     'vendor_id type_code value format continuation')


class VendorSpecificAttribute(_Fields):
    """A single vendor sub-attribute together with its vendor.

    Instances are immutable and validated on construction, so a
    VendorSpecificAttribute that exists can always be encoded.

    :ivar vendor_id:    IANA private enterprise number of the vendor
    :type vendor_id:    integer (32 bits)
    :ivar type_code:    vendor sub-attribute type
    :type type_code:    integer, width depends on format
    :ivar value:        raw value octets
    :type value:        bytes
    :ivar format:       sub-attribute wire layout
    :type format:       Format
    :ivar continuation: RFC 6929 flags octet, only used by
                        ``Format.TYPE1LEN1_CONTINUATION``
    :type continuation: integer (8 bits)
    """
    __slots__ = ()

    def __new__(cls, vendor_id, type_code, value, format=Format.STANDARD,
                continuation=0):
        if value is None:
            raise NullValueError('Vendor-Specific value can not be None')
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError('Vendor-Specific value has to be bytes, got %s'
                            % type(value).__name__)
        if not isinstance(format, Format):
            raise TypeError('Unknown vendor format %r' % (format,))
        if not 0 <= vendor_id <= 0xFFFFFFFF:
            raise ValueError('Vendor id %d out of range' % vendor_id)
        if not 0 <= type_code <= format.max_type:
            raise TypeCodeError(
                'Type %d does not fit the %d octet type field of format %s'
                % (type_code, format.type_size, format))

        value = bytes(value)
        if format.max_length is not None:
            length = format.header_size + len(value)
            if length > format.max_length:
                raise ValueTooLargeError(
                    'Can only encode values of <= %d octets with format %s'
                    % (format.max_length - format.header_size, format))

        if format.continuation:
            if not 0 <= continuation <= 0xFF:
                raise ValueError('Continuation flags have to fit one octet')
        else:
            continuation = 0

        return super().__new__(cls, vendor_id, type_code, value, format,
                               continuation)

    @property
    def more(self):
        """True if the continuation flags announce another fragment."""
        return bool(self.continuation & 0x80)

    def encode(self):
        """Encode the sub-attribute, without the vendor id.

        :return: sub-attribute octets
        :rtype:  bytes
        """
        fmt = self.format
        header = struct.pack(_UINT[fmt.type_size], self.type_code)
        if fmt.length_size:
            header += struct.pack(_UINT[fmt.length_size],
                                  fmt.header_size + len(self.value))
        if fmt.continuation:
            header += struct.pack('!B', self.continuation)
        return header + self.value

    def pack(self):
        """Encode as a complete Vendor-Specific attribute.

        :return: attribute 26 octets
        :rtype:  bytes
        """
        return pack([self])


def encode(vendor_id, type_code, value, format=Format.STANDARD,
           continuation=0):
    """Encode a vendor sub-attribute.

    The result still needs the vendor id in front of it and an attribute
    26 header around it, see :func:`pack`.

    :param vendor_id:    IANA private enterprise number of the vendor
    :type vendor_id:     integer
    :param type_code:    vendor sub-attribute type
    :type type_code:     integer
    :param value:        raw value
    :type value:         bytes
    :param format:       sub-attribute wire layout
    :type format:        Format
    :param continuation: RFC 6929 flags octet for formats that have one
    :type continuation:  integer
    :return:             sub-attribute octets
    :rtype:              bytes
    """
    return VendorSpecificAttribute(vendor_id, type_code, value, format,
                                   continuation).encode()


def pack(attributes):
    """Pack sub-attributes of one vendor into a single attribute 26.

    Sub-attributes without a length field extend to the end of the
    attribute, so such an attribute can only hold one of them.

    :param attributes: sub-attributes to pack
    :type attributes:  sequence of VendorSpecificAttribute
    :return:           attribute 26 octets
    :rtype:            bytes
    """
    attributes = list(attributes)
    if not attributes:
        raise ValueError('Nothing to pack')

    first = attributes[0]
    for attr in attributes[1:]:
        if attr.vendor_id != first.vendor_id:
            raise ValueError('Can not pack vendors %d and %d together'
                             % (first.vendor_id, attr.vendor_id))
        if attr.format is not first.format:
            raise ValueError('Can not mix vendor formats %s and %s'
                             % (first.format, attr.format))
    if not first.format.length_size and len(attributes) > 1:
        raise ValueError('Format %s sub-attributes have no length and '
                         'can not share an attribute' % first.format)

    payload = b''.join(attr.encode() for attr in attributes)
    length = HEADER_LENGTH + len(payload)
    if length > MAX_ATTRIBUTE_LENGTH:
        raise ValueTooLargeError(
            'Vendor-Specific attribute of %d octets exceeds %d'
            % (length, MAX_ATTRIBUTE_LENGTH))

    logger.debug('Packed %d sub-attribute(s) for vendor %d into %d octets',
                 len(attributes), first.vendor_id, length)
    return (struct.pack('!BBL', VENDOR_SPECIFIC, length, first.vendor_id)
            + payload)
