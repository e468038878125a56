# dictionary.py
#
# Vendor dictionaries

"""
RADIUS uses dictionaries to define the attributes that can
be used in packets. The Dictionary class stores the vendor and
attribute definitions from one or more dictionary files and turns
attribute names and values into Vendor-Specific Attributes.

Dictionary files are textfiles with one command per line.
Comments are specified by starting with a # character, and empty
lines are ignored.

The commands supported are::

  ATTRIBUTE <attribute> <code> <type> [<vendor>|<flags>]
  specify an attribute and its type

  VALUE <attribute> <valuename> <value>
  specify a value attribute

  VENDOR <name> <id> [format=<t>,<l>[,c]]
  specify a vendor ID and the layout of its sub-attributes

  BEGIN-VENDOR <vendorname>
  begin definition of vendor attributes

  END-VENDOR <vendorname>
  end definition of vendor attributes

  $INCLUDE <file>
  read another dictionary file, $INCLUDE- ignores missing files

The datatypes currently supported are:

+---------------+----------------------------------------------+
| type          | description                                  |
+===============+==============================================+
| string        | UTF-8 string                                 |
+---------------+----------------------------------------------+
| octets        | arbitrary binary data                        |
+---------------+----------------------------------------------+
| ipaddr        | IPv4 address                                 |
+---------------+----------------------------------------------+
| ipv6addr      | 16 octets in network byte order              |
+---------------+----------------------------------------------+
| integer       | 32 bits number                               |
+---------------+----------------------------------------------+
| signed        | 32 bits signed number                        |
+---------------+----------------------------------------------+
| short         | 16 bits unsigned number                      |
+---------------+----------------------------------------------+
| byte          | 8 bits unsigned number                       |
+---------------+----------------------------------------------+
| date          | 32 bits UNIX timestamp                       |
+---------------+----------------------------------------------+
| tlv           | Nested tag-length-value                      |
+---------------+----------------------------------------------+

Example::

  from pyvsa.dictionary import default_dictionary
  from pyvsa import vsa

  dictionary = default_dictionary()
  policy = dictionary.create('MS-MPPE-Encryption-Policy',
                             'Encryption-Required')
  types = dictionary.create('MS-MPPE-Encryption-Type', 6)
  attribute = vsa.pack([policy, types])
"""
from copy import copy
import enum
import logging
import os

from pyvsa import bidict
from pyvsa import dictfile
from pyvsa import tools
from pyvsa.vsa import Format
from pyvsa.vsa import VendorSpecificAttribute

__docformat__ = 'epytext en'

logger = logging.getLogger('pyvsa')

DATATYPES = frozenset(tools.ENCODERS)

INTEGER_TYPES = ('integer', 'signed', 'short', 'byte', 'date')

# Dictionaries shipped with pyvsa
DEFAULT_DICTIONARY = os.path.join(os.path.dirname(__file__), 'dicts',
                                  'dictionary')


class ParseError(Exception):
    """Dictionary parser exceptions.

    :ivar msg:        Error message
    :type msg:        string
    :ivar file:       Name of the file in which the error occurred
    :type file:       string
    :ivar line:       Line number on which the error occurred
    :type line:       integer
    """

    def __init__(self, msg=None, **data):
        Exception.__init__(self, msg)
        self.msg = msg
        self.file = data.get('file', '')
        self.line = data.get('line', -1)

    def __str__(self):
        str = ''
        if self.file:
            str += self.file
        if self.line > -1:
            str += '(%d)' % self.line
        if self.file or self.line > -1:
            str += ': '
        str += 'Parse error'
        if self.msg:
            str += ': %s' % self.msg

        return str


class Attribute(object):
    """
    class to represent an attribute as defined by the radius dictionaries
    """
    def __init__(self, name, code, datatype, vendor=None, parent=None,
                 values=None, encrypt=0, has_tag=False):
        if datatype not in DATATYPES:
            raise ValueError('Invalid data type')
        self.name = name
        self.code = code
        self.type = datatype
        # name of the vendor, None for standard attributes
        self.vendor = vendor
        # enclosing tlv attribute
        self.parent = parent
        self.encrypt = encrypt
        self.has_tag = has_tag

        self.values = bidict.BiDict()
        self._enum = None
        if values:
            for key, value in values.items():
                self.add_value(key, value)

        # sub attributes of a tlv
        self.children = {}
        self.attrindex = bidict.BiDict()

    def __repr__(self):
        return '<Attribute %s %r %s>' % (self.name, self.code, self.type)

    def __getitem__(self, key):
        if isinstance(key, int):
            if not self.attrindex.has_backward(key):
                raise KeyError(f'Missing sub attribute {key} of {self.name}')
            key = self.attrindex.get_backward(key)
        if key not in self.children:
            raise KeyError(f'Non-existent sub attribute {key}')
        return self.children[key]

    def __setitem__(self, key, value):
        if key != value.name:
            raise ValueError('Key must be equal to Attribute name')
        self.children[key] = value
        self.attrindex.add(key, value.code)

    def add_value(self, name, number):
        self.values.add(name, number)
        self._enum = None

    @property
    def enum(self):
        """The enumerated values of this attribute as an IntEnum."""
        if not self.values:
            raise ValueError('Attribute %s has no enumerated values'
                             % self.name)
        if self._enum is None:
            self._enum = enum.IntEnum(self.name.replace('-', '_'),
                                      list(self.values.items()))
        return self._enum

    def encode_value(self, value):
        """Encode a value according to the attribute datatype.

        Integer attributes accept the names of their enumerated values,
        tlv attributes accept a mapping of sub attribute name or code to
        value.

        :param value: value to encode
        :return:      value octets, without any header
        :rtype:       bytes
        """
        if self.type in INTEGER_TYPES and isinstance(value, str):
            if self.values.has_forward(value):
                value = self.values.get_forward(value)
            else:
                try:
                    value = int(value, 0)
                except ValueError:
                    raise ValueError('Unknown value %s for attribute %s'
                                     % (value, self.name))
        elif self.type == 'tlv' and hasattr(value, 'items'):
            encoded = {}
            for key, sub_value in value.items():
                child = self[key]
                if not isinstance(sub_value, (list, tuple)):
                    sub_value = [sub_value]
                encoded[child.code] = [child.encode_value(v)
                                       for v in sub_value]
            value = encoded
        return tools.encode_value(self.type, value)


class Vendor(object):
    """
    class representing a vendor with its attributes and the layout
    used for its sub-attributes
    """
    def __init__(self, name, number, format=Format.STANDARD):
        """
        :param name:   name of the vendor
        :param number: vendor ID
        :param format: sub-attribute layout
        """
        self.name = name
        self.number = number
        self.format = format

        self.attributes = {}
        self.attrindex = bidict.BiDict()

    def __repr__(self):
        return '<Vendor %s %d format=%s>' % (self.name, self.number,
                                             self.format)

    def __len__(self):
        return len(self.attributes)

    def __getitem__(self, key):
        # if using attribute number, first convert to attribute name
        if isinstance(key, int):
            if not self.attrindex.has_backward(key):
                raise KeyError(f'Non existent attribute {key}')
            key = self.attrindex.get_backward(key)

        return self.attributes[key]

    def __setitem__(self, key, value):
        if key != value.name:
            raise ValueError('Key must be equal to Attribute name')

        self.attributes[key] = value
        self.attrindex.add(value.name, value.code)


class Dictionary(object):
    """RADIUS dictionary class.
    This class stores all information about vendors, attributes and their
    values as defined in RADIUS dictionary files.

    :ivar vendors:    bidict mapping vendor name to vendor code
    :type vendors:    bidict
    :ivar attrindex:  bidict mapping attribute name to attribute code, or
                      a (vendor code, attribute code) tuple for vendor
                      attributes
    :type attrindex:  bidict
    :ivar attributes: dict mapping attribute name to attribute class
    :type attributes: dict
    """

    def __init__(self, dict=None, *dicts):
        """
        :param dict:  path of dictionary file or file-like object to read
        :type dict:   string or file
        :param dicts: list of dictionaries
        :type dicts:  sequence of strings or files
        """
        self.vendors = bidict.BiDict()
        self.attrindex = bidict.BiDict()
        self.attributes = {}
        self._vendors = {}
        self.defer_parse = []

        if dict:
            self.read_dictionary(dict)

        for i in dicts:
            self.read_dictionary(i)

    def __len__(self):
        return len(self.attributes)

    def __getitem__(self, key):
        # allow indexing attributes by code or (vendor, code) tuple
        if isinstance(key, (int, tuple)):
            if not self.attrindex.has_backward(key):
                raise KeyError(f'Attribute number {key} not defined')
            key = self.attrindex.get_backward(key)
        return self.attributes[key]

    def __contains__(self, key):
        if isinstance(key, (int, tuple)):
            return self.attrindex.has_backward(key)
        return key in self.attributes

    def vendor(self, key):
        """Get a vendor by name or number.

        :param key: vendor name or IANA private enterprise number
        :type key:  string or integer
        :rtype:     Vendor
        """
        if isinstance(key, int):
            if not self.vendors.has_backward(key):
                raise KeyError(f'Vendor {key} not defined')
            key = self.vendors.get_backward(key)
        return self._vendors[key]

    def create(self, name, value, continuation=0):
        """Create a Vendor-Specific Attribute from its dictionary name.

        :param name:         attribute name
        :type name:          string
        :param value:        value, an enumerated value name is accepted
                             for integer attributes
        :param continuation: RFC 6929 flags octet for vendors using the
                             ``1,1,c`` format
        :type continuation:  integer
        :rtype:              pyvsa.vsa.VendorSpecificAttribute
        """
        attr = self.attributes[name]
        if attr.parent is not None:
            raise ValueError('%s is a sub attribute of %s'
                             % (name, attr.parent.name))
        if not attr.vendor:
            raise ValueError('%s is not a vendor attribute' % name)
        vendor = self._vendors[attr.vendor]
        return VendorSpecificAttribute(vendor.number, attr.code,
                                       attr.encode_value(value),
                                       vendor.format, continuation)

    def encode(self, name, value, continuation=0):
        """Encode a vendor sub-attribute from its dictionary name.

        :return: sub-attribute octets
        :rtype:  bytes
        """
        return self.create(name, value, continuation).encode()

    def __parse_error(self, state, msg):
        return ParseError(msg, file=state['file'], line=state['line'])

    def __parse_code(self, state, code):
        try:
            if code.startswith('0x'):
                return int(code, 16)
            if code.startswith('0o'):
                return int(code, 8)
            return int(code, 10)
        except ValueError:
            raise self.__parse_error(state, 'Invalid attribute code %s' % code)

    def __parse_attribute(self, state, tokens):
        if not len(tokens) in [4, 5]:
            raise self.__parse_error(
                state, 'Incorrect number of tokens for attribute definition')

        vendor = state['vendor']
        has_tag = False
        encrypt = 0
        if len(tokens) >= 5:
            def keyval(o):
                kv = o.split('=')
                if len(kv) == 2:
                    return (kv[0], kv[1])
                else:
                    return (kv[0], None)
            options = [keyval(o) for o in tokens[4].split(',')]
            for (key, val) in options:
                if key == 'has_tag':
                    has_tag = True
                elif key == 'encrypt':
                    if val not in ['1', '2', '3']:
                        raise self.__parse_error(
                            state, 'Illegal attribute encryption: %s' % val)
                    encrypt = int(val)

            if (not has_tag) and encrypt == 0:
                vendor = tokens[4]
                if not self.vendors.has_forward(vendor):
                    if vendor == 'concat':
                        # ignore attributes with concat (freeradius compat.)
                        return None
                    raise self.__parse_error(state, 'Unknown vendor ' + vendor)

        (name, code, datatype) = tokens[1:4]
        codes = [self.__parse_code(state, c) for c in code.split('.')]

        if vendor:
            namespace = self._vendors[vendor]
        else:
            namespace = None

        parent = None
        if len(codes) == 2:
            try:
                if namespace is not None:
                    parent = namespace[codes[0]]
                else:
                    parent = self[codes[0]]
            except KeyError:
                raise self.__parse_error(
                    state, 'Unknown parent %d for %s' % (codes[0], name))
            if parent.type != 'tlv':
                raise self.__parse_error(
                    state, 'Parent %s of %s is not a tlv' % (parent.name, name))
            code = codes[1]
            if not 0 <= code <= 255:
                raise self.__parse_error(
                    state, 'Sub attribute code %d out of range' % code)
        elif len(codes) == 1:
            code = codes[0]
        else:
            raise self.__parse_error(state, 'nested tlvs are not supported')

        datatype = datatype.split('[')[0]
        if datatype not in DATATYPES:
            raise self.__parse_error(state, 'Illegal type: ' + datatype)

        if parent is None and namespace is not None:
            if not 0 <= code <= namespace.format.max_type:
                raise self.__parse_error(
                    state, 'Code %d of %s does not fit vendor format %s'
                    % (code, name, namespace.format))

        attribute = Attribute(name, code, datatype, vendor or None, parent,
                              encrypt=encrypt, has_tag=has_tag)
        self.attributes[name] = attribute
        if parent is not None:
            parent[name] = attribute
        elif namespace is not None:
            namespace[name] = attribute
            self.attrindex.add(name, (namespace.number, code))
        else:
            self.attrindex.add(name, code)

    def __parse_value(self, state, tokens, defer):
        if len(tokens) != 4:
            raise self.__parse_error(
                state, 'Incorrect number of tokens for value definition')

        (attr, key, value) = tokens[1:]

        try:
            adef = self.attributes[attr]
        except KeyError:
            if defer:
                self.defer_parse.append((copy(state), copy(tokens)))
                return
            raise self.__parse_error(
                state, 'Value defined for unknown attribute ' + attr)

        if adef.type not in INTEGER_TYPES:
            raise self.__parse_error(
                state, 'Value defined for %s attribute %s' % (adef.type, attr))
        try:
            value = int(value, 0)
        except ValueError:
            raise self.__parse_error(state, 'Invalid value %s for %s'
                                     % (value, attr))
        adef.add_value(key, value)

    def __parse_vendor(self, state, tokens):
        if len(tokens) not in [3, 4]:
            raise self.__parse_error(
                state, 'Incorrect number of tokens for vendor definition')

        fmt = Format.STANDARD
        if len(tokens) == 4:
            option = tokens[3].split('=', 1)
            if option[0] != 'format' or len(option) != 2:
                raise self.__parse_error(
                    state, "Unknown option '%s' for vendor definition"
                    % (option[0]))
            try:
                fmt = Format.parse(option[1])
            except ValueError:
                raise self.__parse_error(
                    state, 'Unknown vendor format specification %s'
                    % (option[1]))

        (name, number) = tokens[1:3]
        try:
            number = int(number, 0)
        except ValueError:
            raise self.__parse_error(state, 'Invalid vendor id %s' % number)

        self.vendors.add(name, number)
        self._vendors[name] = Vendor(name, number, fmt)
        logger.debug('Registered vendor %s (%d) with format %s',
                     name, number, fmt)

    def __parse_begin_vendor(self, state, tokens):
        if len(tokens) != 2:
            raise self.__parse_error(
                state, 'Incorrect number of tokens for begin-vendor statement')

        name = tokens[1]

        if not self.vendors.has_forward(name):
            raise self.__parse_error(
                state, 'Unknown vendor %s in begin-vendor statement' % name)

        state['vendor'] = name

    def __parse_end_vendor(self, state, tokens):
        if len(tokens) != 2:
            raise self.__parse_error(
                state, 'Incorrect number of tokens for end-vendor statement')

        vendor = tokens[1]

        if state['vendor'] != vendor:
            raise self.__parse_error(state, 'Ending non-open vendor ' + vendor)
        state['vendor'] = ''

    def read_dictionary(self, file):
        """Parse a dictionary file.
        Reads a RADIUS dictionary file and merges its contents into the
        class instance.

        :param file: Name of dictionary file to parse or a file-like object
        :type file:  string or file-like object
        """

        fil = dictfile.DictFile(file)

        state = {}
        state['vendor'] = ''
        self.defer_parse = []
        for line in fil:
            state['file'] = fil.file()
            state['line'] = fil.line()
            line = line.split('#', 1)[0].strip()

            tokens = line.split()
            if not tokens:
                continue

            key = tokens[0].upper()
            if key == 'ATTRIBUTE':
                self.__parse_attribute(state, tokens)
            elif key == 'VALUE':
                self.__parse_value(state, tokens, True)
            elif key == 'VENDOR':
                self.__parse_vendor(state, tokens)
            elif key == 'BEGIN-VENDOR':
                self.__parse_begin_vendor(state, tokens)
            elif key == 'END-VENDOR':
                self.__parse_end_vendor(state, tokens)
            else:
                logger.debug('%s(%d): ignoring %s statement',
                             state['file'], state['line'], key)

        for state, tokens in self.defer_parse:
            self.__parse_value(state, tokens, False)
        self.defer_parse = []


def default_dictionary():
    """Load the vendor dictionaries bundled with pyvsa.

    :rtype: Dictionary
    """
    return Dictionary(DEFAULT_DICTIONARY)
