"""Python RADIUS Vendor-Specific Attribute encoding.

pyvsa builds the Vendor-Specific Attributes (attribute 26, RFC 2865
section 5.26) that RADIUS servers add to Access-Accept, Access-Reject
and accounting packets. It knows the sub-attribute layouts vendors use,
checks values before encoding them, and reads vendor attribute
definitions from FreeRADIUS style dictionary files.

Here is an example of building a Microsoft MPPE policy::

  from pyvsa import vsa
  from pyvsa.dictionary import default_dictionary

  dictionary = default_dictionary()
  policy = dictionary.create('MS-MPPE-Encryption-Policy',
                             'Encryption-Required')
  reply_attribute = policy.pack()

The same without a dictionary::

  from pyvsa import tools

  sub = tools.integer_attribute(311, 7, 2)

And for a vendor with a non-standard layout::

  from pyvsa.vsa import Format

  sub = tools.integer_attribute(429, 0x9050, 1, Format.TYPE4LEN0)


This package contains five modules:

  - vsa: sub-attribute formats, encoder and attribute 26 packer
  - tools: value encoders
  - dictionary: RADIUS vendor dictionary
  - dictfile: dictionary file reader
  - bidict: bidirectional mapping
"""

__docformat__ = 'epytext en'

__version__ = '1.0'

__all__ = ['vsa', 'tools', 'dictionary', 'dictfile', 'bidict']
