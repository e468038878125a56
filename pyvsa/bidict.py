# bidict.py
#
# Bidirectional map


class BiDict(object):
    """Mapping that can be searched in both directions.

    Used for name <-> number lookups of vendors, attributes and
    enumerated values. Both sides have to be unique: adding a pair whose
    name or number is already present replaces the old pair.
    """

    def __init__(self):
        self.forward = {}
        self.backward = {}

    def add(self, one, two):
        if one in self.forward:
            del self.backward[self.forward[one]]
        if two in self.backward:
            del self.forward[self.backward[two]]
        self.forward[one] = two
        self.backward[two] = one

    def __len__(self):
        return len(self.forward)

    def __iter__(self):
        return iter(self.forward)

    def __contains__(self, key):
        return key in self.forward

    def __getitem__(self, key):
        return self.forward[key]

    def items(self):
        return self.forward.items()

    def get_forward(self, key):
        return self.forward[key]

    def has_forward(self, key):
        return key in self.forward

    def get_backward(self, key):
        return self.backward[key]

    def has_backward(self, key):
        return key in self.backward
