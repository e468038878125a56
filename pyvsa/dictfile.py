# dictfile.py
#
# Iterable dictionary files

"""Dictionary File

Iterates over the lines of a RADIUS dictionary file and follows
``$INCLUDE`` directives behind the scene. Included files are looked up
relative to the file that includes them. ``$INCLUDE-`` works the same
but silently skips files that do not exist.
"""

import logging
import os

logger = logging.getLogger('pyvsa')


class _Node(object):
    """A single dictionary file."""
    __slots__ = ('name', 'lines', 'current', 'dir')

    def __init__(self, fd, name, parentdir):
        self.lines = fd.readlines()
        self.current = 0
        self.name = os.path.basename(name)
        path = os.path.dirname(name)
        if os.path.isabs(path):
            self.dir = path
        else:
            self.dir = os.path.join(parentdir, path)

    def next(self):
        if self.current >= len(self.lines):
            return None
        self.current += 1
        return self.lines[self.current - 1]


class DictFile(object):
    """Dictionary file class

    An iterable over dictionary lines that handles include directives
    internally. Lines are returned unmodified, include lines are never
    returned.
    """
    __slots__ = ('stack',)

    def __init__(self, fil):
        """
        :param fil: a dictionary file to parse
        :type fil:  string or file
        """
        self.stack = []
        self.__read_node(fil)

    def __read_node(self, fil, optional=False):
        parentdir = self.__cur_dir()
        if isinstance(fil, str):
            if os.path.isabs(fil):
                fname = fil
            else:
                fname = os.path.join(parentdir, fil)
            if optional and not os.path.exists(fname):
                logger.debug('Skipping missing optional dictionary %s', fname)
                return
            logger.debug('Reading dictionary %s', fname)
            with open(fname, 'rt') as fd:
                node = _Node(fd, fil, parentdir)
        else:
            node = _Node(fil, '', parentdir)
        self.stack.append(node)

    def __cur_dir(self):
        if self.stack:
            return self.stack[-1].dir
        return os.path.realpath(os.curdir)

    @staticmethod
    def _get_include(line):
        """Return ``(filename, optional)`` for include lines, else None."""
        tokens = line.split('#', 1)[0].split()
        if len(tokens) < 2:
            return None
        directive = tokens[0].upper()
        if directive == '$INCLUDE':
            return ' '.join(tokens[1:]), False
        if directive == '$INCLUDE-':
            return ' '.join(tokens[1:]), True
        return None

    def line(self):
        """Returns line number of current file"""
        if self.stack:
            return self.stack[-1].current
        return -1

    def file(self):
        """Returns name of current file"""
        if self.stack:
            return self.stack[-1].name
        return ''

    def __iter__(self):
        return self

    def __next__(self):
        while self.stack:
            line = self.stack[-1].next()
            if line is None:
                self.stack.pop()
                continue
            include = self._get_include(line)
            if include:
                self.__read_node(*include)
            else:
                return line
        raise StopIteration
