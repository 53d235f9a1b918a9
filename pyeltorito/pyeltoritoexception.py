# Copyright (C) 2026  The pyeltorito developers

# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation;
# version 2.1 of the License.

# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.

# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301  USA

"""Contains the exceptions thrown by PyEltorito."""


class PyEltoritoException(Exception):
    """The custom Exception class for PyEltorito."""
    def __init__(self, msg):
        # type: (str) -> None
        Exception.__init__(self, msg)


class PyEltoritoInvalidISO(PyEltoritoException):
    """
    The base of all exceptions thrown when a field of the image does not match
    what El Torito mandates.
    """


class BadBootRecordIndicator(PyEltoritoInvalidISO):
    """The Boot Record Volume Descriptor type byte is not 0."""


class BadIso9660Identifier(PyEltoritoInvalidISO):
    """The Boot Record Volume Descriptor identifier is not 'CD001'."""


class BadBootSystemIdentifier(PyEltoritoInvalidISO):
    """The boot system identifier is not 'EL TORITO SPECIFICATION'."""


class BadHeaderValue(PyEltoritoInvalidISO):
    """The Validation Entry header ID is not 1."""


class BadReservedZeroValue(PyEltoritoInvalidISO):
    """The Validation Entry reserved word is not 0."""


class Bad55Checksum(PyEltoritoInvalidISO):
    """The first Validation Entry key byte is not 0x55."""


class BadAAChecksum(PyEltoritoInvalidISO):
    """The second Validation Entry key byte is not 0xaa."""


class BadBootMediaType(PyEltoritoInvalidISO):
    """The Initial Entry boot media type is not one El Torito defines."""


class PyEltoritoReadError(PyEltoritoException):
    """A sector could not be read in full from the image."""


class ReadEarlyExitError(PyEltoritoException):
    """The image ended before the whole boot payload was copied."""


class PyEltoritoInvalidInput(PyEltoritoException):
    """An exception thrown when the user passes bad input to PyEltorito."""


class PyEltoritoInternalError(PyEltoritoException):
    """An exception thrown when a structure is used out of order."""
