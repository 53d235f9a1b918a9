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

"""Various utilities for PyEltorito."""

import io
import logging

from pyeltorito import pyeltoritoexception

# For mypy annotations
if False:  # pylint: disable=using-constant-test
    from typing import BinaryIO  # NOQA pylint: disable=unused-import

# The ISO9660 logical block size.
LOGICAL_SECTOR_SIZE = 2048
# El Torito expresses boot image sizes in 512-byte virtual sectors.
VIRTUAL_SECTOR_SIZE = 512

_logger = logging.getLogger(__name__)


def sector_offset(extent):
    # type: (int) -> int
    """
    A function to convert a logical sector number into an absolute byte
    offset into the image.

    Parameters:
     extent - The logical sector number.
    Returns:
     The byte offset of the start of that logical sector.
    """
    return extent * LOGICAL_SECTOR_SIZE


def read_sector(fp, offset, length=VIRTUAL_SECTOR_SIZE):
    # type: (BinaryIO, int, int) -> bytes
    """
    A function to read one fixed-size block out of the image.  Exactly one
    read is attempted; anything shorter than the requested length means the
    image is truncated or the offset points past its end.

    Parameters:
     fp - The file object to read from.
     offset - The absolute byte offset to start reading at.
     length - The number of bytes that must be returned.
    Returns:
     The block of data that was read.
    """
    fp.seek(offset)
    data = fp.read(length)
    if len(data) < length:
        raise pyeltoritoexception.PyEltoritoReadError('Short read at offset %d; expected %d bytes, got %d' % (offset, length, len(data)))

    return data


def copy_sectors(count, infp, outfp):
    # type: (int, BinaryIO, BinaryIO) -> int
    """
    A utility function to copy virtual sectors from the input file object to
    the output file object, starting at the current position of the input.
    Each sector is written out as soon as it is read, so on failure the output
    holds every sector read up to that point.

    Parameters:
     count - The number of virtual sectors to copy.
     infp - The file object to copy data from.
     outfp - The file object to copy data to.
    Returns:
     The number of sectors written.
    """
    written = 0
    while written < count:
        data = infp.read(VIRTUAL_SECTOR_SIZE)
        if not data:
            raise pyeltoritoexception.ReadEarlyExitError('Image ended after %d of %d virtual sectors' % (written, count))
        outfp.write(data)
        written += 1

    _logger.debug('Copied %d virtual sector(s)', written)

    return written


def file_object_supports_binary(fp):
    # type: (BinaryIO) -> bool
    """
    A function to check whether a file-like object supports binary mode.

    Parameters:
     fp - The file-like object to check for binary mode support.
    Returns:
     True if the file-like object supports binary mode, False otherwise.
    """
    if hasattr(fp, 'mode'):
        return 'b' in fp.mode

    return isinstance(fp, (io.RawIOBase, io.BufferedIOBase))
