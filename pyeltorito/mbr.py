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

"""Master Boot Record support for hard disk emulation boot images."""

import struct

from pyeltorito import pyeltoritoexception


class MasterBootRecord(object):
    """
    A class that represents the Master Boot Record at the start of a hard disk
    emulation boot image.  Only the first partition entry is looked at, since
    that is where the size of the emulated disk is taken from.
    """
    __slots__ = ('_initialized', 'status', 'partition_type', 'first_sector',
                 'partition_size')

    # The first partition entry starts at offset 446 and consists of:
    # Offset 0x0:     Status (0x80 for active)
    # Offset 0x1-0x3: CHS address of first sector
    # Offset 0x4:     Partition type
    # Offset 0x5-0x7: CHS address of last sector
    # Offset 0x8-0xb: LBA of first sector
    # Offset 0xc-0xf: Number of sectors in the partition
    PART_ENTRY_OFFSET = 446
    FMT = '<B3sB3sLL'

    def __init__(self):
        # type: () -> None
        self._initialized = False

    def parse(self, instr):
        # type: (bytes) -> None
        """
        Parse the first partition entry out of a Master Boot Record.

        Parameters:
         instr - The 512 bytes of the Master Boot Record.
        Returns:
         Nothing.
        """
        if self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('This MasterBootRecord object is already initialized')

        if len(instr) < 512:
            raise pyeltoritoexception.PyEltoritoInternalError('Invalid Master Boot Record passed')

        (self.status, chs_first_unused, self.partition_type, chs_last_unused,
         self.first_sector,
         self.partition_size) = struct.unpack_from(self.FMT, instr, self.PART_ENTRY_OFFSET)

        self._initialized = True

    def sector_count(self):
        # type: () -> int
        """
        The number of virtual sectors making up the emulated hard disk; the
        partition plus everything in front of it.
        """
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('This MasterBootRecord object is not yet initialized')

        return self.first_sector + self.partition_size
