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

'''
Classes to support El Torito.
'''

import enum
import logging
import struct

from pyeltorito import mbr
from pyeltorito import pyeltoritoexception
from pyeltorito import utils

# For mypy annotations
if False:  # pylint: disable=using-constant-test
    from typing import BinaryIO  # NOQA pylint: disable=unused-import

_logger = logging.getLogger(__name__)

PLATFORM_NAMES = {
    0: 'x86',
    1: 'PowerPC',
    2: 'Mac',
}


class BootMediaType(enum.IntEnum):
    '''
    The boot media types an El Torito entry can declare.
    '''
    NO_EMULATION = 0
    FLOPPY_12 = 1
    FLOPPY_144 = 2
    FLOPPY_288 = 3
    HARD_DISK = 4


MEDIA_DESCRIPTIONS = {
    BootMediaType.NO_EMULATION: 'no emulation',
    BootMediaType.FLOPPY_12: '1.2meg floppy',
    BootMediaType.FLOPPY_144: '1.44meg floppy',
    BootMediaType.FLOPPY_288: '2.88meg floppy',
    BootMediaType.HARD_DISK: 'hard disk',
}

# Floppy emulation images are always the full size of the emulated diskette.
FLOPPY_SECTOR_COUNTS = {
    BootMediaType.FLOPPY_12: 1200 * 1024 // utils.VIRTUAL_SECTOR_SIZE,
    BootMediaType.FLOPPY_144: 1440 * 1024 // utils.VIRTUAL_SECTOR_SIZE,
    BootMediaType.FLOPPY_288: 2880 * 1024 // utils.VIRTUAL_SECTOR_SIZE,
}


def media_type_from_byte(value):
    # type: (int) -> BootMediaType
    '''
    A function to turn the raw boot media type byte of an El Torito entry into
    a BootMediaType.

    Parameters:
     value - The boot media type byte.
    Returns:
     The matching BootMediaType.
    '''
    try:
        return BootMediaType(value)
    except ValueError:
        raise pyeltoritoexception.BadBootMediaType('Invalid El Torito boot media type %d' % (value))


class EltoritoValidationEntry(object):
    '''
    A class that represents an El Torito Validation Entry.  El Torito requires
    that the first entry in the El Torito Boot Catalog be a validation entry.
    '''
    __slots__ = ('_initialized', 'platform_id', 'id_string', 'checksum',
                 '_data')

    # An El Torito validation entry consists of:
    # Offset 0x0:       Header ID (0x1)
    # Offset 0x1:       Platform ID (0 for x86, 1 for PPC, 2 for Mac)
    # Offset 0x2-0x3:   Reserved, must be 0
    # Offset 0x4-0x1b:  ID String for manufacturer of CD
    # Offset 0x1c-0x1d: Checksum of all bytes.
    # Offset 0x1e:      Key byte 0x55
    # Offset 0x1f:      Key byte 0xaa
    FMT = '<BBH24sHBB'

    def __init__(self):
        # type: () -> None
        self._initialized = False

    @staticmethod
    def _checksum(data):
        # type: (bytes) -> int
        '''
        A static method to compute the checksum of a validation entry.  Note
        that this is *not* a 1's complement checksum; when an addition
        overflows, the carry bit is discarded, not added to the end.

        Parameters:
         data - The data to compute the checksum over.
        Returns:
         The checksum of the data.
        '''
        s = 0
        for (w,) in struct.iter_unpack('<H', data):
            s = (s + w) & 0xffff
        return s

    def parse(self, valstr):
        # type: (bytes) -> None
        '''
        A method to parse an El Torito Validation Entry out of a string.

        Parameters:
         valstr - The string to parse the El Torito Validation Entry out of.
        Returns:
         Nothing.
        '''
        if self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('El Torito Validation Entry already initialized')

        (header_id, self.platform_id, reserved, self.id_string,
         self.checksum, keybyte1,
         keybyte2) = struct.unpack_from(self.FMT, valstr, 0)

        _logger.debug('Validation Entry: header %#x, platform %s (%#x), reserved %#x, manufacturer %r, key bytes %#x %#x',
                      header_id, PLATFORM_NAMES.get(self.platform_id, 'unknown'),
                      self.platform_id, reserved, self.id_string, keybyte1,
                      keybyte2)

        if header_id != 1:
            raise pyeltoritoexception.BadHeaderValue('El Torito Validation entry header ID %d not 1' % (header_id))
        if reserved != 0:
            raise pyeltoritoexception.BadReservedZeroValue('El Torito Validation entry reserved field %#x not 0' % (reserved))
        if keybyte1 != 0x55:
            raise pyeltoritoexception.Bad55Checksum('El Torito Validation entry first keybyte %#x not 0x55' % (keybyte1))
        if keybyte2 != 0xaa:
            raise pyeltoritoexception.BadAAChecksum('El Torito Validation entry second keybyte %#x not 0xaa' % (keybyte2))

        # The checksum word is recorded but not enforced.
        self._data = bytes(valstr[:struct.calcsize(self.FMT)])

        self._initialized = True

    def platform_name(self):
        # type: () -> str
        '''
        A method to get a human readable name for the platform of this entry.

        Parameters:
         None.
        Returns:
         One of 'x86', 'PowerPC', 'Mac', or 'unknown'.
        '''
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('El Torito Validation Entry not yet initialized')

        return PLATFORM_NAMES.get(self.platform_id, 'unknown')

    def checksum_valid(self):
        # type: () -> bool
        '''
        A method to check whether the words of this entry sum to zero.  This is
        informational only.

        Parameters:
         None.
        Returns:
         True if the checksum is correct, False otherwise.
        '''
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('El Torito Validation Entry not yet initialized')

        return self._checksum(self._data) == 0


class EltoritoEntry(object):
    '''
    A class that represents an El Torito Initial/Default Entry.
    '''
    __slots__ = ('_initialized', 'boot_indicator', 'boot_media_type',
                 'load_segment', 'system_type', 'sector_count', 'load_rba')

    # An El Torito entry consists of:
    # Offset 0x0:      Boot indicator (0x88 for bootable, 0x00 for
    #                  non-bootable)
    # Offset 0x1:      Boot media type.  One of 0x0 for no emulation,
    #                  0x1 for 1.2M diskette emulation, 0x2 for 1.44M
    #                  diskette emulation, 0x3 for 2.88M diskette
    #                  emulation, or 0x4 for Hard Disk emulation.
    # Offset 0x2-0x3:  Load Segment - if 0, use traditional 0x7C0.
    # Offset 0x4:      System Type - copy of Partition Table byte 5
    # Offset 0x5:      Unused, must be 0
    # Offset 0x6-0x7:  Sector Count - Number of virtual sectors to store
    #                  during initial boot.
    # Offset 0x8-0xb:  Load RBA - Start address of virtual disk.
    # Offset 0xc-0x1f: Unused, must be 0.
    FMT = '<BBHBBHL'

    def __init__(self):
        # type: () -> None
        self._initialized = False

    def parse(self, valstr):
        # type: (bytes) -> None
        '''
        A method to parse an El Torito Entry out of a string.  Nothing is
        validated here; the boot media type is checked when the size of the
        boot image is resolved.

        Parameters:
         valstr - The string to parse the El Torito Entry out of.
        Returns:
         Nothing.
        '''
        if self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('El Torito Entry already initialized')

        (self.boot_indicator, self.boot_media_type, self.load_segment,
         self.system_type, unused1, self.sector_count,
         self.load_rba) = struct.unpack_from(self.FMT, valstr, 0)

        _logger.debug('Initial Entry: bootable %#x, media type %#x, load segment %#x, system type %#x, sector count %d, image start %d',
                      self.boot_indicator, self.boot_media_type,
                      self.load_segment, self.system_type, self.sector_count,
                      self.load_rba)

        self._initialized = True

    def is_bootable(self):
        # type: () -> bool
        '''
        A method to determine whether this entry is marked bootable.

        Parameters:
         None.
        Returns:
         True if the boot indicator is 0x88, False otherwise.
        '''
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('El Torito Entry not yet initialized')

        return self.boot_indicator == 0x88

    def media_type(self):
        # type: () -> BootMediaType
        '''
        A method to get the boot media type of this entry.

        Parameters:
         None.
        Returns:
         The BootMediaType of this entry.
        '''
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('El Torito Entry not yet initialized')

        return media_type_from_byte(self.boot_media_type)

    def get_rba(self):
        # type: () -> int
        '''
        A method to get the load_rba for this El Torito Entry.

        Parameters:
         None.
        Returns:
         The load RBA for this El Torito Entry.
        '''
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('El Torito Entry not yet initialized')

        return self.load_rba


class EltoritoBootCatalog(object):
    '''
    A class that represents an El Torito Boot Catalog.  Only the validation
    entry and the initial entry that follows it are parsed.
    '''
    __slots__ = ('_initialized', 'validation_entry', 'initial_entry',
                 'extent_loc')

    ENTRY_LENGTH = 32

    def __init__(self):
        # type: () -> None
        self._initialized = False
        self.validation_entry = None
        self.initial_entry = None

    def parse(self, valstr, extent_loc):
        # type: (bytes, int) -> None
        '''
        A method to parse an El Torito Boot Catalog out of a string.

        Parameters:
         valstr - The string to parse the El Torito Boot Catalog out of.
         extent_loc - The extent the boot catalog was read from.
        Returns:
         Nothing.
        '''
        if self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('El Torito Boot Catalog already initialized')

        validation_entry = EltoritoValidationEntry()
        validation_entry.parse(valstr[:self.ENTRY_LENGTH])

        initial_entry = EltoritoEntry()
        initial_entry.parse(valstr[self.ENTRY_LENGTH:2 * self.ENTRY_LENGTH])

        self.validation_entry = validation_entry
        self.initial_entry = initial_entry
        self.extent_loc = extent_loc

        self._initialized = True


def resolve_sector_count(entry, fp):
    # type: (EltoritoEntry, BinaryIO) -> int
    '''
    A function to work out how many virtual sectors make up the boot image
    described by an El Torito entry.

    Parameters:
     entry - The EltoritoEntry describing the boot image.
     fp - The file object of the image; only read for hard disk emulation.
    Returns:
     The number of virtual sectors to extract.
    '''
    media_type = entry.media_type()
    _logger.debug('Boot media type is %s', MEDIA_DESCRIPTIONS[media_type])

    if media_type == BootMediaType.HARD_DISK:
        record = mbr.MasterBootRecord()
        record.parse(utils.read_sector(fp, utils.sector_offset(entry.get_rba())))
        _logger.debug('Master Boot Record: first sector %d, partition size %d',
                      record.first_sector, record.partition_size)
        count = record.sector_count()
    elif media_type in FLOPPY_SECTOR_COUNTS:
        count = FLOPPY_SECTOR_COUNTS[media_type]
    else:
        # No emulation images store their length only in the entry.
        count = entry.sector_count

    if count == 0:
        count = entry.sector_count

    return count
