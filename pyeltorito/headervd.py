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

"""Implementation of the El Torito Boot Record Volume Descriptor."""

import logging
import struct

from pyeltorito import pyeltoritoexception

VOLUME_DESCRIPTOR_TYPE_BOOT_RECORD = 0

# El Torito fixes the Boot Record Volume Descriptor at logical sector 17.
BOOT_RECORD_EXTENT = 17

ELTORITO_SPEC_IDENTIFIER = b'EL TORITO SPECIFICATION'

_logger = logging.getLogger(__name__)


class BootRecord(object):
    """
    A class representing an El Torito Boot Record Volume Descriptor.  Only the
    leading part of the descriptor carries anything El Torito cares about; the
    rest of the logical sector is unused.
    """
    __slots__ = ('_initialized', 'descriptor_version', 'boot_system_identifier',
                 'boot_catalog_extent', 'extent_loc')

    # A Boot Record Volume Descriptor consists of:
    # Offset 0x0:       Boot Record Indicator (must be 0)
    # Offset 0x1-0x5:   ISO-9660 Identifier (must be 'CD001')
    # Offset 0x6:       Version of this descriptor (informational)
    # Offset 0x7-0x26:  Boot System Identifier ('EL TORITO SPECIFICATION'
    #                   padded with 0s)
    # Offset 0x27-0x46: Boot Identifier (unused)
    # Offset 0x47-0x4a: Absolute pointer to first sector of Boot Catalog
    FMT = '<B5sB32s32sL'

    def __init__(self):
        # type: () -> None
        self._initialized = False

    def parse(self, vd, extent_loc=BOOT_RECORD_EXTENT):
        # type: (bytes, int) -> None
        """
        A method to parse a Boot Record out of a string.  The checks are done
        in on-disk order and the first one that fails aborts the parse.

        Parameters:
         vd - The string to parse the Boot Record out of.
         extent_loc - The extent location this Boot Record was read from.
        Returns:
         Nothing.
        """
        if self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('Boot Record already initialized')

        (descriptor_type, identifier, self.descriptor_version,
         self.boot_system_identifier, boot_identifier_unused,
         self.boot_catalog_extent) = struct.unpack_from(self.FMT, vd, 0)

        _logger.debug('Boot Record: indicator %d, identifier %r, version %d, system %r, catalog at extent %d',
                      descriptor_type, identifier, self.descriptor_version,
                      self.boot_system_identifier, self.boot_catalog_extent)

        if descriptor_type != VOLUME_DESCRIPTOR_TYPE_BOOT_RECORD:
            raise pyeltoritoexception.BadBootRecordIndicator('Invalid boot record indicator %d; must be 0' % (descriptor_type))
        if identifier != b'CD001':
            raise pyeltoritoexception.BadIso9660Identifier('Invalid ISO9660 identifier %r; must be CD001' % (identifier))
        # The identifier field is 32 bytes, zero padded after the text, so
        # only the text itself is compared.
        if self.boot_system_identifier[:len(ELTORITO_SPEC_IDENTIFIER)] != ELTORITO_SPEC_IDENTIFIER:
            raise pyeltoritoexception.BadBootSystemIdentifier('Invalid boot system identifier %r' % (self.boot_system_identifier))

        self.extent_loc = extent_loc

        self._initialized = True

    def catalog_extent(self):
        # type: () -> int
        """
        A method to get the logical sector holding the El Torito Boot Catalog.

        Parameters:
         None.
        Returns:
         Integer extent location of the Boot Catalog.
        """
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInternalError('Boot Record not yet initialized')

        return self.boot_catalog_extent
