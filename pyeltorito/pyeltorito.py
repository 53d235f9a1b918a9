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

"""Main PyEltorito class and support classes and utilities."""

import logging

from pyeltorito import eltorito
from pyeltorito import headervd
from pyeltorito import pyeltoritoexception
from pyeltorito import utils

# For mypy annotations
if False:  # pylint: disable=using-constant-test
    from typing import BinaryIO, Optional  # NOQA pylint: disable=unused-import

_logger = logging.getLogger(__name__)


class PyEltorito(object):
    """The main class for extracting El Torito boot images."""
    __slots__ = ('_initialized', '_cdfp', '_managing_fp', 'boot_record',
                 'boot_catalog', 'image_start', 'sector_count')

    def __init__(self):
        # type: () -> None
        self._initialize()

    def _initialize(self):
        # type: () -> None
        """
        An internal method to re-initialize the object.  Called from
        both __init__ and close.

        Parameters:
         None.
        Returns:
         Nothing.
        """
        self._cdfp = None  # type: Optional[BinaryIO]
        self._managing_fp = False
        self.boot_record = None  # type: Optional[headervd.BootRecord]
        self.boot_catalog = None  # type: Optional[eltorito.EltoritoBootCatalog]
        self.image_start = 0
        self.sector_count = 0
        self._initialized = False

    def _parse_boot_record(self):
        # type: () -> headervd.BootRecord
        """
        An internal method to read and validate the Boot Record Volume
        Descriptor.

        Parameters:
         None.
        Returns:
         The parsed Boot Record.
        """
        _logger.debug('Reading Boot Record Volume Descriptor at extent %d',
                      headervd.BOOT_RECORD_EXTENT)
        br = headervd.BootRecord()
        br.parse(utils.read_sector(self._cdfp, utils.sector_offset(headervd.BOOT_RECORD_EXTENT)),
                 headervd.BOOT_RECORD_EXTENT)
        return br

    def _parse_boot_catalog(self, extent):
        # type: (int) -> eltorito.EltoritoBootCatalog
        """
        An internal method to read and validate the El Torito Boot Catalog.

        Parameters:
         extent - The logical sector the boot catalog lives in.
        Returns:
         The parsed Boot Catalog.
        """
        _logger.debug('Reading El Torito Boot Catalog at extent %d', extent)
        catalog = eltorito.EltoritoBootCatalog()
        catalog.parse(utils.read_sector(self._cdfp, utils.sector_offset(extent)),
                      extent)
        return catalog

    def _open_fp(self, fp):
        # type: (BinaryIO) -> None
        """
        An internal method to open an existing image for extraction.  Every
        structure is read and validated here, so once this returns the boot
        image location and size are known.

        Parameters:
         fp - The file object containing the image to open up.
        Returns:
         Nothing.
        """
        if not utils.file_object_supports_binary(fp):
            raise pyeltoritoexception.PyEltoritoInvalidInput("The file to open must be in binary mode (add 'b' to the open flags)")

        self._cdfp = fp

        br = self._parse_boot_record()
        catalog = self._parse_boot_catalog(br.catalog_extent())
        initial_entry = catalog.initial_entry

        sector_count = eltorito.resolve_sector_count(initial_entry, fp)
        if sector_count == 0:
            _logger.warning('El Torito boot image has a sector count of 0; nothing to extract')

        self.boot_record = br
        self.boot_catalog = catalog
        self.image_start = initial_entry.get_rba()
        self.sector_count = sector_count

        _logger.debug('El Torito image starts at sector %d and has %d sector(s) of %d Bytes',
                      self.image_start, self.sector_count,
                      utils.VIRTUAL_SECTOR_SIZE)

        self._initialized = True

    def open(self, filename):
        # type: (str) -> None
        """
        Open up an existing image for extraction.  The file is opened and
        managed by this object; it is closed on error or by close().

        Parameters:
         filename - The filename containing the image to open up.
        Returns:
         Nothing.
        """
        if self._initialized:
            raise pyeltoritoexception.PyEltoritoInvalidInput('This object already has an image; either close it or create a new object')

        fp = open(filename, 'rb')  # pylint: disable=consider-using-with
        self._managing_fp = True
        try:
            self._open_fp(fp)
        except Exception:
            fp.close()
            self._initialize()
            raise

    def open_fp(self, fp):
        # type: (BinaryIO) -> None
        """
        Open up an existing image for extraction.  Note that the file object
        passed in here must stay open until the boot image has been written
        out, as it is read again at that time.  To have PyEltorito manage this
        automatically, use 'open' instead.

        Parameters:
         fp - The file object containing the image to open up.
        Returns:
         Nothing.
        """
        if self._initialized:
            raise pyeltoritoexception.PyEltoritoInvalidInput('This object already has an image; either close it or create a new object')

        try:
            self._open_fp(fp)
        except Exception:
            self._initialize()
            raise

    def image_size(self):
        # type: () -> int
        """
        A method to get the size in bytes of the boot image that will be
        written out.

        Parameters:
         None.
        Returns:
         The size of the boot image in bytes.
        """
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInvalidInput('This object is not initialized; call open() first')

        return self.sector_count * utils.VIRTUAL_SECTOR_SIZE

    def get_and_write_fp(self, outfp):
        # type: (BinaryIO) -> int
        """
        Write the El Torito boot image out to a file object.  Data is written
        a virtual sector at a time; if the image ends early, whatever was
        already written is left in place and ReadEarlyExitError is raised.

        Parameters:
         outfp - The file object to write the boot image to.
        Returns:
         The number of virtual sectors written.
        """
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInvalidInput('This object is not initialized; call open() first')

        self._cdfp.seek(utils.sector_offset(self.image_start))
        written = utils.copy_sectors(self.sector_count, self._cdfp, outfp)
        outfp.flush()

        return written

    def get_and_write(self, local_path):
        # type: (str) -> int
        """
        Write the El Torito boot image out to the specified file.  Note that
        this will overwrite the contents of the local file if it already
        exists.

        Parameters:
         local_path - The local filename to write the boot image to.
        Returns:
         The number of virtual sectors written.
        """
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInvalidInput('This object is not initialized; call open() first')

        with open(local_path, 'wb') as fp:
            return self.get_and_write_fp(fp)

    def close(self):
        # type: () -> None
        """
        Close the PyEltorito object, and re-initialize the object to the
        defaults.  The object can then be re-used for another image.

        Parameters:
         None.
        Returns:
         Nothing.
        """
        if not self._initialized:
            raise pyeltoritoexception.PyEltoritoInvalidInput('This object is not initialized; call open() first')

        if self._managing_fp:
            self._cdfp.close()

        self._initialize()


def extract(infp, outfp):
    # type: (BinaryIO, BinaryIO) -> int
    """
    Validate the El Torito structures of an image and copy its boot image to
    an output file object.

    Parameters:
     infp - The seekable file object containing the image.
     outfp - The file object to write the boot image to.
    Returns:
     The number of virtual sectors written.
    """
    eltorito_img = PyEltorito()
    eltorito_img.open_fp(infp)
    try:
        return eltorito_img.get_and_write_fp(outfp)
    finally:
        eltorito_img.close()
