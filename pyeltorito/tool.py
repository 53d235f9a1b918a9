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
The main code for the pyeltorito-extract tool, which extracts the El Torito
boot image from a bootable CD image and writes it to stdout or a file.
'''

import argparse
import logging
import sys

import pyeltorito
from pyeltorito import eltorito
from pyeltorito import pyeltoritoexception


def parse_arguments(argv=None):
    '''
    A function to parse all of the arguments passed to the executable.

    Parameters:
     argv - The arguments to parse; sys.argv[1:] if None.
    Returns:
     An ArgumentParser object with the parsed command-line arguments.
    '''
    parser = argparse.ArgumentParser(description='Extract the El Torito boot image from a bootable CD (or CD image) and write it to STDOUT or to a file.')
    parser.add_argument('-v', '--version', action='version', version='%(prog)s ' + pyeltorito.__version__)
    parser.add_argument('-o', '--outfile', help='Write extracted data to this file instead of STDOUT', action='store')
    parser.add_argument('-i', '--info', help='Show information about the boot image instead of extracting it', action='store_true')
    parser.add_argument('--debug', help='Log each stage of the extraction to STDERR', action='store_true')
    parser.add_argument('image', help='CD image to extract the boot image from', action='store')
    return parser.parse_args(argv)


def print_info(iso, out):
    '''
    A function to print the parsed El Torito records of an open image.

    Parameters:
     iso - The opened PyEltorito object.
     out - The text file object to print to.
    Returns:
     Nothing.
    '''
    br = iso.boot_record
    validation = iso.boot_catalog.validation_entry
    initial = iso.boot_catalog.initial_entry

    print('==== Boot Record Volume ====', file=out)
    print('Descriptor Version: %d' % (br.descriptor_version), file=out)
    print('Specification: %s' % (br.boot_system_identifier.rstrip(b'\x00').decode('ascii', 'replace')), file=out)
    print('Boot Catalog Pointer: %d' % (br.catalog_extent()), file=out)
    print('==== Validation Entry ====', file=out)
    print('platform: %s' % (validation.platform_name()), file=out)
    print('manufacturer: %s' % (validation.id_string.rstrip(b'\x00').decode('ascii', 'replace')), file=out)
    print('checksum: %#06x (%s)' % (validation.checksum, 'valid' if validation.checksum_valid() else 'not valid'), file=out)
    print('==== Initial (default) Entry ====', file=out)
    print('bootable: %s' % ('yes' if initial.is_bootable() else 'no'), file=out)
    print('boot media type: %s' % (eltorito.MEDIA_DESCRIPTIONS[initial.media_type()]), file=out)
    print('load segment: %#x' % (initial.load_segment), file=out)
    print('system type: %#x' % (initial.system_type), file=out)
    print('sector count: %d' % (initial.sector_count), file=out)
    print('El Torito image starts at sector %d and has %d sector(s) of 512 Bytes' % (iso.image_start, iso.sector_count), file=out)


def main(argv=None):
    '''
    The main function for this executable that does the work of extracting
    the boot image given the parameters specified by the user.
    '''
    args = parse_arguments(argv)

    if args.debug:
        logging.basicConfig(stream=sys.stderr, level=logging.DEBUG,
                            format='%(name)s: %(message)s')

    iso = pyeltorito.PyEltorito()
    try:
        iso.open(args.image)
    except (pyeltoritoexception.PyEltoritoException, OSError) as err:
        print('%s: %s: %s' % (args.image, type(err).__name__, err), file=sys.stderr)
        return 1

    try:
        if args.info:
            print_info(iso, sys.stderr)
        elif args.outfile:
            iso.get_and_write(args.outfile)
        else:
            iso.get_and_write_fp(sys.stdout.buffer)
    except (pyeltoritoexception.PyEltoritoException, OSError) as err:
        print('%s: %s: %s' % (args.image, type(err).__name__, err), file=sys.stderr)
        return 1
    finally:
        iso.close()

    return 0
