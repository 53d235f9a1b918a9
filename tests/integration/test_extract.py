import pytest
import logging
import os
import sys
from io import BytesIO

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pyeltorito
import pyeltorito.pyeltoritoexception

from eltorito_common import *

def do_a_test(tmpdir, image, expected):
    isopath = write_image(tmpdir, image)
    outpath = str(tmpdir.join('boot.img'))

    iso = pyeltorito.PyEltorito()
    iso.open(isopath)
    assert(iso.image_size() == len(expected))
    written = iso.get_and_write(outpath)
    iso.close()

    assert(written * VIRTUAL == len(expected))
    with open(outpath, 'rb') as fp:
        assert(fp.read() == expected)

def test_extract_concrete_scenario():
    payload = pattern(2048)
    image = make_image(payload, media_type=0, sector_count=4,
                       catalog_extent=19, image_start=20)

    assert(image[34816:34822] == b'\x00CD001')
    assert(len(image) == 40960 + 2048)

    outfp = BytesIO()
    assert(pyeltorito.extract(BytesIO(image), outfp) == 4)
    assert(outfp.getvalue() == payload)

def test_extract_no_emulation(tmpdir):
    payload = pattern(8192)
    image = make_image(payload, media_type=0, sector_count=7)

    do_a_test(tmpdir, image, payload[:7*VIRTUAL])

def test_extract_no_emulation_ignores_following_data():
    payload = pattern(4096)
    image = make_image(payload, media_type=0, sector_count=1, image_start=25)

    outfp = BytesIO()
    pyeltorito.extract(BytesIO(image), outfp)
    assert(outfp.getvalue() == payload[:512])

@pytest.mark.parametrize('media_type,count', [(1, 2400), (2, 2880), (3, 5760)])
def test_extract_floppy(tmpdir, media_type, count):
    payload = pattern(count * VIRTUAL + 1024)
    image = make_image(payload, media_type=media_type, sector_count=1)

    do_a_test(tmpdir, image, payload[:count * VIRTUAL])

def test_extract_hard_disk(tmpdir):
    payload = make_mbr(1, 15) + pattern(32 * VIRTUAL)
    image = make_image(payload, media_type=4, sector_count=1)

    do_a_test(tmpdir, image, payload[:16 * VIRTUAL])

def test_extract_zero_sector_count(tmpdir, caplog):
    image = make_image(pattern(2048), media_type=0, sector_count=0)

    with caplog.at_level(logging.WARNING):
        do_a_test(tmpdir, image, b'')
    assert('sector count of 0' in caplog.text)

def test_extract_twice_identical(tmpdir):
    image = make_image(pattern(4096), media_type=0, sector_count=8)
    isopath = write_image(tmpdir, image)
    outpath = str(tmpdir.join('boot.img'))

    results = []
    for i in range(0, 2):
        iso = pyeltorito.PyEltorito()
        iso.open(isopath)
        iso.get_and_write(outpath)
        iso.close()
        with open(outpath, 'rb') as fp:
            results.append(fp.read())

    assert(results[0] == results[1])
    assert(results[0] == image[20*LOGICAL:])

def test_extract_reuse_object(tmpdir):
    first = write_image(tmpdir, make_image(pattern(2048), sector_count=2), 'first.iso')
    second = write_image(tmpdir, make_image(pattern(4096), sector_count=8, image_start=30), 'second.iso')

    iso = pyeltorito.PyEltorito()
    iso.open(first)
    assert(iso.image_size() == 1024)
    iso.close()

    iso.open(second)
    assert(iso.image_start == 30)
    assert(iso.sector_count == 8)
    iso.close()

def test_extract_open_twice(tmpdir):
    isopath = write_image(tmpdir, make_image(pattern(2048)))

    iso = pyeltorito.PyEltorito()
    iso.open(isopath)
    with pytest.raises(pyeltorito.pyeltoritoexception.PyEltoritoInvalidInput) as excinfo:
        iso.open(isopath)
    assert(str(excinfo.value) == 'This object already has an image; either close it or create a new object')
    iso.close()

def test_extract_parsed_records():
    image = make_image(pattern(2048), media_type=0, sector_count=4,
                       validation_entry=make_validation_entry(platform_id=2, id_string=b'PYELTORITO'))

    iso = pyeltorito.PyEltorito()
    iso.open_fp(BytesIO(image))

    assert(iso.boot_record.catalog_extent() == 19)
    assert(iso.boot_catalog.validation_entry.platform_name() == 'Mac')
    assert(iso.boot_catalog.validation_entry.id_string.rstrip(b'\x00') == b'PYELTORITO')
    assert(iso.boot_catalog.validation_entry.checksum_valid())
    assert(iso.boot_catalog.initial_entry.is_bootable())
    iso.close()

@pytest.mark.parametrize('kwargs,exc', [
    ({'boot_record': make_boot_record(19, indicator=1)}, pyeltorito.pyeltoritoexception.BadBootRecordIndicator),
    ({'boot_record': make_boot_record(19, indicator=0xff)}, pyeltorito.pyeltoritoexception.BadBootRecordIndicator),
    ({'boot_record': make_boot_record(19, identifier=b'CD002')}, pyeltorito.pyeltoritoexception.BadIso9660Identifier),
    ({'boot_record': make_boot_record(19, system_id=b'EL TORITO')}, pyeltorito.pyeltoritoexception.BadBootSystemIdentifier),
    ({'validation_entry': make_validation_entry(header_id=0)}, pyeltorito.pyeltoritoexception.BadHeaderValue),
    ({'validation_entry': make_validation_entry(reserved=0x100)}, pyeltorito.pyeltoritoexception.BadReservedZeroValue),
    ({'validation_entry': make_validation_entry(key1=0xaa)}, pyeltorito.pyeltoritoexception.Bad55Checksum),
    ({'validation_entry': make_validation_entry(key2=0x55)}, pyeltorito.pyeltoritoexception.BadAAChecksum),
    ({'media_type': 5}, pyeltorito.pyeltoritoexception.BadBootMediaType),
    ({'media_type': 0x80}, pyeltorito.pyeltoritoexception.BadBootMediaType),
])
def test_extract_invalid_image(kwargs, exc):
    image = make_image(pattern(2048), **kwargs)
    outfp = BytesIO()

    with pytest.raises(exc):
        pyeltorito.extract(BytesIO(image), outfp)
    assert(outfp.getvalue() == b'')

def test_extract_invalid_image_file_not_created(tmpdir):
    isopath = write_image(tmpdir, make_image(pattern(2048), media_type=7))

    iso = pyeltorito.PyEltorito()
    with pytest.raises(pyeltorito.pyeltoritoexception.BadBootMediaType):
        iso.open(isopath)
    assert(not tmpdir.join('boot.img').check())

def test_extract_invalid_image_closes_file(tmpdir, monkeypatch):
    isopath = write_image(tmpdir, make_image(pattern(2048), media_type=9))

    opened = []
    real_open = open
    def tracking_open(*args, **kwargs):
        fp = real_open(*args, **kwargs)
        opened.append(fp)
        return fp
    monkeypatch.setattr('builtins.open', tracking_open)

    iso = pyeltorito.PyEltorito()
    with pytest.raises(pyeltorito.pyeltoritoexception.BadBootMediaType):
        iso.open(isopath)
    monkeypatch.undo()

    assert(len(opened) == 1)
    assert(opened[0].closed)

def test_extract_close_closes_file(tmpdir):
    isopath = write_image(tmpdir, make_image(pattern(2048)))

    iso = pyeltorito.PyEltorito()
    iso.open(isopath)
    fp = iso._cdfp
    iso.close()

    assert(fp.closed)

def test_extract_bad_checksum_accepted():
    entry = make_validation_entry()
    entry = entry[:28] + b'\x12\x34' + entry[30:]
    payload = pattern(2048)

    outfp = BytesIO()
    assert(pyeltorito.extract(BytesIO(make_image(payload, validation_entry=entry)), outfp) == 4)
    assert(outfp.getvalue() == payload)

def test_extract_truncated_payload(tmpdir):
    payload = pattern(3 * VIRTUAL)
    image = make_image(payload, media_type=0, sector_count=8)
    isopath = write_image(tmpdir, image)
    outpath = str(tmpdir.join('boot.img'))

    iso = pyeltorito.PyEltorito()
    iso.open(isopath)
    with pytest.raises(pyeltorito.pyeltoritoexception.ReadEarlyExitError) as excinfo:
        iso.get_and_write(outpath)
    assert(str(excinfo.value) == 'Image ended after 3 of 8 virtual sectors')
    iso.close()

    with open(outpath, 'rb') as fp:
        assert(fp.read() == payload)

def test_extract_truncated_floppy():
    payload = pattern(100 * VIRTUAL)
    outfp = BytesIO()

    with pytest.raises(pyeltorito.pyeltoritoexception.ReadEarlyExitError):
        pyeltorito.extract(BytesIO(make_image(payload, media_type=2)), outfp)
    assert(outfp.getvalue() == payload)

def test_extract_truncated_catalog():
    image = make_image(b'', catalog_extent=19, image_start=20)
    image = image[:19*LOGICAL + 100]

    with pytest.raises(pyeltorito.pyeltoritoexception.PyEltoritoReadError):
        pyeltorito.extract(BytesIO(image), BytesIO())

def test_extract_truncated_boot_record():
    with pytest.raises(pyeltorito.pyeltoritoexception.PyEltoritoReadError):
        pyeltorito.extract(BytesIO(b'\x00' * 17 * LOGICAL), BytesIO())

def test_extract_hard_disk_missing_mbr():
    image = make_image(b'\x00'*100, media_type=4)

    with pytest.raises(pyeltorito.pyeltoritoexception.PyEltoritoReadError):
        pyeltorito.extract(BytesIO(image), BytesIO())
