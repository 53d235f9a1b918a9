import os
import subprocess
import sys

import pytest

pyeltorito_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
pyeltorito_exe = os.path.join(pyeltorito_root, 'tools', 'pyeltorito-extract')

sys.path.insert(0, pyeltorito_root)
sys.path.insert(0, os.path.join(pyeltorito_root, 'tests', 'integration'))

import pyeltorito
from pyeltorito import tool

from eltorito_common import make_boot_record, make_image, pattern, write_image


def run_process(cmdline):
    process = subprocess.Popen(cmdline,
                               env={
                                   'PATH': os.environ['PATH'],
                                   'PYTHONPATH': pyeltorito_root,
                               },
                               stdout=subprocess.PIPE,
                               stderr=subprocess.PIPE)

    out, err = process.communicate()

    return process.wait(), out, err


def test_tool_outfile(tmpdir):
    payload = pattern(4096)
    isopath = write_image(tmpdir, make_image(payload, sector_count=6))
    outpath = str(tmpdir.join('boot.img'))

    assert(tool.main(['-o', outpath, isopath]) == 0)

    with open(outpath, 'rb') as fp:
        assert(fp.read() == payload[:6*512])


def test_tool_bad_image(tmpdir, capsys):
    isopath = write_image(tmpdir, make_image(pattern(2048), boot_record=make_boot_record(19, identifier=b'CD002')))
    outpath = tmpdir.join('boot.img')

    assert(tool.main(['-o', str(outpath), isopath]) == 1)

    err = capsys.readouterr().err
    assert('BadIso9660Identifier' in err)
    assert(not outpath.check())


def test_tool_truncated_image(tmpdir, capsys):
    isopath = write_image(tmpdir, make_image(pattern(1024), sector_count=4))
    outpath = str(tmpdir.join('boot.img'))

    assert(tool.main(['-o', outpath, isopath]) == 1)

    assert('ReadEarlyExitError' in capsys.readouterr().err)
    with open(outpath, 'rb') as fp:
        assert(fp.read() == pattern(1024))


def test_tool_missing_image(tmpdir, capsys):
    assert(tool.main([str(tmpdir.join('missing.iso'))]) == 1)

    assert('missing.iso' in capsys.readouterr().err)


def test_tool_info(tmpdir, capsys):
    isopath = write_image(tmpdir, make_image(pattern(2048), sector_count=4))

    assert(tool.main(['-i', isopath]) == 0)

    out, err = capsys.readouterr()
    assert(out == '')
    assert('Specification: EL TORITO SPECIFICATION' in err)
    assert('platform: x86' in err)
    assert('checksum: ' in err and '(valid)' in err)
    assert('boot media type: no emulation' in err)
    assert('El Torito image starts at sector 20 and has 4 sector(s) of 512 Bytes' in err)


def test_tool_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        tool.main(['-v'])
    assert(excinfo.value.code == 0)

    assert(pyeltorito.__version__ in capsys.readouterr().out)


def test_tool_no_image(capsys):
    with pytest.raises(SystemExit) as excinfo:
        tool.main([])
    assert(excinfo.value.code == 2)


def test_tool_stdout(tmpdir):
    payload = pattern(2048)
    isopath = write_image(tmpdir, make_image(payload, sector_count=4))

    ret, out, err = run_process([sys.executable, pyeltorito_exe, isopath])

    assert(ret == 0)
    assert(out == payload)


def test_tool_stdout_debug(tmpdir):
    isopath = write_image(tmpdir, make_image(pattern(2048), sector_count=4))

    ret, out, err = run_process([sys.executable, pyeltorito_exe, '--debug', isopath])

    assert(ret == 0)
    assert(len(out) == 2048)
    assert(b'Reading Boot Record Volume Descriptor at extent 17' in err)
    assert(b'Copied 4 virtual sector(s)' in err)


def test_tool_stdout_bad_image(tmpdir):
    isopath = write_image(tmpdir, make_image(pattern(2048), media_type=9))

    ret, out, err = run_process([sys.executable, pyeltorito_exe, isopath])

    assert(ret == 1)
    assert(out == b'')
    assert(b'BadBootMediaType' in err)
