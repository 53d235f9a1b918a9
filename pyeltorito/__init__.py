"""
PyEltorito is a pure python library to find, validate, and extract the El
Torito boot image of a bootable ISO9660 image.
"""
from .pyeltorito import PyEltorito, extract  # NOQA

__version__ = '1.0.0'
