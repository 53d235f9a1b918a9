# This is a simple program to show how to use PyEltorito to look at the El
# Torito records of a bootable ISO and extract its boot image.

# Import standard python modules.
import sys

# Import pyeltorito itself.
import pyeltorito

# Check that there are enough command-line arguments.
if len(sys.argv) != 3:
    print('Usage: %s <iso> <boot image out>' % (sys.argv[0]))
    sys.exit(1)

# Create a new PyEltorito object.
iso = pyeltorito.PyEltorito()

# Open up the ISO passed in on the command-line.  All of the El Torito records
# are read and checked here; a bad image raises one of the exceptions in
# pyeltorito.pyeltoritoexception.
iso.open(sys.argv[1])

entry = iso.boot_catalog.initial_entry
print('Platform: %s' % (iso.boot_catalog.validation_entry.platform_name()))
print('Bootable: %s' % (entry.is_bootable()))
print('Boot image: %d sectors starting at extent %d' % (iso.sector_count, iso.image_start))

# Write the boot image out to the file named on the command-line.
iso.get_and_write(sys.argv[2])

# Close the ISO.
iso.close()
