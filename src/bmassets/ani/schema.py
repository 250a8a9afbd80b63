HEAD = b'HEAD'
PAL = b'PAL '
TPAL = b'TPAL'
CBOX = b'CBOX'
FRAM = b'FRAM'
FNAM = b'FNAM'
CIMG = b'CIMG'
SEQ = b'SEQ '
STAT = b'STAT'

# chunks between the file header and the first frame, all skipped
PREAMBLE = (HEAD, PAL, TPAL, CBOX)

# A FRAM inside STAT is a plain frame reference, not a frame image container.
SCHEMA = {
    FRAM: {HEAD, FNAM, CIMG},
    SEQ: {HEAD, STAT},
    STAT: {HEAD, FRAM},
}
DATA_ONLY_IN = {STAT}
