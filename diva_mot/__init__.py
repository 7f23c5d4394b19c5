"""diva-mot: reader/writer for pointer-table MOT motion files."""

import logging

log = logging.getLogger("diva_mot")
