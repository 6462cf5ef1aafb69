'''
comtradeio is a package for reading COMTRADE disturbance-recorder records
(IEEE C37.111) in Python: the text configuration file and the binary data
file it describes
'''
import importlib.metadata
# this need to be at the begining because some sub module will need the version
__version__ = importlib.metadata.version("comtradeio")

import logging

logging_handler = logging.StreamHandler()

from comtradeio.core import *
from comtradeio.rawio import *
