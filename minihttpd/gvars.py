import logging
import sys

PACKET_SIZE = 8192
logger = logging.getLogger(__package__)
logger.addHandler(logging.StreamHandler(sys.stdout))
default_host = "127.0.0.1"
default_port = 4221
