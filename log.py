import logging

from config import LOG_FILE, LOG_FORMAT, LOG_LEVEL

# Write INFO+ messages to planner.log, DEBUG goes nowhere by default
logging.basicConfig(
    filename=LOG_FILE,
    filemode="w",
    level=LOG_LEVEL,
    format=LOG_FORMAT
)
logger = logging.getLogger("HTN")
