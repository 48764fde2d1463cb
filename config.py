# config.py
import logging
import os

# Logging
LOG_FILE = os.environ.get("HTN_LOG_FILE", "planner.log")
LOG_LEVEL = getattr(logging, os.environ.get("HTN_LOG_LEVEL", "INFO").upper(), logging.INFO)
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Planner
DEFAULT_ROOT_TASK = "do_something"
NULL_TASK_NAME = "null_action"

# Demo / visualization
TRACE_DEMO = True
FIGURE_SIZE = (12, 7)
